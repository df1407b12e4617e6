# whowon/core/whitelist.py
# Version: 1.0.0
# Whitelist resolver: names exempt from duplicate collapsing.
#
# Standard import:
#   from whowon.core.whitelist import Whitelist, resolve_whitelist

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import FrozenSet

from whowon.utils.constants import WHITELIST_DELIMITER, WHITELIST_LINE_DELIMITER


def resolve_whitelist(text: str, multiline: bool = False) -> FrozenSet[str]:
    """
    Split a delimiter-separated name list into a set of trimmed names.

    Commas always separate names; newlines do too when multiline is True.
    Empty tokens are dropped. No case folding happens here.
    """
    if not isinstance(text, str):
        raise TypeError(
            "whitelist text must be a string; got: {}".format(type(text).__name__)
        )
    if multiline:
        pattern = "[" + re.escape(WHITELIST_DELIMITER + WHITELIST_LINE_DELIMITER) + "]"
        tokens = re.split(pattern, text)
    else:
        tokens = text.split(WHITELIST_DELIMITER)
    return frozenset(token.strip() for token in tokens if token.strip())


@dataclass(frozen=True)
class Whitelist:
    """
    Immutable set of exempt names.

    Matching is exact and case-sensitive unless case_sensitive is False,
    in which case both sides are compared in casefolded form. There is
    no fuzzy matching.
    """

    names:          FrozenSet[str] = frozenset()
    case_sensitive: bool = True
    _keys:          FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.names, frozenset):
            object.__setattr__(self, "names", frozenset(self.names))
        keys = self.names if self.case_sensitive else frozenset(
            n.casefold() for n in self.names
        )
        object.__setattr__(self, "_keys", keys)

    @classmethod
    def from_text(
        cls,
        text: str,
        multiline: bool = False,
        case_sensitive: bool = True,
    ) -> "Whitelist":
        return cls(
            names=resolve_whitelist(text, multiline=multiline),
            case_sensitive=case_sensitive,
        )

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        key = name if self.case_sensitive else name.casefold()
        return key in self._keys

    def __len__(self) -> int:
        return len(self.names)

    def __bool__(self) -> bool:
        return bool(self.names)


__all__ = ["Whitelist", "resolve_whitelist"]
