# =============================================================================
# WHOWON v1.0.0 -- SELECTION ENGINE: CONFIGURATION DOMAIN
# File:   whowon/core/config.py
# =============================================================================
#
# SCOPE
# -----
# Frozen configuration types for one selection run, plus the raw request
# record a caller (form, CLI) fills in and the presets that pre-fill it.
#
#   SelectionRequest   -- raw, unvalidated caller fields (strings allowed).
#   RankedConfig       -- validated closeness-ranking configuration.
#   ExactMatchConfig   -- validated exact-match configuration. Has no
#                         winner_count and no tie_mode by construction.
#
# build_config() turns a request into exactly one of the two configs.
#
# VALIDATION PHILOSOPHY
# ---------------------
# Fail-fast, in this fixed order per config:
#
#   V1  target        -- finite float. InvalidTargetError.
#   V2  winner_count  -- int >= 1 (ranked only). InvalidWinnerCountError.
#   V3  enums         -- TieMode / DuplicateMode membership.
#                        SelectionValidationError.
#   V4  whitelist     -- Whitelist instance. SelectionValidationError.
#
# No field is clipped, clamped or defaulted silently.
# =============================================================================

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Union

from whowon.core.exceptions import (
    InvalidTargetError,
    InvalidWinnerCountError,
    SelectionValidationError,
)
from whowon.core.whitelist import Whitelist
from whowon.utils.constants import (
    ALT_DECIMAL_SEPARATOR,
    DECIMAL_SEPARATOR,
    NUMBER_PATTERN,
    PRESET_TABLE,
)


# =============================================================================
# SECTION 1 -- ENUMERATIONS
# =============================================================================

class TieMode(str, Enum):
    """
    Handling of entries tied with the last selected winner.

    INCLUDE_ALL -- every entry at the cutoff distance is also a winner.
    FIRST_ONLY  -- exactly winner_count winners; ties resolved by position.
    """
    INCLUDE_ALL = "includeAll"
    FIRST_ONLY  = "firstOnly"


class DuplicateMode(str, Enum):
    """Which occurrence of a repeated, non-whitelisted name survives."""
    KEEP_FIRST = "keepFirst"
    KEEP_LAST  = "keepLast"


class SelectionPreset(str, Enum):
    """Named request presets. Values are keys of PRESET_TABLE."""
    PROMO   = "promo"
    CLASSIC = "classic"


# =============================================================================
# SECTION 2 -- RAW FIELD COERCION
# =============================================================================

def parse_target(value: Any) -> float:
    """
    Coerce a raw target (number or string) to a finite float.

    Strings are trimmed and must read as one entry number: optional sign,
    digits, at most one '.' or ',' separator. No exponent, no underscores.
    bool is rejected even though it is an int subclass.

    Raises:
        InvalidTargetError if the value is not a finite number.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidTargetError(value)
    if isinstance(value, (int, float)):
        try:
            result = float(value)
        except OverflowError:
            raise InvalidTargetError(value) from None
    elif isinstance(value, str):
        text = value.strip()
        if NUMBER_PATTERN.fullmatch(text) is None:
            raise InvalidTargetError(value)
        result = float(text.replace(ALT_DECIMAL_SEPARATOR, DECIMAL_SEPARATOR))
    else:
        raise InvalidTargetError(value)
    if not math.isfinite(result):
        raise InvalidTargetError(value)
    return result


def parse_winner_count(value: Any) -> int:
    """
    Coerce a raw winner count (int or digit string) to an int >= 1.

    Floats are accepted only when integral (2.0 -> 2).

    Raises:
        InvalidWinnerCountError otherwise.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidWinnerCountError(value)
    if isinstance(value, int):
        count = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidWinnerCountError(value)
        count = int(value)
    elif isinstance(value, str):
        try:
            count = int(value.strip())
        except ValueError:
            raise InvalidWinnerCountError(value) from None
    else:
        raise InvalidWinnerCountError(value)
    if count < 1:
        raise InvalidWinnerCountError(value)
    return count


def parse_tie_mode(value: Any) -> TieMode:
    """Raises SelectionValidationError for anything not a TieMode value."""
    try:
        return TieMode(value)
    except ValueError:
        raise SelectionValidationError(
            field_name="tie_mode",
            value=value,
            constraint="must be one of " + repr([m.value for m in TieMode]),
        ) from None


def parse_duplicate_mode(value: Any) -> DuplicateMode:
    """Raises SelectionValidationError for anything not a DuplicateMode value."""
    try:
        return DuplicateMode(value)
    except ValueError:
        raise SelectionValidationError(
            field_name="duplicate_mode",
            value=value,
            constraint="must be one of " + repr([m.value for m in DuplicateMode]),
        ) from None


# =============================================================================
# SECTION 3 -- VALIDATED CONFIGURATIONS
# =============================================================================

def _check_target(value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidTargetError(value)
    try:
        finite = math.isfinite(value)
    except OverflowError:
        finite = False
    if not finite:
        raise InvalidTargetError(value)


def _check_whitelist(value: object) -> None:
    if not isinstance(value, Whitelist):
        raise SelectionValidationError(
            field_name="whitelist",
            value=value,
            constraint="must be a Whitelist instance",
        )


def _check_enum(field_name: str, value: object, enum_cls: type) -> None:
    if not isinstance(value, enum_cls):
        raise SelectionValidationError(
            field_name=field_name,
            value=value,
            constraint="must be a " + enum_cls.__name__ + " member",
        )


@dataclass(frozen=True)
class RankedConfig:
    """
    Closeness ranking: the winner_count entries nearest to target, with
    ties at the cutoff handled per tie_mode.
    """

    target:         float
    winner_count:   int
    tie_mode:       TieMode = TieMode.INCLUDE_ALL
    duplicate_mode: DuplicateMode = DuplicateMode.KEEP_FIRST
    whitelist:      Whitelist = Whitelist()

    def __post_init__(self) -> None:
        _check_target(self.target)
        if (
            isinstance(self.winner_count, bool)
            or not isinstance(self.winner_count, int)
            or self.winner_count < 1
        ):
            raise InvalidWinnerCountError(self.winner_count)
        _check_enum("tie_mode", self.tie_mode, TieMode)
        _check_enum("duplicate_mode", self.duplicate_mode, DuplicateMode)
        _check_whitelist(self.whitelist)

    @property
    def exact_match(self) -> bool:
        return False


@dataclass(frozen=True)
class ExactMatchConfig:
    """Exact match: every deduplicated entry whose value equals target."""

    target:         float
    duplicate_mode: DuplicateMode = DuplicateMode.KEEP_FIRST
    whitelist:      Whitelist = Whitelist()

    def __post_init__(self) -> None:
        _check_target(self.target)
        _check_enum("duplicate_mode", self.duplicate_mode, DuplicateMode)
        _check_whitelist(self.whitelist)

    @property
    def exact_match(self) -> bool:
        return True


SelectionConfig = Union[RankedConfig, ExactMatchConfig]


# =============================================================================
# SECTION 4 -- RAW REQUEST
# =============================================================================

@dataclass(frozen=True)
class SelectionRequest:
    """
    Caller-supplied fields for one "pick winners" action, unvalidated.

    target and winner_count may be strings exactly as typed into a form.
    winner_count is ignored when exact_match is True.
    """

    target:                   Any = None
    winner_count:             Any = None
    tie_mode:                 Any = TieMode.INCLUDE_ALL
    duplicate_mode:           Any = DuplicateMode.KEEP_FIRST
    exact_match:              bool = False
    whitelist:                Any = ""
    message_filter_enabled:   bool = True
    whitelist_multiline:      bool = False
    whitelist_case_sensitive: bool = True

    @classmethod
    def default(cls) -> "SelectionRequest":
        """The reset state: no target, no count, include ties, keep first."""
        return cls()


def apply_preset(
    request: SelectionRequest,
    preset: Union[SelectionPreset, str],
) -> SelectionRequest:
    """
    Return a copy of request with the preset's fields filled in.

    Every preset switches exact match off. target, whitelist and the
    display options are left untouched.

    Raises:
        SelectionValidationError for an unknown preset name.
    """
    try:
        key = SelectionPreset(preset).value
    except ValueError:
        raise SelectionValidationError(
            field_name="preset",
            value=preset,
            constraint="must be one of " + repr([p.value for p in SelectionPreset]),
        ) from None
    winner_count, duplicate_mode, tie_mode = PRESET_TABLE[key]
    return replace(
        request,
        winner_count=winner_count,
        duplicate_mode=DuplicateMode(duplicate_mode),
        tie_mode=TieMode(tie_mode),
        exact_match=False,
    )


def build_whitelist(request: SelectionRequest) -> Whitelist:
    """Resolve the request's whitelist text into a Whitelist."""
    text: Optional[str] = request.whitelist
    if text is None:
        text = ""
    if not isinstance(text, str):
        raise SelectionValidationError(
            field_name="whitelist",
            value=text,
            constraint="must be a string",
        )
    return Whitelist.from_text(
        text,
        multiline=request.whitelist_multiline,
        case_sensitive=request.whitelist_case_sensitive,
    )


def build_config(request: SelectionRequest) -> SelectionConfig:
    """
    Validate a request and build the matching configuration variant.

    Fail-fast: the first violation raises. Use
    whowon.governance.request_validator to collect all violations at once.

    Raises:
        InvalidTargetError, InvalidWinnerCountError, SelectionValidationError.
    """
    target = parse_target(request.target)
    duplicate_mode = parse_duplicate_mode(request.duplicate_mode)
    whitelist = build_whitelist(request)

    if request.exact_match:
        return ExactMatchConfig(
            target=target,
            duplicate_mode=duplicate_mode,
            whitelist=whitelist,
        )

    return RankedConfig(
        target=target,
        winner_count=parse_winner_count(request.winner_count),
        tie_mode=parse_tie_mode(request.tie_mode),
        duplicate_mode=duplicate_mode,
        whitelist=whitelist,
    )


__all__ = [
    "TieMode",
    "DuplicateMode",
    "SelectionPreset",
    "parse_target",
    "parse_winner_count",
    "parse_tie_mode",
    "parse_duplicate_mode",
    "RankedConfig",
    "ExactMatchConfig",
    "SelectionConfig",
    "SelectionRequest",
    "apply_preset",
    "build_whitelist",
    "build_config",
]
