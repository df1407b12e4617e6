# =============================================================================
# WHOWON v1.0.0 -- SELECTION ENGINE: LINE PARSER
# File:   whowon/core/parser.py
# =============================================================================
#
# SCOPE
# -----
# Turns raw multi-line text into an ordered sequence of Entry records.
# One entry per non-blank line that contains a numeric token.
#
# PARSING RULES
# -------------
#   P1  Lines are split on "\n" and trimmed. Blank lines are skipped and
#       consume no position.
#   P2  The first match of NUMBER_PATTERN on the line is the entry value.
#       Lines without a match are dropped; they consume no position either.
#   P3  A ',' decimal separator is normalised to '.' before float().
#   P4  name = line with the matched substring removed once, trimmed.
#       May be empty.
#   P5  original_line = the trimmed line, number included.
#
# Malformed lines never raise. Callers see fewer entries than lines.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from whowon.utils.constants import (
    ALT_DECIMAL_SEPARATOR,
    DECIMAL_SEPARATOR,
    NUMBER_PATTERN,
)


# =============================================================================
# SECTION 1 -- ENTRY
# =============================================================================

@dataclass(frozen=True)
class Entry:
    """
    One parsed input line.

    Immutable. Distance to the target is never stored here; the ranker
    wraps entries in RankedEntry instead.
    """

    name:          str
    """Line with the first number removed, trimmed. May be empty."""

    value:         float
    """Value of the first numeric token on the line."""

    original_line: str
    """The trimmed line exactly as it appeared, number included."""

    position:      int
    """
    Zero-based index in the sequence of parsed entries. Unique and
    assigned in input order; the tie-break key for equal distances.
    """

    line_number:   int = 0
    """One-based line number in the raw input. Diagnostics only."""


@dataclass(frozen=True)
class ParseResult:
    """
    Output of parse_entries().

    Fields
    ------
    entries              : Parsed entries in input order.
    dropped_line_numbers : One-based numbers of non-blank lines without a
                           numeric token.
    non_blank_line_count : Number of lines that were non-blank after trim.
    """

    entries:              Tuple[Entry, ...]
    dropped_line_numbers: Tuple[int, ...]
    non_blank_line_count: int

    @property
    def dropped_count(self) -> int:
        return len(self.dropped_line_numbers)


# =============================================================================
# SECTION 2 -- SINGLE LINE
# =============================================================================

def parse_line(line: str, position: int, line_number: int = 0) -> Optional[Entry]:
    """
    Parse one already-trimmed, non-blank line.

    Returns None when the line has no numeric token (P2).
    """
    match = NUMBER_PATTERN.search(line)
    if match is None:
        return None

    token = match.group(0)
    value = float(token.replace(ALT_DECIMAL_SEPARATOR, DECIMAL_SEPARATOR))
    name = (line[: match.start()] + line[match.end():]).strip()

    return Entry(
        name=name,
        value=value,
        original_line=line,
        position=position,
        line_number=line_number,
    )


# =============================================================================
# SECTION 3 -- FULL INPUT
# =============================================================================

def parse_entries(raw_text: str) -> ParseResult:
    """
    Parse raw multi-line text into entries.

    Args:
        raw_text:  Arbitrary text, one "name number" pair per line.

    Returns:
        ParseResult. Positions are 0..len(entries)-1 in input order.

    Raises:
        TypeError if raw_text is not a string.
    """
    if not isinstance(raw_text, str):
        raise TypeError(
            "raw_text must be a string; got: {}".format(type(raw_text).__name__)
        )

    entries: List[Entry] = []
    dropped: List[int] = []
    non_blank = 0

    for index, raw_line in enumerate(raw_text.split("\n")):
        line = raw_line.strip()
        if not line:
            continue
        non_blank += 1
        entry = parse_line(line, position=len(entries), line_number=index + 1)
        if entry is None:
            dropped.append(index + 1)
            continue
        entries.append(entry)

    return ParseResult(
        entries=tuple(entries),
        dropped_line_numbers=tuple(dropped),
        non_blank_line_count=non_blank,
    )


def count_non_blank_lines(raw_text: str) -> int:
    """Number of lines that are non-blank after trimming."""
    return sum(1 for line in raw_text.split("\n") if line.strip())


__all__ = [
    "Entry",
    "ParseResult",
    "parse_line",
    "parse_entries",
    "count_non_blank_lines",
]
