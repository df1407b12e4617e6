# whowon/selection/formatter.py
# Version: 1.0.0
# Output formatter: turns selected entries into display records and the
# three text blocks shown to the caller (winners, original lines, differences).
#
# Standard import:
#   from whowon.selection.formatter import Winner, WinnerReport, build_report

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence, Tuple

from whowon.selection.engine import RankedEntry
from whowon.utils.constants import (
    DIFFERENCE_DECIMALS,
    NO_NAME_PLACEHOLDER,
    NON_ALPHA_PATTERN,
    WINNER_MARKER,
)


@dataclass(frozen=True)
class Winner:
    """One selected entry, ready for display."""

    display_name:  str
    value:         float
    original_line: str
    distance:      float
    name:          str
    position:      int


@dataclass(frozen=True)
class WinnerReport:
    """The three newline-joined output blocks."""

    winners_text:     str
    original_text:    str
    differences_text: str


def shorten_name(name: str) -> str:
    """
    Message filter: first word unchanged, then the first ASCII letter of
    the second word once non-letters are stripped.

    "Ben Bcool98" -> "Ben B". "Ben 98" -> "Ben". "Ben" -> "Ben".
    """
    words = name.split()
    if not words:
        return ""
    first_word = words[0]
    second_word = words[1] if len(words) > 1 else ""
    letters = NON_ALPHA_PATTERN.sub("", second_word)
    if letters:
        return first_word + " " + letters[0]
    return first_word


def display_name(name: str, message_filter_enabled: bool) -> str:
    """Name as shown in output. Empty names become NO_NAME_PLACEHOLDER."""
    shown = shorten_name(name) if message_filter_enabled else name
    return shown or NO_NAME_PLACEHOLDER


def format_value(value: float) -> str:
    """
    Render a value the way the entry form shows numbers.

    Shortest round-trip digits (repr), laid out by the browser's number
    to string rule: plain notation for decimal exponents in (-6, 21],
    otherwise d.ddde+N / d.ddde-N.
    """
    value = float(value)
    if value == 0:
        return "0"
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = k + exponent  # value == 0.<digits> * 10**n

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
        text = mantissa + "e" + ("+" if e >= 0 else "-") + str(abs(e))
    return sign + text


def to_winner(ranked: RankedEntry, message_filter_enabled: bool) -> Winner:
    entry = ranked.entry
    return Winner(
        display_name=display_name(entry.name, message_filter_enabled),
        value=entry.value,
        original_line=entry.original_line,
        distance=ranked.distance,
        name=entry.name,
        position=entry.position,
    )


def format_winner_line(winner: Winner) -> str:
    return "{marker} {name} - {value} {marker}".format(
        marker=WINNER_MARKER,
        name=winner.display_name,
        value=format_value(winner.value),
    )


def format_difference_line(winner: Winner) -> str:
    return "Name: {name}, Difference: {diff:.{places}f}".format(
        name=winner.display_name,
        diff=winner.distance,
        places=DIFFERENCE_DECIMALS,
    )


def build_report(winners: Sequence[Winner]) -> WinnerReport:
    return WinnerReport(
        winners_text="\n".join(format_winner_line(w) for w in winners),
        original_text="\n".join(w.original_line for w in winners),
        differences_text="\n".join(format_difference_line(w) for w in winners),
    )


def format_winners(
    selected: Sequence[RankedEntry],
    message_filter_enabled: bool,
) -> Tuple[Tuple[Winner, ...], WinnerReport]:
    """Convert selected entries to Winners and render the report."""
    winners = tuple(to_winner(r, message_filter_enabled) for r in selected)
    return winners, build_report(winners)


__all__ = [
    "Winner",
    "WinnerReport",
    "shorten_name",
    "display_name",
    "format_value",
    "to_winner",
    "format_winner_line",
    "format_difference_line",
    "build_report",
    "format_winners",
]
