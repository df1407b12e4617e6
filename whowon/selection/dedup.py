# =============================================================================
# WHOWON v1.0.0 -- SELECTION ENGINE: DUPLICATE FILTER
# File:   whowon/selection/dedup.py
# =============================================================================
#
# SCOPE
# -----
# Collapses entries that share a name down to one survivor per name.
#
#   - Whitelisted names pass through untouched: every occurrence survives.
#   - Other names: single forward scan over a name -> Entry map.
#       KEEP_FIRST  ignores repeats.
#       KEEP_LAST   overwrites the mapping on every repeat.
#
# Survivors keep their original position and are returned in position
# order. Pure functions only.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from whowon.core.config import DuplicateMode
from whowon.core.parser import Entry
from whowon.core.whitelist import Whitelist


@dataclass(frozen=True)
class DuplicateReport:
    """
    Result of collapse_duplicates().

    Fields
    ------
    entries          : Surviving entries, ordered by position.
    discarded        : Entries removed as duplicates, ordered by position.
    whitelisted_kept : Number of survivors that were exempt via whitelist.
    """

    entries:          Tuple[Entry, ...]
    discarded:        Tuple[Entry, ...]
    whitelisted_kept: int

    @property
    def discarded_count(self) -> int:
        return len(self.discarded)


def collapse_duplicates(
    entries:        Sequence[Entry],
    whitelist:      Whitelist,
    duplicate_mode: DuplicateMode,
) -> DuplicateReport:
    """
    Deduplicate entries by exact name.

    Args:
        entries:         Parsed entries, any order.
        whitelist:       Names exempt from collapsing.
        duplicate_mode:  Which occurrence of a repeated name survives.

    Returns:
        DuplicateReport. Exactly one entry survives per non-whitelisted
        name; all occurrences of whitelisted names survive.
    """
    keep_last = DuplicateMode(duplicate_mode) is DuplicateMode.KEEP_LAST

    exempt: List[Entry] = []
    retained: Dict[str, Entry] = {}
    for entry in sorted(entries, key=lambda e: e.position):
        if entry.name in whitelist:
            exempt.append(entry)
        elif entry.name not in retained or keep_last:
            retained[entry.name] = entry

    survivors = sorted(exempt + list(retained.values()), key=lambda e: e.position)
    kept_positions = {e.position for e in survivors}
    discarded = tuple(e for e in sorted(entries, key=lambda e: e.position)
                      if e.position not in kept_positions)

    return DuplicateReport(
        entries=tuple(survivors),
        discarded=discarded,
        whitelisted_kept=len(exempt),
    )


def filter_duplicates(
    entries:        Sequence[Entry],
    whitelist:      Whitelist,
    duplicate_mode: DuplicateMode,
) -> Tuple[Entry, ...]:
    """Surviving entries only. See collapse_duplicates()."""
    return collapse_duplicates(entries, whitelist, duplicate_mode).entries


__all__ = [
    "DuplicateReport",
    "collapse_duplicates",
    "filter_duplicates",
]
