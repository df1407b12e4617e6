# =============================================================================
# WHOWON v1.0.0 -- SELECTION ENGINE: RANKER
# File:   whowon/selection/engine.py
# =============================================================================
#
# SCOPE
# -----
# Deterministic winner selection over deduplicated entries. Two mutually
# exclusive modes, chosen by the configuration variant:
#
#   RankedConfig      -> closeness ranking with a winner_count window
#   ExactMatchConfig  -> every entry whose value equals target
#
# PUBLIC FUNCTIONS
# ----------------
#   rank_entries(entries, target)                  -> Tuple[RankedEntry, ...]
#   select_top_n(ranked, n)                        -> Tuple[RankedEntry, ...]
#   extend_ties(ranked, base)                      -> Tuple[RankedEntry, ...]
#   select_ranked(entries, config)                 -> Tuple[RankedEntry, ...]
#   select_exact_matches(entries, target)          -> Tuple[RankedEntry, ...]
#   select(entries, config)                        -> Tuple[RankedEntry, ...]
#
# DETERMINISM CONSTRAINTS
# -----------------------
# All functions are pure. Ties on distance are broken by ascending entry
# position (earlier input ranks higher). Distance and value comparisons use
# strict float equality; no epsilon is applied anywhere.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from whowon.core.config import (
    ExactMatchConfig,
    RankedConfig,
    SelectionConfig,
    TieMode,
)
from whowon.core.parser import Entry


@dataclass(frozen=True)
class RankedEntry:
    """An Entry with its absolute distance to the target attached."""

    entry:    Entry
    distance: float

    @property
    def position(self) -> int:
        return self.entry.position


def rank_entries(
    entries: Sequence[Entry],
    target:  float,
) -> Tuple[RankedEntry, ...]:
    """
    Rank entries by absolute distance to target, closest first.

    Equal distances are ordered by ascending position so the result does
    not depend on the order of the input sequence.

    Args:
        entries:  Deduplicated entries.
        target:   Finite target value.

    Returns:
        Every entry, wrapped with its distance, in ranked order.
    """
    if not entries:
        return ()
    values = np.fromiter((e.value for e in entries), dtype=np.float64, count=len(entries))
    positions = np.fromiter((e.position for e in entries), dtype=np.int64, count=len(entries))
    distances = np.abs(values - np.float64(target))
    # lexsort: last key is primary.
    order = np.lexsort((positions, distances))
    return tuple(
        RankedEntry(entry=entries[int(i)], distance=float(distances[i]))
        for i in order
    )


def select_top_n(
    ranked: Sequence[RankedEntry],
    n:      int,
) -> Tuple[RankedEntry, ...]:
    """
    Base selection: the first n ranked entries.

    If n >= len(ranked), all entries are returned.

    Raises:
        ValueError if n < 0.
    """
    if n < 0:
        raise ValueError(f"n must be >= 0; got {n}")
    return tuple(ranked[:n])


def extend_ties(
    ranked: Sequence[RankedEntry],
    base:   Sequence[RankedEntry],
) -> Tuple[RankedEntry, ...]:
    """
    Append every entry after the base selection whose distance equals the
    cutoff (the last base entry's distance) exactly.

    Stops at the first differing distance; ranked order guarantees the
    rest are strictly farther.
    """
    if not base:
        return tuple(base)
    cutoff = base[-1].distance
    extended = list(base)
    for candidate in ranked[len(base):]:
        if candidate.distance != cutoff:
            break
        extended.append(candidate)
    return tuple(extended)


def select_ranked(
    entries: Sequence[Entry],
    config:  RankedConfig,
) -> Tuple[RankedEntry, ...]:
    """Ranked-mode winners: top winner_count, extended per tie_mode."""
    ranked = rank_entries(entries, config.target)
    base = select_top_n(ranked, config.winner_count)
    if config.tie_mode is TieMode.INCLUDE_ALL:
        return extend_ties(ranked, base)
    return base


def select_exact_matches(
    entries: Sequence[Entry],
    target:  float,
) -> Tuple[RankedEntry, ...]:
    """
    Exact-match winners: entries whose value == target, in input order.

    Strict float equality. Distance is reported as 0.0 for every winner.
    """
    return tuple(
        RankedEntry(entry=e, distance=abs(e.value - target))
        for e in entries
        if e.value == target
    )


def select(
    entries: Sequence[Entry],
    config:  SelectionConfig,
) -> Tuple[RankedEntry, ...]:
    """Dispatch on the configuration variant."""
    if isinstance(config, ExactMatchConfig):
        return select_exact_matches(entries, config.target)
    if isinstance(config, RankedConfig):
        return select_ranked(entries, config)
    raise TypeError(
        "config must be RankedConfig or ExactMatchConfig; got: {}".format(
            type(config).__name__
        )
    )


__all__ = [
    "RankedEntry",
    "rank_entries",
    "select_top_n",
    "extend_ties",
    "select_ranked",
    "select_exact_matches",
    "select",
]
