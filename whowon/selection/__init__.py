from .dedup import (
    DuplicateReport,
    collapse_duplicates,
    filter_duplicates,
)
from .engine import (
    RankedEntry,
    rank_entries,
    select_top_n,
    extend_ties,
    select_ranked,
    select_exact_matches,
    select,
)
from .formatter import (
    Winner,
    WinnerReport,
    display_name,
    format_winners,
)

__all__ = [
    "DuplicateReport",
    "collapse_duplicates",
    "filter_duplicates",
    "RankedEntry",
    "rank_entries",
    "select_top_n",
    "extend_ties",
    "select_ranked",
    "select_exact_matches",
    "select",
    "Winner",
    "WinnerReport",
    "display_name",
    "format_winners",
]
