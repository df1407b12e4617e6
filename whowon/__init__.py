# whowon/__init__.py
# Winner selection engine: parse "name number" lines, collapse duplicate
# names, rank by closeness to a target and format the winners.
#
# Standard import:
#   from whowon import SelectionRequest, select_winners

from whowon.core.config import (
    DuplicateMode,
    SelectionPreset,
    SelectionRequest,
    TieMode,
    apply_preset,
)
from whowon.orchestrator.pipeline import SelectionResult, select_winners

__version__ = "1.0.0"

__all__ = [
    "DuplicateMode",
    "SelectionPreset",
    "SelectionRequest",
    "SelectionResult",
    "TieMode",
    "apply_preset",
    "select_winners",
]
