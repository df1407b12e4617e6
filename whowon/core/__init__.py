# whowon/core/__init__.py
# Core types for the winner selection engine.

from whowon.core.exceptions import (
    SelectionError,
    SelectionValidationError,
    InvalidTargetError,
    InvalidWinnerCountError,
    EmptyInputError,
    NoEntriesAfterFilterError,
)
from whowon.core.parser import Entry, ParseResult, parse_entries, parse_line
from whowon.core.whitelist import Whitelist, resolve_whitelist
from whowon.core.config import (
    TieMode,
    DuplicateMode,
    SelectionPreset,
    RankedConfig,
    ExactMatchConfig,
    SelectionConfig,
    SelectionRequest,
    apply_preset,
    build_config,
)
from whowon.core.logging_layer import EventLogger, Event, EventFilter, LoggingError, SelectionRun

__all__ = [
    "SelectionError",
    "SelectionValidationError",
    "InvalidTargetError",
    "InvalidWinnerCountError",
    "EmptyInputError",
    "NoEntriesAfterFilterError",
    "Entry",
    "ParseResult",
    "parse_entries",
    "parse_line",
    "Whitelist",
    "resolve_whitelist",
    "TieMode",
    "DuplicateMode",
    "SelectionPreset",
    "RankedConfig",
    "ExactMatchConfig",
    "SelectionConfig",
    "SelectionRequest",
    "apply_preset",
    "build_config",
    "EventLogger",
    "Event",
    "EventFilter",
    "LoggingError",
    "SelectionRun",
]
