# whowon/orchestrator/pipeline.py
# Version: 1.0.0
# External orchestration layer: the single "pick winners" operation.
#
# REQUEST GATE:
#   Every raw field is validated together (SEL-00..SEL-06) before any
#   entry is parsed. Any blocking violation returns a failed result that
#   lists all failing fields; nothing is ranked.
#
# STAGES (strictly in this order):
#   1. parse_entries          raw text      -> entries
#   2. build_whitelist        request       -> Whitelist
#   3. collapse_duplicates    entries       -> survivors
#   4. select                 survivors     -> ranked / exact-match winners
#   5. format_winners         winners       -> display records + report
#
# No SelectionError escapes select_winners(); failures come back inside
# SelectionResult.errors. The timestamp is read from the clock once per call
# and attached to successful results only.
#
# Standard import:
#   from whowon.orchestrator.pipeline import select_winners

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, Tuple

from whowon.core.config import SelectionRequest, build_config
from whowon.core.exceptions import (
    EmptyInputError,
    NoEntriesAfterFilterError,
    SelectionError,
)
from whowon.core.logging_layer import (
    DUPLICATES_COLLAPSED,
    INPUT_PARSED,
    VALIDATION_FAILED,
    WINNERS_SELECTED,
    EventLogger,
)
from whowon.core.parser import parse_entries
from whowon.governance.request_validator import validate_selection_request
from whowon.selection.dedup import collapse_duplicates
from whowon.selection.engine import select
from whowon.selection.formatter import Winner, WinnerReport, format_winners


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SelectionResult:
    """
    Outcome of one select_winners() call.

    ok is False exactly when errors is non-empty; in that case winners is
    empty and report and timestamp are None. warnings never block.
    """
    ok:                   bool
    winners:              Tuple[Winner, ...] = ()
    report:               Optional[WinnerReport] = None
    timestamp:            Optional[datetime] = None
    errors:               Tuple[SelectionError, ...] = ()
    warnings:             Tuple[SelectionError, ...] = ()
    dropped_line_numbers: Tuple[int, ...] = ()
    run_id:               Optional[str] = None

    @property
    def failed_fields(self) -> Tuple[str, ...]:
        return tuple(e.field_name for e in self.errors)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _local_now() -> datetime:
    return datetime.now()


def _log(logger: Optional[EventLogger], run_id: Optional[str], event_type: str, data: dict) -> None:
    if logger is not None:
        logger.log_event(run_id, event_type, data)


def _failed(
    errors: Tuple[SelectionError, ...],
    logger: Optional[EventLogger],
    run_id: Optional[str],
) -> SelectionResult:
    _log(logger, run_id, VALIDATION_FAILED, {
        "fields": ",".join(e.field_name for e in errors),
        "error_count": len(errors),
    })
    return SelectionResult(ok=False, errors=errors, run_id=run_id)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def select_winners(
    raw_input: Any,
    request: SelectionRequest,
    *,
    logger: Optional[EventLogger] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> SelectionResult:
    """
    Pick winners from raw "name number" lines.

    Parameters
    ----------
    raw_input : Multi-line text, one entry per line.
    request   : Raw caller fields; validated here as a whole.
    logger    : Optional audit log. Opens one run per call and receives
                one event per stage; the run ID is returned on the result.
    clock     : Zero-argument callable returning the invocation timestamp.
                Defaults to the local wall clock as a naive datetime.

    Returns
    -------
    SelectionResult. Validation failures, blank input and input without
    any parseable line are reported in errors. An empty winner list after
    a valid run is a success.
    """
    timestamp: datetime = (clock or _local_now)()
    run_id: Optional[str] = logger.start_run(timestamp) if logger is not None else None

    # ------------------------------------------------------------------
    # Step 0: Request gate
    # ------------------------------------------------------------------
    validation = validate_selection_request(raw_input, request)
    if not validation.is_valid:
        return _failed(validation.errors, logger, run_id)

    try:
        config = build_config(request)

        # --------------------------------------------------------------
        # Step 1: Parse
        # --------------------------------------------------------------
        parsed = parse_entries(raw_input)
        _log(logger, run_id, INPUT_PARSED, {
            "non_blank_lines": parsed.non_blank_line_count,
            "entries": len(parsed.entries),
            "dropped_lines": parsed.dropped_count,
        })
        if not parsed.entries:
            raise EmptyInputError(parsed.non_blank_line_count)

        # --------------------------------------------------------------
        # Steps 2-3: Whitelist + duplicate filter
        # --------------------------------------------------------------
        dedup = collapse_duplicates(parsed.entries, config.whitelist, config.duplicate_mode)
        _log(logger, run_id, DUPLICATES_COLLAPSED, {
            "duplicate_mode": config.duplicate_mode.value,
            "whitelist_size": len(config.whitelist),
            "kept": len(dedup.entries),
            "discarded": dedup.discarded_count,
        })
        warnings: Tuple[SelectionError, ...] = ()
        if not dedup.entries:
            warnings = (NoEntriesAfterFilterError(len(parsed.entries)),)

        # --------------------------------------------------------------
        # Steps 4-5: Select + format
        # --------------------------------------------------------------
        selected = select(dedup.entries, config)
        winners, report = format_winners(selected, bool(request.message_filter_enabled))
    except SelectionError as exc:
        return _failed((exc,), logger, run_id)

    _log(logger, run_id, WINNERS_SELECTED, {
        "mode": "exactMatch" if config.exact_match else "ranked",
        "target": float(config.target),
        "winners": len(winners),
    })

    return SelectionResult(
        ok=True,
        winners=winners,
        report=report,
        timestamp=timestamp,
        warnings=warnings,
        dropped_line_numbers=parsed.dropped_line_numbers,
        run_id=run_id,
    )
