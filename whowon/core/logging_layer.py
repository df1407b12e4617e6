# whowon/core/logging_layer.py
# Selection audit log.
# WHOWON v1.0.0 -- Winner Selection Engine
#
# Scope: one audit trail per selection run.
#   start_run()  opens a run stamped with the run's invocation timestamp.
#   log_event()  appends a stage event to that run.
# Events of a run share the run's timestamp and form a hash chain: each
# digest covers the previous digest of the same run, so a reordered or
# edited trail no longer verifies.
#
# Canonical import:
#   from whowon.core.logging_layer import EventLogger, EventFilter
#
# Prohibited: datetime.now(), file IO, global mutable state

# ===========================================================================
# SECTION 1 -- STDLIB IMPORTS
# ===========================================================================

import hashlib
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

# ===========================================================================
# SECTION 2 -- EVENT TYPES
# ===========================================================================

VALIDATION_FAILED:    str = "VALIDATION_FAILED"
INPUT_PARSED:         str = "INPUT_PARSED"
DUPLICATES_COLLAPSED: str = "DUPLICATES_COLLAPSED"
WINNERS_SELECTED:     str = "WINNERS_SELECTED"

EVENT_TYPES = frozenset({
    VALIDATION_FAILED,
    INPUT_PARSED,
    DUPLICATES_COLLAPSED,
    WINNERS_SELECTED,
})

# Terminal events close a run; nothing may be appended after them.
_TERMINAL_TYPES = frozenset({VALIDATION_FAILED, WINNERS_SELECTED})

# ===========================================================================
# SECTION 3 -- RECORDS
# ===========================================================================

@dataclass(frozen=True)
class SelectionRun:
    """One select_winners() call as seen by the audit log."""
    run_id:     str
    started_at: datetime


@dataclass(frozen=True)
class Event:
    """
    One stage of a selection run.

    Fields
    ------
    id        : "{run_id}/{seq:02d}".
    run_id    : Run this event belongs to.
    seq       : 1-based position within the run.
    type      : One of EVENT_TYPES.
    timestamp : The run's invocation timestamp.
    data      : JSON-serialisable payload (copied on entry).
    digest    : SHA-256 over the previous digest of the run and this event.
    """
    id:        str
    run_id:    str
    seq:       int
    type:      str
    timestamp: datetime
    data:      Dict[str, Any]
    digest:    str

    @property
    def is_terminal(self) -> bool:
        return self.type in _TERMINAL_TYPES


@dataclass(frozen=True)
class EventFilter:
    """Both fields optional; an omitted field matches everything."""
    run_id:     Optional[str] = None
    event_type: Optional[str] = None


# ===========================================================================
# SECTION 4 -- INTERNAL HELPERS
# ===========================================================================

def _canonical_payload(data: Dict[str, Any]) -> str:
    try:
        return json.dumps(data, sort_keys=True, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise LoggingError("data must be finite JSON values: {}".format(exc)) from None


def _chain_digest(previous: str, event_id: str, event_type: str, payload: str) -> str:
    preimage = "|".join((previous, event_id, event_type, payload))
    return hashlib.sha256(preimage.encode("utf-8")).hexdigest()


# ===========================================================================
# SECTION 5 -- EventLogger
# ===========================================================================

class EventLogger:
    """
    Audit log for selection runs.

    One logger may be shared across sequential runs; each run keeps its own
    sequence numbers and hash chain. Misuse raises LoggingError rather than
    dropping the event.
    """

    def __init__(self) -> None:
        self._runs: Dict[str, SelectionRun] = {}
        self._events: List[Event] = []
        self._heads: Dict[str, Event] = {}

    def start_run(self, timestamp: datetime) -> str:
        """Open a run stamped with timestamp. Return its run ID."""
        if not isinstance(timestamp, datetime):
            raise LoggingError(
                "timestamp must be a datetime instance; got: {}".format(type(timestamp))
            )
        run_id = "RUN-{:06d}".format(len(self._runs) + 1)
        self._runs[run_id] = SelectionRun(run_id=run_id, started_at=timestamp)
        return run_id

    def log_event(self, run_id: str, event_type: str, data: Dict[str, Any]) -> str:
        """
        Append one stage event to an open run. Return the event ID.

        Raises
        ------
        LoggingError : unknown or closed run, unknown event type, or a
                       payload that is not a dict of finite JSON values.
        """
        run = self._runs.get(run_id)
        if run is None:
            raise LoggingError("unknown run: {!r}".format(run_id))
        if event_type not in EVENT_TYPES:
            raise LoggingError("unknown event type: {!r}".format(event_type))
        if not isinstance(data, dict):
            raise LoggingError("data must be a dict; got: {}".format(type(data)))

        head = self._heads.get(run_id)
        if head is not None and head.is_terminal:
            raise LoggingError("run {} already closed by {}".format(run_id, head.type))

        seq = 1 if head is None else head.seq + 1
        event_id = "{}/{:02d}".format(run_id, seq)
        payload = _canonical_payload(data)
        event = Event(
            id=event_id,
            run_id=run_id,
            seq=seq,
            type=event_type,
            timestamp=run.started_at,
            data=json.loads(payload),
            digest=_chain_digest(head.digest if head else run_id, event_id, event_type, payload),
        )
        self._events.append(event)
        self._heads[run_id] = event
        return event_id

    def runs(self) -> Tuple[SelectionRun, ...]:
        return tuple(self._runs.values())

    def query_events(self, filter: Optional[EventFilter] = None) -> List[Event]:
        """Matching events in append order."""
        filter = filter or EventFilter()
        return [
            e for e in self._events
            if (filter.run_id is None or e.run_id == filter.run_id)
            and (filter.event_type is None or e.type == filter.event_type)
        ]

    def event_count(self) -> int:
        return len(self._events)


# ===========================================================================
# SECTION 6 -- EXCEPTIONS
# ===========================================================================

class LoggingError(Exception):
    """Raised by EventLogger when a run or event is malformed."""
