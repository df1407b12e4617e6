# tests/test_pipeline_contract.py
# Version: 1.0.0
# Contract tests for select_winners().
#
# CONSTRAINTS:
#   No reimplementation of any engine function.
#   Only public imports and assertions.
#   Deterministic: the clock is always injected.
#
# Standard import pattern:
#   from whowon import SelectionRequest, select_winners

from datetime import datetime

import pytest

from whowon import (
    DuplicateMode,
    SelectionRequest,
    SelectionResult,
    TieMode,
    select_winners,
)
from whowon.core.exceptions import (
    EmptyInputError,
    InvalidTargetError,
    InvalidWinnerCountError,
)
from whowon.core.logging_layer import EventFilter, EventLogger


# ---------------------------------------------------------------------------
# SHARED FIXTURES
# ---------------------------------------------------------------------------

_NOW: datetime = datetime(2026, 3, 14, 15, 9, 26)


def _clock() -> datetime:
    return _NOW


def _run(raw_input, **fields) -> SelectionResult:
    return select_winners(raw_input, SelectionRequest(**fields), clock=_clock)


def _names(result):
    return [w.name for w in result.winners]


# ---------------------------------------------------------------------------
# SCENARIOS
# ---------------------------------------------------------------------------

class TestScenarios:

    def test_closest_single_winner(self) -> None:
        result = _run("Alice 10\nBob 12\nCarol 8",
                      target="10", winner_count="1", tie_mode=TieMode.FIRST_ONLY)
        assert result.ok is True
        assert _names(result) == ["Alice"]
        assert result.winners[0].distance == 0.0

    def test_include_all_ties(self) -> None:
        result = _run("Alice 8\nBob 13\nCarol 8",
                      target="10", winner_count="1", tie_mode=TieMode.INCLUDE_ALL)
        assert _names(result) == ["Alice", "Carol"]
        assert [w.distance for w in result.winners] == [2.0, 2.0]

    def test_include_all_counts_ties_on_both_sides(self) -> None:
        # |12 - 10| == |8 - 10|: Bob ties with the cutoff as well.
        result = _run("Alice 8\nBob 12\nCarol 8",
                      target="10", winner_count="1", tie_mode=TieMode.INCLUDE_ALL)
        assert _names(result) == ["Alice", "Bob", "Carol"]

    def test_keep_last_duplicate(self) -> None:
        result = _run("Dave 5\nDave 9",
                      target="10", winner_count="1", duplicate_mode=DuplicateMode.KEEP_LAST)
        assert len(result.winners) == 1
        assert result.winners[0].value == 9.0
        assert result.winners[0].distance == 1.0

    def test_whitelisted_duplicates_both_returned(self) -> None:
        result = _run("Dave 5\nDave 9",
                      target="10", winner_count="2", whitelist="Dave",
                      duplicate_mode=DuplicateMode.KEEP_FIRST, tie_mode=TieMode.FIRST_ONLY)
        assert [w.value for w in result.winners] == [9.0, 5.0]

    def test_exact_match(self) -> None:
        result = _run("Eve 7", target="7", exact_match=True)
        assert _names(result) == ["Eve"]
        assert result.winners[0].distance == 0.0
        assert result.report.differences_text == "Name: Eve, Difference: 0.00"

    def test_exact_match_miss_is_empty_success(self) -> None:
        result = _run("Eve 7", target="7.5", exact_match=True)
        assert result.ok is True
        assert result.winners == ()

    def test_message_filter_display_name(self) -> None:
        result = _run("Ben Bcool 9", target="10", winner_count="1",
                      message_filter_enabled=True)
        assert result.winners[0].display_name == "Ben B"
        assert result.report.winners_text == ":W: Ben B - 9 :W:"
        assert result.report.original_text == "Ben Bcool 9"


# ---------------------------------------------------------------------------
# PROPERTIES
# ---------------------------------------------------------------------------

_POOL = "\n".join([
    "Ann 3", "Bo 7", "Cy 7", "Di 13", "Ed 10", "Flo 4", "Gil 16", "Hal 10,0",
    "Ivy 1", "Jo 19", "Ann 11", "Bo 2",
])


class TestProperties:

    @pytest.mark.parametrize("count", [1, 2, 3, 5, 10, 50])
    def test_first_only_size_is_min(self, count) -> None:
        result = _run(_POOL, target="10", winner_count=count, tie_mode=TieMode.FIRST_ONLY)
        # 12 lines, names Ann and Bo repeated -> 10 survivors under keepFirst.
        assert len(result.winners) == min(count, 10)

    def test_idempotent(self) -> None:
        a = _run(_POOL, target="9.5", winner_count=4)
        b = _run(_POOL, target="9.5", winner_count=4)
        assert a == b

    def test_ranked_order_respects_position_on_ties(self) -> None:
        result = _run(_POOL, target="10", winner_count=50, tie_mode=TieMode.FIRST_ONLY)
        pairs = [(w.distance, w.position) for w in result.winners]
        assert pairs == sorted(pairs)

    def test_tie_extension_only_at_cutoff(self) -> None:
        result = _run(_POOL, target="10", winner_count=3, tie_mode=TieMode.INCLUDE_ALL)
        cutoff = result.winners[2].distance
        assert all(w.distance == cutoff for w in result.winners[3:])
        # Ed, Hal at 0; Bo is the cutoff at 3; Cy and Di tie with it.
        assert [w.name for w in result.winners] == ["Ed", "Hal", "Bo", "Cy", "Di"]

    def test_keep_first_keeps_earliest(self) -> None:
        result = _run(_POOL, target="10", winner_count=50, duplicate_mode="keepFirst")
        ann = [w for w in result.winners if w.name == "Ann"]
        assert [w.value for w in ann] == [3.0]

    def test_keep_last_keeps_latest(self) -> None:
        result = _run(_POOL, target="10", winner_count=50, duplicate_mode="keepLast")
        ann = [w for w in result.winners if w.name == "Ann"]
        assert [w.value for w in ann] == [11.0]

    def test_exact_match_never_includes_other_values(self) -> None:
        result = _run(_POOL, target="10", exact_match=True)
        assert _names(result) == ["Ed", "Hal"]
        assert all(w.value == 10.0 for w in result.winners)


# ---------------------------------------------------------------------------
# FAILURE CONTRACT
# ---------------------------------------------------------------------------

class TestFailures:

    def test_invalid_target_blocks(self) -> None:
        result = _run("Alice 10", target="ten", winner_count="1")
        assert result.ok is False
        assert result.winners == ()
        assert result.timestamp is None
        assert isinstance(result.errors[0], InvalidTargetError)

    def test_invalid_winner_count_blocks(self) -> None:
        result = _run("Alice 10", target="10", winner_count="0")
        assert result.failed_fields == ("winner_count",)
        assert isinstance(result.errors[0], InvalidWinnerCountError)

    def test_multiple_fields_reported(self) -> None:
        result = _run("", target="", winner_count="")
        assert result.failed_fields == ("raw_input", "target", "winner_count")

    def test_no_parseable_lines(self) -> None:
        result = _run("no numbers\nat all", target="10", winner_count="1")
        assert result.ok is False
        assert isinstance(result.errors[0], EmptyInputError)
        assert result.errors[0].non_blank_line_count == 2

    def test_missing_request_does_not_raise(self) -> None:
        result = select_winners("Alice 10", None, clock=_clock)
        assert result.ok is False
        assert result.failed_fields == ("request",)

    def test_non_numeric_target_literal_blocks(self) -> None:
        result = _run("A 1\nB 10", target="1_0", winner_count="1")
        assert result.ok is False
        assert result.failed_fields == ("target",)

    def test_non_string_input_does_not_raise(self) -> None:
        result = _run(12345, target="10", winner_count="1")
        assert result.ok is False
        assert result.failed_fields == ("raw_input",)


# ---------------------------------------------------------------------------
# RESULT METADATA
# ---------------------------------------------------------------------------

class TestMetadata:

    def test_timestamp_from_clock(self) -> None:
        assert _run("Alice 10", target="10", winner_count="1").timestamp == _NOW

    def test_default_clock_used(self) -> None:
        result = select_winners("Alice 10", SelectionRequest(target="10", winner_count="1"))
        assert isinstance(result.timestamp, datetime)

    def test_dropped_lines_reported(self) -> None:
        result = _run("Alice 10\nhello\nBob 12", target="10", winner_count="1")
        assert result.dropped_line_numbers == (2,)

    def test_empty_name_placeholder(self) -> None:
        result = _run("42", target="40", winner_count="1")
        assert result.report.winners_text == ":W: No Name - 42 :W:"

    def test_audit_events(self) -> None:
        logger = EventLogger()
        select_winners("Dave 5\nDave 9", SelectionRequest(target="10", winner_count="1"),
                       logger=logger, clock=_clock)
        types = [e.type for e in logger.query_events()]
        assert types == ["INPUT_PARSED", "DUPLICATES_COLLAPSED", "WINNERS_SELECTED"]
        dedup = logger.query_events(EventFilter(event_type="DUPLICATES_COLLAPSED"))[0]
        assert dedup.data["discarded"] == 1

    def test_audit_validation_failure(self) -> None:
        logger = EventLogger()
        select_winners("", SelectionRequest(target="10", winner_count="1"),
                       logger=logger, clock=_clock)
        events = logger.query_events()
        assert [e.type for e in events] == ["VALIDATION_FAILED"]
        assert events[0].data["fields"] == "raw_input"

    def test_one_run_per_call(self) -> None:
        logger = EventLogger()
        first = select_winners("Alice 10", SelectionRequest(target="10", winner_count="1"),
                               logger=logger, clock=_clock)
        second = select_winners("", SelectionRequest(target="10", winner_count="1"),
                                logger=logger, clock=_clock)
        assert (first.run_id, second.run_id) == ("RUN-000001", "RUN-000002")
        own = logger.query_events(EventFilter(run_id=second.run_id))
        assert [e.type for e in own] == ["VALIDATION_FAILED"]
        assert all(e.timestamp == _NOW for e in logger.query_events())

    def test_no_run_id_without_logger(self) -> None:
        assert _run("Alice 10", target="10", winner_count="1").run_id is None

    def test_default_clock_is_naive_local_time(self) -> None:
        logger = EventLogger()
        result = select_winners("A 1", SelectionRequest(target="1", winner_count=1), logger=logger)
        assert result.timestamp.tzinfo is None
        started = logger.runs()[0].started_at
        assert started == result.timestamp
        assert started >= datetime(2020, 1, 1)
