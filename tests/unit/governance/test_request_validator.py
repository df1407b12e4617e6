# =============================================================================
# WHOWON v1.0.0 -- REQUEST GATE TESTS
# File:   tests/unit/governance/test_request_validator.py
# =============================================================================

import pytest

from whowon.core.config import SelectionRequest, TieMode
from whowon.core.exceptions import (
    EmptyInputError,
    InvalidTargetError,
    InvalidWinnerCountError,
    SelectionValidationError,
)
from whowon.governance.request_validator import (
    RequestValidationResult,
    RequestViolation,
    validate_selection_request,
)


# =============================================================================
# SECTION 1 -- Helpers
# =============================================================================

def _valid_call(raw_input="Alice 10\nBob 12", **overrides):
    """Return a validate_selection_request() call, with optional overrides."""
    defaults = dict(
        target="10",
        winner_count="1",
        tie_mode=TieMode.INCLUDE_ALL,
        duplicate_mode="keepFirst",
        exact_match=False,
        whitelist="",
    )
    defaults.update(overrides)
    return validate_selection_request(raw_input, SelectionRequest(**defaults))


def _rule_ids(result):
    return [v.rule_id for v in result.blocking_violations]


# =============================================================================
# SECTION 2 -- Happy path
# =============================================================================

class TestCompliantCall:

    def test_valid_call(self):
        result = _valid_call()
        assert isinstance(result, RequestValidationResult)
        assert result.is_valid is True
        assert result.blocking_violations == ()
        assert result.errors == ()

    def test_validated_fields_ranked(self):
        assert _valid_call().validated_fields == (
            "raw_input", "target", "winner_count", "tie_mode", "duplicate_mode", "whitelist",
        )

    def test_validated_fields_exact_match_skips_ranking_fields(self):
        fields = _valid_call(exact_match=True).validated_fields
        assert "winner_count" not in fields
        assert "tie_mode" not in fields


class TestSel00Request:

    @pytest.mark.parametrize("request_obj", [None, {"target": "10"}, "10"])
    def test_non_request_blocking(self, request_obj):
        result = validate_selection_request("Alice 10", request_obj)
        assert result.is_valid is False
        assert _rule_ids(result) == ["SEL-00"]
        assert result.failed_fields == ("request",)
        assert result.validated_fields == ("request",)
        assert isinstance(result.errors[0], SelectionValidationError)


# =============================================================================
# SECTION 3 -- SEL-01 raw input
# =============================================================================

class TestSel01RawInput:

    @pytest.mark.parametrize("raw", ["", "   \n\t\n"])
    def test_blank_input_blocking(self, raw):
        result = _valid_call(raw_input=raw)
        assert result.is_valid is False
        assert _rule_ids(result) == ["SEL-01"]
        assert isinstance(result.errors[0], EmptyInputError)

    def test_non_string_input_blocking(self):
        result = _valid_call(raw_input=None)
        assert _rule_ids(result) == ["SEL-01"]
        assert isinstance(result.errors[0], SelectionValidationError)

    def test_unparseable_lines_pass_the_gate(self):
        assert _valid_call(raw_input="no numbers").is_valid is True


# =============================================================================
# SECTION 4 -- SEL-02 / SEL-03 / SEL-04
# =============================================================================

class TestSel02Target:

    @pytest.mark.parametrize("target", ["", "abc", None, "inf"])
    def test_invalid_target_blocking(self, target):
        result = _valid_call(target=target)
        assert _rule_ids(result) == ["SEL-02"]
        assert isinstance(result.errors[0], InvalidTargetError)

    def test_target_checked_in_exact_mode(self):
        assert _rule_ids(_valid_call(target="x", exact_match=True)) == ["SEL-02"]


class TestSel03WinnerCount:

    @pytest.mark.parametrize("count", ["0", "-1", "", None, "1.5"])
    def test_invalid_count_blocking(self, count):
        result = _valid_call(winner_count=count)
        assert _rule_ids(result) == ["SEL-03"]
        assert isinstance(result.errors[0], InvalidWinnerCountError)

    def test_count_ignored_in_exact_mode(self):
        assert _valid_call(winner_count=None, exact_match=True).is_valid is True


class TestSel04TieMode:

    def test_unknown_tie_mode(self):
        assert _rule_ids(_valid_call(tie_mode="all")) == ["SEL-04"]

    def test_tie_mode_ignored_in_exact_mode(self):
        assert _valid_call(tie_mode="all", exact_match=True).is_valid is True


# =============================================================================
# SECTION 5 -- SEL-05 / SEL-06
# =============================================================================

class TestSel05DuplicateMode:

    def test_unknown_duplicate_mode(self):
        assert _rule_ids(_valid_call(duplicate_mode="first")) == ["SEL-05"]

    def test_checked_in_exact_mode(self):
        assert _rule_ids(_valid_call(duplicate_mode="x", exact_match=True)) == ["SEL-05"]


class TestSel06Whitelist:

    def test_non_string_whitelist(self):
        assert _rule_ids(_valid_call(whitelist=42)) == ["SEL-06"]

    def test_none_whitelist_accepted(self):
        assert _valid_call(whitelist=None).is_valid is True


# =============================================================================
# SECTION 6 -- Aggregation
# =============================================================================

class TestAggregation:

    def test_all_failing_fields_reported_together(self):
        result = _valid_call(raw_input="", target="x", winner_count="0")
        assert _rule_ids(result) == ["SEL-01", "SEL-02", "SEL-03"]
        assert result.failed_fields == ("raw_input", "target", "winner_count")

    def test_violation_carries_error(self):
        violation = _valid_call(target="x").blocking_violations[0]
        assert isinstance(violation, RequestViolation)
        assert violation.field_name == "target"
        assert violation.observed_value == "x"
        assert violation.message == violation.error.message
        assert violation.is_blocking is True

    def test_no_advisories_on_valid_request(self):
        assert _valid_call().warnings == ()
