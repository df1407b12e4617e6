# whowon/governance/request_validator.py
# Version: 1.0.0
# Request gate: validates every raw field of a selection request together,
# before any entry is parsed, and reports all violations at once.
#
#   SEL-01  raw_input       string with at least one non-blank line
#   SEL-02  target          finite number (',' decimal allowed)
#   SEL-03  winner_count    positive integer; skipped in exact-match mode
#   SEL-04  tie_mode        TieMode member; skipped in exact-match mode
#   SEL-05  duplicate_mode  DuplicateMode member
#   SEL-06  whitelist       string (or None)
#
# A request that is not a SelectionRequest fails SEL-00 alone; no field of
# it is inspected.

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Tuple

from whowon.core.config import (
    SelectionRequest,
    build_whitelist,
    parse_duplicate_mode,
    parse_target,
    parse_tie_mode,
    parse_winner_count,
)
from whowon.core.exceptions import (
    EmptyInputError,
    SelectionError,
    SelectionValidationError,
)
from whowon.core.parser import count_non_blank_lines


@dataclass(frozen=True)
class RequestViolation:
    rule_id:        str
    field_name:     str
    observed_value: Any
    error:          SelectionError
    is_blocking:    bool

    @property
    def message(self) -> str:
        return self.error.message


@dataclass(frozen=True)
class RequestValidationResult:
    is_valid:            bool
    violations:          Tuple[RequestViolation, ...]
    warnings:            Tuple[RequestViolation, ...]
    blocking_violations: Tuple[RequestViolation, ...]
    validated_fields:    Tuple[str, ...]

    @property
    def errors(self) -> Tuple[SelectionError, ...]:
        return tuple(v.error for v in self.blocking_violations)

    @property
    def failed_fields(self) -> Tuple[str, ...]:
        return tuple(v.field_name for v in self.blocking_violations)


def _violation(rule_id: str, error: SelectionError, is_blocking: bool = True) -> RequestViolation:
    return RequestViolation(rule_id, error.field_name, error.value, error, is_blocking)


def validate_selection_request(
    raw_input: Any,
    request: SelectionRequest,
) -> RequestValidationResult:
    violations: List[RequestViolation] = []
    validated_fields: List[str] = []

    if not isinstance(request, SelectionRequest):
        violation = _violation("SEL-00", SelectionValidationError(
            field_name="request", value=request, constraint="must be a SelectionRequest"))
        return RequestValidationResult(
            is_valid=False,
            violations=(violation,),
            warnings=(),
            blocking_violations=(violation,),
            validated_fields=("request",),
        )

    validated_fields.append("raw_input")
    if not isinstance(raw_input, str):
        violations.append(_violation("SEL-01", SelectionValidationError(
            field_name="raw_input", value=raw_input, constraint="must be a string")))
    elif count_non_blank_lines(raw_input) == 0:
        violations.append(_violation("SEL-01", EmptyInputError(0)))

    validated_fields.append("target")
    try:
        parse_target(request.target)
    except SelectionError as exc:
        violations.append(_violation("SEL-02", exc))

    if not request.exact_match:
        validated_fields.append("winner_count")
        try:
            parse_winner_count(request.winner_count)
        except SelectionError as exc:
            violations.append(_violation("SEL-03", exc))

        validated_fields.append("tie_mode")
        try:
            parse_tie_mode(request.tie_mode)
        except SelectionError as exc:
            violations.append(_violation("SEL-04", exc))

    validated_fields.append("duplicate_mode")
    try:
        parse_duplicate_mode(request.duplicate_mode)
    except SelectionError as exc:
        violations.append(_violation("SEL-05", exc))

    validated_fields.append("whitelist")
    try:
        build_whitelist(request)
    except SelectionError as exc:
        violations.append(_violation("SEL-06", exc))

    blocking = tuple(v for v in violations if v.is_blocking)
    advisory = tuple(v for v in violations if not v.is_blocking)
    return RequestValidationResult(
        is_valid=len(blocking) == 0,
        violations=tuple(violations),
        warnings=advisory,
        blocking_violations=blocking,
        validated_fields=tuple(validated_fields),
    )
