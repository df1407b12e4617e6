# =============================================================================
# WHOWON v1.0.0 -- SELECTION ENGINE: EXCEPTIONS
# File:   whowon/core/exceptions.py
# =============================================================================
#
# SCOPE
# -----
# Defines the exception hierarchy for the winner selection engine.
# All exceptions are pure value objects: no side effects, no logging,
# no external references, no I/O of any kind.
#
# EXCEPTION HIERARCHY
# -------------------
#   SelectionError(Exception)                       -- base; never raised directly
#     SelectionValidationError(SelectionError)      -- field type / range / membership
#       InvalidTargetError                          -- target not a finite number
#       InvalidWinnerCountError                     -- winner count not a positive int
#     EmptyInputError(SelectionError)               -- nothing parseable in raw input
#     NoEntriesAfterFilterError(SelectionError)     -- dedup left nothing (non-fatal)
#
# MESSAGE CONTRACT
# ----------------
# Every exception message is:
#   - Deterministic: identical inputs -> identical message string.
#   - Explicit: field name and violating value always included.
#   - Non-empty.
#
# Core constructors raise these directly. The selection pipeline catches
# them and returns them inside a SelectionResult; none escape select_winners.
# =============================================================================

from __future__ import annotations

from typing import Any


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class SelectionError(Exception):
    """
    Base class for all selection engine exceptions.

    Never raised directly. Use a concrete subclass.

    Attributes:
        field_name:  Name of the offending request field, or empty string
                     when the condition is not tied to a single field.
        value:       The offending value at the time of validation,
                     or None if not applicable.
        message:     Human-readable description. Always non-empty.
    """

    def __init__(
        self,
        message:    str,
        field_name: str = "",
        value:      Any = None,
    ) -> None:
        if not isinstance(message, str) or not message:
            raise ValueError(
                "SelectionError: message must be a non-empty string"
            )
        if not isinstance(field_name, str):
            raise ValueError(
                "SelectionError: field_name must be a string"
            )
        super().__init__(message)
        self.field_name: str = field_name
        self.value:      Any = value
        self.message:    str = message

    def __repr__(self) -> str:
        return (
            self.__class__.__name__
            + "(field_name=" + repr(self.field_name)
            + ", value=" + repr(self.value)
            + ", message=" + repr(self.message)
            + ")"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SelectionError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.field_name == other.field_name
            and self.value == other.value
            and self.message == other.message
        )

    def __hash__(self) -> int:
        return hash((type(self), self.field_name, repr(self.value), self.message))


# =============================================================================
# VALIDATION EXCEPTIONS
# =============================================================================

class SelectionValidationError(SelectionError):
    """
    Raised when a request field violates a type, range or membership
    constraint.

    Message format:
        "SelectionValidationError: field '<field_name>' violates constraint
         '<constraint>': got <value>."

    Args:
        field_name:  Name of the offending field. Must be non-empty.
        value:       The offending value.
        constraint:  Human-readable constraint description, e.g.
                     "must be a TieMode member". Must be non-empty.

    Raises:
        ValueError if field_name or constraint is empty.
    """

    def __init__(
        self,
        field_name:  str,
        value:       Any,
        constraint:  str,
    ) -> None:
        if not field_name:
            raise ValueError(
                "SelectionValidationError: field_name must be a non-empty string"
            )
        if not isinstance(constraint, str) or not constraint:
            raise ValueError(
                "SelectionValidationError: constraint must be a non-empty string"
            )
        message = (
            self.__class__.__name__
            + ": field '"
            + field_name
            + "' violates constraint '"
            + constraint
            + "': got "
            + repr(value)
            + "."
        )
        super().__init__(message=message, field_name=field_name, value=value)
        self.constraint: str = constraint


class InvalidTargetError(SelectionValidationError):
    """Raised when the target does not parse to a finite number."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            field_name="target",
            value=value,
            constraint="must be a finite number",
        )


class InvalidWinnerCountError(SelectionValidationError):
    """
    Raised when the winner count is not a positive integer.

    Only checked in ranked mode; exact-match mode has no winner count.
    """

    def __init__(self, value: Any) -> None:
        super().__init__(
            field_name="winner_count",
            value=value,
            constraint="must be a positive integer",
        )


# =============================================================================
# INPUT EXCEPTIONS
# =============================================================================

class EmptyInputError(SelectionError):
    """
    Raised when the raw input has no non-blank line, or when no line yields
    a parseable entry.

    Args:
        non_blank_line_count:  Number of non-blank lines seen. 0 means the
                               input was blank; > 0 means every line was
                               dropped for lacking a numeric token.
    """

    def __init__(self, non_blank_line_count: int) -> None:
        if non_blank_line_count == 0:
            detail = "raw input contains no non-blank lines"
        else:
            detail = (
                "none of the "
                + str(non_blank_line_count)
                + " non-blank line(s) contains a number"
            )
        message = "EmptyInputError: " + detail + "."
        super().__init__(
            message=message,
            field_name="raw_input",
            value=non_blank_line_count,
        )
        self.non_blank_line_count: int = non_blank_line_count


class NoEntriesAfterFilterError(SelectionError):
    """
    Reported when duplicate filtering leaves no entries. Non-fatal: the
    selection simply has no winners.
    """

    def __init__(self, entry_count: int) -> None:
        message = (
            "NoEntriesAfterFilterError: all "
            + str(entry_count)
            + " parsed entries were removed by duplicate filtering."
        )
        super().__init__(message=message, field_name="entries", value=entry_count)
        self.entry_count: int = entry_count


# =============================================================================
# MODULE __all__
# =============================================================================

__all__ = [
    "SelectionError",
    "SelectionValidationError",
    "InvalidTargetError",
    "InvalidWinnerCountError",
    "EmptyInputError",
    "NoEntriesAfterFilterError",
]
