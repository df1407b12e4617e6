# whowon/governance/__init__.py
# Version: 1.0.0

from whowon.governance.request_validator import (
    validate_selection_request,
    RequestValidationResult,
    RequestViolation,
)

__all__ = [
    "validate_selection_request",
    "RequestValidationResult",
    "RequestViolation",
]
