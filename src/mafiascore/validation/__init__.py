"""Validation of submitted session data.

Files:
- types.py: ValidationIssue, ValidationResult
- session.py: SessionValidator, validate_session, validate_round
"""

from mafiascore.exceptions import SessionValidationError
from .types import ValidationIssue, ValidationResult
from .session import SessionValidator, validate_session, validate_round

__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "SessionValidationError",
    "SessionValidator",
    "validate_session",
    "validate_round",
]
