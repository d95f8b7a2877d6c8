"""Validation types shared by the session and round validators."""

from typing import Optional
from pydantic import BaseModel

from mafiascore.models.round import Session


class ValidationIssue(BaseModel):
    """A single problem found in submitted data."""

    path: str  # Dotted field path, e.g. "games.0.results.3.role"
    message: str  # Human-readable description

    def to_dict(self) -> dict:
        return {"path": self.path, "message": self.message}


class ValidationResult(BaseModel):
    """Result of validating a session.

    Either success with the typed session in data, or failure with every
    issue found.
    """

    success: bool = True
    data: Optional[Session] = None
    errors: list[ValidationIssue] = []

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> dict:
        """Convert to the {success, data|errors} envelope callers surface."""
        if self.success:
            return {"success": True, "data": self.data.model_dump(mode="json")}
        return {"success": False, "errors": [e.to_dict() for e in self.errors]}
