"""Scoring exceptions.

These signal programming mistakes (scoring an unfinished round, a role the
rule set does not know). Problems with submitted data are reported as
ValidationIssue lists instead, see mafiascore.validation.
"""

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from mafiascore.validation.types import ValidationIssue


class ScoringError(Exception):
    """Base class for errors raised by the scoring engine."""


class GameNotFinishedError(ScoringError):
    """Raised when neither team has met its victory condition."""

    def __init__(self, mafia_alive: int, town_alive: int):
        self.mafia_alive = mafia_alive
        self.town_alive = town_alive
        super().__init__("Game is not finished yet")


class InvalidRoleError(ScoringError):
    """Raised for a role missing from the rule set's role table."""

    def __init__(self, role: object):
        self.role = role
        super().__init__(f"Unknown role: {role!r}")


class InvalidTeamError(ScoringError):
    """Raised for a value that is not a team."""

    def __init__(self, team: object):
        self.team = team
        super().__init__(f"Unknown team: {team!r}")


class SessionValidationError(ScoringError):
    """Raised when raw session data handed to the scorer fails validation."""

    def __init__(self, issues: Sequence["ValidationIssue"]):
        self.issues = list(issues)
        super().__init__(f"Session validation failed with {len(self.issues)} issue(s)")

    def __str__(self) -> str:
        if not self.issues:
            return "SessionValidationError(no issues)"
        lines = [f"SessionValidationError({len(self.issues)} issues):"]
        for issue in self.issues:
            lines.append(f"  {issue.path or '<root>'}: {issue.message}")
        return "\n".join(lines)
