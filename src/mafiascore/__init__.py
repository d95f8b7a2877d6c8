"""Scoring and validation for ten-player Mafia games."""

from mafiascore.exceptions import (
    ScoringError,
    GameNotFinishedError,
    InvalidRoleError,
    InvalidTeamError,
    SessionValidationError,
)
from mafiascore.models import (
    Role,
    Team,
    Achievement,
    Elimination,
    Player,
    RoundInput,
    Session,
    PlayerResult,
    RoundResult,
    SessionResult,
)
from mafiascore.rules import RuleSet, DEFAULT_RULES
from mafiascore.validation import ValidationIssue, ValidationResult, validate_session
from mafiascore.engine import (
    RoundScorer,
    determine_winner,
    is_flawless_win,
    is_no_loss_win,
    detect_tie_break,
    evaluate_checks,
    compute_points,
    score_round,
    score_session,
)

__all__ = [
    "ScoringError",
    "GameNotFinishedError",
    "InvalidRoleError",
    "InvalidTeamError",
    "SessionValidationError",
    "Role",
    "Team",
    "Achievement",
    "Elimination",
    "Player",
    "RoundInput",
    "Session",
    "PlayerResult",
    "RoundResult",
    "SessionResult",
    "RuleSet",
    "DEFAULT_RULES",
    "ValidationIssue",
    "ValidationResult",
    "validate_session",
    "RoundScorer",
    "determine_winner",
    "is_flawless_win",
    "is_no_loss_win",
    "detect_tie_break",
    "evaluate_checks",
    "compute_points",
    "score_round",
    "score_session",
]
