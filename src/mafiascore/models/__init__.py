"""Models package."""

from mafiascore.models.player import (
    Role,
    Team,
    EliminationPhase,
    Achievement,
    ACHIEVEMENT_LABELS,
    DERIVED_ACHIEVEMENTS,
    Elimination,
    ALIVE,
    Player,
)
from mafiascore.models.round import (
    RoundInput,
    Session,
    PointLine,
    CheckSummary,
    TieBreak,
    PlayerResult,
    RoundResult,
    SessionResult,
)

__all__ = [
    "Role",
    "Team",
    "EliminationPhase",
    "Achievement",
    "ACHIEVEMENT_LABELS",
    "DERIVED_ACHIEVEMENTS",
    "Elimination",
    "ALIVE",
    "Player",
    "RoundInput",
    "Session",
    "PointLine",
    "CheckSummary",
    "TieBreak",
    "PlayerResult",
    "RoundResult",
    "SessionResult",
]
