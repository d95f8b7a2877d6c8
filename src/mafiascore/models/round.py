"""Round, session and scoring result models."""

import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from mafiascore.models.player import Achievement, Elimination, Player, Role, Team


class RoundInput(BaseModel):
    """A validated round, ready for scoring."""

    model_config = ConfigDict(frozen=True)

    players: tuple[Player, ...]
    winner: Optional[Team] = None  # Declared by the caller, informational only
    sheriff_checks: str = ""  # "7,8,9": seats checked by the sheriff


class Session(BaseModel):
    """A dated batch of rounds submitted together."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    games: tuple[RoundInput, ...]


class PointLine(BaseModel):
    """One component of a player's point total."""

    model_config = ConfigDict(frozen=True)

    label: str
    points: int


class CheckSummary(BaseModel):
    """Outcome of the sheriff's checks."""

    model_config = ConfigDict(frozen=True)

    confirmed_mafia: int = 0
    confirmed_town: int = 0


class TieBreak(BaseModel):
    """Final three-way vote detection result."""

    model_config = ConfigDict(frozen=True)

    is_tie_break: bool = False
    participants: tuple[int, ...] = ()  # seats


class PlayerResult(BaseModel):
    """A player's scored result. Every field beyond the input is derived."""

    model_config = ConfigDict(frozen=True)

    seat: int
    id: Optional[int] = None
    name: str
    role: Role
    team: Team
    elimination: Elimination
    achievements: tuple[Achievement, ...] = ()
    confirmed_mafia: int = 0
    confirmed_town: int = 0
    breakdown: tuple[PointLine, ...] = ()
    points: int = 0


class RoundResult(BaseModel):
    """Scored round: winner, classification and per-player results."""

    model_config = ConfigDict(frozen=True)

    winner: Team
    is_flawless_win: bool = False
    is_no_loss_win: bool = False
    tie_break: TieBreak = Field(default_factory=TieBreak)
    results: tuple[PlayerResult, ...] = ()

    @property
    def total_points(self) -> int:
        return sum(r.points for r in self.results)

    def get_result(self, seat: int) -> Optional[PlayerResult]:
        """Get a player's result by seat number."""
        for result in self.results:
            if result.seat == seat:
                return result
        return None


class SessionResult(BaseModel):
    """All scored rounds of a session."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    games: tuple[RoundResult, ...] = ()
