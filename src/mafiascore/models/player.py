"""Player, Role and Elimination models."""

import re
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator


class Role(str, Enum):
    """Player roles in the game."""

    CIVILIAN = "CIVILIAN"
    SHERIFF = "SHERIFF"  # Checks one player's team each night
    MAFIA = "MAFIA"
    DON = "DON"  # Leader of the mafia

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Parse a role value, ignoring case.

        Raises:
            ValueError: If the value names no role.
        """
        return cls(value.strip().upper())


class Team(str, Enum):
    """Teams for victory conditions."""

    TOWN = "TOWN"  # Civilians and Sheriff
    MAFIA = "MAFIA"  # Mafia and Don

    @classmethod
    def parse(cls, value: str) -> "Team":
        """Parse a team value, ignoring case."""
        return cls(value.strip().upper())


class EliminationPhase(str, Enum):
    """Part of the day in which a player left the table."""

    NIGHT = "N"
    DAY = "D"  # Voted out


class Achievement(str, Enum):
    """Tags attached to a player's result, each worth a fixed point delta."""

    FLAWLESS_WIN = "FLAWLESS_WIN"
    NO_LOSS_WIN = "NO_LOSS_WIN"
    FIRST_BLOOD = "FIRST_BLOOD"
    BEST_MOVE = "BEST_MOVE"
    SHERIFF_FIND = "SHERIFF_FIND"
    TIE_BREAK_WIN = "TIE_BREAK_WIN"
    FIRST_OUT = "FIRST_OUT"
    OWN_GOAL = "OWN_GOAL"
    DISQUALIFICATION = "DISQUALIFICATION"

    @property
    def label(self) -> str:
        return ACHIEVEMENT_LABELS[self]

    @classmethod
    def parse(cls, value: str) -> "Achievement":
        """Parse an achievement value, accepting dashes for underscores."""
        return cls(value.strip().upper().replace("-", "_"))


ACHIEVEMENT_LABELS = {
    Achievement.FLAWLESS_WIN: "Flawless win",
    Achievement.NO_LOSS_WIN: "Won without losses",
    Achievement.FIRST_BLOOD: "First blood",
    Achievement.BEST_MOVE: "Best move",
    Achievement.SHERIFF_FIND: "Sheriff find",
    Achievement.TIE_BREAK_WIN: "Tie-break win",
    Achievement.FIRST_OUT: "First out",
    Achievement.OWN_GOAL: "Own goal",
    Achievement.DISQUALIFICATION: "Disqualification",
}

# Recomputed by the engine on every scoring pass, never taken from input
DERIVED_ACHIEVEMENTS = frozenset({
    Achievement.FLAWLESS_WIN,
    Achievement.NO_LOSS_WIN,
    Achievement.TIE_BREAK_WIN,
})


ALIVE_VALUES = {"0", "ALIVE"}
ELIMINATION_PATTERN = re.compile(r"^([1-9][0-9]*)([DN])$")


class Elimination(BaseModel):
    """When a player left the table.

    Serialized as "0" for a player who survived to the end, or as the day
    number followed by N (killed at night) or D (voted out during the day),
    e.g. "1D", "3N".
    """

    model_config = ConfigDict(frozen=True)

    day: int = 0
    phase: Optional[EliminationPhase] = None  # None = alive

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return cls._split(data)
        return data

    @model_validator(mode="after")
    def _check_consistency(self) -> "Elimination":
        if self.phase is None and self.day != 0:
            raise ValueError("An alive player cannot have an elimination day")
        if self.phase is not None and self.day < 1:
            raise ValueError("Elimination day must be a positive integer")
        return self

    @model_serializer
    def _to_string(self) -> str:
        return str(self)

    @staticmethod
    def _split(text: str) -> dict:
        value = text.strip().upper()
        if value in ALIVE_VALUES:
            return {"day": 0, "phase": None}
        match = ELIMINATION_PATTERN.match(value)
        if match is None:
            raise ValueError(
                f'Invalid elimination "{text}". Use "0" for alive or "1D", "2N", etc.'
            )
        return {"day": int(match.group(1)), "phase": EliminationPhase(match.group(2))}

    @classmethod
    def parse(cls, text: str) -> "Elimination":
        """Parse the wire form ("0", "alive", "2D", "3N")."""
        return cls(**cls._split(text))

    @classmethod
    def is_valid(cls, text: str) -> bool:
        """Check a wire-form value without building a model."""
        value = text.strip().upper()
        return value in ALIVE_VALUES or ELIMINATION_PATTERN.match(value) is not None

    @property
    def is_alive(self) -> bool:
        return self.phase is None

    @property
    def is_day_vote(self) -> bool:
        return self.phase == EliminationPhase.DAY

    @property
    def is_night_kill(self) -> bool:
        return self.phase == EliminationPhase.NIGHT

    def __str__(self) -> str:
        if self.phase is None:
            return "0"
        return f"{self.day}{self.phase.value}"


ALIVE = Elimination()


class Player(BaseModel):
    """A player's record for one round.

    Uses seat (1-based position in the submitted list) as primary identifier;
    id is the caller's own player key and may be absent.
    """

    model_config = ConfigDict(frozen=True)

    seat: int = Field(ge=1)
    name: str
    role: Role
    elimination: Elimination = ALIVE
    achievements: tuple[Achievement, ...] = ()
    id: Optional[int] = None

    @property
    def is_alive(self) -> bool:
        return self.elimination.is_alive

    def to_dict(self) -> dict:
        """Convert to a plain dictionary in wire form."""
        return {
            "seat": self.seat,
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "elimination": str(self.elimination),
            "achievements": [a.value for a in self.achievements],
        }
