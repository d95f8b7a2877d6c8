"""Rule catalog: role tables and point values.

Every scoring constant lives in a RuleSet. The validator and the engine take
a RuleSet argument (DEFAULT_RULES unless told otherwise), so a change to the
scoring balance is made here once, or loaded from a YAML file.
"""

from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from mafiascore.exceptions import InvalidRoleError
from mafiascore.models.player import Achievement, Role, Team


class RuleSet(BaseModel):
    """Immutable scoring configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    role_teams: dict[Role, Team] = Field(default_factory=lambda: {
        Role.CIVILIAN: Team.TOWN,
        Role.SHERIFF: Team.TOWN,
        Role.MAFIA: Team.MAFIA,
        Role.DON: Team.MAFIA,
    })
    # Exact number of each role in a legal round
    role_counts: dict[Role, int] = Field(default_factory=lambda: {
        Role.CIVILIAN: 6,
        Role.SHERIFF: 1,
        Role.MAFIA: 2,
        Role.DON: 1,
    })

    win_points: int = 4
    loss_points: int = 0

    achievement_points: dict[Achievement, int] = Field(default_factory=lambda: {
        # Bonuses
        Achievement.FLAWLESS_WIN: 1,
        Achievement.NO_LOSS_WIN: 1,
        Achievement.FIRST_BLOOD: 1,
        Achievement.BEST_MOVE: 1,
        Achievement.SHERIFF_FIND: 1,
        Achievement.TIE_BREAK_WIN: 2,
        # Penalties
        Achievement.FIRST_OUT: -1,
        Achievement.OWN_GOAL: -2,
        Achievement.DISQUALIFICATION: -4,
    })

    # Roles with higher stakes: extra points on a win, a penalty on a loss
    role_win_premium: dict[Role, int] = Field(default_factory=lambda: {
        Role.SHERIFF: 3,
        Role.DON: 3,
    })
    role_loss_penalty: dict[Role, int] = Field(default_factory=lambda: {
        Role.SHERIFF: -3,
        Role.DON: -3,
    })
    # Awarded on a win when the player never left the table
    survival_bonus: dict[Role, int] = Field(default_factory=lambda: {
        Role.SHERIFF: 2,
        Role.DON: 1,
    })

    # Voted out on day 1 or 2, applied regardless of outcome
    early_exit_roles: frozenset[Role] = frozenset({Role.SHERIFF})
    early_exit_last_day: int = 2
    early_exit_penalty: int = -1

    # confirmed mafia checks threshold -> bonus; the highest reached applies
    check_bonus: dict[int, int] = Field(default_factory=lambda: {3: 3})

    # Participants in a final vote that counts as a tie-break
    tie_break_size: int = Field(default=3, ge=1)

    no_loss_roles: frozenset[Role] = frozenset({Role.DON})

    @model_validator(mode="after")
    def _check_tables(self) -> "RuleSet":
        unknown = set(self.role_counts) - set(self.role_teams)
        if unknown:
            names = ", ".join(sorted(r.value for r in unknown))
            raise ValueError(f"role_counts names roles without a team: {names}")
        if any(count < 0 for count in self.role_counts.values()):
            raise ValueError("role_counts must not be negative")
        if any(threshold < 1 for threshold in self.check_bonus):
            raise ValueError("check_bonus thresholds must be positive")
        return self

    @property
    def players_per_round(self) -> int:
        return sum(self.role_counts.values())

    def team_of(self, role: Role) -> Team:
        """Get the team a role plays for.

        Raises:
            InvalidRoleError: If the role is not in the role table.
        """
        try:
            return self.role_teams[role]
        except KeyError:
            raise InvalidRoleError(role) from None

    def roles_of(self, team: Team) -> set[Role]:
        """Get every role that plays for a team."""
        return {role for role, t in self.role_teams.items() if t == team}

    def achievement_delta(self, achievement: Achievement) -> int:
        return self.achievement_points.get(achievement, 0)

    def check_bonus_for(self, confirmed_mafia: int) -> int:
        """Get the stepped bonus for a number of confirmed mafia checks."""
        reached = [t for t in self.check_bonus if confirmed_mafia >= t]
        if not reached:
            return 0
        return self.check_bonus[max(reached)]

    def to_yaml(self) -> str:
        """Serialize the rule set to a YAML string."""
        data = self.model_dump(mode="json")
        # frozensets dump in arbitrary order
        for key in ("early_exit_roles", "no_loss_roles"):
            data[key] = sorted(data[key])
        return yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)

    @classmethod
    def from_yaml(cls, filepath: Union[str, Path]) -> "RuleSet":
        """Load a rule set from a YAML file.

        Keys left out of the file keep their default values.
        """
        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)


DEFAULT_RULES = RuleSet()
