"""Achievement attachment and point computation.

A player's total is built from, in order:
1. Base points for the team result (win or loss)
2. One delta per attached achievement
3. Role premium on a win, role penalty on a loss (Sheriff, Don)
4. Survival bonus on a win for a player who never left the table
5. Early-exit penalty for a Sheriff voted out on day 1 or 2
6. Stepped bonus for the Sheriff's confirmed mafia checks
"""

from typing import Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from mafiascore.models.player import Achievement, DERIVED_ACHIEVEMENTS, Player, Role, Team
from mafiascore.models.round import CheckSummary, PlayerResult, PointLine, TieBreak
from mafiascore.rules.catalog import DEFAULT_RULES, RuleSet

Scorable = Union[Player, PlayerResult]


class RoundContext(BaseModel):
    """Round-level facts every player's points depend on."""

    model_config = ConfigDict(frozen=True)

    winner: Team
    is_flawless_win: bool = False
    is_no_loss_win: bool = False
    tie_break: TieBreak = Field(default_factory=TieBreak)
    checks: CheckSummary = Field(default_factory=CheckSummary)


def award_achievements(
    player: Player,
    context: RoundContext,
    rules: RuleSet = DEFAULT_RULES,
) -> tuple[Achievement, ...]:
    """Get the player's achievements with the derived ones recomputed.

    Caller-supplied achievements are kept, except the derived ones
    (flawless win, no-loss win, tie-break win), which are attached here
    only when earned.
    """
    team = rules.team_of(player.role)
    awarded = {a for a in player.achievements if a not in DERIVED_ACHIEVEMENTS}

    if context.is_flawless_win and team == Team.TOWN:
        awarded.add(Achievement.FLAWLESS_WIN)

    if (
        context.tie_break.is_tie_break
        and team == context.winner
        and player.seat in context.tie_break.participants
    ):
        awarded.add(Achievement.TIE_BREAK_WIN)

    if context.is_no_loss_win and player.role in rules.no_loss_roles:
        awarded.add(Achievement.NO_LOSS_WIN)

    # Enum declaration order
    return tuple(a for a in Achievement if a in awarded)


def _role_label(role: Role) -> str:
    return role.value.capitalize()


def itemize_points(
    player: Scorable,
    context: RoundContext,
    rules: RuleSet = DEFAULT_RULES,
) -> list[PointLine]:
    """Break a player's points down into labelled components.

    A Player gets its achievements attached first (see award_achievements).
    A PlayerResult is already scored and its achievements are used as they are.
    """
    if isinstance(player, Player):
        achievements = award_achievements(player, context, rules)
    else:
        achievements = player.achievements

    lines: list[PointLine] = []
    won = rules.team_of(player.role) == context.winner
    role = player.role

    # 1. Base
    if won:
        lines.append(PointLine(label="Win", points=rules.win_points))
    else:
        lines.append(PointLine(label="Loss", points=rules.loss_points))

    # 2. Achievements, each counted once
    seen: set[Achievement] = set()
    for achievement in achievements:
        if achievement in seen:
            continue
        seen.add(achievement)
        lines.append(PointLine(
            label=achievement.label,
            points=rules.achievement_delta(achievement),
        ))

    # 3. Role stakes
    if won and role in rules.role_win_premium:
        lines.append(PointLine(
            label=f"{_role_label(role)} win",
            points=rules.role_win_premium[role],
        ))
    elif not won and role in rules.role_loss_penalty:
        lines.append(PointLine(
            label=f"{_role_label(role)} loss",
            points=rules.role_loss_penalty[role],
        ))

    # 4. Survival
    if won and player.elimination.is_alive and role in rules.survival_bonus:
        lines.append(PointLine(label="Never left the table", points=rules.survival_bonus[role]))

    # 5. Early exit
    elimination = player.elimination
    if (
        role in rules.early_exit_roles
        and elimination.is_day_vote
        and elimination.day <= rules.early_exit_last_day
    ):
        lines.append(PointLine(
            label=f"Voted out on day {elimination.day}",
            points=rules.early_exit_penalty,
        ))

    # 6. Sheriff checks
    if role == Role.SHERIFF:
        bonus = rules.check_bonus_for(context.checks.confirmed_mafia)
        if bonus:
            lines.append(PointLine(
                label=f"{context.checks.confirmed_mafia} confirmed mafia checks",
                points=bonus,
            ))

    return lines


def compute_points(
    player: Scorable,
    context: RoundContext,
    rules: RuleSet = DEFAULT_RULES,
) -> int:
    """Compute a player's point total for the round."""
    return total(itemize_points(player, context, rules))


def total(lines: Sequence[PointLine]) -> int:
    return sum(line.points for line in lines)
