"""Victory conditions.

Rules:
- Mafia wins when at least one mafia player is alive and the living mafia
  are at least as many as the living town players
- Town wins when every mafia player is out
- Anything else is an unfinished round
- Flawless win: town wins without voting out any town player
- No-loss win: mafia wins with every mafia player still at the table
"""

import logging
from collections import Counter
from typing import Sequence

from mafiascore.exceptions import GameNotFinishedError, InvalidTeamError
from mafiascore.models.player import Player, Team
from mafiascore.rules.catalog import DEFAULT_RULES, RuleSet

logger = logging.getLogger(__name__)


def as_team(value: object) -> Team:
    """Coerce a team value, accepting its name in any case.

    Raises:
        InvalidTeamError: If the value names no team.
    """
    if isinstance(value, Team):
        return value
    if isinstance(value, str):
        try:
            return Team.parse(value)
        except ValueError:
            raise InvalidTeamError(value) from None
    raise InvalidTeamError(value)


def count_alive(players: Sequence[Player], rules: RuleSet = DEFAULT_RULES) -> Counter:
    """Count players still alive at the end of the round, by team."""
    counts: Counter = Counter({team: 0 for team in Team})
    for player in players:
        if player.is_alive:
            counts[rules.team_of(player.role)] += 1
    return counts


def determine_winner(players: Sequence[Player], rules: RuleSet = DEFAULT_RULES) -> Team:
    """Determine which team won the round.

    Raises:
        GameNotFinishedError: If neither victory condition is met.
    """
    alive = count_alive(players, rules)
    mafia_alive = alive[Team.MAFIA]
    town_alive = alive[Team.TOWN]

    if mafia_alive > 0 and mafia_alive >= town_alive:
        winner = Team.MAFIA
    elif mafia_alive == 0:
        winner = Team.TOWN
    else:
        raise GameNotFinishedError(mafia_alive=mafia_alive, town_alive=town_alive)

    logger.debug("Winner %s (mafia alive=%d, town alive=%d)", winner.value, mafia_alive, town_alive)
    return winner


def is_flawless_win(
    players: Sequence[Player],
    winner: Team,
    rules: RuleSet = DEFAULT_RULES,
) -> bool:
    """Check whether town won without voting out one of its own.

    Night kills of town players do not matter, only day votes do.
    """
    if as_team(winner) != Team.TOWN:
        return False
    town_roles = rules.roles_of(Team.TOWN)
    return not any(
        p.role in town_roles and p.elimination.is_day_vote
        for p in players
    )


def is_no_loss_win(
    players: Sequence[Player],
    winner: Team,
    rules: RuleSet = DEFAULT_RULES,
) -> bool:
    """Check whether mafia won with every mafia player still alive."""
    if as_team(winner) != Team.MAFIA:
        return False
    mafia_roles = rules.roles_of(Team.MAFIA)
    return all(p.is_alive for p in players if p.role in mafia_roles)
