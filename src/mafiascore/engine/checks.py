"""Sheriff checks.

The sheriff's checks arrive as a string of 1-based seat numbers ("7,8,9").
Each checked seat is looked up among the round's players and counted as
confirmed mafia or confirmed town.
"""

from typing import Optional, Sequence

from mafiascore.models.player import Player, Team
from mafiascore.models.round import CheckSummary
from mafiascore.rules.catalog import DEFAULT_RULES, RuleSet


def parse_checks(text: Optional[str]) -> list[int]:
    """Parse a comma-separated list of seat numbers.

    Blank, non-numeric and non-positive entries are skipped; a seat listed
    twice is kept once.
    """
    if not text or not text.strip():
        return []

    seats: list[int] = []
    for part in text.split(","):
        part = part.strip()
        if not (part.isascii() and part.isdecimal()):
            continue
        seat = int(part)
        if seat > 0 and seat not in seats:
            seats.append(seat)
    return seats


def evaluate_checks(
    sheriff: Player,
    checked_seats: Sequence[int],
    players: Sequence[Player],
    rules: RuleSet = DEFAULT_RULES,
) -> CheckSummary:
    """Classify the sheriff's checks by team.

    Args:
        sheriff: The checking player; a check on their own seat is ignored
        checked_seats: 1-based seats, as returned by parse_checks
        players: All players of the round
        rules: Rule set providing the role table

    Returns:
        CheckSummary with confirmed mafia and confirmed town counts
    """
    by_seat = {p.seat: p for p in players}
    confirmed_mafia = 0
    confirmed_town = 0

    for seat in checked_seats:
        checked = by_seat.get(seat)
        if checked is None or checked.seat == sheriff.seat:
            continue
        if rules.team_of(checked.role) == Team.MAFIA:
            confirmed_mafia += 1
        else:
            confirmed_town += 1

    return CheckSummary(confirmed_mafia=confirmed_mafia, confirmed_town=confirmed_town)
