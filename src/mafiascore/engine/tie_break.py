"""Tie-break detection.

A round ends in a tie-break when the last day vote was a forced vote among
a fixed number of players (three by default): everyone still alive plus
everyone who left the table on the day of that vote.
"""

from typing import Sequence

from mafiascore.models.player import Player
from mafiascore.models.round import TieBreak
from mafiascore.rules.catalog import DEFAULT_RULES, RuleSet


def last_vote_day(players: Sequence[Player]) -> int:
    """Get the latest day on which someone was voted out (0 if nobody was)."""
    return max(
        (p.elimination.day for p in players if p.elimination.is_day_vote),
        default=0,
    )


def detect_tie_break(players: Sequence[Player], rules: RuleSet = DEFAULT_RULES) -> TieBreak:
    """Detect whether the round ended in a tie-break vote.

    Args:
        players: All players of the round
        rules: Rule set providing the tie-break size

    Returns:
        TieBreak with the participants' seats when it is a tie-break
    """
    day = last_vote_day(players)
    if day == 0:
        return TieBreak()

    participants = [
        p.seat
        for p in players
        if p.is_alive or p.elimination.day == day
    ]
    if len(participants) != rules.tie_break_size:
        return TieBreak()
    return TieBreak(is_tie_break=True, participants=tuple(sorted(participants)))
