"""Engine package - winner, classification and point computation."""

from .victory import as_team, count_alive, determine_winner, is_flawless_win, is_no_loss_win
from .tie_break import detect_tie_break, last_vote_day
from .checks import parse_checks, evaluate_checks
from .points import (
    RoundContext,
    award_achievements,
    itemize_points,
    compute_points,
)
from .scorer import RoundScorer, score_round, score_session

__all__ = [
    "as_team",
    "count_alive",
    "determine_winner",
    "is_flawless_win",
    "is_no_loss_win",
    "detect_tie_break",
    "last_vote_day",
    "parse_checks",
    "evaluate_checks",
    "RoundContext",
    "award_achievements",
    "itemize_points",
    "compute_points",
    "RoundScorer",
    "score_round",
    "score_session",
]
