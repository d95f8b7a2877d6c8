"""RoundScorer - single entry point for scoring validated rounds."""

import logging
from typing import Any, Optional, Sequence, Union

from mafiascore.exceptions import SessionValidationError
from mafiascore.models.player import Player, Role, Team
from mafiascore.models.round import (
    CheckSummary,
    PlayerResult,
    RoundInput,
    RoundResult,
    Session,
    SessionResult,
)
from mafiascore.rules.catalog import DEFAULT_RULES, RuleSet
from mafiascore.validation.session import validate_session
from .checks import evaluate_checks, parse_checks
from .points import RoundContext, award_achievements, itemize_points, total
from .tie_break import detect_tie_break
from .victory import as_team, determine_winner, is_flawless_win, is_no_loss_win

logger = logging.getLogger(__name__)


class RoundScorer:
    """Scores rounds under one rule set.

    The scorer holds no state besides its rules, so one instance can be
    shared freely between threads.
    """

    def __init__(self, rules: RuleSet = DEFAULT_RULES):
        self.rules = rules

    def score_round(
        self,
        players: Sequence[Player],
        checks: Optional[str] = None,
        declared_winner: Optional[Union[Team, str]] = None,
    ) -> RoundResult:
        """Score one round.

        Order: winner, flawless/no-loss, tie-break, sheriff checks,
        achievements, points.

        Args:
            players: Validated players in seat order
            checks: Optional sheriff checks, e.g. "7,8,9"
            declared_winner: Winner claimed by the caller, compared with the
                derived one and otherwise ignored

        Raises:
            GameNotFinishedError: If the round has no winner yet.
            InvalidTeamError: If declared_winner names no team.
        """
        rules = self.rules
        if declared_winner is not None:
            declared_winner = as_team(declared_winner)
        winner = determine_winner(players, rules)
        if declared_winner is not None and declared_winner != winner:
            logger.warning(
                "Declared winner %s disagrees with derived winner %s; using %s",
                declared_winner.value, winner.value, winner.value,
            )

        flawless = is_flawless_win(players, winner, rules)
        no_loss = is_no_loss_win(players, winner, rules)
        tie_break = detect_tie_break(players, rules)
        summary = self._evaluate_sheriff_checks(players, checks)

        context = RoundContext(
            winner=winner,
            is_flawless_win=flawless,
            is_no_loss_win=no_loss,
            tie_break=tie_break,
            checks=summary,
        )
        logger.debug(
            "Round classified: winner=%s flawless=%s no_loss=%s tie_break=%s",
            winner.value, flawless, no_loss, tie_break.is_tie_break,
        )

        results = tuple(self._score_player(player, context) for player in players)
        return RoundResult(
            winner=winner,
            is_flawless_win=flawless,
            is_no_loss_win=no_loss,
            tie_break=tie_break,
            results=results,
        )

    def _evaluate_sheriff_checks(
        self,
        players: Sequence[Player],
        checks: Optional[str],
    ) -> CheckSummary:
        seats = parse_checks(checks)
        if not seats:
            return CheckSummary()
        sheriff = next((p for p in players if p.role == Role.SHERIFF), None)
        if sheriff is None:
            return CheckSummary()
        return evaluate_checks(sheriff, seats, players, self.rules)

    def _score_player(self, player: Player, context: RoundContext) -> PlayerResult:
        achievements = award_achievements(player, context, self.rules)
        lines = itemize_points(player, context, self.rules)

        is_sheriff = player.role == Role.SHERIFF
        return PlayerResult(
            seat=player.seat,
            id=player.id,
            name=player.name,
            role=player.role,
            team=self.rules.team_of(player.role),
            elimination=player.elimination,
            achievements=achievements,
            confirmed_mafia=context.checks.confirmed_mafia if is_sheriff else 0,
            confirmed_town=context.checks.confirmed_town if is_sheriff else 0,
            breakdown=tuple(lines),
            points=total(lines),
        )

    def score_game(self, game: RoundInput) -> RoundResult:
        """Score a validated round with its own checks and declared winner."""
        return self.score_round(
            game.players,
            checks=game.sheriff_checks,
            declared_winner=game.winner,
        )

    def score_session(self, session: Union[Session, Any]) -> SessionResult:
        """Score every round of a session.

        Args:
            session: A validated Session, or raw session data to validate first

        Raises:
            SessionValidationError: If raw data fails validation.
            GameNotFinishedError: If any round has no winner yet.
        """
        if not isinstance(session, Session):
            validation = validate_session(session, self.rules)
            if not validation:
                raise SessionValidationError(validation.errors)
            session = validation.data

        games = tuple(self.score_game(game) for game in session.games)
        logger.debug("Scored %d game(s) for %s", len(games), session.date.isoformat())
        return SessionResult(date=session.date, games=games)


def score_round(
    players: Sequence[Player],
    checks: Optional[str] = None,
    rules: RuleSet = DEFAULT_RULES,
    declared_winner: Optional[Union[Team, str]] = None,
) -> RoundResult:
    """Score one validated round. See RoundScorer.score_round."""
    return RoundScorer(rules).score_round(players, checks, declared_winner)


def score_session(session: Union[Session, Any], rules: RuleSet = DEFAULT_RULES) -> SessionResult:
    """Score a session. See RoundScorer.score_session."""
    return RoundScorer(rules).score_session(session)
