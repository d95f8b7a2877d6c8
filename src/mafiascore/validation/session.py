"""Session validator for submitted game data.

Checks a loosely-typed session (usually a decoded JSON body) and collects
every problem instead of stopping at the first one, so the caller can show
them all at once. Nothing here computes winners or points.
"""

import datetime
import re
from collections import Counter
from typing import Any, Mapping, Optional

from mafiascore.models.player import Achievement, Elimination, Player, Role, Team
from mafiascore.models.round import RoundInput, Session
from mafiascore.rules.catalog import DEFAULT_RULES, RuleSet
from .types import ValidationIssue, ValidationResult


DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
MIN_YEAR = 1900
MAX_YEAR = 2100
MAX_NAME_LENGTH = 255

# Accepted key names, preferred first
GAMES_KEYS = ("games", "rounds")
PLAYERS_KEYS = ("players", "results")
ELIMINATION_KEYS = ("elimination", "death_time", "killed_when")
NAME_KEYS = ("name", "player_name")


def _join(*parts: Any) -> str:
    return ".".join(str(p) for p in parts if p != "")


def _pick(data: Mapping, keys: tuple[str, ...]) -> tuple[Optional[str], Any]:
    """Find the first key present in data, returning (key, value)."""
    for key in keys:
        if key in data:
            return key, data[key]
    return None, None


class SessionValidator:
    """Validates a submitted session against a rule set.

    Checks, in order:
    - date is a real calendar date in YYYY-MM-DD form
    - games is a non-empty list
    - each game has exactly the rule set's player count
    - each player has a name, a valid role, a valid elimination and known
      achievements
    - each game's role distribution matches the rule set
    - a declared winner is a valid team
    - sheriff checks are comma-separated seat numbers
    """

    def __init__(self, rules: RuleSet = DEFAULT_RULES):
        self.rules = rules
        self.issues: list[ValidationIssue] = []

    def validate(self, data: Any) -> ValidationResult:
        """Run full validation on session data."""
        self.issues = []

        if not isinstance(data, Mapping):
            self._add_issue("", "Session must be an object")
            return self._result(None)

        session_date = self._validate_date(data)

        games_key, games = _pick(data, GAMES_KEYS)
        rounds: list[RoundInput] = []
        if games_key is None:
            self._add_issue("games", "games is required")
        elif not isinstance(games, list):
            self._add_issue(games_key, "games must be a list")
        elif not games:
            self._add_issue(games_key, "Session must contain at least one game")
        else:
            for index, game in enumerate(games):
                validated = self.validate_round(game, _join(games_key, index))
                if validated is not None:
                    rounds.append(validated)

        if self.issues:
            return self._result(None)
        return self._result(Session(date=session_date, games=tuple(rounds)))

    def _result(self, session: Optional[Session]) -> ValidationResult:
        if self.issues:
            return ValidationResult(success=False, errors=list(self.issues))
        return ValidationResult(success=True, data=session)

    def _add_issue(self, path: str, message: str) -> None:
        self.issues.append(ValidationIssue(path=path, message=message))

    # =========================================================================
    # Session fields
    # =========================================================================

    def _validate_date(self, data: Mapping) -> Optional[datetime.date]:
        if "date" not in data or data["date"] is None:
            self._add_issue("date", "date is required")
            return None

        value = data["date"]
        if isinstance(value, datetime.datetime):
            value = value.date()
        if isinstance(value, datetime.date):
            if not MIN_YEAR <= value.year <= MAX_YEAR:
                self._add_issue("date", "Invalid date value")
                return None
            return value

        if not isinstance(value, str) or not DATE_PATTERN.match(value):
            self._add_issue("date", "Date must be in YYYY-MM-DD format")
            return None

        year, month, day = (int(part) for part in value.split("-"))
        if not MIN_YEAR <= year <= MAX_YEAR:
            self._add_issue("date", "Invalid date value")
            return None
        try:
            return datetime.date(year, month, day)
        except ValueError:
            self._add_issue("date", "Invalid date value")
            return None

    # =========================================================================
    # Rounds
    # =========================================================================

    def validate_round(self, game: Any, path: str = "") -> Optional[RoundInput]:
        """Validate one round, appending issues. Returns None if invalid."""
        issues_before = len(self.issues)

        if not isinstance(game, Mapping):
            self._add_issue(path, "Game must be an object")
            return None

        players = self._validate_players(game, path)
        winner = self._validate_winner(game, path)
        checks = self._validate_checks(game, path)

        if len(self.issues) > issues_before or players is None:
            return None
        return RoundInput(players=tuple(players), winner=winner, sheriff_checks=checks)

    def _validate_players(self, game: Mapping, path: str) -> Optional[list[Player]]:
        players_key, entries = _pick(game, PLAYERS_KEYS)
        if players_key is None:
            self._add_issue(_join(path, "players"), "players is required")
            return None
        players_path = _join(path, players_key)
        if not isinstance(entries, list):
            self._add_issue(players_path, "players must be a list")
            return None

        expected = self.rules.players_per_round
        if len(entries) != expected:
            self._add_issue(
                players_path,
                f"Each game must have exactly {expected} players, got {len(entries)}",
            )

        players: list[Player] = []
        roles_complete = True
        for index, entry in enumerate(entries):
            player = self._validate_player(entry, index + 1, _join(players_path, index))
            if player is None:
                roles_complete = roles_complete and self._has_valid_role(entry)
                continue
            players.append(player)

        # Distribution is only meaningful once every role is known
        if roles_complete:
            roles = [Role.parse(entry["role"]) for entry in entries]
            self._validate_distribution(roles, players_path)

        if len(players) != len(entries):
            return None
        return players

    def _validate_distribution(self, roles: list[Role], path: str) -> None:
        counts = Counter(roles)
        for role, required in self.rules.role_counts.items():
            actual = counts.get(role, 0)
            if actual != required:
                self._add_issue(
                    path,
                    f"Game must have exactly {required} {role.value}, got {actual}",
                )
        for role in counts:
            if role not in self.rules.role_counts:
                self._add_issue(path, f"Role {role.value} is not allowed in this game")

    @staticmethod
    def _has_valid_role(entry: Any) -> bool:
        if not isinstance(entry, Mapping) or not isinstance(entry.get("role"), str):
            return False
        try:
            Role.parse(entry["role"])
        except ValueError:
            return False
        return True

    # =========================================================================
    # Players
    # =========================================================================

    def _validate_player(self, entry: Any, seat: int, path: str) -> Optional[Player]:
        if not isinstance(entry, Mapping):
            self._add_issue(path, "Player must be an object")
            return None

        issues_before = len(self.issues)
        name = self._validate_name(entry, path)
        player_id = self._validate_id(entry, path)
        role = self._validate_role(entry, path)
        elimination = self._validate_elimination(entry, path)
        achievements = self._validate_achievements(entry, path)

        if len(self.issues) > issues_before:
            return None
        return Player(
            seat=seat,
            id=player_id,
            name=name,
            role=role,
            elimination=elimination,
            achievements=achievements,
        )

    def _validate_name(self, entry: Mapping, path: str) -> Optional[str]:
        key, name = _pick(entry, NAME_KEYS)
        name_path = _join(path, key or "name")
        if not isinstance(name, str) or not name.strip():
            self._add_issue(name_path, "Player name is required")
            return None
        if len(name) > MAX_NAME_LENGTH:
            self._add_issue(name_path, f"Player name must be at most {MAX_NAME_LENGTH} characters")
            return None
        return name.strip()

    def _validate_id(self, entry: Mapping, path: str) -> Optional[int]:
        player_id = entry.get("id")
        if player_id is None:
            return None
        # bool is an int subclass
        if isinstance(player_id, bool) or not isinstance(player_id, int) or player_id < 1:
            self._add_issue(_join(path, "id"), "Player ID must be a positive integer")
            return None
        return player_id

    def _validate_role(self, entry: Mapping, path: str) -> Optional[Role]:
        role = entry.get("role")
        valid = ", ".join(r.value for r in Role)
        if role is None:
            self._add_issue(_join(path, "role"), "role is required")
            return None
        if not isinstance(role, str):
            self._add_issue(_join(path, "role"), f"Role must be one of: {valid}")
            return None
        try:
            return Role.parse(role)
        except ValueError:
            self._add_issue(_join(path, "role"), f"Role must be one of: {valid}")
            return None

    def _validate_elimination(self, entry: Mapping, path: str) -> Optional[Elimination]:
        key, value = _pick(entry, ELIMINATION_KEYS)
        elimination_path = _join(path, key or "elimination")
        if value is None:
            self._add_issue(elimination_path, "elimination is required")
            return None
        if isinstance(value, int) and not isinstance(value, bool) and value == 0:
            value = "0"
        if not isinstance(value, str) or not Elimination.is_valid(value):
            self._add_issue(
                elimination_path,
                'Elimination must be "0" for alive or a day number followed by N or D, like "1D", "2N"',
            )
            return None
        return Elimination.parse(value)

    def _validate_achievements(self, entry: Mapping, path: str) -> tuple[Achievement, ...]:
        achievements = entry.get("achievements")
        if achievements is None:
            return ()
        achievements_path = _join(path, "achievements")
        if not isinstance(achievements, list):
            self._add_issue(achievements_path, "achievements must be a list")
            return ()

        parsed: list[Achievement] = []
        for index, value in enumerate(achievements):
            try:
                if not isinstance(value, str):
                    raise ValueError(value)
                achievement = Achievement.parse(value)
            except ValueError:
                self._add_issue(
                    _join(achievements_path, index),
                    f"Unknown achievement: {value!r}",
                )
                continue
            # Listed twice still counts once
            if achievement not in parsed:
                parsed.append(achievement)
        return tuple(parsed)

    # =========================================================================
    # Round extras
    # =========================================================================

    def _validate_winner(self, game: Mapping, path: str) -> Optional[Team]:
        winner = game.get("winner")
        if winner is None:
            return None
        valid = ", ".join(t.value for t in Team)
        try:
            if not isinstance(winner, str):
                raise ValueError(winner)
            return Team.parse(winner)
        except ValueError:
            self._add_issue(_join(path, "winner"), f"Winner must be one of: {valid}")
            return None

    def _validate_checks(self, game: Mapping, path: str) -> str:
        checks = game.get("sheriff_checks")
        if checks is None:
            return ""
        checks_path = _join(path, "sheriff_checks")
        if isinstance(checks, list):
            checks = ",".join(str(c) for c in checks)
        if not isinstance(checks, str):
            self._add_issue(checks_path, "Sheriff checks must be comma-separated numbers")
            return ""
        if not checks.strip():
            return ""

        parts = [part.strip() for part in checks.split(",")]
        if not all(part.isascii() and part.isdecimal() for part in parts):
            self._add_issue(checks_path, "Sheriff checks must be comma-separated numbers")
            return ""
        seat_count = self.rules.players_per_round
        out_of_range = [p for p in parts if not 1 <= int(p) <= seat_count]
        if out_of_range:
            self._add_issue(
                checks_path,
                f"Sheriff checks must be seat numbers from 1 to {seat_count}, got {', '.join(out_of_range)}",
            )
            return ""
        return ",".join(parts)


def validate_session(data: Any, rules: RuleSet = DEFAULT_RULES) -> ValidationResult:
    """Validate a submitted session.

    Args:
        data: Loosely-typed session, e.g. a decoded JSON request body
        rules: Rule set providing player and role counts

    Returns:
        ValidationResult with the typed Session, or every issue found
    """
    return SessionValidator(rules).validate(data)


def validate_round(
    data: Any,
    rules: RuleSet = DEFAULT_RULES,
    path: str = "",
) -> tuple[Optional[RoundInput], list[ValidationIssue]]:
    """Validate a single round.

    Returns:
        (RoundInput or None, list of issues)
    """
    validator = SessionValidator(rules)
    round_input = validator.validate_round(data, path)
    return round_input, validator.issues
