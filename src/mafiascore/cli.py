#!/usr/bin/env python
"""Score a Mafia session from a JSON or YAML file.

Usage:
    mafiascore session.json                     # Print a results table per game
    mafiascore session.yaml --rules club.yaml   # Score with a custom rule set
    mafiascore session.json --json              # Print the results as JSON
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mafiascore.exceptions import ScoringError
from mafiascore.models.player import Team
from mafiascore.models.round import RoundResult, SessionResult
from mafiascore.rules.catalog import DEFAULT_RULES, RuleSet
from mafiascore.engine.scorer import RoundScorer
from mafiascore.validation.session import validate_session
from mafiascore.validation.types import ValidationIssue

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_SCORING = 2

TEAM_STYLES = {Team.TOWN: "red", Team.MAFIA: "bold black on white"}


def load_session_file(path: Path) -> object:
    """Load session data from a JSON or YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        # YAML is a superset of JSON
        return yaml.safe_load(f)


def build_issues_table(issues: list[ValidationIssue]) -> Table:
    table = Table(title="Validation errors", show_lines=False)
    table.add_column("Field", style="cyan")
    table.add_column("Problem", style="red")
    for issue in issues:
        table.add_row(issue.path or "<root>", issue.message)
    return table


def build_round_table(number: int, result: RoundResult) -> Table:
    """Render one scored round as a rich table."""
    flags = []
    if result.is_flawless_win:
        flags.append("flawless")
    if result.is_no_loss_win:
        flags.append("no losses")
    if result.tie_break.is_tie_break:
        flags.append("tie-break")
    suffix = f" ({', '.join(flags)})" if flags else ""

    table = Table(title=f"Game {number}: {result.winner.value} wins{suffix}")
    table.add_column("#", justify="right")
    table.add_column("Player")
    table.add_column("Role")
    table.add_column("Out")
    table.add_column("Achievements")
    table.add_column("Points", justify="right")

    for player in result.results:
        achievements = ", ".join(a.label for a in player.achievements)
        if player.confirmed_mafia or player.confirmed_town:
            achievements = ", ".join(filter(None, [
                achievements,
                f"checks {player.confirmed_mafia} mafia / {player.confirmed_town} town",
            ]))
        table.add_row(
            str(player.seat),
            player.name,
            f"[{TEAM_STYLES[player.team]}]{player.role.value}[/]",
            str(player.elimination),
            achievements,
            str(player.points),
        )
    return table


def print_session(console: Console, result: SessionResult) -> None:
    console.print(f"[bold]Session {result.date.isoformat()}[/bold]")
    for number, game in enumerate(result.games, start=1):
        console.print(build_round_table(number, game))
        console.print(f"Total points: {game.total_points}\n")


def run(
    session_path: Path,
    rules_path: Optional[Path] = None,
    as_json: bool = False,
    console: Optional[Console] = None,
) -> int:
    """Validate and score a session file, printing the outcome.

    Returns:
        Process exit code
    """
    console = console or Console()

    rules = DEFAULT_RULES
    if rules_path is not None:
        try:
            rules = RuleSet.from_yaml(rules_path)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            console.print(f"[red]Invalid rules file {rules_path}:[/red]\n{escape(str(e))}")
            return EXIT_INVALID

    try:
        data = load_session_file(session_path)
    except (OSError, yaml.YAMLError) as e:
        console.print(f"[red]Cannot read session file {session_path}:[/red]\n{escape(str(e))}")
        return EXIT_INVALID
    validation = validate_session(data, rules)
    if not validation:
        if as_json:
            console.print_json(json.dumps(validation.to_dict(), ensure_ascii=False))
        else:
            console.print(build_issues_table(validation.errors))
        return EXIT_INVALID

    try:
        result = RoundScorer(rules).score_session(validation.data)
    except ScoringError as e:
        console.print(f"[red]Error:[/red] {e}")
        return EXIT_SCORING

    if as_json:
        console.print_json(result.model_dump_json())
    else:
        print_session(console, result)
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Mafia score - validate and score game sessions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "session",
        type=Path,
        help="Session file (JSON or YAML)"
    )
    parser.add_argument(
        "--rules",
        type=Path,
        default=None,
        help="YAML rule set overriding the default point table"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of tables"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log scoring decisions"
    )

    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    if not args.session.exists():
        print(f"Error: {args.session} does not exist")
        return EXIT_INVALID

    return run(args.session, rules_path=args.rules, as_json=args.json)


if __name__ == "__main__":
    raise SystemExit(main())
