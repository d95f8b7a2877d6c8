"""Tests for achievement attachment and point computation."""

import pytest

from mafiascore.engine import RoundContext, award_achievements, compute_points, itemize_points
from mafiascore.models import Achievement, Elimination, Player, Role, Team
from mafiascore.models.round import CheckSummary, PlayerResult, TieBreak
from mafiascore.rules import RuleSet


def create_test_player(
    role: Role,
    elimination: str = "0",
    seat: int = 1,
    achievements: tuple = (),
) -> Player:
    """Helper to create a test player."""
    return Player(
        seat=seat,
        name=f"Player{seat}",
        role=role,
        elimination=Elimination.parse(elimination),
        achievements=achievements,
    )


TOWN_WIN = RoundContext(winner=Team.TOWN)
MAFIA_WIN = RoundContext(winner=Team.MAFIA)


class TestBasePoints:
    """Tests for win/loss base points and role stakes."""

    @pytest.mark.parametrize("role,context,expected", [
        (Role.CIVILIAN, TOWN_WIN, 4),
        (Role.CIVILIAN, MAFIA_WIN, 0),
        (Role.MAFIA, MAFIA_WIN, 4),
        (Role.MAFIA, TOWN_WIN, 0),
    ])
    def test_ordinary_roles(self, role, context, expected):
        assert compute_points(create_test_player(role, "1N"), context) == expected

    def test_sheriff_win_alive(self):
        """Test win + role premium + survival."""
        assert compute_points(create_test_player(Role.SHERIFF, "0"), TOWN_WIN) == 9

    def test_sheriff_win_killed_at_night(self):
        assert compute_points(create_test_player(Role.SHERIFF, "2N"), TOWN_WIN) == 7

    def test_sheriff_loss(self):
        assert compute_points(create_test_player(Role.SHERIFF, "3N"), MAFIA_WIN) == -3

    def test_don_win_alive(self):
        assert compute_points(create_test_player(Role.DON, "0"), MAFIA_WIN) == 8

    def test_don_win_voted_out(self):
        assert compute_points(create_test_player(Role.DON, "2D"), MAFIA_WIN) == 7

    def test_don_loss(self):
        assert compute_points(create_test_player(Role.DON, "3D"), TOWN_WIN) == -3

    def test_survival_needs_a_win(self):
        assert compute_points(create_test_player(Role.DON, "0"), TOWN_WIN) == -3


class TestEarlyExit:
    """Tests for the sheriff's early exit penalty."""

    @pytest.mark.parametrize("elimination,expected", [
        ("1D", -4),
        ("2D", -4),
        ("3D", -3),
        ("1N", -3),
    ])
    def test_sheriff_loss(self, elimination, expected):
        player = create_test_player(Role.SHERIFF, elimination)
        assert compute_points(player, MAFIA_WIN) == expected

    def test_applies_on_a_win_too(self):
        player = create_test_player(Role.SHERIFF, "1D")
        assert compute_points(player, TOWN_WIN) == 4 + 3 - 1

    def test_only_for_listed_roles(self):
        assert compute_points(create_test_player(Role.DON, "1D"), TOWN_WIN) == -3
        assert compute_points(create_test_player(Role.CIVILIAN, "1D"), TOWN_WIN) == 4


class TestCheckBonus:
    """Tests for the sheriff's stepped check bonus."""

    def test_three_confirmed_mafia(self):
        context = RoundContext(winner=Team.TOWN, checks=CheckSummary(confirmed_mafia=3))
        player = create_test_player(Role.SHERIFF, "0")

        assert compute_points(player, context) == 9 + 3
        labels = [line.label for line in itemize_points(player, context)]
        assert "3 confirmed mafia checks" in labels

    def test_two_confirmed_mafia(self):
        context = RoundContext(winner=Team.TOWN, checks=CheckSummary(confirmed_mafia=2, confirmed_town=1))
        assert compute_points(create_test_player(Role.SHERIFF, "0"), context) == 9

    def test_applies_on_a_loss(self):
        context = RoundContext(winner=Team.MAFIA, checks=CheckSummary(confirmed_mafia=3))
        assert compute_points(create_test_player(Role.SHERIFF, "4N"), context) == 0

    def test_only_for_sheriff(self):
        context = RoundContext(winner=Team.TOWN, checks=CheckSummary(confirmed_mafia=3))
        assert compute_points(create_test_player(Role.CIVILIAN, "0"), context) == 4


class TestAchievementPoints:
    """Tests for caller-supplied achievements."""

    @pytest.mark.parametrize("achievement,expected", [
        (Achievement.FIRST_BLOOD, 5),
        (Achievement.BEST_MOVE, 5),
        (Achievement.SHERIFF_FIND, 5),
        (Achievement.FIRST_OUT, 3),
        (Achievement.OWN_GOAL, 2),
        (Achievement.DISQUALIFICATION, 0),
    ])
    def test_single_achievement(self, achievement, expected):
        player = create_test_player(Role.CIVILIAN, "1N", achievements=(achievement,))
        assert compute_points(player, TOWN_WIN) == expected

    def test_repeated_achievement_counts_once(self):
        player = create_test_player(
            Role.CIVILIAN, "1N",
            achievements=(Achievement.BEST_MOVE, Achievement.BEST_MOVE),
        )
        assert compute_points(player, TOWN_WIN) == 5

    def test_disqualified_loser_goes_negative(self):
        player = create_test_player(Role.MAFIA, "2D", achievements=(Achievement.DISQUALIFICATION,))
        assert compute_points(player, TOWN_WIN) == -4

    def test_custom_point_table(self):
        rules = RuleSet(win_points=3, achievement_points={Achievement.BEST_MOVE: 2})
        player = create_test_player(Role.CIVILIAN, "0", achievements=(Achievement.BEST_MOVE,))
        assert compute_points(player, TOWN_WIN, rules) == 5


class TestDerivedAchievementPoints:
    """Tests for derived achievements counted by compute_points itself."""

    def test_flawless_win_attached(self):
        context = RoundContext(winner=Team.TOWN, is_flawless_win=True)
        player = create_test_player(Role.CIVILIAN, "0", seat=3)

        assert compute_points(player, context) == 5
        labels = [line.label for line in itemize_points(player, context)]
        assert labels == ["Win", "Flawless win"]

    def test_tie_break_win_attached(self):
        context = RoundContext(
            winner=Team.TOWN,
            tie_break=TieBreak(is_tie_break=True, participants=(6, 7, 10)),
        )
        assert compute_points(create_test_player(Role.CIVILIAN, "0", seat=6), context) == 6

    def test_no_loss_win_attached(self):
        context = RoundContext(winner=Team.MAFIA, is_no_loss_win=True)
        assert compute_points(create_test_player(Role.DON, "0", seat=10), context) == 9

    def test_unearned_flawless_not_counted(self):
        player = create_test_player(Role.CIVILIAN, "0", achievements=(Achievement.FLAWLESS_WIN,))
        assert compute_points(player, TOWN_WIN) == 4

    def test_scored_result_used_as_is(self):
        """Test a PlayerResult keeps the achievements it was scored with."""
        player = PlayerResult(
            seat=3,
            name="Player3",
            role=Role.CIVILIAN,
            team=Team.TOWN,
            elimination=Elimination.parse("0"),
            achievements=(Achievement.FLAWLESS_WIN,),
        )
        assert compute_points(player, TOWN_WIN) == 5


class TestAwardAchievements:
    """Tests for derived achievements."""

    def test_flawless_for_every_town_player(self):
        context = RoundContext(winner=Team.TOWN, is_flawless_win=True)
        for role, elimination in ((Role.CIVILIAN, "0"), (Role.CIVILIAN, "1N"), (Role.SHERIFF, "2N")):
            awarded = award_achievements(create_test_player(role, elimination), context)
            assert awarded == (Achievement.FLAWLESS_WIN,)
        assert award_achievements(create_test_player(Role.MAFIA, "1D"), context) == ()

    def test_no_loss_only_for_don(self):
        context = RoundContext(winner=Team.MAFIA, is_no_loss_win=True)
        assert award_achievements(create_test_player(Role.DON), context) == (Achievement.NO_LOSS_WIN,)
        assert award_achievements(create_test_player(Role.MAFIA), context) == ()

    def test_tie_break_only_for_winning_participants(self):
        context = RoundContext(
            winner=Team.TOWN,
            tie_break=TieBreak(is_tie_break=True, participants=(6, 7, 10)),
        )
        civilian = create_test_player(Role.CIVILIAN, "0", seat=6)
        don = create_test_player(Role.DON, "5D", seat=10)
        bystander = create_test_player(Role.CIVILIAN, "2N", seat=1)

        assert award_achievements(civilian, context) == (Achievement.TIE_BREAK_WIN,)
        assert award_achievements(don, context) == ()
        assert award_achievements(bystander, context) == ()

    def test_unearned_derived_achievements_dropped(self):
        player = create_test_player(
            Role.CIVILIAN,
            achievements=(Achievement.FLAWLESS_WIN, Achievement.TIE_BREAK_WIN, Achievement.BEST_MOVE),
        )
        assert award_achievements(player, TOWN_WIN) == (Achievement.BEST_MOVE,)

    def test_declaration_order(self):
        context = RoundContext(winner=Team.TOWN, is_flawless_win=True)
        player = create_test_player(Role.CIVILIAN, achievements=(Achievement.OWN_GOAL, Achievement.FIRST_BLOOD))
        assert award_achievements(player, context) == (
            Achievement.FLAWLESS_WIN,
            Achievement.FIRST_BLOOD,
            Achievement.OWN_GOAL,
        )


class TestItemizePoints:
    """Tests for the point breakdown."""

    def test_breakdown_sums_to_total(self):
        context = RoundContext(
            winner=Team.TOWN,
            is_flawless_win=True,
            checks=CheckSummary(confirmed_mafia=3),
        )
        player = create_test_player(
            Role.SHERIFF, "0",
            achievements=(Achievement.FLAWLESS_WIN, Achievement.SHERIFF_FIND),
        )

        lines = itemize_points(player, context)

        assert [line.label for line in lines] == [
            "Win",
            "Flawless win",
            "Sheriff find",
            "Sheriff win",
            "Never left the table",
            "3 confirmed mafia checks",
        ]
        assert sum(line.points for line in lines) == compute_points(player, context) == 14

    def test_loss_line(self):
        lines = itemize_points(create_test_player(Role.SHERIFF, "1D"), MAFIA_WIN)
        assert [(line.label, line.points) for line in lines] == [
            ("Loss", 0),
            ("Sheriff loss", -3),
            ("Voted out on day 1", -1),
        ]
