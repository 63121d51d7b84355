"""Tests for league validation rules."""

import pytest

from dleague.models import MatchSide
from dleague.validation import (
    ValidationError,
    validate_match_result,
    validate_match_slots,
    validate_player_name,
    validate_roster,
    validate_season_length,
)


class TestValidateRoster:
    """Test cases for validate_roster function."""

    def test_valid_roster(self):
        validate_roster(["a", "b", "c", "d", "e"])

    def test_too_few_and_too_many(self):
        with pytest.raises(ValidationError, match="got 4"):
            validate_roster(["a", "b", "c", "d"])
        with pytest.raises(ValidationError, match="got 6"):
            validate_roster(["a", "b", "c", "d", "e", "f"])

    def test_duplicates(self):
        with pytest.raises(ValidationError, match=r"duplicated: \['b'\]"):
            validate_roster(["a", "b", "b", "d", "e"])

    def test_duplicates_listed_once_sorted(self):
        with pytest.raises(ValidationError, match=r"duplicated: \['a', 'c'\]"):
            validate_roster(["c", "a", "c", "a", "a"])


class TestValidateSeasonLength:
    """Test cases for validate_season_length function."""

    @pytest.mark.parametrize("length", [5, 10, 30, 45])
    def test_valid(self, length):
        validate_season_length(length)

    @pytest.mark.parametrize("length", [0, -5, 7, 12])
    def test_invalid(self, length):
        with pytest.raises(ValidationError, match="positive multiple of 5"):
            validate_season_length(length)

    def test_not_an_integer(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            validate_season_length(False)


class TestValidateMatchResult:
    """Test cases for validate_match_result function."""

    def test_valid_scores(self):
        assert validate_match_result(3, 1) == (True, "")
        assert validate_match_result(0, 5) == (True, "")
        assert validate_match_result(3, 1, MatchSide.TEAM_A) == (True, "")
        assert validate_match_result(1, 3, MatchSide.TEAM_B) == (True, "")

    def test_tie_rejected(self):
        is_valid, msg = validate_match_result(2, 2)
        assert is_valid is False
        assert "cannot tie" in msg

    def test_tie_allowed_within_bounds(self):
        assert validate_match_result(2, 2, allow_ties=True) == (True, "")
        assert validate_match_result(0, 0, allow_ties=True) == (True, "")

    def test_tie_allowed_keeps_bounds(self):
        assert validate_match_result(-3, -3, allow_ties=True) == (False, "Game counts cannot be negative")
        assert validate_match_result(99, 99, allow_ties=True) == (False, "Game counts cannot exceed 5")

    def test_negative_rejected(self):
        is_valid, msg = validate_match_result(-1, 3)
        assert is_valid is False
        assert "negative" in msg

    def test_above_max_rejected(self):
        is_valid, msg = validate_match_result(6, 2)
        assert is_valid is False
        assert "exceed 5" in msg

        assert validate_match_result(6, 2, max_games=7) == (True, "")

    def test_winner_inconsistent_with_games(self):
        is_valid, msg = validate_match_result(1, 3, MatchSide.TEAM_A)
        assert is_valid is False
        assert msg == "Team A must have more games than Team B"

        is_valid, msg = validate_match_result(3, 1, MatchSide.TEAM_B)
        assert is_valid is False
        assert msg == "Team B must have more games than Team A"


class TestValidateMatchSlots:
    """Test cases for validate_match_slots function."""

    def test_valid_slots(self):
        assert validate_match_slots(["a", "b"], ["c", "d"], "e") == (True, "")
        assert validate_match_slots(["a", "b"], ["c", "d"]) == (True, "")

    def test_team_needs_two_players(self):
        is_valid, msg = validate_match_slots(["a"], ["c", "d"])
        assert is_valid is False
        assert msg == "Team A: select two players"

        is_valid, msg = validate_match_slots(["a", "b"], ["c", ""])
        assert is_valid is False
        assert msg == "Team B: select two players"

    def test_duplicate_across_slots(self):
        assert validate_match_slots(["a", "b"], ["b", "d"])[0] is False
        is_valid, msg = validate_match_slots(["a", "b"], ["c", "d"], "a")
        assert is_valid is False
        assert "unique" in msg

    def test_short_sides_uniqueness_only(self):
        """Without full teams, short sides pass but repeats still fail."""
        assert validate_match_slots(["a"], ["c", "d"], require_full_teams=False) == (True, "")
        assert validate_match_slots(["a", ""], ["c"], require_full_teams=False) == (True, "")
        is_valid, msg = validate_match_slots(["a", "b"], ["a", "c"], require_full_teams=False)
        assert is_valid is False
        assert msg == "Players must be unique across all slots"


def test_validate_player_name():
    assert validate_player_name("Matt") == (True, "")
    assert validate_player_name("   ") == (False, "Name is required")
    assert validate_player_name("x" * 101)[0] is False
