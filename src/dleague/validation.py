"""Validation rules for league input.

Roster and season-length checks guard the fixture generator. The match
checks mirror what the league applies before it records a result: the
standings engine itself accepts ties and short sides.
"""

from collections import Counter
from typing import Optional, Sequence

from dleague.models import MatchSide

ROSTER_SIZE = 5
MAX_NAME_LENGTH = 100


class ValidationError(Exception):
    """Raised when caller input is invalid."""

    pass


def validate_roster(player_ids: Sequence[str]) -> None:
    """Check that the roster holds exactly five distinct ids.

    Raises:
        ValidationError: If the roster size is wrong or an id repeats
    """
    if len(player_ids) != ROSTER_SIZE:
        raise ValidationError(
            f"Expected {ROSTER_SIZE} distinct players, got {len(player_ids)}"
        )

    if len(set(player_ids)) != len(player_ids):
        duplicates = sorted(pid for pid, count in Counter(player_ids).items() if count > 1)
        raise ValidationError(f"Expected {ROSTER_SIZE} distinct players, duplicated: {duplicates}")


def validate_season_length(season_length_matches: int) -> None:
    """Check that the season splits into whole rounds of five matches.

    Raises:
        ValidationError: If the length is not a positive multiple of 5
    """
    if isinstance(season_length_matches, bool) or not isinstance(season_length_matches, int):
        raise ValidationError(
            f"Season length must be an integer, got {season_length_matches!r}"
        )

    if season_length_matches <= 0 or season_length_matches % ROSTER_SIZE != 0:
        raise ValidationError(
            f"Season length must be a positive multiple of {ROSTER_SIZE}, "
            f"got {season_length_matches}"
        )


def validate_match_result(
    team_a_games: int,
    team_b_games: int,
    winner_side: Optional[MatchSide] = None,
    max_games: int = 5,
    allow_ties: bool = False,
) -> tuple[bool, str]:
    """Validate a recorded match score.

    Rules:
    - Game counts are between 0 and max_games
    - Games cannot tie (there must be a winner) unless allow_ties is set
    - A declared winner must have more games than the other side

    Args:
        team_a_games: Games won by team A
        team_b_games: Games won by team B
        winner_side: Winner as declared by the caller (None = derive from counts)
        max_games: Upper bound on games per side
        allow_ties: Accept equal counts (still bounded by 0..max_games)

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_match_result(3, 1)
        (True, '')
        >>> validate_match_result(2, 2)
        (False, 'Games cannot tie')
        >>> validate_match_result(1, 3, MatchSide.TEAM_A)
        (False, 'Team A must have more games than Team B')
    """
    if team_a_games < 0 or team_b_games < 0:
        return False, "Game counts cannot be negative"

    if team_a_games > max_games or team_b_games > max_games:
        return False, f"Game counts cannot exceed {max_games}"

    if team_a_games == team_b_games:
        if allow_ties:
            return True, ""
        return False, "Games cannot tie"

    if winner_side == MatchSide.TEAM_A and team_a_games <= team_b_games:
        return False, "Team A must have more games than Team B"

    if winner_side == MatchSide.TEAM_B and team_b_games <= team_a_games:
        return False, "Team B must have more games than Team A"

    return True, ""


def validate_match_slots(
    team_a_ids: Sequence[str],
    team_b_ids: Sequence[str],
    sit_out_id: Optional[str] = None,
    require_full_teams: bool = True,
) -> tuple[bool, str]:
    """Validate the player slots of a doubles match.

    Args:
        team_a_ids: Players on team A
        team_b_ids: Players on team B
        sit_out_id: Player sitting out (optional)
        require_full_teams: Require two players per team; when False, short
            sides are allowed and only uniqueness of the filled slots is checked

    Returns:
        Tuple of (is_valid, error_message)
    """
    if require_full_teams:
        for label, team in (("Team A", team_a_ids), ("Team B", team_b_ids)):
            if len(team) != 2 or not all(team):
                return False, f"{label}: select two players"

    slots = [pid for pid in (*team_a_ids, *team_b_ids) if pid]
    if sit_out_id:
        slots.append(sit_out_id)

    if len(set(slots)) != len(slots):
        return False, "Players must be unique across all slots"

    return True, ""


def validate_player_name(name: str) -> tuple[bool, str]:
    """Validate a roster display name."""
    cleaned = (name or "").strip()
    if not cleaned:
        return False, "Name is required"
    if len(cleaned) > MAX_NAME_LENGTH:
        return False, f"Name cannot exceed {MAX_NAME_LENGTH} characters"
    return True, ""
