"""Partner-balanced fixture generator for a five-player doubles league."""

import logging
from collections import Counter
from typing import Sequence

from dleague.models import DoublesFixture
from dleague.validation import ROSTER_SIZE, validate_roster, validate_season_length

logger = logging.getLogger(__name__)

# Three perfect matchings of four active players [a, b, c, d], as index pairs.
# Order matters: equally scored candidates resolve to the earliest one.
TEAM_SPLITS = (
    ((0, 1), (2, 3)),  # ab vs cd
    ((0, 2), (1, 3)),  # ac vs bd
    ((0, 3), (1, 2)),  # ad vs bc
)


class FixtureInvariantError(Exception):
    """Raised when a generated schedule breaks its own guarantees.

    Distinct from ValidationError: the input was fine, the generator is wrong.
    """

    pass


def pair_key(a: str, b: str) -> str:
    """Canonical key for an unordered pair of player ids.

    Sorted by plain string comparison so the key does not depend on which
    order the pair was recorded in.
    """
    return "|".join(sorted((a, b)))


def candidate_splits(active: Sequence[str]) -> list[tuple[tuple[str, str], tuple[str, str]]]:
    """Enumerate the three ways to split four active players into two teams.

    Args:
        active: Four player ids in roster order

    Returns:
        List of (team_a, team_b) tuples in fixed enumeration order
    """
    if len(active) != 4:
        raise FixtureInvariantError(f"Expected 4 active players, got {len(active)}")

    return [
        ((active[i], active[j]), (active[k], active[m]))
        for (i, j), (k, m) in TEAM_SPLITS
    ]


def partner_counts(fixtures: Sequence[DoublesFixture]) -> Counter:
    """Count how often each unordered pair played on the same team."""
    counts = Counter()
    for fixture in fixtures:
        counts[pair_key(*fixture.team_a)] += 1
        counts[pair_key(*fixture.team_b)] += 1
    return counts


def verify_partner_balance(
    fixtures: Sequence[DoublesFixture],
    player_ids: Sequence[str],
    season_length_matches: int,
) -> None:
    """Check a schedule against the partner-balance guarantees.

    - Every fixture uses the five roster ids exactly once each
    - Every one of the 10 pairs partners exactly season_length / 5 times
    - The schedule has exactly season_length fixtures

    Raises:
        FixtureInvariantError: Naming the offending fixture, pair or count
    """
    roster = set(player_ids)
    for fixture in fixtures:
        if len(set(fixture.player_ids)) != len(fixture.player_ids):
            raise FixtureInvariantError(
                f"Invalid fixture (duplicate player) at match {fixture.match_number}"
            )
        if set(fixture.player_ids) != roster:
            raise FixtureInvariantError(
                f"Invalid fixture (players outside roster) at match {fixture.match_number}"
            )

    expected = season_length_matches // ROSTER_SIZE
    counts = partner_counts(fixtures)
    for i in range(len(player_ids)):
        for j in range(i + 1, len(player_ids)):
            key = pair_key(player_ids[i], player_ids[j])
            if counts[key] != expected:
                raise FixtureInvariantError(
                    f"Partner-balance invariant failed: pair {key} has {counts[key]}, "
                    f"expected {expected}"
                )

    if len(fixtures) != season_length_matches:
        raise FixtureInvariantError(
            f"Expected {season_length_matches} fixtures, generated {len(fixtures)}"
        )


def generate_fixtures(player_ids: Sequence[str], season_length_matches: int) -> list[DoublesFixture]:
    """Generate a partner-balanced doubles schedule for exactly five players.

    The season is split into rounds of five matches; within a round each player
    sits out once, in roster order. For every match the four active players are
    split into the team pairing whose two partnerships have been used least so
    far (earliest candidate on a tie), so every unordered pair of players ends
    up as teammates exactly season_length / 5 times.

    Opponent balance is not optimized.

    Args:
        player_ids: Five distinct player ids (order fixes the sit-out rotation)
        season_length_matches: Positive multiple of 5

    Returns:
        List of DoublesFixture objects, match_number 1..season_length

    Raises:
        ValidationError: If the roster or season length is invalid
        FixtureInvariantError: If the finished schedule is not balanced
    """
    player_ids = list(player_ids)
    validate_roster(player_ids)
    validate_season_length(season_length_matches)

    rounds = season_length_matches // ROSTER_SIZE
    usage = Counter()
    fixtures = []

    match_number = 1
    for round_idx in range(rounds):
        for sit_out in player_ids:
            active = [pid for pid in player_ids if pid != sit_out]

            # Least-used partnerships first; min() keeps the earliest on ties
            team_a, team_b = min(
                candidate_splits(active),
                key=lambda split: usage[pair_key(*split[0])] + usage[pair_key(*split[1])],
            )

            fixture = DoublesFixture(
                match_number=match_number,
                team_a=team_a,
                team_b=team_b,
                sit_out=sit_out,
            )
            if len(set(fixture.player_ids)) != ROSTER_SIZE:
                raise FixtureInvariantError(
                    f"Invalid fixture (duplicate player) at match {match_number}"
                )

            fixtures.append(fixture)
            usage[pair_key(*team_a)] += 1
            usage[pair_key(*team_b)] += 1
            match_number += 1

        logger.debug("Round %d/%d scheduled (%d fixtures)", round_idx + 1, rounds, len(fixtures))

    verify_partner_balance(fixtures, player_ids, season_length_matches)
    logger.info(
        "Generated %d fixtures, each pair partnered %d times", len(fixtures), rounds
    )
    return fixtures
