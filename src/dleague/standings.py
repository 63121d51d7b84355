"""Standings calculator with tie-breaking rules."""

import logging
from typing import Optional, Sequence, Union

from dleague.fixture_generator import pair_key
from dleague.models import MatchResult, MatchSide, Standings, StandingRow, TeamStandingRow

logger = logging.getLogger(__name__)

POINTS_PER_GAME = 1
WIN_BONUS = 1

Row = Union[StandingRow, TeamStandingRow]


def _apply_side(
    row: Row,
    games_won: int,
    games_lost: int,
    side: MatchSide,
    winner: Optional[MatchSide],
    points_per_game: int,
    win_bonus: int,
) -> None:
    """Accrue one side of one match into a player or team row."""
    row.matches_played += 1
    row.games_won += games_won
    row.games_lost += games_lost
    row.game_differential = row.games_won - row.games_lost
    row.points += games_won * points_per_game

    if winner is None:
        # Equal game counts: games and points only
        return

    if winner == side:
        row.wins += 1
        row.points += win_bonus
    else:
        row.losses += 1


def ranking_key(row: Row) -> tuple:
    """Sort key for both tables (best first).

    1. Points (DESC)
    2. Wins (DESC)
    3. Games won (DESC)
    4. Game differential (DESC)
    5. Display name (ASC)
    6. Player id / team key (ASC), so identical names still order totally
    """
    if isinstance(row, TeamStandingRow):
        name, ident = row.team_name, row.team_key
    else:
        name, ident = row.player_name, row.player_id
    return (-row.points, -row.wins, -row.games_won, -row.game_differential, name, ident)


def rank_rows(rows: list) -> list:
    """Sort rows by ranking_key and assign positions (1 = best)."""
    ranked = sorted(rows, key=ranking_key)
    for position, row in enumerate(ranked, start=1):
        row.position = position
    return ranked


def compute_standings(
    matches: Sequence[MatchResult],
    player_names: Optional[dict[str, str]] = None,
    points_per_game: int = POINTS_PER_GAME,
    win_bonus: int = WIN_BONUS,
) -> Standings:
    """Calculate player and partnership standings from completed matches.

    Scoring:
    - +points_per_game for every game won
    - +win_bonus for every match won (strictly more games than the other side)
    - Equal game counts give games and points but no win or loss

    Only completed matches should be passed in; scheduled ones must be filtered
    out by the caller. Nothing is cached: every call recomputes from scratch.

    Args:
        matches: Completed MatchResult objects
        player_names: Optional mapping player_id -> display name
            (ids without a name are displayed as the id)
        points_per_game: Points per game won
        win_bonus: Extra points per match won

    Returns:
        Standings with player_rows and team_rows sorted by position
    """
    names = player_names or {}
    players: dict[str, StandingRow] = {}
    teams: dict[str, TeamStandingRow] = {}

    def player_row(player_id: str) -> StandingRow:
        if player_id not in players:
            players[player_id] = StandingRow(
                player_id=player_id,
                player_name=names.get(player_id, player_id),
            )
        return players[player_id]

    def team_row(ids: tuple[str, ...]) -> TeamStandingRow:
        key = pair_key(*ids)
        if key not in teams:
            members = tuple(sorted(ids))
            teams[key] = TeamStandingRow(
                team_key=key,
                player_ids=members,
                team_name=" & ".join(names.get(pid, pid) for pid in members),
            )
        return teams[key]

    skipped = 0
    for match in matches:
        if not match.team_a_ids and not match.team_b_ids:
            skipped += 1
            continue

        winner = match.winner_side
        sides = (
            (MatchSide.TEAM_A, match.team_a_ids, match.team_a_games, match.team_b_games),
            (MatchSide.TEAM_B, match.team_b_ids, match.team_b_games, match.team_a_games),
        )

        for side, ids, games_won, games_lost in sides:
            for player_id in ids:
                _apply_side(
                    player_row(player_id), games_won, games_lost, side, winner,
                    points_per_game, win_bonus,
                )

            if len(ids) == 2:
                _apply_side(
                    team_row(ids), games_won, games_lost, side, winner,
                    points_per_game, win_bonus,
                )

    if skipped:
        logger.debug("Skipped %d matches without players", skipped)

    logger.debug(
        "Computed standings from %d matches: %d players, %d teams",
        len(matches), len(players), len(teams),
    )

    return Standings(
        player_rows=rank_rows(list(players.values())),
        team_rows=rank_rows(list(teams.values())),
    )
