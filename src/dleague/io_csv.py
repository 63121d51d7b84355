"""CSV import/export utilities."""

import csv
import logging
from pathlib import Path
from typing import Sequence

from dleague.models import DoublesFixture, MatchResult, MatchStatus, Player, StandingRow, TeamStandingRow
from dleague.validation import validate_match_result, validate_match_slots, validate_player_name

logger = logging.getLogger(__name__)

ROSTER_COLUMNS = ("id", "name")
RESULT_PLAYER_COLUMNS = ("team_a_player1", "team_a_player2", "team_b_player1", "team_b_player2")
RESULT_GAME_COLUMNS = ("team_a_games", "team_b_games")
STANDINGS_COLUMNS = [
    "Position", "Points", "Wins", "Losses", "Played", "Games_W", "Games_L", "Diff",
]


class CSVImportError(Exception):
    """Error during CSV import."""
    pass


def _open_reader(csv_path: str, required_cols: Sequence[str]):
    csv_file = Path(csv_path)
    if not csv_file.exists():
        raise CSVImportError(f"CSV file not found: {csv_path}")

    f = open(csv_file, "r", encoding="utf-8", newline="")
    reader = csv.DictReader(f)

    missing = set(required_cols) - set(reader.fieldnames or [])
    if missing:
        f.close()
        raise CSVImportError(f"CSV missing required columns: {sorted(missing)}")

    return f, reader


def import_roster_csv(csv_path: str) -> list[Player]:
    """Import the league roster from CSV file.

    CSV format:
        id,name
        matt,Matt

    Args:
        csv_path: Path to CSV file

    Returns:
        List of Player objects in file order (which fixes the sit-out rotation)

    Raises:
        CSVImportError: If file not found, a row is invalid or an id repeats
    """
    players = []
    seen_ids = set()

    f, reader = _open_reader(csv_path, ROSTER_COLUMNS)
    with f:
        for row_num, row in enumerate(reader, start=2):  # Row 1 is the header
            player_id = (row.get("id") or "").strip()
            if not player_id:
                raise CSVImportError(f"Row {row_num}: Missing required field 'id'")

            name = (row.get("name") or "").strip()
            is_valid, error_msg = validate_player_name(name)
            if not is_valid:
                raise CSVImportError(f"Row {row_num}: {error_msg}")

            if player_id in seen_ids:
                raise CSVImportError(f"Row {row_num}: Duplicate player id '{player_id}'")
            seen_ids.add(player_id)

            players.append(Player(id=player_id, name=name))

    logger.info("Imported %d players from %s", len(players), csv_path)
    return players


def _parse_games(row: dict, column: str, row_num: int) -> int:
    raw = (row.get(column) or "").strip()
    try:
        return int(raw)
    except ValueError:
        raise CSVImportError(f"Row {row_num}: '{column}' must be a number, got '{raw}'")


def import_results_csv(
    csv_path: str,
    max_games: int = 5,
    allow_ties: bool = False,
) -> list[MatchResult]:
    """Import completed match results from CSV file.

    CSV format:
        team_a_player1,team_a_player2,team_b_player1,team_b_player2,team_a_games,team_b_games,status
        joe,jakub,charlie,jon,3,1,completed

    The status column is optional (missing = completed). Rows with any other
    status are scheduled fixtures and are skipped, so only completed matches
    reach the standings engine.

    Args:
        csv_path: Path to CSV file
        max_games: Upper bound on games per side
        allow_ties: Accept equal game counts (no winner credit is given)

    Returns:
        List of MatchResult objects

    Raises:
        CSVImportError: If file not found or a completed row is invalid
    """
    results = []
    skipped_count = 0

    f, reader = _open_reader(csv_path, RESULT_PLAYER_COLUMNS + RESULT_GAME_COLUMNS)
    with f:
        for row_num, row in enumerate(reader, start=2):
            status = (row.get("status") or MatchStatus.COMPLETED.value).strip().lower()
            if status != MatchStatus.COMPLETED.value:
                skipped_count += 1
                continue

            team_a_games = _parse_games(row, "team_a_games", row_num)
            team_b_games = _parse_games(row, "team_b_games", row_num)

            is_valid, error_msg = validate_match_result(
                team_a_games, team_b_games, max_games=max_games, allow_ties=allow_ties
            )
            if not is_valid:
                raise CSVImportError(f"Row {row_num}: {error_msg}")
            if team_a_games == team_b_games:
                logger.warning("Row %d: tied result %d-%d accepted", row_num, team_a_games, team_b_games)

            team_a_ids = tuple((row.get(c) or "").strip() for c in RESULT_PLAYER_COLUMNS[:2])
            team_b_ids = tuple((row.get(c) or "").strip() for c in RESULT_PLAYER_COLUMNS[2:])

            # Short sides are tolerated, repeated players are not
            is_valid, error_msg = validate_match_slots(team_a_ids, team_b_ids, require_full_teams=False)
            if not is_valid:
                raise CSVImportError(f"Row {row_num}: {error_msg}")

            results.append(MatchResult(
                team_a_ids=team_a_ids,
                team_b_ids=team_b_ids,
                team_a_games=team_a_games,
                team_b_games=team_b_games,
            ))

    logger.info("Imported %d completed results from %s", len(results), csv_path)
    if skipped_count > 0:
        logger.info("Skipped %d rows that are not completed", skipped_count)

    return results


def export_fixtures_csv(fixtures: Sequence[DoublesFixture], players_by_id: dict, path: str):
    """Export a generated schedule to CSV.

    Args:
        fixtures: List of DoublesFixture objects
        players_by_id: Dictionary mapping player_id to Player (for names)
        path: Output CSV path
    """
    def name(player_id: str) -> str:
        player = players_by_id.get(player_id)
        return player.name if player else player_id

    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "Match", "Team_A_Player1", "Team_A_Player2", "Team_B_Player1",
            "Team_B_Player2", "Sit_Out", "Team_A", "Team_B", "Sit_Out_Name",
        ])

        for fixture in fixtures:
            writer.writerow([
                fixture.match_number,
                *fixture.team_a,
                *fixture.team_b,
                fixture.sit_out,
                " & ".join(name(pid) for pid in fixture.team_a),
                " & ".join(name(pid) for pid in fixture.team_b),
                name(fixture.sit_out),
            ])


def _stats(row) -> list:
    return [
        row.position or "",
        row.points,
        row.wins,
        row.losses,
        row.matches_played,
        row.games_won,
        row.games_lost,
        row.game_differential,
    ]


def export_standings_csv(rows: Sequence[StandingRow], path: str):
    """Export player standings to CSV.

    Args:
        rows: Ranked StandingRow objects
        path: Output CSV path
    """
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["Player_ID", "Player_Name", *STANDINGS_COLUMNS])
        for row in rows:
            writer.writerow([row.player_id, row.player_name, *_stats(row)])


def export_team_standings_csv(rows: Sequence[TeamStandingRow], path: str):
    """Export partnership standings to CSV.

    Args:
        rows: Ranked TeamStandingRow objects
        path: Output CSV path
    """
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["Team_Key", "Team_Name", *STANDINGS_COLUMNS])
        for row in rows:
            writer.writerow([row.team_key, row.team_name, *_stats(row)])
