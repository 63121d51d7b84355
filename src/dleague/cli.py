"""Command-line interface for dleague."""

import click

from dleague.logging_config import LEVELS, setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "--log-level",
    type=click.Choice(list(LEVELS), case_sensitive=False),
    default=None,
    help="Logging level (defaults to LOG_LEVEL env var, then WARNING)",
)
def cli(log_level: str):
    """Doubles League Manager - fixtures and standings for a five-player doubles league."""
    setup_logging(log_level)


def _load_config(config: str) -> dict:
    from dleague.config_loader import default_config, load_and_validate_config

    if not config:
        return default_config()
    click.echo(f"[INFO] Loading config from: {config}")
    return load_and_validate_config(config)


def _print_table(title: str, rows, name_attr: str):
    click.echo(f"\n[STATS] {title}:")
    if not rows:
        click.echo("  (no completed matches yet)")
        return
    click.echo(f"  {'#':>2}  {'Name':<24} {'Pts':>4} {'W':>3} {'L':>3} {'MP':>3} {'G+':>4} {'G-':>4} {'Diff':>5}")
    for row in rows:
        click.echo(
            f"  {row.position:>2}  {getattr(row, name_attr):<24} {row.points:>4} {row.wins:>3} "
            f"{row.losses:>3} {row.matches_played:>3} {row.games_won:>4} {row.games_lost:>4} "
            f"{row.game_differential:>+5}"
        )


@cli.command()
@click.option("--roster", required=True, help="Path to roster CSV file (id,name)")
@click.option("--config", required=False, help="Path to config YAML file")
@click.option("--season-length", type=int, required=False, help="Season length in matches (overrides config)")
@click.option("--out", required=False, help="Output CSV path for the schedule")
def generate_fixtures(roster: str, config: str, season_length: int, out: str):
    """Generate a partner-balanced schedule for a five-player roster.

    Example:
        dleague generate-fixtures --roster data/roster.csv --season-length 30
    """
    from dleague.config_loader import ConfigError
    from dleague.fixture_generator import FixtureInvariantError, generate_fixtures as build
    from dleague.io_csv import CSVImportError, export_fixtures_csv, import_roster_csv
    from dleague.validation import ValidationError

    try:
        cfg = _load_config(config)
        length = season_length if season_length is not None else cfg["season_length_matches"]

        click.echo(f"[INFO] Reading roster: {roster}")
        players = import_roster_csv(roster)
        players_by_id = {p.id: p for p in players}

        click.echo(f"[BUILD] Generating {length} fixtures for {len(players)} players...")
        fixtures = build([p.id for p in players], length)
        click.echo(f"[SUCCESS] Each pair partners {length // 5} times")

        for fixture in fixtures:
            team_a = " & ".join(players_by_id[pid].name for pid in fixture.team_a)
            team_b = " & ".join(players_by_id[pid].name for pid in fixture.team_b)
            click.echo(
                f"  {fixture.match_number:>3}. {team_a} vs {team_b} "
                f"(out: {players_by_id[fixture.sit_out].name})"
            )

        if out:
            export_fixtures_csv(fixtures, players_by_id, out)
            click.echo(f"\n[SAVE] Schedule written to {out}")

    except (ConfigError, CSVImportError, ValidationError) as e:
        click.echo(f"[ERROR] {e}", err=True)
        raise click.Abort()
    except FixtureInvariantError as e:
        click.echo(f"[ERROR] Internal scheduling error: {e}", err=True)
        raise click.Abort()


@cli.command()
@click.option("--results", required=True, help="Path to results CSV file")
@click.option("--roster", required=False, help="Path to roster CSV file (for display names)")
@click.option("--config", required=False, help="Path to config YAML file")
@click.option("--out-dir", required=False, help="Output directory for standings CSV exports")
def standings(results: str, roster: str, config: str, out_dir: str):
    """Compute player and partnership standings from completed results.

    Example:
        dleague standings --results data/results.csv --roster data/roster.csv
    """
    from pathlib import Path
    from dleague.config_loader import ConfigError
    from dleague.io_csv import (
        CSVImportError,
        export_standings_csv,
        export_team_standings_csv,
        import_results_csv,
        import_roster_csv,
    )
    from dleague.standings import compute_standings

    try:
        cfg = _load_config(config)

        names = {}
        if roster:
            names = {p.id: p.name for p in import_roster_csv(roster)}

        click.echo(f"[INFO] Reading results: {results}")
        matches = import_results_csv(
            results,
            max_games=cfg["max_games_per_side"],
            allow_ties=cfg["allow_tied_results"],
        )
        click.echo(f"[SUCCESS] Found {len(matches)} completed matches")

        table = compute_standings(
            matches,
            player_names=names,
            points_per_game=cfg["scoring"]["points_per_game"],
            win_bonus=cfg["scoring"]["win_bonus"],
        )

        _print_table("Player Rankings", table.player_rows, "player_name")
        _print_table("Most Effective Pairings", table.team_rows, "team_name")

        if out_dir:
            out_path = Path(out_dir)
            out_path.mkdir(parents=True, exist_ok=True)
            export_standings_csv(table.player_rows, str(out_path / "player_standings.csv"))
            export_team_standings_csv(table.team_rows, str(out_path / "team_standings.csv"))
            click.echo(f"\n[SAVE] Standings written to {out_path}")

    except (ConfigError, CSVImportError) as e:
        click.echo(f"[ERROR] {e}", err=True)
        raise click.Abort()


if __name__ == "__main__":
    cli()
