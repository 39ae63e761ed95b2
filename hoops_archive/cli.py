"""CLI entrypoint using Typer.

This module defines the command-line interface for the archive. Commands are
organized into subcommand groups for data maintenance, records, players,
seasons, game box scores, admin export and the static site.

Example:
    $ hoops-archive --help
    $ hoops-archive --program girls records season --stat PPG
    $ hoops-archive admin boxscore box.csv --date 2025-12-12 --season 2025
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, NoReturn

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from hoops_archive import __version__
from hoops_archive.config import get_settings
from hoops_archive.logging import setup_logging
from hoops_archive.types import (
    STAT_ABBREVIATIONS,
    ArchiveError,
    GameType,
    LocationType,
    Program,
)

if TYPE_CHECKING:
    from hoops_archive.data.loader import ArchiveData

# Initialize console for rich output
console = Console()

# Create main app
app = typer.Typer(
    name="hoops-archive",
    help="Basketball program records and archive CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Create subcommand groups
data_app = typer.Typer(
    name="data",
    help="Data file status, validation and migrations",
    no_args_is_help=True,
)
records_app = typer.Typer(
    name="records",
    help="Season, single-game, career and team records",
    no_args_is_help=True,
)
player_app = typer.Typer(
    name="player",
    help="Player pages",
    no_args_is_help=True,
)
season_app = typer.Typer(
    name="season",
    help="Season pages",
    no_args_is_help=True,
)
game_app = typer.Typer(
    name="game",
    help="Game box scores",
    no_args_is_help=True,
)
admin_app = typer.Typer(
    name="admin",
    help="Box-score and game JSON export for manual entry",
    no_args_is_help=True,
)
site_app = typer.Typer(
    name="site",
    help="Static records site",
    no_args_is_help=True,
)

# Register subcommand groups
app.add_typer(data_app, name="data")
app.add_typer(records_app, name="records")
app.add_typer(player_app, name="player")
app.add_typer(season_app, name="season")
app.add_typer(game_app, name="game")
app.add_typer(admin_app, name="admin")
app.add_typer(site_app, name="site")

# Global overrides set by the main callback
_state: dict[str, Any] = {"program": None, "data_dir": None}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]hoops-archive[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-V",
            help="Enable verbose output",
        ),
    ] = False,
    program: Annotated[
        str | None,
        typer.Option(
            "--program",
            "-p",
            help="Program to read (boys or girls); defaults to HOOPS_PROGRAM",
        ),
    ] = None,
    data_dir: Annotated[
        Path | None,
        typer.Option(
            "--data-dir",
            help="Root data directory; defaults to HOOPS_DATA_DIR",
        ),
    ] = None,
) -> None:
    """Basketball program records and archive CLI.

    Reads the program's static JSON files and produces records tables,
    validation reports, data migrations and the static records site.
    """
    settings = get_settings()
    if program is not None and program not in {p.value for p in Program}:
        console.print(f"[red]Error: Unknown program {program!r} (use boys or girls)[/red]")
        raise typer.Exit(1)
    _state["program"] = program
    _state["data_dir"] = data_dir

    log_level = "DEBUG" if verbose else settings.log_level
    setup_logging(
        level=log_level,
        log_dir=settings.log_dir_obj,
        program=program or settings.program,
    )


# =============================================================================
# Helpers
# =============================================================================


def _program() -> str:
    return _state["program"] or get_settings().program


def _program_dir() -> Path:
    settings = get_settings()
    data_dir = _state["data_dir"] or settings.data_dir_obj
    return Path(data_dir) / _program() / settings.sport


def _load() -> ArchiveData:
    """Load the selected program, exiting with a message on failure."""
    from hoops_archive.data.loader import ArchiveLoader

    settings = get_settings()
    loader = ArchiveLoader(
        _state["data_dir"] or settings.data_dir_obj,
        _program(),
        settings.sport,
    )
    try:
        return loader.load()
    except ArchiveError as e:
        _fail(str(e))


def _reports(archive: ArchiveData) -> Any:
    from hoops_archive.output.reports import ReportGenerator

    settings = get_settings()
    return ReportGenerator(
        archive,
        leaderboard_size=settings.leaderboard_size,
        min_games=settings.min_games_qualifier,
    )


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def _write_csv(rows: list[dict[str, Any]], path: Path) -> None:
    from hoops_archive.output.reports import to_frame

    frame = to_frame(rows)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(path, index=False)
    except OSError as e:
        _fail(f"Cannot write {path}: {e}")
    console.print(f"[green]Wrote {len(frame)} rows to {path}[/green]")


def _leaderboard_table(section: dict[str, Any], show_game: bool = False) -> Table:
    title = section["label"]
    if section.get("qualifier_text"):
        title += f" [dim]({section['qualifier_text']})[/dim]"
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Player", style="cyan")
    if show_game:
        table.add_column("Opponent")
        table.add_column("Date")
    else:
        table.add_column("Season")
        table.add_column("GP", justify="right")
    table.add_column(section["abbr"], justify="right", style="bold")

    for rank, entry in enumerate(section["entries"], start=1):
        name = entry["player_name"] or "—"
        if show_game:
            cells = [entry["opponent"] or "—", entry["game_date"] or "—"]
        else:
            games = entry["games_played"]
            cells = [entry["season_label"] or "—", "—" if games is None else str(games)]
        table.add_row(str(rank), name, *cells, entry["display"])
    return table


# =============================================================================
# Data Commands
# =============================================================================


@data_app.command("status")
def data_status() -> None:
    """Show resource files, row counts and seasons present."""
    from hoops_archive.data.loader import OPTIONAL_RESOURCES, REQUIRED_RESOURCES

    program_dir = _program_dir()
    archive = _load()
    counts = {
        "games": len(archive.games),
        "playergamestats": len(archive.rows),
        "players": len(archive.players),
        "seasons": len(archive.seasons),
        "seasonrosters": len(archive.rosters),
        "adjustments": len(archive.adjustments),
    }

    table = Table(title=f"{archive.program.title()} Data Status")
    table.add_column("Resource", style="cyan")
    table.add_column("Required")
    table.add_column("Rows", justify="right")
    table.add_column("Present", justify="center")

    for name in (*REQUIRED_RESOURCES, *OPTIONAL_RESOURCES):
        present = (program_dir / f"{name}.json").is_file()
        table.add_row(
            f"{name}.json",
            "yes" if name in REQUIRED_RESOURCES else "no",
            str(counts[name]),
            "[green]yes[/green]" if present else "[yellow]no[/yellow]",
        )
    console.print(table)

    seasons = archive.seasons_present()
    if seasons:
        labels = ", ".join(archive.season_label(s) for s in seasons)
        console.print(f"\n[bold]Seasons ({len(seasons)}):[/bold] {labels}")


@data_app.command("validate")
def data_validate(
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Treat warnings as failures"),
    ] = False,
    max_messages: Annotated[
        int,
        typer.Option("--max", help="Maximum messages to print per category"),
    ] = 50,
) -> None:
    """Check games and stat rows for inconsistencies."""
    from hoops_archive.data.validation import DataValidator

    archive = _load()
    result = DataValidator().validate_archive(archive)

    for message in result.errors[:max_messages]:
        console.print(f"[red]{message}[/red]")
    for message in result.warnings[:max_messages]:
        console.print(f"[yellow]{message}[/yellow]")

    console.print(
        Panel(
            f"[bold]Errors:[/bold] {len(result.errors)}\n"
            f"[bold]Warnings:[/bold] {len(result.warnings)}",
            title=f"Validation: {archive.program}",
        )
    )
    if not result.valid or (strict and result.warnings):
        raise typer.Exit(1)
    console.print("[green]Data is valid[/green]")


@data_app.command("fix-dates")
def data_fix_dates(
    path: Annotated[
        Path | None,
        typer.Option("--path", help="games.json to rewrite (defaults to the program's)"),
    ] = None,
    backup: Annotated[
        bool,
        typer.Option("--backup/--no-backup", help="Write a timestamped backup first"),
    ] = True,
) -> None:
    """Set each game's Date from the YYYYMMDD date in its GameID."""
    from hoops_archive.data.migrations import fix_game_dates

    target = path or _program_dir() / "games.json"
    try:
        updated = fix_game_dates(target, backup=backup)
    except ArchiveError as e:
        _fail(str(e))
    console.print(f"[green]Updated {updated} games in {target}[/green]")


@data_app.command("strip-fields")
def data_strip_fields(
    path: Annotated[
        Path | None,
        typer.Option("--path", help="games.json to rewrite (defaults to the program's)"),
    ] = None,
    fields: Annotated[
        list[str] | None,
        typer.Option("--field", "-f", help="Field to remove (repeatable)"),
    ] = None,
) -> None:
    """Remove derivable fields (Date, ResultMargin) from every game."""
    from hoops_archive.data.migrations import STRIPPED_FIELDS, strip_game_fields

    target = path or _program_dir() / "games.json"
    to_strip = tuple(fields) if fields else STRIPPED_FIELDS
    try:
        count = strip_game_fields(target, to_strip)
    except ArchiveError as e:
        _fail(str(e))
    console.print(
        f"[green]Wrote {count} games to {target} without {'/'.join(to_strip)}[/green]"
    )


# =============================================================================
# Records Commands
# =============================================================================


@records_app.command("season")
def records_season(
    stat: Annotated[
        str | None,
        typer.Option("--stat", "-s", help="Record key (PTS, PPG, FG%, ...); all when omitted"),
    ] = None,
    size: Annotated[
        int | None,
        typer.Option("--size", "-n", help="Leaderboard length"),
    ] = None,
    career: Annotated[
        bool,
        typer.Option("--career", help="Rank career totals instead of seasons"),
    ] = False,
    csv: Annotated[
        Path | None,
        typer.Option("--csv", help="Also write the entries to a CSV file"),
    ] = None,
) -> None:
    """Single-season (or career) leaderboards."""
    archive = _load()
    reports = _reports(archive)
    report = reports.career_records(size) if career else reports.season_records(size)

    sections = report["records"]
    if stat is not None:
        sections = [s for s in sections if s["key"].upper() == stat.upper()]
        if not sections:
            keys = ", ".join(s["key"] for s in report["records"])
            _fail(f"Unknown record {stat!r}. Valid records: {keys}")
        console.print(_leaderboard_table(sections[0]))
    else:
        table = Table(title=f"{'Career' if career else 'Single-Season'} Records")
        table.add_column("Record", style="cyan")
        table.add_column("Holder")
        table.add_column("Season")
        table.add_column("Value", justify="right", style="bold")
        for section in sections:
            top = section["entries"][0] if section["entries"] else None
            if top is None or top["placeholder"]:
                table.add_row(section["label"], "—", "—", "—")
            else:
                table.add_row(
                    section["label"],
                    top["player_name"] or "—",
                    top["season_label"] or "—",
                    top["display"],
                )
        console.print(table)

    if csv is not None:
        rows = [{"record": s["key"], **e} for s in sections for e in s["entries"]]
        _write_csv(rows, csv)


@records_app.command("single-game")
def records_single_game(
    stat: Annotated[
        str | None,
        typer.Option("--stat", "-s", help="Stat name (points, rebounds, three_pm, ...)"),
    ] = None,
    top: Annotated[
        int | None,
        typer.Option("--top", help="Show a padded top-N table instead of tied leaders"),
    ] = None,
    csv: Annotated[
        Path | None,
        typer.Option("--csv", help="Also write the entries to a CSV file"),
    ] = None,
) -> None:
    """Single-game highs; every player tied for the record is listed."""
    from hoops_archive.output.reports import ReportGenerationError
    from hoops_archive.stats.leaderboards import SINGLE_GAME_STATS

    by_abbr = {abbr: name for name, abbr in STAT_ABBREVIATIONS.items()}
    archive = _load()
    stats = [by_abbr.get(stat.upper(), stat.lower())] if stat else list(SINGLE_GAME_STATS)
    try:
        if top is not None:
            report = _reports(archive).single_game_records(stats, tied=False, size=top)
        else:
            report = _reports(archive).single_game_records(stats)
    except ReportGenerationError as e:
        _fail(str(e))

    for section in report["records"]:
        if not section["entries"]:
            console.print(f"[dim]{section['label']}: no games recorded[/dim]")
            continue
        console.print(_leaderboard_table(section, show_game=True))

    if csv is not None:
        rows = [{"stat": s["stat"], **e} for s in report["records"] for e in s["entries"]]
        _write_csv(rows, csv)


@records_app.command("career")
def records_career(
    sort: Annotated[
        str,
        typer.Option("--sort", help="Column to sort by"),
    ] = "points",
    ascending: Annotated[
        bool,
        typer.Option("--asc", help="Sort ascending"),
    ] = False,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", help="Show only the first N players"),
    ] = None,
    csv: Annotated[
        Path | None,
        typer.Option("--csv", help="Also write the table to a CSV file"),
    ] = None,
) -> None:
    """Full career stats table (adjustments included)."""
    from hoops_archive.output.reports import ReportGenerationError

    archive = _load()
    try:
        players = _reports(archive).career_stats(sort, descending=not ascending)
    except ReportGenerationError as e:
        _fail(str(e))

    shown = players[:limit] if limit else players
    table = Table(title=f"Career Stats ({len(players)} players)")
    table.add_column("Player", style="cyan")
    table.add_column("Class", justify="right")
    for header in ("GP", "PTS", "REB", "AST", "STL", "BLK", "2P%", "3P%", "FT%"):
        table.add_column(header, justify="right")
    for p in shown:
        d = p["display"]
        table.add_row(
            p["name"],
            str(p["grad_year"] or "—"),
            d["games_played"],
            d["points"],
            d["rebounds"],
            d["assists"],
            d["steals"],
            d["blocks"],
            d["two_pct"],
            d["three_pct"],
            d["ft_pct"],
        )
    console.print(table)

    if csv is not None:
        _write_csv(players, csv)


@records_app.command("team")
def records_team() -> None:
    """Overall and season records plus team single-game highs."""
    archive = _load()
    report = _reports(archive).team_records()

    console.print(Panel(f"[bold]All-time record:[/bold] {report['overall']}", title="Team"))

    seasons = Table(title="Seasons")
    seasons.add_column("Season", style="cyan")
    seasons.add_column("Record", justify="right")
    for season in report["seasons"]:
        seasons.add_row(season["label"], season["record"])
    console.print(seasons)

    titles = {
        "most_points": "Most Points Scored",
        "fewest_allowed": "Fewest Points Allowed",
        "largest_margin": "Largest Margin of Victory",
    }
    for key, games in report["single_game"].items():
        table = Table(title=titles.get(key, key))
        table.add_column("Date")
        table.add_column("Opponent", style="cyan")
        table.add_column("Score", justify="right")
        table.add_column("Margin", justify="right")
        for game in games:
            margin = game["margin"]
            table.add_row(
                game["date"],
                game["opponent"],
                game["score"],
                "—" if margin is None else str(margin),
            )
        console.print(table)


@records_app.command("opponents")
def records_opponents(
    sort: Annotated[
        str,
        typer.Option("--sort", help="opponent, wins, losses or total"),
    ] = "opponent",
    descending: Annotated[
        bool,
        typer.Option("--desc", help="Sort descending"),
    ] = False,
    csv: Annotated[
        Path | None,
        typer.Option("--csv", help="Also write the table to a CSV file"),
    ] = None,
) -> None:
    """Win/loss record against every opponent."""
    if sort not in ("opponent", "wins", "losses", "total"):
        _fail(f"Cannot sort by {sort!r}. Valid fields: opponent, wins, losses, total")

    archive = _load()
    opponents = _reports(archive).opponents()
    if sort == "opponent":
        opponents.sort(key=lambda o: o["opponent"].lower(), reverse=descending)
    else:
        opponents.sort(key=lambda o: o[sort], reverse=descending)

    table = Table(title="Records vs Opponents")
    table.add_column("Opponent", style="cyan")
    table.add_column("W", justify="right")
    table.add_column("L", justify="right")
    table.add_column("Total", justify="right")
    for opp in opponents:
        table.add_row(opp["opponent"], str(opp["wins"]), str(opp["losses"]), str(opp["total"]))
    console.print(table)

    if csv is not None:
        rows = [{k: v for k, v in o.items() if k != "games"} for o in opponents]
        _write_csv(rows, csv)


# =============================================================================
# Player and Season Commands
# =============================================================================


@player_app.command("show")
def player_show(
    player_id: Annotated[str, typer.Argument(help="PlayerID")],
    per_game: Annotated[
        bool,
        typer.Option("--per-game", help="Show per-game averages"),
    ] = False,
    games: Annotated[
        bool,
        typer.Option("--games", "-g", help="Include the game log"),
    ] = False,
) -> None:
    """Season-by-season and career stats for one player."""
    archive = _load()
    try:
        profile = _reports(archive).player_profile(player_id, per_game_view=per_game)
    except ArchiveError as e:
        _fail(str(e))

    header = f"[bold]{profile['name']}[/bold]"
    if profile["jersey_number"]:
        header += f"  #{profile['jersey_number']}"
    if profile["grad_year"]:
        header += f"  Class of {profile['grad_year']}"
    console.print(Panel(header, title=f"Player {profile['player_id']}"))

    table = Table(title="Per Game" if per_game else "Totals")
    table.add_column("Season", style="cyan")
    table.add_column("GP", justify="right")
    for header_name in ("PTS", "REB", "AST", "TO", "STL", "BLK"):
        table.add_column(header_name, justify="right")
    for header_name in ("FG%", "3P%", "FT%"):
        table.add_column(header_name, justify="right")

    stats = ("points", "rebounds", "assists", "turnovers", "steals", "blocks")
    for line in (*profile["seasons"], {**profile["career"], "season_label": "Career"}):
        d = line["display"]
        values = line["per_game_display"] if per_game else d
        table.add_row(
            line["season_label"],
            d["games_played"],
            *(values[name] for name in stats),
            d["fg_pct"],
            d["three_pct"],
            d["ft_pct"],
        )
    console.print(table)

    if games:
        log = Table(title="Game Log")
        log.add_column("Date")
        log.add_column("Opponent", style="cyan")
        log.add_column("Result")
        for header_name in ("PTS", "REB", "AST", "STL", "BLK"):
            log.add_column(header_name, justify="right")
        for game in profile["game_log"]:
            log.add_row(
                game["date"],
                game["opponent"],
                game["result"],
                game["points"],
                game["rebounds"],
                game["assists"],
                game["steals"],
                game["blocks"],
            )
        console.print(log)


@game_app.command("show")
def game_show(
    game_id: Annotated[str, typer.Argument(help="GameID (YYYYMMDD)")],
    csv: Annotated[
        Path | None,
        typer.Option("--csv", help="Also write the box score to a CSV file"),
    ] = None,
) -> None:
    """Score, recap and box score for one game."""
    archive = _load()
    try:
        detail = _reports(archive).game_detail(game_id)
    except ArchiveError as e:
        _fail(str(e))

    header = (
        f"[bold]{detail['date']} vs {detail['opponent']}[/bold]\n"
        f"{detail['location_type']} · {detail['game_type']} · "
        f"Final: {detail['score']} ({detail['result']})"
    )
    if detail["recap"]:
        header += f"\n\n{detail['recap']}"
    console.print(Panel(header, title=f"Game {detail['game_id']}"))

    if not detail["box_score"]:
        console.print("[yellow]No player statistics available for this game.[/yellow]")
        return

    table = Table(title="Box Score")
    table.add_column("Player", style="cyan")
    headers = ("MIN", "PTS", "REB", "AST", "STL", "BLK", "TO", "2PM-A", "3PM-A", "FTM-A")
    for header_name in headers:
        table.add_column(header_name, justify="right")
    for line in (*detail["box_score"], {**detail["team"], "name": "Team Totals"}):
        d = line["display"]
        table.add_row(
            line["name"],
            d["minutes"],
            d["points"],
            d["rebounds"],
            d["assists"],
            d["steals"],
            d["blocks"],
            d["turnovers"],
            f"{d['two_pm']}-{d['two_pa']}",
            f"{d['three_pm']}-{d['three_pa']}",
            f"{d['ftm']}-{d['fta']}",
        )
    console.print(table)

    if csv is not None:
        _write_csv(detail["box_score"], csv)


@season_app.command("show")
def season_show(
    season: Annotated[str, typer.Argument(help="Season start year or label (2024 or 2024-25)")],
    csv: Annotated[
        Path | None,
        typer.Option("--csv", help="Also write player totals to a CSV file"),
    ] = None,
) -> None:
    """Schedule, results and player stats for one season."""
    from hoops_archive.data.coerce import to_season

    year = to_season(season)
    if year is None:
        _fail(f"Invalid season {season!r}")

    archive = _load()
    try:
        summary = _reports(archive).season_summary(year)
    except ArchiveError as e:
        _fail(str(e))

    details = f"[bold]Record:[/bold] {summary['record']} (Region {summary['region_record']})"
    if summary["head_coach"]:
        details += f"\n[bold]Head coach:[/bold] {summary['head_coach']}"
    console.print(Panel(details, title=f"{summary['label']} Season"))

    schedule = Table(title="Schedule")
    schedule.add_column("Date")
    schedule.add_column("Opponent", style="cyan")
    schedule.add_column("Loc")
    schedule.add_column("Type")
    schedule.add_column("Result")
    schedule.add_column("Score", justify="right")
    schedule.add_column("Leading Scorer")
    for game in summary["schedule"]:
        scorer = game["leading_scorer"]
        schedule.add_row(
            game["date"],
            game["opponent"],
            game["location_type"],
            game["game_type"],
            game["result"],
            game["score"],
            f"{scorer['player_name']} ({scorer['points']})" if scorer else "—",
        )
    console.print(schedule)

    players = Table(title="Player Stats")
    players.add_column("Player", style="cyan")
    for header_name in ("GP", "PTS", "PPG", "REB", "AST", "STL", "BLK", "FG%", "3P%", "FT%"):
        players.add_column(header_name, justify="right")
    for line in (*summary["players"], {**summary["team"], "name": "Team"}):
        d = line["display"]
        players.add_row(
            line["name"],
            d["games_played"],
            d["points"],
            d["ppg"],
            d["rebounds"],
            d["assists"],
            d["steals"],
            d["blocks"],
            d["fg_pct"],
            d["three_pct"],
            d["ft_pct"],
        )
    console.print(players)

    if csv is not None:
        _write_csv(summary["players"], csv)


# =============================================================================
# Admin Commands
# =============================================================================


@admin_app.command("boxscore")
def admin_boxscore(
    csv_path: Annotated[Path, typer.Argument(help="Box-score CSV (PlayerID, DNP, stat columns)")],
    game_id: Annotated[
        str | None,
        typer.Option("--game-id", help="GameID (YYYYMMDD)"),
    ] = None,
    game_date: Annotated[
        str | None,
        typer.Option("--date", help="Game date YYYY-MM-DD (sets the GameID)"),
    ] = None,
    season: Annotated[
        int | None,
        typer.Option("--season", help="Season start year to include on each row"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the rows to this file instead of stdout"),
    ] = None,
    merge: Annotated[
        bool,
        typer.Option("--merge", help="Merge into the program's playergamestats.json"),
    ] = False,
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", help="With --merge, replace existing rows for this game"),
    ] = False,
    backup: Annotated[
        bool,
        typer.Option("--backup/--no-backup", help="With --merge, back up the stats file first"),
    ] = True,
) -> None:
    """Export a CSV box score as playergamestats.json rows."""
    from hoops_archive.data.boxscore import (
        build_stat_rows,
        game_id_from_date,
        merge_stat_rows,
        read_box_score_csv,
    )
    from hoops_archive.data.loader import read_json_array
    from hoops_archive.data.migrations import backup_path_for

    try:
        if game_id is None:
            if game_date is None:
                _fail("Specify --game-id or --date")
            game_id = game_id_from_date(game_date)
        lines = read_box_score_csv(csv_path)
        rows = build_stat_rows(game_id, lines, season=season)
    except ArchiveError as e:
        _fail(str(e))

    if not rows:
        _fail("No stat rows entered (every line is blank or DNP)")

    dnp = [line.player_id for line in lines if line.dnp]
    console.print(
        f"[green]Built {len(rows)} rows for game {game_id}[/green]"
        + (f" [dim]({len(dnp)} DNP)[/dim]" if dnp else "")
    )

    if merge:
        stats_path = _program_dir() / "playergamestats.json"
        try:
            existing = read_json_array(stats_path)
        except ArchiveError as e:
            _fail(str(e))
        merged = merge_stat_rows(existing, rows, overwrite=overwrite, dnp_player_ids=dnp)
        try:
            if backup:
                backup_file = backup_path_for(stats_path)
                backup_file.write_text(stats_path.read_text(encoding="utf-8"), encoding="utf-8")
                console.print(f"[dim]Backup created: {backup_file}[/dim]")
            stats_path.write_text(json.dumps(merged, indent=2), encoding="utf-8")
        except OSError as e:
            _fail(f"Cannot write {stats_path}: {e}")
        console.print(f"[green]Merged into {stats_path} ({len(merged)} rows)[/green]")
        return

    text = json.dumps(rows, indent=2)
    if output is not None:
        try:
            output.write_text(text, encoding="utf-8")
        except OSError as e:
            _fail(f"Cannot write {output}: {e}")
        console.print(f"[green]Wrote {output}[/green]")
    else:
        console.print_json(text)


@admin_app.command("game")
def admin_game(
    game_date: Annotated[str, typer.Option("--date", help="Game date YYYY-MM-DD")],
    opponent: Annotated[str, typer.Option("--opponent", help="Opponent name")],
    season: Annotated[int, typer.Option("--season", help="Season start year")],
    location: Annotated[
        str | None,
        typer.Option("--location", help="Home, Away or Neutral"),
    ] = None,
    game_type: Annotated[
        str | None,
        typer.Option("--type", help="Region, Non-Region, Tournament, ..."),
    ] = None,
    team_score: Annotated[int | None, typer.Option("--team-score")] = None,
    opponent_score: Annotated[int | None, typer.Option("--opponent-score")] = None,
    complete: Annotated[
        bool,
        typer.Option("--complete/--scheduled", help="Whether the game has been played"),
    ] = False,
) -> None:
    """Print a games.json object for a new game."""
    from hoops_archive.data.boxscore import build_game_record

    locations = {loc.value.lower(): loc.value for loc in LocationType}
    if location is not None:
        if location.strip().lower() not in locations:
            _fail(f"Unknown location {location!r}. Use Home, Away or Neutral")
        location = locations[location.strip().lower()]
    if game_type is not None and game_type not in {t.value for t in GameType}:
        console.print(f"[yellow]Unrecognized game type {game_type!r}[/yellow]")

    try:
        record = build_game_record(
            game_date,
            opponent,
            season,
            location_type=location,
            game_type=game_type,
            team_score=team_score,
            opponent_score=opponent_score,
            is_complete=complete,
        )
    except ArchiveError as e:
        _fail(str(e))
    if complete and record["Result"] is None:
        console.print("[yellow]Game marked complete without both scores[/yellow]")
    console.print_json(json.dumps(record))


# =============================================================================
# Site Commands
# =============================================================================


@site_app.command("build")
def site_build(
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory (defaults to HOOPS_SITE_DIR)"),
    ] = None,
) -> None:
    """Render the static records site and its JSON data files."""
    from hoops_archive.output.site import SiteBuildError, SiteBuilder

    settings = get_settings()
    archive = _load()
    target = output or settings.site_dir_obj
    builder = SiteBuilder(archive, output_dir=target, reports=_reports(archive))
    try:
        count = builder.build()
    except (SiteBuildError, ArchiveError) as e:
        _fail(str(e))
    console.print(f"[green]Built {count} files in {target}[/green]")


if __name__ == "__main__":
    app()
