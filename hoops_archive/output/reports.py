"""Records reports built from a loaded archive.

Every report is a JSON-serializable dict (or list of dicts) carrying both raw
values and display strings, so the CLI tables, the static site templates and
the ``api/*.json`` files all read the same structure.

Example:
    >>> from hoops_archive.output.reports import ReportGenerator
    >>> generator = ReportGenerator(archive)
    >>> records = generator.season_records()
    >>> records["records"][0]["entries"][0]["player_name"]
    'Jordan Miles'
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from datetime import datetime
from typing import Any

import pandas as pd

from hoops_archive.data.loader import ArchiveData
from hoops_archive.data.models import GameRecord, PlayerGameStatRow
from hoops_archive.logging import get_logger
from hoops_archive.output.formatting import (
    DASH,
    fmt_count,
    fmt_number,
    fmt_percent,
    fmt_ratio,
    fmt_stat,
    format_game_date,
)
from hoops_archive.stats.aggregate import (
    AggregatedTotals,
    aggregate,
    by_game,
    by_player,
    by_player_game,
    by_player_season,
    combine,
    minutes_tracked_seasons,
)
from hoops_archive.stats.leaderboards import (
    LEADERBOARD_SIZE,
    LEGACY_LEADERBOARD_SIZE,
    MIN_GAMES,
    SINGLE_GAME_STATS,
    MetricDefinition,
    RankingEntry,
    build_leaderboard,
    record_definitions,
    single_game_leaders,
)
from hoops_archive.stats.metrics import derive_metrics, per_game
from hoops_archive.stats.team import (
    leading_scorers,
    records_vs_opponents,
    team_single_game_records,
    win_loss,
)
from hoops_archive.types import COUNTING_STATS, STAT_ABBREVIATIONS, SeasonNotFound

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

STAT_LABELS: dict[str, str] = {
    "points": "Points",
    "rebounds": "Rebounds",
    "assists": "Assists",
    "turnovers": "Turnovers",
    "steals": "Steals",
    "blocks": "Blocks",
    "two_pm": "2-Pt Field Goals Made",
    "two_pa": "2-Pt Field Goal Attempts",
    "three_pm": "3-Pt Field Goals Made",
    "three_pa": "3-Pt Field Goal Attempts",
    "ftm": "Free Throws Made",
    "fta": "Free Throw Attempts",
}

CAREER_SORT_FIELDS: tuple[str, ...] = (
    "name",
    "grad_year",
    "games_played",
    *COUNTING_STATS,
    "two_pct",
    "three_pct",
    "ft_pct",
)


# =============================================================================
# Exceptions
# =============================================================================


class ReportGenerationError(Exception):
    """Base exception for report generation errors."""


class InvalidSortFieldError(ReportGenerationError):
    """Unknown field requested for sorting."""


# =============================================================================
# Helpers
# =============================================================================


def stat_line(totals: AggregatedTotals) -> dict[str, Any]:
    """Totals, derived metrics and display strings for one aggregate."""
    metrics = derive_metrics(totals)
    line = totals.to_dict()
    line["metrics"] = metrics.to_dict()
    display = {
        name: fmt_stat(totals.stat(name), totals.is_tracked(name)) for name in COUNTING_STATS
    }
    display.update(
        games_played=fmt_count(totals.games_played),
        fgm=fmt_stat(totals.fgm, totals.is_tracked("fgm")),
        fga=fmt_stat(totals.fga, totals.is_tracked("fga")),
        fg_pct=fmt_percent(metrics.fg_pct),
        two_pct=fmt_percent(metrics.two_pct),
        three_pct=fmt_percent(metrics.three_pct),
        ft_pct=fmt_percent(metrics.ft_pct),
        efg_pct=fmt_percent(metrics.efg_pct),
        ast_to=fmt_ratio(metrics.ast_to),
        scoring_efficiency=fmt_ratio(metrics.scoring_efficiency),
        ppg=fmt_number(metrics.per_game["points"]),
        rpg=fmt_number(metrics.per_game["rebounds"]),
        apg=fmt_number(metrics.per_game["assists"]),
        pts_per_36=fmt_number(metrics.per_36["points"]),
    )
    line["display"] = display
    return line


def _sort_value(item: dict[str, Any], field: str) -> Any:
    if field in item:
        return item[field]
    return item.get("metrics", {}).get(field)


def to_frame(rows: Iterable[dict[str, Any]]) -> pd.DataFrame:
    """Flatten report rows into a DataFrame for CSV export.

    Nested dicts become dotted columns (``metrics.fg_pct``); placeholder
    leaderboard rows are dropped.
    """
    rows = [r for r in rows if not r.get("placeholder")]
    if not rows:
        return pd.DataFrame()
    return pd.json_normalize(rows)


# =============================================================================
# Report Generator
# =============================================================================


class ReportGenerator:
    """Generate records reports for one program.

    All reports return dictionaries suitable for JSON serialization and
    Jinja2 template rendering.

    Example:
        >>> generator = ReportGenerator(archive, leaderboard_size=20)
        >>> season = generator.season_summary(2024)
        >>> season["record"]
        '18-7'
    """

    def __init__(
        self,
        archive: ArchiveData,
        leaderboard_size: int = LEADERBOARD_SIZE,
        min_games: int = MIN_GAMES,
    ) -> None:
        self.archive = archive
        self.leaderboard_size = leaderboard_size
        self.min_games = min_games
        self._generated_at = datetime.now()
        self._tracked = minutes_tracked_seasons(archive.rows)

    # -------------------------------------------------------------------------
    # Shared pieces
    # -------------------------------------------------------------------------

    def _header(self) -> dict[str, Any]:
        return {
            "program": self.archive.program,
            "generated_at": self._generated_at.isoformat(timespec="seconds"),
        }

    def season_totals(
        self, rows: Iterable[PlayerGameStatRow] | None = None
    ) -> dict[Hashable, AggregatedTotals]:
        rows = self.archive.rows if rows is None else rows
        return aggregate(rows, by_player_season, self._tracked)

    def career_totals(self) -> dict[Hashable, AggregatedTotals]:
        """Career totals per player, adjustments included."""
        return aggregate([*self.archive.rows, *self.archive.adjustments], by_player, self._tracked)

    def _resolve(self, entity: Any) -> dict[str, Any]:
        player_id = getattr(entity, "player_id", None)
        season = getattr(entity, "season", None)
        identity: dict[str, Any] = {
            "player_name": self.archive.player_name(player_id),
            "season_label": self.archive.season_label(season) if season is not None else None,
        }
        game_id = getattr(entity, "game_id", None)
        if game_id is not None:
            game = self.archive.find_game(game_id)
            identity["opponent"] = game.opponent if game else "Unknown Opponent"
            identity["game_date"] = format_game_date(game if game else game_id)
            if game is not None and season is None:
                identity["season"] = game.season
                identity["season_label"] = self.archive.season_label(game.season)
        return identity

    def _game_summary(
        self, game: GameRecord, scorer: PlayerGameStatRow | None = None
    ) -> dict[str, Any]:
        score = (
            f"{game.team_score}-{game.opponent_score}"
            if game.team_score is not None and game.opponent_score is not None
            else DASH
        )
        return {
            "game_id": game.game_id,
            "date": format_game_date(game),
            "opponent": game.opponent or "Unknown Opponent",
            "location_type": game.location_type or DASH,
            "game_type": game.game_type or DASH,
            "result": game.result or DASH,
            "score": score,
            "margin": game.margin,
            "is_complete": game.is_complete,
            "leading_scorer": (
                {
                    "player_id": scorer.player_id,
                    "player_name": self.archive.player_name(scorer.player_id),
                    "points": fmt_count(scorer.points),
                }
                if scorer is not None and scorer.points > 0
                else None
            ),
        }

    def _leaderboard_section(
        self,
        definition: MetricDefinition,
        entries: list[RankingEntry],
    ) -> dict[str, Any]:
        return {
            "key": definition.key,
            "label": definition.label,
            "abbr": definition.abbr,
            "qualifier_text": definition.qualifier_text,
            "entries": [e.to_dict() for e in entries],
        }

    # -------------------------------------------------------------------------
    # Leaderboards
    # -------------------------------------------------------------------------

    def season_records(self, size: int | None = None) -> dict[str, Any]:
        """Top-N single-season leaderboards for every record definition."""
        size = size or self.leaderboard_size
        totals = list(self.season_totals().values())
        logger.info("Generating season records from {} player-seasons", len(totals))
        return {
            **self._header(),
            "size": size,
            "records": [
                self._leaderboard_section(d, build_leaderboard(totals, d, size, self._resolve))
                for d in record_definitions(self.min_games)
            ],
        }

    def career_records(self, size: int | None = None) -> dict[str, Any]:
        """Top-N career leaderboards (adjustments included)."""
        size = size or self.leaderboard_size
        totals = list(self.career_totals().values())
        return {
            **self._header(),
            "size": size,
            "records": [
                self._leaderboard_section(d, build_leaderboard(totals, d, size, self._resolve))
                for d in record_definitions(self.min_games)
            ],
        }

    def single_game_records(
        self,
        stats: Iterable[str] = SINGLE_GAME_STATS,
        tied: bool = True,
        size: int = LEGACY_LEADERBOARD_SIZE,
    ) -> dict[str, Any]:
        """Single-game highs per stat.

        Args:
            stats: Counting stats to report.
            tied: Every row tied for the high (default). When False, a padded
                top-``size`` table of individual games.
            size: Table length when ``tied`` is False.
        """
        rows = self.archive.rows
        records = []
        for stat in stats:
            if stat not in COUNTING_STATS:
                raise ReportGenerationError(f"Unknown stat {stat!r}")
            definition = MetricDefinition(
                key=STAT_ABBREVIATIONS[stat],
                label=STAT_LABELS[stat],
                abbr=STAT_ABBREVIATIONS[stat],
                value_fn=lambda r, s=stat: r.stat(s),
            )
            if tied:
                entries = single_game_leaders(rows, stat, self._resolve)
            else:
                entries = build_leaderboard(rows, definition, size, self._resolve)
            section = self._leaderboard_section(definition, entries)
            section["stat"] = stat
            records.append(section)
        return {**self._header(), "tied": tied, "records": records}

    # -------------------------------------------------------------------------
    # Tables
    # -------------------------------------------------------------------------

    def career_stats(
        self, sort_field: str = "points", descending: bool = True
    ) -> list[dict[str, Any]]:
        """Full career table, one row per player.

        Stats a player never had recorded render as a dash rather than 0.

        Raises:
            InvalidSortFieldError: If ``sort_field`` is not a career column.
        """
        if sort_field not in CAREER_SORT_FIELDS:
            raise InvalidSortFieldError(
                f"Cannot sort by {sort_field!r}. Valid fields: {', '.join(CAREER_SORT_FIELDS)}"
            )

        table = []
        for player_id, totals in self.career_totals().items():
            line = stat_line(totals)
            player = self.archive.find_player(player_id)
            line["player_id"] = player_id
            line["name"] = self.archive.player_name(player_id)
            line["grad_year"] = player.grad_year if player else None
            line["two_pct"] = line["metrics"]["two_pct"]
            line["three_pct"] = line["metrics"]["three_pct"]
            line["ft_pct"] = line["metrics"]["ft_pct"]
            table.append(line)

        present = [r for r in table if _sort_value(r, sort_field) is not None]
        missing = [r for r in table if _sort_value(r, sort_field) is None]
        present.sort(key=lambda r: _sort_value(r, sort_field), reverse=descending)
        return present + missing

    def player_profile(self, player_id: Any, per_game_view: bool = False) -> dict[str, Any]:
        """Season-by-season and career lines plus a game log for one player.

        Raises:
            PlayerNotFound: If the player is not in players.json.
        """
        player = self.archive.player(player_id)
        rows = self.archive.rows_for_player(player.player_id)
        adjustments = [r for r in self.archive.adjustments if r.player_id == player.player_id]

        seasons = []
        for (_, season), totals in sorted(
            self.season_totals(rows).items(), key=lambda item: item[0][1]
        ):
            line = stat_line(totals)
            line["season_label"] = self.archive.season_label(season)
            seasons.append(line)

        career = combine(aggregate([*rows, *adjustments], by_player, self._tracked).values())
        career_line = stat_line(career)
        if per_game_view:
            for line in (*seasons, career_line):
                line["per_game_display"] = {
                    name: fmt_number(per_game(line[name], line["games_played"]))
                    for name in COUNTING_STATS
                }

        game_log = []
        for row in sorted(rows, key=lambda r: r.game_id or ""):
            game = self.archive.find_game(row.game_id)
            game_log.append(
                {
                    "game_id": row.game_id,
                    "date": format_game_date(game if game else row.game_id),
                    "opponent": game.opponent if game and game.opponent else "Unknown Opponent",
                    "result": game.result if game and game.result else DASH,
                    **{
                        name: fmt_stat(row.stat(name), name in row.tracked)
                        for name in COUNTING_STATS
                    },
                }
            )

        return {
            **self._header(),
            "player_id": player.player_id,
            "name": player.display_name,
            "jersey_number": player.jersey_number,
            "grad_year": player.grad_year,
            "seasons": seasons,
            "career": career_line,
            "game_log": game_log,
        }

    def season_summary(self, season: int) -> dict[str, Any]:
        """Schedule, record, player totals and team totals for one season.

        Raises:
            SeasonNotFound: If the season has neither games nor stat rows.
        """
        games = self.archive.games_for_season(season)
        rows = self.archive.rows_for_season(season)
        if not games and not rows:
            raise SeasonNotFound(f"No games or stats for season {season}")

        scorers = leading_scorers(rows)
        totals = self.season_totals(rows)
        players = []
        for (player_id, _), entry in totals.items():
            line = stat_line(entry)
            line["name"] = self.archive.player_name(player_id)
            players.append(line)
        players.sort(key=lambda line: line["points"], reverse=True)

        team = stat_line(combine(totals.values()))
        meta = self.archive.season_meta(season)
        return {
            **self._header(),
            "season": season,
            "label": self.archive.season_label(season),
            "head_coach": meta.head_coach if meta else None,
            "region_finish": meta.region_finish if meta else None,
            "state_finish": meta.state_finish if meta else None,
            "record": win_loss(games).display,
            "region_record": win_loss(games, game_type="Region").display,
            "schedule": [self._game_summary(g, scorers.get(g.game_id)) for g in games],
            "players": players,
            "team": team,
        }

    def game_detail(self, game_id: Any) -> dict[str, Any]:
        """Header, recap and box score for one game.

        Player lines keep the order they appear in the stat file. The team
        row sums every player line; stats no player had recorded render as a
        dash.

        Raises:
            GameNotFound: If the game is not in games.json.
        """
        game = self.archive.game(game_id)
        rows = self.archive.rows_for_game(game.game_id)
        minutes_tracked = game.season in self._tracked

        box_score = []
        for (player_id, _), totals in aggregate(rows, by_player_game, self._tracked).items():
            line = stat_line(totals)
            line["player_id"] = player_id
            line["name"] = self.archive.player_name(player_id)
            line["display"]["minutes"] = fmt_count(totals.minutes) if minutes_tracked else DASH
            box_score.append(line)

        team_totals = aggregate(rows, by_game, self._tracked).get(game.game_id)
        team = stat_line(team_totals) if team_totals is not None else None
        if team is not None:
            team["display"]["minutes"] = fmt_count(team_totals.minutes) if minutes_tracked else DASH

        scorer = leading_scorers(rows).get(game.game_id)
        return {
            **self._header(),
            **self._game_summary(game, scorer),
            "season": game.season,
            "season_label": (
                self.archive.season_label(game.season) if game.season is not None else None
            ),
            "recap": game.recap,
            "box_score": box_score,
            "team": team,
        }

    def opponents(self) -> list[dict[str, Any]]:
        """Results against every known opponent, games in date order."""
        result = []
        for record in records_vs_opponents(self.archive.games).values():
            entry = record.to_dict()
            entry["display"] = record.record.display
            entry["games"] = [self._game_summary(g) for g in record.games]
            result.append(entry)
        return result

    def team_records(self) -> dict[str, Any]:
        """Overall and per-season results plus team single-game highs."""
        seasons = []
        for season in self.archive.seasons_present():
            record = win_loss(self.archive.games_for_season(season))
            seasons.append(
                {
                    "season": season,
                    "label": self.archive.season_label(season),
                    "wins": record.wins,
                    "losses": record.losses,
                    "ties": record.ties,
                    "record": record.display,
                }
            )

        overall = win_loss(self.archive.games)
        highs = {
            name: [self._game_summary(g) for g in games]
            for name, games in team_single_game_records(self.archive.games).items()
        }
        return {
            **self._header(),
            "overall": overall.display,
            "seasons": seasons,
            "single_game": highs,
        }
