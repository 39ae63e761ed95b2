"""Grouped aggregation of box-score rows.

Every records view in the archive is one fold over the same rows with a
different grouping key: career totals group by player, season totals by
player and season, team totals by game or season. ``aggregate`` performs that
fold once, generically.

Games played rule:
    A row counts as a game played when its season tracks minutes and the
    row's minutes are positive. Seasons where no row carries a minutes field
    at all (older, hand-transcribed seasons) count every row as a game.
    Games are counted as distinct game ids, so duplicate rows for one game
    do not inflate the count.

The fold only sums and takes set unions, so the result does not depend on
row order.

Example:
    >>> from hoops_archive.stats.aggregate import aggregate, by_player_season
    >>> totals = aggregate(rows, by_player_season)
    >>> totals[("202506", 2025)].points
    312.0
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field
from typing import Any

from hoops_archive.data.models import PlayerGameStatRow
from hoops_archive.logging import get_logger
from hoops_archive.stats.metrics import double_category_count
from hoops_archive.types import COUNTING_STATS, PlayerId, SeasonId

logger = get_logger(__name__)

KeyFunction = Callable[[PlayerGameStatRow], Hashable | None]

TEAM_KEY = "TEAM"


# =============================================================================
# Key functions
# =============================================================================


def by_player(row: PlayerGameStatRow) -> PlayerId | None:
    """Career grouping."""
    return row.player_id


def by_player_season(row: PlayerGameStatRow) -> tuple[PlayerId, SeasonId] | None:
    """Season grouping; rows without a player or season are skipped."""
    if row.player_id is None or row.season is None:
        return None
    return (row.player_id, row.season)


def by_player_game(row: PlayerGameStatRow) -> tuple[PlayerId, str] | None:
    if row.player_id is None or row.game_id is None:
        return None
    return (row.player_id, row.game_id)


def by_game(row: PlayerGameStatRow) -> str | None:
    """Team totals for each game."""
    return row.game_id


def by_season(row: PlayerGameStatRow) -> SeasonId | None:
    """Team totals for each season."""
    return row.season


def by_team(row: PlayerGameStatRow) -> str:
    """Everything in one bucket."""
    return TEAM_KEY


# =============================================================================
# Games played
# =============================================================================


def minutes_tracked_seasons(rows: Iterable[PlayerGameStatRow]) -> set[SeasonId | None]:
    """Seasons in which at least one row carries a minutes field."""
    return {row.season for row in rows if row.has_minutes_field}


def is_played(row: PlayerGameStatRow, tracked_seasons: set[SeasonId | None]) -> bool:
    if row.season in tracked_seasons:
        return row.minutes is not None and row.minutes > 0
    return True


# =============================================================================
# Totals
# =============================================================================


@dataclass
class AggregatedTotals:
    """Summed counting stats for one grouping key.

    Attributes:
        key: The grouping key this entry was built for.
        player_ids: Distinct players contributing rows.
        seasons: Distinct seasons contributing rows.
        minutes: Total minutes played (0 when never tracked).
        game_ids: Distinct games in which a contributing row counted as played.
        unidentified_games: Played rows without a game id (e.g. adjustments),
            each counted as its own game.
        double_doubles: Played rows with two or more double-figure categories.
        triple_doubles: Played rows with three or more.
        row_count: Number of rows folded in.
        tracked: Counting stats explicitly recorded in at least one row.
    """

    key: Hashable
    player_ids: set[PlayerId] = field(default_factory=set)
    seasons: set[SeasonId] = field(default_factory=set)
    points: float = 0.0
    rebounds: float = 0.0
    assists: float = 0.0
    turnovers: float = 0.0
    steals: float = 0.0
    blocks: float = 0.0
    two_pm: float = 0.0
    two_pa: float = 0.0
    three_pm: float = 0.0
    three_pa: float = 0.0
    ftm: float = 0.0
    fta: float = 0.0
    minutes: float = 0.0
    game_ids: set[str] = field(default_factory=set)
    unidentified_games: int = 0
    double_doubles: int = 0
    triple_doubles: int = 0
    row_count: int = 0
    tracked: set[str] = field(default_factory=set)

    def add_row(self, row: PlayerGameStatRow, played: bool) -> None:
        self.row_count += 1
        if row.player_id is not None:
            self.player_ids.add(row.player_id)
        if row.season is not None:
            self.seasons.add(row.season)

        for name in COUNTING_STATS:
            setattr(self, name, getattr(self, name) + row.stat(name))
        if row.minutes is not None and row.minutes > 0:
            self.minutes += row.minutes
        self.tracked.update(row.tracked)

        if not played:
            return
        if row.game_id is not None:
            self.game_ids.add(row.game_id)
        else:
            self.unidentified_games += 1

        categories = double_category_count(row)
        if categories >= 2:
            self.double_doubles += 1
        if categories >= 3:
            self.triple_doubles += 1

    def absorb(self, other: AggregatedTotals) -> None:
        """Fold another entry into this one."""
        self.row_count += other.row_count
        self.player_ids |= other.player_ids
        self.seasons |= other.seasons
        for name in COUNTING_STATS:
            setattr(self, name, getattr(self, name) + getattr(other, name))
        self.minutes += other.minutes
        self.game_ids |= other.game_ids
        self.unidentified_games += other.unidentified_games
        self.double_doubles += other.double_doubles
        self.triple_doubles += other.triple_doubles
        self.tracked |= other.tracked

    @property
    def games_played(self) -> int:
        return len(self.game_ids) + self.unidentified_games

    @property
    def player_id(self) -> PlayerId | None:
        """The contributing player, when exactly one."""
        return next(iter(self.player_ids)) if len(self.player_ids) == 1 else None

    @property
    def season(self) -> SeasonId | None:
        """The contributing season, when exactly one."""
        return next(iter(self.seasons)) if len(self.seasons) == 1 else None

    @property
    def fgm(self) -> float:
        return self.two_pm + self.three_pm

    @property
    def fga(self) -> float:
        return self.two_pa + self.three_pa

    def stat(self, name: str) -> float:
        if name == "minutes":
            return self.minutes
        if name == "fgm":
            return self.fgm
        if name == "fga":
            return self.fga
        if name in {"games_played", "double_doubles", "triple_doubles"}:
            return float(getattr(self, name))
        if name not in COUNTING_STATS:
            raise KeyError(name)
        return getattr(self, name)

    def is_tracked(self, name: str) -> bool:
        if name == "fgm":
            return bool({"two_pm", "three_pm"} & self.tracked)
        if name == "fga":
            return bool({"two_pa", "three_pa"} & self.tracked)
        return name in self.tracked

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "player_id": self.player_id,
            "season": self.season,
            "games_played": self.games_played,
        }
        for name in (*COUNTING_STATS, "fgm", "fga", "minutes"):
            value = self.stat(name)
            data[name] = int(value) if float(value).is_integer() else value
        data["double_doubles"] = self.double_doubles
        data["triple_doubles"] = self.triple_doubles
        return data


def aggregate(
    rows: Iterable[PlayerGameStatRow],
    key_fn: KeyFunction,
    tracked_seasons: set[SeasonId | None] | None = None,
) -> dict[Hashable, AggregatedTotals]:
    """Fold rows into totals per grouping key.

    Args:
        rows: Normalized stat rows.
        key_fn: Maps a row to its grouping key; ``None`` skips the row.
        tracked_seasons: Seasons that track minutes. Derived from ``rows``
            when omitted; pass it explicitly when aggregating a subset whose
            siblings determine the era.

    Returns:
        Mapping of key to ``AggregatedTotals``, in first-seen key order.
    """
    rows = list(rows)
    if tracked_seasons is None:
        tracked_seasons = minutes_tracked_seasons(rows)

    totals: dict[Hashable, AggregatedTotals] = {}
    skipped = 0
    for row in rows:
        key = key_fn(row)
        if key is None:
            skipped += 1
            continue
        entry = totals.get(key)
        if entry is None:
            entry = totals[key] = AggregatedTotals(key=key)
        entry.add_row(row, is_played(row, tracked_seasons))

    logger.debug(
        "Aggregated {} rows into {} groups ({} skipped)", len(rows), len(totals), skipped
    )
    return totals


def combine(totals: Iterable[AggregatedTotals], key: Hashable = TEAM_KEY) -> AggregatedTotals:
    """Fold several entries into one, e.g. season rows into a career row."""
    combined = AggregatedTotals(key=key)
    for entry in totals:
        combined.absorb(entry)
    return combined
