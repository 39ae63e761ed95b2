"""Leaderboards built from declarative metric definitions.

Two ranking policies are kept distinct:

- ``build_leaderboard``: aggregate records (season, career). Qualify, drop
  non-positive or undefined values, sort descending, truncate to N, then pad
  with placeholder entries so a table always has N rows.
- ``single_game_leaders``: single-game records. A running max-and-ties scan
  that returns every entry tied for the top value, with no padding.

Ties in ``build_leaderboard`` keep encounter order (the sort is stable).

Example:
    >>> from hoops_archive.stats.leaderboards import (
    ...     SEASON_RECORD_DEFINITIONS, build_leaderboard)
    >>> ppg = next(d for d in SEASON_RECORD_DEFINITIONS if d.key == "PPG")
    >>> board = build_leaderboard(season_totals.values(), ppg, size=20)
    >>> len(board)
    20
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import asdict, dataclass
from typing import Any, TypeVar

from hoops_archive.logging import get_logger
from hoops_archive.output.formatting import DASH, fmt_count, fmt_number, fmt_percent
from hoops_archive.stats.metrics import effective_fg_pct, per_game, percentage

logger = get_logger(__name__)

T = TypeVar("T")

LEADERBOARD_SIZE = 20
LEGACY_LEADERBOARD_SIZE = 10
MIN_GAMES = 10
MIN_FG_ATTEMPTS = 50
MIN_THREE_ATTEMPTS = 30
MIN_FT_ATTEMPTS = 30

SINGLE_GAME_STATS: tuple[str, ...] = (
    "points",
    "rebounds",
    "assists",
    "steals",
    "two_pm",
    "three_pm",
    "ftm",
    "fta",
)

Resolver = Callable[[Any], dict[str, Any]]


# =============================================================================
# Data types
# =============================================================================


@dataclass(frozen=True)
class MetricDefinition:
    """One leaderboard: how to value, display and qualify an entity."""

    key: str
    label: str
    abbr: str
    value_fn: Callable[[Any], float | None]
    display_fn: Callable[[Any], str] = fmt_count
    qualify_fn: Callable[[Any], bool] | None = None
    qualifier_text: str | None = None

    def qualifies(self, entity: Any) -> bool:
        return self.qualify_fn is None or bool(self.qualify_fn(entity))


@dataclass(frozen=True)
class RankingEntry:
    """One leaderboard row, or a placeholder padding a short table."""

    value: float
    display: str
    player_id: str | None = None
    player_name: str | None = None
    season: int | None = None
    season_label: str | None = None
    games_played: int | None = None
    game_id: str | None = None
    opponent: str | None = None
    game_date: str | None = None
    placeholder: bool = False

    @classmethod
    def placeholder_entry(cls) -> RankingEntry:
        return cls(value=0, display=DASH, placeholder=True)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# =============================================================================
# Builders
# =============================================================================


def _usable(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def default_identity(entity: Any) -> dict[str, Any]:
    """Identity fields read straight off a row or ``AggregatedTotals``."""
    games = getattr(entity, "games_played", None)
    return {
        "player_id": getattr(entity, "player_id", None),
        "season": getattr(entity, "season", None),
        "games_played": games,
        "game_id": getattr(entity, "game_id", None),
    }


def _entry(value: float, display: str, entity: Any, resolve: Resolver | None) -> RankingEntry:
    identity = default_identity(entity)
    if resolve is not None:
        identity.update(resolve(entity))
    fields = RankingEntry.__dataclass_fields__
    return RankingEntry(
        value=value,
        display=display,
        **{k: v for k, v in identity.items() if k in fields},
    )


def build_leaderboard(
    entities: Iterable[Any],
    definition: MetricDefinition,
    size: int = LEADERBOARD_SIZE,
    resolve: Resolver | None = None,
    pad: bool = True,
) -> list[RankingEntry]:
    """Top-N leaderboard, padded to exactly ``size`` rows.

    Args:
        entities: Aggregated totals (or rows) to rank.
        definition: Value, display and qualification rules.
        size: Number of rows in the table.
        resolve: Optional callback adding display identity (player name,
            season label, opponent) for an entity.
        pad: Fill the table with placeholders when short.

    Returns:
        Ranked entries, real ones first in descending value order.
    """
    candidates: list[tuple[float, Any]] = []
    for entity in entities:
        if not definition.qualifies(entity):
            continue
        value = definition.value_fn(entity)
        if not _usable(value):
            continue
        candidates.append((value, entity))

    candidates.sort(key=lambda pair: pair[0], reverse=True)
    board = [
        _entry(value, definition.display_fn(value), entity, resolve)
        for value, entity in candidates[:size]
    ]

    if pad:
        board.extend(RankingEntry.placeholder_entry() for _ in range(size - len(board)))
    logger.debug(
        "Leaderboard {}: {} qualified, {} shown",
        definition.key,
        len(candidates),
        min(len(candidates), size),
    )
    return board


def tied_leaders(
    items: Iterable[T],
    value_fn: Callable[[T], float | None],
    lowest: bool = False,
) -> list[tuple[float, T]]:
    """Running max-and-ties scan (or min-and-ties with ``lowest``).

    Highest scans ignore non-positive values; lowest scans only ignore
    missing ones. Returns every item tied for the best value, in encounter
    order, or an empty list.
    """
    best: float | None = None
    leaders: list[tuple[float, T]] = []
    for item in items:
        value = value_fn(item)
        if value is None or not math.isfinite(value):
            continue
        if not lowest and value <= 0:
            continue
        if best is None or (value < best if lowest else value > best):
            best = value
            leaders = [(value, item)]
        elif value == best:
            leaders.append((value, item))
    return leaders


def single_game_leaders(
    rows: Iterable[Any],
    stat: str,
    resolve: Resolver | None = None,
) -> list[RankingEntry]:
    """Every box-score row tied for the single-game high in ``stat``."""
    return [
        _entry(value, fmt_count(value), row, resolve)
        for value, row in tied_leaders(rows, lambda r: r.stat(stat))
    ]


# =============================================================================
# Record tables
# =============================================================================


def _total(name: str) -> Callable[[Any], float]:
    return lambda t: t.stat(name)


def _per_game(name: str) -> Callable[[Any], float | None]:
    return lambda t: per_game(t.stat(name), t.games_played)


def _pct(made: str, attempted: str) -> Callable[[Any], float | None]:
    return lambda t: percentage(t.stat(made), t.stat(attempted))


def _at_least(name: str, minimum: float) -> Callable[[Any], bool]:
    return lambda t: t.stat(name) >= minimum


def _one_decimal(value: Any) -> str:
    return fmt_number(value, 1)


def record_definitions(min_games: int = MIN_GAMES) -> tuple[MetricDefinition, ...]:
    """The season/career records table, with a configurable games qualifier."""
    games_text = f"Minimum of {min_games} games played"

    def per_game_def(key: str, label: str, name: str) -> MetricDefinition:
        return MetricDefinition(
            key=key,
            label=label,
            abbr=key,
            value_fn=_per_game(name),
            display_fn=_one_decimal,
            qualify_fn=lambda t: t.games_played >= min_games,
            qualifier_text=games_text,
        )

    def pct_def(
        key: str, label: str, abbr: str, made: str, attempted: str, minimum: int
    ) -> MetricDefinition:
        return MetricDefinition(
            key=key,
            label=label,
            abbr=abbr,
            value_fn=_pct(made, attempted),
            display_fn=fmt_percent,
            qualify_fn=_at_least(attempted, minimum),
            qualifier_text=f"Minimum of {minimum} attempts",
        )

    return (
        MetricDefinition("PTS", "Points", "PTS", _total("points")),
        per_game_def("PPG", "Points per game", "points"),
        MetricDefinition("REB", "Rebounds", "REB", _total("rebounds")),
        per_game_def("RPG", "Rebounds per game", "rebounds"),
        MetricDefinition("AST", "Assists", "AST", _total("assists")),
        per_game_def("APG", "Assists per game", "assists"),
        MetricDefinition("STL", "Steals", "STL", _total("steals")),
        per_game_def("SPG", "Steals per game", "steals"),
        MetricDefinition("BLK", "Blocks", "BLK", _total("blocks")),
        per_game_def("BPG", "Blocks per game", "blocks"),
        MetricDefinition("FGM", "Field Goals Made", "FGM", _total("fgm")),
        MetricDefinition("FGA", "Field Goal Attempts", "FGA", _total("fga")),
        pct_def("FG%", "Field Goal Percentage", "FG%", "fgm", "fga", MIN_FG_ATTEMPTS),
        MetricDefinition("2PM", "2-Pt Field Goals Made", "2PM", _total("two_pm")),
        MetricDefinition("2PA", "2-Pt Field Goal Attempts", "2PA", _total("two_pa")),
        pct_def(
            "2P%", "2-Pt Field Goal Percentage", "2PT%", "two_pm", "two_pa", MIN_FG_ATTEMPTS
        ),
        MetricDefinition("3PM", "3-Pt Field Goals Made", "3PM", _total("three_pm")),
        MetricDefinition("3PA", "3-Pt Field Goal Attempts", "3PA", _total("three_pa")),
        pct_def(
            "3P%",
            "3-Pt Field Goal Percentage",
            "3PT%",
            "three_pm",
            "three_pa",
            MIN_THREE_ATTEMPTS,
        ),
        MetricDefinition(
            "EFG%",
            "Effective Field Goal Percentage",
            "EFG%",
            effective_fg_pct,
            display_fn=fmt_percent,
            qualify_fn=_at_least("fga", MIN_FG_ATTEMPTS),
            qualifier_text=f"Minimum of {MIN_FG_ATTEMPTS} attempts",
        ),
        MetricDefinition("FTM", "Free Throws Made", "FTM", _total("ftm")),
        MetricDefinition("FTA", "Free Throw Attempts", "FTA", _total("fta")),
        pct_def("FT%", "Free Throw Percentage", "FT%", "ftm", "fta", MIN_FT_ATTEMPTS),
        MetricDefinition("DDS", "Double-Doubles", "DDS", _total("double_doubles")),
        MetricDefinition("TDS", "Triple-Doubles", "TDS", _total("triple_doubles")),
        MetricDefinition("TO", "Turnovers", "TO", _total("turnovers")),
    )


SEASON_RECORD_DEFINITIONS = record_definitions()

# Career leaderboards rank career totals with the same table
CAREER_RECORD_DEFINITIONS = record_definitions()


def definition_by_key(
    key: str, definitions: Iterable[MetricDefinition] = SEASON_RECORD_DEFINITIONS
) -> MetricDefinition:
    """Look up a definition by key, case-insensitively.

    Raises:
        KeyError: If no definition has that key.
    """
    wanted = key.upper()
    for definition in definitions:
        if definition.key.upper() == wanted:
            return definition
    raise KeyError(key)
