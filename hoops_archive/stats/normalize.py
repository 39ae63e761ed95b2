"""Normalization of raw box-score rows.

Raw playergamestats.json rows may be missing fields, carry nulls, or hold
numbers as strings. Every counting stat is coerced to a finite float with
unusable values silently becoming zero, so incomplete historical seasons
aggregate without errors. Whether a value was actually recorded is kept
separately in ``PlayerGameStatRow.tracked``.

Example:
    >>> from hoops_archive.stats.normalize import normalize_stat_row
    >>> row = normalize_stat_row({"PlayerID": 7, "GameID": 20250110,
    ...                           "Points": "12", "Rebounds": None})
    >>> row.points, row.rebounds, "rebounds" in row.tracked
    (12.0, 0.0, False)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from hoops_archive.data.coerce import (
    has_value,
    safe_num,
    to_id,
    to_optional_float,
    to_season,
)
from hoops_archive.data.models import GameRecord, PlayerGameStatRow
from hoops_archive.logging import get_logger
from hoops_archive.types import STAT_FIELDS

logger = get_logger(__name__)

MINUTES_KEYS: tuple[str, ...] = ("MinutesPlayed", "Minutes", "MIN")


def normalize_stat_row(raw: Mapping[str, Any]) -> PlayerGameStatRow:
    """Coerce one raw stat mapping into a ``PlayerGameStatRow``. Never raises."""
    stats: dict[str, float] = {}
    tracked: set[str] = set()
    for name, key in STAT_FIELDS.items():
        value = raw.get(key)
        stats[name] = safe_num(value)
        if has_value(value):
            tracked.add(name)

    minutes_key = next((k for k in MINUTES_KEYS if k in raw), None)
    minutes = to_optional_float(raw[minutes_key]) if minutes_key else None

    return PlayerGameStatRow(
        player_id=to_id(raw.get("PlayerID")),
        game_id=to_id(raw.get("GameID")),
        season=to_season(raw.get("Season")),
        minutes=minutes,
        has_minutes_field=minutes_key is not None,
        stat_id=to_id(raw.get("StatID")),
        tracked=frozenset(tracked),
        **stats,
    )


def normalize_stat_rows(raws: Iterable[Any]) -> list[PlayerGameStatRow]:
    """Normalize a collection, dropping entries that are not mappings."""
    rows = []
    skipped = 0
    for raw in raws:
        if not isinstance(raw, Mapping):
            skipped += 1
            continue
        rows.append(normalize_stat_row(raw))
    if skipped:
        logger.debug("Skipped {} non-object stat entries", skipped)
    return rows


def attach_seasons(
    rows: Iterable[PlayerGameStatRow],
    games: Iterable[GameRecord],
) -> list[PlayerGameStatRow]:
    """Fill each row's missing season from the game it belongs to.

    Rows that already carry a season keep it.
    """
    season_by_game = {g.game_id: g.season for g in games if g.season is not None}
    filled = []
    for row in rows:
        if row.season is None and row.game_id in season_by_game:
            row = replace(row, season=season_by_game[row.game_id])
        filled.append(row)
    return filled


__all__ = [
    "MINUTES_KEYS",
    "attach_seasons",
    "has_value",
    "normalize_stat_row",
    "normalize_stat_rows",
    "safe_num",
]
