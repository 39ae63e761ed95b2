"""Display formatting for records tables.

Every formatter renders ``None`` and non-finite numbers as ``DASH`` so the
"no value" sentinel from the metrics layer reaches the page as an em dash,
never as ``0`` or ``NaN``.

Example:
    >>> from hoops_archive.output.formatting import fmt_percent, fmt_number
    >>> fmt_percent(58.333), fmt_number(None)
    ('58.3%', '—')
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any

from hoops_archive.data.coerce import to_season
from hoops_archive.data.models import GameRecord, SeasonMeta, date_from_game_id

DASH = "—"


def _usable(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def fmt_number(value: Any, decimals: int = 1) -> str:
    number = _usable(value)
    if number is None:
        return DASH
    return f"{number:.{decimals}f}"


def fmt_percent(value: Any, decimals: int = 1) -> str:
    """Format a 0-100 percentage, e.g. ``'40.0%'``."""
    number = _usable(value)
    if number is None:
        return DASH
    return f"{number:.{decimals}f}%"


def fmt_ratio(value: Any) -> str:
    return fmt_number(value, 2)


def fmt_count(value: Any) -> str:
    """Whole numbers without decimals, anything else to one decimal."""
    number = _usable(value)
    if number is None:
        return DASH
    if number.is_integer():
        return str(int(number))
    return f"{number:.1f}"


def fmt_stat(value: Any, tracked: bool) -> str:
    """A counting stat that renders as a dash when it was never recorded."""
    if not tracked:
        return DASH
    return fmt_count(value)


def format_season_label(season: Any, meta: SeasonMeta | None = None) -> str:
    """Render a season as ``"2024-25"``.

    Args:
        season: Starting year, or a label that already contains a dash.
        meta: seasons.json metadata, preferred when available.
    """
    if meta is not None:
        return meta.label
    if isinstance(season, str) and "-" in season.strip()[1:]:
        return season.strip()
    year = to_season(season)
    if year is None:
        return DASH
    return f"{year}-{str(year + 1)[-2:]}"


def _as_date(game: GameRecord | Any) -> date | None:
    if isinstance(game, GameRecord):
        return game.game_date
    if isinstance(game, date):
        return game
    return date_from_game_id(game)


def format_game_date(game: GameRecord | Any, style: str = "short") -> str:
    """Format a game's date.

    Args:
        game: A ``GameRecord``, a ``date`` or a ``YYYYMMDD`` identifier.
        style: ``"short"`` (``Jan 10, 2025``), ``"long"``
            (``January 10, 2025``) or ``"iso"`` (``2025-01-10``).

    Returns:
        The formatted date, or ``"Unknown Date"`` when it cannot be decoded.
    """
    day = _as_date(game)
    if day is None:
        return "Unknown Date"
    if style == "iso":
        return day.isoformat()
    month = day.strftime("%B" if style == "long" else "%b")
    return f"{month} {day.day}, {day.year}"
