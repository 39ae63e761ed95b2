"""One-off migrations applied to games.json in place.

Both migrations rewrite the file with two-space indentation.
``fix_game_dates`` writes a timestamped backup next to the file first.
"""

from __future__ import annotations

import json
import time
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from hoops_archive.data.models import date_from_game_id
from hoops_archive.logging import SUCCESS, get_logger
from hoops_archive.types import MigrationError

logger = get_logger(__name__)

STRIPPED_FIELDS: tuple[str, ...] = ("Date", "ResultMargin")


def epoch_ms_from_game_id(game_id: Any) -> int | None:
    """UTC midnight of the game's date in epoch milliseconds."""
    day = date_from_game_id(game_id)
    if day is None:
        return None
    midnight = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    return int(midnight.timestamp() * 1000)


def _read_games(path: Path) -> tuple[str, list[Any]]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MigrationError(f"Cannot read {path}: {e}") from e
    try:
        games = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MigrationError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(games, list):
        raise MigrationError(f"Expected {path.name} to contain an array of games.")
    return raw, games


def _write_games(path: Path, games: list[Any]) -> None:
    path.write_text(json.dumps(games, indent=2, ensure_ascii=False), encoding="utf-8")


def backup_path_for(path: Path) -> Path:
    return path.with_name(f"{path.stem}_backup_{int(time.time() * 1000)}{path.suffix}")


def fix_game_dates(path: str | Path, backup: bool = True) -> int:
    """Align each game's ``Date`` with the date encoded in its ``GameID``.

    Games whose id does not encode a date are left alone.

    Args:
        path: games.json to rewrite.
        backup: Write the original file to ``games_backup_<ms>.json`` first.

    Returns:
        Number of games whose ``Date`` changed.

    Raises:
        MigrationError: If the file is unreadable, not JSON, or not an array.
    """
    path = Path(path)
    raw, games = _read_games(path)

    if backup:
        backup_file = backup_path_for(path)
        backup_file.write_text(raw, encoding="utf-8")
        logger.info("Backup created: {}", backup_file)

    updated = 0
    for game in games:
        if not isinstance(game, dict):
            continue
        correct = epoch_ms_from_game_id(game.get("GameID"))
        if correct is None:
            continue
        if game.get("Date") != correct:
            game["Date"] = correct
            updated += 1

    _write_games(path, games)
    logger.info("{} Updated {} game dates in {}", SUCCESS, updated, path)
    return updated


def strip_game_fields(path: str | Path, fields: Iterable[str] = STRIPPED_FIELDS) -> int:
    """Remove derivable fields from every game in games.json.

    Returns:
        Number of games written back.

    Raises:
        MigrationError: If the file is unreadable, not JSON, or not an array.
    """
    path = Path(path)
    _, games = _read_games(path)
    fields = tuple(fields)

    cleaned = [
        {k: v for k, v in game.items() if k not in fields} if isinstance(game, dict) else game
        for game in games
    ]
    _write_games(path, cleaned)
    logger.info(
        "{} Wrote {} games to {} without {}", SUCCESS, len(cleaned), path, "/".join(fields)
    )
    return len(cleaned)
