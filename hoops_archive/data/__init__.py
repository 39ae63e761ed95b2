"""Data layer for the archive.

This module reads the program's static JSON files and provides the record
types, validation and maintenance tooling around them.

Submodules:
    coerce: Lenient value coercion for hand-edited JSON
    models: Game, stat row, player, season and roster records
    loader: Resource loading and the indexed ``ArchiveData`` bundle
    validation: Data validation utilities
    migrations: One-off games.json rewrites
    boxscore: Box-score and game JSON export for manual entry

Example:
    >>> from hoops_archive.data.loader import ArchiveLoader
    >>> archive = ArchiveLoader("public/data", "girls").load()
    >>> archive.seasons_present()[:3]
    [2025, 2024, 2023]
"""

from __future__ import annotations

from hoops_archive.data.models import (
    GameRecord,
    Player,
    PlayerGameStatRow,
    RosterEntry,
    SeasonMeta,
    SeasonRoster,
    date_from_game_id,
)

__all__ = [
    "GameRecord",
    "Player",
    "PlayerGameStatRow",
    "RosterEntry",
    "SeasonMeta",
    "SeasonRoster",
    "date_from_game_id",
]
