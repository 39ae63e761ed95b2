"""Type definitions, protocols and exceptions for the archive.

This module defines the identifier aliases, the stat field tables shared by
the data and stats layers, the ``StatSource`` protocol that lets metric
functions work over a single box-score row or an aggregate alike, and the
exception hierarchy.

Example:
    >>> from hoops_archive.types import StatSource
    >>> def shooting(source: StatSource) -> float:
    ...     return source.stat("three_pm")
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, TypedDict

# =============================================================================
# Type Aliases
# =============================================================================

PlayerId = str
GameId = str
SeasonId = int


# =============================================================================
# Stat Fields
# =============================================================================

# Counting stats in box-score order, mapped to their playergamestats.json keys
STAT_FIELDS: dict[str, str] = {
    "points": "Points",
    "rebounds": "Rebounds",
    "assists": "Assists",
    "turnovers": "Turnovers",
    "steals": "Steals",
    "blocks": "Blocks",
    "two_pm": "TwoPM",
    "two_pa": "TwoPA",
    "three_pm": "ThreePM",
    "three_pa": "ThreePA",
    "ftm": "FTM",
    "fta": "FTA",
}

COUNTING_STATS: tuple[str, ...] = tuple(STAT_FIELDS)

# Categories checked for double-doubles and triple-doubles
DOUBLE_CATEGORIES: tuple[str, ...] = (
    "points",
    "rebounds",
    "assists",
    "steals",
    "blocks",
)

# Made/attempted pairs
SHOT_PAIRS: tuple[tuple[str, str], ...] = (
    ("two_pm", "two_pa"),
    ("three_pm", "three_pa"),
    ("ftm", "fta"),
)

STAT_ABBREVIATIONS: dict[str, str] = {
    "points": "PTS",
    "rebounds": "REB",
    "assists": "AST",
    "turnovers": "TO",
    "steals": "STL",
    "blocks": "BLK",
    "two_pm": "2PM",
    "two_pa": "2PA",
    "three_pm": "3PM",
    "three_pa": "3PA",
    "ftm": "FTM",
    "fta": "FTA",
}


# =============================================================================
# Enums
# =============================================================================


class Program(str, Enum):
    """Programs that keep separate data folders."""

    BOYS = "boys"
    GIRLS = "girls"


class LocationType(str, Enum):
    """Where a game was played."""

    HOME = "Home"
    AWAY = "Away"
    NEUTRAL = "Neutral"


class GameType(str, Enum):
    """Game classifications used in games.json."""

    REGION = "Region"
    NON_REGION = "Non-Region"
    TOURNAMENT = "Tournament"
    SHOWCASE = "Showcase"
    REGION_TOURNAMENT = "Region Tournament"
    STATE_TOURNAMENT = "State Tournament"


# =============================================================================
# Protocols
# =============================================================================


class StatSource(Protocol):
    """Anything exposing counting stats by name (a row or an aggregate)."""

    def stat(self, name: str) -> float:
        """Return the value of a counting stat (0.0 when absent)."""
        ...


# =============================================================================
# TypedDicts
# =============================================================================


class StatRowDict(TypedDict, total=False):
    """A playergamestats.json row as exported for copy-paste."""

    StatID: int
    PlayerID: int
    GameID: int
    Season: int
    MinutesPlayed: float | None
    Points: int | None
    Rebounds: int | None
    Assists: int | None
    Turnovers: int | None
    Steals: int | None
    Blocks: int | None
    TwoPM: int | None
    TwoPA: int | None
    ThreePM: int | None
    ThreePA: int | None
    FTM: int | None
    FTA: int | None


class GameDict(TypedDict, total=False):
    """A games.json object as exported for copy-paste."""

    GameID: int
    Season: int
    Opponent: str
    LocationType: str
    GameType: str
    IsComplete: str
    TeamScore: int | None
    OpponentScore: int | None
    Result: str | None


# =============================================================================
# Exceptions
# =============================================================================


class ArchiveError(Exception):
    """Base exception for archive errors."""


class DataLoadError(ArchiveError):
    """A required data file could not be read or parsed."""


class RecordNotFoundError(ArchiveError):
    """A requested record does not exist in the loaded data."""


class PlayerNotFound(RecordNotFoundError):
    """Requested player not found."""


class GameNotFound(RecordNotFoundError):
    """Requested game not found."""


class SeasonNotFound(RecordNotFoundError):
    """Requested season has no games."""


class MigrationError(ArchiveError):
    """A data migration could not be applied."""


class BoxScoreError(ArchiveError):
    """Box-score or game export input is invalid."""
