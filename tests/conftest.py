"""Shared pytest fixtures for archive tests.

This module contains fixtures used across multiple test modules:
- A temporary program data directory with sample JSON resources
- The loaded sample archive
- Configuration fixtures (test settings)
- A stat row factory

The sample program has two seasons. 2024 tracks minutes (every row carries
``MinutesPlayed``); 2023 is a legacy season with no minutes field, so every
row counts as a game played.

Example:
    def test_something(archive, make_row):
        # archive is the loaded sample program
        # make_row builds a normalized PlayerGameStatRow from raw keys
        pass
"""

from __future__ import annotations

import json
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from hoops_archive.config import Settings, reset_settings
from hoops_archive.data.loader import ArchiveData, ArchiveLoader
from hoops_archive.data.models import PlayerGameStatRow
from hoops_archive.stats.normalize import normalize_stat_row

# =============================================================================
# Sample Resources
# =============================================================================

SAMPLE_PLAYERS: list[dict[str, Any]] = [
    {"PlayerID": 101, "FirstName": "Jordan", "LastName": "Miles", "GradYear": 2025,
     "JerseyNumber": 3},
    {"PlayerID": 102, "FirstName": "Casey", "LastName": "Reed", "GradYear": 2026,
     "JerseyNumber": 12},
    {"PlayerID": 103, "FirstName": "Avery", "LastName": "Stone", "GradYear": 2024,
     "JerseyNumber": 24},
]

SAMPLE_SEASONS: list[dict[str, Any]] = [
    {"SeasonID": 2024, "YearStart": 2024, "YearEnd": 2025, "HeadCoach": "Pat Hale",
     "RegionFinish": "1st"},
    {"SeasonID": 2023, "YearStart": 2023, "YearEnd": 2024, "HeadCoach": "Pat Hale"},
]

SAMPLE_GAMES: list[dict[str, Any]] = [
    {"GameID": 20241206, "Opponent": "Central", "LocationType": "Home",
     "GameType": "Region", "Result": "W", "TeamScore": 61, "OpponentScore": 48,
     "Season": 2024, "IsComplete": "Yes"},
    {"GameID": 20241213, "Opponent": "North Ridge", "LocationType": "Away",
     "GameType": "Non-Region", "Result": "L", "TeamScore": 50, "OpponentScore": 55,
     "Season": 2024, "IsComplete": "Yes"},
    {"GameID": 20250110, "Opponent": "Central", "LocationType": "Away",
     "GameType": "Region", "Result": "W", "TeamScore": 70, "OpponentScore": 48,
     "Season": 2024, "IsComplete": "Yes"},
    {"GameID": 20250214, "Opponent": "Eastside", "LocationType": "Home",
     "GameType": "Region", "Result": None, "TeamScore": None, "OpponentScore": None,
     "Season": 2024, "IsComplete": "No"},
    {"GameID": 20231208, "Opponent": "Central", "LocationType": "Home",
     "GameType": "Region", "Result": "L", "TeamScore": 44, "OpponentScore": 52,
     "Season": 2023, "IsComplete": "Yes"},
    {"GameID": 20231215, "Opponent": "Unknown", "LocationType": "Neutral",
     "GameType": "Tournament", "Result": "W", "TeamScore": 58, "OpponentScore": 40,
     "Season": 2023, "IsComplete": "Yes"},
]


def _stat(
    player: int,
    game: int,
    pts: Any, reb: Any, ast: Any, stl: Any, blk: Any, to: Any,
    two: tuple[Any, Any], three: tuple[Any, Any], ft: tuple[Any, Any],
    minutes: Any = ...,
) -> dict[str, Any]:
    row = {
        "StatID": int(f"{game}{player}"),
        "PlayerID": player,
        "GameID": game,
        "Points": pts,
        "Rebounds": reb,
        "Assists": ast,
        "Steals": stl,
        "Blocks": blk,
        "Turnovers": to,
        "TwoPM": two[0],
        "TwoPA": two[1],
        "ThreePM": three[0],
        "ThreePA": three[1],
        "FTM": ft[0],
        "FTA": ft[1],
    }
    if minutes is not ...:
        row["MinutesPlayed"] = minutes
    return row


SAMPLE_STATS: list[dict[str, Any]] = [
    # 2024 (minutes tracked)
    _stat(101, 20241206, 20, 10, 4, 1, 0, 2, (7, 12), (2, 5), (0, 0), minutes=30),
    _stat(102, 20241206, 12, 3, 6, 2, 1, 1, (3, 6), (2, 4), (0, 2), minutes=28),
    _stat(103, 20241206, 0, 0, 0, 0, 0, 0, (0, 0), (0, 0), (0, 0), minutes=0),
    _stat(101, 20241213, 18, 8, 2, 0, 1, 3, (6, 14), (1, 6), (3, 4), minutes=32),
    _stat(102, 20241213, 22, 4, 5, 3, 0, 2, (5, 9), (3, 7), (3, 3), minutes=30),
    _stat(101, 20250110, 22, 12, 10, 2, 1, 4, (8, 13), (2, 4), (0, 1), minutes=31),
    _stat(102, 20250110, 22, 2, 3, 1, 0, 1, (8, 12), (2, 6), (0, 0), minutes=29),
    _stat(103, 20250110, 4, None, 0, 0, 0, 0, (2, 3), (0, 1), (0, 0), minutes=8),
    # 2023 (legacy, no minutes field)
    _stat(103, 20231208, 15, 6, 1, 0, 2, None, (6, 10), (1, 3), (0, 0)),
    _stat(101, 20231208, 9, 4, 2, 1, 0, 2, (3, 7), (1, 2), (0, 2)),
    _stat(103, 20231215, 13, 5, 2, 1, 0, 1, (5, 8), (1, 2), (0, 0)),
    _stat(101, 20231215, 6, 3, 1, 0, 0, 0, (3, 5), (0, 1), (0, 0)),
]

SAMPLE_ROSTERS: list[dict[str, Any]] = [
    {"SeasonID": "2024-25", "Players": [
        {"PlayerID": 101, "JerseyNumber": 3},
        {"PlayerID": 102, "JerseyNumber": 12},
        {"PlayerID": 103, "JerseyNumber": 24},
    ]},
]

SAMPLE_ADJUSTMENTS: list[dict[str, Any]] = [
    {"PlayerID": 103, "Points": 40, "Rebounds": 12, "Assists": 5},
]


def write_program(
    root: Path,
    program: str = "boys",
    sport: str = "basketball",
    **overrides: Any,
) -> Path:
    """Write the sample resources under ``root/<program>/<sport>``.

    Keyword overrides replace a resource's content by name (``games=[...]``);
    an override of ``None`` leaves that file out.
    """
    program_dir = root / program / sport
    program_dir.mkdir(parents=True, exist_ok=True)
    resources: dict[str, Any] = {
        "games": SAMPLE_GAMES,
        "playergamestats": SAMPLE_STATS,
        "players": SAMPLE_PLAYERS,
        "seasons": SAMPLE_SEASONS,
        "seasonrosters": SAMPLE_ROSTERS,
        "adjustments": SAMPLE_ADJUSTMENTS,
    }
    resources.update(overrides)
    for name, content in resources.items():
        if content is None:
            continue
        (program_dir / f"{name}.json").write_text(json.dumps(content, indent=2))
    return program_dir


# =============================================================================
# Paths
# =============================================================================


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Create and return a temporary data root holding the sample boys program."""
    root = tmp_path / "data"
    write_program(root)
    return root


@pytest.fixture
def program_dir(data_root: Path) -> Path:
    """Return the sample program's resource directory."""
    return data_root / "boys" / "basketball"


@pytest.fixture
def program_writer() -> Callable[..., Path]:
    """Return ``write_program`` for tests that need altered resources."""
    return write_program


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture
def test_settings(
    data_root: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Settings, None, None]:
    """Provide test settings pointing at the sample data.

    Automatically resets settings singleton after test.
    """
    monkeypatch.setenv("HOOPS_DATA_DIR", str(data_root))
    monkeypatch.setenv("HOOPS_PROGRAM", "boys")
    monkeypatch.setenv("HOOPS_SITE_DIR", str(tmp_path / "site"))
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    reset_settings()
    from hoops_archive.config import get_settings

    settings = get_settings()
    settings.ensure_directories()

    yield settings

    # Cleanup
    reset_settings()


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def archive(data_root: Path) -> ArchiveData:
    """Return the loaded sample program."""
    return ArchiveLoader(data_root, "boys").load()


@pytest.fixture
def make_row() -> Callable[..., PlayerGameStatRow]:
    """Return a factory building a normalized row from raw JSON keys.

    Example:
        row = make_row(PlayerID=7, GameID=20250110, Points=12, MinutesPlayed=20)
    """

    def factory(**raw: Any) -> PlayerGameStatRow:
        return normalize_stat_row(raw)

    return factory
