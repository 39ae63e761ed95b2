"""Loading a program's static JSON resources.

Each program keeps its data under ``<data_dir>/<program>/<sport>/``:

    games.json, playergamestats.json, players.json      (required)
    seasons.json, seasonrosters.json, adjustments.json  (optional)

Required resources must load completely before any aggregation runs; a
missing or malformed one raises ``DataLoadError`` naming the file and path.
Optional resources fall back to an empty list.

Example:
    >>> from hoops_archive.data.loader import ArchiveLoader
    >>> archive = ArchiveLoader("public/data", "boys").load()
    >>> len(archive.games), len(archive.rows)
    (412, 5380)
"""

from __future__ import annotations

import json
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from hoops_archive.data.coerce import to_id
from hoops_archive.data.models import (
    GameRecord,
    Player,
    PlayerGameStatRow,
    SeasonMeta,
    SeasonRoster,
)
from hoops_archive.logging import get_logger
from hoops_archive.output.formatting import format_season_label
from hoops_archive.stats.normalize import attach_seasons, normalize_stat_rows
from hoops_archive.types import (
    DataLoadError,
    GameNotFound,
    PlayerId,
    PlayerNotFound,
    SeasonId,
)

logger = get_logger(__name__)

REQUIRED_RESOURCES: tuple[str, ...] = ("games", "playergamestats", "players")
OPTIONAL_RESOURCES: tuple[str, ...] = ("seasons", "seasonrosters", "adjustments")


def read_json_array(path: Path, label: str | None = None) -> list[Any]:
    """Read a JSON file that must hold an array.

    Args:
        path: File to read.
        label: Resource name used in error messages (defaults to file name).

    Raises:
        DataLoadError: If the file is missing, is an HTML page, is not valid
            JSON, or does not contain an array.
    """
    label = label or path.name
    if not path.is_file():
        raise DataLoadError(f"{label} failed (not found) at {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DataLoadError(f"{label} could not be read at {path}: {e}") from e

    trimmed = text.lstrip()
    if trimmed[:9].lower() == "<!doctype" or trimmed[:5].lower() == "<html":
        raise DataLoadError(f"{label} did not return JSON at {path} (returned HTML).")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise DataLoadError(f"{label} returned invalid JSON at {path}: {e}") from e
    if not isinstance(payload, list):
        raise DataLoadError(
            f"{label} at {path} must be a JSON array, got {type(payload).__name__}"
        )
    return payload


def _mappings(items: list[Any]) -> list[Mapping[str, Any]]:
    return [item for item in items if isinstance(item, Mapping)]


# =============================================================================
# Loaded bundle
# =============================================================================


@dataclass
class ArchiveData:
    """All resources of one program, parsed and indexed for lookups.

    ``rows`` are normalized and carry the season of their game when the row
    itself has none. ``adjustments`` are normalized rows that fold into
    career totals only (stats from games with no surviving box score).
    """

    program: str
    games: list[GameRecord] = field(default_factory=list)
    rows: list[PlayerGameStatRow] = field(default_factory=list)
    players: list[Player] = field(default_factory=list)
    seasons: list[SeasonMeta] = field(default_factory=list)
    rosters: list[SeasonRoster] = field(default_factory=list)
    adjustments: list[PlayerGameStatRow] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._players = {p.player_id: p for p in self.players if p.player_id}
        self._games = {g.game_id: g for g in self.games if g.game_id}
        self._seasons = {s.season_id: s for s in self.seasons}
        self._rows_by_player: dict[PlayerId, list[PlayerGameStatRow]] = defaultdict(list)
        self._rows_by_game: dict[str, list[PlayerGameStatRow]] = defaultdict(list)
        for row in self.rows:
            if row.player_id is not None:
                self._rows_by_player[row.player_id].append(row)
            if row.game_id is not None:
                self._rows_by_game[row.game_id].append(row)

    def player(self, player_id: Any) -> Player:
        """Raises ``PlayerNotFound`` for an unknown id."""
        key = to_id(player_id)
        if key not in self._players:
            raise PlayerNotFound(f"Player {player_id} not found in {self.program} data")
        return self._players[key]

    def find_player(self, player_id: Any) -> Player | None:
        return self._players.get(to_id(player_id))

    def player_name(self, player_id: Any, default: str = "Unknown Player") -> str:
        player = self._players.get(to_id(player_id))
        return player.display_name if player else default

    def game(self, game_id: Any) -> GameRecord:
        """Raises ``GameNotFound`` for an unknown id."""
        key = to_id(game_id)
        if key not in self._games:
            raise GameNotFound(f"Game {game_id} not found in {self.program} data")
        return self._games[key]

    def find_game(self, game_id: Any) -> GameRecord | None:
        return self._games.get(to_id(game_id))

    def season_meta(self, season: SeasonId | None) -> SeasonMeta | None:
        return self._seasons.get(season)

    def season_label(self, season: SeasonId | None) -> str:
        return format_season_label(season, self.season_meta(season))

    def games_for_season(self, season: SeasonId) -> list[GameRecord]:
        """The season's games in date order."""
        games = [g for g in self.games if g.season == season]
        return sorted(games, key=lambda g: (g.game_date is None, g.game_date, g.game_id))

    def rows_for_season(self, season: SeasonId) -> list[PlayerGameStatRow]:
        return [r for r in self.rows if r.season == season]

    def rows_for_player(self, player_id: Any) -> list[PlayerGameStatRow]:
        return list(self._rows_by_player.get(to_id(player_id), []))

    def rows_for_game(self, game_id: Any) -> list[PlayerGameStatRow]:
        return list(self._rows_by_game.get(to_id(game_id), []))

    def seasons_present(self) -> list[SeasonId]:
        """Seasons with at least one game or stat row, newest first."""
        present = {g.season for g in self.games} | {r.season for r in self.rows}
        present.discard(None)
        return sorted(present, reverse=True)

    def roster_for_season(self, season: SeasonId) -> SeasonRoster | None:
        return next((r for r in self.rosters if r.season_year == season), None)


# =============================================================================
# Loader
# =============================================================================


class ArchiveLoader:
    """Reads one program's JSON resources from disk.

    Attributes:
        data_dir: Root data directory (``public/data``).
        program: ``boys`` or ``girls``.
        sport: Sport folder name.
    """

    def __init__(
        self,
        data_dir: str | Path,
        program: str = "boys",
        sport: str = "basketball",
    ) -> None:
        self.data_dir = Path(data_dir)
        self.program = program
        self.sport = sport

    @property
    def program_dir(self) -> Path:
        return self.data_dir / self.program / self.sport

    def resource_path(self, name: str) -> Path:
        return self.program_dir / f"{name}.json"

    def read_required(self, name: str) -> list[Any]:
        return read_json_array(self.resource_path(name), f"{name}.json")

    def read_optional(self, name: str) -> list[Any]:
        """Like ``read_required`` but any failure yields an empty list."""
        try:
            return self.read_required(name)
        except DataLoadError as e:
            logger.debug("Optional resource unavailable: {}", e)
            return []

    def load(self) -> ArchiveData:
        """Load and normalize every resource.

        Raises:
            DataLoadError: If a required resource is missing or malformed.
        """
        logger.info("Loading {} {} data from {}", self.program, self.sport, self.program_dir)
        raw = {name: self.read_required(name) for name in REQUIRED_RESOURCES}
        optional = {name: self.read_optional(name) for name in OPTIONAL_RESOURCES}

        games = [GameRecord.from_dict(g) for g in _mappings(raw["games"])]
        rows = attach_seasons(normalize_stat_rows(raw["playergamestats"]), games)
        players = [Player.from_dict(p) for p in _mappings(raw["players"])]
        seasons = [
            meta
            for meta in (SeasonMeta.from_dict(s) for s in _mappings(optional["seasons"]))
            if meta is not None
        ]
        rosters = [SeasonRoster.from_dict(r) for r in _mappings(optional["seasonrosters"])]
        adjustments = normalize_stat_rows(optional["adjustments"])

        logger.info(
            "Loaded {} games, {} stat rows, {} players ({} adjustments)",
            len(games),
            len(rows),
            len(players),
            len(adjustments),
        )
        return ArchiveData(
            program=self.program,
            games=games,
            rows=rows,
            players=players,
            seasons=seasons,
            rosters=rosters,
            adjustments=adjustments,
        )


def load_archive(
    data_dir: str | Path | None = None,
    program: str | None = None,
    sport: str | None = None,
) -> ArchiveData:
    """Load a program using settings for anything not given."""
    from hoops_archive.config import get_settings

    settings = get_settings()
    loader = ArchiveLoader(
        data_dir if data_dir is not None else settings.data_dir,
        program or settings.program,
        sport or settings.sport,
    )
    return loader.load()
