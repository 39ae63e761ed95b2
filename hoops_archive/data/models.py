"""Record types for the static JSON data files.

Each dataclass mirrors one JSON resource and knows how to build itself from a
raw mapping. Field names in the files are PascalCase (``GameID``,
``ThreePM``); attributes here are snake_case.

Example:
    >>> from hoops_archive.data.models import GameRecord
    >>> game = GameRecord.from_dict({"GameID": 20250110, "Season": 2024,
    ...                              "IsComplete": "Yes", "TeamScore": 61,
    ...                              "OpponentScore": 48, "Result": "W"})
    >>> game.margin
    13
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Any, Mapping

from hoops_archive.data.coerce import (
    to_id,
    to_optional_int,
    to_season,
    to_text,
)
from hoops_archive.types import COUNTING_STATS, GameId, PlayerId, SeasonId

RESULT_CODES: dict[str, str] = {"W": "W", "WIN": "W", "L": "L", "LOSS": "L", "T": "T", "TIE": "T"}


def date_from_game_id(game_id: Any) -> date | None:
    """Decode a ``YYYYMMDD`` game identifier into a calendar date.

    Returns None for identifiers that are not eight digits, that fall before
    1900, or that name an impossible day.
    """
    text = to_id(game_id)
    if text is None or len(text) != 8 or not text.isdigit():
        return None
    year, month, day = int(text[:4]), int(text[4:6]), int(text[6:])
    if year < 1900:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _parse_complete(value: Any) -> bool | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"yes", "y", "true", "1"}:
        return True
    if text in {"no", "n", "false", "0"}:
        return False
    return None


def _parse_result(value: Any) -> str | None:
    text = to_text(value)
    if text is None:
        return None
    return RESULT_CODES.get(text.upper())


# =============================================================================
# Games
# =============================================================================


@dataclass(frozen=True)
class GameRecord:
    """A single contest from games.json.

    Scores and result are only exposed once the game is complete; the raw
    values are kept so validation can report games that carry them early.
    When ``IsComplete`` is missing (older seasons) a game counts as complete
    if it has a result or both scores.
    """

    game_id: GameId
    season: SeasonId | None = None
    opponent: str | None = None
    location_type: str | None = None
    game_type: str | None = None
    is_complete: bool = False
    raw_team_score: int | None = None
    raw_opponent_score: int | None = None
    raw_result: str | None = None
    recap: str | None = None
    stored_margin: int | None = None
    date_ms: int | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> GameRecord:
        team_score = to_optional_int(raw.get("TeamScore"))
        opponent_score = to_optional_int(raw.get("OpponentScore"))
        result = _parse_result(raw.get("Result"))
        complete = _parse_complete(raw.get("IsComplete"))
        if complete is None:
            complete = result is not None or (
                team_score is not None and opponent_score is not None
            )

        return cls(
            game_id=to_id(raw.get("GameID")) or "",
            season=to_season(raw.get("Season", raw.get("Year"))),
            opponent=to_text(raw.get("Opponent")),
            location_type=to_text(
                raw.get("LocationType", raw.get("Location", raw.get("Site")))
            ),
            game_type=to_text(raw.get("GameType", raw.get("Type"))),
            is_complete=complete,
            raw_team_score=team_score,
            raw_opponent_score=opponent_score,
            raw_result=result,
            recap=to_text(raw.get("Recap", raw.get("Summary"))),
            stored_margin=to_optional_int(raw.get("ResultMargin")),
            date_ms=to_optional_int(raw.get("Date")),
        )

    @property
    def team_score(self) -> int | None:
        return self.raw_team_score if self.is_complete else None

    @property
    def opponent_score(self) -> int | None:
        return self.raw_opponent_score if self.is_complete else None

    @property
    def result(self) -> str | None:
        return self.raw_result if self.is_complete else None

    @property
    def margin(self) -> int | None:
        """Point margin from the team's perspective.

        Uses the stored ``ResultMargin`` when present, else
        ``team_score - opponent_score``. None for incomplete games or when
        neither source is available.
        """
        if not self.is_complete:
            return None
        if self.stored_margin is not None:
            return self.stored_margin
        if self.raw_team_score is None or self.raw_opponent_score is None:
            return None
        return self.raw_team_score - self.raw_opponent_score

    @property
    def game_date(self) -> date | None:
        """Date decoded from the identifier, else from the legacy ``Date`` field."""
        decoded = date_from_game_id(self.game_id)
        if decoded is not None:
            return decoded
        if self.date_ms is None:
            return None
        try:
            return datetime.fromtimestamp(self.date_ms / 1000, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            return None

    @property
    def has_known_opponent(self) -> bool:
        return bool(self.opponent) and self.opponent.lower() != "unknown"


# =============================================================================
# Player game stats
# =============================================================================


@dataclass(frozen=True)
class PlayerGameStatRow:
    """One player's box-score line for one game, already normalized.

    Counting stats are always finite floats. ``tracked`` names the stats
    whose source value was explicitly recorded, so totals can tell "never
    tracked" apart from a real zero. ``has_minutes_field`` records whether
    the source row carried a minutes key at all (even a null one).
    """

    player_id: PlayerId | None
    game_id: GameId | None
    season: SeasonId | None = None
    minutes: float | None = None
    has_minutes_field: bool = False
    stat_id: str | None = None
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
    tracked: frozenset[str] = field(default_factory=frozenset)

    def stat(self, name: str) -> float:
        if name == "minutes":
            return self.minutes or 0.0
        if name == "fgm":
            return self.fgm
        if name == "fga":
            return self.fga
        if name not in COUNTING_STATS:
            raise KeyError(name)
        return getattr(self, name)

    @property
    def fgm(self) -> float:
        return self.two_pm + self.three_pm

    @property
    def fga(self) -> float:
        return self.two_pa + self.three_pa

    def with_season(self, season: SeasonId | None) -> PlayerGameStatRow:
        return replace(self, season=season)


# =============================================================================
# Reference data
# =============================================================================


@dataclass(frozen=True)
class Player:
    """Identity record from players.json."""

    player_id: PlayerId
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    jersey_number: str | None = None
    grad_year: int | None = None
    years_with_team: str | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Player:
        player_id = to_id(raw.get("PlayerID", raw.get("PlayerId", raw.get("ID"))))
        grad = raw.get("GradYear", raw.get("ClassOf", raw.get("GraduationYear", raw.get("Class"))))
        return cls(
            player_id=player_id or "",
            first_name=to_text(raw.get("FirstName")),
            last_name=to_text(raw.get("LastName")),
            full_name=to_text(raw.get("PlayerName", raw.get("Name"))),
            jersey_number=to_id(raw.get("JerseyNumber", raw.get("Number", raw.get("Jersey")))),
            grad_year=to_optional_int(grad),
            years_with_team=to_text(raw.get("YearsWithTeam")),
        )

    @property
    def display_name(self) -> str:
        if self.full_name:
            return self.full_name
        parts = [p for p in (self.first_name, self.last_name) if p]
        if parts:
            return " ".join(parts)
        return f"Player {self.player_id}"


@dataclass(frozen=True)
class SeasonMeta:
    """Season display metadata from seasons.json."""

    season_id: SeasonId
    year_start: int | None = None
    year_end: int | None = None
    head_coach: str | None = None
    region_finish: str | None = None
    state_finish: str | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> SeasonMeta | None:
        season_id = to_optional_int(raw.get("SeasonID", raw.get("YearStart")))
        if season_id is None:
            return None
        return cls(
            season_id=season_id,
            year_start=to_optional_int(raw.get("YearStart")),
            year_end=to_optional_int(raw.get("YearEnd")),
            head_coach=to_text(raw.get("HeadCoach", raw.get("Coach"))),
            region_finish=to_text(raw.get("RegionFinish")),
            state_finish=to_text(raw.get("StateFinish")),
        )

    @property
    def label(self) -> str:
        start = self.year_start if self.year_start is not None else self.season_id
        end = self.year_end if self.year_end is not None else start + 1
        return f"{start}-{str(end)[-2:]}"


@dataclass(frozen=True)
class RosterEntry:
    player_id: PlayerId
    jersey_number: str | None = None


@dataclass(frozen=True)
class SeasonRoster:
    """A season's roster from seasonrosters.json (``SeasonID`` like ``"2025-26"``)."""

    season_id: str
    players: tuple[RosterEntry, ...] = ()

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> SeasonRoster:
        entries = []
        for item in raw.get("Players") or []:
            if not isinstance(item, Mapping):
                continue
            pid = to_id(item.get("PlayerID"))
            if pid is None:
                continue
            entries.append(RosterEntry(pid, to_id(item.get("JerseyNumber"))))
        return cls(season_id=str(raw.get("SeasonID", "")).strip(), players=tuple(entries))

    @property
    def season_year(self) -> SeasonId | None:
        """Starting year parsed from ``"2025-26"`` (or a bare year)."""
        return to_season(self.season_id)
