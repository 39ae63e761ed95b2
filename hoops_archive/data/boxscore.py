"""Box-score and game export for manual entry into the data files.

New games are entered as a CSV box score (one line per rostered player) and
exported as JSON objects ready to paste into playergamestats.json and
games.json. Nothing here writes the data files themselves.

Example:
    >>> from hoops_archive.data.boxscore import BoxScoreLine, build_stat_rows
    >>> rows = build_stat_rows("20251212", [
    ...     BoxScoreLine("202506", {"Points": "14", "Rebounds": ""}),
    ...     BoxScoreLine("202507", {}, dnp=True),
    ... ])
    >>> rows[0]["StatID"], rows[0]["Rebounds"]
    (20251212202506, None)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

import pandas as pd

from hoops_archive.data.coerce import has_value, to_id, to_optional_float, to_optional_int
from hoops_archive.logging import WARN, get_logger
from hoops_archive.types import (
    STAT_ABBREVIATIONS,
    STAT_FIELDS,
    BoxScoreError,
    GameDict,
    StatRowDict,
)

logger = get_logger(__name__)

DNP_VALUES = {"1", "true", "yes", "y", "x", "dnp"}
MINUTES_FIELD = "MinutesPlayed"
MINUTES_COLUMNS = {"MIN", "MINUTES", "MINUTESPLAYED"}


def make_stat_id(game_id: Any, player_id: Any) -> int:
    """Compound row id: GameID digits followed by PlayerID digits.

    Raises:
        BoxScoreError: If either id is not numeric.
    """
    gid, pid = to_id(game_id), to_id(player_id)
    if not gid or not pid or not gid.isdigit() or not pid.isdigit():
        raise BoxScoreError(f"Cannot build StatID from GameID={game_id!r}, PlayerID={player_id!r}")
    return int(f"{int(gid)}{int(pid)}")


def _number_or_null(value: Any) -> int | float | None:
    number = to_optional_float(value)
    if number is None:
        return None
    return int(number) if number.is_integer() else number


# =============================================================================
# Box-score rows
# =============================================================================


@dataclass
class BoxScoreLine:
    """One player's entered line.

    ``values`` is keyed by JSON stat names, plus ``MinutesPlayed`` when the
    box score has a minutes column.
    """

    player_id: str
    values: dict[str, Any] = field(default_factory=dict)
    dnp: bool = False

    def has_entry(self) -> bool:
        """Whether any stat was typed in (DNP lines never count)."""
        if self.dnp:
            return False
        keys = (*STAT_FIELDS.values(), MINUTES_FIELD)
        return any(has_value(self.values.get(key)) for key in keys)


def build_stat_rows(
    game_id: Any,
    lines: Iterable[BoxScoreLine],
    season: int | None = None,
) -> list[StatRowDict]:
    """Build playergamestats.json rows for one game.

    DNP and blank lines are skipped. Blank stat cells export as null so they
    stay distinguishable from an entered zero. ``MinutesPlayed`` is written
    only for lines that carry it, since a minutes key on any row makes its
    season count games played by minutes.

    Raises:
        BoxScoreError: If the game id or a player id is not numeric.
    """
    gid = to_id(game_id)
    if not gid or not gid.isdigit():
        raise BoxScoreError(f"Invalid GameID {game_id!r}")

    rows: list[StatRowDict] = []
    skipped = 0
    for line in lines:
        if not line.has_entry():
            skipped += 1
            continue
        row: dict[str, Any] = {
            "StatID": make_stat_id(gid, line.player_id),
            "PlayerID": int(to_id(line.player_id)),
            "GameID": int(gid),
        }
        if season is not None:
            row["Season"] = season
        for key in STAT_FIELDS.values():
            row[key] = _number_or_null(line.values.get(key))
        if MINUTES_FIELD in line.values:
            row[MINUTES_FIELD] = _number_or_null(line.values[MINUTES_FIELD])
        row["StatComplete"] = "Yes"
        rows.append(row)  # type: ignore[arg-type]

    logger.debug("Built {} stat rows for game {} ({} skipped)", len(rows), gid, skipped)
    return rows


def merge_stat_rows(
    existing: Iterable[Mapping[str, Any]],
    new_rows: Iterable[Mapping[str, Any]],
    overwrite: bool = False,
    dnp_player_ids: Iterable[Any] = (),
) -> list[dict[str, Any]]:
    """Merge one game's new rows into the existing stat rows.

    Args:
        existing: Current playergamestats.json rows.
        new_rows: Rows from ``build_stat_rows`` (all for one game).
        overwrite: Replace existing rows for the same game and player. When
            False, existing rows win and colliding new rows are dropped.
        dnp_player_ids: Players marked DNP; their rows for the game are removed.
    """
    new_rows = [dict(r) for r in new_rows]
    game_ids = {to_id(r.get("GameID")) for r in new_rows}
    dnp = {to_id(p) for p in dnp_player_ids}

    def key(row: Mapping[str, Any]) -> tuple[str | None, str | None]:
        return (to_id(row.get("GameID")), to_id(row.get("PlayerID")))

    new_keys = {key(r) for r in new_rows}
    merged: list[dict[str, Any]] = []
    for row in existing:
        gid, pid = key(row)
        if gid in game_ids and pid in dnp:
            continue
        if overwrite and (gid, pid) in new_keys:
            continue
        merged.append(dict(row))

    present = {key(r) for r in merged}
    added = [r for r in new_rows if key(r) not in present]
    if len(added) < len(new_rows):
        logger.warning(
            "{} Kept {} existing rows over new entries", WARN, len(new_rows) - len(added)
        )
    return merged + added


def read_box_score_csv(path: str | Path) -> list[BoxScoreLine]:
    """Read a box-score CSV with a ``PlayerID`` column and stat columns.

    Stat columns use the JSON names (``Points``, ``TwoPM``) or their
    abbreviations (``PTS``, ``2PM``). An optional ``DNP`` column marks
    players who did not play, and an optional ``MIN`` (or ``MinutesPlayed``)
    column carries minutes.

    Raises:
        BoxScoreError: If the file cannot be read or has no PlayerID column.
    """
    try:
        frame = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise BoxScoreError(f"Cannot read box score {path}: {e}") from e

    columns = {c.strip(): c for c in frame.columns}
    if "PlayerID" not in columns:
        raise BoxScoreError(f"Box score {path} has no PlayerID column")

    aliases = {abbr.upper(): STAT_FIELDS[name] for name, abbr in STAT_ABBREVIATIONS.items()}
    stat_columns: dict[str, str] = {}
    for name, original in columns.items():
        if name in STAT_FIELDS.values():
            stat_columns[name] = original
        elif name.upper() in aliases:
            stat_columns[aliases[name.upper()]] = original
        elif name.upper() in MINUTES_COLUMNS:
            stat_columns[MINUTES_FIELD] = original

    lines = []
    for record in frame.to_dict(orient="records"):
        player_id = to_id(record[columns["PlayerID"]])
        if player_id is None:
            continue
        dnp = "DNP" in columns and str(record[columns["DNP"]]).strip().lower() in DNP_VALUES
        values = {key: record[col] for key, col in stat_columns.items()}
        lines.append(BoxScoreLine(player_id, values, dnp=dnp))
    return lines


# =============================================================================
# Game objects
# =============================================================================


def compute_result(
    team_score: int | None,
    opponent_score: int | None,
    is_complete: bool = True,
) -> str | None:
    """``W``, ``L`` or ``T``; None for incomplete games or missing scores."""
    if not is_complete or team_score is None or opponent_score is None:
        return None
    if team_score > opponent_score:
        return "W"
    if team_score < opponent_score:
        return "L"
    return "T"


def compute_margin(
    team_score: int | None,
    opponent_score: int | None,
    is_complete: bool = True,
) -> int | None:
    if not is_complete or team_score is None or opponent_score is None:
        return None
    return team_score - opponent_score


def game_id_from_date(value: str | date) -> str:
    """``"2025-12-12"`` (or a date) to ``"20251212"``.

    Raises:
        BoxScoreError: If the value is not a valid ISO date.
    """
    if isinstance(value, date):
        return value.strftime("%Y%m%d")
    try:
        return date.fromisoformat(str(value).strip()).strftime("%Y%m%d")
    except ValueError as e:
        raise BoxScoreError(f"Invalid game date {value!r}, expected YYYY-MM-DD") from e


def build_game_record(
    game_date: str | date,
    opponent: str,
    season: Any,
    location_type: str | None = None,
    game_type: str | None = None,
    team_score: Any = None,
    opponent_score: Any = None,
    is_complete: bool = False,
) -> GameDict:
    """Build a games.json object; ``GameID`` always comes from the date.

    ``Date`` and ``ResultMargin`` are not written (both are derivable).
    Scores and result are null until the game is complete.

    Raises:
        BoxScoreError: If the date, opponent or season is missing or invalid.
    """
    game_id = game_id_from_date(game_date)
    opponent = (opponent or "").strip()
    season_year = to_optional_int(season)
    if not opponent:
        raise BoxScoreError("Opponent is required")
    if season_year is None:
        raise BoxScoreError(f"Invalid season {season!r}")

    team = to_optional_int(team_score)
    opp = to_optional_int(opponent_score)
    return {
        "GameID": int(game_id),
        "Opponent": opponent,
        "LocationType": (location_type or "").strip() or None,
        "GameType": (game_type or "").strip() or None,
        "Result": compute_result(team, opp, is_complete),
        "TeamScore": team if is_complete else None,
        "OpponentScore": opp if is_complete else None,
        "Season": season_year,
        "IsComplete": "Yes" if is_complete else "No",
    }
