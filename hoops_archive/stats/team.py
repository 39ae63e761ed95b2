"""Team-level records: win/loss, records against opponents, team game highs.

These work over ``GameRecord`` objects rather than box-score rows, except
``leading_scorers`` which picks each game's top scorer from its rows.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from hoops_archive.data.models import GameRecord, PlayerGameStatRow
from hoops_archive.stats.leaderboards import tied_leaders


@dataclass
class WinLoss:
    wins: int = 0
    losses: int = 0
    ties: int = 0

    def add(self, result: str | None) -> None:
        if result == "W":
            self.wins += 1
        elif result == "L":
            self.losses += 1
        elif result == "T":
            self.ties += 1

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def display(self) -> str:
        """``"12-3"``, or ``"12-3-1"`` when there are ties."""
        text = f"{self.wins}-{self.losses}"
        return f"{text}-{self.ties}" if self.ties else text


@dataclass
class OpponentRecord:
    """Results against one opponent, with its games in date order."""

    opponent: str
    record: WinLoss = field(default_factory=WinLoss)
    games: list[GameRecord] = field(default_factory=list)

    @property
    def wins(self) -> int:
        return self.record.wins

    @property
    def losses(self) -> int:
        return self.record.losses

    def to_dict(self) -> dict[str, Any]:
        return {
            "opponent": self.opponent,
            "wins": self.record.wins,
            "losses": self.record.losses,
            "ties": self.record.ties,
            "total": self.record.total,
            "games": [g.game_id for g in self.games],
        }


def _date_key(game: GameRecord) -> tuple[date, str]:
    return (game.game_date or date.min, game.game_id)


def win_loss(games: Iterable[GameRecord], game_type: str | None = None) -> WinLoss:
    """Record over completed games, optionally for one game type."""
    record = WinLoss()
    for game in games:
        if game_type is not None and (game.game_type or "").lower() != game_type.lower():
            continue
        record.add(game.result)
    return record


def records_vs_opponents(games: Iterable[GameRecord]) -> dict[str, OpponentRecord]:
    """Results per opponent, skipping blank and ``"Unknown"`` opponents.

    Returns:
        Mapping of opponent name to ``OpponentRecord``, sorted by name.
    """
    records: dict[str, OpponentRecord] = {}
    for game in games:
        if not game.has_known_opponent:
            continue
        entry = records.setdefault(game.opponent, OpponentRecord(game.opponent))
        entry.record.add(game.result)
        entry.games.append(game)

    for entry in records.values():
        entry.games.sort(key=_date_key)
    return dict(sorted(records.items(), key=lambda item: item[0].lower()))


def leading_scorers(rows: Iterable[PlayerGameStatRow]) -> dict[str, PlayerGameStatRow]:
    """Top scorer per game; the first row seen keeps a tie."""
    leaders: dict[str, PlayerGameStatRow] = {}
    for row in rows:
        if row.game_id is None:
            continue
        current = leaders.get(row.game_id)
        if current is None or row.points > current.points:
            leaders[row.game_id] = row
    return leaders


def team_single_game_records(games: Iterable[GameRecord]) -> dict[str, list[GameRecord]]:
    """Program-best team games, each a tied-for-first list.

    Returns:
        ``most_points``, ``fewest_allowed`` and ``largest_margin`` mapped to
        the completed games holding each record.
    """
    completed = [g for g in games if g.is_complete]
    return {
        "most_points": [g for _, g in tied_leaders(completed, lambda g: g.team_score)],
        "fewest_allowed": [
            g for _, g in tied_leaders(completed, lambda g: g.opponent_score, lowest=True)
        ],
        "largest_margin": [g for _, g in tied_leaders(completed, lambda g: g.margin)],
    }
