"""Tests for team-level records."""
from __future__ import annotations

from hoops_archive.data.loader import ArchiveData
from hoops_archive.data.models import GameRecord
from hoops_archive.stats.team import (
    OpponentRecord,
    WinLoss,
    leading_scorers,
    records_vs_opponents,
    team_single_game_records,
    win_loss,
)


class TestWinLoss:
    """Tests for WinLoss."""

    def test_display(self) -> None:
        record = WinLoss()
        for result in ("W", "W", "L", None):
            record.add(result)

        assert record.display == "2-1"
        assert record.total == 3

    def test_display_with_ties(self) -> None:
        assert WinLoss(12, 3, 1).display == "12-3-1"

    def test_sample_records(self, archive: ArchiveData) -> None:
        assert win_loss(archive.games).display == "3-2"
        assert win_loss(archive.games_for_season(2024)).display == "2-1"
        assert win_loss(archive.games_for_season(2024), game_type="region").display == "2-0"


class TestRecordsVsOpponents:
    """Tests for records_vs_opponents."""

    def test_sample_opponents(self, archive: ArchiveData) -> None:
        records = records_vs_opponents(archive.games)

        assert list(records) == ["Central", "Eastside", "North Ridge"]
        central = records["Central"]
        assert (central.wins, central.losses) == (2, 1)
        assert [g.game_id for g in central.games] == ["20231208", "20241206", "20250110"]
        assert records["Eastside"].record.total == 0

    def test_unknown_and_blank_skipped(self) -> None:
        games = [
            GameRecord.from_dict({"GameID": 20250110, "Opponent": "Unknown", "Result": "W"}),
            GameRecord.from_dict({"GameID": 20250117, "Result": "W"}),
        ]

        assert records_vs_opponents(games) == {}

    def test_to_dict(self) -> None:
        record = OpponentRecord("Central", WinLoss(2, 1))

        assert record.to_dict() == {
            "opponent": "Central",
            "wins": 2,
            "losses": 1,
            "ties": 0,
            "total": 3,
            "games": [],
        }


class TestLeadingScorers:
    """Tests for leading_scorers."""

    def test_first_row_keeps_tie(self, archive: ArchiveData) -> None:
        leaders = leading_scorers(archive.rows)

        assert leaders["20241206"].player_id == "101"
        assert leaders["20241213"].player_id == "102"
        assert leaders["20250110"].player_id == "101"


class TestTeamSingleGameRecords:
    """Tests for team_single_game_records."""

    def test_sample_highs(self, archive: ArchiveData) -> None:
        highs = team_single_game_records(archive.games)

        assert [g.game_id for g in highs["most_points"]] == ["20250110"]
        assert [g.game_id for g in highs["fewest_allowed"]] == ["20231215"]
        assert [g.game_id for g in highs["largest_margin"]] == ["20250110"]

    def test_ties_and_incomplete_games(self) -> None:
        games = [
            GameRecord.from_dict({"GameID": 20250110, "IsComplete": "Yes",
                                  "TeamScore": 60, "OpponentScore": 40}),
            GameRecord.from_dict({"GameID": 20250117, "IsComplete": "Yes",
                                  "TeamScore": 60, "OpponentScore": 55}),
            GameRecord.from_dict({"GameID": 20250124, "IsComplete": "No",
                                  "TeamScore": 99, "OpponentScore": 10}),
        ]

        highs = team_single_game_records(games)

        assert [g.game_id for g in highs["most_points"]] == ["20250110", "20250117"]
        assert [g.game_id for g in highs["largest_margin"]] == ["20250110"]
