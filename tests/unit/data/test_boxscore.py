"""Tests for box-score and game JSON export."""
from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from hoops_archive.data.boxscore import (
    BoxScoreLine,
    build_game_record,
    build_stat_rows,
    compute_margin,
    compute_result,
    game_id_from_date,
    make_stat_id,
    merge_stat_rows,
    read_box_score_csv,
)
from hoops_archive.stats.aggregate import aggregate, by_player
from hoops_archive.stats.normalize import normalize_stat_rows
from hoops_archive.types import BoxScoreError


class TestMakeStatId:
    """Tests for make_stat_id."""

    def test_concatenates_ids(self) -> None:
        assert make_stat_id("20251212", 202506) == 20251212202506

    def test_non_numeric(self) -> None:
        with pytest.raises(BoxScoreError):
            make_stat_id("20251212", "abc")


class TestBuildStatRows:
    """Tests for build_stat_rows."""

    def test_skips_dnp_and_blank_lines(self) -> None:
        """Only lines with an entered stat become rows."""
        lines = [
            BoxScoreLine("202506", {"Points": "14", "Rebounds": ""}),
            BoxScoreLine("202507", {"Points": "9"}, dnp=True),
            BoxScoreLine("202508", {"Points": "", "Assists": None}),
            BoxScoreLine("202509", {"Steals": "0"}),
        ]

        rows = build_stat_rows("20251212", lines)

        assert [r["PlayerID"] for r in rows] == [202506, 202509]

    def test_row_shape(self) -> None:
        rows = build_stat_rows(
            20251212, [BoxScoreLine("202506", {"Points": "14", "ThreePM": "2.0"})], season=2025
        )

        row = rows[0]
        assert row["StatID"] == 20251212202506
        assert row["GameID"] == 20251212
        assert row["Season"] == 2025
        assert row["Points"] == 14
        assert row["ThreePM"] == 2
        assert row["Rebounds"] is None
        assert row["StatComplete"] == "Yes"

    def test_season_omitted_when_not_given(self) -> None:
        rows = build_stat_rows("20251212", [BoxScoreLine("1", {"Points": 2})])

        assert "Season" not in rows[0]

    def test_invalid_game_id(self) -> None:
        with pytest.raises(BoxScoreError, match="Invalid GameID"):
            build_stat_rows("game-1", [BoxScoreLine("1", {"Points": 2})])

    def test_minutes_written_when_entered(self) -> None:
        """Minutes count as an entry and export only for lines that carry them."""
        lines = [
            BoxScoreLine("202506", {"Points": "14", "MinutesPlayed": "28"}),
            BoxScoreLine("202507", {"MinutesPlayed": "6"}),
            BoxScoreLine("202508", {"Points": "3"}),
        ]

        rows = build_stat_rows("20251212", lines, season=2025)

        assert [r.get("MinutesPlayed") for r in rows] == [28, 6, None]
        assert "MinutesPlayed" not in rows[2]

    def test_rows_with_minutes_count_as_played(self) -> None:
        lines = [
            BoxScoreLine("202506", {"Points": "14", "MinutesPlayed": "28"}),
            BoxScoreLine("202507", {"Points": "0", "MinutesPlayed": "0"}),
        ]

        rows = normalize_stat_rows(build_stat_rows("20251212", lines, season=2025))
        totals = aggregate(rows, by_player)

        assert totals["202506"].games_played == 1
        assert totals["202507"].games_played == 0


class TestMergeStatRows:
    """Tests for merge_stat_rows."""

    @pytest.fixture
    def existing(self) -> list[dict]:
        return [
            {"StatID": 1, "PlayerID": 5, "GameID": 20251212, "Points": 10},
            {"StatID": 2, "PlayerID": 6, "GameID": 20251212, "Points": 4},
            {"StatID": 3, "PlayerID": 5, "GameID": 20251205, "Points": 8},
        ]

    def test_existing_rows_win(self, existing: list[dict]) -> None:
        new = [
            {"PlayerID": 5, "GameID": 20251212, "Points": 12},
            {"PlayerID": 7, "GameID": 20251212, "Points": 3},
        ]

        merged = merge_stat_rows(existing, new)

        assert len(merged) == 4
        assert merged[0]["Points"] == 10
        assert merged[-1]["PlayerID"] == 7

    def test_overwrite_replaces_rows(self, existing: list[dict]) -> None:
        new = [{"PlayerID": 5, "GameID": 20251212, "Points": 12}]

        merged = merge_stat_rows(existing, new, overwrite=True)

        points = {(r["PlayerID"], r["GameID"]): r["Points"] for r in merged}
        assert points[(5, 20251212)] == 12
        assert points[(5, 20251205)] == 8
        assert len(merged) == 3

    def test_dnp_players_removed_for_game(self, existing: list[dict]) -> None:
        new = [{"PlayerID": 5, "GameID": 20251212, "Points": 12}]

        merged = merge_stat_rows(existing, new, dnp_player_ids=["6"])

        assert all(not (r["PlayerID"] == 6) for r in merged)
        assert len(merged) == 2


class TestReadBoxScoreCsv:
    """Tests for read_box_score_csv."""

    def test_reads_names_and_abbreviations(self, tmp_path: Path) -> None:
        path = tmp_path / "box.csv"
        path.write_text(
            "PlayerID,DNP,PTS,Rebounds,3PM,3PA,Notes\n"
            "202506,,14,6,2,5,hot\n"
            "202507,x,,,,,\n"
            ",,3,,,,\n"
        )

        lines = read_box_score_csv(path)

        assert [line.player_id for line in lines] == ["202506", "202507"]
        assert lines[0].values == {"Points": "14", "Rebounds": "6", "ThreePM": "2",
                                   "ThreePA": "5"}
        assert lines[0].dnp is False
        assert lines[1].dnp is True

    def test_minutes_column(self, tmp_path: Path) -> None:
        path = tmp_path / "box.csv"
        path.write_text("PlayerID,MIN,PTS\n202506,28,14\n")

        lines = read_box_score_csv(path)

        assert lines[0].values == {"MinutesPlayed": "28", "Points": "14"}

    def test_requires_player_id(self, tmp_path: Path) -> None:
        path = tmp_path / "box.csv"
        path.write_text("Name,PTS\nJordan,14\n")

        with pytest.raises(BoxScoreError, match="no PlayerID column"):
            read_box_score_csv(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(BoxScoreError, match="Cannot read box score"):
            read_box_score_csv(tmp_path / "missing.csv")


class TestGameRecordExport:
    """Tests for results, game ids and build_game_record."""

    @pytest.mark.parametrize(
        ("team", "opp", "expected"),
        [(61, 48, "W"), (40, 52, "L"), (50, 50, "T"), (None, 50, None)],
    )
    def test_compute_result(self, team: int | None, opp: int | None, expected: str | None) -> None:
        assert compute_result(team, opp) == expected

    def test_incomplete_has_no_result_or_margin(self) -> None:
        assert compute_result(61, 48, is_complete=False) is None
        assert compute_margin(61, 48, is_complete=False) is None
        assert compute_margin(61, 48) == 13

    def test_game_id_from_date(self) -> None:
        assert game_id_from_date("2025-12-12") == "20251212"
        assert game_id_from_date(date(2025, 1, 3)) == "20250103"
        with pytest.raises(BoxScoreError):
            game_id_from_date("12/12/2025")

    def test_scheduled_game(self) -> None:
        record = build_game_record(
            "2025-12-12", " Central ", 2025, location_type="Home", team_score=60,
            opponent_score=50,
        )

        assert record == {
            "GameID": 20251212,
            "Opponent": "Central",
            "LocationType": "Home",
            "GameType": None,
            "Result": None,
            "TeamScore": None,
            "OpponentScore": None,
            "Season": 2025,
            "IsComplete": "No",
        }

    def test_completed_game(self) -> None:
        record = build_game_record(
            "2025-12-12", "Central", "2025", team_score="60", opponent_score=50,
            is_complete=True,
        )

        assert record["Result"] == "W"
        assert record["TeamScore"] == 60
        assert record["IsComplete"] == "Yes"
        assert "Date" not in record
        assert "ResultMargin" not in record

    def test_requires_opponent_and_season(self) -> None:
        with pytest.raises(BoxScoreError, match="Opponent is required"):
            build_game_record("2025-12-12", "  ", 2025)
        with pytest.raises(BoxScoreError, match="Invalid season"):
            build_game_record("2025-12-12", "Central", None)
