"""Tests for data validation utilities.

Tests the DataValidator class for game consistency, shot-stat sanity and
referential integrity between rows, games and players.
"""
from __future__ import annotations

import pytest

from hoops_archive.data.loader import ArchiveData
from hoops_archive.data.models import GameRecord
from hoops_archive.data.validation import DataValidator, ValidationResult
from hoops_archive.stats.aggregate import aggregate, by_player


class TestValidationResult:
    """Tests for ValidationResult dataclass."""

    def test_default_is_valid(self) -> None:
        """Should be valid by default."""
        result = ValidationResult()
        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []

    def test_add_error_marks_invalid(self) -> None:
        """Should mark as invalid when adding error."""
        result = ValidationResult()
        result.add_error("Test error")

        assert result.valid is False
        assert "Test error" in result.errors

    def test_add_warning_stays_valid(self) -> None:
        """Should stay valid when adding warning."""
        result = ValidationResult()
        result.add_warning("Test warning")

        assert result.valid is True
        assert "Test warning" in result.warnings

    def test_merge_results(self) -> None:
        """Should merge results correctly."""
        result1 = ValidationResult()
        result1.add_error("Error 1")
        result1.add_warning("Warning 1")

        result2 = ValidationResult()
        result2.add_warning("Warning 2")

        result1.merge(result2)

        assert result1.valid is False
        assert len(result1.errors) == 1
        assert len(result1.warnings) == 2

    def test_merge_invalid_marks_invalid(self) -> None:
        """Should mark as invalid when merging invalid result."""
        result1 = ValidationResult()
        result2 = ValidationResult()
        result2.add_error("Error")

        result1.merge(result2)

        assert result1.valid is False
        assert "Error" in result1.errors


class TestValidateGames:
    """Tests for validate_games."""

    @pytest.fixture
    def validator(self) -> DataValidator:
        """Create a validator instance."""
        return DataValidator()

    def test_clean_games(self, validator: DataValidator, archive: ArchiveData) -> None:
        result = validator.validate_games(archive.games)

        assert result.valid is True
        assert result.warnings == []

    def test_duplicate_game_id(self, validator: DataValidator) -> None:
        games = [GameRecord.from_dict({"GameID": 20250110})] * 2

        result = validator.validate_games(games)

        assert result.valid is False
        assert any("appears 2 times" in e for e in result.errors)

    def test_missing_game_id(self, validator: DataValidator) -> None:
        result = validator.validate_games([GameRecord.from_dict({"Opponent": "Central"})])

        assert "Game without a GameID" in result.errors

    def test_complete_game_missing_score(self, validator: DataValidator) -> None:
        game = GameRecord.from_dict({"GameID": 20250110, "IsComplete": "Yes", "TeamScore": 60})

        result = validator.validate_games([game])

        assert result.valid is False
        assert any("missing a score" in e for e in result.errors)

    def test_incomplete_game_with_score(self, validator: DataValidator) -> None:
        game = GameRecord.from_dict({"GameID": 20250110, "IsComplete": "No", "TeamScore": 60})

        result = validator.validate_games([game])

        assert result.valid is True
        assert any("not complete" in w for w in result.warnings)

    def test_result_disagrees_with_score(self, validator: DataValidator) -> None:
        game = GameRecord.from_dict(
            {"GameID": 20250110, "IsComplete": "Yes", "TeamScore": 40,
             "OpponentScore": 52, "Result": "W"}
        )

        result = validator.validate_games([game])

        assert any("disagrees with score 40-52" in w for w in result.warnings)

    def test_non_date_id(self, validator: DataValidator) -> None:
        result = validator.validate_games([GameRecord.from_dict({"GameID": "G-17"})])

        assert any("not a YYYYMMDD date" in w for w in result.warnings)


class TestValidateRows:
    """Tests for validate_rows."""

    @pytest.fixture
    def validator(self) -> DataValidator:
        """Create a validator instance."""
        return DataValidator()

    def test_makes_exceed_attempts(self, validator: DataValidator, make_row) -> None:
        """More threes made than attempted is flagged as a warning."""
        row = make_row(PlayerID=5, GameID=20250110, ThreePM=5, ThreePA=3)

        result = validator.validate_rows([row])

        assert result.valid is True
        assert result.warnings == ["player 5 in game 20250110: 3PM 5 exceeds 3PA 3"]

    def test_flagged_row_still_aggregates(self, validator: DataValidator, make_row) -> None:
        """Validation never changes what aggregation produces."""
        row = make_row(PlayerID=5, GameID=20250110, ThreePM=5, ThreePA=3, Points=15)

        validator.validate_rows([row])
        totals = aggregate([row], by_player)["5"]

        assert totals.three_pm == 5
        assert totals.three_pa == 3
        assert totals.points == 15

    def test_unknown_game_and_player(self, validator: DataValidator, make_row) -> None:
        row = make_row(PlayerID=5, GameID=20250110)

        result = validator.validate_rows([row], game_ids={"20241206"}, player_ids={"101"})

        assert any("game not in games.json" in w for w in result.warnings)
        assert any("player not in players.json" in w for w in result.warnings)

    def test_duplicate_rows(self, validator: DataValidator, make_row) -> None:
        rows = [make_row(PlayerID=5, GameID=20250110, Points=2)] * 2

        result = validator.validate_rows(rows)

        assert "Player 5 has 2 rows for game 20250110" in result.warnings


class TestValidateArchive:
    """Tests for validate_archive."""

    def test_sample_archive_is_clean(self, archive: ArchiveData) -> None:
        result = DataValidator().validate_archive(archive)

        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []
