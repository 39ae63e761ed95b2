"""Data validation for the hand-maintained JSON files.

Validation runs on a loaded archive and reports problems without changing
any data: aggregation keeps its silent-zero behavior whatever is flagged
here. Errors mark the archive invalid; warnings are informational.

Example:
    >>> from hoops_archive.data.validation import DataValidator
    >>> result = DataValidator().validate_archive(archive)
    >>> if not result.valid:
    ...     print(f"Errors: {result.errors}")
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hoops_archive.data.boxscore import compute_result
from hoops_archive.data.models import GameRecord, PlayerGameStatRow, date_from_game_id
from hoops_archive.logging import FAIL, SUCCESS, get_logger
from hoops_archive.types import SHOT_PAIRS, STAT_ABBREVIATIONS

if TYPE_CHECKING:
    from hoops_archive.data.loader import ArchiveData

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of data validation.

    Attributes:
        valid: Whether validation passed.
        errors: List of error messages (validation failures).
        warnings: List of warning messages (potential issues).
    """

    valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(message)
        self.valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning (does not affect validity)."""
        self.warnings.append(message)

    def merge(self, other: ValidationResult) -> None:
        """Merge another validation result into this one."""
        if not other.valid:
            self.valid = False
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


def _row_label(row: PlayerGameStatRow) -> str:
    return f"player {row.player_id or '?'} in game {row.game_id or '?'}"


class DataValidator:
    """Validates games and box-score rows.

    Checks:
    - Duplicate game ids (error)
    - Completed games missing a score (error)
    - Incomplete games already carrying scores or a result (warning)
    - Results that disagree with the scores (warning)
    - Game ids that do not encode a date (warning)
    - Made shots exceeding attempts (warning)
    - Rows for unknown games or players, duplicate player/game rows (warning)
    """

    def validate_games(self, games: Iterable[GameRecord]) -> ValidationResult:
        result = ValidationResult()
        games = list(games)

        counts = Counter(g.game_id for g in games)
        for game_id, count in counts.items():
            if count > 1:
                result.add_error(f"Game {game_id} appears {count} times in games.json")

        for game in games:
            self._check_game(game, result)
        return result

    def _check_game(self, game: GameRecord, result: ValidationResult) -> None:
        if not game.game_id:
            result.add_error("Game without a GameID")
            return
        if date_from_game_id(game.game_id) is None:
            result.add_warning(f"Game {game.game_id} id is not a YYYYMMDD date")

        has_scores = game.raw_team_score is not None and game.raw_opponent_score is not None
        if not game.is_complete:
            if game.raw_team_score is not None or game.raw_result is not None:
                result.add_warning(
                    f"Game {game.game_id} is not complete but has a score or result"
                )
            return

        if not has_scores:
            result.add_error(f"Game {game.game_id} is complete but missing a score")
            return

        expected = compute_result(game.raw_team_score, game.raw_opponent_score)
        if game.raw_result is not None and game.raw_result != expected:
            result.add_warning(
                f"Game {game.game_id} result {game.raw_result} disagrees with score "
                f"{game.raw_team_score}-{game.raw_opponent_score}"
            )

    def validate_rows(
        self,
        rows: Iterable[PlayerGameStatRow],
        game_ids: set[str] | None = None,
        player_ids: set[str] | None = None,
    ) -> ValidationResult:
        """Check box-score rows, optionally against known games and players."""
        result = ValidationResult()
        seen: Counter[tuple[str | None, str | None]] = Counter()

        for row in rows:
            for made, attempted in SHOT_PAIRS:
                if row.stat(made) > row.stat(attempted):
                    result.add_warning(
                        f"{_row_label(row)}: {STAT_ABBREVIATIONS[made]} "
                        f"{row.stat(made):g} exceeds {STAT_ABBREVIATIONS[attempted]} "
                        f"{row.stat(attempted):g}"
                    )
            if game_ids is not None and row.game_id is not None and row.game_id not in game_ids:
                result.add_warning(f"{_row_label(row)}: game not in games.json")
            if player_ids is not None and row.player_id not in player_ids:
                result.add_warning(f"{_row_label(row)}: player not in players.json")
            if row.game_id is not None:
                seen[(row.player_id, row.game_id)] += 1

        for (player_id, game_id), count in seen.items():
            if count > 1:
                result.add_warning(
                    f"Player {player_id} has {count} rows for game {game_id}"
                )
        return result

    def validate_archive(self, archive: ArchiveData) -> ValidationResult:
        """Run every check over a loaded archive."""
        result = ValidationResult()
        result.merge(self.validate_games(archive.games))
        result.merge(
            self.validate_rows(
                archive.rows,
                game_ids={g.game_id for g in archive.games},
                player_ids={p.player_id for p in archive.players},
            )
        )
        result.merge(
            self.validate_rows(
                archive.adjustments, player_ids={p.player_id for p in archive.players}
            )
        )

        status = SUCCESS if result.valid else FAIL
        logger.info(
            "{} Validated {} data: {} errors, {} warnings",
            status,
            archive.program,
            len(result.errors),
            len(result.warnings),
        )
        return result

