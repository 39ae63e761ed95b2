"""Stats core: normalization, aggregation, derived metrics and leaderboards.

Every records page is the same pipeline: normalize rows, aggregate them with
a grouping key, derive metrics, and rank entities with a table of metric
definitions.

Submodules:
    normalize: Silent-zero coercion of raw box-score rows
    aggregate: Grouped totals with the games-played rule
    metrics: Percentages and rates with a single "no value" sentinel
    leaderboards: Padded top-N and tied-for-first ranking policies
    team: Win/loss records, opponents and team game highs

Example:
    >>> from hoops_archive.stats import aggregate, by_player, derive_metrics
    >>> totals = aggregate(rows, by_player)
    >>> derive_metrics(totals["202506"]).three_pct
    40.0
"""

from __future__ import annotations

from hoops_archive.stats.aggregate import (
    AggregatedTotals,
    aggregate,
    by_game,
    by_player,
    by_player_game,
    by_player_season,
    by_season,
    by_team,
    combine,
    is_played,
    minutes_tracked_seasons,
)
from hoops_archive.stats.leaderboards import (
    CAREER_RECORD_DEFINITIONS,
    LEADERBOARD_SIZE,
    LEGACY_LEADERBOARD_SIZE,
    SEASON_RECORD_DEFINITIONS,
    SINGLE_GAME_STATS,
    MetricDefinition,
    RankingEntry,
    build_leaderboard,
    single_game_leaders,
)
from hoops_archive.stats.metrics import (
    NO_VALUE,
    DerivedMetrics,
    assist_to_turnover,
    derive_metrics,
    effective_fg_pct,
    per_36,
    per_game,
    percentage,
    scoring_efficiency,
)
from hoops_archive.stats.normalize import normalize_stat_row, normalize_stat_rows, safe_num

__all__ = [
    "AggregatedTotals",
    "CAREER_RECORD_DEFINITIONS",
    "DerivedMetrics",
    "LEADERBOARD_SIZE",
    "LEGACY_LEADERBOARD_SIZE",
    "MetricDefinition",
    "NO_VALUE",
    "RankingEntry",
    "SEASON_RECORD_DEFINITIONS",
    "SINGLE_GAME_STATS",
    "aggregate",
    "assist_to_turnover",
    "build_leaderboard",
    "by_game",
    "by_player",
    "by_player_game",
    "by_player_season",
    "by_season",
    "by_team",
    "combine",
    "derive_metrics",
    "effective_fg_pct",
    "is_played",
    "minutes_tracked_seasons",
    "normalize_stat_row",
    "normalize_stat_rows",
    "per_36",
    "per_game",
    "percentage",
    "safe_num",
    "single_game_leaders",
]
