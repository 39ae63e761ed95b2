"""Derived metrics over a box-score row or aggregated totals.

All functions are pure and accept anything implementing ``StatSource``. A
metric whose denominator is zero returns ``NO_VALUE`` (``None``), never 0 or
NaN, so "never attempted" stays distinguishable from "0% accurate". The
display layer renders ``NO_VALUE`` as a dash.

Example:
    >>> from hoops_archive.stats.metrics import percentage
    >>> percentage(0, 0) is None, percentage(0, 10)
    (True, 0.0)
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any

from hoops_archive.types import COUNTING_STATS, DOUBLE_CATEGORIES, StatSource

NO_VALUE = None

DOUBLE_THRESHOLD = 10
PER_MINUTES = 36
FTA_WEIGHT = 0.44


def _finite(value: float) -> float | None:
    return value if math.isfinite(value) else NO_VALUE


# =============================================================================
# Primitive rates
# =============================================================================


def percentage(made: float, attempted: float) -> float | None:
    """``made / attempted * 100``; no value when nothing was attempted."""
    if attempted <= 0:
        return NO_VALUE
    return _finite(made / attempted * 100)


def effective_fg_pct(source: StatSource) -> float | None:
    """Effective field-goal percentage, crediting threes at 1.5 makes."""
    fga = source.stat("two_pa") + source.stat("three_pa")
    if fga <= 0:
        return NO_VALUE
    fgm = source.stat("two_pm") + source.stat("three_pm")
    return _finite((fgm + 0.5 * source.stat("three_pm")) / fga * 100)


def per_game(total: float, games_played: float) -> float | None:
    if games_played <= 0:
        return NO_VALUE
    return _finite(total / games_played)


def per_36(total: float, minutes: float | None) -> float | None:
    """Rate per 36 minutes; no value when no minutes were recorded."""
    if not minutes or minutes <= 0:
        return NO_VALUE
    return _finite(total * PER_MINUTES / minutes)


def assist_to_turnover(assists: float, turnovers: float) -> float | None:
    """No value when there are no turnovers, even with assists."""
    if turnovers <= 0:
        return NO_VALUE
    return _finite(assists / turnovers)


def scoring_efficiency(source: StatSource) -> float | None:
    """Points per scoring possession: ``PTS / (FGA + 0.44 * FTA + TO)``."""
    fga = source.stat("two_pa") + source.stat("three_pa")
    denominator = fga + FTA_WEIGHT * source.stat("fta") + source.stat("turnovers")
    if denominator <= 0:
        return NO_VALUE
    return _finite(source.stat("points") / denominator)


# =============================================================================
# Doubles
# =============================================================================


def double_category_count(source: StatSource) -> int:
    """Number of double-figure categories among PTS, REB, AST, STL, BLK."""
    return sum(1 for name in DOUBLE_CATEGORIES if source.stat(name) >= DOUBLE_THRESHOLD)


def is_double_double(source: StatSource) -> bool:
    return double_category_count(source) >= 2


def is_triple_double(source: StatSource) -> bool:
    return double_category_count(source) >= 3


# =============================================================================
# Metric bag
# =============================================================================


@dataclass
class DerivedMetrics:
    """Computed percentages and rates for one row or aggregate.

    Percentages are on a 0-100 scale. ``per_game`` and ``per_36`` map each
    counting stat name to its rate.
    """

    fg_pct: float | None = NO_VALUE
    two_pct: float | None = NO_VALUE
    three_pct: float | None = NO_VALUE
    ft_pct: float | None = NO_VALUE
    efg_pct: float | None = NO_VALUE
    ast_to: float | None = NO_VALUE
    scoring_efficiency: float | None = NO_VALUE
    per_game: dict[str, float | None] = field(default_factory=dict)
    per_36: dict[str, float | None] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def derive_metrics(
    source: StatSource,
    games_played: float | None = None,
    minutes: float | None = None,
) -> DerivedMetrics:
    """Compute every derived metric for a row or ``AggregatedTotals``.

    Args:
        source: Row or totals.
        games_played: Defaults to ``source.games_played`` when present,
            otherwise one game.
        minutes: Defaults to ``source.stat("minutes")``.
    """
    if games_played is None:
        games_played = getattr(source, "games_played", 1)
    if minutes is None:
        minutes = source.stat("minutes")

    fgm = source.stat("two_pm") + source.stat("three_pm")
    fga = source.stat("two_pa") + source.stat("three_pa")

    return DerivedMetrics(
        fg_pct=percentage(fgm, fga),
        two_pct=percentage(source.stat("two_pm"), source.stat("two_pa")),
        three_pct=percentage(source.stat("three_pm"), source.stat("three_pa")),
        ft_pct=percentage(source.stat("ftm"), source.stat("fta")),
        efg_pct=effective_fg_pct(source),
        ast_to=assist_to_turnover(source.stat("assists"), source.stat("turnovers")),
        scoring_efficiency=scoring_efficiency(source),
        per_game={n: per_game(source.stat(n), games_played) for n in COUNTING_STATS},
        per_36={n: per_36(source.stat(n), minutes) for n in COUNTING_STATS},
    )
