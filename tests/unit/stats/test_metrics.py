"""Tests for derived metrics."""
from __future__ import annotations

import math

import pytest

from hoops_archive.stats.aggregate import AggregatedTotals
from hoops_archive.stats.metrics import (
    NO_VALUE,
    DerivedMetrics,
    assist_to_turnover,
    derive_metrics,
    double_category_count,
    effective_fg_pct,
    is_double_double,
    is_triple_double,
    per_36,
    per_game,
    percentage,
    scoring_efficiency,
)


class TestPercentage:
    """Tests for the zero-attempt sentinel."""

    def test_zero_attempts_is_no_value(self) -> None:
        assert percentage(0, 0) is NO_VALUE
        assert percentage(5, 0) is NO_VALUE

    def test_zero_makes_is_zero(self) -> None:
        assert percentage(0, 10) == 0.0

    def test_scale(self) -> None:
        assert percentage(4, 10) == pytest.approx(40.0)

    def test_never_nan(self) -> None:
        value = percentage(math.inf, 10)
        assert value is None or not math.isnan(value)


class TestRates:
    """Tests for per-game, per-36 and ratio helpers."""

    def test_per_game(self) -> None:
        assert per_game(30, 2) == 15.0
        assert per_game(30, 0) is NO_VALUE

    def test_per_36_uses_sentinel_on_zero_minutes(self) -> None:
        """Per-36 follows the same no-value rule as every other rate."""
        assert per_36(10, 0) is NO_VALUE
        assert per_36(10, None) is NO_VALUE
        assert per_36(10, 18) == pytest.approx(20.0)

    def test_assist_to_turnover(self) -> None:
        assert assist_to_turnover(9, 3) == pytest.approx(3.0)
        assert assist_to_turnover(9, 0) is NO_VALUE


class TestShootingComposites:
    """Tests for eFG% and scoring efficiency."""

    def test_effective_fg_example(self) -> None:
        totals = AggregatedTotals(key="x", two_pm=4, two_pa=8, three_pm=2, three_pa=4)

        assert totals.fgm == 6
        assert totals.fga == 12
        assert effective_fg_pct(totals) == pytest.approx(58.333, abs=1e-3)
        assert f"{effective_fg_pct(totals):.1f}" == "58.3"

    def test_effective_fg_no_attempts(self) -> None:
        assert effective_fg_pct(AggregatedTotals(key="x")) is NO_VALUE

    def test_scoring_efficiency(self) -> None:
        totals = AggregatedTotals(
            key="x", points=20, two_pa=8, three_pa=4, fta=5, turnovers=2.8
        )

        # 20 / (12 + 0.44 * 5 + 2.8) = 20 / 17
        assert scoring_efficiency(totals) == pytest.approx(20 / 17)

    def test_scoring_efficiency_no_possessions(self) -> None:
        assert scoring_efficiency(AggregatedTotals(key="x", points=4)) is NO_VALUE


class TestDoubles:
    """Tests for double-figure categories."""

    def test_turnovers_ignored(self, make_row) -> None:
        row = make_row(PlayerID=1, Points=12, Turnovers=10)

        assert double_category_count(row) == 1
        assert is_double_double(row) is False

    def test_boundary(self, make_row) -> None:
        dd = make_row(PlayerID=1, Points=10, Rebounds=10, Assists=9)
        td = make_row(PlayerID=1, Points=10, Rebounds=10, Assists=10, Steals=10, Blocks=10)

        assert is_double_double(dd) and not is_triple_double(dd)
        assert is_double_double(td) and is_triple_double(td)
        assert double_category_count(td) == 5


class TestDeriveMetrics:
    """Tests for derive_metrics."""

    def test_from_totals(self) -> None:
        totals = AggregatedTotals(
            key="x", points=30, three_pm=4, three_pa=10, minutes=72, game_ids={"a", "b"}
        )

        metrics = derive_metrics(totals)

        assert metrics.three_pct == pytest.approx(40.0)
        assert metrics.two_pct is NO_VALUE
        assert metrics.ft_pct is NO_VALUE
        assert metrics.per_game["points"] == pytest.approx(15.0)
        assert metrics.per_36["points"] == pytest.approx(15.0)

    def test_from_row_defaults_to_one_game(self, make_row) -> None:
        row = make_row(PlayerID=1, Points=18, FTM=4, FTA=5)

        metrics = derive_metrics(row)

        assert metrics.per_game["points"] == 18.0
        assert metrics.ft_pct == pytest.approx(80.0)
        assert metrics.per_36["points"] is NO_VALUE

    def test_to_dict(self) -> None:
        data = DerivedMetrics(fg_pct=50.0).to_dict()

        assert data["fg_pct"] == 50.0
        assert data["ast_to"] is None
        assert data["per_game"] == {}
