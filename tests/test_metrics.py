"""
tests/test_metrics.py - Growth, CAGR and ratio, plus catalog lookups.

Every undefined case must come back as None (never 0, never NaN).
"""

from __future__ import annotations

import pytest

from processing.metrics import (
    MetricKind,
    MetricParams,
    cagr,
    cagr_between,
    get_metric,
    growth,
    growth_between,
    ratio,
)


# ---------------------------------------------------------------------------
# Scalar functions
# ---------------------------------------------------------------------------

class TestGrowth:
    def test_reference_example(self):
        assert growth(1000, 1610.51) == pytest.approx(61.051)

    def test_decline_is_negative(self):
        assert growth(200, 150) == pytest.approx(-25.0)

    @pytest.mark.parametrize("start, end", [(None, 1.0), (1.0, None), (None, None), (0, 5.0), (0.0, 0.0)])
    def test_not_computable(self, start, end):
        assert growth(start, end) is None

    def test_zero_end_is_computable(self):
        assert growth(50, 0) == pytest.approx(-100.0)


class TestCagr:
    def test_reference_example(self):
        assert cagr(1000, 1610.51, 5) == pytest.approx(10.0)

    def test_one_year_equals_growth(self):
        assert cagr(100, 110, 1) == pytest.approx(growth(100, 110))

    @pytest.mark.parametrize("years", [0, -1, -5])
    def test_empty_interval(self, years):
        assert cagr(100, 200, years) is None

    @pytest.mark.parametrize("start", [0, -100])
    def test_non_positive_start(self, start):
        assert cagr(start, 100, 5) is None

    def test_negative_end(self):
        assert cagr(100, -50, 5) is None

    def test_missing_endpoint(self):
        assert cagr(None, 100, 5) is None
        assert cagr(100, None, 5) is None


class TestRatio:
    def test_basic(self):
        assert ratio(60000, 80000) == pytest.approx(0.75)

    @pytest.mark.parametrize("a, b", [(None, 1.0), (1.0, None), (1.0, 0), (1.0, 0.0)])
    def test_not_computable(self, a, b):
        assert ratio(a, b) is None


# ---------------------------------------------------------------------------
# Store / catalog lookups
# ---------------------------------------------------------------------------

class TestStoreLookups:
    def test_growth_between(self, catalog):
        store = catalog.combined("gdp", "constant")
        assert growth_between(store, "KOR", 2018, 2023) == pytest.approx(61.051)

    def test_cagr_between(self, catalog):
        store = catalog.combined("gdp", "constant")
        assert cagr_between(store, "KOR", 2018, 2023) == pytest.approx(10.0)

    def test_missing_endpoint_in_store(self, catalog):
        store = catalog.combined("gdp", "constant")
        assert growth_between(store, "FRA", 2018, 2023) is None
        assert growth_between(store, "IRL", 2018, 2023) is None

    def test_unknown_region(self, catalog):
        store = catalog.combined("gdp", "constant")
        assert growth_between(store, "ZZZ", 2018, 2023) is None

    def test_year_outside_table(self, catalog):
        store = catalog.combined("gdp", "constant")
        assert cagr_between(store, "USA", 1990, 2023) is None


class TestGetMetric:
    def test_value(self, catalog):
        params = MetricParams(year=2023, indicator="ppp", basis="constant")
        assert get_metric(MetricKind.VALUE, "USA", params, catalog) == 72000

    def test_growth_and_cagr(self, catalog):
        params = MetricParams(year=2023, start_year=2018)
        assert get_metric(MetricKind.GROWTH, "KOR", params, catalog) == pytest.approx(61.051)
        assert get_metric(MetricKind.CAGR, "KOR", params, catalog) == pytest.approx(10.0)

    def test_interval_metrics_need_start_year(self, catalog):
        assert get_metric(MetricKind.GROWTH, "KOR", MetricParams(year=2023), catalog) is None

    def test_ratio_always_uses_current_prices(self, catalog):
        constant = MetricParams(year=2023, basis="constant")
        current = MetricParams(year=2023, basis="current")
        expected = 33000 / 55000
        assert get_metric(MetricKind.RATIO, "KOR", constant, catalog) == pytest.approx(expected)
        assert get_metric(MetricKind.RATIO, "KOR", current, catalog) == pytest.approx(expected)

    def test_ratio_zero_denominator(self, catalog):
        assert get_metric(MetricKind.RATIO, "FRA", MetricParams(year=2023), catalog) is None

    def test_ratio_missing_denominator(self, catalog):
        assert get_metric(MetricKind.RATIO, "IRL", MetricParams(year=2023), catalog) is None

    def test_kind_accepts_string(self, catalog):
        assert get_metric("value", "USA", MetricParams(year=2023), catalog) == 65000

    def test_subnational_region(self, catalog):
        params = MetricParams(year=2023, start_year=2018)
        assert get_metric(MetricKind.GROWTH, "SUB_TEXAS", params, catalog) == pytest.approx(65000 / 60000 * 100 - 100)
