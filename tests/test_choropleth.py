"""
tests/test_choropleth.py - Log-scale colour binning.
"""

from __future__ import annotations

import pytest

from config import MAP_PALETTE, NO_DATA_COLOR
from geo.choropleth import bucket_index, build_scale, color_for

PALETTE = ["#p0", "#p1", "#p2", "#p3", "#p4"]
NO_DATA = "#none"


class TestColorFor:
    def test_log_buckets(self):
        # ln(10)/ln(1000) = 1/3, ln(100)/ln(1000) = 2/3
        assert color_for(10, 10, 1000, PALETTE, NO_DATA) == "#p1"
        assert color_for(100, 10, 1000, PALETTE, NO_DATA) == "#p3"

    def test_max_lands_in_last_bucket(self):
        assert color_for(1000, 10, 1000, PALETTE, NO_DATA) == "#p4"

    def test_small_values_clamped_to_first_bucket(self):
        assert color_for(1, 1, 1000, PALETTE, NO_DATA) == "#p0"
        assert color_for(0.5, 0.5, 1000, PALETTE, NO_DATA) == "#p0"

    @pytest.mark.parametrize("value", [None, 0, -10, float("nan")])
    def test_invalid_values_are_no_data(self, value):
        assert color_for(value, 10, 1000, PALETTE, NO_DATA) == NO_DATA

    def test_degenerate_range_first_bucket(self):
        assert color_for(10000, 10000, 10000, PALETTE, NO_DATA) == "#p0"

    def test_max_of_one_does_not_divide_by_zero(self):
        assert color_for(1, 0.5, 1, PALETTE, NO_DATA) == "#p0"

    def test_no_max(self):
        assert color_for(10, None, None, PALETTE, NO_DATA) == NO_DATA

    def test_default_palette(self):
        assert color_for(None, 1, 10) == NO_DATA_COLOR
        assert color_for(10, 1, 10) == MAP_PALETTE[-1]

    def test_bucket_index_bounds(self):
        for value in (2, 20, 200, 2000, 20000, 99999):
            idx = bucket_index(value, 2, 99999, 5)
            assert 0 <= idx <= 4

    def test_empty_palette(self):
        assert bucket_index(10, 1, 10, 0) is None


class TestBuildScale:
    def test_all_equal_values_share_first_bucket(self):
        scale = build_scale({"A": 10000, "B": 10000, "C": 10000}, PALETTE, NO_DATA)
        assert set(scale.colors.values()) == {"#p0"}
        assert scale.min_value == scale.max_value == 10000

    def test_no_defined_values(self):
        scale = build_scale({"A": None, "B": None}, PALETTE, NO_DATA)
        assert scale.colors == {"A": NO_DATA, "B": NO_DATA}
        assert not scale.has_data
        assert scale.min_value is None and scale.max_value is None

    def test_empty_snapshot(self):
        scale = build_scale({}, PALETTE, NO_DATA)
        assert scale.colors == {}

    def test_min_max_over_defined_positive_values(self):
        scale = build_scale({"A": 10, "B": 1000, "C": None, "D": -5, "E": 0}, PALETTE, NO_DATA)
        assert scale.min_value == 10
        assert scale.max_value == 1000
        assert scale.colors["C"] == NO_DATA
        assert scale.colors["D"] == NO_DATA
        assert scale.colors["E"] == NO_DATA

    def test_matches_color_for(self):
        values = {"A": 10, "B": 100, "C": 1000, "D": 3, "E": 450}
        scale = build_scale(values, PALETTE, NO_DATA)
        for code, value in values.items():
            assert scale.colors[code] == color_for(value, scale.min_value, scale.max_value, PALETTE, NO_DATA)

    def test_color_of_unknown_code(self):
        scale = build_scale({"A": 10}, PALETTE, NO_DATA)
        assert scale.color_of("ZZZ") == NO_DATA
