"""Tests for value and category axis resolution."""

import math

import pytest

from axis_range import (
    AxisRange,
    calculate_category_axis_range,
    calculate_value_axis_range,
    finalize_value_axis,
    prepare_value_axis,
    resolve_value_axis,
)
from conftest import fake_measurer, make_series
from series_data import Series, SeriesList, default_value_formatter


def value_axis(series, size=800, **options):
    options.setdefault("text_measurer", fake_measurer)
    return calculate_value_axis_range(series, size, **options)


def category_axis(series, size=800, **options):
    options.setdefault("text_measurer", fake_measurer)
    return calculate_category_axis_range(series, size, **options)


# ════════════════════════════════════════════════
#  AXIS RANGE DESCRIPTOR
# ════════════════════════════════════════════════


class TestAxisRangeGeometry:

    def make(self, **overrides):
        fields = dict(
            is_category=False, labels=("0", "25", "50", "75", "100"),
            data_start_index=0, tick_count=5, divide_count=4, label_count=5,
            min=0.0, max=100.0, size=200, text_max_width=24, text_max_height=16,
        )
        fields.update(overrides)
        return AxisRange(**fields)

    def test_height_is_proportional(self):
        ar = self.make()
        assert ar.get_height(50) == 100
        assert ar.get_height(25) == 50

    def test_height_is_clamped(self):
        ar = self.make()
        assert ar.get_height(150) == 200
        assert ar.get_height(-10) == 0

    def test_rest_height(self):
        assert self.make().get_rest_height(25) == 150

    def test_degenerate_range_has_zero_height(self):
        assert self.make(min=5.0, max=5.0).get_height(5) == 0

    def test_auto_divide(self):
        assert self.make().auto_divide() == [0, 50, 100, 150, 200]

    def test_get_range(self):
        assert self.make().get_range(1) == (50.0, 100.0)

    def test_tick_values(self):
        assert self.make().tick_values() == [0.0, 25.0, 50.0, 75.0, 100.0]

    def test_category_has_no_tick_values(self):
        assert self.make(is_category=True, min=None, max=None).tick_values() == []


# ════════════════════════════════════════════════
#  VALUE AXIS
# ════════════════════════════════════════════════


class TestValueAxis:

    def test_explicit_count_without_padding(self):
        ar = value_axis(make_series([10, 20, 30]), label_count=3, range_value_padding_scale=0.0)
        assert (ar.min, ar.max, ar.label_count) == (10, 30, 3)
        assert ar.labels == ("10", "20", "30")

    def test_unit_snaps_range(self):
        ar = value_axis(make_series([0, 50]), unit=5.0)
        assert (ar.min, ar.max, ar.label_count) == (0, 55, 12)
        assert ar.labels == tuple(str(v) for v in range(0, 60, 5))

    def test_default_padding(self):
        ar = value_axis(make_series([0, 50]))
        assert (ar.min, ar.max, ar.label_count) == (0, 54, 10)
        assert ar.labels == tuple(str(v) for v in range(0, 60, 6))

    def test_prefer_nice_intervals(self):
        ar = value_axis(make_series([0, 50]), prefer_nice_intervals=True)
        assert (ar.min, ar.max, ar.label_count) == (0, 55, 12)
        interval = (ar.max - ar.min) / (ar.label_count - 1)
        assert interval == pytest.approx(5)

    def test_explicit_count_disables_nice_flex(self):
        ar = value_axis(make_series([0, 50]), prefer_nice_intervals=True, label_count=10)
        assert ar.label_count == 10

    def test_decimal_data_doubles_label_count(self):
        ar = value_axis(make_series([1.1, 2.2, 3.3]))
        assert (ar.min, ar.max, ar.label_count) == (1, 5, 6)

    def test_stacked_series_use_sums(self):
        ar = value_axis(make_series([1, 2, 3], [4, 5, 6]), stack_series=True)
        assert (ar.min, ar.max) == (0, 10)

    def test_stacked_with_huge_unit(self):
        ar = value_axis(
            make_series([20, 46]), size=462, is_vertical=False,
            stack_series=True, unit=100000.0,
        )
        assert (ar.min, ar.max, ar.label_count) == (19, 49, 2)
        assert ar.labels == ("19", "49")

    def test_unit_on_horizontal_axis(self):
        ar = value_axis(
            make_series([0, 100]), is_vertical=False,
            range_value_padding_scale=0.0, unit=7.0,
        )
        assert (ar.min, ar.max, ar.label_count) == (0, 105, 6)
        assert ar.labels == ("0", "21", "42", "63", "84", "105")

    @pytest.mark.parametrize("value, expected", [(50, (49, 51)), (0, (0, 2)), (-3, (-4, -2))])
    def test_zero_span(self, value, expected):
        ar = value_axis(make_series([value, value]))
        assert (ar.min, ar.max) == expected

    @pytest.mark.parametrize("prefer_nice", [False, True])
    def test_overflowing_span_keeps_data_extent(self, prefer_nice):
        ar = value_axis(make_series([-1e308, 1e308]), prefer_nice_intervals=prefer_nice)
        assert (ar.min, ar.max, ar.label_count) == (-1e308, 1e308, 10)
        assert len(ar.labels) == 10
        assert all(math.isfinite(v) for v in ar.tick_values())
        assert ar.get_height(0) == 400

    def test_overflowing_span_skips_unit_search(self):
        ar = value_axis(make_series([-1e308, 1e308]), unit=5.0)
        assert (ar.min, ar.max, ar.label_count) == (-1e308, 1e308, 9)
        assert len(ar.labels) == 9

    def test_tiny_unit_on_wide_range_is_bounded_by_axis(self):
        ar = value_axis(make_series([0, 1e12]), size=400, unit=1.0)
        assert ar.min == 0
        assert ar.max >= 1e12
        assert ar.label_count <= 400 // 16

    def test_overrides_that_extend_data_are_exact(self):
        ar = value_axis(make_series([10, 20]), min_cfg=5.0, max_cfg=25.0)
        assert (ar.min, ar.max) == (5, 25)

    def test_override_inside_data_is_ignored(self):
        ar = value_axis(make_series([10, 20]), min_cfg=15.0)
        assert ar.min <= 10

    def test_non_finite_override_rejected(self):
        with pytest.raises(ValueError):
            value_axis(make_series([10, 20]), max_cfg=math.inf)

    def test_explicit_labels_fill_leading_positions(self):
        ar = value_axis(make_series([10, 20, 30]), label_count=3,
                        range_value_padding_scale=0.0, labels_cfg=["low"])
        assert ar.labels == ("low", "20", "30")

    def test_label_count_adjustment(self):
        ar = value_axis(make_series([10, 20, 30]), label_count=3,
                        range_value_padding_scale=0.0, label_count_adjustment=2)
        assert ar.label_count == 5

    def test_custom_formatter(self):
        ar = value_axis(make_series([10, 20, 30]), label_count=3,
                        range_value_padding_scale=0.0, value_formatter=lambda v: f"${v:.0f}")
        assert ar.labels == ("$10", "$20", "$30")

    def test_only_matching_axis_series_counted(self):
        series = SeriesList([
            Series([0, 10], y_axis_index=0),
            Series([1000, 5000], y_axis_index=1),
        ])
        ar = value_axis(series, y_axis_index=0)
        assert ar.max < 1000

    def test_nulls_and_infinities_ignored(self):
        ar = value_axis(make_series([None, 10, math.nan, 20, math.inf]),
                        label_count=3, range_value_padding_scale=0.0)
        assert (ar.min, ar.max) == (10, 20)

    def test_empty_series_list_raises(self):
        with pytest.raises(ValueError, match="empty series list"):
            value_axis(SeriesList())

    def test_axis_without_finite_values_raises(self):
        with pytest.raises(ValueError):
            value_axis(make_series([None, math.nan]))

    def test_small_axis_caps_label_count(self):
        ar = value_axis(make_series([0, 1000]), size=64)
        assert ar.label_count <= 64 // 16

    @pytest.mark.parametrize("values", [
        [0, 50], [1.1, 2.2, 3.3], [-3, 10], [37.2, 81.9], [-120.5, -3.3],
        [1000, 1450], [0.001, 0.009], [99, 101],
    ])
    @pytest.mark.parametrize("nice", [False, True])
    def test_contains_data_and_labels_follow_range(self, values, nice):
        ar = value_axis(make_series(values), prefer_nice_intervals=nice)
        assert ar.min <= min(values)
        assert ar.max >= max(values)
        assert ar.label_count >= 2
        assert len(ar.labels) == ar.label_count
        step = (ar.max - ar.min) / (ar.label_count - 1)
        expected = tuple(default_value_formatter(ar.min + i * step) for i in range(ar.label_count))
        assert ar.labels == expected

    def test_staged_resolution_matches_single_call(self):
        series = make_series([0, 50])
        prep = prepare_value_axis(series, 800, text_measurer=fake_measurer)
        staged = finalize_value_axis(prep, *resolve_value_axis(prep))
        assert staged == value_axis(series)

    def test_target_count_forces_label_count(self):
        prep = prepare_value_axis(make_series([0, 50]), 800, text_measurer=fake_measurer)
        mn, mx, count = resolve_value_axis(prep, flex_count=True, target_label_count=6)
        assert count == 6
        assert mn <= 0 and mx >= 50


# ════════════════════════════════════════════════
#  CATEGORY AXIS
# ════════════════════════════════════════════════


class TestCategoryAxis:

    def test_labels_filled_with_indexes(self):
        ar = category_axis(make_series([1], [2], [3]))
        assert ar.labels == ("1",)
        assert ar.divide_count == 1
        assert ar.label_count == 2
        assert ar.is_category and ar.min is None

    def test_provided_labels_filled_to_series_length(self):
        ar = category_axis(make_series([1, 1], [2, 1]), labels=["Custom"])
        assert ar.labels == ("Custom", "2")
        assert ar.divide_count == 2

    def test_explicit_count_with_adjustment(self):
        ar = category_axis(make_series([1], [2]), label_count=2, label_count_adjustment=1)
        assert ar.label_count == 2

    def test_negative_adjustment_floors_at_two(self):
        ar = category_axis(make_series([1], [2], [3]), label_count_adjustment=-2)
        assert ar.label_count == 2

    def test_count_capped_at_data_count(self):
        ar = category_axis(make_series([1], [2]), label_count=5)
        assert ar.label_count == 2

    def test_few_points_keep_every_label(self):
        ar = category_axis(make_series(range(5)))
        assert (ar.label_count, ar.tick_count, ar.divide_count) == (5, 5, 5)

    def test_stride_thins_crowded_labels(self):
        ar = category_axis(make_series(range(30)), size=200)
        assert ar.label_count == 6
        assert ar.divide_count == 30
        assert ar.tick_count == 6

    def test_vertical_gutter(self):
        ar = category_axis(make_series(range(30)), size=100, is_vertical=True)
        assert ar.label_count == 3

    @pytest.mark.parametrize("unit, expected", [(5.0, 6), (2.0, 5)])
    def test_unit_multiplier(self, unit, expected):
        ar = category_axis(make_series(range(30)), size=200, unit=unit)
        assert ar.label_count == expected

    def test_unit_divides_data_count(self):
        ar = category_axis(make_series(range(10)), unit=4.0)
        assert ar.label_count == 3

    def test_explicit_count_skips_collision_check(self):
        ar = category_axis(make_series(range(30)), size=50, label_count=4)
        assert ar.label_count == 4
        assert ar.tick_count == 4

    def test_ticks_stay_within_twice_labels(self):
        ar = category_axis(make_series(range(30)), size=200)
        assert ar.tick_count <= ar.label_count * 2

    def test_rotation_recorded(self):
        ar = category_axis(make_series([1, 2]), label_rotation=math.pi / 6)
        assert ar.label_rotation == pytest.approx(math.pi / 6)

    def test_empty_series_list_raises(self):
        with pytest.raises(ValueError, match="empty series list"):
            category_axis(SeriesList())
