"""Axis range resolution.

An AxisRange is the immutable descriptor a renderer needs to place labels,
ticks and data on one axis.  Value axes go through three stages so that
several axes can be coordinated before labels are produced:

  prepare   → data extent, overrides, provisional label count, pixel fit
  resolve   → padding (+ optional nice-interval flex) and unit snapping
  finalize  → labels regenerated and measured for the final range

Category axes are resolved in one step.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from config import (
    DEFAULT_Y_AXIS_LABEL_COUNT_HIGH,
    DEFAULT_Y_AXIS_LABEL_COUNT_LOW,
    EPSILON,
    HORIZONTAL_LABEL_GUTTER_MAX,
    MINIMUM_AXIS_LABELS,
    VERTICAL_CATEGORY_LABEL_GUTTER,
)
from label_unit import search_unit_range
from range_padding import pad_range
from series_data import (
    SeriesList,
    ValueFormatter,
    default_value_formatter,
    get_series_max_data_count,
    get_series_min_max_sum_max,
)
from text_measure import FontStyle, TextMeasurer, default_text_measurer


@dataclass(frozen=True)
class AxisRange:
    is_category: bool
    labels: Tuple[str, ...]
    data_start_index: int
    tick_count: int
    divide_count: int
    label_count: int
    min: Optional[float]  # None for category axes
    max: Optional[float]
    size: int
    text_max_width: int
    text_max_height: int
    label_rotation: float = 0.0
    label_font_style: FontStyle = field(default_factory=FontStyle)

    def get_height(self, value: float) -> int:
        """Pixel offset of `value` from the axis start, clamped to [0, size]."""
        if self.min is None or self.max is None or self.max <= self.min:
            return 0
        span = self.max - self.min
        if math.isinf(span):
            ratio = (value / 2 - self.min / 2) / (self.max / 2 - self.min / 2)
        else:
            ratio = (value - self.min) / span
        if not math.isfinite(ratio):
            return 0 if ratio < 0 or math.isnan(ratio) else self.size
        return min(max(int(ratio * self.size), 0), self.size)

    def get_rest_height(self, value: float) -> int:
        return self.size - self.get_height(value)

    def get_range(self, index: int) -> Tuple[float, float]:
        """Pixel span of category slot `index`."""
        unit = self.size / self.divide_count
        return unit * index, unit * (index + 1)

    def auto_divide(self) -> List[int]:
        """Pixel boundaries splitting the axis into `divide_count` slots."""
        if self.divide_count <= 0:
            return [0, self.size]
        unit = self.size / self.divide_count
        return [int(i * unit) for i in range(self.divide_count + 1)]

    def tick_values(self) -> List[float]:
        """Numeric value at each label position of a value axis."""
        if self.min is None or self.max is None:
            return []
        return _label_values(self.min, self.max, self.label_count)


def _label_values(min_val: float, max_val: float, label_count: int) -> List[float]:
    span_count = label_count - 1
    step = (max_val - min_val) / span_count
    if math.isfinite(step):
        return [min_val + i * step for i in range(label_count)]
    # the span overflowed; interpolate between the ends instead
    return [
        min_val * (1 - i / span_count) + max_val * (i / span_count)
        for i in range(label_count)
    ]


@dataclass
class ValueAxisPrep:
    """Intermediate state between preparing and resolving a value axis."""

    min_val: float
    max_val: float
    min_pad_scale: float
    max_pad_scale: float
    pad_label_count: int  # estimated count after the collision check
    max_label_count: int  # most labels that fit the axis size
    labels_cfg: Tuple[str, ...]
    value_formatter: ValueFormatter
    label_count_cfg: int  # user's explicit count (0 = auto)
    label_unit: float
    min_cfg: Optional[float]
    max_cfg: Optional[float]
    data_start_index: int
    label_rotation: float
    font_style: FontStyle
    axis_size: int
    text_measurer: TextMeasurer
    labels: Tuple[str, ...]
    label_width: int
    label_height: int


def value_labels(
    labels_cfg: Sequence[str],
    value_formatter: ValueFormatter,
    min_val: float,
    max_val: float,
    label_count: int,
) -> Tuple[str, ...]:
    """Explicit labels fill leading positions; the rest are formatted values."""
    labels = []
    for i, value in enumerate(_label_values(min_val, max_val, label_count)):
        if i < len(labels_cfg):
            labels.append(labels_cfg[i])
        else:
            labels.append(value_formatter(value))
    return tuple(labels)


def _check_override(name: str, value: Optional[float]) -> None:
    if value is not None and not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")


def prepare_value_axis(
    series_list: SeriesList,
    axis_size: int,
    is_vertical: bool = True,
    y_axis_index: int = 0,
    stack_series: bool = False,
    min_cfg: Optional[float] = None,
    max_cfg: Optional[float] = None,
    range_value_padding_scale: Optional[float] = None,
    labels_cfg: Sequence[str] = (),
    data_start_index: int = 0,
    label_count: int = 0,
    unit: float = 0.0,
    label_count_adjustment: int = 0,
    value_formatter: Optional[ValueFormatter] = None,
    label_rotation: float = 0.0,
    font_style: Optional[FontStyle] = None,
    text_measurer: Optional[TextMeasurer] = None,
) -> ValueAxisPrep:
    """Gather the data extent and estimate the label count for one value axis.

    Args:
        series_list: All chart series; only those bound to `y_axis_index`
            contribute.
        axis_size: Axis length in pixels.
        is_vertical: Labels stack vertically (y axis) rather than side by side.
        stack_series: Use per-index sums for the upper extent.
        min_cfg: User minimum; disables min-side padding when it extends
            the data.
        max_cfg: User maximum; disables max-side padding when it extends
            the data.
        range_value_padding_scale: Multiplier on the padding percentages.
        labels_cfg: Explicit labels for leading positions.
        label_count: Explicit label count (0 = auto).  Disables the pixel
            fit check and nice-interval flex.
        unit: Desired label spacing (0 = none).
        label_count_adjustment: Added to the estimated count.
        value_formatter: float → label text.
        text_measurer: Label bounding-box measurer.

    Raises:
        ValueError: Empty series list, no finite data, or non-finite overrides.
    """
    _check_override("min", min_cfg)
    _check_override("max", max_cfg)
    if value_formatter is None:
        value_formatter = default_value_formatter
    if font_style is None:
        font_style = FontStyle()
    if text_measurer is None:
        text_measurer = default_text_measurer()

    min_val, max_val, sum_max = get_series_min_max_sum_max(
        series_list, y_axis_index, stack_series,
    )
    if stack_series:
        if min_val > 0:
            min_val -= 1
        max_val = sum_max

    min_pad_scale = max_pad_scale = 1.0
    if range_value_padding_scale is not None:
        min_pad_scale = max_pad_scale = range_value_padding_scale
    if min_cfg is not None and min_cfg < min_val:
        min_val = min_cfg
        min_pad_scale = 0.0
    if max_cfg is not None and max_cfg > max_val:
        max_val = max_cfg
        max_pad_scale = 0.0
    span = max_val - min_val
    finite_span = math.isfinite(span)
    decimal_data = (
        min_val != math.floor(min_val)
        or (finite_span and span != math.floor(span))
    )

    # Label count and padding are linked: estimate a count, measure
    # provisional labels, cap the count to what fits, then pad.
    initial_count = label_count
    if initial_count < 1:
        if not finite_span:
            initial_count = DEFAULT_Y_AXIS_LABEL_COUNT_HIGH
        elif unit > 0:
            # more labels than pixels can never fit
            initial_count = int(min(span / unit, axis_size)) + 1
        else:
            initial_count = min(
                max(int(span) + 1, DEFAULT_Y_AXIS_LABEL_COUNT_LOW),
                DEFAULT_Y_AXIS_LABEL_COUNT_HIGH,
            )
            if decimal_data:
                initial_count = min(initial_count * 2, DEFAULT_Y_AXIS_LABEL_COUNT_HIGH)
    initial_count = max(initial_count + label_count_adjustment, MINIMUM_AXIS_LABELS)

    labels_cfg = tuple(labels_cfg)
    labels = value_labels(labels_cfg, value_formatter, min_val, max_val, initial_count)
    label_width, label_height = text_measurer(labels, label_rotation, font_style)

    pad_label_count = initial_count
    max_label_count = initial_count
    if label_count == 0:
        if is_vertical:
            if label_height > 0:
                max_label_count = axis_size // label_height
        elif label_width > 0:
            gutter = min(HORIZONTAL_LABEL_GUTTER_MAX, label_width)
            max_label_count = axis_size // (label_width + gutter)
        if max_label_count < pad_label_count:
            pad_label_count = max(max_label_count, MINIMUM_AXIS_LABELS)
        if unit > 0 and pad_label_count > MINIMUM_AXIS_LABELS:
            pad_label_count -= 1

    return ValueAxisPrep(
        min_val=min_val,
        max_val=max_val,
        min_pad_scale=min_pad_scale,
        max_pad_scale=max_pad_scale,
        pad_label_count=pad_label_count,
        max_label_count=max_label_count,
        labels_cfg=labels_cfg,
        value_formatter=value_formatter,
        label_count_cfg=label_count,
        label_unit=unit,
        min_cfg=min_cfg,
        max_cfg=max_cfg,
        data_start_index=data_start_index,
        label_rotation=label_rotation,
        font_style=font_style,
        axis_size=axis_size,
        text_measurer=text_measurer,
        labels=labels,
        label_width=label_width,
        label_height=label_height,
    )


def resolve_value_axis(
    prep: ValueAxisPrep,
    flex_count: bool = False,
    target_label_count: int = 0,
) -> Tuple[float, float, int]:
    """Padded range and label count for a prepared axis.

    A `target_label_count` > 0 overrides the estimated count and disables
    flex, as does an explicit label count on the axis.
    """
    pad_label_count = prep.pad_label_count
    max_label_count = prep.max_label_count
    if prep.label_count_cfg > 0:
        flex_count = False
    if target_label_count > 0:
        pad_label_count = max_label_count = target_label_count
        flex_count = False

    min_padded, max_padded, label_count = pad_range(
        pad_label_count, prep.min_val, prep.max_val,
        prep.min_pad_scale, prep.max_pad_scale, flex_count,
    )

    # A unit without an explicit count may need another pass to honour it
    if prep.label_count_cfg == 0 and prep.label_unit > 0:
        snapped = search_unit_range(
            min_padded, max_padded, prep.label_unit,
            pad_label_count, max_label_count,
            min_fixed=prep.min_cfg is not None,
            max_fixed=prep.max_cfg is not None,
            target_label_count=target_label_count,
        )
        if snapped is not None:
            min_padded, max_padded, label_count = snapped

    return min_padded, max_padded, label_count


def finalize_value_axis(
    prep: ValueAxisPrep,
    min_padded: float,
    max_padded: float,
    label_count: int,
) -> AxisRange:
    """Build the AxisRange, regenerating labels when the range changed."""
    labels = prep.labels
    label_width, label_height = prep.label_width, prep.label_height
    if (len(labels) != label_count
            or prep.min_val - min_padded > EPSILON
            or max_padded - prep.max_val > EPSILON):
        labels = value_labels(
            prep.labels_cfg, prep.value_formatter, min_padded, max_padded, label_count,
        )
        label_width, label_height = prep.text_measurer(
            labels, prep.label_rotation, prep.font_style,
        )

    return AxisRange(
        is_category=False,
        labels=labels,
        data_start_index=prep.data_start_index,
        tick_count=label_count,
        divide_count=len(labels),
        label_count=label_count,
        min=min_padded,
        max=max_padded,
        size=prep.axis_size,
        text_max_width=label_width,
        text_max_height=label_height,
        label_rotation=prep.label_rotation,
        label_font_style=prep.font_style,
    )


def calculate_value_axis_range(
    series_list: SeriesList,
    axis_size: int,
    prefer_nice_intervals: bool = False,
    **options,
) -> AxisRange:
    """Resolve a single value axis.

    `options` are the keyword arguments of `prepare_value_axis`.  Nice
    interval flex only applies without an explicit label count.
    """
    prep = prepare_value_axis(series_list, axis_size, **options)
    min_padded, max_padded, label_count = resolve_value_axis(prep, prefer_nice_intervals)
    return finalize_value_axis(prep, min_padded, max_padded, label_count)


# ──────────────────────────────────────────────────────────────────────
# Category axis
# ──────────────────────────────────────────────────────────────────────

def calculate_category_axis_range(
    series_list: SeriesList,
    axis_size: int,
    is_vertical: bool = False,
    labels: Sequence[str] = (),
    data_start_index: int = 0,
    label_count: int = 0,
    label_count_adjustment: int = 0,
    unit: float = 0.0,
    label_rotation: float = 0.0,
    font_style: Optional[FontStyle] = None,
    text_measurer: Optional[TextMeasurer] = None,
) -> AxisRange:
    """Resolve a category (string label) axis that fits `axis_size` pixels.

    Missing labels are filled with 1-based index strings up to the longest
    series.  Without an explicit count, labels are thinned by a unit
    multiplier or a skip stride until they fit.

    Raises:
        ValueError: Empty series list and no labels.
    """
    if series_list.series_count() == 0 and not labels:
        raise ValueError("empty series list")
    if font_style is None:
        font_style = FontStyle()
    if text_measurer is None:
        text_measurer = default_text_measurer()

    labels = list(labels)
    for i in range(len(labels), get_series_max_data_count(series_list)):
        labels.append(str(i + 1))
    data_count = len(labels)

    text_width, text_height = text_measurer(labels, label_rotation, font_style)

    count = label_count
    if count <= 0 or count > data_count:
        count = data_count
    count = max(count + label_count_adjustment, MINIMUM_AXIS_LABELS)

    if label_count == 0:
        max_count = count
        if is_vertical:
            if text_height > 0:
                max_count = max(
                    axis_size // (text_height + VERTICAL_CATEGORY_LABEL_GUTTER),
                    MINIMUM_AXIS_LABELS,
                )
        elif text_width > 0:
            gutter = min(HORIZONTAL_LABEL_GUTTER_MAX, text_width)
            max_count = max(axis_size // (text_width + gutter), MINIMUM_AXIS_LABELS)

        if unit > 0:
            # smallest multiple of the unit whose label count fits
            multiplier = 1
            while math.ceil(data_count / (unit * multiplier)) > max_count:
                multiplier += 1
            count = max(math.ceil(data_count / (unit * multiplier)), MINIMUM_AXIS_LABELS)
        elif max_count < count:
            # skip labels by a stride rather than trimming a few
            step = 1
            candidate = 2 + (data_count - 2) // step
            while candidate > max_count:
                step += 1
                candidate = 2 + (data_count - 2) // step
            count = max(candidate, MINIMUM_AXIS_LABELS)

    # ticks denser than two per label cannot stay aligned with the labels
    tick_count = data_count
    if tick_count > count * 2:
        tick_count = count

    return AxisRange(
        is_category=True,
        labels=tuple(labels),
        data_start_index=data_start_index,
        tick_count=tick_count,
        divide_count=data_count,
        label_count=count,
        min=None,
        max=None,
        size=axis_size,
        text_max_width=text_width,
        text_max_height=text_height,
        label_rotation=label_rotation,
        label_font_style=font_style,
    )
