"""Series provider for the axis kernel.

A chart hands the axis kernel a list of numeric series, each bound to a
value axis by index.  This module extracts what the kernel needs from
them: the per-axis data extent (optionally stacked), the longest series
length for category axes, and the default numeric label formatter.

Non-finite values (None, NaN, ±inf) are treated as nulls and ignored.
"""

import math
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from config import VALUE_LABEL_DECIMALS

ValueFormatter = Callable[[float], str]


@dataclass
class Series:
    values: Sequence[Optional[float]]
    name: str = ""
    y_axis_index: int = 0
    mark_point: bool = False


@dataclass
class SeriesList:
    series: List[Series] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.series)

    def __iter__(self):
        return iter(self.series)

    def series_count(self) -> int:
        return len(self.series)

    def series_values(self, index: int) -> np.ndarray:
        return _as_float_array(self.series[index].values)

    def series_y_axis_index(self, index: int) -> int:
        return self.series[index].y_axis_index

    def series_len(self, index: int) -> int:
        return len(self.series[index].values)

    def series_name(self, index: int) -> str:
        name = self.series[index].name
        return name if name else f"series:{index}"

    def has_mark_point(self) -> bool:
        return any(s.mark_point for s in self.series)


def _as_float_array(values: Sequence[Optional[float]]) -> np.ndarray:
    """Convert raw values to float64, mapping None and ±inf to NaN."""
    arr = np.array(
        [np.nan if v is None else v for v in values], dtype=float,
    )
    arr[~np.isfinite(arr)] = np.nan
    return arr


def get_series_min_max_sum_max(
    series_list: SeriesList,
    y_axis_index: int,
    stack_series: bool = False,
) -> Tuple[float, float, float]:
    """Data extent for one value axis.

    Returns:
        (min, max, sum_max) where sum_max is the largest per-index sum
        across the axis' series (only meaningful when stacking).

    Raises:
        ValueError: If the list is empty or the axis has no finite values.
    """
    if series_list.series_count() == 0:
        raise ValueError("empty series list")

    arrays = [
        series_list.series_values(i)
        for i in range(series_list.series_count())
        if series_list.series_y_axis_index(i) == y_axis_index
    ]
    finite = [a[~np.isnan(a)] for a in arrays]
    finite = [a for a in finite if a.size]
    if not finite:
        raise ValueError(f"no finite series values for y axis {y_axis_index}")

    all_values = np.concatenate(finite)
    min_val = float(all_values.min())
    max_val = float(all_values.max())

    sum_max = max_val
    if stack_series:
        width = max(len(a) for a in arrays)
        padded = np.full((len(arrays), width), np.nan)
        for row, a in enumerate(arrays):
            padded[row, : len(a)] = a
        sums = np.nansum(padded, axis=0)
        sum_max = float(sums.max())
    return min_val, max_val, sum_max


def get_series_max_data_count(series_list: SeriesList) -> int:
    """Length of the longest series (category slots to fill)."""
    if series_list.series_count() == 0:
        return 0
    return max(series_list.series_len(i) for i in range(series_list.series_count()))


def default_value_formatter(value: float) -> str:
    """Render a label value with up to two decimals and no trailing zeros."""
    if not math.isfinite(value):
        return str(value)
    text = f"{value:.{VALUE_LABEL_DECIMALS}f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text
