"""Label-unit search for value axes.

When the caller asks for a tick spacing ("unit") without fixing the label
count, the padded range is re-snapped so every label lands on a multiple
of the unit.  Candidate label counts are tried outward from the padded
count; for each, four snapping strategies are scored by
(excess padding, distance from the padded count, -count).
"""

import math
from typing import Optional, Tuple

import structlog

from config import EPSILON, MINIMUM_AXIS_LABELS

log = structlog.get_logger(__name__)


def search_unit_range(
    min_padded: float,
    max_padded: float,
    label_unit: float,
    pad_label_count: int,
    max_label_count: int,
    min_fixed: bool = False,
    max_fixed: bool = False,
    target_label_count: int = 0,
) -> Optional[Tuple[float, float, int]]:
    """Snap a padded range to multiples of `label_unit`.

    Args:
        min_padded: Padded axis minimum.
        max_padded: Padded axis maximum.
        label_unit: Desired label spacing (> 0).
        pad_label_count: Label count estimated by padding.
        max_label_count: Most labels that fit the axis.
        min_fixed: The user configured the axis minimum.
        max_fixed: The user configured the axis maximum.
        target_label_count: When > 0, only this count is tried.

    Returns:
        (min, max, label_count), or None when no candidate fits or the
        span is not finite.
    """
    data_span = max_padded - min_padded
    if not math.isfinite(data_span):
        log.debug("unit_search_non_finite_span", min=min_padded, max=max_padded)
        return None
    if label_unit >= data_span:
        return min_padded, max_padded, MINIMUM_AXIS_LABELS

    def down(v: float) -> float:
        return math.floor(v / label_unit) * label_unit

    def up(v: float) -> float:
        return math.ceil(v / label_unit) * label_unit

    best_count = 0
    best_min, best_max = min_padded, max_padded
    best_pad = math.inf
    best_delta = math.inf

    def accept(count: int, cand_min: float, cand_max: float) -> None:
        nonlocal best_count, best_min, best_max, best_pad, best_delta
        delta = abs(pad_label_count - count)
        pad = (min_padded - cand_min) + (cand_max - max_padded)
        better = pad < best_pad - EPSILON or (
            abs(pad - best_pad) < EPSILON
            and (delta < best_delta or (delta == best_delta and count > best_count))
        )
        if not better:
            return
        covers = cand_min <= min_padded + EPSILON and cand_max >= max_padded - EPSILON
        if best_count == 0 or covers:
            best_pad = pad
            best_min = cand_min
            best_max = cand_max
            best_count = count
            best_delta = delta

    def try_count(count: int) -> None:
        if count < MINIMUM_AXIS_LABELS or count > max_label_count:
            return
        span_count = count - 1
        span = span_count * label_unit

        # Snap both ends, then widen alternately until the interval fits
        snapped_min = down(min_padded)
        snapped_max = up(max_padded)
        snapped_interval = up((snapped_max - snapped_min) / span_count)
        flip = True
        while snapped_min + snapped_interval * span_count - snapped_max > EPSILON:
            if snapped_min - snapped_interval >= 0 and flip:
                flip = False
                snapped_min -= snapped_interval
            else:
                flip = True
                snapped_max += snapped_interval
        snapped_max = math.ceil(snapped_max / snapped_interval) * snapped_interval
        accept(count, snapped_min, snapped_max)

        # Hold max, shift min downward
        if not min_fixed:
            cand_max = up(max_padded)
            cand_min = cand_max - span
            if ((min_padded < 0 or cand_min >= -EPSILON)
                    and cand_min <= min_padded + EPSILON):
                accept(count, cand_min, cand_max)

        # Split extra headroom across both ends
        if not min_fixed and not max_fixed:
            cand_min = down(min_padded - (span - data_span) / 2)
            cand_max = cand_min + span
            if ((min_padded < 0 or cand_min >= -EPSILON)
                    and cand_min <= min_padded + EPSILON
                    and cand_max >= max_padded - EPSILON):
                accept(count, cand_min, cand_max)

        # Hold min, grow max upward
        if not max_fixed:
            cand_min = down(min_padded)
            cand_max = cand_min + span
            if cand_max >= max_padded - EPSILON:
                accept(count, cand_min, cand_max)

    if target_label_count > 0:
        max_delta = 0
    else:
        max_delta = max(
            pad_label_count - MINIMUM_AXIS_LABELS, max_label_count - pad_label_count,
        )
    for delta in range(max_delta + 1):
        lower = pad_label_count - delta
        if lower >= MINIMUM_AXIS_LABELS:
            try_count(lower)
        if delta != 0:
            upper = pad_label_count + delta
            if upper <= max_label_count:
                try_count(upper)
        if best_pad < EPSILON:
            break

    if best_count == 0:
        log.debug("unit_search_no_fit", unit=label_unit, pad_label_count=pad_label_count)
        return None
    return best_min, best_max, best_count
