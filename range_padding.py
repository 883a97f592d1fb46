"""Value-axis range padding.

Turns a raw data extent into a human-friendly axis extent:
  - Lower bound: prefer round anchors (0, 1, 10, 100, …, 2, 20, …, 5, 50, …)
    that sit within the allowed min-side padding band; otherwise round the
    minimum down to a friendly multiple of its order of magnitude.
  - Upper bound: round the per-label interval up to a friendly value so the
    labels land on clean numbers, leaving 5-20% headroom above the data.
  - Optional flex: move the label count up to ±3 to land on a "nice"
    interval from {1, 2, 2.5, 5} × 10^n.

Padding budgets are expressed in multiples of 1% of the data span
("span increments"), scaled per side by the configured padding scale.
"""

import math
from typing import Optional, Tuple

from config import (
    ANCHOR_EXPO_START,
    ANCHOR_EXPO_STOP,
    ANCHOR_MULTIPLES,
    ANCHOR_QUALITY_MARGIN,
    EPSILON,
    FRIENDLY_ROUND_STEPS,
    MINIMUM_AXIS_LABELS,
    NICE_FLEX_BASELINE_EXCESS_FACTOR,
    NICE_FLEX_DELTA,
    NICE_FLEX_DELTA_WEIGHT,
    NICE_FLEX_LARGE_DELTA_PENALTY,
    NICE_FLEX_MAX_PAD_FACTOR,
    NICE_NUMBERS,
    RANGE_MAX_PADDING_PERCENT_MAX,
    RANGE_MAX_PADDING_PERCENT_MIN,
    RANGE_MIN_PADDING_PERCENT_MAX,
    RANGE_MIN_PADDING_PERCENT_MIN,
    ZERO_SPAN_ADJUSTMENT,
)


# ──────────────────────────────────────────────────────────────────────
# Rounding helpers
# ──────────────────────────────────────────────────────────────────────

def nice_num(value: float) -> float:
    """Smallest "nice" number >= value from {1, 2, 2.5, 5} × 10^n.

    Returns 0 for non-positive input.
    """
    if value <= 0:
        return 0.0
    exp = math.floor(math.log10(value))
    base = 10.0 ** exp
    frac = value / base
    for n in NICE_NUMBERS:
        if n >= frac - EPSILON:
            return n * base
    return 10.0 ** (exp + 1)


def is_nice(value: float) -> bool:
    return value > 0 and abs(nice_num(value) - value) <= EPSILON


def friendly_round(
    val: float,
    increment: float,
    default_multiplier: float,
    min_multiplier: float,
    max_multiplier: float,
    add: bool,
) -> Tuple[float, float]:
    """Round `val` away from the data to a friendly value.

    Walks orders of magnitude from val's own down to 10^1 (one further below
    val's own for sub-unit values when rounding up), trying successive
    multiples of each.  A candidate is accepted when its distance from
    `val`, measured in `increment`s, lies in (min_multiplier, max_multiplier].

    Args:
        val: Value to round.
        increment: Size of one padding step (1% of the span, or a per-label
            share of it).
        default_multiplier: Steps applied when nothing friendlier fits.
        min_multiplier: Exclusive lower bound on accepted steps.
        max_multiplier: Inclusive upper bound on accepted steps.
        add: Round up (True) or down (False).

    Returns:
        (rounded_value, steps_used)
    """
    if not math.isfinite(val):
        return val, default_multiplier
    abs_val = abs(val)
    if abs_val > 0:
        start_oom = math.floor(math.log10(abs_val))
        lower_bound = 1
        if start_oom < 0 and add:
            lower_bound = start_oom - 1

        oom = start_oom
        while oom >= lower_bound:
            round_value = 10.0 ** oom
            proposed_multiplier = 0.0
            for round_adjust in range(FRIENDLY_ROUND_STEPS):
                if add:
                    proposed_val = math.ceil(abs_val / round_value) * round_value
                else:
                    proposed_val = math.floor(abs_val / round_value) * round_value
                proposed_val += round_value * round_adjust
                if val < 0:
                    proposed_val = -proposed_val
                if add:
                    proposed_multiplier = (proposed_val - val) / increment
                else:
                    proposed_multiplier = (val - proposed_val) / increment

                if proposed_multiplier > max_multiplier:
                    break  # multiplier only grows from here
                elif proposed_multiplier > min_multiplier:
                    return proposed_val, proposed_multiplier
            if proposed_multiplier <= min_multiplier:
                break  # finer magnitudes only shrink the multiplier
            oom -= 1

    # No friendly multiple fits, try the next whole number
    if increment * max_multiplier >= 1.0 and val != _trunc(val):
        if add:
            proposed_val = float(math.ceil(val))
            return proposed_val, (proposed_val - val) / increment
        proposed_val = float(math.floor(val))
        return proposed_val, (val - proposed_val) / increment

    if add:
        return val + increment * default_multiplier, default_multiplier
    return val - increment * default_multiplier, default_multiplier


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _trunc(value: float) -> float:
    """Truncate toward zero; non-finite values pass through."""
    if not math.isfinite(value):
        return value
    return float(math.trunc(value))


# ──────────────────────────────────────────────────────────────────────
# Lower bound selection
# ──────────────────────────────────────────────────────────────────────

def _find_anchor_min(
    min_val: float,
    span_increment: float,
    pad_pct_min: float,
    pad_pct_max: float,
) -> Tuple[Optional[float], float, bool]:
    """Search round anchors for the lower bound.

    Returns:
        (anchor or None, span-increment multiplier used, passed_low_target)
        where passed_low_target records that a too-low anchor was skipped
        for positive data before the winning anchor was found.
    """
    lowest_allowed = min_val - span_increment * pad_pct_max
    highest_allowed = min_val - span_increment * pad_pct_min
    passed_low_target = False
    for multiple in ANCHOR_MULTIPLES:
        if min_val < 0:
            multiple = -multiple
        for expo in range(ANCHOR_EXPO_START, ANCHOR_EXPO_STOP):
            if expo == -1 and multiple != 1.0:
                continue  # the 0 anchor is tested once
            # floor(10^-1) yields the 0 anchor
            target = math.floor(10.0 ** expo) * multiple
            if target < lowest_allowed:
                if min_val < 0:
                    break  # negative targets only get lower
                passed_low_target = True
            elif target <= highest_allowed:
                return target, (min_val - target) / span_increment, passed_low_target
            elif min_val >= 0:
                break  # past the acceptable band for positive data
    return None, 0.0, passed_low_target


def _interval_quality(
    candidate_min: float,
    multiplier: float,
    max_val: float,
    span_increment: float,
    span_count: int,
    max_pct_min: float,
    max_pct_max: float,
) -> float:
    """Fractional part (at one decimal) of the final interval; 0 is clean."""
    interval = (max_val - candidate_min) / span_count
    rounded, _ = friendly_round(
        interval, span_increment / span_count,
        max(multiplier, max_pct_min), max_pct_min, max_pct_max, True,
    )
    final_max = candidate_min + rounded * span_count
    trunk = _trunc(final_max)
    if trunk >= max_val + span_increment * max_pct_min:
        final_max = trunk
    scaled = (final_max - candidate_min) / span_count * 10
    if not math.isfinite(scaled):
        return math.inf
    return abs(scaled - _round_half_away(scaled))


def _zero_span_range(value: float) -> Tuple[float, float]:
    if value == 0:
        return 0.0, 2 * ZERO_SPAN_ADJUSTMENT
    return value - ZERO_SPAN_ADJUSTMENT, value + ZERO_SPAN_ADJUSTMENT


def _non_finite_range(min_val: float, max_val: float) -> Tuple[float, float]:
    """Fallback extent when an end or the span is not finite."""
    if math.isfinite(min_val) and math.isfinite(max_val):
        return min_val, max_val  # span overflowed; nothing to pad with
    if math.isfinite(min_val):
        return _zero_span_range(min_val)
    if math.isfinite(max_val):
        return _zero_span_range(max_val)
    return _zero_span_range(0.0)


# ──────────────────────────────────────────────────────────────────────
# Main padding
# ──────────────────────────────────────────────────────────────────────

def pad_range(
    label_count: int,
    min_val: float,
    max_val: float,
    min_padding_scale: float = 1.0,
    max_padding_scale: float = 1.0,
    flex_count: bool = False,
) -> Tuple[float, float, int]:
    """Expand [min_val, max_val] to a friendly axis extent.

    Args:
        label_count: Candidate number of labels (>= 2).
        min_val: Raw data minimum.
        max_val: Raw data maximum.
        min_padding_scale: Multiplier on the min-side padding band; 0
            disables padding below the data.
        max_padding_scale: Multiplier on the max-side padding band; 0
            disables headroom above the data.
        flex_count: Allow the label count to move ±3 to land on a nice
            interval.

    Returns:
        (padded_min, padded_max, label_count)
    """
    if not math.isfinite(max_val - min_val):
        padded_min, padded_max = _non_finite_range(min_val, max_val)
        return padded_min, padded_max, label_count
    if abs(max_val - min_val) < EPSILON:
        padded_min, padded_max = _zero_span_range(min_val)
        return padded_min, padded_max, label_count
    if min_padding_scale <= 0.0 and max_padding_scale <= 0.0:
        return min_val, max_val, label_count

    min_pct_min = RANGE_MIN_PADDING_PERCENT_MIN * min_padding_scale
    min_pct_max = RANGE_MIN_PADDING_PERCENT_MAX * min_padding_scale
    max_pct_min = RANGE_MAX_PADDING_PERCENT_MIN * max_padding_scale
    max_pct_max = RANGE_MAX_PADDING_PERCENT_MAX * max_padding_scale

    span_increment = (max_val - min_val) * 0.01
    min_floor = min_val - span_increment * min_pct_min

    min_result, multiplier, passed_low_target = _find_anchor_min(
        min_val, span_increment, min_pct_min, min_pct_max,
    )
    if min_result is None:
        min_result, multiplier = friendly_round(
            min_val, span_increment, min_pct_min, min_pct_min, min_pct_max, False,
        )
    elif passed_low_target and abs(max_val) >= 10:
        # The anchor was only reachable by skipping too-low targets; a far
        # anchor can inflate the max rounding, so compare interval quality
        # against the friendly-round bound.
        fr_min, fr_mult = friendly_round(
            min_val, span_increment, min_pct_min, min_pct_min, min_pct_max, False,
        )
        fr_trunk = _trunc(fr_min)
        if fr_trunk <= min_floor:
            fr_min = fr_trunk
        anchor_min = min_result
        anchor_trunk = _trunc(anchor_min)
        if anchor_trunk <= min_floor:
            anchor_min = anchor_trunk

        span_count = label_count - 1
        anchor_q = _interval_quality(
            anchor_min, multiplier, max_val, span_increment, span_count,
            max_pct_min, max_pct_max,
        )
        fr_q = _interval_quality(
            fr_min, fr_mult, max_val, span_increment, span_count,
            max_pct_min, max_pct_max,
        )
        if fr_q < anchor_q - ANCHOR_QUALITY_MARGIN:
            min_result, multiplier = fr_min, fr_mult

    min_trunk = _trunc(min_result)
    if min_trunk <= min_floor:
        min_result = min_trunk  # drop float multiplication noise

    if abs(max_val - min_result) < EPSILON:
        padded_min, padded_max = _zero_span_range(min_result)
        return padded_min, padded_max, label_count
    if max_padding_scale <= 0.0:
        return min_result, max_val, label_count

    # Baseline max: always computed, also caps the flex search
    if abs(max_val) < 10:
        baseline_max = float(math.ceil(max_val)) + 1
    else:
        span_count = label_count - 1
        interval = (max_val - min_result) / span_count
        rounded, _ = friendly_round(
            interval, span_increment / span_count,
            max(multiplier, max_pct_min), max_pct_min, max_pct_max, True,
        )
        baseline_max = min_result + rounded * span_count
        max_trunk = _trunc(baseline_max)
        if max_trunk >= max_val + span_increment * max_pct_min:
            baseline_max = max_trunk
        if not math.isfinite(baseline_max):
            baseline_max = max_val  # rounding overflowed near the float limit

    if not flex_count:
        return min_result, baseline_max, label_count

    max_result, adjusted_count = _flex_label_count(
        label_count, min_result, max_val, baseline_max,
        span_increment, max_pct_min, max_pct_max,
    )
    return min_result, max_result, adjusted_count


def _flex_label_count(
    label_count: int,
    min_result: float,
    max_val: float,
    baseline_max: float,
    span_increment: float,
    max_pct_min: float,
    max_pct_max: float,
) -> Tuple[float, int]:
    """Flex the label count ±3 looking for a nice interval.

    Falls back to (baseline_max, label_count) when no candidate is
    admissible.
    """
    min_pad_required = max_val + span_increment * max_pct_min
    baseline_excess = baseline_max - max_val
    max_pad_limit = min(
        max_val + span_increment * max_pct_max * NICE_FLEX_MAX_PAD_FACTOR,
        baseline_max + baseline_excess * NICE_FLEX_BASELINE_EXCESS_FACTOR,
    )

    best_score = math.inf
    best_max = baseline_max
    best_count = label_count
    for delta in range(-NICE_FLEX_DELTA, NICE_FLEX_DELTA + 1):
        count = label_count + delta
        if count < MINIMUM_AXIS_LABELS:
            continue
        interval = nice_num((max_val - min_result) / (count - 1))
        if interval <= 0:
            continue
        candidate_max = min_result + interval * (count - 1)
        if candidate_max < min_pad_required - EPSILON or candidate_max > max_pad_limit + EPSILON:
            continue
        excess = candidate_max - max_val
        score = excess
        if abs(delta) > 1:
            score = NICE_FLEX_LARGE_DELTA_PENALTY + abs(delta) * NICE_FLEX_DELTA_WEIGHT + excess
        if score < best_score - EPSILON:
            best_score = score
            best_max = candidate_max
            best_count = count
    return best_max, best_count
