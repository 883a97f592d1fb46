"""Label-count alignment across value axes.

A chart with a primary and one or more secondary value axes draws its
horizontal grid from the primary.  Every axis must therefore resolve to
the same label count, or the secondary ticks drift off the grid lines.
"""

from typing import List, Optional, Sequence

import structlog

from axis_range import AxisRange, ValueAxisPrep, finalize_value_axis, resolve_value_axis
from config import (
    COORDINATOR_COUNT_DELTA_WEIGHT,
    COORDINATOR_NOT_NICE_PENALTY,
    COORDINATOR_SEARCH_DELTA,
    EPSILON,
    MINIMUM_AXIS_LABELS,
)
from range_padding import nice_num

log = structlog.get_logger(__name__)


def _flag(prefer_nice: Sequence[Optional[bool]], index: int) -> bool:
    return index < len(prefer_nice) and prefer_nice[index] is True


def _resolve_independently(
    preps: Sequence[ValueAxisPrep],
    prefer_nice: Sequence[Optional[bool]],
) -> List[AxisRange]:
    result = []
    for i, prep in enumerate(preps):
        mn, mx, count = resolve_value_axis(prep, _flag(prefer_nice, i))
        result.append(finalize_value_axis(prep, mn, mx, count))
    return result


def _shared_count_score(preps: Sequence[ValueAxisPrep], naturals, count: int) -> float:
    score = 0.0
    for prep, (_, _, natural_count) in zip(preps, naturals):
        mn, mx, resolved = resolve_value_axis(prep, False, count)
        if resolved > 1:
            interval = (mx - mn) / (resolved - 1)
            if interval > 0 and abs(nice_num(interval) - interval) > EPSILON:
                score += COORDINATOR_NOT_NICE_PENALTY
        excess = (mx - prep.max_val) + (prep.min_val - mn)
        if excess > 0:
            score += excess
        score += abs(count - natural_count) * COORDINATOR_COUNT_DELTA_WEIGHT
    return score


def coordinate_value_axes(
    preps: Sequence[ValueAxisPrep],
    prefer_nice: Sequence[Optional[bool]] = (),
) -> List[AxisRange]:
    """Resolve prepared value axes so their label counts agree.

    `preps[0]` is the primary axis.  `prefer_nice[i]` is axis i's
    nice-interval preference (None and False both mean off).

    Policy, in order:

    1. A single axis resolves on its own.
    2. Explicit label counts win.  Conflicting explicit counts cannot be
       aligned, so every axis resolves on its own; a single explicit count
       is forced onto the axes that did not configure one.
    3. Otherwise the primary resolves first.  Without a secondary that
       prefers nice intervals, the secondaries adopt the primary count.
    4. Otherwise every axis resolves naturally.  Matching counts are kept;
       differing ones trigger a search for the shared count that keeps
       intervals nice, padding small and counts close to the natural ones.
    """
    n = len(preps)
    if n == 0:
        return []
    if n == 1:
        return _resolve_independently(preps, prefer_nice)

    explicit = {prep.label_count_cfg for prep in preps if prep.label_count_cfg > 0}
    if len(explicit) > 1:
        log.debug("axis_coordination", policy="conflicting_explicit", counts=sorted(explicit))
        return _resolve_independently(preps, prefer_nice)
    if explicit:
        forced = explicit.pop()
        log.debug("axis_coordination", policy="explicit", count=forced)
        result = []
        for i, prep in enumerate(preps):
            if prep.label_count_cfg == forced:
                mn, mx, count = resolve_value_axis(prep, _flag(prefer_nice, i))
            else:
                mn, mx, count = resolve_value_axis(prep, False, forced)
            result.append(finalize_value_axis(prep, mn, mx, count))
        return result

    primary = resolve_value_axis(preps[0], _flag(prefer_nice, 0))
    primary_count = primary[2]

    if not any(_flag(prefer_nice, i) for i in range(1, n)):
        log.debug("axis_coordination", policy="adopt_primary", count=primary_count)
        result = [finalize_value_axis(preps[0], *primary)]
        for prep in preps[1:]:
            mn, mx, count = resolve_value_axis(prep, False, primary_count)
            result.append(finalize_value_axis(prep, mn, mx, count))
        return result

    naturals = [primary] + [
        resolve_value_axis(preps[i], _flag(prefer_nice, i)) for i in range(1, n)
    ]
    natural_counts = [count for _, _, count in naturals]
    if all(count == primary_count for count in natural_counts):
        log.debug("axis_coordination", policy="natural_match", count=primary_count)
        return [finalize_value_axis(prep, *natural) for prep, natural in zip(preps, naturals)]

    search_min = max(min(natural_counts) - COORDINATOR_SEARCH_DELTA, MINIMUM_AXIS_LABELS)
    search_max = min(
        max(natural_counts) + COORDINATOR_SEARCH_DELTA,
        min(prep.max_label_count for prep in preps),
    )
    best_count = primary_count
    best_score = float("inf")
    for count in range(search_min, search_max + 1):
        score = _shared_count_score(preps, naturals, count)
        if score < best_score - EPSILON:
            best_score = score
            best_count = count

    log.debug(
        "axis_coordination", policy="search", natural_counts=natural_counts,
        count=best_count, score=best_score,
    )
    result = []
    for prep in preps:
        mn, mx, count = resolve_value_axis(prep, False, best_count)
        result.append(finalize_value_axis(prep, mn, mx, count))
    return result
