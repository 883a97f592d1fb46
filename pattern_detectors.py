"""
Candlestick pattern detectors.

Each detector answers "does the pattern complete at bar `index`?" for a
sequence of OHLCBar.  Detectors are pure: they never raise on bad data,
they simply report no match when the window is too short, any bar in the
window is invalid, or a denominator would be zero.

Multi-bar patterns are reported at the last bar of their window.
"""

from typing import Callable, Dict, NamedTuple, Sequence

from config import EPSILON, HAMMER_BODY_ZONE
from ohlc import OHLCBar
from pattern_config import (
    DARK_CLOUD_COVER,
    DOJI,
    DRAGONFLY_DOJI,
    ENGULFING_BEAR,
    ENGULFING_BULL,
    EVENING_STAR,
    GRAVESTONE_DOJI,
    HAMMER,
    INVERTED_HAMMER,
    MARUBOZU_BEAR,
    MARUBOZU_BULL,
    MORNING_STAR,
    PIERCING_LINE,
    SHOOTING_STAR,
    PatternConfig,
)

Detector = Callable[[Sequence[OHLCBar], int, PatternConfig], bool]


def _window(bars: Sequence[OHLCBar], index: int, size: int):
    """Bars ending at `index`, or None if the window is short or invalid."""
    if index < size - 1 or index >= len(bars):
        return None
    window = bars[index - size + 1: index + 1]
    if not all(bar.is_valid for bar in window):
        return None
    return window


def _is_doji(bar: OHLCBar, config: PatternConfig) -> bool:
    rng = bar.range
    return rng > 0 and bar.body_size / rng <= config.doji_threshold + EPSILON


def _is_large(bar: OHLCBar, config: PatternConfig) -> bool:
    return bar.range > 0 and bar.body_size >= config.large_body_ratio * bar.range - EPSILON


def _is_small(bar: OHLCBar, config: PatternConfig) -> bool:
    return bar.range > 0 and bar.body_size < config.small_body_ratio * bar.range


# ──────────────────────────────────────────────────────────────────────
# Single-bar patterns
# ──────────────────────────────────────────────────────────────────────

def detect_doji(bars: Sequence[OHLCBar], index: int, config: PatternConfig) -> bool:
    window = _window(bars, index, 1)
    return window is not None and _is_doji(window[0], config)


def detect_hammer(bars: Sequence[OHLCBar], index: int, config: PatternConfig) -> bool:
    """Long lower shadow with a small body in the upper third of the range."""
    window = _window(bars, index, 1)
    if window is None:
        return False
    bar = window[0]
    rng = bar.range
    if rng <= 0:
        return False
    body = bar.body_size
    return (
        bar.lower_shadow >= config.shadow_ratio * body
        and bar.upper_shadow <= body + EPSILON
        and bar.body_bottom >= bar.low + rng * (1 - HAMMER_BODY_ZONE) - EPSILON
    )


def _long_upper_shadow_low_body(bar: OHLCBar, config: PatternConfig) -> bool:
    rng = bar.range
    if rng <= 0:
        return False
    body = bar.body_size
    return (
        bar.upper_shadow >= config.shadow_ratio * body
        and bar.lower_shadow <= body + EPSILON
        and bar.body_top <= bar.low + rng * HAMMER_BODY_ZONE + EPSILON
    )


def detect_inverted_hammer(bars: Sequence[OHLCBar], index: int, config: PatternConfig) -> bool:
    window = _window(bars, index, 1)
    return window is not None and _long_upper_shadow_low_body(window[0], config)


def detect_shooting_star(bars: Sequence[OHLCBar], index: int, config: PatternConfig) -> bool:
    # same shape as the inverted hammer; only the reported bias differs
    window = _window(bars, index, 1)
    return window is not None and _long_upper_shadow_low_body(window[0], config)


def detect_gravestone_doji(bars: Sequence[OHLCBar], index: int, config: PatternConfig) -> bool:
    """Doji whose upper shadow dominates and lower shadow is short."""
    window = _window(bars, index, 1)
    if window is None:
        return False
    bar = window[0]
    if not _is_doji(bar, config):
        return False
    upper = bar.upper_shadow
    return (
        upper >= config.shadow_ratio * bar.range * config.doji_threshold
        and bar.lower_shadow <= upper / config.shadow_ratio + EPSILON
    )


def detect_dragonfly_doji(bars: Sequence[OHLCBar], index: int, config: PatternConfig) -> bool:
    window = _window(bars, index, 1)
    if window is None:
        return False
    bar = window[0]
    if not _is_doji(bar, config):
        return False
    lower = bar.lower_shadow
    return (
        lower >= config.shadow_ratio * bar.range * config.doji_threshold
        and bar.upper_shadow <= lower / config.shadow_ratio + EPSILON
    )


def _is_marubozu(bar: OHLCBar, config: PatternConfig) -> bool:
    rng = bar.range
    return (
        rng > 0
        and bar.upper_shadow / rng <= config.shadow_tolerance + EPSILON
        and bar.lower_shadow / rng <= config.shadow_tolerance + EPSILON
    )


def detect_marubozu_bull(bars: Sequence[OHLCBar], index: int, config: PatternConfig) -> bool:
    window = _window(bars, index, 1)
    return window is not None and window[0].is_bullish and _is_marubozu(window[0], config)


def detect_marubozu_bear(bars: Sequence[OHLCBar], index: int, config: PatternConfig) -> bool:
    window = _window(bars, index, 1)
    return window is not None and window[0].is_bearish and _is_marubozu(window[0], config)


# ──────────────────────────────────────────────────────────────────────
# Two-bar patterns
# ──────────────────────────────────────────────────────────────────────

def detect_engulfing_bull(bars: Sequence[OHLCBar], index: int, config: PatternConfig) -> bool:
    window = _window(bars, index, 2)
    if window is None:
        return False
    prev, curr = window
    return (
        prev.is_bearish
        and curr.is_bullish
        and curr.open <= prev.close
        and curr.close >= prev.open
        and curr.body_size >= config.engulfing_min_size * prev.body_size
    )


def detect_engulfing_bear(bars: Sequence[OHLCBar], index: int, config: PatternConfig) -> bool:
    window = _window(bars, index, 2)
    if window is None:
        return False
    prev, curr = window
    return (
        prev.is_bullish
        and curr.is_bearish
        and curr.open >= prev.close
        and curr.close <= prev.open
        and curr.body_size >= config.engulfing_min_size * prev.body_size
    )


def detect_piercing_line(bars: Sequence[OHLCBar], index: int, config: PatternConfig) -> bool:
    """Gap below the prior low, then a close into the upper half of its body."""
    window = _window(bars, index, 2)
    if window is None:
        return False
    prev, curr = window
    return (
        prev.is_bearish
        and curr.is_bullish
        and curr.open < prev.low
        and curr.close > prev.midpoint
        and curr.close < prev.open
    )


def detect_dark_cloud_cover(bars: Sequence[OHLCBar], index: int, config: PatternConfig) -> bool:
    window = _window(bars, index, 2)
    if window is None:
        return False
    prev, curr = window
    return (
        prev.is_bullish
        and curr.is_bearish
        and curr.open > prev.high
        and curr.close < prev.midpoint
        and curr.close > prev.open
    )


# ──────────────────────────────────────────────────────────────────────
# Three-bar patterns
# ──────────────────────────────────────────────────────────────────────

def detect_morning_star(bars: Sequence[OHLCBar], index: int, config: PatternConfig) -> bool:
    window = _window(bars, index, 3)
    if window is None:
        return False
    first, star, last = window
    return (
        first.is_bearish and _is_large(first, config)
        and _is_small(star, config)
        and star.body_top < first.body_bottom
        and last.is_bullish and _is_large(last, config)
        and last.close > first.midpoint
    )


def detect_evening_star(bars: Sequence[OHLCBar], index: int, config: PatternConfig) -> bool:
    window = _window(bars, index, 3)
    if window is None:
        return False
    first, star, last = window
    return (
        first.is_bullish and _is_large(first, config)
        and _is_small(star, config)
        and star.body_bottom > first.body_top
        and last.is_bearish and _is_large(last, config)
        and last.close < first.midpoint
    )


class RegisteredDetector(NamedTuple):
    window: int
    detect: Detector


DETECTORS: Dict[str, RegisteredDetector] = {
    DOJI: RegisteredDetector(1, detect_doji),
    HAMMER: RegisteredDetector(1, detect_hammer),
    INVERTED_HAMMER: RegisteredDetector(1, detect_inverted_hammer),
    SHOOTING_STAR: RegisteredDetector(1, detect_shooting_star),
    GRAVESTONE_DOJI: RegisteredDetector(1, detect_gravestone_doji),
    DRAGONFLY_DOJI: RegisteredDetector(1, detect_dragonfly_doji),
    MARUBOZU_BULL: RegisteredDetector(1, detect_marubozu_bull),
    MARUBOZU_BEAR: RegisteredDetector(1, detect_marubozu_bear),
    ENGULFING_BULL: RegisteredDetector(2, detect_engulfing_bull),
    ENGULFING_BEAR: RegisteredDetector(2, detect_engulfing_bear),
    PIERCING_LINE: RegisteredDetector(2, detect_piercing_line),
    DARK_CLOUD_COVER: RegisteredDetector(2, detect_dark_cloud_cover),
    MORNING_STAR: RegisteredDetector(3, detect_morning_star),
    EVENING_STAR: RegisteredDetector(3, detect_evening_star),
}
