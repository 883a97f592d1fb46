"""Candlestick pattern tags, biases and detection settings."""

from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence, Tuple

from config import (
    DEFAULT_DOJI_THRESHOLD,
    DEFAULT_ENGULFING_MIN_SIZE,
    DEFAULT_LARGE_BODY_RATIO,
    DEFAULT_SHADOW_RATIO,
    DEFAULT_SHADOW_TOLERANCE,
    DEFAULT_SMALL_BODY_RATIO,
)

# ──────────────────────────────────────────────────────────────────────
# Pattern tags (declaration order is the scan/report order)
# ──────────────────────────────────────────────────────────────────────

DOJI = "doji"
HAMMER = "hammer"
INVERTED_HAMMER = "inverted_hammer"
SHOOTING_STAR = "shooting_star"
GRAVESTONE_DOJI = "gravestone_doji"
DRAGONFLY_DOJI = "dragonfly_doji"
MARUBOZU_BULL = "marubozu_bull"
MARUBOZU_BEAR = "marubozu_bear"
ENGULFING_BULL = "engulfing_bull"
ENGULFING_BEAR = "engulfing_bear"
PIERCING_LINE = "piercing_line"
DARK_CLOUD_COVER = "dark_cloud_cover"
MORNING_STAR = "morning_star"
EVENING_STAR = "evening_star"

ALL_PATTERNS = (
    DOJI, HAMMER, INVERTED_HAMMER, SHOOTING_STAR, GRAVESTONE_DOJI,
    DRAGONFLY_DOJI, MARUBOZU_BULL, MARUBOZU_BEAR, ENGULFING_BULL,
    ENGULFING_BEAR, PIERCING_LINE, DARK_CLOUD_COVER, MORNING_STAR,
    EVENING_STAR,
)

BULLISH = "bullish"
BEARISH = "bearish"
NEUTRAL = "neutral"

PATTERN_BIAS = {
    DOJI: NEUTRAL,
    HAMMER: BULLISH,
    INVERTED_HAMMER: BULLISH,
    SHOOTING_STAR: BEARISH,
    GRAVESTONE_DOJI: BEARISH,
    DRAGONFLY_DOJI: BULLISH,
    MARUBOZU_BULL: BULLISH,
    MARUBOZU_BEAR: BEARISH,
    ENGULFING_BULL: BULLISH,
    ENGULFING_BEAR: BEARISH,
    PIERCING_LINE: BULLISH,
    DARK_CLOUD_COVER: BEARISH,
    MORNING_STAR: BULLISH,
    EVENING_STAR: BEARISH,
}

# ──────────────────────────────────────────────────────────────────────
# Presets
# ──────────────────────────────────────────────────────────────────────

CORE_PATTERNS = (
    HAMMER, SHOOTING_STAR, ENGULFING_BULL, ENGULFING_BEAR,
    MORNING_STAR, EVENING_STAR,
)
BULLISH_PATTERNS = tuple(p for p in ALL_PATTERNS if PATTERN_BIAS[p] == BULLISH)
BEARISH_PATTERNS = tuple(p for p in ALL_PATTERNS if PATTERN_BIAS[p] == BEARISH)
REVERSAL_PATTERNS = (
    HAMMER, SHOOTING_STAR, GRAVESTONE_DOJI, DRAGONFLY_DOJI,
    ENGULFING_BULL, ENGULFING_BEAR, PIERCING_LINE, DARK_CLOUD_COVER,
    MORNING_STAR, EVENING_STAR,
)
TREND_PATTERNS = (MARUBOZU_BULL, MARUBOZU_BEAR)

PRESETS = {
    "all": ALL_PATTERNS,
    "core": CORE_PATTERNS,
    "bullish": BULLISH_PATTERNS,
    "bearish": BEARISH_PATTERNS,
    "reversal": REVERSAL_PATTERNS,
    "trend": TREND_PATTERNS,
}

# (matches, series_name, value) -> (label, style or None)
PatternFormatter = Callable[[Sequence, str, float], Tuple[str, Optional[object]]]


def _unique(patterns: Sequence[str]) -> Tuple[str, ...]:
    seen = []
    for p in patterns:
        if p not in seen:
            seen.append(p)
    return tuple(seen)


@dataclass(frozen=True)
class PatternConfig:
    """
    Which patterns to detect and how sensitive each detector family is.

    Attributes:
        enabled_patterns: Pattern tags to detect.
        prefer_pattern_labels: Pattern labels take priority over user labels.
        doji_threshold: Max body / range for a doji.
        shadow_tolerance: Max shadow / range treated as "no shadow".
        shadow_ratio: Min long-shadow / body for hammers and stars.
        engulfing_min_size: Min engulfing body / engulfed body.
        large_body_ratio: Min body / range for a "large" star candle.
        small_body_ratio: Body / range below which a star candle is "small".
        pattern_formatter: Optional label override for matched bars.
    """

    enabled_patterns: Tuple[str, ...] = ALL_PATTERNS
    prefer_pattern_labels: bool = True
    doji_threshold: float = DEFAULT_DOJI_THRESHOLD
    shadow_tolerance: float = DEFAULT_SHADOW_TOLERANCE
    shadow_ratio: float = DEFAULT_SHADOW_RATIO
    engulfing_min_size: float = DEFAULT_ENGULFING_MIN_SIZE
    large_body_ratio: float = DEFAULT_LARGE_BODY_RATIO
    small_body_ratio: float = DEFAULT_SMALL_BODY_RATIO
    pattern_formatter: Optional[PatternFormatter] = None

    def __post_init__(self):
        patterns = _unique(self.enabled_patterns)
        unknown = [p for p in patterns if p not in PATTERN_BIAS]
        if unknown:
            raise ValueError(f"unknown pattern tags: {', '.join(unknown)}")
        object.__setattr__(self, "enabled_patterns", patterns)

        for name in ("doji_threshold", "shadow_tolerance", "large_body_ratio", "small_body_ratio"):
            value = getattr(self, name)
            if not 0 < value <= 1:
                raise ValueError(f"{name} must be in (0, 1], got {value}")
        for name in ("shadow_ratio", "engulfing_min_size"):
            value = getattr(self, name)
            if not value > 0:
                raise ValueError(f"{name} must be positive, got {value}")

    def is_enabled(self, pattern: str) -> bool:
        return pattern in self.enabled_patterns

    def merge_patterns(self, other: Optional["PatternConfig"]) -> "PatternConfig":
        """Union of both pattern sets; this config's settings are kept."""
        if other is None:
            return self
        return replace(
            self,
            enabled_patterns=self.enabled_patterns + tuple(
                p for p in other.enabled_patterns if p not in self.enabled_patterns
            ),
        )

    def with_preset(self, name: str) -> "PatternConfig":
        try:
            patterns = PRESETS[name]
        except KeyError:
            raise ValueError(
                f"unknown pattern preset {name!r}; expected one of {', '.join(PRESETS)}"
            ) from None
        return replace(self, enabled_patterns=patterns)

    def with_patterns_all(self) -> "PatternConfig":
        return self.with_preset("all")

    def with_patterns_core(self) -> "PatternConfig":
        return self.with_preset("core")

    def with_patterns_bullish(self) -> "PatternConfig":
        return self.with_preset("bullish")

    def with_patterns_bearish(self) -> "PatternConfig":
        return self.with_preset("bearish")

    def with_patterns_reversal(self) -> "PatternConfig":
        return self.with_preset("reversal")

    def with_patterns_trend(self) -> "PatternConfig":
        return self.with_preset("trend")
