"""Tests for pattern configuration, presets and merging."""

import pytest

from pattern_config import (
    ALL_PATTERNS,
    PATTERN_BIAS,
    PRESETS,
    PatternConfig,
)


class TestPresets:

    @pytest.mark.parametrize("method, included, excluded, size", [
        ("with_patterns_all", "doji", None, 14),
        ("with_patterns_core", "engulfing_bull", "doji", 6),
        ("with_patterns_bullish", "hammer", "shooting_star", 7),
        ("with_patterns_bearish", "shooting_star", "hammer", 6),
        ("with_patterns_reversal", "hammer", "marubozu_bull", 10),
        ("with_patterns_trend", "marubozu_bull", "hammer", 2),
    ])
    def test_preset_contents(self, method, included, excluded, size):
        config = getattr(PatternConfig(enabled_patterns=()), method)()
        assert included in config.enabled_patterns
        if excluded:
            assert excluded not in config.enabled_patterns
        assert len(config.enabled_patterns) == size

    def test_directional_presets_follow_bias(self):
        assert all(PATTERN_BIAS[p] == "bullish" for p in PRESETS["bullish"])
        assert all(PATTERN_BIAS[p] == "bearish" for p in PRESETS["bearish"])

    def test_preset_keeps_settings(self):
        config = PatternConfig(doji_threshold=0.05, prefer_pattern_labels=False).with_patterns_core()
        assert config.doji_threshold == 0.05
        assert config.prefer_pattern_labels is False

    def test_presets_combine_through_merge(self):
        base = PatternConfig()
        merged = base.with_patterns_trend().merge_patterns(base.with_patterns_core())
        assert len(merged.enabled_patterns) == 8
        assert merged.enabled_patterns[:2] == ("marubozu_bull", "marubozu_bear")

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="unknown pattern preset"):
            PatternConfig().with_preset("sideways")


class TestMergePatterns:

    def test_union_preserves_order_and_receiver_settings(self):
        a = PatternConfig(enabled_patterns=("doji", "hammer"), doji_threshold=0.01)
        b = PatternConfig(
            enabled_patterns=("shooting_star", "doji"), doji_threshold=0.02,
            prefer_pattern_labels=False,
        )
        merged = a.merge_patterns(b)
        assert merged.enabled_patterns == ("doji", "hammer", "shooting_star")
        assert merged.doji_threshold == 0.01
        assert merged.prefer_pattern_labels is True

    def test_identical_sets(self):
        a = PatternConfig(enabled_patterns=("doji", "hammer", "shooting_star"))
        assert a.merge_patterns(a).enabled_patterns == ("doji", "hammer", "shooting_star")

    def test_empty_sets(self):
        a = PatternConfig(enabled_patterns=())
        b = PatternConfig(enabled_patterns=("doji",))
        assert a.merge_patterns(b).enabled_patterns == ("doji",)
        assert b.merge_patterns(a).enabled_patterns == ("doji",)

    def test_merge_with_none(self):
        a = PatternConfig(enabled_patterns=("doji", "hammer"))
        assert a.merge_patterns(None) is a

    def test_merge_is_pure(self):
        a = PatternConfig(enabled_patterns=("doji",))
        b = PatternConfig(enabled_patterns=("hammer",))
        a.merge_patterns(b)
        assert a.enabled_patterns == ("doji",)
        assert b.enabled_patterns == ("hammer",)


class TestValidation:

    def test_defaults(self):
        config = PatternConfig()
        assert config.enabled_patterns == ALL_PATTERNS
        assert config.prefer_pattern_labels is True
        assert (config.doji_threshold, config.shadow_tolerance) == (0.01, 0.01)
        assert (config.shadow_ratio, config.engulfing_min_size) == (2.0, 0.8)
        assert (config.large_body_ratio, config.small_body_ratio) == (0.6, 0.3)

    def test_duplicates_removed(self):
        config = PatternConfig(enabled_patterns=["doji", "hammer", "doji"])
        assert config.enabled_patterns == ("doji", "hammer")

    def test_unknown_tag(self):
        with pytest.raises(ValueError, match="unknown pattern tags"):
            PatternConfig(enabled_patterns=("doji", "three_white_soldiers"))

    @pytest.mark.parametrize("field, value", [
        ("doji_threshold", 0.0),
        ("doji_threshold", 1.5),
        ("shadow_tolerance", -0.1),
        ("shadow_ratio", 0.0),
        ("engulfing_min_size", -1.0),
        ("large_body_ratio", 0.0),
        ("small_body_ratio", 2.0),
    ])
    def test_invalid_knobs(self, field, value):
        with pytest.raises(ValueError, match=field):
            PatternConfig(**{field: value})
