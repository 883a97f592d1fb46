"""Per-bar label selection for candlestick charts.

A bar may carry a user label (from a label formatter), a pattern label
(from detected matches), both, or neither.  PatternLabeler decides which
one is drawn and how the surrounding pill is coloured.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from config import (
    PATTERN_BIAS_COLORS,
    PATTERN_BIAS_GLYPHS,
    PATTERN_LABEL_FONT_COLOR,
    PATTERN_LABEL_SEPARATOR,
)
from pattern_config import BEARISH, BULLISH, NEUTRAL, PatternConfig
from pattern_scanner import PatternMatch, group_by_bar


@dataclass(frozen=True)
class LabelStyle:
    background_color: Optional[str] = None
    font_color: str = PATTERN_LABEL_FONT_COLOR


@dataclass(frozen=True)
class BarLabel:
    text: str
    style: Optional[LabelStyle] = None


# (index, series_name, value) -> (label, style or None)
LabelFormatter = Callable[[int, str, float], Tuple[str, Optional[LabelStyle]]]


def pattern_bias(matches: Sequence[PatternMatch]) -> str:
    """Combined bias of a bar's matches; anything short of agreement is neutral."""
    biases = {m.bias for m in matches}
    if biases == {BULLISH}:
        return BULLISH
    if biases == {BEARISH}:
        return BEARISH
    return NEUTRAL


def bias_style(bias: str) -> LabelStyle:
    return LabelStyle(background_color=PATTERN_BIAS_COLORS[bias])


def format_pattern_label(matches: Sequence[PatternMatch]) -> str:
    """Built-in compact label, e.g. "▲ hammer+engulfing_bull"."""
    glyph = PATTERN_BIAS_GLYPHS[pattern_bias(matches)]
    return glyph + " " + PATTERN_LABEL_SEPARATOR.join(m.pattern_type for m in matches)


class PatternLabeler:
    """
    Choose the label drawn above each bar.

    Priority:
      1. prefer_pattern_labels and the bar has matches → pattern label
      2. the user formatter returns a non-empty label → user label
      3. prefer_pattern_labels is off, the bar has matches → pattern label
      4. nothing
    """

    def __init__(
        self,
        matches: Sequence[PatternMatch],
        config: Optional[PatternConfig] = None,
        series_name: str = "",
        label_formatter: Optional[LabelFormatter] = None,
    ):
        self.config = config if config is not None else PatternConfig()
        self.series_name = series_name
        self.label_formatter = label_formatter
        self._by_bar: Dict[int, List[PatternMatch]] = group_by_bar(matches)

    def matches_at(self, index: int) -> List[PatternMatch]:
        return self._by_bar.get(index, [])

    def _pattern_label(self, matches: List[PatternMatch], value: float) -> Optional[BarLabel]:
        formatter = self.config.pattern_formatter
        if formatter is None:
            text, style = format_pattern_label(matches), None
        else:
            text, style = formatter(matches, self.series_name, value)
        if not text:
            return None
        if style is None:
            style = bias_style(pattern_bias(matches))
        return BarLabel(text, style)

    def _user_label(self, index: int, value: float) -> Optional[BarLabel]:
        if self.label_formatter is None:
            return None
        text, style = self.label_formatter(index, self.series_name, value)
        if not text:
            return None
        return BarLabel(text, style)

    def label_for(self, index: int, value: float) -> Optional[BarLabel]:
        matches = self.matches_at(index)
        if matches and self.config.prefer_pattern_labels:
            label = self._pattern_label(matches, value)
            if label is not None:
                return label

        user = self._user_label(index, value)
        if user is not None:
            return user

        if matches and not self.config.prefer_pattern_labels:
            return self._pattern_label(matches, value)
        return None
