"""Scan OHLC bars for enabled candlestick patterns."""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import pandas as pd
import structlog

from ohlc import OHLCBar, bars_from_dataframe
from pattern_config import ALL_PATTERNS, PATTERN_BIAS, PatternConfig
from pattern_detectors import DETECTORS

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PatternMatch:
    bar_index: int
    pattern_type: str
    bias: str


def scan_patterns(
    bars: Sequence[OHLCBar],
    config: Optional[PatternConfig] = None,
) -> List[PatternMatch]:
    """
    Run every enabled detector at every bar.

    Matches are ordered by bar index, then by pattern declaration order, with
    at most one match per (bar, pattern).  Windows containing invalid bars
    are skipped silently.

    Raises:
        ValueError: If `bars` is empty.
    """
    if len(bars) == 0:
        raise ValueError("no OHLC bars to scan")
    if config is None:
        config = PatternConfig()

    # declaration order, independent of the order patterns were enabled in
    enabled = [p for p in ALL_PATTERNS if config.is_enabled(p)]
    matches = []
    for index in range(len(bars)):
        for pattern in enabled:
            detector = DETECTORS[pattern]
            if index < detector.window - 1:
                continue
            if detector.detect(bars, index, config):
                matches.append(PatternMatch(index, pattern, PATTERN_BIAS[pattern]))

    invalid = sum(1 for bar in bars if not bar.is_valid)
    if invalid:
        log.warning("invalid_bars_skipped", count=invalid, bars=len(bars))
    log.debug("pattern_scan", bars=len(bars), enabled=len(enabled), matches=len(matches))
    return matches


def group_by_bar(matches: Sequence[PatternMatch]) -> Dict[int, List[PatternMatch]]:
    """Index matches by bar, keeping their scan order."""
    grouped = defaultdict(list)
    for match in matches:
        grouped[match.bar_index].append(match)
    return dict(grouped)


def scan_dataframe(
    df: pd.DataFrame,
    config: Optional[PatternConfig] = None,
) -> List[PatternMatch]:
    """Convenience wrapper: scan an OHLC DataFrame."""
    return scan_patterns(bars_from_dataframe(df), config)
