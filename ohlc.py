"""OHLC bars and conversion from pandas frames."""

import math
from dataclasses import dataclass
from typing import List

import pandas as pd

OHLC_COLUMNS = ("open", "high", "low", "close")


@dataclass(frozen=True)
class OHLCBar:
    open: float
    high: float
    low: float
    close: float

    @property
    def is_valid(self) -> bool:
        """All prices finite and the shadows enclose the body."""
        if not all(math.isfinite(v) for v in (self.open, self.high, self.low, self.close)):
            return False
        return self.high >= max(self.open, self.close) and self.low <= min(self.open, self.close)

    @property
    def body_size(self) -> float:
        return abs(self.close - self.open)

    @property
    def range(self) -> float:
        return self.high - self.low

    @property
    def body_top(self) -> float:
        return max(self.open, self.close)

    @property
    def body_bottom(self) -> float:
        return min(self.open, self.close)

    @property
    def upper_shadow(self) -> float:
        return self.high - self.body_top

    @property
    def lower_shadow(self) -> float:
        return self.body_bottom - self.low

    @property
    def midpoint(self) -> float:
        return (self.open + self.close) / 2

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        return self.close < self.open


def bars_from_dataframe(df: pd.DataFrame) -> List[OHLCBar]:
    """
    Convert an OHLC DataFrame into bars.

    Column names are matched case-insensitively, so both yfinance frames
    (Open/High/Low/Close) and lower-case frames work.  Missing prices
    become NaN and produce invalid bars rather than errors.
    """
    lookup = {str(col).lower(): col for col in df.columns}
    missing = [name for name in OHLC_COLUMNS if name not in lookup]
    if missing:
        raise ValueError(f"DataFrame missing OHLC columns: {', '.join(missing)}")

    prices = df[[lookup[name] for name in OHLC_COLUMNS]].astype(float).to_numpy()
    return [OHLCBar(*(float(v) for v in row)) for row in prices]
