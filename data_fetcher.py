"""Fetch OHLC(V) price bars from Yahoo Finance via yfinance."""

import pandas as pd
import yfinance as yf

PRICE_COLUMNS = ["Open", "High", "Low", "Close"]


def fetch_ohlc(ticker: str, period: str = "6mo", interval: str = "1d") -> pd.DataFrame:
    """Download price bars for a ticker.

    Args:
        ticker: Stock ticker symbol (e.g. "AAPL").
        period: yfinance period string (e.g. "1y", "6mo", "2y").
        interval: yfinance interval string (e.g. "1d", "1h").

    Returns:
        DataFrame with DatetimeIndex and columns [Open, High, Low, Close],
        plus Volume when the source provides it.

    Raises:
        ValueError: If no usable bars are returned for the ticker/period.
    """
    df = yf.download(ticker, period=period, interval=interval, progress=False)

    if df.empty:
        raise ValueError(f"No data returned for ticker '{ticker}' with period='{period}'")

    # yfinance >= 0.2.51 returns MultiIndex columns for single tickers
    if isinstance(df.columns, pd.MultiIndex):
        df = df.droplevel("Ticker", axis=1)

    missing = [c for c in PRICE_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns in downloaded data: {missing}")

    columns = PRICE_COLUMNS + (["Volume"] if "Volume" in df.columns else [])
    # Price gaps are dropped; invalid-but-present bars stay for the scanner to skip
    df = df[columns].dropna(subset=PRICE_COLUMNS)
    df = df.sort_index()

    if df.empty:
        raise ValueError(f"All rows were NaN for ticker '{ticker}'")

    return df
