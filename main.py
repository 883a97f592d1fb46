#!/usr/bin/env python3
"""Candlestick pattern charts with human-friendly price axes.

Usage:
    python main.py --ticker AAPL --period 6mo --verbose
    python main.py --ticker TSLA --patterns reversal --prefer-nice
    python main.py --ticker AAPL --period 1y --patterns core --savefig chart.svg
"""

import argparse
import logging

import structlog

from config import DEFAULT_INTERVAL, DEFAULT_PERIOD, DEFAULT_TICKER
from data_fetcher import fetch_ohlc
from pattern_config import PRESETS, PatternConfig
from pattern_labeler import PatternLabeler
from pattern_scanner import group_by_bar, scan_dataframe
from visualizer import plot_patterns, resolve_price_axis


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Candlestick pattern detection and charting")
    p.add_argument("--ticker", default=DEFAULT_TICKER, help="Stock ticker symbol")
    p.add_argument("--period", default=DEFAULT_PERIOD, help="yfinance period (e.g. 1y, 6mo, 2y)")
    p.add_argument("--interval", default=DEFAULT_INTERVAL, help="yfinance interval (e.g. 1d, 1h)")
    p.add_argument("--patterns", default="all", choices=sorted(PRESETS), help="Pattern preset to detect")
    p.add_argument("--prefer-nice", action="store_true", help="Let the price axis flex its label count for nice intervals")
    p.add_argument("--verbose", action="store_true", help="Print every match and debug logs")
    p.add_argument("--savefig", default=None, help="Save chart to file (.png/.svg) instead of displaying")
    return p.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))

    # Step 1: Fetch data
    print(f"Fetching {args.ticker} ({args.period}, {args.interval})...")
    df = fetch_ohlc(args.ticker, args.period, args.interval)
    print(f"  {len(df)} bars from {df.index[0].date()} to {df.index[-1].date()}")

    # Step 2: Pattern scan
    config = PatternConfig().with_preset(args.patterns)
    matches = scan_dataframe(df, config)
    by_bar = group_by_bar(matches)
    print(f"  Patterns ({args.patterns}): {len(matches)} matches on {len(by_bar)} bars")

    counts = {}
    for m in matches:
        counts[m.pattern_type] = counts.get(m.pattern_type, 0) + 1
    for pattern in config.enabled_patterns:
        if pattern in counts:
            print(f"    {pattern:<18} {counts[pattern]}")

    if args.verbose:
        print("\n  Matches:")
        for index, bar_matches in by_bar.items():
            tags = ", ".join(f"{m.pattern_type} ({m.bias})" for m in bar_matches)
            print(f"    {df.index[index].date()}  close={df['Close'].iloc[index]:.2f}  {tags}")

    # Step 3: Price axis
    axis_range = resolve_price_axis(df, prefer_nice_intervals=args.prefer_nice)
    print(f"\n  Price axis: {axis_range.min:g} to {axis_range.max:g}, "
          f"{axis_range.label_count} labels")

    # Step 4: Visualize
    title = f"{args.ticker} Candlestick Patterns ({args.period})"
    plot_patterns(df, axis_range, PatternLabeler(matches, config, series_name=args.ticker),
                  title, args.savefig)
    if args.savefig:
        print(f"\n  Chart saved to {args.savefig}")


if __name__ == "__main__":
    main()
