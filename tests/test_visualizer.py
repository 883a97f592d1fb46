"""Smoke tests for chart rendering and the CLI pipeline."""

import numpy as np
import pandas as pd
import pytest

import main
from conftest import fake_measurer
from pattern_config import PatternConfig
from pattern_labeler import PatternLabeler
from pattern_scanner import scan_dataframe
from visualizer import plot_patterns, price_axis_size, resolve_price_axis


@pytest.fixture
def ohlc_frame():
    rng = np.random.default_rng(7)
    close = 100 + np.cumsum(rng.normal(0, 1.5, 40))
    open_ = np.concatenate([[100.0], close[:-1]])
    high = np.maximum(open_, close) + rng.uniform(0.1, 2.0, 40)
    low = np.minimum(open_, close) - rng.uniform(0.1, 2.0, 40)
    return pd.DataFrame(
        {
            "Open": open_, "High": high, "Low": low, "Close": close,
            "Volume": rng.integers(1_000, 10_000, 40),
        },
        index=pd.date_range("2024-01-01", periods=40, freq="B"),
    )


class TestPriceAxis:

    def test_encloses_every_bar(self, ohlc_frame):
        ar = resolve_price_axis(ohlc_frame, axis_size=600, text_measurer=fake_measurer)
        assert ar.min <= ohlc_frame["Low"].min()
        assert ar.max >= ohlc_frame["High"].max()
        assert len(ar.labels) == ar.label_count

    def test_volume_panel_shrinks_axis(self):
        assert price_axis_size(has_volume=True) < price_axis_size(has_volume=False)


class TestPlotPatterns:

    @pytest.mark.parametrize("suffix", ["png", "svg"])
    def test_saves_chart(self, ohlc_frame, tmp_path, suffix):
        ar = resolve_price_axis(ohlc_frame, axis_size=600, text_measurer=fake_measurer)
        config = PatternConfig()
        labeler = PatternLabeler(scan_dataframe(ohlc_frame, config), config)
        out = tmp_path / f"chart.{suffix}"
        plot_patterns(ohlc_frame, ar, labeler, "test", str(out))
        assert out.exists() and out.stat().st_size > 0

    def test_without_volume(self, ohlc_frame, tmp_path):
        df = ohlc_frame.drop(columns=["Volume"])
        ar = resolve_price_axis(df, axis_size=600, text_measurer=fake_measurer)
        out = tmp_path / "chart.png"
        plot_patterns(df, ar, PatternLabeler([]), "", str(out))
        assert out.exists()


class TestCli:

    def test_defaults(self):
        args = main.parse_args([])
        assert args.ticker == "AAPL"
        assert args.patterns == "all"
        assert not args.prefer_nice

    def test_rejects_unknown_preset(self):
        with pytest.raises(SystemExit):
            main.parse_args(["--patterns", "sideways"])

    def test_pipeline(self, ohlc_frame, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(main, "fetch_ohlc", lambda ticker, period, interval: ohlc_frame)
        out = tmp_path / "cli.png"
        main.main(["--ticker", "TEST", "--patterns", "core", "--prefer-nice", "--savefig", str(out)])
        printed = capsys.readouterr().out
        assert "Patterns (core)" in printed
        assert "Price axis" in printed
        assert out.exists()
