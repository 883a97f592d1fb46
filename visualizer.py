"""Candlestick chart with a resolved price axis and pattern labels using mplfinance."""

from typing import Optional

import matplotlib.pyplot as plt
import mplfinance as mpf
import pandas as pd

from axis_range import AxisRange, calculate_value_axis_range
from config import (
    FIGURE_SIZE,
    PANEL_RATIOS,
    PATTERN_BIAS_COLORS,
    PATTERN_LABEL_ALPHA,
    PATTERN_LABEL_FONT_SIZE,
    PATTERN_LABEL_OFFSET,
    PRICE_PANEL_FRACTION,
    SAVE_DPI,
)
from pattern_config import NEUTRAL
from pattern_labeler import PatternLabeler
from series_data import Series, SeriesList
from text_measure import MatplotlibTextMeasurer, TextMeasurer


def price_axis_size(has_volume: bool = True) -> int:
    """Approximate pixel height of the price panel in the saved figure."""
    height = FIGURE_SIZE[1] * SAVE_DPI * PRICE_PANEL_FRACTION
    if has_volume:
        height *= PANEL_RATIOS[0] / sum(PANEL_RATIOS)
    return int(height)


def resolve_price_axis(
    df: pd.DataFrame,
    prefer_nice_intervals: bool = False,
    axis_size: Optional[int] = None,
    text_measurer: Optional[TextMeasurer] = None,
) -> AxisRange:
    """Resolve the y axis enclosing every bar's high and low."""
    if axis_size is None:
        axis_size = price_axis_size("Volume" in df.columns)
    if text_measurer is None:
        text_measurer = MatplotlibTextMeasurer(dpi=SAVE_DPI)
    series = SeriesList([
        Series(df["High"].tolist(), name="high"),
        Series(df["Low"].tolist(), name="low"),
    ])
    return calculate_value_axis_range(
        series, axis_size,
        prefer_nice_intervals=prefer_nice_intervals,
        is_vertical=True,
        text_measurer=text_measurer,
    )


def plot_patterns(
    df: pd.DataFrame,
    axis_range: AxisRange,
    labeler: PatternLabeler,
    title: str = "",
    savefig: str | None = None,
) -> None:
    """Plot a candlestick chart with pattern pills above the matched bars.

    Args:
        df: OHLC(V) DataFrame with DatetimeIndex.
        axis_range: Resolved price axis; sets the y limits, ticks and labels.
        labeler: Chooses the label (if any) for each bar.
        title: Chart title.
        savefig: If provided, save chart to this file path instead of showing.
            The extension picks the format (.png, .svg).
    """
    has_volume = "Volume" in df.columns
    kwargs = dict(
        type="candle",
        style="charles",
        title=title,
        volume=has_volume,
        figsize=FIGURE_SIZE,
        tight_layout=True,
        returnfig=True,
    )
    if has_volume:
        kwargs["panel_ratios"] = PANEL_RATIOS

    fig, axes = mpf.plot(df, **kwargs)
    ax = axes[0]

    # --- Price axis from the resolved range ---
    ax.set_ylim(axis_range.min, axis_range.max)
    ax.set_yticks(axis_range.tick_values())
    ax.set_yticklabels(axis_range.labels)

    # --- Pattern pills (mplfinance places bar i at x = i) ---
    offset = (axis_range.max - axis_range.min) * PATTERN_LABEL_OFFSET
    for i, (high, close) in enumerate(zip(df["High"], df["Close"])):
        label = labeler.label_for(i, float(close))
        if label is None:
            continue
        background = PATTERN_BIAS_COLORS[NEUTRAL]
        font_color = "black"
        if label.style is not None:
            background = label.style.background_color or background
            font_color = label.style.font_color
        ax.annotate(
            label.text,
            xy=(i, high),
            xytext=(i, min(high + offset, axis_range.max)),
            ha="center",
            va="bottom",
            fontsize=PATTERN_LABEL_FONT_SIZE,
            color=font_color,
            bbox=dict(boxstyle="round,pad=0.3", fc=background, ec="none", alpha=PATTERN_LABEL_ALPHA),
            annotation_clip=False,
        )

    if savefig:
        fig.savefig(savefig, dpi=SAVE_DPI, bbox_inches="tight")
    else:
        plt.show()
    plt.close(fig)
