"""Central configuration for all tunable constants.

Every numeric constant used across the axis and pattern kernels lives here.
Modules import what they need instead of embedding magic numbers.

Organisation follows the pipeline order:
  Numerics → Axis padding → Label counts → Category axis → Patterns →
  Labelling → Visualisation / CLI defaults
"""

# ──────────────────────────────────────────────────────────────────────
# Shared numerics
# ──────────────────────────────────────────────────────────────────────

# Near-equality tolerance for data-derived floats.  Strict equality is
# reserved for override presence checks.
EPSILON = 1e-10

# ──────────────────────────────────────────────────────────────────────
# Axis padding  (range_padding.py)
# ──────────────────────────────────────────────────────────────────────

# Padding budgets as percentages of the data span, before scaling by
# rangeValuePaddingScale.  A non-zero min-side floor could force a
# negative axis start on positive data, so it stays at 0.
RANGE_MIN_PADDING_PERCENT_MIN = 0.0
RANGE_MIN_PADDING_PERCENT_MAX = 20.0
# The max side always keeps a little headroom at the top of the graph.
RANGE_MAX_PADDING_PERCENT_MIN = 5.0
RANGE_MAX_PADDING_PERCENT_MAX = 20.0

# Half-width applied around a single repeated value (zero-span data).
ZERO_SPAN_ADJUSTMENT = 1.0

# Anchor search: multiples tried in order, each across 10^expo for expo
# in [ANCHOR_EXPO_START, ANCHOR_EXPO_STOP).  expo -1 floors to the 0 anchor.
ANCHOR_MULTIPLES = (1.0, 2.0, 5.0)
ANCHOR_EXPO_START = -1
ANCHOR_EXPO_STOP = 6

# Minimum quality improvement before the friendly-round lower bound
# replaces an anchor that was only reached past a too-low target.
ANCHOR_QUALITY_MARGIN = 1e-6

# Friendly rounding tries this many multiples of each order of magnitude.
FRIENDLY_ROUND_STEPS = 9

# ──────────────────────────────────────────────────────────────────────
# Nice intervals  (range_padding.py)
# ──────────────────────────────────────────────────────────────────────

NICE_NUMBERS = (1.0, 2.0, 2.5, 5.0)
# Label counts tried either side of the padded count.
NICE_FLEX_DELTA = 3
# Upper admissible pad is max-pad-percent × this factor ...
NICE_FLEX_MAX_PAD_FACTOR = 1.4
# ... or baseline excess × this factor, whichever is tighter.
NICE_FLEX_BASELINE_EXCESS_FACTOR = 8.0
# Additive penalty that makes a ±1 change always beat larger ones.
NICE_FLEX_LARGE_DELTA_PENALTY = 1e15
NICE_FLEX_DELTA_WEIGHT = 1e10

# ──────────────────────────────────────────────────────────────────────
# Label counts  (axis_range.py / axis_coordinator.py)
# ──────────────────────────────────────────────────────────────────────

MINIMUM_AXIS_LABELS = 2
DEFAULT_Y_AXIS_LABEL_COUNT_LOW = 3
DEFAULT_Y_AXIS_LABEL_COUNT_HIGH = 10

# Horizontal value/category labels keep at most this gutter between them.
HORIZONTAL_LABEL_GUTTER_MAX = 20
# Vertical category labels are separated by a fixed gutter.
VERTICAL_CATEGORY_LABEL_GUTTER = 10

# Coordinator search: natural counts ± this many labels.
COORDINATOR_SEARCH_DELTA = 3
# Coordinator score weights.
COORDINATOR_NOT_NICE_PENALTY = 100.0
COORDINATOR_COUNT_DELTA_WEIGHT = 10.0

# Default number formatting for value labels.
VALUE_LABEL_DECIMALS = 2

# ──────────────────────────────────────────────────────────────────────
# Text measurement  (text_measure.py)
# ──────────────────────────────────────────────────────────────────────

DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE = 12.0
# matplotlib measures in points; axis sizes are pixels at this DPI.
TEXT_MEASURE_DPI = 72.0

# ──────────────────────────────────────────────────────────────────────
# Candlestick patterns  (pattern_config.py / pattern_detectors.py)
# ──────────────────────────────────────────────────────────────────────

# Max |close − open| / range for a doji.
DEFAULT_DOJI_THRESHOLD = 0.01
# Max shadow / range for a shadow to count as absent (marubozu).
DEFAULT_SHADOW_TOLERANCE = 0.01
# Minimum long-shadow to body ratio for hammer / star shapes.
DEFAULT_SHADOW_RATIO = 2.0
# Minimum engulfing body relative to the engulfed body.
DEFAULT_ENGULFING_MIN_SIZE = 0.8
# Star patterns: "large" body ≥ ratio × range, "small" body < ratio × range.
DEFAULT_LARGE_BODY_RATIO = 0.6
DEFAULT_SMALL_BODY_RATIO = 0.3
# Hammer family: the body must sit inside this fraction of the range
# at the top (hammer) or bottom (inverted hammer / shooting star).
HAMMER_BODY_ZONE = 1.0 / 3.0

# ──────────────────────────────────────────────────────────────────────
# Pattern labelling  (pattern_labeler.py)
# ──────────────────────────────────────────────────────────────────────

PATTERN_LABEL_SEPARATOR = "+"
PATTERN_BIAS_GLYPHS = {
    "bullish": "▲",
    "bearish": "▼",
    "neutral": "◆",
}
# Pill background per bias.
PATTERN_BIAS_COLORS = {
    "bullish": "#2e9e5b",
    "bearish": "#d64541",
    "neutral": "#8c8c8c",
}
PATTERN_LABEL_FONT_COLOR = "#ffffff"

# ──────────────────────────────────────────────────────────────────────
# Visualiser / CLI  (visualizer.py, main.py)
# ──────────────────────────────────────────────────────────────────────

DEFAULT_TICKER = "AAPL"
DEFAULT_PERIOD = "6mo"
DEFAULT_INTERVAL = "1d"

# Chart dimensions (inches).
FIGURE_SIZE = (16, 9)
# Saved image resolution; also converts the price panel height to pixels.
SAVE_DPI = 150
# Pattern pill text size (points) and vertical offset above the high,
# as a fraction of the axis span.
PATTERN_LABEL_FONT_SIZE = 7
PATTERN_LABEL_OFFSET = 0.02
PATTERN_LABEL_ALPHA = 0.9
# Price / volume panel heights; the price panel share sizes the y axis.
PANEL_RATIOS = (4, 1)
PRICE_PANEL_FRACTION = 0.7
