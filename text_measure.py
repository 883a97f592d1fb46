"""Label text measurement.

The axis kernel only needs the bounding box of the widest / tallest label
after rotation.  Measurement is a pluggable callable so tests (and other
renderers) can substitute a deterministic measurer; the default one uses
matplotlib's font machinery, the same stack the chart renderer draws with.
"""

import math
from dataclasses import dataclass
from typing import Callable, Sequence, Tuple

from matplotlib.font_manager import FontProperties
from matplotlib.textpath import TextToPath

from config import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE, TEXT_MEASURE_DPI


@dataclass(frozen=True)
class FontStyle:
    size: float = DEFAULT_FONT_SIZE
    family: str = DEFAULT_FONT_FAMILY
    color: str = "#464646"


# (labels, rotation_radians, font_style) -> (max_width, max_height) in pixels
TextMeasurer = Callable[[Sequence[str], float, FontStyle], Tuple[int, int]]


def rotated_extent(width: float, height: float, rotation: float) -> Tuple[float, float]:
    """Axis-aligned bounding box of a width × height box rotated by `rotation`."""
    if rotation == 0:
        return width, height
    cos_r = abs(math.cos(rotation))
    sin_r = abs(math.sin(rotation))
    return width * cos_r + height * sin_r, width * sin_r + height * cos_r


class MatplotlibTextMeasurer:
    """Measure label extents with matplotlib's text-to-path layout."""

    def __init__(self, dpi: float = TEXT_MEASURE_DPI):
        self._scale = dpi / 72.0
        self._text_to_path = TextToPath()

    def __call__(
        self,
        labels: Sequence[str],
        rotation: float,
        font_style: FontStyle,
    ) -> Tuple[int, int]:
        prop = FontProperties(family=font_style.family, size=font_style.size)
        max_w = 0.0
        max_h = 0.0
        for text in labels:
            if not text:
                continue
            w, h, _ = self._text_to_path.get_text_width_height_descent(
                text, prop, ismath=False,
            )
            w, h = rotated_extent(w * self._scale, h * self._scale, rotation)
            max_w = max(max_w, w)
            max_h = max(max_h, h)
        return int(math.ceil(max_w)), int(math.ceil(max_h))


_default_measurer = None


def default_text_measurer() -> MatplotlibTextMeasurer:
    global _default_measurer
    if _default_measurer is None:
        _default_measurer = MatplotlibTextMeasurer()
    return _default_measurer
