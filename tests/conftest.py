"""Shared fixtures for the axis and pattern test suites."""

import matplotlib

matplotlib.use("Agg")

import pytest

from series_data import Series, SeriesList

CHAR_WIDTH = 8
LINE_HEIGHT = 16


def fake_measurer(labels, rotation, font_style):
    """Deterministic measurer: 8 px per character of the longest label, 16 px tall."""
    longest = max((len(text) for text in labels), default=0)
    if longest == 0:
        return 0, 0
    return longest * CHAR_WIDTH, LINE_HEIGHT


@pytest.fixture
def measurer():
    return fake_measurer


def make_series(*value_lists, y_axis_index=0):
    return SeriesList([Series(list(values), y_axis_index=y_axis_index) for values in value_lists])
