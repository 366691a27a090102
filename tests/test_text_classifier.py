"""Tests for the two-color text heuristic."""

import numpy as np
import pytest

from textregions.geometry import compute_line_geometry
from textregions.text_classifier import (
    ColorBucket,
    TextLine,
    get_line_colors,
    get_most_common_color,
    get_text_lines,
)


@pytest.fixture
def bar_line():
    """A 10×2 line at x in 5..14, y in 1..2, scanned column by column."""
    return compute_line_geometry([(x, y) for x in range(5, 15) for y in (1, 2)])


def _paint(shape, line, colors):
    """Image with the line's pixels painted from ``colors`` in order, cycled."""
    image = np.zeros((*shape, 3), dtype=np.uint8)
    for i, (x, y) in enumerate(line.pixels):
        image[y, x] = colors[i % len(colors)]
    return image


def test_two_colors_is_text(bar_line) -> None:
    image = np.zeros((5, 20, 3), dtype=np.uint8)
    image[1, 5:15] = 255  # row 1 white, row 2 stays black
    image[2, 5:9] = 255   # 4 more white pixels

    text_lines = get_text_lines([bar_line], image)

    assert len(text_lines) == 1
    assert isinstance(text_lines[0], TextLine)
    assert text_lines[0].line is bar_line
    assert text_lines[0].stroke_color == (255, 255, 255)
    assert text_lines[0].text == ""


def test_single_color_is_not_text(bar_line) -> None:
    image = np.full((5, 20, 3), 255, dtype=np.uint8)

    assert get_text_lines([bar_line], image) == []


def test_three_colors_is_not_text(bar_line) -> None:
    image = _paint((5, 20), bar_line, [(0, 0, 0), (0, 0, 255), (255, 0, 0)])

    assert len(get_line_colors(bar_line, image)) == 3
    assert get_text_lines([bar_line], image) == []


def test_close_colors_share_a_bucket(bar_line) -> None:
    """Colors within the threshold collapse, so two tones plus noise is still text."""
    image = _paint((5, 20), bar_line, [(0, 0, 0), (10, 10, 10), (200, 200, 200), (210, 190, 200)])

    buckets = get_line_colors(bar_line, image)

    assert [b.color for b in buckets] == [(0, 0, 0), (200, 200, 200)]
    assert [b.frequency for b in buckets] == [10, 10]
    assert len(get_text_lines([bar_line], image)) == 1


def test_threshold_is_inclusive(bar_line) -> None:
    image = _paint((5, 20), bar_line, [(0, 0, 0), (30, 0, 0)])

    assert len(get_line_colors(bar_line, image, color_threshold=30.0)) == 1
    assert len(get_line_colors(bar_line, image, color_threshold=29.9)) == 2


def test_bucket_keeps_first_representative(bar_line) -> None:
    """Later colors are compared with the first color of a bucket, not a running mean."""
    image = _paint((5, 20), bar_line, [(0, 0, 0), (25, 0, 0), (50, 0, 0)])

    buckets = get_line_colors(bar_line, image)

    # (50, 0, 0) is 50 away from (0, 0, 0) even though it is 25 from (25, 0, 0)
    assert [b.color for b in buckets] == [(0, 0, 0), (50, 0, 0)]


def test_most_common_color_prefers_first_on_tie() -> None:
    buckets = [ColorBucket((1, 2, 3), 5), ColorBucket((9, 9, 9), 5), ColorBucket((4, 4, 4), 2)]
    assert get_most_common_color(buckets) == (1, 2, 3)

    buckets[2].frequency = 6
    assert get_most_common_color(buckets) == (4, 4, 4)


def test_most_common_color_requires_buckets() -> None:
    with pytest.raises(ValueError, match="No color buckets"):
        get_most_common_color([])


def test_order_preserved_across_lines() -> None:
    first = compute_line_geometry([(x, 0) for x in range(10)])
    second = compute_line_geometry([(x, 3) for x in range(10)])
    image = np.zeros((5, 12, 3), dtype=np.uint8)
    image[0, :3] = 255
    image[3, 4:] = (0, 0, 255)

    text_lines = get_text_lines([first, second], image, show_progress=True)

    assert [t.line for t in text_lines] == [first, second]
    assert text_lines[0].stroke_color == (0, 0, 0)
    assert text_lines[1].stroke_color == (0, 0, 255)
