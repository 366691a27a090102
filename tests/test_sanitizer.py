"""Tests for line sanitising."""

import logging

import pytest

from textregions.geometry import compute_line_geometry
from textregions.sanitizer import is_valid_line, sanitise_lines


def _block(x0: int, y0: int, width: int, height: int):
    return compute_line_geometry(
        [(x, y) for x in range(x0, x0 + width) for y in range(y0, y0 + height)]
    )


def _outline(x0: int, y0: int, size: int):
    coords = [(x, y) for x in range(x0, x0 + size) for y in range(y0, y0 + size)
              if x in (x0, x0 + size - 1) or y in (y0, y0 + size - 1)]
    return compute_line_geometry(coords)


def test_small_square_dropped() -> None:
    """A dense 3×3 square is too narrow in both directions."""
    line = _block(3, 3, 3, 3)

    assert line.density == 1.0
    assert not is_valid_line(line)
    assert sanitise_lines([line]) == []


def test_wide_bar_kept() -> None:
    """A 10×2 bar has width 9 and survives."""
    line = _block(5, 1, 10, 2)

    assert line.area == 20
    assert line.width == 9
    assert sanitise_lines([line]) == [line]


def test_hollow_box_dropped() -> None:
    line = _outline(0, 0, 10)

    assert line.density == pytest.approx(36 / 100)
    assert not is_valid_line(line)


def test_small_area_always_dropped() -> None:
    line = _block(0, 0, 7, 1)  # area 7

    assert not is_valid_line(line, larger_width_threshold=0, density_threshold=0.0)


def test_tall_line_kept() -> None:
    line = _block(0, 0, 1, 9)

    assert line.height == 8
    assert is_valid_line(line)


def test_output_is_ordered_subset_by_identity() -> None:
    lines = [
        _block(0, 0, 10, 2),
        _block(0, 5, 2, 2),
        _outline(20, 0, 12),
        _block(0, 10, 1, 12),
        _block(30, 30, 9, 9),
    ]

    kept = sanitise_lines(lines)

    assert [id(line) for line in kept] == [id(lines[0]), id(lines[3]), id(lines[4])]


def test_lines_are_not_modified() -> None:
    line = _block(0, 0, 10, 2)
    before = (list(line.pixels), line.top_left, line.bottom_right, line.area)

    sanitise_lines([line])

    assert (line.pixels, line.top_left, line.bottom_right, line.area) == before


def test_custom_thresholds() -> None:
    line = _block(0, 0, 5, 2)

    assert not is_valid_line(line)
    assert sanitise_lines([line], larger_width_threshold=4) == [line]


def test_each_line_reported_at_info(caplog) -> None:
    """Per-line diagnostics show up without verbose logging."""
    lines = [_block(0, 0, 10, 2), _block(3, 3, 3, 3)]

    with caplog.at_level(logging.INFO, logger="textregions.sanitizer"):
        sanitise_lines(lines)

    reports = [r for r in caplog.records if "density=" in r.getMessage()]
    assert len(reports) == 2
    assert all(r.levelno == logging.INFO for r in reports)
    assert "width=9 height=1 area=20 pixels=20 density=1.0000" in reports[0].getMessage()
