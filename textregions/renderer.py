"""Visualisation of detected text lines."""

from typing import List, Tuple

import cv2
import numpy as np

from .geometry import Line
from .text_classifier import TextLine
from .utils import ImageArray, Color

LINE_COLOR: Color = (255, 255, 255)
BOX_COLOR: Color = (0, 255, 0)


def draw_line(canvas: ImageArray, line: Line, color: Color = LINE_COLOR) -> ImageArray:
    """Paint every pixel of a line onto the canvas in place."""
    xs = [x for x, _ in line.pixels]
    ys = [y for _, y in line.pixels]
    canvas[ys, xs] = color
    return canvas


def draw_bounding_box(canvas: ImageArray, line: Line, color: Color = BOX_COLOR) -> ImageArray:
    """Draw a 1-pixel outline through the four corners of a line, in place.

    The outline includes the corner pixels themselves.
    """
    left, top_y = line.top_left
    right, bottom_y = line.bottom_right
    cv2.rectangle(canvas, (left, bottom_y), (right, top_y), color, thickness=1)
    return canvas


def render_text_lines(text_lines: List[TextLine], shape: Tuple[int, ...]) -> ImageArray:
    """Draw text lines and their outlines on a blank canvas.

    Args:
        text_lines: Lines to draw, in drawing order
        shape: Shape of the source image; only height and width are used

    Returns:
        H×W×3 uint8 canvas
    """
    height, width = shape[:2]
    canvas = np.zeros((height, width, 3), dtype=np.uint8)
    for text_line in text_lines:
        draw_line(canvas, text_line.line)
        draw_bounding_box(canvas, text_line.line)
    return canvas
