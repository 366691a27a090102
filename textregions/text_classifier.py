"""Two-color text heuristic.

The original-image colors under each line are grouped with a simple online
clustering: a pixel joins the first bucket whose representative lies within
``color_threshold`` (Euclidean, over all channels), otherwise it starts a new
bucket. A line whose pixels fall into exactly two buckets, stroke and
background, is taken to be text.

Anti-aliased text can produce a faint third bucket and is then rejected.
"""

from dataclasses import dataclass
from typing import List

from tqdm import tqdm

from .geometry import Line
from .utils import ImageArray, Color, setup_logger, color_distance, pixel_color

logger = setup_logger(__name__)

DIFFERENCE_COLOR_THRESH = 30.0
TEXT_COLOR_COUNT = 2


@dataclass
class ColorBucket:
    """A representative color and how many pixels matched it."""

    color: Color
    frequency: int = 1


@dataclass
class TextLine:
    """A line judged to contain text.

    ``text`` is reserved for a transcription and is currently always empty.
    """

    line: Line
    stroke_color: Color
    text: str = ""


def get_line_colors(
    line: Line,
    image: ImageArray,
    color_threshold: float = DIFFERENCE_COLOR_THRESH,
) -> List[ColorBucket]:
    """Bucket the image colors found under a line's pixels.

    Buckets are matched in insertion order and a bucket's representative is
    the exact color of the pixel that created it.

    Args:
        line: Line whose pixels are sampled
        image: Original image as H×W×3 BGR uint8 array
        color_threshold: Maximum distance for a color to join a bucket

    Returns:
        Buckets in the order they were created
    """
    buckets: List[ColorBucket] = []
    for x, y in line.pixels:
        color = pixel_color(image, x, y)
        for bucket in buckets:
            if color_distance(color, bucket.color) <= color_threshold:
                bucket.frequency += 1
                break
        else:
            buckets.append(ColorBucket(color))
    return buckets


def get_most_common_color(buckets: List[ColorBucket]) -> Color:
    """Return the color of the most frequent bucket; the earliest wins ties.

    Raises:
        ValueError: If there are no buckets
    """
    if not buckets:
        raise ValueError("No color buckets to choose from")

    most_common = buckets[0]
    for bucket in buckets[1:]:
        if bucket.frequency > most_common.frequency:
            most_common = bucket
    return most_common.color


def get_text_lines(
    lines: List[Line],
    image: ImageArray,
    color_threshold: float = DIFFERENCE_COLOR_THRESH,
    show_progress: bool = False,
) -> List[TextLine]:
    """Keep the lines whose colors reduce to exactly two buckets.

    Args:
        lines: Sanitised lines
        image: Original image as H×W×3 BGR uint8 array
        color_threshold: Maximum distance for a color to join a bucket
        show_progress: Display a progress bar over the lines

    Returns:
        TextLine for every line classified as text, in input order
    """
    text_lines = []
    for line in tqdm(lines, desc="Classifying lines", disable=not show_progress):
        buckets = get_line_colors(line, image, color_threshold)
        if len(buckets) != TEXT_COLOR_COUNT:
            logger.debug(f"Line at {line.bottom_left} has {len(buckets)} color buckets, skipping")
            continue

        stroke_color = get_most_common_color(buckets)
        text_lines.append(TextLine(line=line, stroke_color=stroke_color))

    logger.info(f"Classified {len(text_lines)}/{len(lines)} lines as text")
    return text_lines
