"""Size and density filtering of lines.

Small artefacts and sparse shapes such as outline-only boxes are removed;
dense blobs that are large enough in at least one direction are kept.
"""

from typing import List

from .geometry import Line
from .utils import setup_logger

logger = setup_logger(__name__)

AREA_THRESHOLD = 8
LARGER_WIDTH_THRESHOLD = 8
# Minimum pixel density; removes empty "box" elements
ACTIVATION_THRESHOLD = 0.5


def is_valid_line(
    line: Line,
    area_threshold: int = AREA_THRESHOLD,
    larger_width_threshold: int = LARGER_WIDTH_THRESHOLD,
    density_threshold: float = ACTIVATION_THRESHOLD,
) -> bool:
    """Return True if a line is large and dense enough to keep."""
    return (line.area >= area_threshold
            and max(line.width, line.height) >= larger_width_threshold
            and line.density >= density_threshold)


def sanitise_lines(
    lines: List[Line],
    area_threshold: int = AREA_THRESHOLD,
    larger_width_threshold: int = LARGER_WIDTH_THRESHOLD,
    density_threshold: float = ACTIVATION_THRESHOLD,
) -> List[Line]:
    """Filter lines by area, larger extent and pixel density.

    Args:
        lines: Lines to filter
        area_threshold: Minimum bounding area
        larger_width_threshold: Minimum of max(width, height)
        density_threshold: Minimum pixel_count / area

    Returns:
        The retained lines, unmodified and in their original order
    """
    kept = []
    for line in lines:
        logger.info(f"width={line.width} height={line.height} area={line.area} "
                    f"pixels={line.pixel_count} density={line.density:.4f}")
        if is_valid_line(line, area_threshold, larger_width_threshold, density_threshold):
            kept.append(line)

    logger.info(f"Kept {len(kept)}/{len(lines)} lines after sanitising")
    return kept
