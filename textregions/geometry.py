"""Bounding geometry for pixel clusters.

A cluster's bounding quad is built from its four extremal points: the x
extremes give the left and right edges, the y extremes the top and bottom.
"Top" is the largest y value, so ``height`` is ``top_left.y - bottom_left.y``.
"""

from dataclasses import dataclass
from typing import List

from .utils import Cluster, Coord, setup_logger

logger = setup_logger(__name__)


@dataclass
class Line:
    """A cluster together with its axis-aligned bounding quad and area.

    The corners combine an extremal x with an extremal y and need not be
    pixels of the cluster.
    """

    pixels: Cluster
    top_left: Coord
    top_right: Coord
    bottom_left: Coord
    bottom_right: Coord
    area: int

    @property
    def pixel_count(self) -> int:
        return len(self.pixels)

    @property
    def width(self) -> int:
        # Edge to edge, one less than the pixel span
        return self.top_right[0] - self.top_left[0]

    @property
    def height(self) -> int:
        return self.top_left[1] - self.bottom_left[1]

    @property
    def density(self) -> float:
        """Fraction of the bounding rectangle covered by cluster pixels."""
        return self.pixel_count / self.area


def compute_line_geometry(cluster: Cluster) -> Line:
    """Derive the bounding quad and area of a single cluster.

    Extremal points are only replaced on strict improvement, so each one is
    the first pixel in cluster order that reaches that extreme.

    Args:
        cluster: Non-empty list of (x, y) coordinates

    Returns:
        Line describing the cluster

    Raises:
        ValueError: If the cluster is empty
    """
    if not cluster:
        raise ValueError("Cluster must contain at least one pixel")

    rightmost = leftmost = top = bottom = cluster[0]
    for point in cluster:
        if point[0] > rightmost[0]:
            rightmost = point
        if point[0] < leftmost[0]:
            leftmost = point
        if point[1] > top[1]:
            top = point
        if point[1] < bottom[1]:
            bottom = point

    area = (rightmost[0] - leftmost[0] + 1) * (top[1] - bottom[1] + 1)

    return Line(
        pixels=cluster,
        top_left=(leftmost[0], top[1]),
        top_right=(rightmost[0], top[1]),
        bottom_left=(leftmost[0], bottom[1]),
        bottom_right=(rightmost[0], bottom[1]),
        area=area,
    )


def get_lines_stats(clusters: List[Cluster]) -> List[Line]:
    """Compute the geometry of every cluster, preserving order."""
    lines = [compute_line_geometry(cluster) for cluster in clusters]
    logger.debug(f"Computed geometry for {len(lines)} clusters")
    return lines
