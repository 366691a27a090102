"""Connected-component extraction over an activation map.

Pixels at or above the line threshold are grouped into 8-connected clusters
with an iterative (stack based) flood fill. Clusters that are too small to be
anything but artefacts are dropped.
"""

from typing import List

import numpy as np

from .utils import ActivationMap, Cluster, Coord, setup_logger

logger = setup_logger(__name__)

LINE_THRESHOLD = 15
MIN_CLUSTER_SIZE = 5  # clusters of 4 or fewer pixels are noise


def get_surrounding_pixels(x: int, y: int, width: int, height: int) -> List[Coord]:
    """Return the in-bounds 8-connected neighbours of (x, y)."""
    pixels = []
    for x_offset in (-1, 0, 1):
        for y_offset in (-1, 0, 1):
            if x_offset == 0 and y_offset == 0:
                continue
            nx = x + x_offset
            ny = y + y_offset
            if nx < 0 or nx >= width or ny < 0 or ny >= height:
                continue
            pixels.append((nx, ny))
    return pixels


def extract_clusters(
    activation_map: ActivationMap,
    threshold: int = LINE_THRESHOLD,
    min_cluster_size: int = MIN_CLUSTER_SIZE,
    in_place: bool = False,
) -> List[Cluster]:
    """Group activated pixels into 8-connected clusters.

    Pixels are scanned column by column (x outer, y inner). Each unvisited
    pixel with intensity >= ``threshold`` seeds a flood fill; the pixels of a
    cluster are listed in the order they were reached, seed first.

    Visited pixels are tracked in a separate boolean grid, so the map is left
    as it was unless ``in_place`` is set. With ``in_place`` every visited
    pixel, including those of discarded clusters, is zeroed in the map and
    everything below the threshold is left untouched.

    Args:
        activation_map: H×W×3 (or H×W) uint8 activation map
        threshold: Minimum intensity for a pixel to join a cluster
        min_cluster_size: Clusters with fewer pixels are discarded
        in_place: Zero visited pixels in ``activation_map``

    Returns:
        List of clusters, each a list of unique (x, y) coordinates

    Raises:
        ValueError: If threshold or min_cluster_size is out of range
    """
    if not 0 < threshold <= 255:
        raise ValueError("threshold must be between 1 and 255")
    if min_cluster_size < 1:
        raise ValueError("min_cluster_size must be positive")

    values = activation_map[:, :, 0] if activation_map.ndim == 3 else activation_map
    height, width = values.shape
    activated = values >= threshold
    visited = np.zeros((height, width), dtype=bool)

    clusters: List[Cluster] = []
    discarded = 0

    # Transposing gives candidates in column-major order
    seed_xs, seed_ys = np.nonzero(activated.T)
    for x, y in zip(seed_xs.tolist(), seed_ys.tolist()):
        if visited[y, x]:
            continue

        cluster = [(x, y)]
        visited[y, x] = True
        to_check = [(x, y)]

        while to_check:
            cx, cy = to_check.pop()
            for nx, ny in get_surrounding_pixels(cx, cy, width, height):
                if activated[ny, nx] and not visited[ny, nx]:
                    visited[ny, nx] = True
                    cluster.append((nx, ny))
                    to_check.append((nx, ny))

        if len(cluster) >= min_cluster_size:
            clusters.append(cluster)
        else:
            discarded += 1

    if in_place:
        activation_map[visited] = 0

    logger.info(f"Extracted {len(clusters)} clusters at threshold {threshold} "
                f"({discarded} small clusters discarded)")
    return clusters
