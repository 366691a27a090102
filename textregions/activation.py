"""Local contrast ("activation") filter and activation statistics.

Every pixel is compared against its 5×5 neighbourhood. The 8 pixels touching
it (the immediate ring) count for IMMEDIATE_NEIGHBOUR_WEIGHT of the result and
the 16 pixels one step further out count for the remainder, so edges and thin
strokes light up while flat areas stay at zero.

Each ring is averaged only over the neighbours that fall inside the image.
Border pixels therefore see a differently scaled activation than interior
pixels, which shifts which border pixels cross the line threshold.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .utils import ImageArray, ActivationMap, setup_logger, validate_image

logger = setup_logger(__name__)

IMMEDIATE_NEIGHBOUR_WEIGHT = 0.6
KERNEL_RADIUS = 2

# The kernel runs in single precision; values that land just below an integer
# truncate down, which decides threshold crossings on black/white images.
_IMMEDIATE_WEIGHT = np.float32(IMMEDIATE_NEIGHBOUR_WEIGHT)
_UNIMMEDIATE_WEIGHT = np.float32(1.0) - _IMMEDIATE_WEIGHT


@dataclass(frozen=True)
class ActivationStats:
    """Descriptive statistics for an activation map.

    ``avg_activation`` is taken over pixels with activation > 0 only and is
    ``None`` when there are none.
    """

    max: int
    min: int
    activation_count: int
    avg_activation: Optional[float]

    @property
    def has_activation(self) -> bool:
        return self.activation_count > 0


def _is_outer(x_offset: int, y_offset: int) -> bool:
    return abs(x_offset) == KERNEL_RADIUS or abs(y_offset) == KERNEL_RADIUS


def _kernel_offsets():
    for x_offset in range(-KERNEL_RADIUS, KERNEL_RADIUS + 1):
        for y_offset in range(-KERNEL_RADIUS, KERNEL_RADIUS + 1):
            if x_offset == 0 and y_offset == 0:
                continue
            yield x_offset, y_offset


def get_pixel_activation(image: ImageArray, x: int, y: int) -> float:
    """Compute the activation of a single pixel.

    This is the scalar form of :func:`compute_activation_map` and gives the
    same value before truncation. Every step runs in float32.

    Args:
        image: Input image as H×W×C uint8 array
        x: Column of the pixel
        y: Row of the pixel

    Returns:
        Activation as a float in [0, 255]. A pixel with no in-bounds
        neighbour in either ring has activation 0.
    """
    height, width, channels = image.shape
    centre = [int(c) for c in image[y, x]]
    channel_count = np.float32(channels)

    immediate_activation = np.float32(0.0)
    unimmediate_activation = np.float32(0.0)
    checked_immediate = 0
    checked_unimmediate = 0

    for x_offset, y_offset in _kernel_offsets():
        nx = x + x_offset
        ny = y + y_offset
        if nx < 0 or nx >= width or ny < 0 or ny >= height:
            continue

        neighbour = image[ny, nx]
        difference = np.float32(0.0)
        for channel in range(channels):
            difference += np.float32(abs(centre[channel] - int(neighbour[channel]))) / channel_count

        if _is_outer(x_offset, y_offset):
            unimmediate_activation += difference
            checked_unimmediate += 1
        else:
            immediate_activation += difference
            checked_immediate += 1

    if checked_immediate == 0 or checked_unimmediate == 0:
        return 0.0

    immediate_activation /= np.float32(checked_immediate)
    unimmediate_activation /= np.float32(checked_unimmediate)
    return float(immediate_activation * _IMMEDIATE_WEIGHT
                 + unimmediate_activation * _UNIMMEDIATE_WEIGHT)


def compute_activation_map(image: ImageArray) -> ActivationMap:
    """Build the activation map of an image.

    The kernel is applied by shifting the whole image once per neighbour
    offset, so each ring's sum and in-bounds count are accumulated for all
    pixels together. Arithmetic is float32 and follows the same order as
    :func:`get_pixel_activation`, so truncated values match it exactly.

    Args:
        image: Input image as H×W×3 BGR uint8 array

    Returns:
        H×W×3 uint8 array holding the truncated activation replicated in
        every channel

    Raises:
        ValueError: If the image is not a non-empty H×W×3 uint8 array
    """
    validate_image(image)
    height, width, channels = image.shape
    pixels = image.astype(np.float32)
    channel_count = np.float32(channels)

    immediate_sum = np.zeros((height, width), dtype=np.float32)
    outer_sum = np.zeros((height, width), dtype=np.float32)
    immediate_count = np.zeros((height, width), dtype=np.int32)
    outer_count = np.zeros((height, width), dtype=np.int32)

    for x_offset, y_offset in _kernel_offsets():
        # Rows/columns whose neighbour at this offset is inside the image
        y0, y1 = max(0, -y_offset), min(height, height - y_offset)
        x0, x1 = max(0, -x_offset), min(width, width - x_offset)
        if y0 >= y1 or x0 >= x1:
            continue

        centre = pixels[y0:y1, x0:x1]
        neighbour = pixels[y0 + y_offset:y1 + y_offset, x0 + x_offset:x1 + x_offset]
        per_channel = np.abs(centre - neighbour) / channel_count
        difference = np.zeros((y1 - y0, x1 - x0), dtype=np.float32)
        for channel in range(channels):
            difference += per_channel[:, :, channel]

        if _is_outer(x_offset, y_offset):
            outer_sum[y0:y1, x0:x1] += difference
            outer_count[y0:y1, x0:x1] += 1
        else:
            immediate_sum[y0:y1, x0:x1] += difference
            immediate_count[y0:y1, x0:x1] += 1

    defined = (immediate_count > 0) & (outer_count > 0)
    activation = np.zeros((height, width), dtype=np.float32)
    immediate = immediate_sum[defined] / immediate_count[defined].astype(np.float32)
    outer = outer_sum[defined] / outer_count[defined].astype(np.float32)
    activation[defined] = immediate * _IMMEDIATE_WEIGHT + outer * _UNIMMEDIATE_WEIGHT

    gray = np.clip(activation, 0, 255).astype(np.uint8)
    logger.debug(f"Computed activation map for {width}x{height} image")
    return np.repeat(gray[:, :, np.newaxis], 3, axis=2)


def get_activation_stats(activation_map: ActivationMap) -> ActivationStats:
    """Aggregate statistics over the first channel of an activation map.

    Args:
        activation_map: H×W×3 (or H×W) uint8 activation map

    Returns:
        ActivationStats with max, min, count of positive pixels and their
        average, or ``None`` as the average when no pixel is positive

    Raises:
        ValueError: If the map is empty
    """
    values = activation_map[:, :, 0] if activation_map.ndim == 3 else activation_map
    if values.size == 0:
        raise ValueError("Activation map must not be empty")

    active = values[values > 0]
    activation_count = int(active.size)
    avg_activation = float(active.mean()) if activation_count else None

    return ActivationStats(
        max=int(values.max()),
        min=int(values.min()),
        activation_count=activation_count,
        avg_activation=avg_activation,
    )


def format_activation_stats(stats: ActivationStats) -> str:
    """Render activation statistics as a single summary line."""
    if not stats.has_activation:
        avg = "n/a (no activation)"
    else:
        avg = f"{stats.avg_activation:.4f}"
    return (f"Max: {stats.max} Min: {stats.min} "
            f"Activation count: {stats.activation_count} Avg activation: {avg}")
