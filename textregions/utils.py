"""Shared utilities and type definitions for textregions."""

import cv2
import numpy as np
from pathlib import Path
from typing import List, Tuple, Union
import logging

# Type aliases for clarity
ImageArray = np.ndarray  # H×W×3 BGR uint8
ActivationMap = np.ndarray  # H×W×3 uint8, all channels equal
Color = Tuple[int, int, int]  # BGR color tuple
Coord = Tuple[int, int]  # (x, y)
Cluster = List[Coord]
ImagePath = Union[str, Path]


class ImageLoadError(ValueError):
    """Raised when a source image cannot be opened or decoded."""


class ImageSaveError(ValueError):
    """Raised when an output image cannot be written."""


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Set up a logger with consistent formatting.

    Args:
        name: Logger name
        level: Logging level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:  # Avoid duplicate handlers
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger

def load_image(image_path: ImagePath) -> ImageArray:
    """Load an image from file path.

    Args:
        image_path: Path to image file

    Returns:
        Image array in BGR format

    Raises:
        ImageLoadError: If image cannot be loaded
    """
    image = cv2.imread(str(image_path), cv2.IMREAD_COLOR)
    if image is None:
        raise ImageLoadError(f"Could not load image: {image_path}")
    return image

def save_image(image: ImageArray, output_path: ImagePath) -> None:
    """Save an image to file.

    Args:
        image: Image array in BGR format
        output_path: Path where to save the image

    Raises:
        ImageSaveError: If image cannot be saved
    """
    output_path = Path(output_path)

    if output_path.suffix.lower() == '.png':
        params = [cv2.IMWRITE_PNG_COMPRESSION, 8]
    else:
        params = []

    try:
        success = cv2.imwrite(str(output_path), image, params)
    except cv2.error as e:
        raise ImageSaveError(f"Could not save image to: {output_path} ({e})") from e
    if not success:
        raise ImageSaveError(f"Could not save image to: {output_path}")

def validate_image(image: ImageArray) -> None:
    """Check that an array is a non-empty H×W×3 uint8 image.

    Raises:
        ValueError: If the array has the wrong shape or dtype
    """
    if not isinstance(image, np.ndarray):
        raise ValueError("Image must be a numpy array")
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Invalid image format: expected H×W×3, got shape {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Invalid image format: expected uint8, got {image.dtype}")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise ValueError("Image must not be empty")

def pixel_color(image: ImageArray, x: int, y: int) -> Color:
    """Return the color at (x, y) as a tuple of Python ints."""
    b, g, r = image[y, x]
    return (int(b), int(g), int(r))

def color_distance(color1: Color, color2: Color) -> float:
    """Calculate Euclidean distance between two BGR colors.

    Args:
        color1: First color as BGR tuple
        color2: Second color as BGR tuple

    Returns:
        Euclidean distance between colors
    """
    return float(np.sqrt(sum((int(a) - int(b)) ** 2 for a, b in zip(color1, color2))))
