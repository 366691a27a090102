"""Common test fixtures."""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Deterministic random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def square_image():
    """20×20 black image with a solid 3×3 white square at x, y in 8..10."""
    image = np.zeros((20, 20, 3), dtype=np.uint8)
    image[8:11, 8:11] = 255
    return image


@pytest.fixture
def bar_image():
    """30×12 black image with a solid 10×2 white bar at x in 10..19, y in 5..6."""
    image = np.zeros((12, 30, 3), dtype=np.uint8)
    image[5:7, 10:20] = 255
    return image
