"""End-to-end text region detection for a single image.

Stages run strictly in order:
1. Activation map (local contrast)
2. Activation statistics
3. Cluster extraction at the line threshold
4. Bounding geometry
5. Size/density sanitising
6. Two-color text classification against the original image
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .activation import (
    ActivationStats, compute_activation_map, get_activation_stats, format_activation_stats
)
from .components import LINE_THRESHOLD, MIN_CLUSTER_SIZE, extract_clusters
from .geometry import Line, get_lines_stats
from .sanitizer import AREA_THRESHOLD, LARGER_WIDTH_THRESHOLD, ACTIVATION_THRESHOLD, sanitise_lines
from .text_classifier import DIFFERENCE_COLOR_THRESH, TextLine, get_text_lines
from .utils import ImageArray, ActivationMap, Cluster, setup_logger, validate_image

logger = setup_logger(__name__)


@dataclass
class PipelineConfig:
    """Tunable parameters for the detection pipeline."""

    # Minimum activation for a pixel to be part of a cluster
    line_threshold: int = LINE_THRESHOLD
    # Clusters with fewer pixels are treated as noise
    min_cluster_size: int = MIN_CLUSTER_SIZE
    area_threshold: int = AREA_THRESHOLD
    # Minimum of max(width, height)
    larger_width_threshold: int = LARGER_WIDTH_THRESHOLD
    density_threshold: float = ACTIVATION_THRESHOLD
    # Maximum color distance for two pixels to share a bucket
    color_threshold: float = DIFFERENCE_COLOR_THRESH
    show_progress: bool = False

    def __post_init__(self) -> None:
        if not 0 < self.line_threshold <= 255:
            raise ValueError("line_threshold must be between 1 and 255")
        if self.min_cluster_size < 1:
            raise ValueError("min_cluster_size must be positive")
        if self.area_threshold < 0:
            raise ValueError("area_threshold must be non-negative")
        if self.larger_width_threshold < 0:
            raise ValueError("larger_width_threshold must be non-negative")
        if not 0 <= self.density_threshold <= 1:
            raise ValueError("density_threshold must be between 0 and 1")
        if self.color_threshold < 0:
            raise ValueError("color_threshold must be non-negative")


@dataclass
class PipelineResult:
    """Everything produced while analysing one image."""

    activation_map: ActivationMap
    stats: ActivationStats
    clusters: List[Cluster] = field(default_factory=list)
    lines: List[Line] = field(default_factory=list)
    sanitized_lines: List[Line] = field(default_factory=list)
    text_lines: List[TextLine] = field(default_factory=list)


def detect_text_lines(image: ImageArray, config: Optional[PipelineConfig] = None) -> PipelineResult:
    """Find text-like regions in an image.

    Args:
        image: Input image as H×W×3 BGR uint8 array
        config: Pipeline parameters, defaults if omitted

    Returns:
        PipelineResult holding every intermediate stage output

    Raises:
        ValueError: If the image is not a non-empty H×W×3 uint8 array
    """
    if config is None:
        config = PipelineConfig()
    validate_image(image)

    activation_map = compute_activation_map(image)
    stats = get_activation_stats(activation_map)
    logger.info(format_activation_stats(stats))

    clusters = extract_clusters(
        activation_map,
        threshold=config.line_threshold,
        min_cluster_size=config.min_cluster_size,
    )
    lines = get_lines_stats(clusters)
    sanitized = sanitise_lines(
        lines,
        area_threshold=config.area_threshold,
        larger_width_threshold=config.larger_width_threshold,
        density_threshold=config.density_threshold,
    )
    text_lines = get_text_lines(
        sanitized,
        image,
        color_threshold=config.color_threshold,
        show_progress=config.show_progress,
    )

    return PipelineResult(
        activation_map=activation_map,
        stats=stats,
        clusters=clusters,
        lines=lines,
        sanitized_lines=sanitized,
        text_lines=text_lines,
    )
