"""Textregions: contrast-based text region detection for screenshots.

This package locates rectangular, text-like regions in a single image by
measuring local pixel contrast, grouping high-contrast pixels into clusters,
filtering them by size and density, and keeping the clusters whose colors
reduce to two dominant buckets.
"""

__version__ = "0.1.0"
__author__ = "Textregions Team"

# Main pipeline components
from .activation import (
    ActivationStats,
    compute_activation_map,
    get_pixel_activation,
    get_activation_stats,
    format_activation_stats,
)
from .components import extract_clusters, get_surrounding_pixels
from .geometry import Line, compute_line_geometry, get_lines_stats
from .sanitizer import sanitise_lines, is_valid_line
from .text_classifier import (
    ColorBucket,
    TextLine,
    get_line_colors,
    get_most_common_color,
    get_text_lines,
)
from .renderer import draw_line, draw_bounding_box, render_text_lines
from .pipeline import PipelineConfig, PipelineResult, detect_text_lines
from .utils import ImageLoadError, ImageSaveError, load_image, save_image, setup_logger

# CLI entry point
from .cli import main

__all__ = [
    "ActivationStats",
    "compute_activation_map",
    "get_pixel_activation",
    "get_activation_stats",
    "format_activation_stats",
    "extract_clusters",
    "get_surrounding_pixels",
    "Line",
    "compute_line_geometry",
    "get_lines_stats",
    "sanitise_lines",
    "is_valid_line",
    "ColorBucket",
    "TextLine",
    "get_line_colors",
    "get_most_common_color",
    "get_text_lines",
    "draw_line",
    "draw_bounding_box",
    "render_text_lines",
    "PipelineConfig",
    "PipelineResult",
    "detect_text_lines",
    "ImageLoadError",
    "ImageSaveError",
    "load_image",
    "save_image",
    "setup_logger",
    "main",
]
