"""Command-line interface for textregions.

Analyses a single image and writes two images next to it (or into the
output directory): ``line_<name>`` showing the detected text lines with
their bounding boxes, and ``new_<name>`` showing the activation map.
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .pipeline import PipelineConfig, detect_text_lines
from .renderer import render_text_lines
from .utils import (
    ImageLoadError, ImageSaveError, load_image, save_image, setup_logger
)

logger = setup_logger(__name__)

DEFAULT_INPUT = "image.png"

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_SAVE_ERROR = 2
EXIT_CONFIG_ERROR = 3


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Locate text-like regions in a screenshot by local contrast and color analysis."
    )

    parser.add_argument(
        "-i", "--input",
        default=DEFAULT_INPUT,
        help=f"Path to input image file (default: {DEFAULT_INPUT})"
    )

    parser.add_argument(
        "-o", "--output",
        help="Output directory (default: the input image's directory)"
    )

    parser.add_argument(
        "-t", "--threshold",
        type=int,
        default=PipelineConfig.line_threshold,
        help=f"Minimum activation for a pixel to join a line (default: {PipelineConfig.line_threshold})"
    )

    parser.add_argument(
        "--color-threshold",
        type=float,
        default=PipelineConfig.color_threshold,
        help=f"Maximum color distance within one color bucket (default: {PipelineConfig.color_threshold})"
    )

    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar while classifying lines"
    )

    parser.add_argument(
        "-l", "--logfile",
        help="Path to log file for detailed logging"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging (debug detail per stage and rejected line)"
    )

    return parser.parse_args(argv)

def _configure_logging(verbose: bool, logfile: Optional[str]) -> Tuple[Dict[str, int], Optional[logging.Handler]]:
    """Apply the -v/-l options to the package loggers.

    Returns:
        The levels the loggers had before, and the file handler if one was
        added, for :func:`_restore_logging`
    """
    level = logging.DEBUG if verbose else logging.INFO
    package_logger = logging.getLogger("textregions")
    previous_levels = {"textregions": package_logger.level}
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("textregions."):
            module_logger = logging.getLogger(name)
            previous_levels[name] = module_logger.level
            module_logger.setLevel(level)

    file_handler = None
    if logfile:
        file_handler = logging.FileHandler(logfile, mode='w')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        file_handler.setLevel(logging.DEBUG)
        package_logger.addHandler(file_handler)
        package_logger.setLevel(logging.DEBUG)
    return previous_levels, file_handler

def _restore_logging(previous_levels: Dict[str, int], file_handler: Optional[logging.Handler]) -> None:
    for name, level in previous_levels.items():
        logging.getLogger(name).setLevel(level)
    if file_handler is not None:
        logging.getLogger("textregions").removeHandler(file_handler)
        file_handler.close()

def _run(args: argparse.Namespace) -> int:
    """Load, analyse and save for already parsed arguments."""
    try:
        config = PipelineConfig(
            line_threshold=args.threshold,
            color_threshold=args.color_threshold,
            show_progress=args.progress,
        )
    except ValueError as e:
        logger.error(f"Invalid arguments: {e}")
        return EXIT_CONFIG_ERROR

    input_path = Path(args.input)
    output_dir = Path(args.output) if args.output else input_path.parent

    start_time = time.time()
    try:
        image = load_image(input_path)
    except ImageLoadError as e:
        logger.error(str(e))
        return EXIT_LOAD_ERROR
    logger.info(f"Loaded {input_path.name} ({image.shape[1]}x{image.shape[0]})")

    result = detect_text_lines(image, config)
    line_image = render_text_lines(result.text_lines, image.shape)

    outputs = [
        (line_image, output_dir / f"line_{input_path.name}"),
        (result.activation_map, output_dir / f"new_{input_path.name}"),
    ]
    failed = 0
    for output_image, output_path in outputs:
        try:
            save_image(output_image, output_path)
            logger.info(f"Saved {output_path}")
        except ImageSaveError as e:
            logger.error(str(e))
            failed += 1

    logger.info(f"Found {len(result.text_lines)} text lines in {time.time() - start_time:.2f}s")
    return EXIT_SAVE_ERROR if failed else EXIT_OK

def main(argv: Optional[List[str]] = None) -> int:
    """Run the detection pipeline on one image and write the result images.

    Logger levels and handlers changed by -v/-l are put back before returning.

    Returns:
        Process exit code: 0 on success, 1 if the input could not be loaded,
        2 if any output image could not be saved,
        3 if the detection parameters are invalid
    """
    args = parse_args(argv)
    previous_levels, file_handler = _configure_logging(args.verbose, args.logfile)
    try:
        return _run(args)
    finally:
        _restore_logging(previous_levels, file_handler)

if __name__ == "__main__":
    sys.exit(main())
