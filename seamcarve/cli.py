"""
Command-line driver: load an image, carve it narrower, save the result.

    seamcarve input.jpg output.png --amount 20
    seamcarve input.jpg output.png --seams 50 --no-progress
"""

import argparse
import logging
import sys
from pathlib import Path

from PIL import UnidentifiedImageError
from tqdm import tqdm

from . import __version__
from .carving import check_carvable, iter_carve, seams_for_amount
from .config import Config
from .exceptions import CarveError
from .image import RGBAImage
from .logging_config import setup_logging

logger = logging.getLogger("seamcarve.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seamcarve",
        description="Narrow an image by removing low-energy vertical seams.")
    parser.add_argument("input", type=Path, help="Image to carve")
    parser.add_argument("output", type=Path, help="Where to write the carved image")

    size = parser.add_mutually_exclusive_group()
    size.add_argument("--amount", type=float, default=None,
                      help=f"Width reduction in percent (default: {Config.DEFAULT_AMOUNT})")
    size.add_argument("--seams", type=int, default=None,
                      help="Exact number of seams to remove")

    parser.add_argument("--log-level", default=Config.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity")
    parser.add_argument("--no-progress", action="store_true",
                        help="Hide the progress bar")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        image = RGBAImage.open(args.input)
    except (OSError, UnidentifiedImageError) as e:
        logger.error("Could not read %s: %s", args.input, e)
        return 1
    logger.info("Loaded %s (%dx%d)", args.input, image.width, image.height)

    try:
        if args.seams is not None:
            n_seams = args.seams
        else:
            check_carvable(image)
            amount = Config.DEFAULT_AMOUNT if args.amount is None else args.amount
            n_seams = seams_for_amount(image.width, amount)

        steps = iter_carve(image, n_seams)
        logger.info("Removing %d seams", n_seams)
        carved = image
        for carved in tqdm(steps, total=n_seams, unit="seam", disable=args.no_progress):
            pass
    except CarveError as e:
        logger.error("Carving failed: %s", e)
        return 1

    fmt = None if args.output.suffix else Config.OUTPUT_FORMAT
    try:
        carved.save(args.output, format=fmt)
    except (OSError, ValueError) as e:
        logger.error("Could not write %s: %s", args.output, e)
        return 1

    logger.info("Saved %s (%dx%d)", args.output, carved.width, carved.height)
    return 0


if __name__ == "__main__":
    sys.exit(main())
