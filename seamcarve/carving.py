"""
High-level carving functions that orchestrate the seam carving workflow.

Each step recomputes energy from scratch on the current image:

    image -> gradient filter -> energy map -> seam -> narrower image

No seam or energy state carries over between steps.
"""

import logging
import math
from typing import Callable, Iterator, Optional

from .config import Config
from .energy import GradientFilter, energy_map, sobel_filter
from .exceptions import DegenerateImageError, InvalidAmountError
from .image import RGBAImage
from .seam import find_seam, remove_seam, seam_energy

logger = logging.getLogger("seamcarve.carving")

StepCallback = Callable[[int, RGBAImage], None]


def check_carvable(image: RGBAImage):
    """Reject images with a width or height of 1."""
    if image.width <= 1 or image.height <= 1:
        raise DegenerateImageError(
            f"Cannot carve a {image.width}x{image.height} image; "
            f"width and height must both exceed 1")


def carve_seam(image: RGBAImage,
               gradient_filter: GradientFilter = sobel_filter) -> RGBAImage:
    """
    Remove one minimum-energy vertical seam.

    Args:
        image: Image to carve (at least 2x2)
        gradient_filter: Maps an image to its RGBA gradient-response buffer

    Returns:
        New image one pixel narrower
    """
    check_carvable(image)

    energy = energy_map(gradient_filter(image), image.width, image.height)
    seam = find_seam(energy)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Seam from column %d to %d, energy %s",
                     seam[0][1], seam[-1][1], seam_energy(energy, seam))

    return remove_seam(image, seam)


def seams_for_amount(width: int, amount: float) -> int:
    """
    Number of seams to remove for a percentage width reduction.

    floor(width * amount / 100), clamped to width - 1 so at least one
    column always survives.

    Args:
        width: Current image width
        amount: Reduction in percent; values above 100 are clamped

    Returns:
        Seam count in 0..width - 1
    """
    if not math.isfinite(amount) or amount < 0:
        raise InvalidAmountError(f"Reduction amount must be a non-negative percentage, got {amount}")

    amount = min(amount, Config.MAX_AMOUNT)
    n_seams = math.floor(width * amount / 100)
    return max(0, min(n_seams, width - 1))


def iter_carve(image: RGBAImage, n_seams: int,
               gradient_filter: GradientFilter = sobel_filter) -> Iterator[RGBAImage]:
    """
    Remove n_seams seams one at a time, yielding each intermediate image.

    Arguments are validated before the first step runs.

    Args:
        image: Image to carve
        n_seams: Number of seams to remove, 0 <= n_seams < image.width
        gradient_filter: Maps an image to its RGBA gradient-response buffer

    Yields:
        The image after each removal; the last one is the final result
    """
    if n_seams < 0:
        raise InvalidAmountError(f"Seam count must be non-negative, got {n_seams}")
    if n_seams >= image.width:
        raise DegenerateImageError(
            f"Cannot remove {n_seams} seams from an image {image.width} pixels wide")
    if n_seams > 0:
        check_carvable(image)

    return _carve_steps(image, n_seams, gradient_filter)


def _carve_steps(image: RGBAImage, n_seams: int,
                 gradient_filter: GradientFilter) -> Iterator[RGBAImage]:
    carved = image
    for i in range(n_seams):
        carved = carve_seam(carved, gradient_filter)
        logger.debug("Removed %d/%d seams, size: %dx%d",
                     i + 1, n_seams, carved.width, carved.height)
        yield carved


def carve_image(image: RGBAImage, n_seams: int,
                gradient_filter: GradientFilter = sobel_filter,
                on_step: Optional[StepCallback] = None) -> RGBAImage:
    """
    Remove n_seams vertical seams.

    Args:
        image: Image to carve
        n_seams: Number of seams to remove, 0 <= n_seams < image.width
        gradient_filter: Maps an image to its RGBA gradient-response buffer
        on_step: Called as on_step(i, image) after the i-th removal (0-based)

    Returns:
        Carved image; the input itself when n_seams is 0
    """
    carved = image
    logger.debug("Carving %d seams from %dx%d image", n_seams, image.width, image.height)

    for i, carved in enumerate(iter_carve(image, n_seams, gradient_filter)):
        if on_step is not None:
            on_step(i, carved)

    logger.debug("Carved image to %dx%d", carved.width, carved.height)
    return carved


def carve(image: RGBAImage, amount: float,
          gradient_filter: GradientFilter = sobel_filter,
          on_step: Optional[StepCallback] = None) -> RGBAImage:
    """
    Narrow an image by a percentage of its width.

    Args:
        image: Image to carve (at least 2x2)
        amount: Reduction in percent of the original width
        gradient_filter: Maps an image to its RGBA gradient-response buffer
        on_step: Called as on_step(i, image) after the i-th removal (0-based)

    Returns:
        Carved image
    """
    check_carvable(image)
    n_seams = seams_for_amount(image.width, amount)
    return carve_image(image, n_seams, gradient_filter, on_step=on_step)
