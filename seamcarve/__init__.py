"""
Content-aware image narrowing by vertical seam carving.

Each step scores every pixel by gradient magnitude, finds the cheapest
top-to-bottom seam with Dijkstra's algorithm and removes it, shrinking the
image by one column.
"""

__version__ = "0.1.0"

from .image import RGBAImage
from .energy import GradientFilter, sobel_filter, energy_map
from .seam import find_seam, seam_energy, remove_seam
from .carving import carve_seam, seams_for_amount, iter_carve, carve_image, carve
from .exceptions import (
    CarveError,
    MalformedImageError,
    DegenerateImageError,
    InvalidAmountError,
    SeamNotFoundError,
)

__all__ = [
    'RGBAImage',
    'GradientFilter',
    'sobel_filter',
    'energy_map',
    'find_seam',
    'seam_energy',
    'remove_seam',
    'carve_seam',
    'seams_for_amount',
    'iter_carve',
    'carve_image',
    'carve',
    'CarveError',
    'MalformedImageError',
    'DegenerateImageError',
    'InvalidAmountError',
    'SeamNotFoundError',
]
