"""Exception hierarchy for seamcarve."""


class CarveError(Exception):
    """Base exception for all seam carving errors."""


class MalformedImageError(CarveError, ValueError):
    """Raised when a buffer, grid or seam does not match its declared shape."""


class DegenerateImageError(CarveError, ValueError):
    """Raised when an image is too small to have a seam removed."""


class InvalidAmountError(CarveError, ValueError):
    """Raised when a reduction amount or seam count is out of range."""


class SeamNotFoundError(CarveError, RuntimeError):
    """Raised when the seam search never reaches the bottom row."""
