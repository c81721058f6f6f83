"""
RGBA image buffer used throughout the carving pipeline.

An image is a flat, row-major sequence of unsigned 8-bit samples with four
interleaved channels (red, green, blue, alpha) per pixel:

    offset(row, col) = row * width * 4 + col * 4

The buffer length always equals width * height * 4. Carving never mutates
an image; each step returns a new one.
"""

import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
import torch
from PIL import Image

from .config import Config
from .exceptions import MalformedImageError


@dataclass(frozen=True, eq=False)
class RGBAImage:
    """
    Flat RGBA pixel buffer with its dimensions.

    Attributes:
        data: uint8 tensor of length width * height * 4
        width: Number of columns
        height: Number of rows
    """

    data: torch.Tensor
    width: int
    height: int

    def __post_init__(self):
        try:
            data = torch.as_tensor(self.data)
        except (TypeError, ValueError, RuntimeError) as e:
            raise MalformedImageError(f"Cannot read pixel buffer: {e}") from e

        if data.is_floating_point() or data.is_complex() or data.dtype == torch.bool:
            raise MalformedImageError(f"Expected an integer buffer, got {data.dtype}")
        if data.dtype != torch.uint8:
            if data.numel() and (data.min() < 0 or data.max() > 255):
                raise MalformedImageError("Pixel samples must lie in 0..255")
            data = data.to(torch.uint8)
        object.__setattr__(self, 'data', data.reshape(-1))

        for name in ('width', 'height'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise MalformedImageError(f"{name} must be an integer, got {value!r}")
            object.__setattr__(self, name, int(value))
        if self.width <= 0 or self.height <= 0:
            raise MalformedImageError(
                f"Dimensions must be positive, got {self.width}x{self.height}")

        expected = self.width * self.height * Config.CHANNELS
        if self.data.numel() != expected:
            raise MalformedImageError(
                f"Buffer holds {self.data.numel()} samples, expected {expected} "
                f"for a {self.width}x{self.height} RGBA image")

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height), same order as PIL."""
        return self.width, self.height

    def pixels(self) -> torch.Tensor:
        """View of the buffer as (H, W, 4)."""
        return self.data.view(self.height, self.width, Config.CHANNELS)

    def clone(self) -> 'RGBAImage':
        return RGBAImage(self.data.clone(), self.width, self.height)

    @classmethod
    def from_array(cls, array) -> 'RGBAImage':
        """
        Build an image from an (H, W, 4) or (H, W, 3) array.

        Three-channel input gets an opaque alpha channel.

        Args:
            array: numpy array or tensor with values in 0..255

        Returns:
            RGBAImage holding a copy of the pixels
        """
        pixels = torch.as_tensor(np.array(array))
        if pixels.dim() != 3 or pixels.shape[2] not in (3, 4):
            raise MalformedImageError(
                f"Expected an (H, W, 3) or (H, W, 4) array, got shape {tuple(pixels.shape)}")

        H, W, C = pixels.shape
        if C == 3:
            alpha = torch.full((H, W, 1), 255, dtype=pixels.dtype)
            pixels = torch.cat([pixels, alpha], dim=2)

        return cls(pixels.reshape(-1).clone(), W, H)

    @classmethod
    def from_pil(cls, image: Image.Image) -> 'RGBAImage':
        """Convert a PIL image (any mode) to an RGBAImage."""
        return cls.from_array(np.array(image.convert('RGBA')))

    @classmethod
    def open(cls, path) -> 'RGBAImage':
        """Load an image file with PIL."""
        with Image.open(path) as img:
            return cls.from_pil(img)

    def to_pil(self) -> Image.Image:
        """Convert to an RGBA PIL image."""
        return Image.fromarray(self.pixels().cpu().numpy())

    def save(self, path, format: Optional[str] = None):
        """
        Save with PIL; format is inferred from the path when not given.

        Formats without an alpha channel (JPEG, BMP) are written as RGB.
        """
        if format is None:
            format = Image.registered_extensions().get(Path(path).suffix.lower())

        img = self.to_pil()
        if format in Config.OPAQUE_FORMATS:
            img = img.convert('RGB')
        img.save(path, format=format)
