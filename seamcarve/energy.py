"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

Energy is computed in two stages. A gradient filter turns the current image
into a gradient-response buffer with the same RGBA layout, then the energy
of a pixel is the sum of its red, green and blue gradient responses.
"""

from typing import Callable

import torch
import torch.nn.functional as F

from .config import Config
from .exceptions import MalformedImageError
from .image import RGBAImage

GradientFilter = Callable[[RGBAImage], torch.Tensor]


def sobel_filter(image: RGBAImage) -> torch.Tensor:
    """
    Sobel gradient magnitude of each color channel.

    Each of R, G, B is filtered independently:
    G(i,j) = sqrt(Gx(i,j)^2 + Gy(i,j)^2)

    Border pixels see a replicated edge. Responses are rounded and clamped
    to 0..255 and alpha is copied from the source.

    Args:
        image: Source image

    Returns:
        Flat uint8 gradient-response buffer, same layout as image.data
    """
    pixels = image.pixels()
    rgb = pixels[..., :3].permute(2, 0, 1).unsqueeze(0).to(torch.float32)  # (1, 3, H, W)

    sobel_x = torch.tensor([[-1, 0, 1],
                           [-2, 0, 2],
                           [-1, 0, 1]], dtype=rgb.dtype, device=rgb.device)
    sobel_x = sobel_x.view(1, 1, 3, 3).repeat(3, 1, 1, 1)

    sobel_y = torch.tensor([[-1, -2, -1],
                           [ 0,  0,  0],
                           [ 1,  2,  1]], dtype=rgb.dtype, device=rgb.device)
    sobel_y = sobel_y.view(1, 1, 3, 3).repeat(3, 1, 1, 1)

    padded = F.pad(rgb, (1, 1, 1, 1), mode='replicate')
    grad_x = F.conv2d(padded, sobel_x, groups=3)
    grad_y = F.conv2d(padded, sobel_y, groups=3)

    magnitude = torch.sqrt(grad_x ** 2 + grad_y ** 2)
    magnitude = magnitude.round().clamp(0, 255).to(torch.uint8)

    response = torch.empty_like(pixels)
    response[..., :3] = magnitude.squeeze(0).permute(1, 2, 0)
    response[..., 3] = pixels[..., 3]

    return response.reshape(-1)


def energy_map(gradient, width: int, height: int) -> torch.Tensor:
    """
    Sum the first three channels of a gradient-response buffer per pixel.

    No normalization or clamping is applied, so a cell can exceed 255.

    Args:
        gradient: Flat RGBA gradient-response buffer (tensor or sequence)
        width: Image width
        height: Image height

    Returns:
        Energy grid (height, width); int64 for integer input, float64 otherwise
    """
    if width <= 0 or height <= 0:
        raise MalformedImageError(f"Dimensions must be positive, got {width}x{height}")

    gradient = torch.as_tensor(gradient).reshape(-1)
    expected = width * height * Config.CHANNELS
    if gradient.numel() != expected:
        raise MalformedImageError(
            f"Gradient buffer holds {gradient.numel()} samples, expected {expected} "
            f"for a {width}x{height} image")

    channels = gradient.reshape(height, width, Config.CHANNELS)[..., :3]
    dtype = torch.float64 if channels.is_floating_point() else torch.int64
    return channels.to(dtype).sum(dim=2)
