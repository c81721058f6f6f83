"""Shared test fixtures for the seamcarve test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.image import RGBAImage


@pytest.fixture
def random_image():
    """Deterministic 12x16 RGBA image with random pixels."""
    torch.manual_seed(42)
    data = torch.randint(0, 256, (12 * 16 * 4,), dtype=torch.uint8)
    return RGBAImage(data, 16, 12)


@pytest.fixture
def counting_image():
    """4x2 image whose samples are 0..31 in buffer order."""
    return RGBAImage(torch.arange(32, dtype=torch.uint8), 4, 2)


def make_solid_image(H, W, rgba=(1, 1, 1, 255)):
    """Single-color image."""
    pixels = torch.tensor(rgba, dtype=torch.uint8).expand(H, W, 4)
    return RGBAImage(pixels.reshape(-1).clone(), W, H)


def make_edge_image(H, W, edge_col):
    """Black left of edge_col, white from edge_col on, opaque."""
    pixels = torch.zeros(H, W, 4, dtype=torch.uint8)
    pixels[:, edge_col:, :3] = 255
    pixels[..., 3] = 255
    return RGBAImage(pixels.reshape(-1).clone(), W, H)


def identity_filter(image):
    """Gradient filter that treats the pixels themselves as the response."""
    return image.data.clone()


def enumerate_seams(H, W):
    """All diagonal-only seams starting at (0, W // 2)."""
    seams = [[(0, W // 2)]]
    for row in range(1, H):
        extended = []
        for seam in seams:
            col = seam[-1][1]
            for new_col in (col - 1, col + 1):
                if 0 <= new_col < W:
                    extended.append(seam + [(row, new_col)])
        seams = extended
    return seams
