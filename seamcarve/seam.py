"""
Seam computation and removal.

The energy grid is searched as an implicit weighted graph: every cell is a
node and each cell links to its down-left and down-right neighbours in the
next row. The seam is the cheapest path from the centre of the top row to
any cell of the bottom row, found with Dijkstra's algorithm over a
lazy-deletion binary heap.
"""

import heapq
import itertools
import math
from typing import List, Tuple

import torch

from .exceptions import DegenerateImageError, MalformedImageError, SeamNotFoundError
from .image import RGBAImage

Seam = List[Tuple[int, int]]

# Column offsets explored from each cell; straight down (0) is not a move.
STEPS = (-1, 1)


def _as_grid(energy) -> List[List[float]]:
    """Energy grid as nested Python lists (fast scalar access in the search loop)."""
    try:
        energy = torch.as_tensor(energy)
    except (TypeError, ValueError, RuntimeError) as e:
        raise MalformedImageError(f"Energy grid is not a rectangular grid of numbers: {e}") from e

    if energy.numel() == 0:
        return []
    if energy.dim() != 2:
        raise MalformedImageError(f"Energy grid must be 2-D, got shape {tuple(energy.shape)}")
    return energy.tolist()


def find_seam(energy) -> Seam:
    """
    Find the minimum-energy vertical seam starting at the top-row centre.

    The search starts at (0, W // 2) with distance energy[0][W // 2] and only
    moves diagonally downward, to (row + 1, col - 1) and (row + 1, col + 1).
    Frontier entries with equal distance are popped in insertion order.
    The first bottom-row cell to be popped ends the search.

    Args:
        energy: Energy grid (H, W), tensor or nested sequence

    Returns:
        Seam as [(row, col), ...], one entry per row from top to bottom

    Raises:
        SeamNotFoundError: The grid is empty or no bottom-row cell is reachable
    """
    grid = _as_grid(energy)
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    if rows == 0 or cols == 0:
        raise SeamNotFoundError("Cannot find a seam in an empty energy grid")

    distances = [[math.inf] * cols for _ in range(rows)]
    visited = [[False] * cols for _ in range(rows)]
    previous = [[None] * cols for _ in range(rows)]

    start_row, start_col = 0, cols // 2
    distances[start_row][start_col] = grid[start_row][start_col]

    counter = itertools.count()
    heap = [(distances[start_row][start_col], next(counter), start_row, start_col)]

    while heap:
        distance, _, row, col = heapq.heappop(heap)
        if visited[row][col]:
            continue
        visited[row][col] = True

        if row == rows - 1:
            seam = [(row, col)]
            current = previous[row][col]
            while current is not None:
                seam.append(current)
                current = previous[current[0]][current[1]]
            seam.reverse()
            return seam

        new_row = row + 1
        for step in STEPS:
            new_col = col + step
            if new_col < 0 or new_col >= cols:
                continue

            new_distance = distance + grid[new_row][new_col]
            if new_distance < distances[new_row][new_col]:
                distances[new_row][new_col] = new_distance
                previous[new_row][new_col] = (row, col)
                heapq.heappush(heap, (new_distance, next(counter), new_row, new_col))

    raise SeamNotFoundError(
        f"Seam search exhausted the frontier without reaching row {rows - 1} "
        f"of a {cols}x{rows} energy grid")


def seam_energy(energy, seam: Seam):
    """Total energy of the cells on a seam."""
    grid = _as_grid(energy)
    return sum(grid[row][col] for row, col in seam)


def validate_seam(seam: Seam, width: int, height: int):
    """Check that a seam has one in-bounds (row, col) entry per row, in row order."""
    if len(seam) != height:
        raise MalformedImageError(f"Seam has {len(seam)} entries, expected {height}")

    for i, (row, col) in enumerate(seam):
        if row != i:
            raise MalformedImageError(f"Seam entry {i} is on row {row}, expected row {i}")
        if col < 0 or col >= width:
            raise MalformedImageError(f"Seam column {col} on row {row} is outside 0..{width - 1}")


def remove_seam(image: RGBAImage, seam: Seam) -> RGBAImage:
    """
    Remove a vertical seam from an image.

    Every pixel off the seam is copied, in order, into a new buffer one
    column narrower. The input image is left unchanged.

    Args:
        image: Image to carve
        seam: [(row, col), ...] with one entry per row

    Returns:
        New image with width - 1 columns and the same height
    """
    H, W = image.height, image.width
    if W <= 1:
        raise DegenerateImageError(f"Cannot remove a seam from an image {W} pixel wide")
    validate_seam(seam, W, H)

    pixels = image.pixels()
    carved = torch.empty((H, W - 1, pixels.shape[2]), dtype=pixels.dtype, device=pixels.device)

    for row, col in seam:
        carved[row, :col] = pixels[row, :col]
        carved[row, col:] = pixels[row, col + 1:]

    return RGBAImage(carved.reshape(-1), W - 1, H)
