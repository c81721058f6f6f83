"""Tests for energy functions."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.energy import energy_map, sobel_filter
from seamcarve.image import RGBAImage
from seamcarve.exceptions import CarveError, MalformedImageError

from conftest import make_edge_image, make_solid_image


class TestEnergyMap:
    def test_sums_rgb_and_ignores_alpha(self):
        gradient = torch.tensor([10, 20, 30, 255, 100, 200, 250, 7], dtype=torch.uint8)
        energy = energy_map(gradient, 2, 1)
        assert energy.tolist() == [[60, 550]]

    def test_values_exceed_255_without_clamping(self):
        """Three saturated channels sum to 765, with no uint8 overflow."""
        gradient = torch.full((2 * 3 * 4,), 255, dtype=torch.uint8)
        energy = energy_map(gradient, 3, 2)
        assert (energy == 765).all()
        assert energy.dtype == torch.int64

    def test_output_shape_is_height_by_width(self):
        gradient = torch.zeros(5 * 7 * 4, dtype=torch.uint8)
        energy = energy_map(gradient, 7, 5)
        assert energy.shape == (5, 7)

    def test_row_major_layout(self):
        """Pixel (row, col) lives at offset row * W * 4 + col * 4."""
        H, W = 3, 4
        gradient = torch.zeros(H * W * 4, dtype=torch.uint8)
        gradient[(2 * W + 1) * 4 + 1] = 9
        energy = energy_map(gradient, W, H)
        assert energy[2, 1].item() == 9
        assert energy.sum().item() == 9

    def test_accepts_plain_sequence(self):
        energy = energy_map([1, 2, 3, 4, 5, 6, 7, 8], 1, 2)
        assert energy.tolist() == [[6], [18]]

    def test_float_buffer_keeps_fractions(self):
        gradient = torch.tensor([0.5, 0.25, 0.25, 1.0])
        energy = energy_map(gradient, 1, 1)
        assert energy.dtype == torch.float64
        assert energy.item() == pytest.approx(1.0)

    def test_length_mismatch_rejected(self):
        gradient = torch.zeros(2 * 2 * 4 - 1, dtype=torch.uint8)
        with pytest.raises(MalformedImageError):
            energy_map(gradient, 2, 2)

    def test_non_positive_dimensions_rejected(self):
        with pytest.raises(MalformedImageError):
            energy_map(torch.zeros(0, dtype=torch.uint8), 0, 3)

    def test_malformed_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            energy_map([1, 2, 3], 1, 1)
        with pytest.raises(CarveError):
            energy_map([1, 2, 3], 1, 1)


class TestSobelFilter:
    def test_uniform_image_has_zero_response(self):
        """Replicated borders mean even edge pixels see no gradient."""
        image = make_solid_image(6, 8, rgba=(120, 40, 200, 255))
        response = sobel_filter(image).view(6, 8, 4)
        assert (response[..., :3] == 0).all()

    def test_output_matches_image_layout(self):
        image = make_solid_image(5, 9)
        response = sobel_filter(image)
        assert response.dtype == torch.uint8
        assert response.shape == (5 * 9 * 4,)

    def test_alpha_copied_from_source(self):
        torch.manual_seed(42)
        pixels = make_solid_image(4, 4).pixels().clone()
        pixels[..., 3] = torch.randint(0, 256, (4, 4), dtype=torch.uint8)
        image = RGBAImage(pixels.reshape(-1), 4, 4)
        response = sobel_filter(image).view(4, 4, 4)
        assert torch.equal(response[..., 3], pixels[..., 3])

    def test_vertical_edge_has_energy(self):
        """A black/white edge saturates the response next to it."""
        image = make_edge_image(6, 10, edge_col=5)
        response = sobel_filter(image).view(6, 10, 4)
        assert (response[:, 4:6, :3] == 255).all()
        assert (response[:, :3, :3] == 0).all()
        assert (response[:, 7:, :3] == 0).all()

    def test_energy_highest_at_edge(self):
        image = make_edge_image(8, 12, edge_col=6)
        energy = energy_map(sobel_filter(image), image.width, image.height)
        assert energy[:, 5:7].min() > energy[:, :4].max()

    def test_source_image_untouched(self):
        image = make_edge_image(4, 6, edge_col=3)
        before = image.data.clone()
        sobel_filter(image)
        assert torch.equal(image.data, before)
