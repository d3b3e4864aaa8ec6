"""Shared test fixtures."""

import numpy as np
import pytest

from ascii_art_pipeline.config import PixelBuffer


def make_gray(width, height, value):
    return PixelBuffer.filled(width, height, (value, value, value, 255))


def make_gradient(width, height):
    """Horizontal ramp from black on the left to white on the right."""
    row = np.linspace(0, 255, width).round().astype(np.uint8)
    rgb = np.repeat(np.tile(row, (height, 1))[:, :, None], 3, axis=2)
    return PixelBuffer.from_array(rgb)


def make_random(width, height, seed=0):
    rng = np.random.default_rng(seed)
    rgb = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    return PixelBuffer.from_array(rgb)


def make_step(size=9, split=4):
    """Dark left half, white right half, as an RGBA buffer."""
    arr = np.full((size, size, 3), 255, dtype=np.uint8)
    arr[:, :split] = 0
    return PixelBuffer.from_array(arr)


@pytest.fixture
def white_buffer():
    return make_gray(6, 5, 255)


@pytest.fixture
def mid_gray_buffer():
    return make_gray(4, 4, 128)


@pytest.fixture
def random_buffer():
    return make_random(12, 9)


@pytest.fixture
def step_field():
    field = np.zeros((9, 9), dtype=np.float64)
    field[:, 4:] = 255.0
    return field
