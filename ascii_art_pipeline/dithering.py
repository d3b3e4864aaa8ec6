#!/usr/bin/env python3
"""
Image to ASCII Art Pipeline - Dithering
=======================================
Quantize a grayscale field to ``n_levels`` evenly spaced values.

Floyd-Steinberg and Atkinson diffuse the quantization error in raster
order and therefore run as a sequential scan. Ordered (Bayer) and noise
dithering treat every pixel independently and are vectorized.
"""

import logging
import math
from typing import Callable, Dict, Optional

import numpy as np

from ascii_art_pipeline.constants import BAYER_4X4, DitherAlgorithm

logger = logging.getLogger(__name__)

DitherFunc = Callable[..., np.ndarray]

FLOYD_STEINBERG_WEIGHTS = ((1, 0, 7 / 16), (-1, 1, 3 / 16), (0, 1, 5 / 16), (1, 1, 1 / 16))
ATKINSON_OFFSETS = ((1, 0), (2, 0), (-1, 1), (0, 1), (1, 1), (0, 2))


def quantize_levels(values: np.ndarray, n_levels: int) -> np.ndarray:
    """Nearest level index for each value in [0, 255], halves rounded up."""
    return np.floor(np.asarray(values, dtype=np.float64) / 255.0 * (n_levels - 1) + 0.5)


def _quantize(value: float, n_levels: int) -> float:
    level = math.floor(value / 255.0 * (n_levels - 1) + 0.5)
    return level / (n_levels - 1) * 255.0


def _diffuse(result: np.ndarray, weights, n_levels: int) -> np.ndarray:
    h, w = result.shape
    for y in range(h):
        for x in range(w):
            old_val = result[y, x]
            new_val = _quantize(old_val, n_levels)
            result[y, x] = new_val
            error = old_val - new_val

            for dx, dy, weight in weights:
                nx, ny = x + dx, y + dy
                if 0 <= nx < w and 0 <= ny < h:
                    result[ny, nx] = min(255.0, max(0.0, result[ny, nx] + error * weight))
    return result


def floyd_steinberg(field: np.ndarray, n_levels: int) -> np.ndarray:
    """Error diffusion with the 7/16, 3/16, 5/16, 1/16 stencil."""
    result = np.array(field, dtype=np.float64)
    return _diffuse(result, FLOYD_STEINBERG_WEIGHTS, n_levels)


def atkinson(field: np.ndarray, n_levels: int) -> np.ndarray:
    """Error diffusion spreading 6/8 of the error, 1/8 to each of six neighbors."""
    result = np.array(field, dtype=np.float64)
    weights = [(dx, dy, 1 / 8) for dx, dy in ATKINSON_OFFSETS]
    return _diffuse(result, weights, n_levels)


def ordered(field: np.ndarray, n_levels: int) -> np.ndarray:
    """Bayer 4x4 threshold dithering."""
    arr = np.asarray(field, dtype=np.float64)
    h, w = arr.shape

    bayer = np.array(BAYER_4X4, dtype=np.float64)
    offsets = (bayer + 0.5) / bayer.size - 0.5
    ys = np.arange(h) % bayer.shape[0]
    xs = np.arange(w) % bayer.shape[1]
    threshold = offsets[np.ix_(ys, xs)]

    value = np.clip(arr / 255.0 + threshold, 0.0, 1.0)
    level = np.minimum(np.floor(value * n_levels), n_levels - 1)
    return level / (n_levels - 1) * 255.0


def noise(field: np.ndarray, n_levels: int,
          rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Random threshold dithering.

    Uniform noise in +-255 / (2 * n_levels) is added before quantizing.
    Pass a seeded ``numpy.random.Generator`` for reproducible output.
    """
    if rng is None:
        rng = np.random.default_rng()
    arr = np.asarray(field, dtype=np.float64)
    jitter = (rng.random(arr.shape) - 0.5) * (255.0 / n_levels)
    noisy = np.clip(arr + jitter, 0.0, 255.0)
    return quantize_levels(noisy, n_levels) * (255.0 / (n_levels - 1))


DITHER_FUNCTIONS: Dict[DitherAlgorithm, DitherFunc] = {
    DitherAlgorithm.FLOYD: floyd_steinberg,
    DitherAlgorithm.ATKINSON: atkinson,
    DitherAlgorithm.ORDERED: ordered,
    DitherAlgorithm.NOISE: noise,
}


class Ditherer:
    """Dither stage bound to one algorithm and ramp size."""

    def __init__(self, algorithm: DitherAlgorithm, n_levels: int,
                 rng: Optional[np.random.Generator] = None):
        self.algorithm = DitherAlgorithm.parse(algorithm)
        self.n_levels = n_levels
        self.rng = rng
        self._func = DITHER_FUNCTIONS[self.algorithm]

    def apply(self, field: np.ndarray) -> np.ndarray:
        """Return a dithered copy of ``field``."""
        if self.n_levels < 2:
            # a single level leaves nothing to choose between
            return np.array(field, dtype=np.float64)

        logger.debug("Dithering %s field with %s into %d levels",
                     np.shape(field), self.algorithm.value, self.n_levels)
        if self.algorithm is DitherAlgorithm.NOISE:
            return self._func(field, self.n_levels, rng=self.rng)
        return self._func(field, self.n_levels)
