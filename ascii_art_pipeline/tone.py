"""Grayscale conversion with brightness, contrast and inversion."""

from dataclasses import dataclass

import numpy as np

from ascii_art_pipeline.config import PixelBuffer
from ascii_art_pipeline.constants import CONTRAST_LIMIT, LUMA_SCALE, LUMA_WEIGHTS


@dataclass
class ToneMap:
    """Tone mapped field plus an untouched copy for the ignore-white test."""
    field: np.ndarray
    original: np.ndarray

    def white_mask(self) -> np.ndarray:
        return white_mask(self.original)


def luminance(buffer: PixelBuffer) -> np.ndarray:
    """BT.601 luma of each pixel as an (H, W) float64 array. Alpha is ignored."""
    rgba = buffer.to_array().astype(np.int64)
    r, g, b = LUMA_WEIGHTS
    weighted = r * rgba[:, :, 0] + g * rgba[:, :, 1] + b * rgba[:, :, 2]
    return weighted / LUMA_SCALE


def contrast_factor(contrast: float) -> float:
    """Photo contrast multiplier. Contrast is clamped so the formula stays finite."""
    c = min(CONTRAST_LIMIT, max(-CONTRAST_LIMIT, float(contrast)))
    return (259.0 * (c + 255.0)) / (255.0 * (259.0 - c))


def adjust(lum: np.ndarray, brightness: float = 0.0, contrast: float = 0.0,
           invert: bool = False) -> np.ndarray:
    """Apply inversion, contrast and brightness to a luminance field, clamped to [0, 255]."""
    values = np.asarray(lum, dtype=np.float64)
    if invert:
        values = 255.0 - values
    factor = contrast_factor(contrast)
    return np.clip(factor * (values - 128.0) + 128.0 + brightness, 0.0, 255.0)


def tone_map(buffer: PixelBuffer, brightness: float = 0.0, contrast: float = 0.0,
             invert: bool = False) -> ToneMap:
    adjusted = adjust(luminance(buffer), brightness, contrast, invert)
    return ToneMap(field=adjusted, original=adjusted.copy())


def white_mask(original: np.ndarray) -> np.ndarray:
    return np.asarray(original) == 255.0
