#!/usr/bin/env python3
"""
Image to ASCII Art Pipeline - Constants
=======================================
Stage selectors, character ramps and the fixed numbers the pipeline uses.
"""

from enum import Enum
from typing import Dict, Union


class EdgeMethod(Enum):
    """Edge strategy applied after tone mapping."""
    NONE = 'none'
    SOBEL = 'sobel'
    DOG_CONTOUR = 'dog-contour'

    @classmethod
    def parse(cls, value: Union[str, 'EdgeMethod']) -> 'EdgeMethod':
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key == 'dog':
            return cls.DOG_CONTOUR
        return cls(key)


class DitherAlgorithm(Enum):
    """Quantization strategy used when dithering is enabled."""
    FLOYD = 'floyd'
    ATKINSON = 'atkinson'
    NOISE = 'noise'
    ORDERED = 'ordered'

    @classmethod
    def parse(cls, value: Union[str, 'DitherAlgorithm']) -> 'DitherAlgorithm':
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key == 'floyd_steinberg':
            return cls.FLOYD
        return cls(key)


# =============================================================================
# CHARACTER SETS
# =============================================================================

class CharacterSet:
    """Named character ramps, lightest level first."""

    DETAILED = "░▒▓█"
    STANDARD = " .:-=+*#%@"
    BLOCKS = "██"
    BINARY = "01"
    HEX = "0123456789ABCDEF"

    MANUAL = 'manual'

    @classmethod
    def presets(cls) -> Dict[str, str]:
        return {
            'detailed': cls.DETAILED,
            'standard': cls.STANDARD,
            'blocks': cls.BLOCKS,
            'binary': cls.BINARY,
            'hex': cls.HEX,
        }

    @classmethod
    def get_preset(cls, name: str) -> str:
        """Get character set by name. Raises KeyError for unknown names."""
        return cls.presets()[name.lower()]


# Glyphs emitted by the contour strategy, indexed by orientation bin
CONTOUR_CHARS = ('-', '/', '|', '\\')
BLANK_CHAR = ' '

# BT.601 luma weights in thousandths, exact for pure white
LUMA_WEIGHTS = (299, 587, 114)
LUMA_SCALE = 1000.0

# Contrast is clamped into this range before the contrast formula
CONTRAST_LIMIT = 255.0

# Largest 3x3 Sobel response on 8-bit input, used to scale to 0-255
SOBEL_MAX_MAGNITUDE = 1442.0

# Difference-of-Gaussians parameters for the contour strategy
DOG_SIGMA_FINE = 0.5
DOG_SIGMA_COARSE = 1.0
DOG_KERNEL_SIZE = 3

BAYER_4X4 = (
    (0, 8, 2, 10),
    (12, 4, 14, 6),
    (3, 11, 1, 9),
    (15, 7, 13, 5),
)

# Monospace glyph height/width compensation used by the rasterizer
CHAR_ASPECT_RATIO = 0.55
