#!/usr/bin/env python3
"""
Image to ASCII Art Pipeline - Edge Detection
============================================
This module contains the EdgeProcessor class with the two edge strategies:
a single pass Sobel threshold and a Difference-of-Gaussians contour tracer.
"""

import logging
from typing import List, Optional

import numpy as np

from ascii_art_pipeline import kernels
from ascii_art_pipeline.constants import (
    BLANK_CHAR,
    CONTOUR_CHARS,
    DOG_KERNEL_SIZE,
    DOG_SIGMA_COARSE,
    DOG_SIGMA_FINE,
    SOBEL_MAX_MAGNITUDE,
)

logger = logging.getLogger(__name__)


class EdgeProcessor:
    """Edge detection and directional character mapping."""

    INK = 0.0
    BLANK = 255.0

    @staticmethod
    def sobel_threshold(field: np.ndarray, threshold: float) -> np.ndarray:
        """
        Binary Sobel edge map.

        Args:
            field: Tone mapped (H, W) grayscale field
            threshold: Cut-off on the magnitude rescaled to 0-255

        Returns:
            Field of the same shape holding 0 (edge) or 255 (no edge).
            The one pixel border is always 255.
        """
        magnitude, _ = kernels.sobel_gradient(field)
        normalized = magnitude / SOBEL_MAX_MAGNITUDE * 255.0

        edges = np.where(normalized > threshold, EdgeProcessor.INK, EdgeProcessor.BLANK)
        edges[0, :] = EdgeProcessor.BLANK
        edges[-1, :] = EdgeProcessor.BLANK
        edges[:, 0] = EdgeProcessor.BLANK
        edges[:, -1] = EdgeProcessor.BLANK

        logger.debug("Sobel threshold %.1f marked %d edge pixels",
                     threshold, int(np.count_nonzero(edges == EdgeProcessor.INK)))
        return edges

    @staticmethod
    def direction_char(angle: float) -> str:
        """Glyph for a gradient orientation in degrees (edge runs perpendicular)."""
        deg = (angle + 90.0) % 180.0
        if deg < 22.5 or deg >= 157.5:
            return CONTOUR_CHARS[0]
        elif deg < 67.5:
            return CONTOUR_CHARS[1]
        elif deg < 112.5:
            return CONTOUR_CHARS[2]
        else:
            return CONTOUR_CHARS[3]

    @classmethod
    def contour(cls, field: np.ndarray, threshold: float,
                white_mask: Optional[np.ndarray] = None) -> List[str]:
        """
        Render contours of a grayscale field as directional glyphs.

        The field is band-pass filtered with a Difference of Gaussians,
        its Sobel gradient is thinned with non-maximum suppression and
        every pixel above ``threshold`` becomes one of ``- / | \\``.

        Args:
            field: Tone mapped (H, W) grayscale field
            threshold: Cut-off on the suppressed gradient magnitude
            white_mask: Pixels forced to blank

        Returns:
            One string per row, without newlines
        """
        dog = kernels.difference_of_gaussians(field, DOG_SIGMA_FINE, DOG_SIGMA_COARSE,
                                              DOG_KERNEL_SIZE)
        magnitude, angle = kernels.sobel_gradient(dog)
        suppressed = kernels.non_max_suppression(magnitude, angle)

        strong = suppressed > threshold
        if white_mask is not None:
            strong &= ~white_mask
        edge_angle = np.mod(angle + 90.0, 180.0)

        glyphs = np.full(suppressed.shape, BLANK_CHAR, dtype='<U1')
        for char, mask in zip(CONTOUR_CHARS, kernels.orientation_bins(edge_angle)):
            glyphs[strong & mask] = char

        logger.debug("Contour pass drew %d of %d pixels",
                     int(np.count_nonzero(strong)), suppressed.size)
        return [''.join(row) for row in glyphs.tolist()]
