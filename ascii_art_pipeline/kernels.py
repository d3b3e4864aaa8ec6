#!/usr/bin/env python3
"""
Image to ASCII Art Pipeline - Kernel Math
=========================================
Numeric primitives shared by the edge strategies: Gaussian kernels,
zero-padded 2D convolution, Sobel gradients and non-maximum suppression.

Field functions take and return (H, W) float64 arrays and never modify
their arguments.
"""

import logging
from typing import Tuple

import numpy as np
from scipy import ndimage

logger = logging.getLogger(__name__)

SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float64)
SOBEL_Y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.float64)


def gaussian_kernel(sigma: float, size: int) -> np.ndarray:
    """
    Build a normalized square Gaussian kernel.

    Args:
        sigma: Standard deviation, must be positive
        size: Odd side length

    Returns:
        (size, size) array summing to 1
    """
    if size <= 0 or size % 2 == 0:
        raise ValueError(f"Kernel size must be a positive odd number, got {size}")
    if sigma <= 0:
        raise ValueError(f"Sigma must be positive, got {sigma}")

    half = size // 2
    offsets = np.arange(-half, half + 1, dtype=np.float64)
    xx, yy = np.meshgrid(offsets, offsets)
    kernel = np.exp(-(xx**2 + yy**2) / (2 * sigma * sigma))
    return kernel / kernel.sum()


def convolve2d(field: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Slide ``kernel`` over ``field`` with zero padding outside the borders.

    output[y, x] = sum(field[y+ky-half, x+kx-half] * kernel[ky, kx])
    """
    arr = np.asarray(field, dtype=np.float64)
    return ndimage.correlate(arr, np.asarray(kernel, dtype=np.float64),
                             mode='constant', cval=0.0)


def difference_of_gaussians(field: np.ndarray, sigma1: float, sigma2: float,
                            size: int) -> np.ndarray:
    """Band-pass field: blur(sigma1) - blur(sigma2)."""
    fine = convolve2d(field, gaussian_kernel(sigma1, size))
    coarse = convolve2d(field, gaussian_kernel(sigma2, size))
    return fine - coarse


def sobel_gradient(field: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sobel gradient magnitude and undirected orientation.

    Only interior cells are computed. The one pixel border keeps
    magnitude 0 and angle 0.

    Returns:
        Tuple of (magnitude, angle in degrees within [0, 180))
    """
    arr = np.asarray(field, dtype=np.float64)
    magnitude = np.zeros_like(arr)
    angle = np.zeros_like(arr)

    h, w = arr.shape
    if h < 3 or w < 3:
        return magnitude, angle

    gx = ndimage.correlate(arr, SOBEL_X, mode='constant', cval=0.0)[1:-1, 1:-1]
    gy = ndimage.correlate(arr, SOBEL_Y, mode='constant', cval=0.0)[1:-1, 1:-1]

    magnitude[1:-1, 1:-1] = np.sqrt(gx**2 + gy**2)
    theta = np.degrees(np.arctan2(gy, gx))
    theta = np.where(theta < 0, theta + 180.0, theta)
    angle[1:-1, 1:-1] = np.where(theta >= 180.0, 0.0, theta)

    return magnitude, angle


def orientation_bins(angle: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Masks for the 0, 45, 90 and 135 degree bins (each +-22.5 degrees)."""
    a = np.asarray(angle, dtype=np.float64)
    bin0 = (a < 22.5) | (a >= 157.5)
    bin45 = (a >= 22.5) & (a < 67.5)
    bin90 = (a >= 67.5) & (a < 112.5)
    bin135 = (a >= 112.5) & (a < 157.5)
    return bin0, bin45, bin90, bin135


def non_max_suppression(magnitude: np.ndarray, angle: np.ndarray) -> np.ndarray:
    """
    Thin gradient ridges to single pixel edges.

    Each interior pixel is compared with the two neighbors its orientation
    bin points at and kept only when it is >= both. Border cells are 0.
    """
    mag = np.asarray(magnitude, dtype=np.float64)
    result = np.zeros_like(mag)

    h, w = mag.shape
    if h < 3 or w < 3:
        return result

    center = mag[1:-1, 1:-1]
    bins = list(orientation_bins(np.asarray(angle)[1:-1, 1:-1]))

    # neighbor pairs per bin: left/right, top-right/bottom-left,
    # top/bottom, top-left/bottom-right
    first = [mag[1:-1, :-2], mag[:-2, 2:], mag[:-2, 1:-1], mag[:-2, :-2]]
    second = [mag[1:-1, 2:], mag[2:, :-2], mag[2:, 1:-1], mag[2:, 2:]]

    neighbor1 = np.select(bins, first, default=0.0)
    neighbor2 = np.select(bins, second, default=0.0)

    keep = (center >= neighbor1) & (center >= neighbor2)
    result[1:-1, 1:-1] = np.where(keep, center, 0.0)

    logger.debug("Non-max suppression kept %d of %d interior pixels",
                 int(np.count_nonzero(result)), center.size)
    return result
