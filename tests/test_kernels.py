"""Tests for the kernel math primitives."""

import numpy as np
import pytest

from ascii_art_pipeline import kernels


def test_gaussian_kernel_is_normalized_and_symmetric():
    k = kernels.gaussian_kernel(1.0, 5)
    assert k.shape == (5, 5)
    assert k.sum() == pytest.approx(1.0)
    assert np.allclose(k, k.T)
    assert np.allclose(k, k[::-1, ::-1])
    assert k[2, 2] == k.max()


def test_gaussian_kernel_matches_formula():
    k = kernels.gaussian_kernel(0.5, 3)
    raw = np.array([[np.exp(-(x * x + y * y) / 0.5) for x in (-1, 0, 1)] for y in (-1, 0, 1)])
    assert np.allclose(k, raw / raw.sum())


@pytest.mark.parametrize("sigma,size", [(1.0, 4), (1.0, 0), (0.0, 3), (-1.0, 3)])
def test_gaussian_kernel_rejects_bad_arguments(sigma, size):
    with pytest.raises(ValueError):
        kernels.gaussian_kernel(sigma, size)


def test_convolve2d_identity_kernel():
    field = np.arange(20, dtype=np.float64).reshape(4, 5)
    identity = np.zeros((3, 3))
    identity[1, 1] = 1.0
    assert np.array_equal(kernels.convolve2d(field, identity), field)


def test_convolve2d_zero_pads_borders():
    field = np.ones((3, 3))
    out = kernels.convolve2d(field, np.ones((3, 3)))
    assert out[1, 1] == 9
    assert out[0, 1] == 6
    assert out[0, 0] == 4
    assert out[2, 2] == 4


def test_convolve2d_does_not_flip_kernel():
    field = np.zeros((3, 3))
    field[1, 1] = 1.0
    kernel = np.zeros((3, 3))
    kernel[0, 2] = 1.0
    out = kernels.convolve2d(field, kernel)
    # output[y, x] reads field[y-1, x+1]
    assert out[2, 0] == 1.0
    assert out.sum() == 1.0


def test_difference_of_gaussians_is_zero_inside_flat_field():
    field = np.full((7, 7), 200.0)
    dog = kernels.difference_of_gaussians(field, 0.5, 1.0, 3)
    assert np.allclose(dog[1:-1, 1:-1], 0.0)
    assert not np.allclose(dog[0, :], 0.0)


def test_sobel_gradient_vertical_step(step_field):
    magnitude, angle = kernels.sobel_gradient(step_field)
    assert magnitude[4, 3] == pytest.approx(1020.0)
    assert magnitude[4, 4] == pytest.approx(1020.0)
    assert magnitude[4, 6] == 0.0
    assert angle[4, 3] == pytest.approx(0.0)


def test_sobel_gradient_horizontal_step():
    field = np.zeros((6, 6))
    field[3:, :] = 255.0
    magnitude, angle = kernels.sobel_gradient(field)
    assert magnitude[2, 2] == pytest.approx(1020.0)
    assert angle[2, 2] == pytest.approx(90.0)


def test_sobel_gradient_border_is_zero(step_field):
    magnitude, angle = kernels.sobel_gradient(step_field)
    for arr in (magnitude, angle):
        assert not arr[0, :].any()
        assert not arr[-1, :].any()
        assert not arr[:, 0].any()
        assert not arr[:, -1].any()


def test_sobel_gradient_angles_are_undirected():
    rng = np.random.default_rng(3)
    _, angle = kernels.sobel_gradient(rng.uniform(0, 255, (10, 10)))
    assert angle.min() >= 0.0
    assert angle.max() < 180.0


def test_sobel_gradient_tiny_field_has_no_interior():
    magnitude, angle = kernels.sobel_gradient(np.ones((2, 5)))
    assert magnitude.shape == (2, 5)
    assert not magnitude.any()
    assert not angle.any()


def test_non_max_suppression_thins_ridge():
    magnitude = np.tile(np.array([0.0, 1.0, 3.0, 1.0, 0.0]), (5, 1))
    angle = np.zeros_like(magnitude)
    result = kernels.non_max_suppression(magnitude, angle)
    assert np.array_equal(result[1:4, 2], [3.0, 3.0, 3.0])
    result[1:4, 2] = 0.0
    assert not result.any()


def test_non_max_suppression_keeps_ties_along_ridge():
    magnitude = np.tile(np.array([0.0, 1.0, 3.0, 1.0, 0.0]), (5, 1))
    angle = np.full_like(magnitude, 90.0)
    result = kernels.non_max_suppression(magnitude, angle)
    assert np.array_equal(result[1:4, 1:4], magnitude[1:4, 1:4])


def test_non_max_suppression_diagonal_bins():
    magnitude = np.zeros((3, 3))
    magnitude[1, 1] = 2.0
    magnitude[0, 2] = 5.0
    # 45 degrees compares top-right and bottom-left
    assert kernels.non_max_suppression(magnitude, np.full((3, 3), 45.0))[1, 1] == 0.0
    # 135 degrees compares top-left and bottom-right
    assert kernels.non_max_suppression(magnitude, np.full((3, 3), 135.0))[1, 1] == 2.0


def test_non_max_suppression_bin_edges():
    bin0, bin45, bin90, bin135 = kernels.orientation_bins(
        np.array([0.0, 22.4, 22.5, 67.5, 112.5, 157.4, 157.5, 179.9]))
    assert bin0.tolist() == [True, True, False, False, False, False, True, True]
    assert bin45.tolist() == [False, False, True, False, False, False, False, False]
    assert bin90.tolist() == [False, False, False, True, False, False, False, False]
    assert bin135.tolist() == [False, False, False, False, True, True, False, False]
