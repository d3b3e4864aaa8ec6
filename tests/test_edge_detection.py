"""Tests for the Sobel threshold and contour strategies."""

import numpy as np
import pytest

from ascii_art_pipeline.edge_detection import EdgeProcessor


def test_sobel_threshold_marks_step(step_field):
    edges = EdgeProcessor.sobel_threshold(step_field, 100)
    assert set(np.unique(edges)) <= {0.0, 255.0}
    # 1020 / 1442 * 255 is about 180
    assert edges[4, 3] == 0.0
    assert edges[4, 4] == 0.0
    assert edges[4, 6] == 255.0


def test_sobel_threshold_above_response_finds_nothing(step_field):
    edges = EdgeProcessor.sobel_threshold(step_field, 200)
    assert (edges == 255.0).all()


def test_sobel_threshold_border_stays_blank(step_field):
    edges = EdgeProcessor.sobel_threshold(step_field, -1)
    assert (edges[0, :] == 255.0).all()
    assert (edges[-1, :] == 255.0).all()
    assert (edges[:, 0] == 255.0).all()
    assert (edges[:, -1] == 255.0).all()
    assert (edges[1:-1, 1:-1] == 0.0).all()


def test_sobel_threshold_does_not_modify_input(step_field):
    before = step_field.copy()
    EdgeProcessor.sobel_threshold(step_field, 50)
    assert np.array_equal(step_field, before)


@pytest.mark.parametrize("angle,char", [
    (0.0, '|'),
    (90.0, '-'),
    (45.0, '\\'),
    (135.0, '/'),
    (170.0, '|'),
])
def test_direction_char(angle, char):
    assert EdgeProcessor.direction_char(angle) == char


def test_contour_shape_and_glyphs(step_field):
    lines = EdgeProcessor.contour(step_field, 0)
    assert len(lines) == 9
    assert all(len(line) == 9 for line in lines)
    assert set(''.join(lines)) <= {'-', '/', '|', '\\', ' '}


def test_contour_traces_vertical_edge(step_field):
    lines = EdgeProcessor.contour(step_field, 0)
    middle = lines[4]
    assert '|' in middle
    assert set(middle) <= {'|', ' '}


def test_contour_flat_field_is_blank_inside():
    field = np.zeros((8, 8))
    lines = EdgeProcessor.contour(field, 0)
    assert lines == [' ' * 8] * 8


def test_contour_high_threshold_is_blank(step_field):
    lines = EdgeProcessor.contour(step_field, 1e9)
    assert set(''.join(lines)) == {' '}
