"""
Tests for the 2D geometry primitives used by the metrics pipelines.
"""

import math

import numpy as np
import pytest

from posture_engine.utils.angle_utils import (
    UP,
    calculate_distance,
    calculate_line_tilt,
    calculate_midpoint,
    calculate_vector_angle,
    clamp_unit,
    combine_visibility,
    lerp_optional,
    normalize_vector,
    to_point2,
)


def test_vector_angle_same_and_opposite():
    for v in [(3.0, 4.0), (-1.0, 0.5), (0.0, -2.0)]:
        assert calculate_vector_angle(v, v) == pytest.approx(0.0, abs=1e-4)
        opposite = (-v[0], -v[1])
        assert calculate_vector_angle(v, opposite) == pytest.approx(180.0)


def test_vector_angle_right_angle_and_radians():
    assert calculate_vector_angle((1, 0), (0, 1)) == pytest.approx(90.0)
    assert calculate_vector_angle((1, 0), (0, 1), degrees=False) == pytest.approx(math.pi / 2)


def test_vector_angle_degenerate_vector_is_zero():
    assert calculate_vector_angle((0, 0), (1, 0)) == 0.0
    assert calculate_vector_angle((1, 0), (1e-9, 0)) == 0.0


def test_vector_angle_against_vertical():
    # y grows downward, so (0, -1) is straight up
    assert calculate_vector_angle((0, -10), UP) == pytest.approx(0.0)
    assert calculate_vector_angle((10, -10), UP) == pytest.approx(45.0)
    assert calculate_vector_angle((0, 10), UP) == pytest.approx(180.0)


def test_normalize_vector():
    np.testing.assert_allclose(normalize_vector((3, 4)), [0.6, 0.8])
    np.testing.assert_array_equal(normalize_vector((0, 0)), [0.0, 0.0])


def test_distance_and_midpoint():
    assert calculate_distance((0, 0), (3, 4)) == pytest.approx(5.0)
    np.testing.assert_allclose(calculate_midpoint((0, 0), (2, 4)), [1.0, 2.0])
    assert to_point2(np.array([1.5, 2.5])) == (1.5, 2.5)
    assert isinstance(to_point2(np.array([1.5, 2.5]))[0], float)


def test_line_tilt_is_folded_into_zero_to_ninety():
    assert calculate_line_tilt((0, 0), (10, 0)) == pytest.approx(0.0)
    # Swapped labels give the same tilt
    assert calculate_line_tilt((10, 0), (0, 0)) == pytest.approx(0.0)

    right = (math.cos(math.radians(30)), math.sin(math.radians(30)))
    assert calculate_line_tilt((0, 0), right) == pytest.approx(30.0)
    assert calculate_line_tilt(right, (0, 0)) == pytest.approx(30.0)
    assert calculate_line_tilt((0, 0), (0, 5)) == pytest.approx(90.0)


def test_lerp_optional_propagates_presence():
    assert lerp_optional(None, None, 0.5) is None
    assert lerp_optional(1.0, None, 0.5) == 1.0
    assert lerp_optional(None, 2.0, 0.5) == 2.0
    assert lerp_optional(1.0, 3.0, 0.25) == pytest.approx(1.5)


def test_combine_visibility_takes_minimum_of_present():
    assert combine_visibility(None, None) is None
    assert combine_visibility(0.9, None, 0.4) == 0.4
    assert combine_visibility(0.7) == 0.7


def test_clamp_unit():
    assert clamp_unit(-0.2) == 0.0
    assert clamp_unit(1.7) == 1.0
    assert clamp_unit(0.25) == 0.25
