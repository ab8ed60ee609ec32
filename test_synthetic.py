"""
Tests for landmark sets, synthetic landmark derivation and point editing.
"""

import math

import pytest

from posture_engine.landmarks.anatomical_points import (
    AnatomicalPoint,
    FRONT_VISIBLE_POINTS,
    RIGHT_VISIBLE_POINTS,
)
from posture_engine.landmarks.landmark_set import Landmark, LandmarkSet
from posture_engine.landmarks.synthetic import SyntheticConfig, ViewTarget, derive_synthetic

P = AnatomicalPoint


def generate_base_set(width=1000, height=1000, skip=()):
    """Upright subject facing the camera, with z and visibility on every point."""
    coords = {
        P.LEFT_ANKLE: (0.40, 0.90, 0.30, 0.80),
        P.RIGHT_ANKLE: (0.60, 0.90, 0.30, 0.85),
        P.LEFT_KNEE: (0.40, 0.70, 0.10, 0.90),
        P.RIGHT_KNEE: (0.60, 0.70, None, 0.95),
        P.LEFT_HIP: (0.42, 0.55, 0.0, 0.99),
        P.RIGHT_HIP: (0.58, 0.55, 0.0, 0.97),
        P.LEFT_SHOULDER: (0.35, 0.30, 0.0, 0.96),
        P.RIGHT_SHOULDER: (0.65, 0.30, 0.0, 0.92),
        P.LEFT_EAR: (0.45, 0.15, 0.0, 0.70),
        P.RIGHT_EAR: (0.55, 0.15, 0.0, 0.75),
    }
    points = [
        Landmark.create(point, x, y, z=z, visibility=v)
        for point, (x, y, z, v) in coords.items()
        if point not in skip
    ]
    return LandmarkSet(image_width=width, image_height=height, points=tuple(points))


def test_anatomical_point_flags():
    assert P.JUGULAR_NOTCH.synthetic
    assert not P.LEFT_ANKLE.synthetic
    assert P.RIGHT_C7.overlay_code == "C7"
    assert P.from_name("RIGHT_EAR") is P.RIGHT_EAR
    assert P.from_name("NOSE") is None


def test_landmark_set_keeps_last_duplicate():
    first = Landmark.create(P.LEFT_EAR, 0.1, 0.1)
    second = Landmark.create(P.LEFT_EAR, 0.2, 0.2)
    other = Landmark.create(P.RIGHT_EAR, 0.3, 0.3)
    landmark_set = LandmarkSet(100, 100, (first, other, second))

    assert len(landmark_set.points) == 2
    assert landmark_set.get(P.LEFT_EAR) == second
    assert landmark_set.points[0].point is P.LEFT_EAR


def test_to_pixel_uses_image_size():
    landmark_set = generate_base_set(width=800, height=600)
    assert landmark_set.to_pixel(P.LEFT_ANKLE) == pytest.approx((320.0, 540.0))
    assert landmark_set.to_pixel(P.JUGULAR_NOTCH) is None


def test_front_synthetic_points():
    front = derive_synthetic(generate_base_set(), ViewTarget.FRONT)

    tt_left = front.get(P.TIBIAL_TUBEROSITY_LEFT)
    assert tt_left.x == pytest.approx(0.40)
    assert tt_left.y == pytest.approx(0.73)
    assert tt_left.z == pytest.approx(0.13)
    assert tt_left.visibility == pytest.approx(0.80)
    assert tt_left.code == "TTL"

    # Only the ankle carries z on the right side
    tt_right = front.get(P.TIBIAL_TUBEROSITY_RIGHT)
    assert tt_right.z == pytest.approx(0.30)
    assert tt_right.visibility == pytest.approx(0.85)

    jugular = front.get(P.JUGULAR_NOTCH)
    assert jugular.x == pytest.approx(0.50)
    assert jugular.y == pytest.approx(0.30 + 0.07 * 0.25)
    assert jugular.z is None
    assert jugular.visibility == pytest.approx(0.92)

    assert not front.has(P.RIGHT_C7)


def test_right_synthetic_c7():
    right = derive_synthetic(generate_base_set(), ViewTarget.RIGHT)

    neck = math.hypot(0.55 - 0.65, 0.15 - 0.30)
    c7 = right.get(P.RIGHT_C7)
    assert c7.x == pytest.approx(0.65 - 0.40 * neck)
    assert c7.y == pytest.approx(0.30 - 0.30 * neck)
    assert c7.z is None
    assert c7.visibility == pytest.approx(0.75)
    assert not right.has(P.JUGULAR_NOTCH)


def test_c7_is_clamped_into_image():
    points = (
        Landmark.create(P.RIGHT_SHOULDER, 0.02, 0.10),
        Landmark.create(P.RIGHT_EAR, 0.02, 0.00),
    )
    right = derive_synthetic(LandmarkSet(100, 100, points), ViewTarget.RIGHT)
    c7 = right.get(P.RIGHT_C7)
    assert 0.0 <= c7.x <= 1.0
    assert c7.x == 0.0
    assert c7.y == pytest.approx(0.10 - 0.30 * 0.10)


def test_custom_ratios():
    config = SyntheticConfig(tibial_tuberosity_ratio=0.5)
    front = derive_synthetic(generate_base_set(), ViewTarget.FRONT, config)
    assert front.get(P.TIBIAL_TUBEROSITY_LEFT).y == pytest.approx(0.80)


def test_derivation_is_idempotent():
    base = generate_base_set()
    once = derive_synthetic(base, ViewTarget.FRONT)
    twice = derive_synthetic(once, ViewTarget.FRONT)
    assert once == twice
    assert derive_synthetic(base, "right") == derive_synthetic(base, ViewTarget.RIGHT)


def test_missing_inputs_omit_dependent_points():
    front = derive_synthetic(generate_base_set(skip=(P.LEFT_KNEE, P.RIGHT_HIP)), ViewTarget.FRONT)
    assert not front.has(P.TIBIAL_TUBEROSITY_LEFT)
    assert front.has(P.TIBIAL_TUBEROSITY_RIGHT)
    assert not front.has(P.JUGULAR_NOTCH)

    right = derive_synthetic(generate_base_set(skip=(P.RIGHT_EAR,)), ViewTarget.RIGHT)
    assert not right.has(P.RIGHT_C7)


def test_stale_synthetic_points_are_dropped():
    front = derive_synthetic(generate_base_set(), ViewTarget.FRONT)
    without_knee = front.subset([p for p in front.point_map() if p is not P.LEFT_KNEE])
    assert without_knee.has(P.TIBIAL_TUBEROSITY_LEFT)

    rederived = derive_synthetic(without_knee, ViewTarget.FRONT)
    assert not rederived.has(P.TIBIAL_TUBEROSITY_LEFT)


def test_visible_only_trims_to_view_points():
    front = derive_synthetic(generate_base_set(), ViewTarget.FRONT, visible_only=True)
    assert [lm.point for lm in front.points] == list(FRONT_VISIBLE_POINTS)

    right = derive_synthetic(generate_base_set(), ViewTarget.RIGHT, visible_only=True)
    assert [lm.point for lm in right.points] == list(RIGHT_VISIBLE_POINTS)


def test_with_updated_moves_only_that_point():
    base = generate_base_set()
    moved = base.with_updated(P.LEFT_EAR, 0.5, 0.2)

    ear = moved.get(P.LEFT_EAR)
    assert (ear.x, ear.y) == (0.5, 0.2)
    assert ear.z == base.get(P.LEFT_EAR).z
    assert ear.visibility == base.get(P.LEFT_EAR).visibility
    assert (moved.image_width, moved.image_height) == (base.image_width, base.image_height)
    for landmark in base.points:
        if landmark.point is not P.LEFT_EAR:
            assert moved.get(landmark.point) == landmark

    # The original set is untouched
    assert base.get(P.LEFT_EAR).x == pytest.approx(0.45)


def test_with_updated_clamps_and_accepts_names():
    moved = generate_base_set().with_updated("RIGHT_ANKLE", 1.5, -0.2)
    ankle = moved.get(P.RIGHT_ANKLE)
    assert (ankle.x, ankle.y) == (1.0, 0.0)


def test_with_updated_rejects_unknown_missing_and_locked_points():
    base = generate_base_set(skip=(P.LEFT_EAR,))
    assert base.with_updated("NOSE", 0.1, 0.1) == base
    assert base.with_updated(P.LEFT_EAR, 0.1, 0.1) == base

    locked = Landmark(P.LEFT_HIP, 0.4, 0.5, editable=False, code="LH")
    locked_set = base.with_points([locked])
    assert locked_set.with_updated(P.LEFT_HIP, 0.9, 0.9) == locked_set


def test_with_updated_does_not_rederive():
    front = derive_synthetic(generate_base_set(), ViewTarget.FRONT)
    moved = front.with_updated(P.LEFT_KNEE, 0.30, 0.60)
    assert moved.get(P.TIBIAL_TUBEROSITY_LEFT) == front.get(P.TIBIAL_TUBEROSITY_LEFT)

    rederived = derive_synthetic(moved, ViewTarget.FRONT)
    assert rederived.get(P.TIBIAL_TUBEROSITY_LEFT).x == pytest.approx(0.30 + 0.15 * (0.40 - 0.30))
