"""
Tests for the frontal-plane metrics pipeline and its calculator wrapper.
"""

import logging
import math

import pytest

from posture_engine.landmarks.anatomical_points import AnatomicalPoint
from posture_engine.landmarks.landmark_set import Landmark, LandmarkSet
from posture_engine.landmarks.synthetic import ViewTarget, derive_synthetic
from posture_engine.metrics.front_metrics_calculator import (
    FrontMetricsCalculator,
    compute_front_metrics,
)
from posture_engine.metrics.metrics_dataclasses import MetricsConfig, format_angle

P = AnatomicalPoint


def make_set(coords, width=1000, height=1000):
    points = tuple(Landmark.create(point, x, y) for point, (x, y) in coords.items())
    return LandmarkSet(image_width=width, image_height=height, points=points)


def generate_front_set(skip=(), width=1000, height=1000):
    """Symmetric standing subject with synthetic front points derived."""
    coords = {
        P.LEFT_ANKLE: (0.30, 0.90),
        P.RIGHT_ANKLE: (0.70, 0.90),
        P.LEFT_KNEE: (0.32, 0.70),
        P.RIGHT_KNEE: (0.68, 0.70),
        P.LEFT_HIP: (0.40, 0.55),
        P.RIGHT_HIP: (0.60, 0.55),
        P.LEFT_SHOULDER: (0.35, 0.30),
        P.RIGHT_SHOULDER: (0.65, 0.30),
        P.LEFT_EAR: (0.45, 0.15),
        P.RIGHT_EAR: (0.55, 0.15),
    }
    coords = {p: xy for p, xy in coords.items() if p not in skip}
    return derive_synthetic(make_set(coords, width, height), ViewTarget.FRONT)


def test_symmetric_subject_scenario():
    metrics = compute_front_metrics(generate_front_set())

    assert metrics is not None
    assert metrics.body_base == pytest.approx((500.0, 900.0))
    assert metrics.jugular_px == pytest.approx((500.0, 317.5))
    assert metrics.body_angle_deg == pytest.approx(0.0)

    shoulders = metrics.get_level("Shoulders")
    assert shoulders.deviation_deg == 0.0
    assert shoulders.y_px == pytest.approx(300.0)
    assert shoulders.mid == pytest.approx((500.0, 300.0))
    assert shoulders.left == pytest.approx((350.0, 300.0))


def test_levels_are_ordered_top_down():
    metrics = compute_front_metrics(generate_front_set())
    names = [level.name for level in metrics.level_angles]
    assert names == ["Ears", "Shoulders", "ASIS", "Knees", "Feet"]

    heights = [level.y_px for level in metrics.level_angles]
    assert heights == sorted(heights)


def test_feet_has_no_body_deviation():
    metrics = compute_front_metrics(generate_front_set())
    assert metrics.get_level("Feet").body_deviation_deg is None
    for name in ("Ears", "Shoulders", "ASIS", "Knees"):
        assert metrics.get_level(name).body_deviation_deg == pytest.approx(0.0)


def test_missing_side_removes_only_that_level():
    full = compute_front_metrics(generate_front_set())
    partial = compute_front_metrics(generate_front_set(skip=(P.LEFT_EAR,)))

    assert partial.get_level("Ears") is None
    assert [level.name for level in partial.level_angles] == ["Shoulders", "ASIS", "Knees", "Feet"]
    for level in partial.level_angles:
        assert level == full.get_level(level.name)


def test_tilted_level_deviation():
    coords = {
        P.LEFT_ANKLE: (0.30, 0.90),
        P.RIGHT_ANKLE: (0.70, 0.90),
        P.LEFT_SHOULDER: (0.40, 0.30),
        P.RIGHT_SHOULDER: (0.60, 0.40),
        P.JUGULAR_NOTCH: (0.50, 0.35),
    }
    metrics = compute_front_metrics(make_set(coords))
    expected = math.degrees(math.atan2(100, 200))
    assert metrics.get_level("Shoulders").deviation_deg == pytest.approx(expected)


def test_body_deviation_walks_levels_bottom_up():
    coords = {
        P.LEFT_ANKLE: (0.30, 0.90),
        P.RIGHT_ANKLE: (0.70, 0.90),
        P.LEFT_HIP: (0.45, 0.65),
        P.RIGHT_HIP: (0.65, 0.65),
        P.LEFT_SHOULDER: (0.50, 0.30),
        P.RIGHT_SHOULDER: (0.70, 0.30),
        P.JUGULAR_NOTCH: (0.60, 0.40),
    }
    metrics = compute_front_metrics(make_set(coords))

    # Axis from (500, 900) towards (600, 400)
    assert metrics.body_angle_deg == pytest.approx(math.degrees(math.atan2(100, 500)))

    # ASIS: axis crosses y=650 at x=550, measured from (500, 900)
    asis = metrics.get_level("ASIS")
    assert asis.body_deviation_deg == pytest.approx(math.degrees(math.atan2(50, 250)))

    # Shoulders: axis crosses y=300 at x=620, measured from (500, 650)
    shoulders = metrics.get_level("Shoulders")
    assert shoulders.body_deviation_deg == pytest.approx(math.degrees(math.atan2(120, 350)))


def test_horizontal_body_axis_falls_back_to_body_angle():
    coords = {
        P.LEFT_ANKLE: (0.30, 0.90),
        P.RIGHT_ANKLE: (0.70, 0.90),
        P.LEFT_SHOULDER: (0.35, 0.30),
        P.RIGHT_SHOULDER: (0.65, 0.30),
        P.JUGULAR_NOTCH: (0.80, 0.90),
    }
    metrics = compute_front_metrics(make_set(coords))
    assert metrics.body_angle_deg == pytest.approx(90.0)
    assert metrics.get_level("Shoulders").body_deviation_deg == pytest.approx(90.0)
    assert metrics.get_level("Feet").body_deviation_deg is None


@pytest.mark.parametrize("skip", [(P.LEFT_ANKLE,), (P.RIGHT_ANKLE,), (P.LEFT_HIP,)])
def test_missing_required_points_returns_none(skip):
    # Without a hip the jugular notch cannot be derived
    assert compute_front_metrics(generate_front_set(skip=skip)) is None


@pytest.mark.parametrize("width,height", [(0, 1000), (1000, 0), (-5, 1000)])
def test_invalid_image_size_returns_none(width, height):
    assert compute_front_metrics(generate_front_set(width=width, height=height)) is None


def test_angles_are_within_range():
    coords = {
        P.LEFT_ANKLE: (0.10, 0.95),
        P.RIGHT_ANKLE: (0.90, 0.60),
        P.LEFT_EAR: (0.90, 0.05),
        P.RIGHT_EAR: (0.10, 0.30),
        P.LEFT_SHOULDER: (0.20, 0.20),
        P.RIGHT_SHOULDER: (0.25, 0.80),
        P.JUGULAR_NOTCH: (0.05, 0.10),
    }
    metrics = compute_front_metrics(make_set(coords))
    assert 0.0 <= metrics.body_angle_deg <= 180.0
    for level in metrics.level_angles:
        assert 0.0 <= level.deviation_deg <= 90.0
        if level.body_deviation_deg is not None:
            assert 0.0 <= level.body_deviation_deg <= 180.0
            assert not math.isnan(level.body_deviation_deg)


def test_level_summary_formatting():
    metrics = compute_front_metrics(generate_front_set())
    summary = metrics.get_level_summary()
    assert summary.startswith("Body: 0.0°")
    assert "Shoulders: 0.0°" in summary
    assert format_angle(None) == "—"
    assert format_angle(12.345) == "12.3°"


def test_calculator_matches_pure_function():
    calculator = FrontMetricsCalculator()
    landmark_set = generate_front_set()
    assert calculator.calculate(landmark_set) == compute_front_metrics(landmark_set)
    assert calculator.calculate(None) is None


def test_calculator_logs_periodic_summary(caplog):
    calculator = FrontMetricsCalculator(MetricsConfig(log_period=2))
    caplog.set_level(logging.INFO, logger="posture_engine.metrics.front_metrics_calculator")

    calculator.calculate(generate_front_set())
    assert not any("Processed" in record.getMessage() for record in caplog.records)

    calculator.calculate(generate_front_set(skip=(P.LEFT_ANKLE,)))
    summaries = [r.getMessage() for r in caplog.records if "Processed" in r.getMessage()]
    assert len(summaries) == 1
    assert "[FrontMetrics] Processed 2 calls" in summaries[0]
    assert "Skipped: 1" in summaries[0]


def test_skipped_calls_do_not_dilute_level_count(caplog):
    calculator = FrontMetricsCalculator(MetricsConfig(log_period=2))
    caplog.set_level(logging.INFO, logger="posture_engine.metrics.front_metrics_calculator")

    calculator.calculate(generate_front_set())
    calculator.calculate(generate_front_set(skip=(P.LEFT_ANKLE,)))

    summaries = [r.getMessage() for r in caplog.records if "Processed" in r.getMessage()]
    assert len(summaries) == 1
    assert "levels: 5.00" in summaries[0]
