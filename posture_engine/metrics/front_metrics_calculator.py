"""
Front Metrics Calculator

Computes frontal-plane posture metrics from a front-view LandmarkSet.

Metrics include:
- Body axis tilt (ankle midpoint → jugular notch, against vertical)
- Level symmetry for Ears, Shoulders, ASIS, Knees and Feet
- Per-level body deviation along the body axis

Image Coordinate System:
------------------------
- X-axis: Horizontal (increases to the right)
- Y-axis: Vertical (increases DOWNWARD)
- Landmarks are stored normalized to [0, 1] and converted to pixels here

The LandmarkSet is expected to already contain the synthetic front points
(tibial tuberosities, jugular notch); see landmarks.synthetic.derive_synthetic().
"""

import logging
import time
from typing import List, Optional

import numpy as np

from ..landmarks.anatomical_points import AnatomicalPoint, FRONT_LEVEL_PAIRS
from ..landmarks.landmark_set import LandmarkSet
from ..utils.angle_utils import (
    EPSILON,
    UP,
    as_vector,
    calculate_line_tilt,
    calculate_midpoint,
    calculate_vector_angle,
    normalize_vector,
    to_point2,
)
from ..utils.periodic_logger import PeriodicLogger
from .metrics_dataclasses import FrontMetrics, LevelAngle, MetricsConfig

logger = logging.getLogger(__name__)

FEET_LEVEL = "Feet"

_REQUIRED_POINTS = (
    AnatomicalPoint.LEFT_ANKLE,
    AnatomicalPoint.RIGHT_ANKLE,
    AnatomicalPoint.JUGULAR_NOTCH,
)


def _measure_levels(landmark_set: LandmarkSet) -> List[LevelAngle]:
    """Level deviation for every pair whose two sides are present (top-down)."""
    levels = []
    for name, left_point, right_point in FRONT_LEVEL_PAIRS:
        left = landmark_set.to_pixel(left_point)
        right = landmark_set.to_pixel(right_point)
        if left is None or right is None:
            logger.debug(f"[METRICS] Skipping level {name}: {left_point} or {right_point} missing")
            continue

        levels.append(LevelAngle(
            name=name,
            deviation_deg=calculate_line_tilt(left, right),
            body_deviation_deg=None,
            y_px=(left[1] + right[1]) / 2.0,
            left=left,
            right=right,
            mid=to_point2(calculate_midpoint(left, right)),
        ))
    return levels


def _apply_body_deviation(levels: List[LevelAngle], base: np.ndarray,
                          jugular: np.ndarray, body_angle_deg: float) -> List[LevelAngle]:
    """
    Fill body_deviation_deg for each level, walking the body axis bottom-up.

    For a level at height y the axis point is where the ray from base along
    (jugular - base) crosses that height. Its deviation is measured from the
    vertical through base at the previous (lower) level's height. Feet is the
    baseline and gets None.
    """
    direction = normalize_vector(jugular - base)
    horizontal_axis = abs(direction[1]) < EPSILON

    updated = []
    previous_y = float(base[1])
    for level in sorted(levels, key=lambda lvl: lvl.y_px, reverse=True):
        if level.name == FEET_LEVEL:
            body_deviation = None
        elif horizontal_axis:
            body_deviation = body_angle_deg
        else:
            t = (level.y_px - base[1]) / direction[1]
            axis_point = base + direction * t
            vertical_reference = np.array([base[0], previous_y])
            body_deviation = calculate_vector_angle(axis_point - vertical_reference, UP)

        updated.append(LevelAngle(
            name=level.name,
            deviation_deg=level.deviation_deg,
            body_deviation_deg=body_deviation,
            y_px=level.y_px,
            left=level.left,
            right=level.right,
            mid=level.mid,
        ))
        previous_y = level.y_px

    updated.sort(key=lambda lvl: lvl.y_px)
    return updated


def compute_front_metrics(landmark_set: LandmarkSet) -> Optional[FrontMetrics]:
    """
    Calculate frontal-plane metrics.

    Args:
        landmark_set: Front-view landmarks including synthetic points

    Returns:
        FrontMetrics, or None when the image size is invalid or an ankle or the
        jugular notch is missing. Missing level pairs are simply left out.

    Example:
        >>> front = derive_synthetic(base_set, ViewTarget.FRONT)
        >>> metrics = compute_front_metrics(front)
        >>> if metrics is not None:
        ...     print(metrics.get_level_summary())
    """
    if landmark_set is None or not landmark_set.has_valid_dimensions():
        return None
    if not all(landmark_set.has(point) for point in _REQUIRED_POINTS):
        return None

    left_ankle = as_vector(landmark_set.to_pixel(AnatomicalPoint.LEFT_ANKLE))
    right_ankle = as_vector(landmark_set.to_pixel(AnatomicalPoint.RIGHT_ANKLE))
    jugular = as_vector(landmark_set.to_pixel(AnatomicalPoint.JUGULAR_NOTCH))
    base = calculate_midpoint(left_ankle, right_ankle)

    # Torso axis against true vertical
    body_angle_deg = calculate_vector_angle(jugular - base, UP)

    levels = _measure_levels(landmark_set)
    levels = _apply_body_deviation(levels, base, jugular, body_angle_deg)

    return FrontMetrics(
        body_angle_deg=body_angle_deg,
        body_base=to_point2(base),
        jugular_px=to_point2(jugular),
        level_angles=tuple(levels),
    )


class FrontMetricsCalculator:
    """
    Stateful wrapper around compute_front_metrics().

    Adds debug logging of skipped inputs and a periodic summary of call
    counts and timings. The computation itself is delegated to the pure
    function, so results do not depend on instance state.

    Attributes:
        config: MetricsConfig with calculation parameters
        periodic_logger: Aggregated timing log, flushed every config.log_period calls
    """

    def __init__(self, config: Optional[MetricsConfig] = None):
        """
        Initialize front metrics calculator.

        Args:
            config: Optional MetricsConfig instance. If None, uses defaults.
        """
        self.config = config if config is not None else MetricsConfig()
        self.periodic_logger = PeriodicLogger('FrontMetrics', period=self.config.log_period, logger_obj=logger)

        logger.info(f"FrontMetricsCalculator initialized with log_period={self.config.log_period}")

    def update_config(self, config: MetricsConfig):
        """Swap configuration; the periodic summary restarts with the new period."""
        self.config = config
        self.periodic_logger = PeriodicLogger('FrontMetrics', period=config.log_period, logger_obj=logger)

    def calculate(self, landmark_set: LandmarkSet) -> Optional[FrontMetrics]:
        """
        Calculate front metrics for one landmark set.

        Returns:
            FrontMetrics, or None if preconditions are not met
        """
        start = time.time()

        if landmark_set is None:
            logger.debug("[METRICS] Front metrics skipped: no landmark set")
            metrics = None
        elif not landmark_set.has_valid_dimensions():
            logger.debug(f"[METRICS] Front metrics skipped: invalid image size "
                         f"{landmark_set.image_width}x{landmark_set.image_height}")
            metrics = None
        else:
            missing = [str(p) for p in _REQUIRED_POINTS if not landmark_set.has(p)]
            if missing:
                logger.debug(f"[METRICS] Front metrics skipped: missing {', '.join(missing)}")
                metrics = None
            else:
                metrics = compute_front_metrics(landmark_set)

        elapsed_ms = (time.time() - start) * 1000
        if metrics is None:
            self.periodic_logger.record_skip()
            self.periodic_logger.record_call(elapsed_ms)
        else:
            self.periodic_logger.record_call(elapsed_ms, levels=len(metrics.level_angles))
        self.periodic_logger.log_if_periodic()

        return metrics
