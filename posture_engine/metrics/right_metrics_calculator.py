"""
Right Metrics Calculator

Computes sagittal-plane posture metrics from a right-lateral LandmarkSet.

Metrics include:
- Body lean (right ankle → right ear, against vertical)
- Craniovertebral angle (CVA): C7 → ear against horizontal
- Per-joint lean through the ankle for Knee, Hip, Shoulder and Ear

The LandmarkSet is expected to already contain RIGHT_C7; see
landmarks.synthetic.derive_synthetic(base, ViewTarget.RIGHT).
"""

import logging
import time
from typing import List, Optional

from ..landmarks.anatomical_points import AnatomicalPoint, RIGHT_SEGMENT_POINTS
from ..landmarks.landmark_set import LandmarkSet
from ..utils.angle_utils import (
    RIGHT,
    UP,
    Point2,
    as_vector,
    calculate_vector_angle,
    normalize_vector,
)
from ..utils.periodic_logger import PeriodicLogger
from .metrics_dataclasses import MetricsConfig, RightMetrics, SegmentAngle

logger = logging.getLogger(__name__)

_REQUIRED_POINTS = (
    AnatomicalPoint.RIGHT_ANKLE,
    AnatomicalPoint.RIGHT_EAR,
    AnatomicalPoint.RIGHT_C7,
)

# Polyline drawn from the ankle up to the ear; only present points are kept
_CHAIN_POINTS = (
    AnatomicalPoint.RIGHT_ANKLE,
    AnatomicalPoint.RIGHT_HIP,
    AnatomicalPoint.RIGHT_SHOULDER,
    AnatomicalPoint.RIGHT_EAR,
)


def compute_right_metrics(landmark_set: LandmarkSet) -> Optional[RightMetrics]:
    """
    Calculate sagittal-plane metrics.

    Args:
        landmark_set: Right-view landmarks including RIGHT_C7

    Returns:
        RightMetrics, or None when the image size is invalid or the right
        ankle, right ear or C7 is missing. Missing joints are left out of
        chain_points and segments.
    """
    if landmark_set is None or not landmark_set.has_valid_dimensions():
        return None
    if not all(landmark_set.has(point) for point in _REQUIRED_POINTS):
        return None

    ankle_px = landmark_set.to_pixel(AnatomicalPoint.RIGHT_ANKLE)
    ear_px = landmark_set.to_pixel(AnatomicalPoint.RIGHT_EAR)
    c7_px = landmark_set.to_pixel(AnatomicalPoint.RIGHT_C7)
    ankle = as_vector(ankle_px)

    body_angle_deg = calculate_vector_angle(as_vector(ear_px) - ankle, UP)
    cva_deg = calculate_vector_angle(normalize_vector(as_vector(ear_px) - as_vector(c7_px)), RIGHT)

    chain_points: List[Point2] = []
    for point in _CHAIN_POINTS:
        pixel = landmark_set.to_pixel(point)
        if pixel is not None:
            chain_points.append(pixel)

    segments = []
    for name, point in RIGHT_SEGMENT_POINTS:
        pixel = landmark_set.to_pixel(point)
        if pixel is None:
            continue
        segments.append(SegmentAngle(
            name=name,
            angle_deg=calculate_vector_angle(as_vector(pixel) - ankle, UP),
            anchor_px=pixel,
        ))

    return RightMetrics(
        body_angle_deg=body_angle_deg,
        cva_deg=cva_deg,
        ankle_base=ankle_px,
        ear_px=ear_px,
        c7_px=c7_px,
        chain_points=tuple(chain_points),
        segments=tuple(segments),
    )


class RightMetricsCalculator:
    """
    Stateful wrapper around compute_right_metrics().

    Logs skipped inputs and forward head posture at debug level (using
    config.cva_alert_threshold_deg), and keeps a periodic timing summary.
    """

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config if config is not None else MetricsConfig()
        self.periodic_logger = PeriodicLogger('RightMetrics', period=self.config.log_period, logger_obj=logger)

        logger.info(f"RightMetricsCalculator initialized with "
                    f"cva_alert_threshold={self.config.cva_alert_threshold_deg:.1f}°")

    def update_config(self, config: MetricsConfig):
        """Swap configuration; the periodic summary restarts with the new period."""
        self.config = config
        self.periodic_logger = PeriodicLogger('RightMetrics', period=config.log_period, logger_obj=logger)

    def is_forward_head_posture(self, metrics: Optional[RightMetrics]) -> bool:
        """True when metrics exist and the CVA is below the configured threshold."""
        if metrics is None:
            return False
        return metrics.is_forward_head_posture(self.config.cva_alert_threshold_deg)

    def calculate(self, landmark_set: LandmarkSet) -> Optional[RightMetrics]:
        """
        Calculate right-lateral metrics for one landmark set.

        Returns:
            RightMetrics, or None if preconditions are not met
        """
        start = time.time()

        if landmark_set is None:
            logger.debug("[METRICS] Right metrics skipped: no landmark set")
            metrics = None
        elif not landmark_set.has_valid_dimensions():
            logger.debug(f"[METRICS] Right metrics skipped: invalid image size "
                         f"{landmark_set.image_width}x{landmark_set.image_height}")
            metrics = None
        else:
            missing = [str(p) for p in _REQUIRED_POINTS if not landmark_set.has(p)]
            if missing:
                logger.debug(f"[METRICS] Right metrics skipped: missing {', '.join(missing)}")
                metrics = None
            else:
                metrics = compute_right_metrics(landmark_set)

        if metrics is not None and self.is_forward_head_posture(metrics):
            logger.debug(f"[METRICS] Forward head posture: CVA {metrics.cva_deg:.1f}° "
                         f"< {self.config.cva_alert_threshold_deg:.1f}°")

        elapsed_ms = (time.time() - start) * 1000
        if metrics is None:
            self.periodic_logger.record_skip()
            self.periodic_logger.record_call(elapsed_ms)
        else:
            self.periodic_logger.record_call(elapsed_ms, cva=metrics.cva_deg)
        self.periodic_logger.log_if_periodic()

        return metrics
