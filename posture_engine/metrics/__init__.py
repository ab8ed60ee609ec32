"""
Posture Metrics Module

This module computes clinical posture metrics from front and right-lateral
landmark sets. Metrics include body axis tilt, left/right level symmetry,
craniovertebral angle and per-joint lean from vertical.
"""

from .metrics_dataclasses import (
    FrontMetrics,
    LevelAngle,
    RightMetrics,
    SegmentAngle,
    MetricsConfig,
    format_angle
)
from .front_metrics_calculator import compute_front_metrics, FrontMetricsCalculator
from .right_metrics_calculator import compute_right_metrics, RightMetricsCalculator

__all__ = [
    'FrontMetrics',
    'LevelAngle',
    'RightMetrics',
    'SegmentAngle',
    'MetricsConfig',
    'format_angle',
    'compute_front_metrics',
    'FrontMetricsCalculator',
    'compute_right_metrics',
    'RightMetricsCalculator'
]
