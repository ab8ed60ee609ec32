"""
Postural geometry engine.

Derives synthetic clinical landmarks from pose-detector output and computes
frontal-plane and sagittal-plane posture angles.
"""

from .landmarks import (
    AnatomicalPoint,
    Landmark,
    LandmarkSet,
    ViewTarget,
    SyntheticConfig,
    derive_synthetic,
    landmark_set_from_pose
)
from .metrics import (
    FrontMetrics,
    RightMetrics,
    MetricsConfig,
    compute_front_metrics,
    compute_right_metrics,
    FrontMetricsCalculator,
    RightMetricsCalculator
)

__version__ = "0.1.0"

__all__ = [
    'AnatomicalPoint',
    'Landmark',
    'LandmarkSet',
    'ViewTarget',
    'SyntheticConfig',
    'derive_synthetic',
    'landmark_set_from_pose',
    'FrontMetrics',
    'RightMetrics',
    'MetricsConfig',
    'compute_front_metrics',
    'compute_right_metrics',
    'FrontMetricsCalculator',
    'RightMetricsCalculator'
]
