"""
Landmarks Module

Anatomical point definitions, immutable landmark sets, synthetic landmark
derivation (tibial tuberosities, jugular notch, C7) and the pose detector
adapter.
"""

from .anatomical_points import (
    AnatomicalPoint,
    BASE_POINTS,
    SYNTHETIC_POINTS,
    FRONT_VISIBLE_POINTS,
    RIGHT_VISIBLE_POINTS,
)
from .landmark_set import Landmark, LandmarkSet
from .synthetic import ViewTarget, SyntheticConfig, derive_synthetic
from .pose_adapter import landmark_set_from_pose

__all__ = [
    'AnatomicalPoint',
    'BASE_POINTS',
    'SYNTHETIC_POINTS',
    'FRONT_VISIBLE_POINTS',
    'RIGHT_VISIBLE_POINTS',
    'Landmark',
    'LandmarkSet',
    'ViewTarget',
    'SyntheticConfig',
    'derive_synthetic',
    'landmark_set_from_pose'
]
