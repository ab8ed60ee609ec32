"""
Pose Detector Adapter

Converts MediaPipe Pose output (33 normalized landmarks) into a base
LandmarkSet holding the ten detector points the posture engine uses.

Accepted inputs:
- An (N, 3) or (N, 4) array of [x, y, z(, visibility)] rows in MediaPipe order
- A sequence of objects exposing .x/.y/.z/.visibility (MediaPipe NormalizedLandmark)

Synthetic points are not derived here; call derive_synthetic() on the result.
"""

import logging
import math
from typing import Any, Dict, Optional

import numpy as np

from ..utils.angle_utils import clamp_unit
from .anatomical_points import AnatomicalPoint
from .landmark_set import Landmark, LandmarkSet

logger = logging.getLogger(__name__)


# MediaPipe Pose landmark indices for the detector points we consume
MEDIAPIPE_INDICES: Dict[AnatomicalPoint, int] = {
    AnatomicalPoint.LEFT_EAR: 7,
    AnatomicalPoint.RIGHT_EAR: 8,
    AnatomicalPoint.LEFT_SHOULDER: 11,
    AnatomicalPoint.RIGHT_SHOULDER: 12,
    AnatomicalPoint.LEFT_HIP: 23,
    AnatomicalPoint.RIGHT_HIP: 24,
    AnatomicalPoint.LEFT_KNEE: 25,
    AnatomicalPoint.RIGHT_KNEE: 26,
    AnatomicalPoint.LEFT_ANKLE: 27,
    AnatomicalPoint.RIGHT_ANKLE: 28,
}

# Output order matches the detector-point order of AnatomicalPoint
_OUTPUT_ORDER = (
    AnatomicalPoint.LEFT_ANKLE,
    AnatomicalPoint.RIGHT_ANKLE,
    AnatomicalPoint.LEFT_KNEE,
    AnatomicalPoint.RIGHT_KNEE,
    AnatomicalPoint.LEFT_HIP,
    AnatomicalPoint.RIGHT_HIP,
    AnatomicalPoint.LEFT_SHOULDER,
    AnatomicalPoint.RIGHT_SHOULDER,
    AnatomicalPoint.LEFT_EAR,
    AnatomicalPoint.RIGHT_EAR,
)

MIN_LANDMARK_COUNT = max(MEDIAPIPE_INDICES.values()) + 1


def _finite_or_none(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _landmarks_to_array(landmarks) -> Optional[np.ndarray]:
    """Normalize either input form into an (N, 4) float array (NaN = absent)."""
    if not isinstance(landmarks, np.ndarray):
        landmarks = list(landmarks)
        # Plain nested lists are treated like an array
        if landmarks and not hasattr(landmarks[0], 'x'):
            try:
                landmarks = np.asarray(landmarks, dtype=float)
            except (TypeError, ValueError) as e:
                logger.warning(f"[POSE] Could not read landmark rows: {e}")
                return None

    if isinstance(landmarks, np.ndarray):
        try:
            arr = np.asarray(landmarks, dtype=float)
        except (TypeError, ValueError) as e:
            logger.warning(f"[POSE] Could not read landmark array: {e}")
            return None
        if arr.ndim != 2 or arr.shape[1] not in (2, 3, 4):
            logger.warning(f"[POSE] Expected (N, 3|4) landmark array, got shape {arr.shape}")
            return None
        padded = np.full((arr.shape[0], 4), np.nan)
        padded[:, :arr.shape[1]] = arr
        return padded

    rows = []
    for lm in landmarks:
        rows.append([
            _finite_or_none(getattr(lm, 'x', None)),
            _finite_or_none(getattr(lm, 'y', None)),
            _finite_or_none(getattr(lm, 'z', None)),
            _finite_or_none(getattr(lm, 'visibility', None)),
        ])
    if not rows:
        return None
    return np.array([[np.nan if v is None else v for v in row] for row in rows], dtype=float)


def landmark_set_from_pose(landmarks, image_width: int, image_height: int) -> Optional[LandmarkSet]:
    """
    Build a base LandmarkSet from one detected pose.

    Args:
        landmarks: MediaPipe-ordered landmarks (array or sequence of objects)
        image_width: Source image width in pixels
        image_height: Source image height in pixels

    Returns:
        LandmarkSet with the ten detector points, or None if the pose is
        missing, too short, or a required joint has no finite x/y.
    """
    if landmarks is None:
        return None

    arr = _landmarks_to_array(landmarks)
    if arr is None or arr.shape[0] < MIN_LANDMARK_COUNT:
        count = 0 if arr is None else arr.shape[0]
        logger.warning(f"[POSE] Pose not found: {count} landmarks, need {MIN_LANDMARK_COUNT}")
        return None

    points = []
    for point in _OUTPUT_ORDER:
        x, y, z, visibility = arr[MEDIAPIPE_INDICES[point]]
        if not (np.isfinite(x) and np.isfinite(y)):
            logger.warning(f"[POSE] Pose not found: {point} has no finite coordinates")
            return None
        points.append(Landmark.create(
            point,
            clamp_unit(x),
            clamp_unit(y),
            z=_finite_or_none(z),
            visibility=_finite_or_none(visibility),
        ))

    return LandmarkSet(
        image_width=int(image_width),
        image_height=int(image_height),
        points=tuple(points),
    )
