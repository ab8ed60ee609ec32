"""
Synthetic Landmark Derivation

Derives the clinically required landmarks that the pose detector does not
output directly:

Front view:
- TIBIAL_TUBEROSITY_LEFT/RIGHT = lerp(knee, ankle, 0.15)
- JUGULAR_NOTCH = shoulder midpoint, lowered by 7% of the shoulder-hip distance

Right-lateral view:
- RIGHT_C7 = right shoulder + up * 0.30 * neck + back * 0.40 * neck,
  where neck = |ear - shoulder|, up = (0, -1) and back = (-1, 0)
  (posterior is toward the image's left in a right-profile photo)

Derivation is a pure function of the base points. Previously derived synthetic
points are replaced, never reused, so deriving twice yields identical results.
Missing inputs simply omit the dependent synthetic point.
"""

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Optional

import numpy as np

from ..utils.angle_utils import (
    UP,
    calculate_distance,
    calculate_midpoint,
    clamp_unit,
    combine_visibility,
    lerp_optional,
)
from .anatomical_points import (
    AnatomicalPoint,
    FRONT_VISIBLE_POINTS,
    RIGHT_VISIBLE_POINTS,
)
from .landmark_set import Landmark, LandmarkSet

logger = logging.getLogger(__name__)

BACK = np.array([-1.0, 0.0])  # Posterior direction for a right-profile photo

FRONT_SYNTHETIC_POINTS = (
    AnatomicalPoint.TIBIAL_TUBEROSITY_LEFT,
    AnatomicalPoint.TIBIAL_TUBEROSITY_RIGHT,
    AnatomicalPoint.JUGULAR_NOTCH,
)
RIGHT_SYNTHETIC_POINTS = (AnatomicalPoint.RIGHT_C7,)


class ViewTarget(Enum):
    FRONT = "front"
    RIGHT = "right"

    @property
    def visible_points(self):
        if self is ViewTarget.FRONT:
            return FRONT_VISIBLE_POINTS
        return RIGHT_VISIBLE_POINTS

    @property
    def synthetic_points(self):
        if self is ViewTarget.FRONT:
            return FRONT_SYNTHETIC_POINTS
        return RIGHT_SYNTHETIC_POINTS


@dataclass(frozen=True)
class SyntheticConfig:
    """
    Geometric ratios used to place synthetic landmarks.

    Attributes:
        tibial_tuberosity_ratio: Fraction of the knee→ankle distance below the knee
        jugular_offset_ratio: Fraction of the shoulder-center→hip-center distance
                              below the shoulder center
        c7_up_ratio: Fraction of neck length above the right shoulder
        c7_back_ratio: Fraction of neck length behind the right shoulder
    """
    tibial_tuberosity_ratio: float = 0.15
    jugular_offset_ratio: float = 0.07
    c7_up_ratio: float = 0.30
    c7_back_ratio: float = 0.40

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Optional[dict]) -> 'SyntheticConfig':
        """Create from a config section, ignoring unknown keys."""
        if not config_dict:
            return cls()
        valid_fields = set(cls.__dataclass_fields__)
        filtered = {k: float(v) for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


def _create_synthetic(point: AnatomicalPoint, x: float, y: float,
                      z: Optional[float], visibility: Optional[float]) -> Landmark:
    return Landmark.create(point, clamp_unit(x), clamp_unit(y), z=z, visibility=visibility)


def _interpolate(start: Landmark, end: Landmark, factor: float, point: AnatomicalPoint) -> Landmark:
    x = start.x + factor * (end.x - start.x)
    y = start.y + factor * (end.y - start.y)
    z = lerp_optional(start.z, end.z, factor)
    visibility = combine_visibility(start.visibility, end.visibility)
    return _create_synthetic(point, x, y, z, visibility)


def _xy(landmark: Landmark) -> np.ndarray:
    return np.array([landmark.x, landmark.y])


def compute_front_synthetic(base: Dict[AnatomicalPoint, Landmark],
                            config: SyntheticConfig) -> Dict[AnatomicalPoint, Landmark]:
    """Tibial tuberosities and jugular notch from whichever inputs are present."""
    result: Dict[AnatomicalPoint, Landmark] = {}

    sides = (
        (AnatomicalPoint.LEFT_KNEE, AnatomicalPoint.LEFT_ANKLE, AnatomicalPoint.TIBIAL_TUBEROSITY_LEFT),
        (AnatomicalPoint.RIGHT_KNEE, AnatomicalPoint.RIGHT_ANKLE, AnatomicalPoint.TIBIAL_TUBEROSITY_RIGHT),
    )
    for knee_point, ankle_point, target in sides:
        knee = base.get(knee_point)
        ankle = base.get(ankle_point)
        if knee is None or ankle is None:
            logger.debug(f"[SYNTHETIC] Skipping {target}: {knee_point} or {ankle_point} missing")
            continue
        result[target] = _interpolate(knee, ankle, config.tibial_tuberosity_ratio, target)

    left_shoulder = base.get(AnatomicalPoint.LEFT_SHOULDER)
    right_shoulder = base.get(AnatomicalPoint.RIGHT_SHOULDER)
    left_hip = base.get(AnatomicalPoint.LEFT_HIP)
    right_hip = base.get(AnatomicalPoint.RIGHT_HIP)

    if None in (left_shoulder, right_shoulder, left_hip, right_hip):
        logger.debug("[SYNTHETIC] Skipping JUGULAR_NOTCH: shoulders and hips required")
        return result

    shoulder_center = calculate_midpoint(_xy(left_shoulder), _xy(right_shoulder))
    hip_center = calculate_midpoint(_xy(left_hip), _xy(right_hip))
    shoulder_hip_distance = calculate_distance(shoulder_center, hip_center)
    jugular_y = clamp_unit(shoulder_center[1] + config.jugular_offset_ratio * shoulder_hip_distance)

    result[AnatomicalPoint.JUGULAR_NOTCH] = _create_synthetic(
        AnatomicalPoint.JUGULAR_NOTCH,
        x=float(shoulder_center[0]),
        y=jugular_y,
        z=None,
        visibility=combine_visibility(
            left_shoulder.visibility,
            right_shoulder.visibility,
            left_hip.visibility,
            right_hip.visibility,
        ),
    )
    return result


def compute_right_synthetic(base: Dict[AnatomicalPoint, Landmark],
                            config: SyntheticConfig) -> Dict[AnatomicalPoint, Landmark]:
    """Right-side C7 from the right shoulder and ear."""
    result: Dict[AnatomicalPoint, Landmark] = {}

    shoulder = base.get(AnatomicalPoint.RIGHT_SHOULDER)
    ear = base.get(AnatomicalPoint.RIGHT_EAR)
    if shoulder is None or ear is None:
        logger.debug("[SYNTHETIC] Skipping RIGHT_C7: RIGHT_SHOULDER and RIGHT_EAR required")
        return result

    neck_length = calculate_distance(_xy(ear), _xy(shoulder))
    c7 = (_xy(shoulder)
          + UP * (config.c7_up_ratio * neck_length)
          + BACK * (config.c7_back_ratio * neck_length))

    result[AnatomicalPoint.RIGHT_C7] = _create_synthetic(
        AnatomicalPoint.RIGHT_C7,
        x=float(c7[0]),
        y=float(c7[1]),
        z=None,
        visibility=combine_visibility(ear.visibility, shoulder.visibility),
    )
    return result


def derive_synthetic(base: LandmarkSet, target: ViewTarget,
                     config: Optional[SyntheticConfig] = None,
                     visible_only: bool = False) -> LandmarkSet:
    """
    Return a new LandmarkSet with the synthetic points for a view (re)computed.

    Args:
        base: Landmark set holding at least the detector points
        target: ViewTarget.FRONT or ViewTarget.RIGHT
        config: Placement ratios; defaults to SyntheticConfig()
        visible_only: Trim the result to the view's visible point group

    Returns:
        LandmarkSet: Base points plus derived synthetic points. Never raises for
                     missing inputs; the dependent synthetic point is omitted.
    """
    config = config or SyntheticConfig()
    target = ViewTarget(target)

    # Only detector points feed the derivation; stale synthetic values are ignored
    base_map = {p: lm for p, lm in base.point_map().items() if not p.synthetic}

    if target is ViewTarget.FRONT:
        synthetic = compute_front_synthetic(base_map, config)
    else:
        synthetic = compute_right_synthetic(base_map, config)

    # Synthetic points this view owns are rebuilt from scratch
    kept = [p for p in base.point_map() if p not in target.synthetic_points]
    derived = base.subset(kept).with_points(synthetic.values())
    if visible_only:
        derived = derived.subset(target.visible_points)
    return derived
