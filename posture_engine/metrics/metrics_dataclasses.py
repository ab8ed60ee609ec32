"""
Metrics Dataclasses

Defines the value objects produced by the front and right metrics pipelines,
plus the configuration used by the calculator classes.

All angles are in degrees. All points are (x, y) tuples in pixel space, ready
to be drawn over the source photo.
"""

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional, Tuple

from ..utils.angle_utils import Point2

NOT_AVAILABLE = "—"


def format_angle(value: Optional[float]) -> str:
    """Render an angle for reports: '12.3°', or an em dash when absent."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.1f}°"


def _point(value) -> Point2:
    return (float(value[0]), float(value[1]))


@dataclass(frozen=True)
class LevelAngle:
    """
    Left/right symmetry at one body level on the front view.

    Attributes:
        name: Level name (Ears, Shoulders, ASIS, Knees, Feet)
        deviation_deg: Departure of the left-right line from horizontal, [0, 90]
        body_deviation_deg: Lean of the body axis between the previous (lower)
                            level and this one. None for Feet, the baseline.
        y_px: Mean pixel height of the pair
        left, right, mid: Pair endpoints and midpoint in pixels
    """
    name: str
    deviation_deg: float
    body_deviation_deg: Optional[float]
    y_px: float
    left: Point2
    right: Point2
    mid: Point2

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.body_deviation_deg is None:
            del data['body_deviation_deg']
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LevelAngle':
        body_deviation = data.get('body_deviation_deg')
        return cls(
            name=str(data['name']),
            deviation_deg=float(data['deviation_deg']),
            body_deviation_deg=float(body_deviation) if body_deviation is not None else None,
            y_px=float(data['y_px']),
            left=_point(data['left']),
            right=_point(data['right']),
            mid=_point(data['mid']),
        )


@dataclass(frozen=True)
class FrontMetrics:
    """
    Frontal-plane posture metrics.

    Attributes:
        body_angle_deg: Tilt of the ankle-midpoint → jugular-notch axis from vertical
        body_base: Ankle midpoint (axis origin) in pixels
        jugular_px: Jugular notch in pixels
        level_angles: Per-level symmetry, ordered top-down
    """
    body_angle_deg: float
    body_base: Point2
    jugular_px: Point2
    level_angles: Tuple[LevelAngle, ...] = field(default_factory=tuple)

    def get_level(self, name: str) -> Optional[LevelAngle]:
        for level in self.level_angles:
            if level.name == name:
                return level
        return None

    def get_level_summary(self) -> str:
        """
        Human-readable summary, e.g. "Body: 1.2° | Shoulders: 0.8° | Feet: 0.0°"
        """
        parts = [f"Body: {format_angle(self.body_angle_deg)}"]
        for level in self.level_angles:
            parts.append(f"{level.name}: {format_angle(level.deviation_deg)}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'body_angle_deg': self.body_angle_deg,
            'body_base': list(self.body_base),
            'jugular_px': list(self.jugular_px),
            'level_angles': [level.to_dict() for level in self.level_angles],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FrontMetrics':
        return cls(
            body_angle_deg=float(data['body_angle_deg']),
            body_base=_point(data['body_base']),
            jugular_px=_point(data['jugular_px']),
            level_angles=tuple(LevelAngle.from_dict(item) for item in data.get('level_angles', [])),
        )


@dataclass(frozen=True)
class SegmentAngle:
    """Lean from vertical of one joint, measured through the ankle."""
    name: str
    angle_deg: float
    anchor_px: Point2

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SegmentAngle':
        return cls(
            name=str(data['name']),
            angle_deg=float(data['angle_deg']),
            anchor_px=_point(data['anchor_px']),
        )


@dataclass(frozen=True)
class RightMetrics:
    """
    Sagittal-plane posture metrics from the right-lateral view.

    Attributes:
        body_angle_deg: Lean of the ankle → ear axis from vertical
        cva_deg: Craniovertebral angle (C7 → ear against horizontal).
                 Lower values indicate forward head posture.
        ankle_base: Right ankle in pixels
        ear_px: Right ear in pixels
        c7_px: C7 vertebra in pixels
        chain_points: Ankle, hip, shoulder, ear polyline (present points only)
        segments: Per-joint lean angles (Knee, Hip, Shoulder, Ear)
    """
    body_angle_deg: float
    cva_deg: float
    ankle_base: Point2
    ear_px: Point2
    c7_px: Point2
    chain_points: Tuple[Point2, ...] = field(default_factory=tuple)
    segments: Tuple[SegmentAngle, ...] = field(default_factory=tuple)

    def get_segment(self, name: str) -> Optional[SegmentAngle]:
        for segment in self.segments:
            if segment.name == name:
                return segment
        return None

    def is_forward_head_posture(self, threshold_deg: float = 48.0) -> bool:
        """True when the CVA falls below the clinical alert threshold."""
        return self.cva_deg < threshold_deg

    def get_segment_summary(self) -> str:
        """
        Human-readable summary, e.g. "Body: 2.1° | CVA: 52.4° | Knee: 1.0° | ..."
        """
        parts = [f"Body: {format_angle(self.body_angle_deg)}",
                 f"CVA: {format_angle(self.cva_deg)}"]
        for segment in self.segments:
            parts.append(f"{segment.name}: {format_angle(segment.angle_deg)}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'body_angle_deg': self.body_angle_deg,
            'cva_deg': self.cva_deg,
            'ankle_base': list(self.ankle_base),
            'ear_px': list(self.ear_px),
            'c7_px': list(self.c7_px),
            'chain_points': [list(p) for p in self.chain_points],
            'segments': [segment.to_dict() for segment in self.segments],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RightMetrics':
        return cls(
            body_angle_deg=float(data['body_angle_deg']),
            cva_deg=float(data['cva_deg']),
            ankle_base=_point(data['ankle_base']),
            ear_px=_point(data['ear_px']),
            c7_px=_point(data['c7_px']),
            chain_points=tuple(_point(p) for p in data.get('chain_points', [])),
            segments=tuple(SegmentAngle.from_dict(item) for item in data.get('segments', [])),
        )


@dataclass
class MetricsConfig:
    """
    Configuration for the metrics calculator classes.

    Attributes:
        cva_alert_threshold_deg: CVA below this flags forward head posture
        log_period: Number of calculations between periodic summary logs
    """
    cva_alert_threshold_deg: float = 48.0
    log_period: int = 100

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Optional[dict]) -> 'MetricsConfig':
        """
        Create MetricsConfig from dictionary.

        Args:
            config_dict: The 'metrics' config section; unknown keys are ignored

        Returns:
            MetricsConfig: New configuration instance
        """
        if not config_dict:
            return cls()
        converters = {'cva_alert_threshold_deg': float, 'log_period': int}
        filtered = {k: converters[k](v) for k, v in config_dict.items() if k in converters}
        return cls(**filtered)
