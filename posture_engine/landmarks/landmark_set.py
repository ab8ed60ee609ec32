"""
Landmark data structures.

Coordinates are stored normalized to the image ([0, 1] on each axis) so a set is
independent of pixel resolution. Pixel positions are computed on demand from
image_width / image_height.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from ..utils.angle_utils import Point2, clamp_unit
from .anatomical_points import AnatomicalPoint

logger = logging.getLogger(__name__)

PointRef = Union[AnatomicalPoint, str]


def _optional_int(value) -> Optional[int]:
    return int(value) if value is not None else None


@dataclass(frozen=True)
class Landmark:
    """
    A single anatomically-named point.

    Attributes:
        point: Landmark identity
        x, y: Normalized image coordinates in [0, 1]
        z: Optional depth propagated from the detector
        visibility: Optional detector confidence
        editable: Whether a human may move this point
        code: Short overlay code for display
    """

    point: AnatomicalPoint
    x: float
    y: float
    z: Optional[float] = None
    visibility: Optional[float] = None
    editable: bool = True
    code: str = ""

    @classmethod
    def create(cls, point: AnatomicalPoint, x: float, y: float,
               z: Optional[float] = None, visibility: Optional[float] = None) -> 'Landmark':
        """Build a landmark whose editable flag and code come from the point definition."""
        return cls(
            point=point,
            x=float(x),
            y=float(y),
            z=z,
            visibility=visibility,
            editable=point.editable,
            code=point.overlay_code,
        )

    def to_pixel(self, image_width: int, image_height: int) -> Point2:
        return (self.x * image_width, self.y * image_height)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary; absent optional fields are omitted."""
        data: Dict[str, Any] = {
            'point': self.point.name,
            'x': self.x,
            'y': self.y,
            'editable': self.editable,
            'code': self.code,
        }
        if self.z is not None:
            data['z'] = self.z
        if self.visibility is not None:
            data['visibility'] = self.visibility
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional['Landmark']:
        """
        Create a Landmark from a dictionary.

        Returns None when the point name is unknown, so stored records written by
        other versions degrade gracefully.
        """
        point = AnatomicalPoint.from_name(data.get('point'))
        if point is None:
            logger.warning(f"[LANDMARKS] Skipping unknown point '{data.get('point')}'")
            return None
        z = data.get('z')
        visibility = data.get('visibility')
        return cls(
            point=point,
            x=float(data['x']),
            y=float(data['y']),
            z=float(z) if z is not None else None,
            visibility=float(visibility) if visibility is not None else None,
            editable=bool(data.get('editable', point.editable)),
            code=str(data.get('code', point.overlay_code)),
        )


@dataclass(frozen=True)
class LandmarkSet:
    """
    All landmarks captured from one photo.

    No two landmarks share an AnatomicalPoint; when duplicates are supplied the
    last one wins, keeping the position of the first.
    """

    image_width: Optional[int]
    image_height: Optional[int]
    points: Tuple[Landmark, ...] = field(default_factory=tuple)

    def __post_init__(self):
        unique: Dict[AnatomicalPoint, Landmark] = {}
        for landmark in self.points:
            unique[landmark.point] = landmark
        object.__setattr__(self, 'points', tuple(unique.values()))

    # --- Lookup ---

    def point_map(self) -> Dict[AnatomicalPoint, Landmark]:
        return {landmark.point: landmark for landmark in self.points}

    def get(self, point: PointRef) -> Optional[Landmark]:
        target = AnatomicalPoint.from_name(point)
        if target is None:
            return None
        for landmark in self.points:
            if landmark.point is target:
                return landmark
        return None

    def has(self, point: PointRef) -> bool:
        return self.get(point) is not None

    def has_valid_dimensions(self) -> bool:
        """True when both image dimensions are strictly positive."""
        return bool(self.image_width and self.image_height
                    and self.image_width > 0 and self.image_height > 0)

    def to_pixel(self, point: PointRef) -> Optional[Point2]:
        """Pixel-space position of a point, or None if absent or the image size is unknown."""
        landmark = self.get(point)
        if landmark is None or not self.has_valid_dimensions():
            return None
        return landmark.to_pixel(self.image_width, self.image_height)

    # --- Pure transformations ---

    def with_updated(self, point: PointRef, x: float, y: float) -> 'LandmarkSet':
        """
        Move one landmark to a new normalized position.

        The coordinates are clamped into [0, 1]. The set is returned unchanged
        when the point is unknown, not editable, or not present. Only x/y
        change; z and visibility are kept, and synthetic points are NOT
        re-derived (call derive_synthetic explicitly).
        """
        target = AnatomicalPoint.from_name(point)
        if target is None or not target.editable:
            return self

        current = self.get(target)
        if current is None or not current.editable:
            return self

        moved = replace(current, x=clamp_unit(x), y=clamp_unit(y))
        updated = tuple(moved if landmark.point is target else landmark
                        for landmark in self.points)
        return replace(self, points=updated)

    def with_points(self, landmarks: Iterable[Landmark]) -> 'LandmarkSet':
        """Return a new set with the given landmarks added or replaced."""
        merged = self.point_map()
        for landmark in landmarks:
            merged[landmark.point] = landmark
        return replace(self, points=tuple(merged.values()))

    def subset(self, points: Iterable[AnatomicalPoint]) -> 'LandmarkSet':
        """Return a new set with only the given points, in the given order."""
        existing = self.point_map()
        kept = tuple(existing[p] for p in points if p in existing)
        return replace(self, points=kept)

    # --- Serialization ---

    def to_dict(self) -> Dict[str, Any]:
        return {
            'image_width': self.image_width,
            'image_height': self.image_height,
            'points': [landmark.to_dict() for landmark in self.points],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LandmarkSet':
        """Missing or null image dimensions are restored as None."""
        landmarks = []
        for item in data.get('points', []):
            landmark = Landmark.from_dict(item)
            if landmark is not None:
                landmarks.append(landmark)
        return cls(
            image_width=_optional_int(data.get('image_width')),
            image_height=_optional_int(data.get('image_height')),
            points=tuple(landmarks),
        )
