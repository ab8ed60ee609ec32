"""
Anatomical Point Definitions

Closed set of body landmarks used by the posture engine. Ten points come
directly from the pose detector (ears, shoulders, hips, knees, ankles); four are
synthetic and derived geometrically from them:

- TIBIAL_TUBEROSITY_LEFT/RIGHT: 15% of the way from knee to ankle (front view)
- JUGULAR_NOTCH: just below the shoulder midpoint (front view)
- RIGHT_C7: above and behind the right shoulder (right-lateral view)

Each member carries its overlay code, editable flag, synthetic flag and a
display label.
"""

from enum import Enum
from typing import Optional, Tuple


class AnatomicalPoint(Enum):
    # name = (overlay_code, label, editable, synthetic)
    LEFT_ANKLE = ("LA", "Left ankle", True, False)
    RIGHT_ANKLE = ("RA", "Right ankle", True, False)
    LEFT_KNEE = ("LK", "Left knee", True, False)
    RIGHT_KNEE = ("RK", "Right knee", True, False)
    LEFT_HIP = ("LH", "Left hip", True, False)
    RIGHT_HIP = ("RH", "Right hip", True, False)
    LEFT_SHOULDER = ("LS", "Left shoulder", True, False)
    RIGHT_SHOULDER = ("RS", "Right shoulder", True, False)
    LEFT_EAR = ("LE", "Left ear", True, False)
    RIGHT_EAR = ("RE", "Right ear", True, False)
    RIGHT_C7 = ("C7", "C7 vertebra (right)", True, True)
    TIBIAL_TUBEROSITY_LEFT = ("TTL", "Tibial tuberosity (left)", True, True)
    TIBIAL_TUBEROSITY_RIGHT = ("TTR", "Tibial tuberosity (right)", True, True)
    JUGULAR_NOTCH = ("JN", "Jugular notch", True, True)

    def __init__(self, overlay_code: str, label: str, editable: bool, synthetic: bool):
        self.overlay_code = overlay_code
        self.label = label
        self.editable = editable
        self.synthetic = synthetic

    def __str__(self):
        return self.name

    @classmethod
    def from_name(cls, name) -> Optional['AnatomicalPoint']:
        """Look up a member by name; returns None for unknown names."""
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name)]
        except KeyError:
            return None


BASE_POINTS: Tuple[AnatomicalPoint, ...] = tuple(p for p in AnatomicalPoint if not p.synthetic)
SYNTHETIC_POINTS: Tuple[AnatomicalPoint, ...] = tuple(p for p in AnatomicalPoint if p.synthetic)

# Points shown on the front-view editing screen
FRONT_VISIBLE_POINTS: Tuple[AnatomicalPoint, ...] = (
    AnatomicalPoint.TIBIAL_TUBEROSITY_LEFT,
    AnatomicalPoint.TIBIAL_TUBEROSITY_RIGHT,
    AnatomicalPoint.JUGULAR_NOTCH,
    AnatomicalPoint.LEFT_EAR,
    AnatomicalPoint.RIGHT_EAR,
    AnatomicalPoint.LEFT_SHOULDER,
    AnatomicalPoint.RIGHT_SHOULDER,
    AnatomicalPoint.LEFT_HIP,
    AnatomicalPoint.RIGHT_HIP,
    AnatomicalPoint.LEFT_ANKLE,
    AnatomicalPoint.RIGHT_ANKLE,
)

# Points shown on the right-lateral editing screen
RIGHT_VISIBLE_POINTS: Tuple[AnatomicalPoint, ...] = (
    AnatomicalPoint.RIGHT_ANKLE,
    AnatomicalPoint.RIGHT_KNEE,
    AnatomicalPoint.RIGHT_HIP,
    AnatomicalPoint.RIGHT_SHOULDER,
    AnatomicalPoint.RIGHT_EAR,
    AnatomicalPoint.RIGHT_C7,
)

# Left/right pairs measured for level symmetry on the front view, top to bottom
FRONT_LEVEL_PAIRS: Tuple[Tuple[str, AnatomicalPoint, AnatomicalPoint], ...] = (
    ("Ears", AnatomicalPoint.LEFT_EAR, AnatomicalPoint.RIGHT_EAR),
    ("Shoulders", AnatomicalPoint.LEFT_SHOULDER, AnatomicalPoint.RIGHT_SHOULDER),
    ("ASIS", AnatomicalPoint.LEFT_HIP, AnatomicalPoint.RIGHT_HIP),
    ("Knees", AnatomicalPoint.TIBIAL_TUBEROSITY_LEFT, AnatomicalPoint.TIBIAL_TUBEROSITY_RIGHT),
    ("Feet", AnatomicalPoint.LEFT_ANKLE, AnatomicalPoint.RIGHT_ANKLE),
)

# Joints whose lean from vertical is measured through the ankle on the right view
RIGHT_SEGMENT_POINTS: Tuple[Tuple[str, AnatomicalPoint], ...] = (
    ("Knee", AnatomicalPoint.RIGHT_KNEE),
    ("Hip", AnatomicalPoint.RIGHT_HIP),
    ("Shoulder", AnatomicalPoint.RIGHT_SHOULDER),
    ("Ear", AnatomicalPoint.RIGHT_EAR),
)
