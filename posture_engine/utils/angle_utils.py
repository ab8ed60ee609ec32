"""
Angle Calculation Utilities

Provides 2D vector and angle computation utilities for posture metrics.
All angles are returned in degrees unless otherwise specified.

Inputs may be numpy arrays, tuples or lists of two numbers. Vector results are
returned as float numpy arrays; use to_point2() to get a plain (x, y) tuple for
storage in metrics objects.
"""

import numpy as np
from typing import Optional, Tuple

# Magnitudes below this are treated as degenerate (zero-length) vectors
EPSILON = 1e-6

Point2 = Tuple[float, float]

UP = np.array([0.0, -1.0])     # Image "up" (y grows downward)
RIGHT = np.array([1.0, 0.0])   # Image "right" / horizontal reference


def as_vector(v) -> np.ndarray:
    """Coerce a 2-element sequence into a float numpy array."""
    return np.asarray(v, dtype=float).reshape(2)


def to_point2(v) -> Point2:
    """Convert a vector into a plain (x, y) tuple of Python floats."""
    arr = as_vector(v)
    return (float(arr[0]), float(arr[1]))


def calculate_distance(a, b) -> float:
    """
    Euclidean distance between two 2D points.

    Example:
        >>> calculate_distance((0, 0), (3, 4))
        5.0
    """
    return float(np.linalg.norm(as_vector(b) - as_vector(a)))


def calculate_midpoint(a, b) -> np.ndarray:
    """
    Calculate midpoint between two 2D points.

    Example:
        >>> calculate_midpoint((0, 0), (2, 4))
        array([1., 2.])
    """
    return (as_vector(a) + as_vector(b)) / 2.0


def normalize_vector(v) -> np.ndarray:
    """
    Normalize a 2D vector to unit length.

    Returns:
        np.ndarray: Unit vector in same direction, or the zero vector when the
                    magnitude is below EPSILON

    Example:
        >>> normalize_vector((3, 4))
        array([0.6, 0.8])
    """
    arr = as_vector(v)
    magnitude = np.linalg.norm(arr)

    if magnitude < EPSILON:
        return np.zeros(2)

    return arr / magnitude


def calculate_vector_angle(v1, v2, degrees: bool = True) -> float:
    """
    Calculate the unsigned angle between two 2D vectors using the dot product.

    Args:
        v1: First vector
        v2: Second vector
        degrees: Return angle in degrees (True) or radians (False)

    Returns:
        float: Angle between vectors, range [0, 180] degrees or [0, π] radians.
               0.0 when either vector has (near-)zero magnitude.

    Example:
        >>> calculate_vector_angle((1, 0), (0, 1))
        90.0
    """
    a = as_vector(v1)
    b = as_vector(v2)

    mag1 = np.linalg.norm(a)
    mag2 = np.linalg.norm(b)

    if mag1 < EPSILON or mag2 < EPSILON:
        return 0.0

    cos_angle = np.dot(a, b) / (mag1 * mag2)

    # Clamp to valid range to handle floating-point errors
    cos_angle = np.clip(cos_angle, -1.0, 1.0)

    angle_rad = np.arccos(cos_angle)

    if degrees:
        return float(np.degrees(angle_rad))
    return float(angle_rad)


def calculate_line_tilt(left, right) -> float:
    """
    Departure from horizontal of the line joining a left/right landmark pair.

    The raw atan2 orientation is folded into [0, 90] so the result does not
    depend on which side was labelled left or right.

    Returns:
        float: Tilt in degrees, 0 = perfectly level
    """
    l = as_vector(left)
    r = as_vector(right)
    angle = float(np.degrees(np.arctan2(r[1] - l[1], r[0] - l[0])))
    angle_abs = abs(angle)
    return min(angle_abs, abs(180.0 - angle_abs))


def lerp_optional(a: Optional[float], b: Optional[float], t: float) -> Optional[float]:
    """
    Linear interpolation that propagates presence.

    Both absent -> None. Only one present -> that value unchanged.
    """
    if a is None and b is None:
        return None
    if a is None:
        return b
    if b is None:
        return a
    return a + t * (b - a)


def combine_visibility(*values: Optional[float]) -> Optional[float]:
    """
    Minimum of all present visibility values, or None if none are present.

    A derived point is only as trustworthy as its weakest contributor.
    """
    present = [v for v in values if v is not None]
    if not present:
        return None
    return min(present)


def clamp_unit(value: float) -> float:
    """Clamp a normalized coordinate into [0, 1]."""
    return float(min(1.0, max(0.0, value)))

