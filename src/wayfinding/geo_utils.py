# geo_utils.py
# Pure vector helper functions on numpy 3-vectors.
# No side effects, no imports from other project modules.
#
# Axes follow the engine convention: x east, y up, z north.

import math
from typing import Tuple

import numpy as np


WORLD_UP = np.array([0.0, 1.0, 0.0])

# Vectors shorter than this have no direction.
_MIN_NORM = 1e-15


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points in metres."""
    return float(np.linalg.norm(np.asarray(b, dtype=float) - np.asarray(a, dtype=float)))


def squared_distance(a: np.ndarray, b: np.ndarray) -> float:
    diff = np.asarray(b, dtype=float) - np.asarray(a, dtype=float)
    return float(np.dot(diff, diff))


def horizontal(v: np.ndarray) -> np.ndarray:
    """Projection of a vector onto the horizontal (x/z) plane."""
    flat = np.array(v, dtype=float)
    flat[1] = 0.0
    return flat


def angle_between(a: np.ndarray, b: np.ndarray) -> float:
    """
    Unsigned angle between two vectors in degrees [0, 180].

    Returns 0 when either vector has no length.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    denominator = float(np.linalg.norm(a) * np.linalg.norm(b))
    if denominator < _MIN_NORM:
        return 0.0
    cosine = float(np.dot(a, b)) / denominator
    return math.degrees(math.acos(max(-1.0, min(1.0, cosine))))


def incline_angle(v: np.ndarray) -> float:
    """
    Angle between a vector and the horizontal plane in degrees [0, 90],
    regardless of whether it points up or down.
    """
    return abs(90.0 - angle_between(WORLD_UP, v))


def turn_side(incoming: np.ndarray, outgoing: np.ndarray) -> float:
    """
    Vertical component of cross(incoming, outgoing).

    Negative means the outgoing direction lies to the left of the incoming
    one, positive to the right, zero when they are parallel.
    """
    return float(np.cross(np.asarray(incoming, dtype=float), np.asarray(outgoing, dtype=float))[1])


def closest_point_on_segment(
    start: np.ndarray, end: np.ndarray, position: np.ndarray
) -> Tuple[np.ndarray, float]:
    """
    Closest point to position on the segment start → end.

    Returns:
        (point, t) where t in [0, 1] is the fraction along the segment.
    """
    start = np.asarray(start, dtype=float)
    direction = np.asarray(end, dtype=float) - start
    length_sqr = float(np.dot(direction, direction))
    if length_sqr == 0.0:
        return start.copy(), 0.0

    t = float(np.dot(np.asarray(position, dtype=float) - start, direction)) / length_sqr
    t = max(0.0, min(1.0, t))
    return start + t * direction, t
