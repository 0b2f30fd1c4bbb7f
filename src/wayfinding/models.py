# models.py
# Shared data structures and enums used across all modules.

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .geo_utils import closest_point_on_segment, distance

if TYPE_CHECKING:
    from .instruction import NavigationInstruction


class InvalidPathError(ValueError):
    """Raised when a path cannot produce navigation instructions."""


# ---------------------------------------------------------------------------
# Waypoint
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Waypoint:
    """Immutable 3-D point in metres, y is up."""
    x: float
    y: float
    z: float

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}

    @staticmethod
    def from_dict(d: dict) -> "Waypoint":
        return Waypoint(float(d["x"]), float(d["y"]), float(d["z"]))

    @staticmethod
    def of(value: Union["Waypoint", Sequence[float], np.ndarray]) -> "Waypoint":
        """Coerce a Waypoint, an (x, y, z) sequence or a numpy vector."""
        if isinstance(value, Waypoint):
            return value
        x, y, z = (float(c) for c in value)
        return Waypoint(x, y, z)


PointLike = Union[Waypoint, Sequence[float], np.ndarray]


# ---------------------------------------------------------------------------
# Points of interest
# ---------------------------------------------------------------------------

class PoiKind(Enum):
    DOOR = "door"
    OTHER = "other"


@dataclass(frozen=True)
class PointOfInterest:
    """Something the traveller meets along the way, e.g. a door."""
    location: Waypoint
    kind: PoiKind = PoiKind.DOOR
    name: Optional[str] = None


# ---------------------------------------------------------------------------
# Path
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PathProjection:
    """Where a live position falls on a path."""
    point: Waypoint          # closest point on the polyline
    segment_index: int       # segment the point lies on
    offset: float            # metres between the position and the polyline
    distance_left: float     # metres along the polyline to the destination


class Path:
    """
    Ordered, immutable polyline from origin to destination.

    Args:
        points: At least two waypoints (or (x, y, z) sequences).

    Raises:
        InvalidPathError: If fewer than two points are given.
    """

    def __init__(self, points: Iterable[PointLike]) -> None:
        self._points: Tuple[Waypoint, ...] = tuple(Waypoint.of(p) for p in points)
        if len(self._points) < 2:
            raise InvalidPathError(
                f"Path can't consist of less than 2 points (got {len(self._points)})."
            )
        arrays = [p.as_array() for p in self._points]
        self._lengths: Tuple[float, ...] = tuple(
            distance(a, b) for a, b in zip(arrays, arrays[1:])
        )

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Waypoint]:
        return iter(self._points)

    def __getitem__(self, index: int) -> Waypoint:
        return self._points[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        return f"Path({len(self._points)} points, {self.total_length:.2f} m)"

    # ------------------------------------------------------------------
    # Measurements
    # ------------------------------------------------------------------

    @property
    def points(self) -> Tuple[Waypoint, ...]:
        return self._points

    @property
    def origin(self) -> Waypoint:
        return self._points[0]

    @property
    def destination(self) -> Waypoint:
        return self._points[-1]

    @property
    def segment_lengths(self) -> Tuple[float, ...]:
        return self._lengths

    @property
    def total_length(self) -> float:
        return float(sum(self._lengths))

    @property
    def total_sqr_magnitude(self) -> float:
        """Sum of squared segment lengths; cheap progress measure."""
        return float(sum(length * length for length in self._lengths))

    def without_degenerate_segments(self, epsilon: float) -> "Path":
        """
        Copy of the path with segments not longer than epsilon collapsed.

        The destination point is always kept. If every point coincides the
        result is a two-point, zero-length path.
        """
        kept: List[Waypoint] = [self._points[0]]
        for point in self._points[1:]:
            if distance(kept[-1].as_array(), point.as_array()) > epsilon:
                kept.append(point)

        if len(kept) == 1:
            kept.append(self._points[-1])
        else:
            kept[-1] = self._points[-1]

        if len(kept) == len(self._points):
            return self
        return Path(kept)

    def project(self, position: PointLike) -> PathProjection:
        """
        Snap a position onto the path.

        Args:
            position: Current position near the path.

        Returns:
            PathProjection with the closest point and the remaining distance.
        """
        target = Waypoint.of(position).as_array()
        best_point = self._points[0].as_array()
        best_index = 0
        best_sqr = float("inf")

        for i in range(len(self._points) - 1):
            candidate, _ = closest_point_on_segment(
                self._points[i].as_array(), self._points[i + 1].as_array(), target
            )
            diff = candidate - target
            sqr = float(np.dot(diff, diff))
            if sqr < best_sqr:
                best_sqr = sqr
                best_point = candidate
                best_index = i

        remaining = distance(best_point, self._points[best_index + 1].as_array())
        remaining += sum(self._lengths[best_index + 1:])
        return PathProjection(
            point=Waypoint.of(best_point),
            segment_index=best_index,
            offset=float(np.sqrt(best_sqr)),
            distance_left=float(remaining),
        )


# ---------------------------------------------------------------------------
# Navigation status
# ---------------------------------------------------------------------------

class RouteStatus(Enum):
    INACTIVE            = "inactive"
    PROGRESSING         = "progressing"
    INSTRUCTION_CHANGED = "instruction_changed"
    OFF_ROUTE           = "off_route"
    FINISHED            = "finished"


@dataclass
class ProgressResult:
    """Returned by RouteTracker.check_progress() on every position update."""
    status: RouteStatus
    message: str
    distance_left: Optional[float] = None     # metres along the path
    instruction: Optional["NavigationInstruction"] = None
