"""Turns a planned 3-D path into live, natural-language navigation instructions."""

from .catalog import InstructionKind
from .classifier import classify
from .instruction import NavigationInstruction
from .models import (
    InvalidPathError,
    Path,
    PathProjection,
    PoiKind,
    PointOfInterest,
    ProgressResult,
    RouteStatus,
    Waypoint,
)
from .nav_config import NavConfig
from .navigator import NavigationSystem
from .reducer import build
from .route_tracker import RouteTracker
from .sequence import InstructionSequence

__all__ = [
    "InstructionKind",
    "InstructionSequence",
    "InvalidPathError",
    "NavConfig",
    "NavigationInstruction",
    "NavigationSystem",
    "Path",
    "PathProjection",
    "PoiKind",
    "PointOfInterest",
    "ProgressResult",
    "RouteStatus",
    "RouteTracker",
    "Waypoint",
    "build",
    "classify",
]
