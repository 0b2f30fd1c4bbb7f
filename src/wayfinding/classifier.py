# classifier.py
# Decides which instruction applies to a single span of the path.

from typing import Iterable, List, Optional

from .catalog import InstructionKind
from .geo_utils import angle_between, distance, horizontal, incline_angle, turn_side
from .instruction import NavigationInstruction
from .models import PointOfInterest, Waypoint
from .nav_config import NavConfig


def classify(
    previous: Optional[Waypoint],
    current: Waypoint,
    next_point: Optional[Waypoint],
    distance_left: float,
    config: Optional[NavConfig] = None,
) -> NavigationInstruction:
    """
    Instruction for the span at the current key point.

    Args:
        previous:      Key point before current; None at the origin.
        current:       Key point being classified.
        next_point:    Key point after current; None at the destination.
        distance_left: Distance to the destination at the start of the span.
        config:        NavConfig with the thresholds.

    Returns:
        NavigationInstruction anchored at current. At the destination the span
        is previous → current, otherwise current → next_point.
    """
    config = config or NavConfig()
    if previous is None and next_point is None:
        raise ValueError("A span needs at least one neighbouring key point.")

    here = current.as_array()

    if next_point is None:
        # Arrived.
        span = distance(here, previous.as_array())
        kind = InstructionKind.destination_for(span, config)
        return NavigationInstruction(kind, distance_left, span, current)

    ahead = next_point.as_array()
    span = distance(here, ahead)

    if previous is None:
        # Very beginning of the route.
        kind = InstructionKind.straight_for(span, config)
        return NavigationInstruction(kind, distance_left, span, current)

    outgoing = ahead - here
    elevation = float(outgoing[1])
    incline = incline_angle(outgoing)
    if elevation < -config.min_stair_elevation_m and incline > config.min_stairs_angle_deg:
        return NavigationInstruction(InstructionKind.STAIRS_DOWN, distance_left, span, current)
    if elevation > config.min_stair_elevation_m and incline > config.min_stairs_angle_deg:
        return NavigationInstruction(InstructionKind.STAIRS_UP, distance_left, span, current)

    incoming = horizontal(here - previous.as_array())
    outgoing = horizontal(outgoing)
    angle = angle_between(incoming, outgoing)
    side = turn_side(incoming, outgoing)

    if angle > config.backturn_angle_threshold_deg:
        # An exact reversal has no side; it is reported over the left shoulder.
        kind = InstructionKind.BACKTURN_RIGHT if side > 0 else InstructionKind.BACKTURN_LEFT
    elif angle > config.turn_angle_threshold_deg:
        kind = InstructionKind.TURN_RIGHT if side > 0 else InstructionKind.TURN_LEFT
    else:
        kind = InstructionKind.straight_for(span, config)

    return NavigationInstruction(kind, distance_left, span, current)


def passages_along(
    start: Waypoint,
    end: Waypoint,
    points_of_interest: Iterable[PointOfInterest],
) -> List[PointOfInterest]:
    """
    Points of interest (doors) the span start → end passes through.

    Door detection is not implemented; no span reports a passage yet.
    """
    # TODO Intersect the span with door bounds and emit DOOR_* instructions.
    return []
