# route_tracker.py
# State machine that tracks a traveller's position against an instruction sequence.
# Call load() once per sequence, then check_progress() on every position update.

from typing import Optional

from .instruction import NavigationInstruction
from .models import PointLike, ProgressResult, RouteStatus
from .nav_config import NavConfig
from .sequence import InstructionSequence


class RouteTracker:
    """
    Stateful progress tracker for a single navigation session.

    Usage:
        tracker = RouteTracker(config)
        tracker.load(sequence)

        # Inside the position loop:
        result = tracker.check_progress(current_position)
    """

    def __init__(self, config: Optional[NavConfig] = None) -> None:
        self.config = config or NavConfig()
        self._sequence: Optional[InstructionSequence] = None
        self._current: Optional[NavigationInstruction] = None
        self._active: bool = False

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def load(self, sequence: InstructionSequence) -> None:
        """Load a new sequence and reset state."""
        self._sequence = sequence
        self._current = None
        self._active = True

    def stop(self) -> None:
        """Forcibly end navigation."""
        self._active = False

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def sequence(self) -> Optional[InstructionSequence]:
        return self._sequence

    @property
    def current_instruction(self) -> Optional[NavigationInstruction]:
        return self._current

    # ------------------------------------------------------------------
    # Core method: call on every position update
    # ------------------------------------------------------------------

    def check_progress(self, position: PointLike) -> ProgressResult:
        """
        Compare the current position to the active path.

        Args:
            position: Current position, metres, y up.

        Returns:
            ProgressResult with status, instruction text and distance left.
        """
        if not self._active or self._sequence is None:
            return ProgressResult(
                status=RouteStatus.INACTIVE,
                message="Navigation is not active.",
            )

        projection = self._sequence.path.project(position)

        # 1. Left the corridor around the path
        if projection.offset > self.config.off_route_threshold_m:
            return ProgressResult(
                status=RouteStatus.OFF_ROUTE,
                message="You are off the route. Recalculating may be needed.",
                distance_left=projection.distance_left,
                instruction=self._current,
            )

        # 2. Destination reached
        if projection.distance_left <= self.config.arrival_threshold_m:
            self._active = False
            return ProgressResult(
                status=RouteStatus.FINISHED,
                message="You have reached your destination.",
                distance_left=projection.distance_left,
                instruction=self._sequence[-1],
            )

        # 3. Still on route
        if self.config.track_by_position:
            node = self._sequence.node_for_position(position)
            message = node.render_at_position(position, self.config)
        else:
            node = self._sequence.node_for_distance_left(projection.distance_left)
            message = node.render_at_distance(projection.distance_left, self.config)

        status = RouteStatus.PROGRESSING if node == self._current else RouteStatus.INSTRUCTION_CHANGED
        self._current = node
        return ProgressResult(
            status=status,
            message=message,
            distance_left=projection.distance_left,
            instruction=node,
        )
