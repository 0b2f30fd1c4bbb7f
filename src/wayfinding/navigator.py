# navigator.py
# Public entry point for the wayfinding system.
# Owns no business logic: delegates everything to specialist modules.

import logging
from typing import Iterable, Optional, Sequence, Tuple, Union

from .models import InvalidPathError, Path, PointLike, PointOfInterest, ProgressResult
from .nav_config import NavConfig
from .nav_logger import NavLogger
from .reducer import build
from .route_tracker import RouteTracker
from .sequence import InstructionSequence

logger = logging.getLogger(__name__)


class NavigationSystem:
    """
    High-level navigation facade.

    Typical lifecycle:
        nav = NavigationSystem()
        nav.start_navigation(path_from_planner)

        # Position loop:
        result = nav.update(Waypoint(x, y, z))

    Whenever the planner reports a new path (e.g. after OFF_ROUTE), call
    start_navigation() again; a fresh sequence replaces the old one.

    Args:
        config: Optional NavConfig; defaults to NavConfig().
    """

    def __init__(self, config: Optional[NavConfig] = None) -> None:
        self.config = config or NavConfig()

        # Specialist modules
        self._tracker = RouteTracker(self.config)
        self._logger  = NavLogger(self.config)
        self._sequence: Optional[InstructionSequence] = None

    # ------------------------------------------------------------------
    # Navigation control
    # ------------------------------------------------------------------

    def start_navigation(
        self,
        path: Union[Path, Sequence[PointLike]],
        points_of_interest: Optional[Iterable[PointOfInterest]] = None,
    ) -> Tuple[bool, str]:
        """
        Build instructions for a path and begin tracking.

        Args:
            path:               Key points from origin to destination.
            points_of_interest: Optional doors and the like.

        Returns:
            (success, message)
        """
        logger.info(f"Building instructions for {len(path)} key points.")
        try:
            sequence = build(path, points_of_interest, self.config)
        except InvalidPathError as e:
            logger.warning(f"Instruction building failed: {e}")
            return False, str(e)

        self._sequence = sequence
        self._tracker.load(sequence)
        self._logger.save_instructions(sequence)
        sequence.log(logging.DEBUG)

        first_instruction = sequence[0].text
        logger.info(f"Route ready — {len(sequence)} instructions. First: {first_instruction}")
        return True, f"Route ready. {len(sequence)} instructions."

    def stop_navigation(self) -> None:
        """Forcibly end the current navigation session."""
        self._tracker.stop()
        logger.info("Navigation stopped by user.")

    # ------------------------------------------------------------------
    # Position update: call this on every position fix
    # ------------------------------------------------------------------

    def update(self, position: PointLike) -> ProgressResult:
        """
        Process a new position and return the current navigation status.

        Args:
            position: Current position, metres, y up.

        Returns:
            ProgressResult containing RouteStatus, message, and instruction.
        """
        result = self._tracker.check_progress(position)
        self._logger.log_event(result, position)
        return result

    # ------------------------------------------------------------------
    # Direct queries
    # ------------------------------------------------------------------

    def instruction_for_distance_left(self, distance_left: float) -> Optional[str]:
        if self._sequence is None:
            return None
        return self._sequence.instruction_for_distance_left(distance_left)

    def instruction_for_position(self, position: PointLike) -> Optional[str]:
        if self._sequence is None:
            return None
        return self._sequence.instruction_for_position(position)

    # ------------------------------------------------------------------
    # Convenience read-only properties
    # ------------------------------------------------------------------

    @property
    def instructions(self) -> Optional[InstructionSequence]:
        return self._sequence

    @property
    def is_active(self) -> bool:
        return self._tracker.is_active
