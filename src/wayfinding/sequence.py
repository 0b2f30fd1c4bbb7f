# sequence.py
# Ordered, immutable list of instructions with the live query API.

import logging
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from .geo_utils import squared_distance
from .instruction import NavigationInstruction
from .models import Path, PointLike, PointOfInterest, Waypoint
from .nav_config import NavConfig

logger = logging.getLogger(__name__)


class InstructionSequence:
    """
    Instructions one meets along a path, ordered origin → destination.

    Built by reducer.build(); a new path always yields a new sequence.

    Usage:
        sequence = build(path)
        text = sequence.instruction_for_distance_left(12.5)
        text = sequence.instruction_for_position(Waypoint(1.0, 0.0, 4.0))

    Args:
        instructions:       Non-empty, ordered origin → destination.
        path:               Path the instructions were built from.
        points_of_interest: Optional doors and the like along the path.
        config:             NavConfig instance.
    """

    def __init__(
        self,
        instructions: Sequence[NavigationInstruction],
        path: Path,
        points_of_interest: Optional[Iterable[PointOfInterest]] = None,
        config: Optional[NavConfig] = None,
    ) -> None:
        if not instructions:
            raise ValueError("An instruction sequence needs at least one instruction.")
        self.config = config or NavConfig()
        self._instructions: Tuple[NavigationInstruction, ...] = tuple(instructions)
        self._path = path
        self._points_of_interest: Tuple[PointOfInterest, ...] = tuple(points_of_interest or ())

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[NavigationInstruction]:
        return iter(self._instructions)

    def __len__(self) -> int:
        return len(self._instructions)

    def __getitem__(self, index: int) -> NavigationInstruction:
        return self._instructions[index]

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path:
        return self._path

    @property
    def points_of_interest(self) -> Tuple[PointOfInterest, ...]:
        return self._points_of_interest

    @property
    def total_length(self) -> float:
        return self._path.total_length

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def node_for_distance_left(self, distance_left: float) -> NavigationInstruction:
        """
        Instruction for a traveller with the given distance left to travel.

        Picks the instruction starting closest to, but not before, that
        point. When none qualifies the instruction whose start is nearest
        is returned instead.
        """
        # TODO Binary search; instructions are always sorted by distance left.
        eligible = [i for i in self._instructions if i.distance_left <= distance_left]
        if eligible:
            return min(eligible, key=lambda i: distance_left - i.distance_left)

        logger.debug(
            f"No instruction starts within {distance_left:.2f} m of the destination; "
            f"using the closest one."
        )
        return min(self._instructions, key=lambda i: abs(distance_left - i.distance_left))

    def instruction_for_distance_left(self, distance_left: float) -> str:
        """
        Text of the actual instruction at the given distance to finish.

        Args:
            distance_left: Total distance left till the end of the path.

        Returns:
            Rendered instruction text.
        """
        node = self.node_for_distance_left(distance_left)
        return node.render_at_distance(distance_left, self.config)

    def node_for_position(self, position: PointLike) -> NavigationInstruction:
        """Instruction whose anchor is closest to position."""
        target = Waypoint.of(position).as_array()
        return min(
            self._instructions,
            key=lambda i: squared_distance(target, i.anchor.as_array()),
        )

    def instruction_for_position(self, position: PointLike) -> str:
        """
        Text of the actual instruction at a point near the path.

        Args:
            position: Current position close to the path.

        Returns:
            Rendered instruction text.
        """
        node = self.node_for_position(position)
        return node.render_at_position(position, self.config)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def describe(self) -> str:
        lines = [
            f"Total distance to travel: {self.total_length:.2f} meters",
            "Navigation instructions:",
        ]
        for instruction in self._instructions:
            text = instruction.render_at_distance(instruction.distance_left, self.config)
            lines.append(f"{instruction.distance_left:.2f} m — {text}")
        return "\n".join(lines)

    def log(self, level: int = logging.INFO) -> None:
        logger.log(level, self.describe())

    def to_dict(self) -> dict:
        return {
            "total_length": self.total_length,
            "instruction_count": len(self._instructions),
            "path": [p.to_dict() for p in self._path],
            "instructions": [i.to_dict() for i in self._instructions],
        }
