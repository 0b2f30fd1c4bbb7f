# instruction.py
# A single navigation instruction and its live text rendering.

from dataclasses import dataclass, replace
from typing import Optional

from .catalog import InstructionKind
from .geo_utils import distance
from .models import PointLike, Waypoint
from .nav_config import NavConfig


@dataclass(frozen=True)
class NavigationInstruction:
    """
    One instruction valid along a stretch of the path.

    Attributes:
        kind:          Template to show.
        distance_left: Distance to the destination where the instruction starts to apply.
        distance_span: Length of path the instruction covers.
        anchor:        Key point the instruction was derived at.
        door_count:    Number of doors for DOORS_STRAIGHT.
    """
    kind: InstructionKind
    distance_left: float
    distance_span: float
    anchor: Waypoint
    door_count: Optional[int] = None

    @property
    def has_placeholder(self) -> bool:
        return self.kind.has_placeholder

    @property
    def text(self) -> str:
        """Text as seen at the very start of the instruction."""
        return self.render_at_distance()

    # ------------------------------------------------------------------
    # Live text
    # ------------------------------------------------------------------

    def render_at_distance(
        self,
        distance_left_now: Optional[float] = None,
        config: Optional[NavConfig] = None,
    ) -> str:
        """
        Instruction text for a traveller with the given distance left.

        Args:
            distance_left_now: Remaining distance to the destination; defaults
                               to the start of this instruction.
            config:            NavConfig for number formatting.

        Returns:
            Instruction text; the number may be negative past the span.
        """
        config = config or NavConfig()
        if not self.has_placeholder:
            return self._static_text()

        if distance_left_now is None:
            distance_left_now = self.distance_left
        remainder = self.distance_span - (self.distance_left - distance_left_now)
        return self.kind.render(remainder, decimals=config.distance_decimals)

    def render_at_position(
        self,
        position: PointLike,
        config: Optional[NavConfig] = None,
    ) -> str:
        """
        Instruction text for a traveller standing at position.

        The countdown runs to the start of the transition window before the
        anchor rather than to the anchor itself.
        """
        config = config or NavConfig()
        if not self.has_placeholder:
            return self._static_text()

        to_anchor = distance(Waypoint.of(position).as_array(), self.anchor.as_array())
        remainder = to_anchor - config.actual_transition_distance(self.distance_span)
        return self.kind.render(remainder, decimals=config.distance_decimals)

    def _static_text(self) -> str:
        return self.kind.render(count=self.door_count)

    # ------------------------------------------------------------------
    # Merging
    # ------------------------------------------------------------------

    def absorb(
        self,
        earlier: "NavigationInstruction",
        config: Optional[NavConfig] = None,
    ) -> "NavigationInstruction":
        """
        New instruction covering the earlier span followed by this one.

        The kind stays this instruction's, re-sized for the combined span;
        the start (distance left and anchor) moves back to the earlier one.
        """
        span = self.distance_span + earlier.distance_span
        return replace(
            self,
            kind=self.kind.resized(span, config),
            distance_left=earlier.distance_left,
            distance_span=span,
            anchor=earlier.anchor,
        )

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.name,
            "text": self.text,
            "distance_left": self.distance_left,
            "distance_span": self.distance_span,
            "anchor": self.anchor.to_dict(),
            "door_count": self.door_count,
        }

    @staticmethod
    def from_dict(d: dict) -> "NavigationInstruction":
        return NavigationInstruction(
            kind=InstructionKind[d["kind"]],
            distance_left=float(d["distance_left"]),
            distance_span=float(d["distance_span"]),
            anchor=Waypoint.from_dict(d["anchor"]),
            door_count=d.get("door_count"),
        )
