# catalog.py
# Closed set of instruction kinds and their text templates.

from enum import Enum
from typing import Optional, Tuple

from .nav_config import NavConfig


class Placeholder(Enum):
    """What a template expects to be filled in with."""
    NONE      = 0
    REMAINDER = 1    # live distance, recomputed on every query
    COUNT     = 2    # fixed number of objects, e.g. doors


class Family(Enum):
    STRAIGHT    = "straight"
    TURN        = "turn"
    BACKTURN    = "backturn"
    STAIRS      = "stairs"
    DOOR        = "door"
    DESTINATION = "destination"


class InstructionKind(Enum):
    """
    Every instruction the traveller can be shown.

    Each member carries (template, placeholder, family). Templates with a
    REMAINDER placeholder use the ``{distance}`` and ``{unit}`` fields,
    COUNT templates use ``{count}``.
    """

    STRAIGHT_SHORT    = ("Go straight", Placeholder.NONE, Family.STRAIGHT)
    STRAIGHT_LONG     = ("Go straight for {distance} {unit}", Placeholder.REMAINDER, Family.STRAIGHT)
    TURN_LEFT         = ("Turn left", Placeholder.NONE, Family.TURN)
    TURN_RIGHT        = ("Turn right", Placeholder.NONE, Family.TURN)
    BACKTURN_LEFT     = ("Turn around left shoulder", Placeholder.NONE, Family.BACKTURN)
    BACKTURN_RIGHT    = ("Turn around right shoulder", Placeholder.NONE, Family.BACKTURN)
    STAIRS_DOWN       = ("Go downstairs", Placeholder.NONE, Family.STAIRS)
    STAIRS_UP         = ("Go upstairs", Placeholder.NONE, Family.STAIRS)
    DOOR_STRAIGHT     = ("Pass the door straight", Placeholder.NONE, Family.DOOR)
    DOORS_STRAIGHT    = ("Pass {count} doors straight", Placeholder.COUNT, Family.DOOR)
    DOOR_LEFT         = ("Pass the door to the left", Placeholder.NONE, Family.DOOR)
    DOOR_RIGHT        = ("Pass the door to the right", Placeholder.NONE, Family.DOOR)
    DESTINATION_SHORT = ("Destination ahead", Placeholder.NONE, Family.DESTINATION)
    DESTINATION_LONG  = ("Destination in {distance} {unit}", Placeholder.REMAINDER, Family.DESTINATION)

    def __init__(self, template: str, placeholder: Placeholder, family: Family) -> None:
        self.template = template
        self.placeholder = placeholder
        self.family = family

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def has_placeholder(self) -> bool:
        """True when the text carries a live distance."""
        return self.placeholder is Placeholder.REMAINDER

    @property
    def is_straight(self) -> bool:
        return self.family is Family.STRAIGHT

    @property
    def is_destination(self) -> bool:
        return self.family is Family.DESTINATION

    @property
    def mirrored(self) -> "InstructionKind":
        """Same manoeuvre on the other side; kinds without a side map to themselves."""
        return _MIRRORS.get(self, self)

    # ------------------------------------------------------------------
    # Kind selection by span length
    # ------------------------------------------------------------------

    @staticmethod
    def straight_for(span: float, config: Optional[NavConfig] = None) -> "InstructionKind":
        config = config or NavConfig()
        if span > config.show_more_details_min_span_m:
            return InstructionKind.STRAIGHT_LONG
        return InstructionKind.STRAIGHT_SHORT

    @staticmethod
    def destination_for(span: float, config: Optional[NavConfig] = None) -> "InstructionKind":
        config = config or NavConfig()
        if span > config.show_more_details_min_span_m:
            return InstructionKind.DESTINATION_LONG
        return InstructionKind.DESTINATION_SHORT

    def resized(self, span: float, config: Optional[NavConfig] = None) -> "InstructionKind":
        """Short/long variant of the same family for a new span length."""
        if self.is_straight:
            return InstructionKind.straight_for(span, config)
        if self.is_destination:
            return InstructionKind.destination_for(span, config)
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(
        self,
        remainder: Optional[float] = None,
        count: Optional[int] = None,
        decimals: int = 0,
    ) -> str:
        """
        Fill in the template.

        Args:
            remainder: Distance in metres for REMAINDER templates.
            count:     Number of objects for COUNT templates.
            decimals:  Digits after the decimal point for distances.

        Returns:
            Instruction text.
        """
        if self.placeholder is Placeholder.REMAINDER:
            if remainder is None:
                raise ValueError(f"{self.name} needs a distance to render.")
            value, unit = format_distance(remainder, decimals)
            return self.template.format(distance=value, unit=unit)
        if self.placeholder is Placeholder.COUNT:
            if count is None:
                raise ValueError(f"{self.name} needs a count to render.")
            return self.template.format(count=count)
        return self.template


_MIRRORS = {
    InstructionKind.TURN_LEFT: InstructionKind.TURN_RIGHT,
    InstructionKind.TURN_RIGHT: InstructionKind.TURN_LEFT,
    InstructionKind.BACKTURN_LEFT: InstructionKind.BACKTURN_RIGHT,
    InstructionKind.BACKTURN_RIGHT: InstructionKind.BACKTURN_LEFT,
    InstructionKind.DOOR_LEFT: InstructionKind.DOOR_RIGHT,
    InstructionKind.DOOR_RIGHT: InstructionKind.DOOR_LEFT,
}


def format_distance(metres: float, decimals: int = 0) -> Tuple[str, str]:
    """
    Round a distance for display.

    Returns:
        (number, unit) e.g. ("12", "meters") or ("1", "meter").
    """
    value = round(metres, decimals) + 0.0   # drops the sign of -0.0
    unit = "meter" if abs(value) == 1.0 else "meters"
    return f"{value:.{decimals}f}", unit
