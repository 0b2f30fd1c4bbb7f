# nav_config.py
# All tuneable constants in one place.
# Pass a NavConfig instance to every module that needs settings.
# All dimensions are in metres, all angles in degrees.

import os
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Instruction thresholds
# ---------------------------------------------------------------------------

MIN_STAIR_ELEVATION_M: float = 0.47        # 3 standard steps of 150 mm + epsilon
MIN_STAIRS_ANGLE_DEG: float = 26.565       # 1 m rise per 2 m of horizontal run
TURN_ANGLE_THRESHOLD_DEG: float = 27.0
BACKTURN_ANGLE_THRESHOLD_DEG: float = 144.0
SHOW_MORE_DETAILS_MIN_SPAN_M: float = 3.0  # longer spans get a distance in the text
TRANSITION_DISTANCE_M: float = 2.0         # next instruction starts to appear this far ahead
TRANSITION_RATIO: float = 0.5              # share of a short span used as transition window


# ---------------------------------------------------------------------------
# Main config
# ---------------------------------------------------------------------------

@dataclass
class NavConfig:
    # Classification
    min_stair_elevation_m: float = MIN_STAIR_ELEVATION_M
    min_stairs_angle_deg: float = MIN_STAIRS_ANGLE_DEG
    turn_angle_threshold_deg: float = TURN_ANGLE_THRESHOLD_DEG
    backturn_angle_threshold_deg: float = BACKTURN_ANGLE_THRESHOLD_DEG
    show_more_details_min_span_m: float = SHOW_MORE_DETAILS_MIN_SPAN_M
    degenerate_segment_epsilon_m: float = 1e-6   # shorter segments are collapsed

    # Live text
    transition_distance_m: float = TRANSITION_DISTANCE_M
    transition_ratio: float = TRANSITION_RATIO
    distance_decimals: int = 0

    # Progress tracking
    arrival_threshold_m: float = 1.0       # distance left to treat the route as finished
    off_route_threshold_m: float = 3.0     # lateral distance from the path → off-route
    track_by_position: bool = False        # pick instructions by position instead of distance left

    # Logging
    log_dir: str = "."                     # directory for saved JSON files
    instructions_filename: str = "active_instructions.json"
    session_filename: str = "nav_session.jsonl"

    @property
    def instructions_filepath(self) -> str:
        return os.path.join(self.log_dir, self.instructions_filename)

    @property
    def session_filepath(self) -> str:
        return os.path.join(self.log_dir, self.session_filename)

    def actual_transition_distance(self, span: float) -> float:
        """
        Distance before a key point at which the next instruction must start
        to appear for a span of the given length.
        """
        if span > self.transition_distance_m:
            return self.transition_distance_m
        return span * self.transition_ratio
