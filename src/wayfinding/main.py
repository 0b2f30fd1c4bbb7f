# main.py
# Entry point: simulates a traveller walking a planned path and prints the
# instruction shown at every position fix.
# In production, feed real positions into nav.update() instead of walk().

import logging
from typing import Iterator, List

import numpy as np

from .models import Path, RouteStatus, Waypoint
from .nav_config import NavConfig
from .navigator import NavigationSystem

# ------------------------------------------------------------------
# Simulated path: north, left, short hop, stairs up, right, arrival
# ------------------------------------------------------------------
SAMPLE_PATH: List[Waypoint] = [
    Waypoint(0.0, 0.0, 0.0),     # Start
    Waypoint(0.0, 0.0, 8.0),     # turn left
    Waypoint(-6.0, 0.0, 8.0),    # turn right
    Waypoint(-6.0, 0.0, 9.0),    # stairs begin
    Waypoint(-6.0, 1.5, 11.0),   # upper floor
    Waypoint(-6.0, 1.5, 15.0),   # turn right
    Waypoint(-2.0, 1.5, 15.0),
    Waypoint(1.0, 1.5, 15.0),    # Destination
]


def walk(path: Path, step_m: float = 1.0) -> Iterator[Waypoint]:
    """Positions every step_m metres along the path, ending at the destination."""
    yield path.origin
    for start, end, length in zip(path, path.points[1:], path.segment_lengths):
        a, b = start.as_array(), end.as_array()
        travelled = step_m
        while travelled < length:
            yield Waypoint.of(a + (b - a) * (travelled / length))
            travelled += step_m
        yield end


def main(log_dir: str = "logs") -> int:
    # Logging setup: configure once here, all modules inherit
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    # Config: tweak thresholds or paths here, not inside the modules
    config = NavConfig(
        arrival_threshold_m=0.5,
        off_route_threshold_m=3.0,
        log_dir=log_dir,
    )

    nav = NavigationSystem(config=config)
    path = Path(SAMPLE_PATH)
    success, msg = nav.start_navigation(path)
    if not success:
        print(f"[Main] Could not start navigation: {msg}")
        return 1

    print(nav.instructions.describe())
    print("\n--- Position Loop Active ---")

    for position in walk(path):
        result = nav.update(position)
        coords = np.round(position.as_array(), 1).tolist()
        print(f"  {coords} → [{result.status.name}] {result.message}")

        if result.status == RouteStatus.OFF_ROUTE:
            print("  ⚠  Off-route detected — request a new path and restart navigation.")

        elif result.status == RouteStatus.FINISHED:
            print("  ✓  Destination reached. Navigation ended.")
            break

    print("\n--- Session complete ---")
    print(f"    Log files written to: {config.log_dir}/")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
