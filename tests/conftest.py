import pytest

from wayfinding import NavConfig, Path, Waypoint
from wayfinding.main import SAMPLE_PATH


@pytest.fixture
def corner_path() -> Path:
    """10 m north, left turn, 5 m west, 1 m to the destination."""
    return Path([
        Waypoint(0.0, 0.0, 0.0),
        Waypoint(0.0, 0.0, 10.0),
        Waypoint(-5.0, 0.0, 10.0),
        Waypoint(-6.0, 0.0, 10.0),
    ])


@pytest.fixture
def sample_path() -> Path:
    return Path(SAMPLE_PATH)


@pytest.fixture
def tmp_config(tmp_path) -> NavConfig:
    return NavConfig(
        arrival_threshold_m=0.5,
        off_route_threshold_m=3.0,
        log_dir=str(tmp_path / "logs"),
    )
