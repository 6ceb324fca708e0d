"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest
import json

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from src.zero_hydro.models import WeatherSample  # noqa: E402


def make_samples(start, hours, **fields):
    """
    Build a constant hourly weather series.

    Fields default to mild, dry, calm weather; any field can be overridden
    with a constant or a callable taking the hour index.
    """
    defaults = {
        "air_temperature": 15.0,
        "pressure": 1013.25,
        "wind_speed": 0.0,
        "wind_direction": 180.0,
        "precipitation": 0.0,
        "cloud_cover": 50.0,
        "weather_code": 1,
    }
    defaults.update(fields)

    samples = []
    for i in range(hours):
        values = {
            key: (value(i) if callable(value) else value)
            for key, value in defaults.items()
        }
        samples.append(WeatherSample(timestamp=start + timedelta(hours=i), **values))
    return samples


@pytest.fixture
def sample_factory():
    """Factory building constant hourly weather series."""
    return make_samples


@pytest.fixture
def june_start():
    """Naive local midnight well away from DST transitions."""
    return datetime(2024, 6, 10, 0, 0)


@pytest.fixture(scope="session")
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def hourly_payload(fixtures_dir):
    """Load a sample hourly weather payload from fixtures."""
    data_file = fixtures_dir / "open_meteo_hourly.json"
    with open(data_file) as f:
        return json.load(f)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring API access"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
