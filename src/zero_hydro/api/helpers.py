"""
Helper functions for API operations.

Provides parsing of the provider's columnar hourly payload.
"""

from datetime import datetime
from typing import Any, Dict, List

import pytz

from ..core.exceptions import UpstreamDataUnavailable
from ..models import WeatherSample

# Provider hourly variable -> WeatherSample field
HOURLY_FIELDS = {
    "temperature_2m": "air_temperature",
    "surface_pressure": "pressure",
    "wind_speed_10m": "wind_speed",
    "wind_direction_10m": "wind_direction",
    "precipitation": "precipitation",
    "cloud_cover": "cloud_cover",
    "weather_code": "weather_code",
}


def parse_hourly_payload(payload: Dict[str, Any]) -> List[WeatherSample]:
    """
    Convert a columnar hourly payload into weather samples.

    Expected format:
    {
        "hourly": {
            "time": ["2024-06-01T00:00", ...],
            "temperature_2m": [14.2, ...],
            ...
        }
    }

    Missing variables or null cells are kept as None so the sanitizer can
    substitute defaults per hour. Times are requested in GMT, so naive
    values are read as UTC; wall-clock local time repeats an hour in
    autumn and cannot order such a series.

    Args:
        payload: Decoded JSON response

    Returns:
        List of weather samples (timestamps aware in UTC)

    Raises:
        UpstreamDataUnavailable: If the payload has no usable time axis
    """
    if not isinstance(payload, dict):
        raise UpstreamDataUnavailable("Weather payload is not a JSON object")

    hourly = payload.get("hourly")
    if not isinstance(hourly, dict):
        raise UpstreamDataUnavailable("Weather payload has no 'hourly' block")

    times = hourly.get("time")
    if not isinstance(times, list) or not times:
        raise UpstreamDataUnavailable("Weather payload has no hourly time axis")

    columns = {}
    for variable, field in HOURLY_FIELDS.items():
        values = hourly.get(variable)
        if isinstance(values, list) and len(values) == len(times):
            columns[field] = values
        else:
            columns[field] = [None] * len(times)

    samples = []
    for index, raw_time in enumerate(times):
        try:
            timestamp = datetime.fromisoformat(raw_time)
        except (TypeError, ValueError):
            raise UpstreamDataUnavailable(f"Invalid timestamp in weather payload: {raw_time!r}")
        if timestamp.tzinfo is None:
            timestamp = pytz.UTC.localize(timestamp)
        else:
            timestamp = timestamp.astimezone(pytz.UTC)

        samples.append(WeatherSample(
            timestamp=timestamp,
            **{field: values[index] for field, values in columns.items()}
        ))

    return samples
