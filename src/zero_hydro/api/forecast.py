"""
Hourly forecast operations for the Open-Meteo API.

Handles retrieval of past and forecast hourly weather for a coordinate.
"""

import logging
import math
from typing import Any, Dict, List

import requests  # type: ignore

from ..core.exceptions import UpstreamDataUnavailable
from ..models import WeatherSample
from .helpers import HOURLY_FIELDS, parse_hourly_payload


class ForecastAPI:
    """Forecast-related API operations."""

    # Provided by the combined client; get() comes from APIClient
    logger: logging.Logger

    def fetch_hourly(
        self,
        latitude: float,
        longitude: float,
        past_hours: int = 0,
        forecast_days: int = 4
    ) -> List[WeatherSample]:
        """
        Fetch hourly weather around the current time.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            past_hours: History to include before now (rounded up to days)
            forecast_days: Forecast horizon in days

        Returns:
            Weather samples ordered by time, timestamps aware in UTC

        Raises:
            UpstreamDataUnavailable: On request failure or unusable payload
        """
        past_days = int(math.ceil(past_hours / 24)) if past_hours > 0 else 0
        params: Dict[str, Any] = {
            "latitude": latitude,
            "longitude": longitude,
            "hourly": ",".join(HOURLY_FIELDS.keys()),
            "past_days": past_days,
            "forecast_days": forecast_days,
            "timezone": "GMT",
        }

        self.logger.info(
            f"Fetching hourly weather for ({latitude}, {longitude}): "
            f"past_days={past_days}, forecast_days={forecast_days}"
        )

        try:
            payload = self.get("/v1/forecast", params=params)
        except requests.exceptions.RequestException as e:
            raise UpstreamDataUnavailable(f"Weather request failed: {e}") from e
        except ValueError as e:
            raise UpstreamDataUnavailable(f"Weather response is not JSON: {e}") from e

        samples = parse_hourly_payload(payload)
        self.logger.info(f"Retrieved {len(samples)} hourly samples")
        return samples
