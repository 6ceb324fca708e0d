"""
Weather data models.

Contains the hourly weather sample consumed by the simulation driver.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class WeatherSample:
    """One hour of atmospheric observation or forecast."""

    timestamp: datetime
    air_temperature: Optional[float] = None  # °C
    pressure: Optional[float] = None  # hPa (surface pressure)
    wind_speed: Optional[float] = None  # km/h at 10m
    wind_direction: Optional[float] = None  # degrees
    precipitation: Optional[float] = None  # mm over the hour
    cloud_cover: Optional[float] = None  # %
    weather_code: Optional[int] = None  # WMO weather code
