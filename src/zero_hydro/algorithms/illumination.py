"""
Illumination estimate module.

Derives a 0-1 light index from a monthly sunrise/sunset table, a sinusoidal
solar elevation between them and a quadratic cloud attenuation.
"""

import logging
import math
from datetime import datetime
from typing import Dict, Optional, Tuple

from ..core import constants
from ..core.date_utils import DateUtils

# (sunrise, sunset) local hours by month
DAYLIGHT_SCHEDULE: Dict[int, Tuple[float, float]] = {
    1: (8.5, 17.0), 2: (8.0, 18.0), 3: (7.0, 19.0), 4: (6.0, 20.5),
    5: (5.5, 21.5), 6: (5.5, 22.0), 7: (6.0, 21.5), 8: (6.5, 20.5),
    9: (7.5, 19.5), 10: (8.0, 18.5), 11: (8.0, 17.0), 12: (8.5, 16.5),
}


class IlluminationCalculator:
    """Light index for a timestamp, evaluated in the location's local time."""

    def __init__(
        self,
        timezone: str = constants.DEFAULT_TIMEZONE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize calculator.

        Args:
            timezone: Timezone used to derive local hour and month
            logger: Logger instance
        """
        self.timezone = timezone
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def solar_elevation(hour: float, month: int) -> float:
        """
        Calculate normalized solar elevation.

        Args:
            hour: Fractional local hour
            month: Month (1-12)

        Returns:
            sin(pi * (hour - rise) / (set - rise)) during daylight, 0 otherwise
        """
        rise, set_ = DAYLIGHT_SCHEDULE[month]
        if hour < rise or hour > set_:
            return 0.0
        return math.sin(math.pi * (hour - rise) / (set_ - rise))

    @staticmethod
    def cloud_factor(cloud_cover: float) -> float:
        """Quadratic cloud attenuation: 1 - 0.75 * (cloud/100)²."""
        return 1 - constants.CLOUD_ATTENUATION * (cloud_cover / 100) ** 2

    def illumination(self, timestamp: datetime, cloud_cover: float) -> float:
        """
        Calculate illumination for a timestamp.

        Args:
            timestamp: Sample timestamp (naive = local time)
            cloud_cover: Cloud cover (%)

        Returns:
            Illumination index in [0, 1]
        """
        local = DateUtils.to_local(timestamp, self.timezone)
        hour = DateUtils.local_hour(local, self.timezone)
        elevation = self.solar_elevation(hour, local.month)
        lux = max(0.0, elevation * self.cloud_factor(cloud_cover))

        self.logger.debug(
            f"Illumination at {local.isoformat()}: elevation={elevation:.3f}, "
            f"cloud={cloud_cover:.0f}%, lux={lux:.3f}"
        )
        return lux
