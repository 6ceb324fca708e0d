"""
Weather sample sanitization.

The single ingestion boundary of the simulation driver: malformed hourly
fields are replaced by documented defaults so that one bad hour does not
invalidate a long convergence run. Models downstream assume clean input.
"""

import logging
import math
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..core import constants
from ..core.date_utils import DateUtils
from ..core.exceptions import MalformedSample, UpstreamDataUnavailable
from ..models import WeatherSample

# field -> (default, min, max)
FIELD_RULES: Dict[str, Tuple[Any, float, float]] = {
    "air_temperature": (constants.DEFAULT_AIR_TEMPERATURE, -60.0, 60.0),
    "pressure": (constants.DEFAULT_PRESSURE, 800.0, 1100.0),
    "wind_speed": (constants.DEFAULT_WIND_SPEED, 0.0, 300.0),
    "wind_direction": (constants.DEFAULT_WIND_DIRECTION, 0.0, 360.0),
    "precipitation": (constants.DEFAULT_PRECIPITATION, 0.0, 500.0),
    "cloud_cover": (constants.DEFAULT_CLOUD_COVER, 0.0, 100.0),
    "weather_code": (constants.DEFAULT_WEATHER_CODE, 0.0, 99.0),
}


class SampleSanitizer:
    """Validate weather series and substitute defaults for malformed fields."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize sanitizer.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def check_field(sample: WeatherSample, field: str) -> Any:
        """
        Check one field of a sample.

        Args:
            sample: Raw weather sample
            field: Field name from FIELD_RULES

        Returns:
            The field value as a number

        Raises:
            MalformedSample: If the value is missing, not numeric, not finite,
                             or outside its plausible range
        """
        value = getattr(sample, field)
        _, low, high = FIELD_RULES[field]

        if value is None or isinstance(value, bool):
            raise MalformedSample(field, sample.timestamp, value)
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise MalformedSample(field, sample.timestamp, value)
        if not math.isfinite(number) or not (low <= number <= high):
            raise MalformedSample(field, sample.timestamp, value)

        if field == "weather_code":
            return int(number)
        return number

    def sanitize_sample(self, sample: WeatherSample) -> Tuple[WeatherSample, int]:
        """
        Sanitize one sample.

        Args:
            sample: Raw weather sample

        Returns:
            Tuple of (clean sample, number of substituted fields)
        """
        values: Dict[str, Any] = {}
        substituted = 0

        for field, (default, _, _) in FIELD_RULES.items():
            try:
                values[field] = self.check_field(sample, field)
            except MalformedSample as e:
                self.logger.warning(f"{e}; using default {default}")
                values[field] = default
                substituted += 1

        return replace(sample, **values), substituted

    def check_series(self, samples: Sequence[WeatherSample]) -> None:
        """
        Check that a series is usable as a whole.

        Aware timestamps are ordered by instant. Naive timestamps are local
        wall-clock time and are ordered as written, so the spring-forward gap
        is tolerated; the repeated autumn hour cannot be told apart and is
        rejected. Series fetched in UTC have neither problem.

        Args:
            samples: Raw weather samples

        Raises:
            UpstreamDataUnavailable: If the series is empty, has a missing
                                     timestamp, mixes naive and aware
                                     timestamps, or is not strictly increasing
        """
        if not samples:
            raise UpstreamDataUnavailable("Weather series is empty")

        previous = None
        naive = None
        for index, sample in enumerate(samples):
            if sample.timestamp is None:
                raise UpstreamDataUnavailable(f"Sample {index} has no timestamp")

            is_naive = sample.timestamp.tzinfo is None
            if naive is None:
                naive = is_naive
            elif naive != is_naive:
                raise UpstreamDataUnavailable(
                    f"Weather series mixes naive and aware timestamps at index {index}"
                )

            current = sample.timestamp if is_naive else DateUtils.to_utc(sample.timestamp)
            if previous is not None and current <= previous:
                raise UpstreamDataUnavailable(
                    f"Weather series is not strictly increasing at index {index} "
                    f"({current.isoformat()} after {previous.isoformat()})"
                )
            previous = current

    def sanitize(self, samples: Sequence[WeatherSample]) -> Tuple[List[WeatherSample], int]:
        """
        Validate a series and sanitize every sample.

        Args:
            samples: Raw weather samples, ordered by time

        Returns:
            Tuple of (clean samples, total substituted fields)
        """
        self.check_series(samples)

        clean = []
        total = 0
        for sample in samples:
            sanitized, substituted = self.sanitize_sample(sample)
            clean.append(sanitized)
            total += substituted

        if total:
            self.logger.warning(
                f"Substituted defaults for {total} malformed field(s) "
                f"across {len(samples)} samples"
            )

        return clean, total
