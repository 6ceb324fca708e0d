"""
Input processing for the Zero-Hydro simulation engine.

Provides weather series sanitization and profile validation.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ..models import WaterBodyProfile, WeatherSample
from .sanitizer import SampleSanitizer
from .validator import ProfileValidator


class InputProcessor:
    """
    Unified input processor combining sanitization and validation.

    This class provides a convenient interface to both ingestion checks.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize input processor.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.sanitizer = SampleSanitizer(logger)
        self.validator = ProfileValidator(logger)

    def prepare(
        self,
        profile: WaterBodyProfile,
        samples: Sequence[WeatherSample]
    ) -> Tuple[List[WeatherSample], int]:
        """
        Validate the profile, then sanitize the weather series.

        Args:
            profile: Water body profile
            samples: Raw weather samples

        Returns:
            Tuple of (clean samples, substituted field count)
        """
        self.validator.ensure_valid(profile)
        return self.sanitizer.sanitize(samples)


__all__ = [
    "SampleSanitizer",
    "ProfileValidator",
    "InputProcessor",
]
