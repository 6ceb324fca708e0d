"""
Profile validation module.

Validates water body profiles before a simulation run starts.
"""

import logging
import math
from typing import List, Optional, Tuple

from ..core.exceptions import InvalidProfile
from ..models import WaterBodyProfile, BasinType, DepthCategory, LandUse, Species


class ProfileValidator:
    """Validate water body morphology."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize profile validator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_profile(self, profile: WaterBodyProfile) -> Tuple[bool, List[str]]:
        """
        Validate that a profile is complete and self-consistent.

        Args:
            profile: Water body profile

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        if not isinstance(profile.basin, BasinType):
            errors.append(f"Invalid basin: {profile.basin!r}")
        if not isinstance(profile.depth_category, DepthCategory):
            errors.append(f"Invalid depth_category: {profile.depth_category!r}")
        if not isinstance(profile.land_use, LandUse):
            errors.append(f"Invalid land_use: {profile.land_use!r}")

        if profile.mean_depth is not None:
            if not _is_positive(profile.mean_depth):
                errors.append(f"Invalid mean_depth: {profile.mean_depth} (must be > 0)")
            elif isinstance(profile.depth_category, DepthCategory):
                low, high = profile.depth_category.depth_range
                if not (low <= profile.mean_depth <= high):
                    errors.append(
                        f"mean_depth {profile.mean_depth} m is inconsistent with "
                        f"depth_category '{profile.depth_category.value}' ({low}-{high} m)"
                    )

        if not _is_positive(profile.surface_area):
            errors.append(f"Invalid surface_area: {profile.surface_area} (must be > 0)")

        if not (_is_positive(profile.shape_factor) and profile.shape_factor >= 1):
            errors.append(f"Invalid shape_factor: {profile.shape_factor} (must be >= 1)")

        if not profile.target_species:
            errors.append("target_species must not be empty")
        else:
            unknown = [s for s in profile.target_species if not isinstance(s, Species)]
            if unknown:
                errors.append(f"Unknown target species: {unknown}")

        is_valid = len(errors) == 0
        return is_valid, errors

    def ensure_valid(self, profile: WaterBodyProfile) -> WaterBodyProfile:
        """
        Validate a profile and raise on failure.

        Args:
            profile: Water body profile

        Returns:
            The same profile

        Raises:
            InvalidProfile: If any check fails
        """
        is_valid, errors = self.validate_profile(profile)
        if not is_valid:
            self.logger.error(f"Invalid profile: {errors}")
            raise InvalidProfile("; ".join(errors))
        return profile


def _is_positive(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value > 0
    )
