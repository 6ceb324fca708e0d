"""
Air-to-water thermal relaxation model.

The water temperature relaxes toward an equilibrium temperature built from the
air temperature, a catchment land-use offset and a seasonal solar correction:

    T_eq = T_air + offset + mu * sin(2*pi*(doy - phi) / 365) * 10
    T_w  = T_w + (T_eq - T_w) / delta

with one Euler step per hourly sample. The inertia delta is fixed for rivers
(fast turnover) and grows with depth for closed water bodies.
"""

import math
from typing import Iterable, Optional

from ..core import constants
from ..core.date_utils import DateUtils
from ..core.exceptions import NumericDivergence
from ..models import WaterBodyProfile, WeatherSample, LandUse

LAND_USE_OFFSET = {
    LandUse.URBAN: 1.2,
    LandUse.AGRICULTURAL: 0.5,
    LandUse.GRASSLAND: 0.3,
    LandUse.FORESTED: 0.0,
}


class ThermalModel:
    """
    Single-state thermal model for one water body.

    Stepping over [a, b] then [c] gives the same result as stepping over
    [a, b, c]: run() is a plain fold of step().
    """

    def __init__(
        self,
        profile: WaterBodyProfile,
        timezone: str = constants.DEFAULT_TIMEZONE
    ):
        """
        Initialize thermal model.

        Args:
            profile: Water body profile (basin, land use, depth)
            timezone: Timezone used to derive the local day of year
        """
        self.profile = profile
        self.timezone = timezone
        self.depth = profile.effective_depth
        self.offset = LAND_USE_OFFSET[profile.land_use]
        self.delta = self.time_constant(profile)
        self.mu = constants.THERMAL_MU_BASE + 1 / (5 * self.depth)

    @staticmethod
    def time_constant(profile: WaterBodyProfile) -> float:
        """
        Get relaxation time constant (in steps) for a profile.

        Args:
            profile: Water body profile

        Returns:
            12 for rivers, 0.207 * depth^1.35 for closed water bodies
        """
        if profile.is_flowing:
            return constants.RIVER_TIME_CONSTANT
        return constants.CLOSED_WATER_COEF * math.pow(
            profile.effective_depth, constants.CLOSED_WATER_EXPONENT
        )

    @staticmethod
    def seed_temperature(sample: WeatherSample, timezone: str = constants.DEFAULT_TIMEZONE) -> float:
        """
        Get the climatological water temperature for the month of a sample.

        Args:
            sample: First sample of the series
            timezone: Timezone used to derive the local month

        Returns:
            Monthly baseline water temperature (°C)
        """
        month = DateUtils.to_local(sample.timestamp, timezone).month
        return constants.MONTHLY_WATER_TEMP_BASELINE[month - 1]

    def solar_correction(self, day_of_year: int) -> float:
        """Seasonal correction (°C) added to the equilibrium temperature."""
        return self.mu * math.sin(
            2 * math.pi * (day_of_year - constants.SOLAR_PHASE_DAY) / 365
        ) * constants.SOLAR_CORRECTION_SCALE

    def equilibrium_temperature(self, sample: WeatherSample) -> float:
        """
        Calculate the equilibrium water temperature for one sample.

        Args:
            sample: Sanitized weather sample (air temperature present)

        Returns:
            Equilibrium temperature (°C)
        """
        day_of_year = DateUtils.day_of_year(sample.timestamp, self.timezone)
        return sample.air_temperature + self.offset + self.solar_correction(day_of_year)

    def step(self, sample: WeatherSample, water_temperature: Optional[float]) -> float:
        """
        Advance the water temperature by one sample.

        Args:
            sample: Sanitized weather sample
            water_temperature: Current water temperature, None to seed from
                               the monthly baseline

        Returns:
            Next water temperature, clamped to [3, 26.5] °C

        Raises:
            NumericDivergence: If the update produced NaN or infinity
        """
        if water_temperature is None:
            water_temperature = self.seed_temperature(sample, self.timezone)

        equilibrium = self.equilibrium_temperature(sample)
        updated = water_temperature + (equilibrium - water_temperature) / self.delta

        if not math.isfinite(updated):
            raise NumericDivergence(
                f"Water temperature diverged at {sample.timestamp}: {updated} "
                f"(previous={water_temperature}, equilibrium={equilibrium})"
            )

        return max(constants.WATER_TEMP_MIN, min(constants.WATER_TEMP_MAX, updated))

    def run(
        self,
        samples: Iterable[WeatherSample],
        water_temperature: Optional[float] = None
    ) -> Optional[float]:
        """
        Step over an ordered sequence of samples.

        Args:
            samples: Ordered, sanitized weather samples
            water_temperature: Starting water temperature (None to seed)

        Returns:
            Final water temperature, or the starting value for an empty sequence
        """
        for sample in samples:
            water_temperature = self.step(sample, water_temperature)
        return water_temperature
