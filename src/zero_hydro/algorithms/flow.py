"""
Flow intensity proxy.

A soil-saturation accumulator stands in for storm flow: it drains with a
temperature-sensitive daily loss coefficient (converted to an hourly
retention) and is refilled by precipitation. Intensity is the saturating
ratio soil / (soil + 25).
"""

import math
from typing import Optional

from ..core import constants
from ..core.exceptions import NumericDivergence
from ..models import FlowTrend


class FlowModel:
    """Stateless helpers for the soil-saturation flow proxy."""

    @staticmethod
    def daily_loss(air_temperature: float) -> float:
        """
        Get daily loss coefficient of the accumulator.

        Warmer air drains the soil faster (evapotranspiration).

        Args:
            air_temperature: Air temperature (°C)

        Returns:
            Daily loss fraction in [0.05, 0.35]
        """
        k = constants.SOIL_DECAY_BASE + constants.SOIL_DECAY_TEMP_COEF * air_temperature
        return max(constants.SOIL_DECAY_MIN, min(constants.SOIL_DECAY_MAX, k))

    @staticmethod
    def step(soil_saturation: float, precipitation: float, air_temperature: float) -> float:
        """
        Advance the accumulator by one hour.

        Args:
            soil_saturation: Current accumulator value (mm-equivalent)
            precipitation: Rain over the hour (mm)
            air_temperature: Air temperature (°C)

        Returns:
            Next accumulator value
        """
        retention = (1 - FlowModel.daily_loss(air_temperature)) ** (1 / 24)
        updated = soil_saturation * retention + max(0.0, precipitation)

        if not math.isfinite(updated):
            raise NumericDivergence(f"Soil saturation diverged: {updated}")

        return updated

    @staticmethod
    def intensity(soil_saturation: float) -> float:
        """Map the accumulator to a flow intensity in [0, 1)."""
        return soil_saturation / (soil_saturation + constants.SOIL_HALF_SATURATION)

    @staticmethod
    def trend(
        intensity: float,
        previous_intensity: Optional[float],
        dead_band: float = constants.FLOW_TREND_DEAD_BAND
    ) -> FlowTrend:
        """
        Classify the hour-over-hour change in flow intensity.

        Args:
            intensity: Current flow intensity
            previous_intensity: Intensity one hour earlier (None on first step)
            dead_band: Changes within +/- dead_band are stable

        Returns:
            FlowTrend
        """
        if previous_intensity is None:
            return FlowTrend.STABLE
        derivative = intensity - previous_intensity
        if derivative > dead_band:
            return FlowTrend.RISING
        if derivative < -dead_band:
            return FlowTrend.FALLING
        return FlowTrend.STABLE
