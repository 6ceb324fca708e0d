"""
Wind wave height model.

Simplified fetch-limited wave growth:

    fetch = sqrt(area) * shape_factor
    Hs    = 0.0016 * U * sqrt(fetch / g) * 100 * 0.8     (cm, U in m/s)

Below 5 km/h a small residual chop is returned instead of zero.
"""

import math

from ..core import constants


class WaveModel:
    """Stateless significant wave height calculations."""

    @staticmethod
    def effective_fetch(surface_area: float, shape_factor: float) -> float:
        """
        Calculate effective wind fetch (m).

        Args:
            surface_area: Water surface area (m²)
            shape_factor: Elongation factor (>= 1)

        Returns:
            Fetch length (m)
        """
        return math.sqrt(surface_area) * shape_factor

    @staticmethod
    def wave_height(
        wind_speed: float,
        surface_area: float = constants.DEFAULT_SURFACE_AREA,
        shape_factor: float = constants.DEFAULT_SHAPE_FACTOR
    ) -> float:
        """
        Calculate significant wave height.

        Args:
            wind_speed: Wind speed at 10m (km/h)
            surface_area: Water surface area (m²)
            shape_factor: Elongation factor (>= 1)

        Returns:
            Wave height (cm), rounded to 0.1
        """
        if wind_speed < constants.WAVE_WIND_FLOOR:
            return constants.WAVE_RESIDUAL_CHOP

        fetch = WaveModel.effective_fetch(surface_area, shape_factor)
        wind_ms = wind_speed / 3.6
        height = (
            constants.WAVE_GROWTH_COEF
            * wind_ms
            * math.sqrt(fetch / constants.GRAVITY)
            * 100
            * constants.WAVE_EMPIRICAL_FACTOR
        )
        return round(height, 1)
