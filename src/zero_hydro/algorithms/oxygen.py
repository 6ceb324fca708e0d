"""
Dissolved oxygen saturation model.

Saturation concentration at 1 atm is a cubic fit in water temperature,
scaled linearly by surface pressure. Calibrated for 0-30 °C.
"""

import math

from ..core import constants


class OxygenModel:
    """Stateless dissolved oxygen calculations."""

    @staticmethod
    def saturation_at_one_atm(water_temperature: float) -> float:
        """
        Calculate oxygen saturation (mg/L) at standard pressure.

        Args:
            water_temperature: Water temperature (°C)

        Returns:
            Saturation concentration (mg/L)
        """
        t = water_temperature
        return (
            constants.DO_COEF_0
            - constants.DO_COEF_1 * t
            + constants.DO_COEF_2 * t ** 2
            - constants.DO_COEF_3 * t ** 3
        )

    @staticmethod
    def reaeration_bonus(water_temperature: float, wind_speed: float) -> float:
        """
        Calculate wind-driven re-aeration bonus (Banks-Herrera).

        Only applies to warm water (> 18 °C) under a breeze (> 2 m/s).

        Args:
            water_temperature: Water temperature (°C)
            wind_speed: Wind speed (km/h)

        Returns:
            Additional dissolved oxygen (mg/L)
        """
        u = wind_speed / 3.6
        if water_temperature <= 18 or u <= 2:
            return 0.0
        k_l = 0.728 * math.sqrt(u) - 0.317 * u + 0.0372 * u ** 2
        return max(0.0, k_l * 0.5)

    @staticmethod
    def dissolved_oxygen(
        water_temperature: float,
        pressure: float,
        wind_speed: float = 0.0,
        wind_reaeration: bool = False
    ) -> float:
        """
        Calculate dissolved oxygen saturation.

        Args:
            water_temperature: Water temperature (°C)
            pressure: Surface pressure (hPa)
            wind_speed: Wind speed (km/h), used only with wind_reaeration
            wind_reaeration: Add the Banks-Herrera wind bonus

        Returns:
            Dissolved oxygen (mg/L), rounded to 0.01
        """
        saturation = OxygenModel.saturation_at_one_atm(water_temperature)
        saturation *= pressure / constants.STANDARD_PRESSURE

        if wind_reaeration:
            saturation += OxygenModel.reaeration_bonus(water_temperature, wind_speed)

        return round(saturation, 2)

    @staticmethod
    def oxygen_factor(dissolved_oxygen: float) -> float:
        """
        Map dissolved oxygen to an activity multiplier.

        Args:
            dissolved_oxygen: Dissolved oxygen (mg/L)

        Returns:
            1.0 at >= 6 mg/L, 0.1 at <= 3 mg/L, linear in between
        """
        if dissolved_oxygen >= 6:
            return 1.0
        if dissolved_oxygen <= 3:
            return 0.1
        return 0.1 + (dissolved_oxygen - 3) * 0.3
