"""
Rain-driven turbidity model.

Turbidity decays toward a land-use baseline and is pushed up by rain:

    NTU = base + (NTU - base) * (1 - k)
    NTU += precip * alpha      (when precip > 0.1 mm)

k is calibrated as a daily sedimentation rate but is applied once per hourly
record; downstream score curves are tuned on that cadence.
"""

import math
from typing import Iterable, Optional

from ..core import constants
from ..core.exceptions import NumericDivergence
from ..models import LandUse

TURBIDITY_BASELINE = {
    LandUse.URBAN: 12.0,
    LandUse.AGRICULTURAL: 8.5,
    LandUse.GRASSLAND: 6.0,
    LandUse.FORESTED: 4.5,
}


class TurbidityModel:
    """Single-state turbidity model for one catchment."""

    def __init__(self, land_use: LandUse):
        """
        Initialize turbidity model.

        Args:
            land_use: Catchment land use, selects the baseline NTU
        """
        self.land_use = land_use
        self.baseline = TURBIDITY_BASELINE[land_use]

    def step(self, precipitation: float, turbidity: Optional[float]) -> float:
        """
        Advance turbidity by one record.

        Args:
            precipitation: Rain over the record (mm)
            turbidity: Current turbidity (NTU), None to start at baseline

        Returns:
            Next turbidity, clamped to [0, 100] NTU and rounded to 0.1

        Raises:
            NumericDivergence: If the update produced NaN or infinity
        """
        if turbidity is None:
            turbidity = self.baseline

        updated = self.baseline + (turbidity - self.baseline) * (
            1 - constants.TURBIDITY_DAILY_DECAY
        )
        if precipitation > constants.RAIN_THRESHOLD:
            updated += precipitation * constants.RAIN_TURBIDITY_COEF

        if not math.isfinite(updated):
            raise NumericDivergence(f"Turbidity diverged: {updated} (previous={turbidity})")

        clamped = max(constants.TURBIDITY_MIN, min(constants.TURBIDITY_MAX, updated))
        return round(clamped, 1)

    def run(
        self,
        precipitations: Iterable[float],
        turbidity: Optional[float] = None
    ) -> float:
        """
        Step over an ordered sequence of precipitation records.

        Args:
            precipitations: Rain per record (mm)
            turbidity: Starting turbidity (None for baseline)

        Returns:
            Final turbidity (NTU)
        """
        for precipitation in precipitations:
            turbidity = self.step(precipitation, turbidity)
        return self.baseline if turbidity is None else turbidity

    @staticmethod
    def turbidity_index(turbidity: float) -> float:
        """
        Normalize turbidity to a 0-1 index used by visibility curves.

        Args:
            turbidity: Turbidity (NTU)

        Returns:
            min(1, NTU / 80)
        """
        return min(1.0, max(0.0, turbidity / constants.TURBIDITY_INDEX_SCALE))
