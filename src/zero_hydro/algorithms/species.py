"""
Species response curves.

Every species is one SpeciesCurve entry: a set of weighted sub-scores (each
normalized to [0, 1], weights summing to 1) and an optional hard ceiling on
water temperature. The curve shapes and exponents are calibration data.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional, Tuple

from ..core import constants
from ..models import Species


@dataclass(frozen=True)
class BioContext:
    """Fully resolved environment for one hour."""

    water_temperature: float  # °C
    turbidity: float  # NTU
    dissolved_oxygen: float  # mg/L
    wave_height: float  # cm
    pressure_trend: float  # hPa over the look-back window
    wind_speed: float  # km/h
    cloud_cover: float  # %
    timestamp: datetime
    illumination: Optional[float] = None  # 0-1, derived when None

    @property
    def turbidity_index(self) -> float:
        """Turbidity normalized to [0, 1] (80 NTU = 1)."""
        return min(1.0, max(0.0, self.turbidity / constants.TURBIDITY_INDEX_SCALE))

    @property
    def wind_factor(self) -> float:
        """Linear wind ramp capped at 30 km/h, floor 0.2."""
        return min(1.0, max(0.2, 0.2 + 0.8 * (self.wind_speed / 30)))


# Sub-score curve: (context, illumination) -> [0, 1]
Curve = Callable[[BioContext, float], float]


def _decreasing_logistic(x: float) -> float:
    """1 / (1 + e^x), safe for large x."""
    if x > 700:
        return 0.0
    return 1 / (1 + math.exp(x))


@dataclass(frozen=True)
class SubScore:
    """One weighted factor of a species score."""

    name: str
    weight: float
    curve: Curve


@dataclass(frozen=True)
class SpeciesCurve:
    """Calibration of one species."""

    species: Species
    subscores: Tuple[SubScore, ...]
    max_water_temperature: Optional[float] = None  # hard veto above this (°C)

    def is_vetoed(self, ctx: BioContext) -> bool:
        """Check the hard temperature ceiling."""
        return (
            self.max_water_temperature is not None
            and ctx.water_temperature > self.max_water_temperature
        )


# Zander: low light / turbid water hunter, dislikes rising pressure
def _zander_pressure(ctx: BioContext, lux: float) -> float:
    return _decreasing_logistic(2.0 * (ctx.pressure_trend - 0.5))


def _zander_light(ctx: BioContext, lux: float) -> float:
    return (1 - lux) + lux * math.tanh(4 * ctx.turbidity_index)


def _zander_temperature(ctx: BioContext, lux: float) -> float:
    return math.exp(-((ctx.water_temperature - 17) ** 2) / 128)


# Pike: visual predator, cold-water sensitive
def _pike_temperature(ctx: BioContext, lux: float) -> float:
    return _decreasing_logistic(0.8 * (ctx.water_temperature - 21))


def _pike_visibility(ctx: BioContext, lux: float) -> float:
    return math.exp(-2.5 * ctx.turbidity_index)


def _pike_wind(ctx: BioContext, lux: float) -> float:
    return ctx.wind_factor


# Perch: tolerant of falling pressure, penalizes instability
def _perch_temperature(ctx: BioContext, lux: float) -> float:
    return math.exp(-((ctx.water_temperature - 21) ** 2) / 72)


def _perch_pressure(ctx: BioContext, lux: float) -> float:
    dp = ctx.pressure_trend
    return max(math.exp(-2 * abs(dp)), _decreasing_logistic(3.0 * (dp + 1.5)))


# Black bass: warm water, shuts down under bright post-frontal skies
def _bass_temperature(ctx: BioContext, lux: float) -> float:
    return math.exp(-0.5 * ((ctx.water_temperature - 27) / 10) ** 2)


def _bass_pressure(ctx: BioContext, lux: float) -> float:
    si_baro = math.exp(-1.5 * abs(ctx.pressure_trend))
    if ctx.pressure_trend > 3 and lux > 0.8:
        si_baro *= 0.3
    return si_baro


SPECIES_CURVES: Dict[Species, SpeciesCurve] = {
    Species.ZANDER: SpeciesCurve(
        species=Species.ZANDER,
        subscores=(
            SubScore("pressure", 0.4, _zander_pressure),
            SubScore("light_turbidity", 0.4, _zander_light),
            SubScore("temperature", 0.2, _zander_temperature),
        ),
    ),
    Species.PIKE: SpeciesCurve(
        species=Species.PIKE,
        subscores=(
            SubScore("temperature", 0.5, _pike_temperature),
            SubScore("visibility", 0.3, _pike_visibility),
            SubScore("wind", 0.2, _pike_wind),
        ),
        max_water_temperature=24.0,
    ),
    Species.PERCH: SpeciesCurve(
        species=Species.PERCH,
        subscores=(
            SubScore("temperature", 0.5, _perch_temperature),
            SubScore("pressure", 0.5, _perch_pressure),
        ),
    ),
    Species.BLACK_BASS: SpeciesCurve(
        species=Species.BLACK_BASS,
        subscores=(
            SubScore("temperature", 0.6, _bass_temperature),
            SubScore("pressure", 0.4, _bass_pressure),
        ),
    ),
}
