"""
Physical and biological models for the Zero-Hydro simulation engine.

Provides the thermal, turbidity, oxygen, wave and flow models plus the
illumination estimate and species bio-scores.
"""

from .thermal import ThermalModel
from .turbidity import TurbidityModel
from .oxygen import OxygenModel
from .waves import WaveModel
from .flow import FlowModel
from .illumination import IlluminationCalculator
from .species import BioContext, SpeciesCurve, SubScore, SPECIES_CURVES
from .bioscore import BioScoreCalculator, round_score, smooth_scores

__all__ = [
    "ThermalModel",
    "TurbidityModel",
    "OxygenModel",
    "WaveModel",
    "FlowModel",
    "IlluminationCalculator",
    "BioContext",
    "SpeciesCurve",
    "SubScore",
    "SPECIES_CURVES",
    "BioScoreCalculator",
    "round_score",
    "smooth_scores",
]
