"""
Data models for the Zero-Hydro simulation engine.

Contains DTOs for weather samples, water body profiles, locations,
simulation state/output and the sync cache.
"""

from .weather import WeatherSample
from .profile import WaterBodyProfile, BasinType, DepthCategory, LandUse, Species
from .location import Location
from .simulation import (
    SimulationPhase,
    FlowTrend,
    SimulationState,
    SimulationPoint,
    SimulationResult,
)
from .cache import CacheEntry, SyncAction, SyncActionKind

__all__ = [
    "WeatherSample",
    "WaterBodyProfile",
    "BasinType",
    "DepthCategory",
    "LandUse",
    "Species",
    "Location",
    "SimulationPhase",
    "FlowTrend",
    "SimulationState",
    "SimulationPoint",
    "SimulationResult",
    "CacheEntry",
    "SyncAction",
    "SyncActionKind",
]
