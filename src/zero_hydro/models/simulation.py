"""
Simulation data models.

Contains the carried state threaded between hourly steps and the points
emitted by the simulation driver.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .profile import Species


class SimulationPhase(str, Enum):
    """Lifecycle of one simulation run."""

    UNINITIALIZED = "uninitialized"
    COLD_START = "cold_start"
    RUNNING = "running"
    COMPLETE = "complete"


class FlowTrend(str, Enum):
    """Direction of the flow intensity proxy."""

    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"


@dataclass(frozen=True)
class SimulationState:
    """State carried from one hourly step to the next."""

    water_temperature: Optional[float] = None  # °C, None before the first step
    turbidity: Optional[float] = None  # NTU, None before the first step
    soil_saturation: float = 0.0  # mm-equivalent storm-flow proxy
    previous_flow_intensity: Optional[float] = None
    smoothed_scores: Optional[Dict[Species, float]] = None


@dataclass(frozen=True)
class SimulationPoint:
    """One emitted hour of the simulated time series."""

    timestamp: datetime
    is_forecast: bool
    water_temperature: float  # °C
    turbidity: float  # NTU
    dissolved_oxygen: float  # mg/L
    wave_height: float  # cm
    air_temperature: float  # °C
    pressure: float  # hPa
    pressure_trend: float  # hPa over the look-back window
    wind_speed: float  # km/h
    wind_direction: float  # degrees
    precipitation: float  # mm
    cloud_cover: float  # %
    weather_code: int
    illumination: float  # 0-1
    scores: Dict[Species, int] = field(default_factory=dict)
    best_score: int = 0
    flow_intensity: float = 0.0
    flow_trend: FlowTrend = FlowTrend.STABLE

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-friendly dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "isForecast": self.is_forecast,
            "waterTemp": self.water_temperature,
            "turbidityNTU": self.turbidity,
            "dissolvedOxygen": self.dissolved_oxygen,
            "waveHeight": self.wave_height,
            "airTemp": self.air_temperature,
            "pressure": self.pressure,
            "pressureTrend": self.pressure_trend,
            "windSpeed": self.wind_speed,
            "windDirection": self.wind_direction,
            "precip": self.precipitation,
            "cloudCover": self.cloud_cover,
            "conditionCode": self.weather_code,
            "illumination": self.illumination,
            "scores": {species.value: score for species, score in self.scores.items()},
            "bestScore": self.best_score,
            "flowIntensity": self.flow_intensity,
            "flowTrend": self.flow_trend.value,
        }


@dataclass(frozen=True)
class SimulationResult:
    """Output of a simulation run: emitted points and the final carried state."""

    points: List[SimulationPoint]
    final_state: SimulationState
    steps: int = 0
    substituted_fields: int = 0
