"""
Simulation driver.

Folds an ordered hourly weather series through the physical models and, for
the hours inside the requested window, derives oxygen, waves, illumination
and smoothed species scores.

Hours before the window only advance the carried state (warm-up), which is
how a 30-day cold start converges the thermal model before the points that
are actually shown.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from .core import constants
from .core.date_utils import DateUtils
from .core.logger import LoggerContext
from .models import (
    WaterBodyProfile,
    WeatherSample,
    FlowTrend,
    Species,
    SimulationPhase,
    SimulationPoint,
    SimulationResult,
    SimulationState,
)
from .processing import InputProcessor
from .algorithms import (
    ThermalModel,
    TurbidityModel,
    OxygenModel,
    WaveModel,
    FlowModel,
    IlluminationCalculator,
    BioContext,
    BioScoreCalculator,
    round_score,
    smooth_scores,
)


@dataclass(frozen=True)
class SimulationSettings:
    """Tunables of the simulation driver."""

    ema_alpha: float = constants.EMA_ALPHA
    flow_trend_dead_band: float = constants.FLOW_TREND_DEAD_BAND
    pressure_trend_hours: int = constants.PRESSURE_TREND_HOURS
    wind_reaeration: bool = False


class Simulator:
    """Hour-by-hour digital twin of one water body."""

    def __init__(
        self,
        settings: Optional[SimulationSettings] = None,
        timezone: str = constants.DEFAULT_TIMEZONE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize simulator.

        Args:
            settings: Simulation tunables (defaults if None)
            timezone: Location timezone, used for naive timestamps,
                      day of year and illumination
            logger: Logger instance
        """
        self.settings = settings or SimulationSettings()
        self.timezone = timezone
        self.logger = logger or logging.getLogger(__name__)

        self.processor = InputProcessor(self.logger)
        self.illumination_calc = IlluminationCalculator(timezone, self.logger)
        self.bioscore_calc = BioScoreCalculator(self.illumination_calc, logger=self.logger)
        self.phase = SimulationPhase.UNINITIALIZED

    def _set_phase(self, phase: SimulationPhase) -> None:
        if phase != self.phase:
            self.logger.debug(f"Simulation phase: {self.phase.value} -> {phase.value}")
            self.phase = phase

    def _localize(self, dt: Optional[datetime]) -> Optional[datetime]:
        if dt is None:
            return None
        return DateUtils.to_local(dt, self.timezone)

    def pressure_trend(self, samples: Sequence[WeatherSample], index: int) -> float:
        """
        Get pressure change over the look-back window ending at index.

        Early hours use the oldest sample available.

        Args:
            samples: Sanitized samples
            index: Current hour

        Returns:
            Pressure change (hPa), rounded to 0.1
        """
        reference = samples[max(0, index - self.settings.pressure_trend_hours)]
        return round(samples[index].pressure - reference.pressure, 1)

    def run(
        self,
        profile: WaterBodyProfile,
        samples: Sequence[WeatherSample],
        prior_state: Optional[SimulationState] = None,
        window_start: Optional[datetime] = None,
        window_end: Optional[datetime] = None,
        now: Optional[datetime] = None
    ) -> SimulationResult:
        """
        Run the simulation over a weather series.

        Args:
            profile: Water body profile
            samples: Hourly weather samples, strictly increasing in time
            prior_state: State carried over from a previous run (None seeds
                         from climatology)
            window_start: First hour to emit (None for the first sample)
            window_end: Last hour to emit (None for the last sample)
            now: Reference time splitting history from forecast
                 (None for the current time)

        Returns:
            SimulationResult with emitted points and the final state

        Raises:
            InvalidProfile: If the profile is inconsistent
            UpstreamDataUnavailable: If the series is empty or unordered
            NumericDivergence: If the carried state becomes non-finite
        """
        self.phase = SimulationPhase.UNINITIALIZED
        clean, substituted = self.processor.prepare(profile, samples)

        thermal = ThermalModel(profile, self.timezone)
        turbidity_model = TurbidityModel(profile.land_use)
        state = prior_state or SimulationState()

        start = self._localize(window_start)
        end = self._localize(window_end)
        reference = self._localize(now) if now is not None else DateUtils.now_utc()

        points: List[SimulationPoint] = []

        with LoggerContext(
            self.logger, f"simulation of {len(clean)} hours", logging.DEBUG
        ):
            for index, sample in enumerate(clean):
                timestamp = DateUtils.to_local(sample.timestamp, self.timezone)
                in_window = (start is None or timestamp >= start) and (
                    end is None or timestamp <= end
                )
                if in_window:
                    self._set_phase(SimulationPhase.RUNNING)
                elif start is not None and timestamp < start:
                    self._set_phase(SimulationPhase.COLD_START)

                water_temperature = thermal.step(sample, state.water_temperature)
                turbidity = turbidity_model.step(sample.precipitation, state.turbidity)
                soil = FlowModel.step(
                    state.soil_saturation, sample.precipitation, sample.air_temperature
                )
                intensity = FlowModel.intensity(soil)
                trend = FlowModel.trend(
                    intensity,
                    state.previous_flow_intensity,
                    self.settings.flow_trend_dead_band,
                )

                state = replace(
                    state,
                    water_temperature=water_temperature,
                    turbidity=turbidity,
                    soil_saturation=soil,
                    previous_flow_intensity=intensity,
                )

                if not in_window:
                    continue

                point, smoothed = self._emit(
                    profile, clean, index, state, trend, reference
                )
                state = replace(state, smoothed_scores=smoothed)
                points.append(point)

        self._set_phase(SimulationPhase.COMPLETE)
        self.logger.info(
            f"Simulated {len(clean)} hours, emitted {len(points)} points "
            f"(final water temperature {state.water_temperature:.2f} °C)"
        )

        return SimulationResult(
            points=points,
            final_state=state,
            steps=len(clean),
            substituted_fields=substituted,
        )

    def _emit(
        self,
        profile: WaterBodyProfile,
        samples: Sequence[WeatherSample],
        index: int,
        state: SimulationState,
        trend: FlowTrend,
        reference: datetime
    ) -> Tuple[SimulationPoint, Dict[Species, float]]:
        sample = samples[index]
        timestamp = DateUtils.to_local(sample.timestamp, self.timezone)

        dissolved_oxygen = OxygenModel.dissolved_oxygen(
            state.water_temperature,
            sample.pressure,
            sample.wind_speed,
            self.settings.wind_reaeration,
        )
        wave_height = WaveModel.wave_height(
            sample.wind_speed, profile.surface_area, profile.shape_factor
        )
        illumination = self.illumination_calc.illumination(timestamp, sample.cloud_cover)
        pressure_trend = self.pressure_trend(samples, index)

        ctx = BioContext(
            water_temperature=state.water_temperature,
            turbidity=state.turbidity,
            dissolved_oxygen=dissolved_oxygen,
            wave_height=wave_height,
            pressure_trend=pressure_trend,
            wind_speed=sample.wind_speed,
            cloud_cover=sample.cloud_cover,
            timestamp=timestamp,
            illumination=illumination,
        )
        raw = self.bioscore_calc.raw_scores(ctx, profile.target_species)
        vetoed = self.bioscore_calc.vetoed(ctx, profile.target_species)
        smoothed = smooth_scores(
            state.smoothed_scores, raw, self.settings.ema_alpha, vetoed
        )
        scores = {species: round_score(value) for species, value in smoothed.items()}

        point = SimulationPoint(
            timestamp=timestamp,
            is_forecast=timestamp > reference,
            water_temperature=round(state.water_temperature, 2),
            turbidity=state.turbidity,
            dissolved_oxygen=dissolved_oxygen,
            wave_height=wave_height,
            air_temperature=sample.air_temperature,
            pressure=sample.pressure,
            pressure_trend=pressure_trend,
            wind_speed=sample.wind_speed,
            wind_direction=sample.wind_direction,
            precipitation=sample.precipitation,
            cloud_cover=sample.cloud_cover,
            weather_code=sample.weather_code,
            illumination=round(illumination, 3),
            scores=scores,
            best_score=max(scores.values()) if scores else 0,
            flow_intensity=round(state.previous_flow_intensity, 3),
            flow_trend=trend,
        )
        return point, smoothed


def simulate(
    profile: WaterBodyProfile,
    samples: Sequence[WeatherSample],
    prior_state: Optional[SimulationState] = None,
    window_start: Optional[datetime] = None,
    window_end: Optional[datetime] = None,
    now: Optional[datetime] = None,
    settings: Optional[SimulationSettings] = None,
    timezone: str = constants.DEFAULT_TIMEZONE,
    logger: Optional[logging.Logger] = None
) -> List[SimulationPoint]:
    """
    Run a simulation and return only the emitted points.

    See Simulator.run() for arguments.
    """
    simulator = Simulator(settings, timezone, logger)
    result = simulator.run(
        profile,
        samples,
        prior_state=prior_state,
        window_start=window_start,
        window_end=window_end,
        now=now,
    )
    return result.points
