"""
Sync service.

Brings the cached water temperature of a location up to date: reads the
cache entry, asks the sync policy what to do, fetches weather, runs the
simulation and writes the new entry. Each location is serialized by its
own lock; different locations may sync in parallel.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, TYPE_CHECKING

from ..core import constants
from ..core.date_utils import DateUtils
from ..core.exceptions import UpstreamDataUnavailable
from ..models import (
    CacheEntry,
    Location,
    SimulationPoint,
    SimulationState,
    SyncAction,
    SyncActionKind,
    WeatherSample,
)
from ..simulator import Simulator
from .cache_store import CacheStore
from .sync_policy import SyncSettings, decide_sync_action

if TYPE_CHECKING:
    from ..api import OpenMeteoClient


@dataclass
class SyncOutcome:
    """Result of syncing one location."""

    location_id: str
    action: SyncAction
    water_temperature: Optional[float] = None  # °C
    points: List[SimulationPoint] = field(default_factory=list)
    stale: bool = False
    error: Optional[str] = None


class SyncService:
    """Keep per-location cached state current."""

    def __init__(
        self,
        weather_client: "OpenMeteoClient",
        cache_store: CacheStore,
        simulator: Optional[Simulator] = None,
        settings: Optional[SyncSettings] = None,
        forecast_days: int = 4,
        history_hours: int = 24,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize sync service.

        Args:
            weather_client: Client providing fetch_hourly()
            cache_store: Cache store for per-location entries
            simulator: Simulation driver (default settings if None)
            settings: Sync policy thresholds
            forecast_days: Forecast horizon requested from the provider
            history_hours: Hours before now included in emitted points
            logger: Logger instance
        """
        self.weather_client = weather_client
        self.cache_store = cache_store
        self.logger = logger or logging.getLogger(__name__)
        self.simulator = simulator or Simulator(logger=self.logger)
        self.settings = settings or SyncSettings()
        self.forecast_days = forecast_days
        self.history_hours = history_hours
        self.date_utils = DateUtils(logger)

        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, location_id: str) -> threading.Lock:
        with self._locks_guard:
            if location_id not in self._locks:
                self._locks[location_id] = threading.Lock()
            return self._locks[location_id]

    def sync(self, location: Location, now: Optional[datetime] = None) -> SyncOutcome:
        """
        Sync one location.

        Args:
            location: Location to sync
            now: Current time, naive taken as UTC (None for the current time)

        Returns:
            SyncOutcome; stale=True when the recomputation failed and the
            cached value was returned instead

        Raises:
            Exception: Whatever failed during recomputation (fetch, simulation
                       or cache write) when nothing is cached
        """
        now = DateUtils.to_utc(now or DateUtils.now_utc())

        with self._lock_for(location.id):
            entry = self.cache_store.get(location.id)
            action = decide_sync_action(
                now, entry, constants.CACHE_SCHEMA_VERSION, self.settings
            )
            self.logger.info(
                f"Sync {location.id}: {action.kind.value} ({action.reason})"
            )

            if action.kind == SyncActionKind.SKIP:
                return SyncOutcome(
                    location_id=location.id,
                    action=action,
                    water_temperature=entry.last_water_temperature,
                )

            try:
                return self._recompute(location, entry, action, now)
            except Exception as e:
                if entry is None or entry.last_water_temperature is None:
                    self.logger.error(
                        f"Sync failed for {location.id} with no cached value: {e}",
                        exc_info=True
                    )
                    raise

                self.logger.error(
                    f"Sync failed for {location.id}, serving cached value: {e}",
                    exc_info=True
                )
                return SyncOutcome(
                    location_id=location.id,
                    action=action,
                    water_temperature=entry.last_water_temperature,
                    stale=True,
                    error=str(e),
                )

    def _recompute(
        self,
        location: Location,
        entry: Optional[CacheEntry],
        action: SyncAction,
        now: datetime
    ) -> SyncOutcome:
        samples = self.weather_client.fetch_hourly(
            location.latitude,
            location.longitude,
            past_hours=action.replay_hours,
            forecast_days=self.forecast_days,
        )

        prior_state = None
        if action.kind == SyncActionKind.INCREMENTAL:
            samples = self._after(samples, entry.last_sync)
            prior_state = SimulationState(water_temperature=entry.last_water_temperature)
        if not samples:
            raise UpstreamDataUnavailable(
                f"No weather samples to replay for {location.id}"
            )

        window_start, _ = self.date_utils.get_window(now, self.history_hours, 0)
        result = self.simulator.run(
            location.profile,
            samples,
            prior_state=prior_state,
            window_start=window_start,
            now=now,
        )

        history = [point for point in result.points if not point.is_forecast]
        if history:
            water_temperature = history[-1].water_temperature
        else:
            water_temperature = round(result.final_state.water_temperature, 2)

        self.cache_store.put(CacheEntry(
            location_id=location.id,
            last_water_temperature=water_temperature,
            last_sync=DateUtils.to_utc(now),
            schema_version=constants.CACHE_SCHEMA_VERSION,
        ))

        return SyncOutcome(
            location_id=location.id,
            action=action,
            water_temperature=water_temperature,
            points=result.points,
        )

    def _after(self, samples: List[WeatherSample], last_sync: datetime) -> List[WeatherSample]:
        """Keep samples strictly after the last sync."""
        cutoff = DateUtils.to_utc(last_sync)
        timezone = self.simulator.timezone
        return [
            sample for sample in samples
            if DateUtils.to_local(sample.timestamp, timezone) > cutoff
        ]
