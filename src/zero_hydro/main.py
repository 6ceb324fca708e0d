"""
Main entry point for the Zero-Hydro simulation engine.

Orchestrates the per-location sync workflow.
"""

import json
import sys
from datetime import datetime
from typing import Dict, List, Optional

from .core import Config, setup_logger, LoggerContext, DateUtils
from .models import Location
from .api import OpenMeteoClient
from .simulator import Simulator
from .services import (
    CacheStore,
    InMemoryCacheStore,
    JsonFileCacheStore,
    SyncOutcome,
    SyncService,
)


class ZeroHydroApp:
    """Main application for the water body digital twin."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
        """
        self.config = Config(config_file)

        self.logger = setup_logger(
            log_file=self.config.log_file,
            log_level=self.config.log_level
        )
        self.logger.info("=" * 60)
        self.logger.info("Zero-Hydro Digital Twin")
        self.logger.info("=" * 60)
        self.logger.info(f"Configuration: {self.config}")

        # Initialized in initialize_components()
        self.weather_client: Optional[OpenMeteoClient] = None
        self.cache_store: Optional[CacheStore] = None
        self.simulator: Optional[Simulator] = None
        self.sync_service: Optional[SyncService] = None

    def initialize_components(self) -> None:
        """Initialize all application components."""
        self.logger.info("Initializing components...")

        self.weather_client = OpenMeteoClient(
            base_url=self.config.weather_base_url,
            timeout=self.config.weather_timeout,
            max_retries=self.config.weather_max_retries,
            logger=self.logger
        )

        if self.config.cache_file:
            self.cache_store = JsonFileCacheStore(self.config.cache_file, logger=self.logger)
        else:
            self.logger.warning("No sync.cache_file configured, cache is kept in memory")
            self.cache_store = InMemoryCacheStore(logger=self.logger)

        self.simulator = Simulator(
            settings=self.config.simulation_settings(),
            timezone=self.config.timezone,
            logger=self.logger
        )

        self.sync_service = SyncService(
            weather_client=self.weather_client,
            cache_store=self.cache_store,
            simulator=self.simulator,
            settings=self.config.sync_settings(),
            forecast_days=self.config.forecast_days,
            logger=self.logger
        )

        self.logger.info("All components initialized successfully")

    def load_locations(self, location_ids: Optional[List[str]] = None) -> List[Location]:
        """
        Build the configured locations.

        Args:
            location_ids: Restrict to these IDs (None for all)

        Returns:
            List of locations; invalid entries are logged and skipped
        """
        locations = []
        for raw in self.config.locations:
            try:
                location = Location.from_dict(raw)
            except (KeyError, ValueError) as e:
                self.logger.error(f"Invalid location configuration {raw.get('id')}: {e}")
                continue
            if location_ids and location.id not in location_ids:
                continue
            locations.append(location)
        return locations

    def run(
        self,
        location_ids: Optional[List[str]] = None,
        now: Optional[datetime] = None
    ) -> Dict[str, SyncOutcome]:
        """
        Sync all configured locations.

        Args:
            location_ids: Restrict to these IDs (None for all)
            now: Reference time (None for the current time)

        Returns:
            Mapping location ID -> SyncOutcome for locations that synced
        """
        try:
            self.initialize_components()

            if not self.sync_service:
                raise RuntimeError("Components not properly initialized")

            locations = self.load_locations(location_ids)
            if not locations:
                self.logger.warning("No locations configured")
                return {}

            self.logger.info(f"Processing {len(locations)} locations")

            results = {}
            for location in locations:
                try:
                    with LoggerContext(self.logger, f"sync of {location.name}"):
                        results[location.id] = self.sync_service.sync(location, now)
                except Exception as e:
                    self.logger.error(
                        f"Failed to process location {location.name}: {e}",
                        exc_info=True
                    )

            self.log_summary(results)
            self.logger.info("Processing complete")
            return results

        except Exception as e:
            self.logger.error(f"Application error: {e}", exc_info=True)
            raise

        finally:
            if self.weather_client:
                self.weather_client.close()

    def log_summary(self, results: Dict[str, SyncOutcome]) -> None:
        """Log one line per synced location."""
        for location_id, outcome in results.items():
            best = max((point.best_score for point in outcome.points), default=None)
            self.logger.info(
                f"{location_id}: {outcome.action.kind.value}, "
                f"water={outcome.water_temperature} °C, "
                f"points={len(outcome.points)}, best_score={best}"
                + (" (stale)" if outcome.stale else "")
            )


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Zero-Hydro water body digital twin"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--location",
        action="append",
        default=None,
        help="Location ID to sync (repeatable). Default: all configured"
    )
    parser.add_argument(
        "--now",
        type=str,
        default=None,
        help="Reference time (ISO 8601, naive = UTC). Default: current time"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write emitted points as JSON to this file"
    )

    args = parser.parse_args()

    now = None
    if args.now:
        try:
            now = DateUtils.to_utc(datetime.fromisoformat(args.now))
        except ValueError:
            print(f"Invalid time format: {args.now}. Use ISO 8601")
            sys.exit(1)

    try:
        app = ZeroHydroApp(config_file=args.config)
        results = app.run(location_ids=args.location, now=now)
    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)

    if args.output:
        document = {
            location_id: {
                "waterTemp": outcome.water_temperature,
                "stale": outcome.stale,
                "action": outcome.action.kind.value,
                "points": [point.to_dict() for point in outcome.points],
            }
            for location_id, outcome in results.items()
        }
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2)


if __name__ == "__main__":
    main()
