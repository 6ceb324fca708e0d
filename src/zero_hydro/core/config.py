"""
Configuration module for the Zero-Hydro simulation engine.

Loads configuration from JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, List, Optional
from pathlib import Path

from . import constants


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'
        """
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = json.load(f)

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("WEATHER_BASE_URL"):
            self.config.setdefault("weather", {})
            self.config["weather"]["base_url"] = os.getenv("WEATHER_BASE_URL")

        if os.getenv("TIMEZONE"):
            self.config.setdefault("processing", {})
            self.config["processing"]["timezone"] = os.getenv("TIMEZONE")

        if os.getenv("CACHE_FILE"):
            self.config.setdefault("sync", {})
            self.config["sync"]["cache_file"] = os.getenv("CACHE_FILE")

        if os.getenv("LOG_LEVEL"):
            self.config.setdefault("logging", {})
            self.config["logging"]["level"] = os.getenv("LOG_LEVEL")

        if os.getenv("ENVIRONMENT"):
            self.config["environment"] = os.getenv("ENVIRONMENT")

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present."""
        required_config = {
            "weather": ["base_url"],
            "processing": ["timezone"],
        }

        missing_sections = [
            section for section in required_config.keys() if section not in self.config
        ]
        if missing_sections:
            raise ValueError(
                f"Missing required configuration sections: {', '.join(missing_sections)}"
            )

        missing_keys = []
        for section, keys in required_config.items():
            for key in keys:
                if key not in self.config[section]:
                    missing_keys.append(f"{section}.{key}")

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        alpha = self.get("simulation.ema_alpha")
        if alpha is not None and not (0 < alpha <= 1):
            raise ValueError(f"simulation.ema_alpha must be in (0, 1], got {alpha}")

        throttle = self.sync_throttle_hours
        threshold = self.sync_incremental_threshold_days
        if throttle >= threshold * 24:
            raise ValueError(
                "sync.throttle_hours must be shorter than sync.incremental_threshold_days"
            )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'weather.base_url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def weather_base_url(self) -> str:
        """Get weather forecast API base URL."""
        return self.get("weather.base_url", "")

    @property
    def weather_timeout(self) -> int:
        """Get weather API timeout in seconds."""
        return self.get("weather.timeout", 30)

    @property
    def weather_max_retries(self) -> int:
        """Get maximum weather API retry attempts."""
        return self.get("weather.max_retries", 3)

    @property
    def forecast_days(self) -> int:
        """Get number of forecast days requested from the weather API."""
        return self.get("weather.forecast_days", 4)

    @property
    def timezone(self) -> str:
        """Get processing timezone."""
        return self.get("processing.timezone", constants.DEFAULT_TIMEZONE)

    @property
    def ema_alpha(self) -> float:
        """Get bio-score smoothing factor."""
        return self.get("simulation.ema_alpha", constants.EMA_ALPHA)

    @property
    def flow_trend_dead_band(self) -> float:
        """Get dead-band for flow trend classification."""
        return self.get("simulation.flow_trend_dead_band", constants.FLOW_TREND_DEAD_BAND)

    @property
    def pressure_trend_hours(self) -> int:
        """Get pressure trend look-back in hours."""
        return self.get("simulation.pressure_trend_hours", constants.PRESSURE_TREND_HOURS)

    @property
    def wind_reaeration(self) -> bool:
        """Check if wind re-aeration bonus is applied to dissolved oxygen."""
        return self.get("simulation.wind_reaeration", False)

    @property
    def sync_throttle_hours(self) -> int:
        """Get minimum hours between two recomputations."""
        return self.get("sync.throttle_hours", constants.THROTTLE_HOURS)

    @property
    def sync_incremental_threshold_days(self) -> int:
        """Get staleness (days) above which a cold start is forced."""
        return self.get("sync.incremental_threshold_days", constants.INCREMENTAL_THRESHOLD_DAYS)

    @property
    def sync_cold_start_days(self) -> int:
        """Get cold start look-back in days."""
        return self.get("sync.cold_start_days", constants.COLD_START_DAYS)

    @property
    def cache_file(self) -> Optional[str]:
        """Get path of the JSON cache file (None keeps the cache in memory)."""
        return self.get("sync.cache_file")

    @property
    def log_level(self) -> str:
        """Get logging level name."""
        return self.get("logging.level", "INFO")

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path (None defers to LOG_FILE, empty disables the file)."""
        return self.get("logging.file")

    @property
    def locations(self) -> List[Dict[str, Any]]:
        """Get configured locations."""
        return self.get("locations", [])

    def simulation_settings(self):
        """Build simulation tunables from configuration."""
        from ..simulator import SimulationSettings

        return SimulationSettings(
            ema_alpha=self.ema_alpha,
            flow_trend_dead_band=self.flow_trend_dead_band,
            pressure_trend_hours=self.pressure_trend_hours,
            wind_reaeration=self.wind_reaeration,
        )

    def sync_settings(self):
        """Build sync policy thresholds from configuration."""
        from ..services.sync_policy import SyncSettings

        return SyncSettings(
            throttle_hours=self.sync_throttle_hours,
            incremental_threshold_days=self.sync_incremental_threshold_days,
            cold_start_days=self.sync_cold_start_days,
        )

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, env={self.get('environment')})"
