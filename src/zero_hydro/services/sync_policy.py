"""
Sync/cache policy.

Decides, from the cached entry of a location and the current time, whether
the water temperature must be recomputed from scratch, replayed over the
missing hours, or served from the cache.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import CacheEntry, SyncAction, SyncActionKind


@dataclass(frozen=True)
class SyncSettings:
    """Thresholds of the sync policy."""

    throttle_hours: float = constants.THROTTLE_HOURS
    incremental_threshold_days: float = constants.INCREMENTAL_THRESHOLD_DAYS
    cold_start_days: int = constants.COLD_START_DAYS

    @property
    def cold_start_hours(self) -> int:
        return int(self.cold_start_days * 24)


def _cold_start(settings: SyncSettings, reason: str) -> SyncAction:
    return SyncAction(
        kind=SyncActionKind.COLD_START,
        replay_hours=settings.cold_start_hours,
        days_missing=settings.cold_start_days,
        reason=reason,
    )


def decide_sync_action(
    now: datetime,
    cache_entry: Optional[CacheEntry],
    schema_version: int = constants.CACHE_SCHEMA_VERSION,
    settings: Optional[SyncSettings] = None
) -> SyncAction:
    """
    Decide how to bring a location's cached state up to date.

    Naive datetimes are taken as UTC.

    Args:
        now: Current time
        cache_entry: Cached entry for the location, None if never synced
        schema_version: Schema version the current code writes
        settings: Policy thresholds (defaults if None)

    Returns:
        SyncAction: COLD_START with a full look-back, INCREMENTAL with the
        hours to replay, or SKIP
    """
    settings = settings or SyncSettings()

    if cache_entry is None:
        return _cold_start(settings, "no cache entry")
    if cache_entry.schema_version != schema_version:
        return _cold_start(
            settings,
            f"schema version {cache_entry.schema_version} != {schema_version}",
        )
    if cache_entry.last_sync is None:
        return _cold_start(settings, "never synced")
    if cache_entry.last_water_temperature is None:
        return _cold_start(settings, "no stored water temperature")

    hours = DateUtils.hours_between(cache_entry.last_sync, now)

    if hours > settings.incremental_threshold_days * 24:
        return _cold_start(settings, f"stale for {hours:.1f} h")

    if hours >= settings.throttle_hours:
        days_missing = int(math.ceil(hours / 24))
        return SyncAction(
            kind=SyncActionKind.INCREMENTAL,
            replay_hours=days_missing * 24 + 1,
            days_missing=days_missing,
            reason=f"stale for {hours:.1f} h",
        )

    return SyncAction(
        kind=SyncActionKind.SKIP,
        reason=f"synced {hours:.1f} h ago",
    )
