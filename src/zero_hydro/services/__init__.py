"""
Business logic services for the Zero-Hydro simulation engine.

Services decide when a location must be recomputed, persist its cached
state and orchestrate weather retrieval with the simulation.
"""

from .sync_policy import SyncSettings, decide_sync_action
from .cache_store import CacheStore, InMemoryCacheStore, JsonFileCacheStore
from .sync_service import SyncService, SyncOutcome

__all__ = [
    "SyncSettings",
    "decide_sync_action",
    "CacheStore",
    "InMemoryCacheStore",
    "JsonFileCacheStore",
    "SyncService",
    "SyncOutcome",
]
