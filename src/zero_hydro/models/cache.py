"""
Cache and sync data models.

Contains the persisted cache entry and the sync policy decision.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from ..core import constants


@dataclass(frozen=True)
class CacheEntry:
    """Last known simulation output for a location."""

    location_id: str
    last_water_temperature: Optional[float] = None  # °C
    last_sync: Optional[datetime] = None
    schema_version: int = constants.CACHE_SCHEMA_VERSION

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-friendly dictionary."""
        return {
            "locationId": self.location_id,
            "lastCalculatedTemp": self.last_water_temperature,
            "lastSyncDate": self.last_sync.isoformat() if self.last_sync else None,
            "schemaVersion": self.schema_version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheEntry":
        """Deserialize from the dictionary produced by to_dict()."""
        last_sync = data.get("lastSyncDate")
        return cls(
            location_id=data["locationId"],
            last_water_temperature=data.get("lastCalculatedTemp"),
            last_sync=datetime.fromisoformat(last_sync) if last_sync else None,
            # Entries written before versioning are treated as version 0
            schema_version=data.get("schemaVersion", 0),
        )


class SyncActionKind(str, Enum):
    """What the sync policy decided to do."""

    COLD_START = "cold_start"
    INCREMENTAL = "incremental"
    SKIP = "skip"


@dataclass(frozen=True)
class SyncAction:
    """Decision returned by the sync policy."""

    kind: SyncActionKind
    replay_hours: int = 0
    days_missing: int = 0
    reason: str = ""
