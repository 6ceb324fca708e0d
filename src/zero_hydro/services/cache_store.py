"""
Cache stores for per-location sync state.

Writes follow a last-writer-wins-by-timestamp rule: an entry whose
last_sync is older than the stored one is ignored.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional

from ..core.date_utils import DateUtils
from ..models import CacheEntry


def _is_newer(candidate: CacheEntry, current: Optional[CacheEntry]) -> bool:
    if current is None or current.last_sync is None:
        return True
    if candidate.last_sync is None:
        return False
    return DateUtils.to_utc(candidate.last_sync) >= DateUtils.to_utc(current.last_sync)


class CacheStore:
    """Base class for cache stores."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize cache store.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, CacheEntry]:
        raise NotImplementedError

    def _write_all(self, entries: Dict[str, CacheEntry]) -> None:
        raise NotImplementedError

    def get(self, location_id: str) -> Optional[CacheEntry]:
        """
        Get the cached entry of a location.

        Args:
            location_id: Location ID

        Returns:
            CacheEntry or None if the location was never synced
        """
        with self._lock:
            return self._read_all().get(location_id)

    def put(self, entry: CacheEntry) -> bool:
        """
        Store an entry unless a newer one is already stored.

        Args:
            entry: Entry to store

        Returns:
            True if the entry was written, False if it was older and ignored
        """
        with self._lock:
            entries = self._read_all()
            current = entries.get(entry.location_id)
            if not _is_newer(entry, current):
                self.logger.info(
                    f"Ignoring cache write for {entry.location_id}: "
                    f"{entry.last_sync} is older than {current.last_sync}"
                )
                return False

            entries[entry.location_id] = entry
            self._write_all(entries)
            self.logger.debug(f"Cached {entry.location_id}: {entry.to_dict()}")
            return True


class InMemoryCacheStore(CacheStore):
    """Process-local cache store."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self._entries: Dict[str, CacheEntry] = {}

    def _read_all(self) -> Dict[str, CacheEntry]:
        return self._entries

    def _write_all(self, entries: Dict[str, CacheEntry]) -> None:
        self._entries = entries


class JsonFileCacheStore(CacheStore):
    """
    Cache store persisted as one JSON document.

    The document maps location IDs to serialized entries. Writes go to a
    temporary file that replaces the document atomically.
    """

    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        """
        Initialize JSON file cache store.

        Args:
            path: Path of the JSON document (created on first write)
            logger: Logger instance
        """
        super().__init__(logger)
        self.path = Path(path)

    def _read_all(self) -> Dict[str, CacheEntry]:
        if not self.path.exists():
            return {}

        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)

        return {
            location_id: CacheEntry.from_dict(raw)
            for location_id, raw in data.items()
        }

    def _write_all(self, entries: Dict[str, CacheEntry]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {location_id: entry.to_dict() for location_id, entry in entries.items()}

        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except Exception:
            os.unlink(tmp_path)
            raise
