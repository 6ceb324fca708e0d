"""
Tests for cache stores.
"""

import json
import threading
from datetime import datetime, timedelta

import pytest  # type: ignore
import pytz  # type: ignore

from src.zero_hydro.models import CacheEntry
from src.zero_hydro.services.cache_store import InMemoryCacheStore, JsonFileCacheStore

BASE = pytz.UTC.localize(datetime(2024, 6, 15, 0, 0))


def make_entry(hour, temperature=None, location_id="loc1"):
    return CacheEntry(
        location_id=location_id,
        last_water_temperature=temperature if temperature is not None else 10.0 + hour / 10,
        last_sync=BASE + timedelta(hours=hour),
    )


class TestCacheEntry:
    """Test cases for CacheEntry serialization."""

    def test_unversioned_entry_is_version_zero(self):
        """Entries written before versioning are treated as version 0."""
        entry = CacheEntry.from_dict({"locationId": "loc1", "lastCalculatedTemp": 12.0})

        assert entry.schema_version == 0
        assert entry.last_sync is None

    def test_dict_round_trip(self):
        """Serialized entries load back unchanged."""
        entry = make_entry(3)

        assert CacheEntry.from_dict(entry.to_dict()) == entry


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryCacheStore()
    return JsonFileCacheStore(str(tmp_path / "cache" / "entries.json"))


class TestCacheStore:
    """Behavior shared by every cache store."""

    def test_get_unknown(self, store):
        """Unknown locations have no entry."""
        assert store.get("missing") is None

    def test_put_then_get(self, store):
        """Stored entries are returned."""
        entry = make_entry(1)

        assert store.put(entry) is True
        assert store.get("loc1") == entry

    def test_older_write_ignored(self, store):
        """Last writer by timestamp wins."""
        newer = make_entry(5)
        older = make_entry(2)

        store.put(newer)

        assert store.put(older) is False
        assert store.get("loc1") == newer

    def test_locations_independent(self, store):
        """Entries of different locations do not interfere."""
        store.put(make_entry(5, location_id="a"))
        store.put(make_entry(1, location_id="b"))

        assert store.get("a").last_sync == BASE + timedelta(hours=5)
        assert store.get("b").last_sync == BASE + timedelta(hours=1)

    def test_concurrent_writers(self, store):
        """Concurrent writers leave the newest entry in place."""
        entries = [make_entry(hour) for hour in range(40)]
        barrier = threading.Barrier(len(entries))

        def write(entry):
            barrier.wait()
            store.put(entry)

        threads = [threading.Thread(target=write, args=(e,)) for e in reversed(entries)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.get("loc1") == entries[-1]


class TestJsonFileCacheStore:
    """Test cases specific to the JSON file store."""

    def test_persists_across_instances(self, tmp_path):
        """A new store on the same file sees earlier writes."""
        path = str(tmp_path / "entries.json")
        JsonFileCacheStore(path).put(make_entry(4))

        assert JsonFileCacheStore(path).get("loc1") == make_entry(4)

    def test_document_format(self, tmp_path):
        """The file is one JSON object keyed by location ID."""
        path = tmp_path / "entries.json"
        JsonFileCacheStore(str(path)).put(make_entry(0, temperature=14.5))

        with open(path) as f:
            data = json.load(f)

        assert data["loc1"]["lastCalculatedTemp"] == 14.5
        assert data["loc1"]["schemaVersion"] == 2
        assert list(path.parent.glob("*.tmp")) == []
