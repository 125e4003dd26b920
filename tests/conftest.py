"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest

from cowcatalog.database.cow_repo import CowRepository
from cowcatalog.database.kv_store import MemorySlotStore, SqliteSlotStore
from cowcatalog.herd.service import CowCatalog
from cowcatalog.models import Cow

FIXED_NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


def make_cow(ear_tag: str, pen: str = "Pen A", status: str = "Active", **overrides) -> Cow:
    payload = {
        "ear_tag": ear_tag,
        "sex": "Female",
        "pen": pen,
        "status": status,
        "weight": 500.0,
        "created_at": FIXED_NOW,
        "events": [],
    }
    payload.update(overrides)
    return Cow.model_validate(payload)


@pytest.fixture
def memory_store():
    """Empty in-memory slot store."""
    return MemorySlotStore()


@pytest.fixture
def repository(memory_store):
    return CowRepository(memory_store, clock=fixed_clock)


@pytest.fixture
def sqlite_store(tmp_path):
    """Slot store backed by a temporary SQLite file."""
    store = SqliteSlotStore.from_path(str(tmp_path / "catalog.db"))
    try:
        yield store
    finally:
        store.close()


@pytest.fixture
def catalog(repository):
    """Catalog seeded with the 8 demo cows."""
    catalog = CowCatalog(repository, clock=fixed_clock)
    try:
        yield catalog
    finally:
        catalog.close()
