"""CowCatalog: the explicitly constructed owner of the herd state."""

from datetime import datetime
from threading import RLock
from typing import Any, Callable, Dict, List, Optional

from cowcatalog.database.cow_repo import CowRepository
from cowcatalog.database.kv_store import MemorySlotStore, SqliteSlotStore
from cowcatalog.herd.collection import AppendResult, CowCollection
from cowcatalog.herd.filters import FilteredView, FilterRegisters
from cowcatalog.herd.queries import (
    distinct_pens,
    events_newest_first,
    find_by_tag,
    is_tag_unique,
    latest_event_date,
)
from cowcatalog.models import Cow, CowDraft, CowEvent, EventType
from cowcatalog.utils.id_generator import new_event_id
from cowcatalog.utils.logging import get_logger
from cowcatalog.utils.time import utc_now

logger = get_logger(__name__)


class CowCatalog:
    """
    Wires the repository, the canonical collection, the filter registers and
    the filtered view together.

    All writes (new cows, new events, filter changes) go through one
    re-entrant lock so a uniqueness check and the append that follows it
    cannot interleave with another writer.
    """

    def __init__(self, repository: CowRepository, clock: Callable[[], datetime] = utc_now):
        self.repository = repository
        self._clock = clock
        self._lock = RLock()
        self.cows = CowCollection(repository.load_or_seed(), persist=repository.save)
        self.filters = FilterRegisters()
        self.filtered_cows = FilteredView(self.cows, self.filters)

    @classmethod
    def from_config(cls, config: Dict[str, Any], clock: Callable[[], datetime] = utc_now) -> "CowCatalog":
        storage = config["storage"]
        if storage["backend"] == "memory":
            store = MemorySlotStore()
        else:
            store = SqliteSlotStore.from_path(storage["sqlite_path"])
        repository = CowRepository(store, slot_key=storage["slot_key"], clock=clock)
        return cls(repository, clock=clock)

    def close(self) -> None:
        """Detach the filtered view and release the underlying store."""
        self.filtered_cows.close()
        self.repository.close()

    # ---- Filter setters ----

    def set_search_term(self, term: str) -> None:
        with self._lock:
            self.filters.set_search_term(term)

    def set_status_filter(self, status: str) -> None:
        with self._lock:
            self.filters.set_status_filter(status)

    def set_pen_filter(self, pen: str) -> None:
        with self._lock:
            self.filters.set_pen_filter(pen)

    def clear_filters(self) -> None:
        with self._lock:
            self.filters.clear()

    # ---- Queries ----

    def all_cows(self) -> List[Cow]:
        return self.cows.current()

    def visible_cows(self) -> List[Cow]:
        return self.filtered_cows.current()

    def get_cow_by_tag(self, ear_tag: str) -> Optional[Cow]:
        return find_by_tag(self.cows.value, ear_tag)

    def is_tag_unique(self, ear_tag: str) -> bool:
        return is_tag_unique(self.cows.value, ear_tag)

    def get_pens(self) -> List[str]:
        return distinct_pens(self.cows.value)

    def get_last_event_date(self, cow: Cow) -> Optional[datetime]:
        return latest_event_date(cow)

    def get_event_history(self, cow: Cow) -> List[CowEvent]:
        return events_newest_first(cow)

    # ---- Writes ----

    def add_cow(self, cow: Cow) -> AppendResult:
        with self._lock:
            result = self.cows.append(cow)
        if result.error:
            logger.info(f"Cow not added: {result.error}")
        return result

    def register_cow(self, draft: CowDraft) -> AppendResult:
        """Create a cow from validated input, stamped with the current time."""
        return self.add_cow(draft.to_cow(self._clock()))

    def log_event(
        self,
        ear_tag: str,
        event_type: EventType,
        description: str,
        date: Optional[datetime] = None,
        event_id: Optional[str] = None,
    ) -> AppendResult:
        event = CowEvent(
            id=event_id or new_event_id(ear_tag),
            date=date or self._clock(),
            type=event_type,
            description=description,
        )
        with self._lock:
            result = self.cows.append_event(ear_tag, event)
        if result.error:
            logger.info(f"Event not logged for {ear_tag}: {result.error}")
        return result
