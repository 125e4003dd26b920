"""The canonical, observable cow collection."""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, Union

from cowcatalog.errors import DuplicateKeyError, NotFound, PersistError
from cowcatalog.herd.queries import has_event_id, index_of_tag, is_tag_unique
from cowcatalog.herd.reactive import ObservableValue
from cowcatalog.models import Cow, CowEvent
from cowcatalog.utils.logging import get_logger

logger = get_logger(__name__)

Herd = Tuple[Cow, ...]
PersistFn = Callable[[Sequence[Cow]], None]


@dataclass
class AppendResult:
    """Outcome of a write to the collection.

    `added` is False only when `error` is set. A persist failure still
    counts as added: the in-memory collection is the current truth.
    """

    added: bool
    error: Optional[Union[DuplicateKeyError, NotFound]] = None
    persist_error: Optional[PersistError] = None

    @property
    def ok(self) -> bool:
        return self.added and self.persist_error is None


class CowCollection(ObservableValue[Herd]):
    """
    Single source of truth for the herd.

    Every write builds a new tuple, hands it to `persist`, then replaces the
    held value and notifies subscribers with the full new sequence.
    """

    def __init__(self, initial: Sequence[Cow] = (), persist: Optional[PersistFn] = None):
        super().__init__(tuple(initial), name="cows")
        self._persist = persist

    def current(self) -> List[Cow]:
        return list(self.value)

    def append(self, cow: Cow) -> AppendResult:
        """Add a new cow; duplicate ear tags are rejected without changes."""
        cows = self.value
        if not is_tag_unique(cows, cow.ear_tag):
            logger.debug(f"Rejected duplicate ear tag: {cow.ear_tag}")
            return AppendResult(added=False, error=DuplicateKeyError(cow.ear_tag))

        result = self._replace((*cows, cow))
        logger.debug(f"Added cow {cow.ear_tag} ({len(cows) + 1} total)")
        return result

    def append_event(self, ear_tag: str, event: CowEvent) -> AppendResult:
        """Append `event` to one cow's history, keeping the cow's position."""
        cows = self.value
        index = index_of_tag(cows, ear_tag)
        if index is None:
            return AppendResult(added=False, error=NotFound(ear_tag))

        cow = cows[index]
        if has_event_id(cow, event.id):
            return AppendResult(added=False, error=DuplicateKeyError(event.id, scope="event_id"))

        updated = cows[:index] + (cow.with_event(event),) + cows[index + 1:]
        result = self._replace(updated)
        logger.debug(f"Logged {event.type.value} event {event.id} for {ear_tag}")
        return result

    def _replace(self, cows: Herd) -> AppendResult:
        persist_error = None
        if self._persist is not None:
            try:
                self._persist(cows)
            except PersistError as exc:
                logger.error(f"Keeping in-memory herd after persist failure: {exc}")
                persist_error = exc
        self.set(cows)
        return AppendResult(added=True, persist_error=persist_error)
