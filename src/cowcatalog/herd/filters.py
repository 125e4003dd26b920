"""Filter criteria registers and the derived filtered view."""

from dataclasses import dataclass
from typing import Iterable, List

from cowcatalog.herd.collection import CowCollection
from cowcatalog.herd.reactive import ObservableValue, Subscription
from cowcatalog.models import Cow


@dataclass(frozen=True)
class FilterCriteria:
    """Snapshot of the three filter registers. Empty string means no filter."""

    search: str = ""
    status: str = ""
    pen: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.search or self.status or self.pen)


def matches(cow: Cow, criteria: FilterCriteria) -> bool:
    """
    Check one cow against all three criteria (logical AND).

    - search: case-insensitive substring of the ear tag
    - status: exact match on the status value
    - pen: exact match on the pen name
    """
    matches_search = not criteria.search or criteria.search.lower() in cow.ear_tag.lower()
    matches_status = not criteria.status or cow.status.value == criteria.status
    matches_pen = not criteria.pen or cow.pen == criteria.pen
    return matches_search and matches_status and matches_pen


def filter_cows(cows: Iterable[Cow], criteria: FilterCriteria) -> List[Cow]:
    """Stable filter; returns the same cow objects in their original order."""
    return [cow for cow in cows if matches(cow, criteria)]


class FilterRegisters:
    """The search, status and pen registers, each independently observable."""

    def __init__(self) -> None:
        self.search_term: ObservableValue[str] = ObservableValue("", name="search_term")
        self.status_filter: ObservableValue[str] = ObservableValue("", name="status_filter")
        self.pen_filter: ObservableValue[str] = ObservableValue("", name="pen_filter")

    def set_search_term(self, term: str) -> None:
        self.search_term.set(term)

    def set_status_filter(self, status: str) -> None:
        self.status_filter.set(status)

    def set_pen_filter(self, pen: str) -> None:
        self.pen_filter.set(pen)

    def clear(self) -> None:
        self.search_term.set("")
        self.status_filter.set("")
        self.pen_filter.set("")

    def snapshot(self) -> FilterCriteria:
        return FilterCriteria(
            search=self.search_term.value,
            status=self.status_filter.value,
            pen=self.pen_filter.value,
        )

    def sources(self) -> List[ObservableValue[str]]:
        return [self.search_term, self.status_filter, self.pen_filter]


class FilteredView(ObservableValue[List[Cow]]):
    """
    Always-current filtered cows.

    Recomputes from the latest collection and register values whenever any
    of the four sources emits. Subscribers get a fresh list each time.
    """

    def __init__(self, collection: CowCollection, registers: FilterRegisters):
        super().__init__([], name="filtered_cows")
        self._collection = collection
        self._registers = registers
        self._wired = False
        self._upstream: List[Subscription] = [collection.subscribe(self._on_source_change)]
        for register in registers.sources():
            self._upstream.append(register.subscribe(self._on_source_change))
        self._wired = True
        self._recompute()

    @property
    def criteria(self) -> FilterCriteria:
        return self._registers.snapshot()

    def current(self) -> List[Cow]:
        return list(self.value)

    def close(self) -> None:
        """Detach from the collection and registers."""
        for subscription in self._upstream:
            subscription.cancel()
        self._upstream = []

    def _on_source_change(self, _value: object) -> None:
        # Subscribing replays the current value; wait until all four are wired.
        if self._wired:
            self._recompute()

    def _recompute(self) -> None:
        self.set(filter_cows(self._collection.value, self._registers.snapshot()))
