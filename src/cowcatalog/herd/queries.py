"""On-demand lookups and aggregates over a cow sequence."""

from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from cowcatalog.models import Cow, CowEvent, CowSex, CowStatus, EventType

STATUSES: List[str] = [status.value for status in CowStatus]
SEXES: List[str] = [sex.value for sex in CowSex]
EVENT_TYPES: List[str] = [event_type.value for event_type in EventType]


def find_by_tag(cows: Iterable[Cow], ear_tag: str) -> Optional[Cow]:
    """Return the cow with this exact ear tag, or None."""
    for cow in cows:
        if cow.ear_tag == ear_tag:
            return cow
    return None


def is_tag_unique(cows: Iterable[Cow], ear_tag: str) -> bool:
    return find_by_tag(cows, ear_tag) is None


def distinct_pens(cows: Iterable[Cow]) -> List[str]:
    """All pen names in use, each once, sorted ascending."""
    return sorted({cow.pen for cow in cows})


def latest_event_date(cow: Cow) -> Optional[datetime]:
    """
    Date of the most recent event, or None when the cow has no events.

    When several events share the latest date, the one appended last wins.
    """
    latest: Optional[CowEvent] = None
    for event in cow.events:
        if latest is None or event.date >= latest.date:
            latest = event
    return latest.date if latest else None


def events_newest_first(cow: Cow) -> List[CowEvent]:
    """Events sorted by date descending; equal dates keep insertion order."""
    return sorted(cow.events, key=lambda event: event.date, reverse=True)


def has_event_id(cow: Cow, event_id: str) -> bool:
    return any(event.id == event_id for event in cow.events)


def index_of_tag(cows: Sequence[Cow], ear_tag: str) -> Optional[int]:
    for index, cow in enumerate(cows):
        if cow.ear_tag == ear_tag:
            return index
    return None
