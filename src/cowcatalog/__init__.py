"""Cow catalog: a persisted herd with a live, filterable view."""

from cowcatalog.herd.service import CowCatalog
from cowcatalog.models import Cow, CowDraft, CowEvent, CowSex, CowStatus, EventType

__version__ = "0.1.0"

__all__ = [
    "Cow",
    "CowCatalog",
    "CowDraft",
    "CowEvent",
    "CowSex",
    "CowStatus",
    "EventType",
]
