from .collection import AppendResult, CowCollection
from .filters import FilterCriteria, FilteredView, FilterRegisters, filter_cows
from .reactive import ObservableValue, Subscription
from .service import CowCatalog

__all__ = [
    "AppendResult",
    "CowCatalog",
    "CowCollection",
    "FilterCriteria",
    "FilteredView",
    "FilterRegisters",
    "ObservableValue",
    "Subscription",
    "filter_cows",
]
