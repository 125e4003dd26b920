"""Observable single-value holder with synchronous, ordered fan-out.

Every `set` bumps a version number. Deliveries are queued and drained in
version order, so an observer that calls `set` from inside its callback
does not cause other observers to see the newer value before the older
one. Each subscription remembers the last version it received and skips
anything not newer.

An observer that raises is logged and skipped; the remaining observers
still receive the value and the pending queue is still drained.
"""

from collections import deque
from typing import Callable, Deque, Generic, List, Optional, Tuple, TypeVar

from cowcatalog.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Observer = Callable[[T], None]


class Subscription(Generic[T]):
    """Handle returned by `ObservableValue.subscribe`."""

    def __init__(self, source: "ObservableValue[T]", observer: Observer):
        self._source = source
        self._observer = observer
        self.active = True
        self.last_version = -1

    def cancel(self) -> None:
        """Stop further deliveries. Safe to call more than once."""
        if not self.active:
            return
        self.active = False
        self._source._detach(self)

    def __enter__(self) -> "Subscription[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()

    def _deliver(self, version: int, value: T) -> None:
        if not self.active or version <= self.last_version:
            return
        self.last_version = version
        self._observer(value)


class ObservableValue(Generic[T]):
    """Holds one value and pushes every replacement to its subscribers."""

    def __init__(self, initial: T, name: Optional[str] = None):
        self.name = name or self.__class__.__name__
        self._value = initial
        self._version = 0
        self._subscriptions: List[Subscription[T]] = []
        self._pending: Deque[Tuple[int, T]] = deque()
        self._draining = False

    @property
    def value(self) -> T:
        return self._value

    @property
    def version(self) -> int:
        return self._version

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def set(self, value: T) -> None:
        """Replace the held value and notify every active subscriber."""
        self._value = value
        self._version += 1
        self._pending.append((self._version, value))
        self._drain()

    def subscribe(self, observer: Observer) -> Subscription[T]:
        """
        Register `observer`.

        It is called once right away with the current value, then on every
        later `set` until the returned subscription is cancelled.
        """
        subscription = Subscription(self, observer)
        self._subscriptions.append(subscription)
        self._notify(subscription, self._version, self._value)
        return subscription

    def _detach(self, subscription: Subscription[T]) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def _drain(self) -> None:
        # Re-entrant set() calls only enqueue; the outermost call delivers.
        if self._draining:
            return
        self._draining = True
        try:
            while self._pending:
                version, value = self._pending.popleft()
                for subscription in list(self._subscriptions):
                    self._notify(subscription, version, value)
        finally:
            self._draining = False

    def _notify(self, subscription: Subscription[T], version: int, value: T) -> None:
        try:
            subscription._deliver(version, value)
        except Exception:
            logger.exception(f"Observer of {self.name} failed on version {version}")
