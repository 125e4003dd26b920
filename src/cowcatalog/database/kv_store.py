"""Key-value slot stores backing the cow repository."""

from typing import Dict, Optional, Protocol

from sqlalchemy.engine import Engine

from cowcatalog.database.schema import KeyValueSlot
from cowcatalog.database.sqlite_client import get_engine, session_context
from cowcatalog.utils.logging import get_logger
from cowcatalog.utils.time import utc_now_z

logger = get_logger(__name__)


class SlotStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def put(self, key: str, value: str) -> None:
        ...

    def close(self) -> None:
        ...


class MemorySlotStore:
    """Dict-backed slot store; contents live as long as the instance."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._slots: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def put(self, key: str, value: str) -> None:
        self._slots[key] = value

    def close(self) -> None:
        pass


class SqliteSlotStore:
    """Slot store persisted in the `kv_slots` table of a SQLite file."""

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_path(cls, sqlite_path: str) -> "SqliteSlotStore":
        return cls(get_engine(sqlite_path))

    def get(self, key: str) -> Optional[str]:
        with session_context(self.engine) as session:
            row = session.get(KeyValueSlot, key)
            return row.value_json if row else None

    def put(self, key: str, value: str) -> None:
        with session_context(self.engine) as session:
            row = session.get(KeyValueSlot, key)
            if row is None:
                session.add(KeyValueSlot(slot_key=key, value_json=value, updated_at_utc=utc_now_z()))
            else:
                row.value_json = value
                row.updated_at_utc = utc_now_z()
        logger.debug(f"Wrote slot {key} ({len(value)} bytes)")

    def close(self) -> None:
        """Release pooled SQLite connections."""
        self.engine.dispose()
