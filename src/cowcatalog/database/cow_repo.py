"""Repository that keeps the herd in a single key-value slot as JSON."""

from datetime import datetime
from typing import Callable, List, Optional, Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from cowcatalog.database.kv_store import SlotStore
from cowcatalog.errors import CorruptDataError, PersistError
from cowcatalog.fixtures.seed_data import generate_seed_data
from cowcatalog.models import COW_LIST_ADAPTER, Cow
from cowcatalog.utils.logging import get_logger
from cowcatalog.utils.time import utc_now

logger = get_logger(__name__)

DEFAULT_SLOT_KEY = "cow_catalog_data"


def encode_herd(cows: Sequence[Cow], indent: Optional[int] = None) -> str:
    """Serialize cows as a JSON array using the camelCase field aliases."""
    return COW_LIST_ADAPTER.dump_json(
        list(cows),
        by_alias=True,
        exclude_none=True,
        indent=indent,
    ).decode("utf-8")


def decode_herd(raw: str, slot_key: str = DEFAULT_SLOT_KEY) -> List[Cow]:
    """
    Parse a stored JSON array back into cows.

    Raises:
        CorruptDataError: If the payload is not valid JSON, does not match the
            cow schema, or repeats an ear tag
    """
    try:
        cows = COW_LIST_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise CorruptDataError(slot_key, f"{exc.error_count()} validation error(s)") from exc

    seen = set()
    for cow in cows:
        if cow.ear_tag in seen:
            raise CorruptDataError(slot_key, f"duplicate ear tag {cow.ear_tag}")
        seen.add(cow.ear_tag)
    return cows


class CowRepository:
    """Load, save and seed the herd against a slot store."""

    def __init__(
        self,
        store: SlotStore,
        slot_key: str = DEFAULT_SLOT_KEY,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.slot_key = slot_key
        self._clock = clock

    def load(self) -> Optional[List[Cow]]:
        """
        Read the herd from storage.

        Returns:
            The stored cows, or None if the slot has never been written

        Raises:
            CorruptDataError: If the slot exists but cannot be decoded
        """
        raw = self.store.get(self.slot_key)
        if raw is None:
            return None
        return decode_herd(raw, self.slot_key)

    def save(self, cows: Sequence[Cow]) -> None:
        """Overwrite the slot with the full herd."""
        payload = encode_herd(cows)
        try:
            self.store.put(self.slot_key, payload)
        except (SQLAlchemyError, OSError) as exc:
            raise PersistError(self.slot_key, str(exc)) from exc
        logger.debug(f"Persisted {len(cows)} cows to slot {self.slot_key}")

    def close(self) -> None:
        self.store.close()

    def seed(self) -> List[Cow]:
        return generate_seed_data(self._clock())

    def load_or_seed(self) -> List[Cow]:
        """
        Load the stored herd, falling back to the seed herd.

        The seed is used when the slot is missing or corrupt, and is written
        back right away. Corruption is logged, never raised.
        """
        try:
            cows = self.load()
        except CorruptDataError as exc:
            logger.warning(f"Reseeding after unreadable catalog: {exc}")
            cows = None

        if cows is not None:
            logger.debug(f"Loaded {len(cows)} cows from slot {self.slot_key}")
            return cows

        cows = self.seed()
        try:
            self.save(cows)
        except PersistError as exc:
            logger.error(f"Seed herd not persisted: {exc}")
        logger.info(f"Seeded catalog with {len(cows)} demo cows")
        return cows
