"""Error taxonomy for the cow catalog.

DuplicateKeyError and NotFound are returned inside AppendResult rather than
raised; CorruptDataError stays inside the repository; PersistError is
raised by the repository and reported by the collection.
"""


class CowCatalogError(Exception):
    """Base class for catalog errors."""


class DuplicateKeyError(CowCatalogError):
    """A key already exists where it must be unique."""

    def __init__(self, key: str, scope: str = "ear_tag"):
        self.key = key
        self.scope = scope
        super().__init__(f"Duplicate {scope}: {key}")


class NotFound(CowCatalogError):
    """A lookup key matched nothing."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Not found: {key}")


class CorruptDataError(CowCatalogError):
    """A storage slot exists but cannot be decoded as a cow list."""

    def __init__(self, slot_key: str, reason: str):
        self.slot_key = slot_key
        self.reason = reason
        super().__init__(f"Slot '{slot_key}' is corrupt: {reason}")


class PersistError(CowCatalogError):
    """Writing a storage slot failed."""

    def __init__(self, slot_key: str, reason: str):
        self.slot_key = slot_key
        self.reason = reason
        super().__init__(f"Failed to persist slot '{slot_key}': {reason}")
