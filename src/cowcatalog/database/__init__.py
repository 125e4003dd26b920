from .cow_repo import CowRepository, decode_herd, encode_herd
from .kv_store import MemorySlotStore, SlotStore, SqliteSlotStore

__all__ = [
    "CowRepository",
    "decode_herd",
    "encode_herd",
    "MemorySlotStore",
    "SlotStore",
    "SqliteSlotStore",
]
