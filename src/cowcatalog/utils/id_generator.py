import uuid
from datetime import UTC, datetime


def new_event_id(ear_tag: str) -> str:
    """
    Id for a new event in one cow's history.

    Format: <ear_tag>-<YYYYMMDD>-<8 hex chars>, e.g. TAG-1002-20250601-3f9c0a1b.
    Ids only need to be unique within the cow; the tag prefix keeps them
    readable when events from several cows are listed together.
    """
    return f"{ear_tag}-{datetime.now(UTC).strftime('%Y%m%d')}-{uuid.uuid4().hex[:8]}"
