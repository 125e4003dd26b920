"""Pydantic models for cows and their event history."""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from cowcatalog.utils.time import as_utc


class CowSex(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class CowStatus(str, Enum):
    ACTIVE = "Active"
    IN_TREATMENT = "In Treatment"
    DECEASED = "Deceased"


class EventType(str, Enum):
    WEIGHT_CHECK = "Weight Check"
    TREATMENT = "Treatment"
    PEN_MOVE = "Pen Move"
    DEATH = "Death"


class CowEvent(BaseModel):
    """A timestamped history entry owned by exactly one cow."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Event id, unique within its cow")
    date: datetime = Field(..., description="When the event happened")
    type: EventType
    description: str = ""

    @field_validator("date")
    @classmethod
    def _date_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class Cow(BaseModel):
    """A tracked animal, keyed by its ear tag.

    Stored snapshots use the camelCase aliases (earTag, dailyWeightGain,
    createdAt); Python code uses the field names. Timestamps are held as
    aware UTC; naive input is read as UTC.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ear_tag: str = Field(..., alias="earTag")
    sex: CowSex
    pen: str
    status: CowStatus
    weight: Optional[float] = None
    daily_weight_gain: Optional[float] = Field(default=None, alias="dailyWeightGain")
    created_at: datetime = Field(..., alias="createdAt")
    events: Tuple[CowEvent, ...] = ()

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    def with_event(self, event: CowEvent) -> "Cow":
        """Copy of this cow with `event` appended to its history."""
        return self.model_copy(update={"events": (*self.events, event)})


class CowDraft(BaseModel):
    """Validated input for registering a new cow."""

    ear_tag: str
    sex: CowSex
    pen: str
    status: CowStatus = CowStatus.ACTIVE
    weight: Optional[float] = Field(default=None, ge=0.1)

    @field_validator("ear_tag", "pen")
    @classmethod
    def _required_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    def to_cow(self, now: datetime) -> Cow:
        return Cow(
            ear_tag=self.ear_tag,
            sex=self.sex,
            pen=self.pen,
            status=self.status,
            weight=self.weight,
            created_at=now,
            events=(),
        )


COW_LIST_ADAPTER = TypeAdapter(List[Cow])
