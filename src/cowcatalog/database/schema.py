from sqlalchemy import Column, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class KeyValueSlot(Base):
    __tablename__ = "kv_slots"

    slot_key = Column(String, primary_key=True)
    value_json = Column(Text, nullable=False)
    updated_at_utc = Column(String, nullable=False)  # ISO 8601 string
