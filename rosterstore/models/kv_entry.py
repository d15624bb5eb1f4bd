"""Key-value entry model definitions."""

from sqlalchemy import Column, DateTime, String, Text
from rosterstore.database import Base


class KeyValueEntry(Base):
    """One durable slot of the backing store, holding a serialized JSON blob."""
    __tablename__ = "kv_entries"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime)
