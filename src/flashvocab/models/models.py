"""Database models for the trainer."""
from sqlalchemy import Column, String, Text

from flashvocab.models.base import Base, TimestampMixin


class StorageEntry(Base, TimestampMixin):
    """One persisted record of the key-value store."""

    __tablename__ = "storage_entries"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
