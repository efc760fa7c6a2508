"""Key-value storage providers for persisted records."""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from sqlalchemy.orm import Session

from flashvocab.models.models import StorageEntry

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """Synchronous string key-value storage."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the value stored under key, or None."""
        raise NotImplementedError("Subclasses must implement this method")

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        raise NotImplementedError("Subclasses must implement this method")

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key if present."""
        raise NotImplementedError("Subclasses must implement this method")


class InMemoryStorage(KeyValueStorage):
    """Storage kept in a plain dict, lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class DatabaseStorage(KeyValueStorage):
    """Storage backed by the storage_entries table."""

    def __init__(self, db: Session):
        """Initialize the storage with a database session."""
        self.db = db

    def _get_entry(self, key: str) -> Optional[StorageEntry]:
        return self.db.query(StorageEntry).filter(StorageEntry.key == key).first()

    def get(self, key: str) -> Optional[str]:
        entry = self._get_entry(key)
        return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        entry = self._get_entry(key)
        if entry:
            entry.value = value
        else:
            self.db.add(StorageEntry(key=key, value=value))
        self.db.commit()
        logger.debug(f"Stored {len(value)} characters under {key}")

    def delete(self, key: str) -> None:
        entry = self._get_entry(key)
        if not entry:
            return
        self.db.delete(entry)
        self.db.commit()
        logger.debug(f"Deleted {key}")
