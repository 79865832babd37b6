"""Abstract key/value store interface."""

from abc import ABC, abstractmethod
from typing import Optional


class StorageError(Exception):
    """Base class for persistence failures."""


class PersistenceWriteError(StorageError):
    """A value could not be written to or removed from the store."""


class KeyValueStore(ABC):
    """Asynchronous string key/value store used to persist app state."""

    def connect(self) -> None:
        """Connect to the backing store."""
        pass

    def disconnect(self) -> None:
        """Disconnect from the backing store."""
        pass

    def initialize_schema(self) -> None:
        """Create whatever the backing store needs before first use."""
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key``, or None."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        pass

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Remove ``key``. Removing a missing key is not an error."""
        pass
