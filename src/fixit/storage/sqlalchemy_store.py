"""SQLAlchemy-backed key/value store."""

import asyncio
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from fixit.storage.base import KeyValueStore, PersistenceWriteError, StorageError
from fixit.storage.models import KeyValueEntry, create_session_factory

logger = logging.getLogger(__name__)


class SQLAlchemyKeyValueStore(KeyValueStore):
    """SQLAlchemy-based implementation of KeyValueStore.

    Every call opens a short-lived session on a worker thread so the event
    loop is never blocked by database I/O.
    """

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)

    def disconnect(self) -> None:
        """Release pooled connections."""
        self.session_factory.kw["bind"].dispose()

    def _get(self, key: str) -> Optional[str]:
        with self.session_factory() as session:
            entry = session.get(KeyValueEntry, key)
            return None if entry is None else entry.value

    def _set(self, key: str, value: str) -> None:
        with self.session_factory() as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value
            session.commit()

    def _remove(self, key: str) -> None:
        with self.session_factory() as session:
            entry = session.get(KeyValueEntry, key)
            if entry is not None:
                session.delete(entry)
                session.commit()

    async def get(self, key: str) -> Optional[str]:
        try:
            return await asyncio.to_thread(self._get, key)
        except SQLAlchemyError as e:
            raise StorageError(f"Could not read '{key}': {e}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            await asyncio.to_thread(self._set, key, value)
        except SQLAlchemyError as e:
            raise PersistenceWriteError(f"Could not write '{key}': {e}") from e

    async def remove(self, key: str) -> None:
        try:
            await asyncio.to_thread(self._remove, key)
        except SQLAlchemyError as e:
            raise PersistenceWriteError(f"Could not remove '{key}': {e}") from e
