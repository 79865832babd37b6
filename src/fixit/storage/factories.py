"""Store factory functions for creating key/value store instances."""

import os
from pathlib import Path
from typing import Optional

from fixit.storage.sqlalchemy_store import SQLAlchemyKeyValueStore


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyKeyValueStore:
    """Create a SQLite-backed store instance.

    Args:
        database_path: Path to SQLite database file. If None, checks FIXIT_DB_PATH
            environment variable, then defaults to ~/.fixit/fixit.db

    Returns:
        SQLAlchemyKeyValueStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("FIXIT_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".fixit"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "fixit.db")

    return SQLAlchemyKeyValueStore(f"sqlite:///{database_path}")
