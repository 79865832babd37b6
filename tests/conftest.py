"""Shared pytest fixtures for fixit tests."""

import asyncio
import os
import tempfile
from datetime import datetime

import pytest

from fixit.domain.accounts import AccountDirectory
from fixit.domain.bookings import BookingLedger
from fixit.domain.entities import UserProfile
from fixit.domain.notifications import NotificationLog
from fixit.domain.session import Session
from fixit.state import AppState
from fixit.storage.factories import create_sqlite_store
from fixit.storage.memory import InMemoryKeyValueStore

FIXED_NOW = datetime(2025, 6, 1, 12, 0)


@pytest.fixture
def now():
    """Fixed reference time."""
    return FIXED_NOW


@pytest.fixture
def clock():
    """Clock that always returns the fixed reference time."""
    return lambda: FIXED_NOW


@pytest.fixture
def temp_db_path():
    """Path to a temporary SQLite file, removed after the test."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    yield db_path

    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def sqlite_store(temp_db_path):
    """Create a SQLite-backed store on a temporary file."""
    store = create_sqlite_store(database_path=temp_db_path)
    store.connect()
    store.initialize_schema()

    yield store

    store.disconnect()


@pytest.fixture
def memory_store():
    """Create an empty in-memory store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def directory(session):
    """Create an AccountDirectory bound to a fresh session."""
    return AccountDirectory(session)


@pytest.fixture
def notification_log(clock):
    return NotificationLog(clock)


@pytest.fixture
def ledger(session, notification_log):
    """Create a BookingLedger bound to the shared session."""
    return BookingLedger(session, notification_log)


@pytest.fixture
def state(memory_store, clock):
    """Create an AppState over an in-memory store with a fixed clock."""
    return AppState(memory_store, clock=clock)


@pytest.fixture
def sample_profile():
    """Profile with a plaintext password, as entered on the sign-up form."""
    return UserProfile(
        name="Mona Adel",
        email="Mona@Example.com",
        phone="01012345678",
        password="Secret#123",
    )


@pytest.fixture
def run():
    """Run a coroutine to completion."""
    return asyncio.run


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handlers the CLI attaches to the root logger."""
    import logging

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level

    yield

    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
