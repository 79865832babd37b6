"""Tests for the AppState facade."""

import asyncio
import json
import logging
from datetime import datetime, timedelta

import pytest

from fixit.domain.credentials import hash_password
from fixit.domain.entities import AppSnapshot, Booking, BookingStatus, UserProfile
from fixit.domain.errors import DuplicateEmailError
from fixit.state import AppState
from fixit.storage.base import PersistenceWriteError, StorageError
from fixit.storage.memory import InMemoryKeyValueStore


def make_profile(email, password="Secret#123", name="User"):
    return UserProfile(name=name, email=email, phone="01012345678", password=password)


def make_booking(scheduled_at, owner="", notes=""):
    return Booking(
        service_name="Home Cleaning - Deep Cleaning",
        province="Alexandria",
        scheduled_at=scheduled_at,
        notes=notes,
        owner_email=owner,
    )


class FailingStore(InMemoryKeyValueStore):
    """Store whose writes fail for selected keys."""

    def __init__(self, failing_keys, initial=None):
        super().__init__(initial)
        self.failing_keys = set(failing_keys)

    async def set(self, key, value):
        if key in self.failing_keys:
            raise PersistenceWriteError(f"disk full writing {key}")
        await super().set(key, value)


class GatedStore(InMemoryKeyValueStore):
    """Store whose reads block until the gate opens."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.gate = None
        self.reads = []

    async def get(self, key):
        self.reads.append(key)
        if self.gate is not None:
            await self.gate.wait()
        return await super().get(key)


class TestMutationsPersist:
    """Mutations update memory, then write every document."""

    def test_register_persists_everything(self, state, memory_store, sample_profile):
        state.register(sample_profile)

        users = json.loads(memory_store.data["registeredUsers"])
        assert list(users) == ["mona@example.com"]
        assert users["mona@example.com"]["password"] == hash_password("Secret#123")
        assert memory_store.data["currentUserEmail"] == "mona@example.com"
        assert json.loads(memory_store.data["bookings"]) == []
        assert json.loads(memory_store.data["notifications"]) == []

    def test_log_out_removes_session_key(self, state, memory_store, sample_profile):
        state.register(sample_profile)

        state.log_out()

        assert state.current_user is None
        assert "currentUserEmail" not in memory_store.data
        assert "registeredUsers" in memory_store.data

    def test_add_and_cancel_booking(self, state, memory_store, sample_profile, now):
        state.register(sample_profile)
        booking = state.add_booking(make_booking(now + timedelta(days=3)))

        assert booking.owner_email == "mona@example.com"
        stored = json.loads(memory_store.data["bookings"])
        assert stored[0]["userEmail"] == "mona@example.com"
        assert stored[0]["isCancelled"] is False

        state.cancel_booking(booking)

        stored = json.loads(memory_store.data["bookings"])
        assert stored[0]["isCancelled"] is True
        messages = [n["message"] for n in json.loads(memory_store.data["notifications"])]
        assert messages[0].startswith("Booked Home Cleaning - Deep Cleaning in Alexandria")
        assert messages[1].startswith("Cancelled Home Cleaning - Deep Cleaning in Alexandria")

    def test_update_email_persists_rekeyed_session(self, state, memory_store):
        state.register(make_profile("a@x.com"))

        state.update_email_and_password("a@x.com", "b@x.com")

        users = json.loads(memory_store.data["registeredUsers"])
        assert list(users) == ["b@x.com"]
        assert memory_store.data["currentUserEmail"] == "b@x.com"

    def test_duplicate_email_surfaces_and_keeps_accounts(self, state, memory_store):
        state.register(make_profile("a@x.com", name="A"))
        state.register(make_profile("b@x.com", name="B"))
        before = memory_store.data["registeredUsers"]

        with pytest.raises(DuplicateEmailError):
            state.update_email_and_password("a@x.com", "b@x.com", None)

        assert state.lookup("a@x.com").profile.name == "A"
        assert state.lookup("b@x.com").profile.name == "B"
        assert memory_store.data["registeredUsers"] == before

    def test_update_profile_unknown_email_is_noop(self, state, memory_store):
        state.update_profile("ghost@x.com", "Name", "01000000000")

        assert memory_store.data == {}


class TestAuthentication:
    """End-to-end login flows."""

    def test_register_logout_login(self, state, sample_profile):
        stored = state.register(sample_profile)
        state.log_out()

        profile = state.log_in_with_credentials("mona@example.com", "Secret#123")

        assert profile is stored
        assert state.current_user is stored

    def test_wrong_password_sets_no_session(self, state, memory_store, sample_profile):
        state.register(sample_profile)
        state.log_out()

        assert not state.validate_credentials("mona@example.com", "nope")
        assert state.log_in_with_credentials("mona@example.com", "nope") is None
        assert state.current_user is None
        assert "currentUserEmail" not in memory_store.data

    def test_change_password(self, state, sample_profile):
        state.register(sample_profile)

        assert not state.change_password("mona@example.com", "wrong", "Another#456")
        assert state.change_password("mona@example.com", "Secret#123", "Another#456")

        assert state.validate_credentials("mona@example.com", "Another#456")
        assert not state.validate_credentials("mona@example.com", "Secret#123")


class TestLoad:
    """Tests for AppState.load."""

    def test_round_trip_through_store(self, state, memory_store, clock, now, run):
        state.register(make_profile("a@x.com"))
        booking = state.add_booking(make_booking(now + timedelta(hours=5), notes="café ✓"))

        restored = AppState(memory_store, clock=clock)
        run(restored.load())

        assert restored.current_user.email == "a@x.com"
        assert restored.current_user is restored.lookup("a@x.com").profile
        assert restored.bookings == [booking]
        assert restored.notifications == state.notifications
        assert restored.status_of(restored.bookings[0]) == BookingStatus.UPCOMING

    def test_session_restored_after_directory(self, clock, run):
        """Session email resolves only because accounts load first."""
        profile = {"name": "A", "email": "a@x.com", "phone": "", "password": hash_password("pw")}
        store = InMemoryKeyValueStore(
            {
                "currentUserEmail": "A@X.com",
                "registeredUsers": json.dumps(
                    {"a@x.com": {"email": "a@x.com", "password": profile["password"], "userData": profile}}
                ),
            }
        )
        state = AppState(store, clock=clock)

        run(state.load())

        assert state.current_user.name == "A"

    def test_stale_session_is_discarded(self, clock, run):
        store = InMemoryKeyValueStore({"currentUserEmail": "ghost@x.com", "registeredUsers": "{}"})
        state = AppState(store, clock=clock)

        run(state.load())

        assert state.current_user is None
        assert "currentUserEmail" not in store.data

    def test_corrupt_key_only_empties_its_collection(self, state, memory_store, clock, now, run, caplog):
        state.register(make_profile("a@x.com"))
        state.add_booking(make_booking(now))
        memory_store.data["bookings"] = "{not json"

        restored = AppState(memory_store, clock=clock)
        with caplog.at_level(logging.ERROR, logger="fixit.state"):
            run(restored.load())

        assert restored.bookings == []
        assert len(restored.notifications) == 1
        assert restored.lookup("a@x.com") is not None
        assert restored.current_user is not None
        assert "bookings" in caplog.text

    def test_corrupt_directory_discards_session(self, clock, run):
        store = InMemoryKeyValueStore(
            {"registeredUsers": "[1, 2]", "currentUserEmail": "a@x.com", "bookings": "[]"}
        )
        state = AppState(store, clock=clock)

        run(state.load())

        assert state.directory.records == {}
        assert state.current_user is None
        assert "currentUserEmail" not in store.data

    def test_missing_keys_load_empty(self, state, run):
        run(state.load())

        assert state.bookings == []
        assert state.notifications == []
        assert state.current_user is None

    def test_read_failure_is_logged(self, clock, run):
        class BrokenStore(InMemoryKeyValueStore):
            async def get(self, key):
                raise StorageError("unreadable")

        state = AppState(BrokenStore(), clock=clock)

        run(state.load())

        assert state.bookings == []

    def test_concurrent_load_is_noop(self, clock, run):
        store = GatedStore({"bookings": "[]"})
        state = AppState(store, clock=clock)

        async def scenario():
            store.gate = asyncio.Event()
            first = asyncio.create_task(state.load())
            await asyncio.sleep(0)
            await state.load()
            reads_while_blocked = list(store.reads)
            store.gate.set()
            await first
            return reads_while_blocked

        reads_while_blocked = run(scenario())

        assert reads_while_blocked == ["registeredUsers"]
        assert store.reads == ["registeredUsers", "bookings", "notifications", "currentUserEmail"]

    def test_load_can_run_again_after_finishing(self, state, memory_store, run):
        run(state.load())
        memory_store.data["bookings"] = json.dumps(
            [{"serviceName": "X", "province": "Cairo", "dateTime": "2025-06-02T10:00:00"}]
        )

        run(state.load())

        assert len(state.bookings) == 1


class TestSave:
    """Tests for AppState.save."""

    def test_write_failure_does_not_roll_back(self, clock, now, caplog):
        store = FailingStore({"bookings"})
        state = AppState(store, clock=clock)

        with caplog.at_level(logging.ERROR, logger="fixit.state"):
            state.register(make_profile("a@x.com"))
            state.add_booking(make_booking(now))

        assert len(state.bookings) == 1
        assert "bookings" not in store.data
        assert "registeredUsers" in store.data
        assert "notifications" in store.data
        assert store.data["currentUserEmail"] == "a@x.com"
        assert "Could not save 'bookings'" in caplog.text

    def test_next_save_retries(self, clock, now):
        store = FailingStore({"bookings"})
        state = AppState(store, clock=clock)
        state.add_booking(make_booking(now))

        store.failing_keys.clear()
        state.add_booking(make_booking(now))

        assert len(json.loads(store.data["bookings"])) == 2

    def test_saves_are_background_tasks_in_a_loop(self, state, memory_store, run, sample_profile):
        async def scenario():
            state.register(sample_profile)
            # Memory is updated before the write lands
            written_immediately = "registeredUsers" in memory_store.data
            await state.flush()
            return written_immediately

        assert run(scenario()) is False
        assert "registeredUsers" in memory_store.data

    def test_background_saves_land_in_order(self, state, memory_store, run, now):
        async def scenario():
            for hours in range(5):
                state.add_booking(make_booking(now + timedelta(hours=hours)))
            await state.flush()

        run(scenario())

        assert len(json.loads(memory_store.data["bookings"])) == 5
        assert len(json.loads(memory_store.data["notifications"])) == 5


class TestObservers:
    """Tests for subscribe/notify."""

    def test_notified_after_each_mutation(self, state, sample_profile, now):
        snapshots = []
        state.subscribe(snapshots.append)

        state.register(sample_profile)
        booking = state.add_booking(make_booking(now))
        state.cancel_booking(booking)
        state.log_out()

        assert len(snapshots) == 4
        assert all(isinstance(s, AppSnapshot) for s in snapshots)
        assert snapshots[0].current_user is not None
        assert snapshots[1].bookings == (booking,)
        assert len(snapshots[2].notifications) == 2
        assert snapshots[3].current_user is None

    def test_notified_after_load(self, state, run):
        snapshots = []
        state.subscribe(snapshots.append)

        run(state.load())

        assert len(snapshots) == 1

    def test_unsubscribe(self, state, sample_profile):
        snapshots = []
        unsubscribe = state.subscribe(snapshots.append)
        unsubscribe()
        unsubscribe()

        state.register(sample_profile)

        assert snapshots == []

    def test_failing_observer_does_not_break_mutation(self, state, memory_store, sample_profile):
        def broken(snapshot):
            raise RuntimeError("render failed")

        received = []
        state.subscribe(broken)
        state.subscribe(received.append)

        state.register(sample_profile)

        assert len(received) == 1
        assert "registeredUsers" in memory_store.data


class TestReads:
    """Tests for read helpers."""

    def test_bookings_for_current_user(self, state, now):
        state.register(make_profile("a@x.com"))
        mine_soon = state.add_booking(make_booking(now + timedelta(hours=2)))
        mine_later = state.add_booking(make_booking(now + timedelta(days=10)))
        state.add_booking(make_booking(now, owner="b@x.com"))

        assert state.bookings_for_current_user() == [mine_soon, mine_later]
        assert state.bookings_for_current_user(BookingStatus.SCHEDULED) == [mine_later]

    def test_bookings_without_session_are_unfiltered(self, state, now):
        state.add_booking(make_booking(now, owner="a@x.com"))
        state.add_booking(make_booking(now, owner="b@x.com"))

        assert len(state.bookings_for_current_user()) == 2

    def test_status_uses_injected_clock(self, memory_store):
        moment = datetime(2030, 1, 1, 8, 0)
        state = AppState(memory_store, clock=lambda: moment)
        booking = state.add_booking(make_booking(moment - timedelta(minutes=1)))

        assert state.status_of(booking) == BookingStatus.COMPLETED
