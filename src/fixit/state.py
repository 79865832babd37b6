"""Application state facade.

``AppState`` composes the account directory, session, booking ledger and
notification log, and is the only object the presentation layer talks to.
It is constructed explicitly with its store; there is no module-level
instance.

Mutations run to completion against in-memory state under a single lock,
then notify observers and schedule a save. Inside a running event loop the
save is a background task (await ``flush()`` to wait for it); without one,
the save runs before the mutation returns.
"""

import asyncio
import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from fixit.domain.accounts import AccountDirectory
from fixit.domain.bookings import BookingLedger, derive_status, filter_by_status
from fixit.domain.entities import (
    AccountRecord,
    AppSnapshot,
    Booking,
    BookingStatus,
    NotificationEntry,
    UserProfile,
)
from fixit.domain.errors import DeserializationError
from fixit.domain.notifications import NotificationLog
from fixit.domain.session import Session
from fixit.storage import serializers
from fixit.storage.base import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

Observer = Callable[[AppSnapshot], None]


class AppState:
    """Account and booking state with load/save orchestration."""

    def __init__(self, store: KeyValueStore, clock: Callable[[], datetime] = datetime.now):
        """Initialize application state.

        Args:
            store: Key/value store holding the persisted documents
            clock: Source of the current time for notifications and status
        """
        self.store = store
        self.clock = clock
        self.session = Session()
        self.directory = AccountDirectory(self.session)
        self.notification_log = NotificationLog(clock)
        self.ledger = BookingLedger(self.session, self.notification_log)

        self._mutex = threading.RLock()
        self._save_lock = asyncio.Lock()
        self._pending: set[asyncio.Task] = set()
        self._observers: list[Observer] = []
        self._loading = False

    # Read access
    @property
    def current_user(self) -> Optional[UserProfile]:
        return self.session.current_user

    @property
    def bookings(self) -> list[Booking]:
        return self.ledger.bookings

    @property
    def notifications(self) -> list[NotificationEntry]:
        return self.notification_log.entries

    def snapshot(self) -> AppSnapshot:
        """Return an immutable view of the current state."""
        return AppSnapshot(
            current_user=self.session.current_user,
            bookings=tuple(self.ledger.bookings),
            notifications=tuple(self.notification_log.entries),
        )

    def lookup(self, email: str) -> Optional[AccountRecord]:
        return self.directory.lookup(email)

    def validate_credentials(self, email: str, password: str) -> bool:
        return self.directory.validate_credentials(email, password)

    def status_of(self, booking: Booking) -> BookingStatus:
        return derive_status(booking, self.clock())

    def bookings_for_current_user(self, status: Optional[BookingStatus] = None) -> list[Booking]:
        """List the session user's bookings, optionally narrowed by status.

        With no session user every booking is returned.
        """
        owned = self.ledger.for_owner(self.session.email)
        return filter_by_status(owned, status, self.clock())

    # Observers
    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer; returns a callable that unsubscribes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                logger.exception("Observer %r failed", observer)

    # Mutations
    def register(self, profile: UserProfile) -> UserProfile:
        """Register a user and log them in."""
        with self._mutex:
            stored = self.directory.register(profile)
        self._after_mutation()
        return stored

    def log_in(self, profile: UserProfile) -> None:
        with self._mutex:
            self.session.log_in(profile)
        self._after_mutation()

    def log_in_with_credentials(self, email: str, password: str) -> Optional[UserProfile]:
        """Log in if the credentials are valid.

        Returns:
            The directory's profile, or None if the credentials were rejected
        """
        if not self.directory.validate_credentials(email, password):
            logger.info("Rejected credentials for %s", email)
            return None
        record = self.directory.lookup(email)
        self.log_in(record.profile)
        return record.profile

    def log_out(self) -> None:
        with self._mutex:
            self.session.log_out()
        self._after_mutation()

    def update_profile(self, email: str, name: str, phone: str) -> None:
        """Update name and phone; unknown emails are ignored."""
        with self._mutex:
            changed = self.directory.update_profile(email, name, phone)
        if changed:
            self._after_mutation()

    def update_email_and_password(
        self, old_email: str, new_email: str, new_password: Optional[str] = None
    ) -> None:
        """Change email and/or password.

        Raises:
            DuplicateEmailError: If ``new_email`` belongs to another account
        """
        with self._mutex:
            changed = self.directory.update_email_and_password(old_email, new_email, new_password)
        if changed:
            self._after_mutation()

    def change_password(self, email: str, old_password: str, new_password: str) -> bool:
        """Replace a password after checking the old one.

        Returns:
            False if ``old_password`` does not match
        """
        if not self.directory.validate_credentials(email, old_password):
            return False
        self.update_email_and_password(email, email, new_password)
        return True

    def add_booking(self, booking: Booking) -> Booking:
        with self._mutex:
            stored = self.ledger.add(booking)
        self._after_mutation()
        return stored

    def cancel_booking(self, booking: Booking) -> None:
        with self._mutex:
            self.ledger.cancel(booking)
        self._after_mutation()

    def _after_mutation(self) -> None:
        self._notify()
        self._schedule_save()

    # Persistence
    def _schedule_save(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self.save())
            return

        task = loop.create_task(self.save())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def flush(self) -> None:
        """Wait for all scheduled saves to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def load(self) -> None:
        """Load persisted state.

        Accounts are loaded before the session is restored. A malformed
        document empties only its own collection; errors are logged and not
        raised. A call made while another load is in flight returns at once.
        """
        if self._loading:
            logger.debug("Load already in progress")
            return
        self._loading = True
        try:
            records = await self._read(
                serializers.USERS_KEY, serializers.load_accounts, dict
            )
            bookings = await self._read(
                serializers.BOOKINGS_KEY,
                lambda raw: serializers.load_bookings(raw, self.clock),
                list,
            )
            notifications = await self._read(
                serializers.NOTIFICATIONS_KEY,
                lambda raw: serializers.load_notifications(raw, self.clock),
                list,
            )

            with self._mutex:
                if records is not None:
                    self.directory.records.clear()
                    self.directory.records.update(records)
                if bookings is not None:
                    self.ledger.bookings[:] = bookings
                if notifications is not None:
                    self.notification_log.entries[:] = notifications

            await self._restore_session()
            self._notify()
        finally:
            self._loading = False

    async def _read(self, key: str, decode: Callable, empty: type):
        """Read and decode one key.

        Returns None when nothing is stored, so in-memory data is kept, and
        an empty collection when the stored data is unusable.
        """
        try:
            raw = await self.store.get(key)
        except StorageError:
            logger.exception("Could not read '%s'", key)
            return empty()
        if raw is None:
            return None
        try:
            return decode(raw)
        except DeserializationError:
            logger.exception("Discarding unreadable '%s'", key)
            return empty()

    async def _restore_session(self) -> None:
        try:
            email = await self.store.get(serializers.SESSION_KEY)
        except StorageError:
            logger.exception("Could not read '%s'", serializers.SESSION_KEY)
            return

        with self._mutex:
            resolved = self.session.restore(self.directory, email)
        if not resolved:
            try:
                await self.store.remove(serializers.SESSION_KEY)
            except StorageError:
                logger.exception("Could not discard stale session")

    async def save(self) -> None:
        """Write every document; each key is written independently.

        Documents are serialized before any write starts, so the save
        reflects the state at the moment it began. A failed write is logged
        and does not undo the writes that already succeeded.
        """
        with self._mutex:
            writes = [
                (serializers.USERS_KEY, serializers.dump_accounts(self.directory.records)),
                (serializers.BOOKINGS_KEY, serializers.dump_bookings(self.ledger.bookings)),
                (
                    serializers.NOTIFICATIONS_KEY,
                    serializers.dump_notifications(self.notification_log.entries),
                ),
                (serializers.SESSION_KEY, self.session.email),
            ]

        async with self._save_lock:
            for key, value in writes:
                try:
                    if value is None:
                        await self.store.remove(key)
                    else:
                        await self.store.set(key, value)
                except StorageError:
                    logger.exception("Could not save '%s'", key)
