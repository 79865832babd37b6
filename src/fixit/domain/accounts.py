"""Account directory domain service."""

import logging
from dataclasses import replace
from typing import Optional

from fixit.domain.credentials import hash_password, verify_password
from fixit.domain.entities import AccountRecord, UserProfile, normalize_email
from fixit.domain.errors import DuplicateEmailError, email_already_in_use
from fixit.domain.session import Session

logger = logging.getLogger(__name__)


class AccountDirectory:
    """Registered accounts keyed by normalized email."""

    def __init__(self, session: Session):
        """Initialize account directory.

        Args:
            session: Session kept consistent with profile edits
        """
        self.session = session
        self.records: dict[str, AccountRecord] = {}

    def register(self, profile: UserProfile) -> UserProfile:
        """Register a user and make them the active session user.

        An existing record with the same normalized email is replaced.
        Callers that must reject duplicates check ``lookup`` first.

        Args:
            profile: Profile carrying the plaintext password

        Returns:
            The stored profile, whose password is now a digest
        """
        key = normalize_email(profile.email)
        digest = hash_password(profile.password)
        stored = replace(profile, password=digest)

        if key in self.records:
            logger.debug("Overwriting existing account %s", key)
        self.records[key] = AccountRecord(email=key, password=digest, profile=stored)
        self.session.log_in(stored)
        return stored

    def lookup(self, email: str) -> Optional[AccountRecord]:
        """Get account by email (case-insensitive)."""
        return self.records.get(normalize_email(email))

    def validate_credentials(self, email: str, password: str) -> bool:
        """Return True if ``password`` matches the stored credential."""
        record = self.lookup(email)
        if record is None:
            return False
        return verify_password(password, record.password)

    def update_profile(self, email: str, name: str, phone: str) -> bool:
        """Update name and phone in place.

        Returns:
            False if no account is registered under ``email``
        """
        record = self.lookup(email)
        if record is None:
            return False

        record.profile.name = name
        record.profile.phone = phone
        current = self.session.current_user
        if current is not None and self.session.is_current(email):
            current.name = name
            current.phone = phone
        return True

    def update_email_and_password(
        self, old_email: str, new_email: str, new_password: Optional[str] = None
    ) -> bool:
        """Change an account's email and/or password.

        Changing the email re-keys the directory entry. An empty
        ``new_password`` is treated as no password change.

        Returns:
            False if no account is registered under ``old_email``

        Raises:
            DuplicateEmailError: If ``new_email`` belongs to another account
        """
        old_key = normalize_email(old_email)
        new_key = normalize_email(new_email)
        record = self.records.get(old_key)
        if record is None:
            return False

        digest = hash_password(new_password) if new_password else None
        was_current = self.session.is_current(old_key)

        if old_key != new_key:
            if new_key in self.records:
                raise DuplicateEmailError(email_already_in_use(new_key))

            profile = replace(
                record.profile,
                email=new_email,
                password=digest or record.profile.password,
            )
            del self.records[old_key]
            self.records[new_key] = AccountRecord(
                email=new_key, password=digest or record.password, profile=profile
            )
        elif digest is not None:
            profile = replace(record.profile, password=digest)
            self.records[old_key] = AccountRecord(
                email=record.email, password=digest, profile=profile
            )
        else:
            return True

        if was_current:
            self.session.log_in(profile)
        return True
