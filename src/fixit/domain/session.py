"""Authenticated session."""

import logging
from typing import TYPE_CHECKING, Optional

from fixit.domain.entities import UserProfile, normalize_email

if TYPE_CHECKING:
    from fixit.domain.accounts import AccountDirectory

logger = logging.getLogger(__name__)


class Session:
    """Holds the currently authenticated profile, if any.

    Only the normalized email is persisted; the profile is resolved back
    through the account directory on startup.
    """

    def __init__(self):
        self.current_user: Optional[UserProfile] = None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    @property
    def email(self) -> Optional[str]:
        """Normalized email of the current user, or None."""
        if self.current_user is None:
            return None
        return normalize_email(self.current_user.email)

    def is_current(self, email: str) -> bool:
        """Return True if ``email`` identifies the current user."""
        return self.email is not None and self.email == normalize_email(email)

    def log_in(self, profile: UserProfile) -> None:
        self.current_user = profile
        logger.debug("Session opened for %s", self.email)

    def log_out(self) -> None:
        logger.debug("Session closed for %s", self.email)
        self.current_user = None

    def restore(self, directory: "AccountDirectory", email: Optional[str]) -> bool:
        """Resolve a persisted session email against the directory.

        Args:
            directory: Populated account directory
            email: Persisted session email, or None if nothing was stored

        Returns:
            False if a stored email no longer resolves to an account and the
            stale value should be discarded, True otherwise
        """
        if not email:
            return True

        record = directory.lookup(email)
        if record is None:
            logger.warning("Discarding session for unknown account %s", email)
            self.current_user = None
            return False

        self.current_user = record.profile
        return True
