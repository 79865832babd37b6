"""Password hashing and verification.

Digests are unsalted SHA-256 hex strings. Stored credentials that do not
look like a digest are treated as legacy plaintext and compared directly.
A plaintext password that is itself 64 hex characters cannot be told apart
from a digest and will be checked as one.
"""

import hashlib
import re

DIGEST_PATTERN = re.compile(r"[0-9a-fA-F]{64}")


def hash_password(password: str) -> str:
    """Return the lowercase SHA-256 hex digest of ``password``."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def is_digest(stored: str) -> bool:
    """Return True if ``stored`` has the shape of a SHA-256 hex digest."""
    return DIGEST_PATTERN.fullmatch(stored) is not None


def verify_password(password: str, stored: str) -> bool:
    """Check ``password`` against a stored digest or legacy plaintext."""
    if is_digest(stored):
        return hash_password(password) == stored
    return stored == password
