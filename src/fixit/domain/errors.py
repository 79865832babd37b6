"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input rejected by a presentation-layer validator."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DuplicateEmailError(ConflictError):
    """Destination email is already registered to another account."""


class DeserializationError(DomainError):
    """Persisted data could not be decoded into domain entities."""


def email_already_in_use(email: str) -> str:
    """Return message for an email change that collides with another account."""
    return f"Email already in use: {email}"


def email_already_registered() -> str:
    """Return message for a registration attempt with a known email."""
    return "Email already registered. Please login."


def malformed_document(key: str, reason: str) -> str:
    """Return message for a stored document that cannot be decoded."""
    return f"Malformed data under '{key}': {reason}"
