"""Form validation for CLI input.

The core trusts its inputs; these checks reproduce the rules of the sign-up,
profile and booking forms before anything reaches ``AppState``.
"""

import re

from fixit.domain.catalog import PROVINCES
from fixit.domain.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[\w\-.]+@([\w-]+\.)+[\w-]{2,4}$")
PHONE_PREFIXES = ("010", "011", "012", "015")
SYMBOLS = set("!@#$%^&*()_+-=[]{}|;:\".<>?/~`',")


def normalize_phone(value: str) -> str:
    """Strip surrounding whitespace and inner spaces or dashes."""
    return re.sub(r"[\s\-]", "", value.strip())


def validate_email(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValidationError("Please enter your email")
    if not EMAIL_PATTERN.match(value):
        raise ValidationError("Please enter a valid email address")
    return value


def validate_phone(value: str) -> str:
    """Validate a phone number and return it normalized."""
    if not value or not value.strip():
        raise ValidationError("Please enter your phone number")
    phone = normalize_phone(value)
    if not re.fullmatch(r"\d{11}", phone):
        raise ValidationError("Phone number must be exactly 11 digits")
    if not phone.startswith(PHONE_PREFIXES):
        raise ValidationError("Phone number must start with 010, 011, 012, or 015")
    return phone


def validate_password(value: str) -> str:
    """Apply the sign-up password rules."""
    if not value:
        raise ValidationError("Please enter a password")
    if len(value) < 8:
        raise ValidationError("Password must be at least 8 characters")
    if not re.search(r"[a-z]", value):
        raise ValidationError("Password must contain at least one lowercase letter")
    if not re.search(r"[A-Z]", value):
        raise ValidationError("Password must contain at least one uppercase letter")
    if not re.search(r"[0-9]", value):
        raise ValidationError("Password must contain at least one number")
    if not any(ch in SYMBOLS for ch in value):
        raise ValidationError("Password must contain at least one symbol")
    return value


def validate_new_password(value: str, minimum: int = 8) -> str:
    """Length-only check used when changing an existing password."""
    if not value:
        raise ValidationError("Please enter a new password")
    if len(value) < minimum:
        raise ValidationError(f"New password must be at least {minimum} characters")
    return value


def validate_province(value: str) -> str:
    """Match a province case-insensitively and return its canonical name."""
    for province in PROVINCES:
        if province.lower() == value.strip().lower():
            return province
    raise ValidationError(
        f"Unknown province '{value}'. Choose one of: {', '.join(PROVINCES)}"
    )
