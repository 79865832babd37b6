"""Configuration read from environment variables.

Values are resolved when ``Settings`` is instantiated, so tests can
monkeypatch the environment and build a fresh instance.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    return value if value else default


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    db_path: Optional[str] = field(default_factory=lambda: _env("FIXIT_DB_PATH"))
    log_level: str = field(default_factory=lambda: _env("FIXIT_LOG_LEVEL", "WARNING"))
    log_file: Optional[str] = field(default_factory=lambda: _env("FIXIT_LOG_FILE"))
