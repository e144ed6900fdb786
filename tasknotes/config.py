"""Settings read from environment variables (prefix ``TASKNOTES_``).

Only ambient concerns live here. The document location is fixed on purpose
(see ``tasknotes.adapters.textfile.document_store.default_file_location``).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

ENV_PREFIX = "TASKNOTES"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env_level(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    log_level: int = logging.WARNING
    log_file: Path | None = None


def load_settings() -> Settings:
    return Settings(
        log_level=_env_level(_k("LOG_LEVEL"), logging.WARNING),
        log_file=_env_path(_k("LOG_FILE")),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
