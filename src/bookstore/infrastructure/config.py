"""Runtime settings, loaded from ``BOOKSTORE_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "BOOKSTORE_"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str = f"sqlite:///{_DATA_DIR / 'bookstore.db'}"
    log_level: str = "WARNING"
    log_json: bool = False
    echo_sql: bool = False


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build settings from the environment, falling back to defaults.

    ``BOOKSTORE_DATABASE_URL``, ``BOOKSTORE_LOG_LEVEL``, ``BOOKSTORE_LOG_JSON``
    and ``BOOKSTORE_ECHO_SQL`` are recognised; anything else with the prefix
    is ignored.
    """
    env = os.environ if environ is None else environ
    values: dict[str, str] = {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in env.items()
        if key.startswith(ENV_PREFIX)
    }

    defaults = Settings()
    return Settings(
        database_url=values.get("database_url") or defaults.database_url,
        log_level=(values.get("log_level") or defaults.log_level).upper(),
        log_json=_flag(values.get("log_json"), defaults.log_json),
        echo_sql=_flag(values.get("echo_sql"), defaults.echo_sql),
    )


def _flag(raw: str | None, default: bool) -> bool:
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in _TRUTHY
