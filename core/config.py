"""
Environment configuration for the study planner.

Values are read from the process environment (and a local .env file)
through small getter functions so tests can override them with
monkeypatch.setenv without reloading modules.
"""

from __future__ import annotations

import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from core.exceptions import ConfigurationError

# Load environment
load_dotenv()


# ---- Defaults ----

DEFAULT_STORAGE_BACKEND = "local"
DEFAULT_DB_NAME = "study_planner"
DEFAULT_COLLECTION_NAME = "plans"
DEFAULT_LOCAL_STORE_PATH = "data/plans.json"
DEFAULT_TIMEZONE = "UTC"
DEFAULT_REVISION_PATTERN = "7, 14, 30"

STORAGE_BACKENDS = ("local", "mongo")

_TRUTHY = {"true", "1", "yes"}


def _get_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def is_test_mode() -> bool:
    """Check if running in test mode."""
    return _get_bool("TEST_MODE")


def is_debug() -> bool:
    return _get_bool("DEBUG")


def use_json_logs() -> bool:
    return _get_bool("LOG_JSON")


def get_storage_backend() -> str:
    """
    Get the configured storage backend ("local" or "mongo").

    Raises:
        ConfigurationError: If STORAGE_BACKEND names an unknown backend
    """
    backend = os.getenv("STORAGE_BACKEND", DEFAULT_STORAGE_BACKEND).strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ConfigurationError(
            f"Unknown STORAGE_BACKEND: {backend!r}. Expected one of {', '.join(STORAGE_BACKENDS)}",
            context={"backend": backend},
        )
    return backend


def get_mongo_uri() -> str:
    mongo_uri = os.getenv("MONGO_URI")
    if not mongo_uri:
        raise ConfigurationError("MONGO_URI not found in environment variables")
    return mongo_uri


def get_db_name() -> str:
    """
    Get the MongoDB database name.

    In test mode the name gets a "test_" prefix so production plans
    are never touched.
    """
    name = os.getenv("MONGO_DB_NAME", DEFAULT_DB_NAME)
    return f"test_{name}" if is_test_mode() else name


def get_collection_name() -> str:
    return os.getenv("PLANS_COLLECTION", DEFAULT_COLLECTION_NAME)


def get_local_store_path() -> str:
    path = os.getenv("LOCAL_STORE_PATH", DEFAULT_LOCAL_STORE_PATH)
    if is_test_mode():
        head, tail = os.path.split(path)
        return os.path.join(head, f"test_{tail}")
    return path


def get_timezone() -> ZoneInfo:
    """
    Get the time zone that defines "today" for scheduling.

    Raises:
        ConfigurationError: If STUDY_TIMEZONE is not a valid IANA zone
    """
    name = os.getenv("STUDY_TIMEZONE", DEFAULT_TIMEZONE)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(
            f"Invalid STUDY_TIMEZONE: {name!r}",
            context={"timezone": name},
        ) from exc


def get_default_revision_pattern() -> str:
    return os.getenv("DEFAULT_REVISION_PATTERN", DEFAULT_REVISION_PATTERN)


def day_zero_revision_enabled() -> bool:
    """Whether register_session also records a completed same-day "D0" revision."""
    return _get_bool("DAY_ZERO_REVISION")
