"""Configuration management for the scrapbook application.

Values come from environment variables first and Streamlit secrets as a
fallback. A ``.env`` file is loaded on startup when present. Storage
selection is captured once per process in ``StorageSettings`` and passed
explicitly to the services that need it.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

try:
    import streamlit as st

    STREAMLIT_AVAILABLE = True
except ImportError:
    STREAMLIT_AVAILABLE = False

from .logging_config import get_logger

logger = get_logger(__name__)

STORAGE_ADAPTER_ENV = "STORAGE_ADAPTER"
GCS_BUCKET_ENV = "GCS_BUCKET"

DEFAULT_ENTRIES_DIR = Path("data") / "entries"
DEFAULT_UPLOADS_DIR = Path("public") / "uploads"
DEFAULT_PUBLIC_UPLOADS_PREFIX = "/uploads"

_TRUE_VALUES = ("true", "1", "yes", "on")


class Config:
    """Centralized configuration management using environment variables."""

    def __init__(self):
        self._cache = {}

    def get(self, key: str, default: Any = None, cast_type: type = str) -> Any:
        """Get configuration value from environment variables or Streamlit secrets.

        Args:
            key: Configuration key
            default: Default value if not found
            cast_type: Type to cast the value to (str, int, bool, float)

        Returns:
            Configuration value cast to the specified type
        """
        cache_key = f"{key}:{cast_type.__name__}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        value = os.getenv(key)

        if value is None and STREAMLIT_AVAILABLE:
            try:
                value = st.secrets.get(key)
            except Exception:  # nosec B110
                # No secrets file or not running inside Streamlit
                pass

        if value is None:
            value = default

        if value is not None:
            try:
                if cast_type is bool:
                    if isinstance(value, str):
                        value = value.lower() in _TRUE_VALUES  # type: ignore[assignment]
                    else:
                        value = bool(value)  # type: ignore[assignment]
                elif cast_type is not str:
                    value = cast_type(value)
            except (ValueError, TypeError) as e:
                logger.warning("config_cast_failed", key=key, cast_type=cast_type.__name__, error=str(e))
                value = default

        self._cache[cache_key] = value
        return value

    def is_development(self) -> bool:
        """Check if running in development mode."""
        environment = self.get("ENVIRONMENT", "development").lower()
        return environment in ["development", "dev", "local"]

    def clear_cache(self):
        """Clear configuration cache."""
        self._cache.clear()


_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_environment(env_file: str | os.PathLike[str] = ".env") -> bool:
    """Load variables from a dotenv file without overriding the real environment.

    Returns:
        True if the file existed and was loaded
    """
    if not os.path.exists(env_file):
        logger.debug("env_file_not_found", env_file=str(env_file))
        return False

    load_dotenv(dotenv_path=env_file, override=False)
    get_config().clear_cache()
    logger.info("env_file_loaded", env_file=str(env_file))
    return True


def get_env(key: str, default: Any = None, cast_type: type = str) -> Any:
    """Get environment variable with type casting."""
    return get_config().get(key, default, cast_type)


def is_development() -> bool:
    """Check if running in development mode."""
    return get_config().is_development()


def get_admin_password() -> str | None:
    """Get the shared admin password, or None when the gate is not configured."""
    return get_env("ADMIN_PASSWORD") or None


def get_session_secret() -> str:
    """Get the secret used to sign admin session tokens.

    Falls back to the admin password so a single variable is enough for a
    personal deployment.
    """
    return str(get_env("SESSION_SECRET") or get_env("ADMIN_PASSWORD") or "")


def get_session_ttl_hours() -> int:
    """Get admin session lifetime in hours."""
    return int(get_env("SESSION_TTL_HOURS", 24, int))


def get_max_file_size() -> int:
    """Get the maximum accepted upload size in bytes."""
    return int(get_env("MAX_FILE_SIZE", 50 * 1024 * 1024, int))


@dataclass(frozen=True)
class StorageSettings:
    """Storage configuration captured once at process start.

    Attributes:
        adapter_override: Value of STORAGE_ADAPTER, if any
        gcs_bucket: Remote bucket name; its presence selects the remote adapter
        gcs_project: Google Cloud project for the storage client
        gcs_public_acl: Upload remote objects with the publicRead ACL
        entries_dir: Directory holding one JSON document per entry
        uploads_dir: Directory holding uploaded photo bytes
        public_uploads_prefix: URL prefix under which uploads_dir is served
    """

    adapter_override: str | None = None
    gcs_bucket: str | None = None
    gcs_project: str | None = None
    gcs_public_acl: bool = True
    entries_dir: Path = DEFAULT_ENTRIES_DIR
    uploads_dir: Path = DEFAULT_UPLOADS_DIR
    public_uploads_prefix: str = DEFAULT_PUBLIC_UPLOADS_PREFIX

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "StorageSettings":
        """Build settings from an environment mapping.

        Args:
            env: Mapping to read from; defaults to the process configuration
                (environment variables, then Streamlit secrets)
        """
        if env is None:
            config = get_config()

            def read(key: str) -> str | None:
                value = config.get(key)
                return str(value) if value is not None else None

        else:

            def read(key: str) -> str | None:
                return env.get(key)

        prefix = read("SCRAPBOOK_PUBLIC_UPLOADS_PREFIX") or DEFAULT_PUBLIC_UPLOADS_PREFIX
        public_acl = read("GCS_PUBLIC_ACL")

        return cls(
            adapter_override=(read(STORAGE_ADAPTER_ENV) or "").strip().lower() or None,
            gcs_bucket=read(GCS_BUCKET_ENV) or None,
            gcs_project=read("GOOGLE_CLOUD_PROJECT") or None,
            gcs_public_acl=public_acl is None or public_acl.lower() in _TRUE_VALUES,
            entries_dir=Path(read("SCRAPBOOK_ENTRIES_DIR") or DEFAULT_ENTRIES_DIR),
            uploads_dir=Path(read("SCRAPBOOK_UPLOADS_DIR") or DEFAULT_UPLOADS_DIR),
            public_uploads_prefix="/" + prefix.strip("/"),
        )
