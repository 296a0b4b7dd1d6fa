"""
Configuration for the bookstore API.

``Settings`` reads every value from environment variables when it is
instantiated. A ``.env`` file in the working directory, if present, is
loaded first so local development does not need exported variables.
The default ``data`` directory is also relative to the working
directory, never to the installed package.
Tests build their own ``Settings`` instance and pass it to
``create_app``.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path.cwd() / ".env")


def env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _default_data_dir() -> Path:
    raw = os.getenv("BOOKSTORE_DATA_DIR", "").strip()
    return Path(raw) if raw else Path.cwd() / "data"


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Bookstore API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    host: str = field(default_factory=lambda: os.getenv("BOOKSTORE_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    data_dir: Path = field(default_factory=_default_data_dir)

    # Shared-secret gate on mutating routes. The key is compared for
    # equality with the ``x-api-key`` header; it is not a real
    # credential system.
    auth_enabled: bool = field(default_factory=lambda: env_bool("BOOKSTORE_AUTH_ENABLED", True))
    api_key: str = field(default_factory=lambda: os.getenv("BOOKSTORE_API_KEY", "admin123"))

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("BOOKSTORE_LOG_FILE", "").strip())


settings = Settings()
