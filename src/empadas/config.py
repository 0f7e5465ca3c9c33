"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from dotenv import load_dotenv

# `.env.local` first so it takes precedence over `.env`; real env vars win over both.
load_dotenv(".env.local")
load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Empadas da Lia"
    DEBUG = False
    TESTING = False
    ADMIN_COOKIE_NAME = "admin_session"
    ADMIN_TOKEN_TTL_SECONDS = 60 * 60 * 24 * 7
    DRIVE_SCOPES = ("https://www.googleapis.com/auth/drive",)
    STORAGE_BACKENDS = ("drive", "local")
    REQUIRED_AUTH_ENV = ("JWT_SECRET", "ADMIN_USERNAME", "ADMIN_PASSWORD")
    REQUIRED_DRIVE_ENV = ("GOOGLE_SERVICE_ACCOUNT_JSON_BASE64", "GOOGLE_DRIVE_ADMIN_FOLDER_ID")

    def __init__(self) -> None:
        self.ADMIN_USERNAME = os.getenv("ADMIN_USERNAME")
        self.ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
        self.JWT_SECRET = os.getenv("JWT_SECRET")
        self.GOOGLE_SERVICE_ACCOUNT_JSON_BASE64 = os.getenv("GOOGLE_SERVICE_ACCOUNT_JSON_BASE64")
        self.GOOGLE_DRIVE_ADMIN_FOLDER_ID = os.getenv("GOOGLE_DRIVE_ADMIN_FOLDER_ID")
        self.DEV_MODE = _env_bool("EMPADAS_DEV_MODE", default=True)
        self.DEV_FALLBACK = _env_bool("EMPADAS_DEV_FALLBACK", default=self.DEV_MODE)
        self.LOG_TO_FILE = _env_bool("EMPADAS_LOG_TO_FILE", default=True)
        self.STORAGE_BACKEND = os.getenv("EMPADAS_STORAGE_BACKEND", "drive").strip().lower()
        if self.STORAGE_BACKEND not in self.STORAGE_BACKENDS:
            raise ValueError(
                f"EMPADAS_STORAGE_BACKEND must be one of {', '.join(self.STORAGE_BACKENDS)}."
            )
        self.DATA_DIR = self._resolve_data_dir()

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding local records and logs."""

        data_root = os.getenv("EMPADAS_DATA_DIR", ".local-data")
        return Path(data_root).expanduser().resolve()

    def missing_env(self, names: Iterable[str]) -> list[str]:
        """Return the names in `names` whose config value is unset or empty."""

        return [name for name in names if not getattr(self, name, None)]

    def env_presence(self) -> dict[str, bool]:
        """Report which required variables are configured, never their values."""

        names = (*self.REQUIRED_AUTH_ENV, *self.REQUIRED_DRIVE_ENV)
        return {name: bool(getattr(self, name, None)) for name in names}


class DevConfig(BaseConfig):
    """Development configuration with the local fallback enabled by default."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite: local storage, no log files."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.STORAGE_BACKEND = "local"
        self.LOG_TO_FILE = False


class ProductionConfig(BaseConfig):
    """Production configuration: secure cookies, no local fallback writes."""

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = False
        self.DEV_FALLBACK = _env_bool("EMPADAS_DEV_FALLBACK", default=False)
