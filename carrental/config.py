"""Configuration management: one Settings object built at process start."""

import logging
import os
from pathlib import Path
from typing import Optional

import pytz

from carrental.utils.constants import DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_DATA_PATH = BASE_DIR / "data.pkl"

_TRUTHY = {"1", "true", "yes", "on"}


class Settings:
    """Application settings passed by reference to the store and token layer."""

    def __init__(
        self,
        secret_key: str = "dev-secret-change-me",
        jwt_secret: str = "dev-jwt-secret-change-me",
        jwt_expires_hours: int = 24,
        data_path: Optional[str] = None,
        timezone: str = DEFAULT_TIMEZONE,
        log_level: str = "INFO",
        seed_defaults: bool = True,
        app_env: str = "development",
    ):
        if timezone not in pytz.all_timezones_set:
            raise ValueError(f"Unknown timezone: {timezone!r}")
        self.secret_key = secret_key
        self.jwt_secret = jwt_secret
        self.jwt_expires_hours = jwt_expires_hours
        self.data_path = data_path
        self.timezone = timezone
        self.log_level = log_level.upper()
        self.seed_defaults = seed_defaults
        self.app_env = app_env

    @property
    def tz(self):
        return pytz.timezone(self.timezone)

    def __repr__(self) -> str:
        # no secrets
        return (f"Settings(app_env={self.app_env!r}, data_path={self.data_path!r}, "
                f"timezone={self.timezone!r}, log_level={self.log_level!r})")


def load_settings() -> Settings:
    """
    Load settings from the environment.
    DATA_PATH set to an empty string keeps the store in memory only.
    """
    data_path = os.getenv("DATA_PATH")
    if data_path is None:
        data_path = str(DEFAULT_DATA_PATH)
    data_path = data_path.strip() or None

    raw_hours = os.getenv("JWT_EXPIRES_HOURS", "24").strip()
    try:
        hours = int(raw_hours)
    except ValueError:
        raise ValueError(f"JWT_EXPIRES_HOURS must be an integer, got {raw_hours!r}") from None

    secret_key = os.getenv("SECRET_KEY", "dev-secret-change-me")
    jwt_secret = os.getenv("JWT_SECRET") or secret_key
    if jwt_secret.startswith("dev-"):
        logger.warning("JWT_SECRET is not set, using development secret")

    return Settings(
        secret_key=secret_key,
        jwt_secret=jwt_secret,
        jwt_expires_hours=hours,
        data_path=data_path,
        timezone=os.getenv("TIMEZONE", DEFAULT_TIMEZONE).strip(),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        seed_defaults=os.getenv("SEED_DEFAULTS", "true").strip().lower() in _TRUTHY,
        app_env=os.getenv("APP_ENV", "development"),
    )
