"""
Shared configuration for the log-tracker client.
Loads environment variables from .env file.
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from project root
_env_path = Path(__file__).resolve().parent / ".env"
if not _env_path.exists():
    _env_path = Path.cwd() / ".env"
load_dotenv(_env_path)

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


class Settings:
    """Client settings loaded from environment variables."""

    # Collector
    LOG_TRACKER_URL: str = os.getenv("LOG_TRACKER_URL", "http://localhost:8000")
    LOG_TRACKER_APPLICATION_ID: str = os.getenv("LOG_TRACKER_APPLICATION_ID", "")
    LOG_TRACKER_PUBLIC_KEY: str = os.getenv("LOG_TRACKER_PUBLIC_KEY", "")
    LOG_TRACKER_API_PREFIX: str = os.getenv("LOG_TRACKER_API_PREFIX", "/api")

    # Sessions
    LOG_TRACKER_SESSION_TIMEOUT_MINUTES: float = float(
        os.getenv("LOG_TRACKER_SESSION_TIMEOUT_MINUTES", "30")
    )

    # Redis (optional session store)
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")

    # App
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()


def configure_logging(level: str = None):
    """Apply the shared log format. Only entry points should call this."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
