"""
Application configuration and settings
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from .constants import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    DEFAULT_CORS_ORIGINS,
    HEYGEN_API_BASE,
    DEFAULT_AVATAR_ID,
    DEFAULT_VOICE_ID,
    VIDEO_WIDTH,
    VIDEO_HEIGHT,
    POLL_INITIAL_DELAY_SECONDS,
    POLL_INTERVAL_SECONDS,
    POLL_MAX_ATTEMPTS,
    POLL_TIMEOUT_MESSAGE,
    MIN_SCRIPT_VARIATIONS,
    MAX_SCRIPT_VARIATIONS,
    DEFAULT_SCRIPT_MODEL,
    VIDEOS_COLLECTION,
    SCRIPTS_COLLECTION,
    VIDEOS_PAGE_SIZE,
)


def _env_float(name: str, default: float, minimum: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return max(float(raw), minimum)
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return max(int(raw), minimum)
    except (TypeError, ValueError):
        return default


# Base directories
PACKAGE_DIR = Path(__file__).parent.parent
PROJECT_DIR = PACKAGE_DIR.parent


def get_store_data_dir() -> Path:
    """Root directory of the document store (``STORE_DATA_DIR``)."""
    raw = os.getenv("STORE_DATA_DIR", "").strip()
    return Path(raw) if raw else PROJECT_DIR / "store_data"


def get_cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


# Credentials are read at call time so a missing key is reported per request.
def get_heygen_api_key() -> Optional[str]:
    value = os.getenv("HEYGEN_API_KEY", "").strip()
    return value or None


def get_heygen_api_base() -> str:
    return os.getenv("HEYGEN_API_BASE", HEYGEN_API_BASE).rstrip("/")


def get_default_avatar_id() -> str:
    return os.getenv("HEYGEN_DEFAULT_AVATAR_ID", "").strip() or DEFAULT_AVATAR_ID


def get_default_voice_id() -> str:
    return os.getenv("HEYGEN_DEFAULT_VOICE_ID", "").strip() or DEFAULT_VOICE_ID


def get_script_model() -> str:
    return os.getenv("SCRIPT_MODEL", "").strip() or DEFAULT_SCRIPT_MODEL


def get_videos_page_size() -> int:
    return _env_int("VIDEOS_PAGE_SIZE", VIDEOS_PAGE_SIZE, 1)


@dataclass(frozen=True)
class PollSettings:
    """Timing of the provider status-polling protocol."""
    initial_delay: float = POLL_INITIAL_DELAY_SECONDS
    interval: float = POLL_INTERVAL_SECONDS
    max_attempts: int = POLL_MAX_ATTEMPTS
    timeout_message: str = POLL_TIMEOUT_MESSAGE

    @classmethod
    def from_env(cls) -> "PollSettings":
        return cls(
            initial_delay=_env_float("VIDEO_POLL_INITIAL_DELAY_SECONDS", POLL_INITIAL_DELAY_SECONDS, 0.0),
            interval=_env_float("VIDEO_POLL_INTERVAL_SECONDS", POLL_INTERVAL_SECONDS, 0.0),
            max_attempts=_env_int("VIDEO_POLL_MAX_ATTEMPTS", POLL_MAX_ATTEMPTS, 1),
        )


__all__ = [
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "HEYGEN_API_BASE",
    "DEFAULT_AVATAR_ID",
    "DEFAULT_VOICE_ID",
    "VIDEO_WIDTH",
    "VIDEO_HEIGHT",
    "POLL_INITIAL_DELAY_SECONDS",
    "POLL_INTERVAL_SECONDS",
    "POLL_MAX_ATTEMPTS",
    "POLL_TIMEOUT_MESSAGE",
    "MIN_SCRIPT_VARIATIONS",
    "MAX_SCRIPT_VARIATIONS",
    "DEFAULT_SCRIPT_MODEL",
    "VIDEOS_COLLECTION",
    "SCRIPTS_COLLECTION",
    "VIDEOS_PAGE_SIZE",
    "PACKAGE_DIR",
    "PROJECT_DIR",
    "PollSettings",
    "get_store_data_dir",
    "get_cors_origins",
    "get_heygen_api_key",
    "get_heygen_api_base",
    "get_default_avatar_id",
    "get_default_voice_id",
    "get_script_model",
    "get_videos_page_size",
]
