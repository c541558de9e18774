"""
Constants configuration

API settings, provider defaults and the status-polling protocol.
"""

# API settings
API_TITLE = "ScriptReel API"
API_DESCRIPTION = "Generate narration scripts and turn them into talking-avatar videos"
API_VERSION = "1.0.0"

# CORS origins
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://localhost:5173",
]

# Video provider (HeyGen v2)
HEYGEN_API_BASE = "https://api.heygen.com/v2"
DEFAULT_AVATAR_ID = "32dbf2775e394a51a96c75e5aadeeb86"
DEFAULT_VOICE_ID = "bf6c84a338974305a21c51edcaa77ec0"
VIDEO_WIDTH = 1280
VIDEO_HEIGHT = 720

# Status polling protocol
POLL_INITIAL_DELAY_SECONDS = 3.0
POLL_INTERVAL_SECONDS = 5.0
POLL_MAX_ATTEMPTS = 60
POLL_TIMEOUT_MESSAGE = "Video generation is taking longer than expected. Please check back later."

# Script generation
MIN_SCRIPT_VARIATIONS = 3
MAX_SCRIPT_VARIATIONS = 5
DEFAULT_SCRIPT_MODEL = "gemini-2.5-flash"

# Store collections
VIDEOS_COLLECTION = "videos"
SCRIPTS_COLLECTION = "scripts"
VIDEOS_PAGE_SIZE = 12

__all__ = [
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "DEFAULT_CORS_ORIGINS",
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
]
