"""
HeyGen - avatar video provider integration.
"""

from .client import HeyGenClient, VideoStatus, extract_error_message, API_KEY_HEADER

__all__ = [
    "HeyGenClient",
    "VideoStatus",
    "extract_error_message",
    "API_KEY_HEADER",
]
