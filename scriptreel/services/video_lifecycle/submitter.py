"""
Video Job Submitter

Turns a script into one provider generation request. The request only ever
carries the sanitized narration text.
"""

from typing import Any, Dict, Optional

from scriptreel.config import (
    VIDEO_HEIGHT,
    VIDEO_WIDTH,
    get_default_avatar_id,
    get_default_voice_id,
)
from scriptreel.core import ValidationError, get_logger, sanitize_script
from scriptreel.services.infrastructure.heygen import HeyGenClient

logger = get_logger(__name__, service="video_lifecycle")


def build_generation_payload(
    cleaned_script: str,
    avatar_id: str,
    voice_id: str,
    title: Optional[str] = None,
) -> Dict[str, Any]:
    """Provider request body for one avatar narrating ``cleaned_script``."""
    payload: Dict[str, Any] = {
        "video_inputs": [
            {
                "character": {"type": "avatar", "avatar_id": avatar_id},
                "voice": {"type": "text", "input_text": cleaned_script, "voice_id": voice_id},
            }
        ],
        "dimension": {"width": VIDEO_WIDTH, "height": VIDEO_HEIGHT},
    }
    if title:
        payload["title"] = title
    return payload


class VideoJobSubmitter:
    """Validates, sanitizes and submits scripts to the video provider."""

    def __init__(self, client: Optional[HeyGenClient] = None):
        self.client = client or HeyGenClient()

    def validate(self, script: str) -> None:
        """Fail fast on input and configuration problems; no network call is made.

        Raises:
            ValidationError: ``script`` is empty or whitespace-only, or only
                markers and labels
            ConfigurationError: the provider credential is absent
        """
        if script is None or not script.strip():
            raise ValidationError("Script is required")
        if not sanitize_script(script):
            raise ValidationError("Script contains no narratable text")
        self.client.ensure_configured()

    async def submit(
        self,
        script: str,
        avatar_id: Optional[str] = None,
        voice_id: Optional[str] = None,
        title: Optional[str] = None,
    ) -> str:
        """Submit ``script`` for generation and return the provider job id.

        Raises:
            ValidationError: blank script
            ConfigurationError: missing credential, before any request
            ProviderError: non-success response or no job id in the reply
        """
        self.validate(script)
        payload = build_generation_payload(
            sanitize_script(script),
            avatar_id or get_default_avatar_id(),
            voice_id or get_default_voice_id(),
            title,
        )
        job_id = await self.client.create_video(payload)
        logger.info("Video job submitted", extra={"provider_job_id": job_id})
        return job_id
