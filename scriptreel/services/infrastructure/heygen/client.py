"""
HeyGen Client

Async HTTP client for the avatar video provider. Two calls are used:

    POST {base}/video/generate        -> {"data": {"video_id": ...}}
    GET  {base}/video/status/{id}     -> {"data": {"status": ..., "video_url": ...}}

Every failure leaves this module as a ScriptReelError: a missing credential is
a ConfigurationError raised before any request is built, and non-success
responses, transport errors and undecodable bodies become ProviderError.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from scriptreel.config import get_heygen_api_base, get_heygen_api_key
from scriptreel.core import ConfigurationError, LogTimer, ProviderError, get_logger
from scriptreel.models.status import ProviderStatus

logger = get_logger(__name__, service="heygen")

API_KEY_HEADER = "X-Api-Key"


@dataclass
class VideoStatus:
    """One status check result, with the raw status string kept for diagnostics."""
    video_id: str
    status: ProviderStatus
    raw_status: Any = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    error: Optional[str] = None


def _error_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    if isinstance(value, dict):
        return _error_text(value.get("message")) or _error_text(value.get("detail"))
    return None


def extract_error_message(response: httpx.Response) -> str:
    """Message from the provider's structured error body, else the transport status text."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = _error_text(body.get("message")) or _error_text(body.get("error"))
        if message:
            return message
    reason = response.reason_phrase or str(response.status_code)
    return f"HeyGen API error: {reason}"


class HeyGenClient:
    """Video provider client over ``httpx.AsyncClient``.

    Args:
        api_key: Credential; read from ``HEYGEN_API_KEY`` at call time when omitted
        base_url: API root; defaults to ``HEYGEN_API_BASE``
        timeout: Transport timeout per request
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self.base_url = (base_url or get_heygen_api_base()).rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def ensure_configured(self) -> str:
        """Return the credential or raise ConfigurationError."""
        api_key = self._api_key or get_heygen_api_key()
        if not api_key:
            raise ConfigurationError("HeyGen API key not configured (set HEYGEN_API_KEY)")
        return api_key

    def _headers(self) -> Dict[str, str]:
        api_key = self.ensure_configured()
        return {
            API_KEY_HEADER: api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = self._headers()
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(method, url, headers=headers, json=payload)
        except httpx.HTTPError as exc:
            raise ProviderError(f"HeyGen request failed: {exc}") from exc

        if not response.is_success:
            raise ProviderError(
                extract_error_message(response),
                status_code=response.status_code,
                raw_body=response.text,
            )

        try:
            body = response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            raise ProviderError(
                "HeyGen returned an invalid JSON response",
                status_code=response.status_code,
                raw_body=response.text,
            ) from exc
        if not isinstance(body, dict):
            raise ProviderError(
                "HeyGen returned an unexpected response shape",
                status_code=response.status_code,
                raw_body=response.text,
            )
        return body

    async def create_video(self, payload: Dict[str, Any]) -> str:
        """Submit a generation request and return the provider's video id."""
        with LogTimer(logger, "heygen.create_video"):
            body = await self._request("POST", "/video/generate", payload)
        data = body.get("data") or {}
        video_id = data.get("video_id") if isinstance(data, dict) else None
        if not video_id:
            raise ProviderError("No video ID returned from provider", raw_body=json.dumps(body))
        return str(video_id)

    async def get_status(self, video_id: str) -> VideoStatus:
        """Query the status of one job."""
        body = await self._request("GET", f"/video/status/{quote(video_id, safe='')}")
        data = body.get("data")
        if not isinstance(data, dict):
            raise ProviderError("Status response has no data", raw_body=json.dumps(body))
        raw_status = data.get("status")
        return VideoStatus(
            video_id=str(data.get("video_id") or video_id),
            status=ProviderStatus.parse(raw_status),
            raw_status=raw_status,
            video_url=data.get("video_url") or None,
            thumbnail_url=data.get("thumbnail_url") or None,
            error=_error_text(data.get("error")),
        )
