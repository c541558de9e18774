"""
Core Exceptions
Standardized error taxonomy for the application.

Every failure that leaves a service boundary is one of these kinds, so routes
and the lifecycle controller never see a raw transport exception.
"""

from typing import Any, Dict, Optional


class ScriptReelError(Exception):
    """Base exception for all application errors."""
    kind = "error"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def details(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message, "kind": self.kind}
        details = self.details()
        if details:
            payload["details"] = details
        return payload


class ValidationError(ScriptReelError):
    """Bad caller input. Never retried."""
    kind = "validation"
    http_status = 400


class ConfigurationError(ScriptReelError):
    """A required setting (usually a credential) is missing."""
    kind = "configuration"
    http_status = 500


class ProviderError(ScriptReelError):
    """Non-success response, or unusable payload, from the video provider."""
    kind = "provider"
    http_status = 502

    def __init__(self, message: str, status_code: Optional[int] = None, raw_body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.raw_body = raw_body

    def details(self) -> Dict[str, Any]:
        return {"status": self.status_code, "raw_body": self.raw_body}


class GenerationTimeoutError(ScriptReelError):
    """Poll bound exceeded while the provider still reported work in progress."""
    kind = "timeout"
    http_status = 504


class PersistenceError(ScriptReelError):
    """Store write failed after the provider already produced the video."""
    kind = "persistence"
    http_status = 500

    def __init__(self, message: str, video_url: Optional[str] = None):
        super().__init__(message)
        self.video_url = video_url

    def details(self) -> Dict[str, Any]:
        return {"video_url": self.video_url} if self.video_url else {}


class AlreadyInProgressError(ScriptReelError):
    """A video job is already active for this invocation context."""
    kind = "already_in_progress"
    http_status = 409


class NotFoundError(ScriptReelError):
    kind = "not_found"
    http_status = 404


class AuthenticationError(ScriptReelError):
    kind = "authentication"
    http_status = 401


class ScriptGenerationError(ScriptReelError):
    """The script generation provider failed or returned nothing usable."""
    kind = "script_generation"
    http_status = 502


class InternalError(ScriptReelError):
    """An unexpected exception escaped a lifecycle run."""
    kind = "internal"
    http_status = 500
