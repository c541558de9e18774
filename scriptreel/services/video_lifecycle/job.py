"""
VideoJob - the transient entity driven through one lifecycle run.

State machine::

    SUBMITTING --begin_polling(job_id)--> POLLING --complete()--> COMPLETED
        |                                    |------fail()------> FAILED
        |---------------fail()-------------->|----time_out()----> TIMED_OUT

Transitions enforce the entity's invariants: ``video_url`` is set only in
COMPLETED, ``error_message`` and ``error_kind`` only in FAILED/TIMED_OUT, and
``job_id`` is assigned once, on entering POLLING. ``error_kind`` is the
``kind`` of the application error behind the failure (``timeout`` for
TIMED_OUT).
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Optional

from scriptreel.core import GenerationTimeoutError, ProviderError, ScriptReelError
from scriptreel.models.status import VideoJobState

DEFAULT_FAILURE_MESSAGE = "Video generation failed"


class InvalidTransitionError(RuntimeError):
    """A transition was requested from a state that does not allow it."""


@dataclass
class VideoJob:
    source_script: str
    cleaned_script: str
    avatar_id: Optional[str] = None
    voice_id: Optional[str] = None
    title: Optional[str] = None
    state: VideoJobState = VideoJobState.SUBMITTING
    job_id: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    error_message: Optional[str] = None
    error_kind: Optional[str] = None
    error_details: Optional[Dict[str, Any]] = None
    created_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    def _require(self, *allowed: VideoJobState) -> None:
        if self.state not in allowed:
            names = ", ".join(s.value for s in allowed)
            raise InvalidTransitionError(f"Job is {self.state.value}; expected one of: {names}")

    def begin_polling(self, job_id: str) -> None:
        self._require(VideoJobState.SUBMITTING)
        if not job_id:
            raise InvalidTransitionError("A provider job id is required to start polling")
        if self.job_id is not None:
            raise InvalidTransitionError("Job id already assigned")
        self.job_id = job_id
        self.state = VideoJobState.POLLING

    def complete(self, video_url: str, thumbnail_url: Optional[str] = None) -> None:
        self._require(VideoJobState.POLLING)
        if not video_url:
            raise InvalidTransitionError("A completed job must carry a video URL")
        self.video_url = video_url
        self.thumbnail_url = thumbnail_url
        self._finish(VideoJobState.COMPLETED)

    def fail(
        self,
        message: Optional[str],
        kind: str = ProviderError.kind,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._require(VideoJobState.SUBMITTING, VideoJobState.POLLING)
        self.error_message = message or DEFAULT_FAILURE_MESSAGE
        self.error_kind = kind
        self.error_details = details or None
        self._finish(VideoJobState.FAILED)

    def time_out(self, message: str) -> None:
        self._require(VideoJobState.POLLING)
        self.error_message = message
        self.error_kind = GenerationTimeoutError.kind
        self._finish(VideoJobState.TIMED_OUT)

    def fail_with(self, error: ScriptReelError) -> None:
        """Fail with the message, kind and details of an application error."""
        self.fail(error.message, kind=error.kind, details=error.details())

    def _finish(self, state: VideoJobState) -> None:
        self.state = state
        self.finished_at = datetime.now()

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal()

    def snapshot(self) -> "VideoJob":
        """Detached copy handed to observers."""
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job_id": self.job_id,
            "state": self.state.value,
            "source_script": self.source_script,
            "cleaned_script": self.cleaned_script,
            "avatar_id": self.avatar_id,
            "voice_id": self.voice_id,
            "title": self.title,
            "video_url": self.video_url,
            "thumbnail_url": self.thumbnail_url,
            "error_message": self.error_message,
            "error_kind": self.error_kind,
            "error_details": self.error_details,
            "created_at": self.created_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
        }
