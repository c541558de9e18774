"""
Video job status enumerations.

Two vocabularies meet here: the local lifecycle state of a VideoJob and the
status string reported by the video provider's status endpoint.
"""

from enum import Enum


class VideoJobState(Enum):
    """Lifecycle state of one video job."""

    SUBMITTING = "submitting"
    POLLING = "polling"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"

    def is_terminal(self) -> bool:
        """Terminal states never transition again without a caller-initiated retry."""
        return self in TERMINAL_STATES

    def is_failure(self) -> bool:
        return self in (VideoJobState.FAILED, VideoJobState.TIMED_OUT)


TERMINAL_STATES = frozenset({
    VideoJobState.COMPLETED,
    VideoJobState.FAILED,
    VideoJobState.TIMED_OUT,
})


class ProviderStatus(Enum):
    """Status values reported by the provider, plus a catch-all for anything else."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def parse(cls, raw: object) -> "ProviderStatus":
        if isinstance(raw, str):
            value = raw.strip().lower()
            for status in cls:
                if status is not cls.UNRECOGNIZED and status.value == value:
                    return status
        return cls.UNRECOGNIZED

    def is_in_progress(self) -> bool:
        return self in (ProviderStatus.PENDING, ProviderStatus.PROCESSING)


__all__ = [
    "VideoJobState",
    "TERMINAL_STATES",
    "ProviderStatus",
]
