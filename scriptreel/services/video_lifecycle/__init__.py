"""
Video lifecycle - script to persisted avatar video.

    VideoJobSubmitter  -> sanitizes and submits a script, returns the job id
    JobStatusPoller    -> bounded status polling to a terminal state
    ResultReconciler   -> persists completed jobs
    LifecycleController -> one run per invocation context, observable
"""

from .clock import Clock, AsyncioClock, CancellationToken
from .job import VideoJob, InvalidTransitionError
from .submitter import VideoJobSubmitter, build_generation_payload
from .poller import JobStatusPoller, MISSING_URL_MESSAGE
from .reconciler import ResultReconciler
from .controller import (
    LifecycleController,
    LifecycleEvent,
    LifecycleEventKind,
    LifecycleRun,
    get_lifecycle_controller,
    reset_lifecycle_controller,
)

__all__ = [
    "Clock",
    "AsyncioClock",
    "CancellationToken",
    "VideoJob",
    "InvalidTransitionError",
    "VideoJobSubmitter",
    "build_generation_payload",
    "JobStatusPoller",
    "MISSING_URL_MESSAGE",
    "ResultReconciler",
    "LifecycleController",
    "LifecycleEvent",
    "LifecycleEventKind",
    "LifecycleRun",
    "get_lifecycle_controller",
    "reset_lifecycle_controller",
]
