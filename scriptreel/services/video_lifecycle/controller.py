"""
Lifecycle Controller

Drives one VideoJob per invocation context through

    SUBMITTING -> POLLING -> COMPLETED -> [reconcile]
                          -> FAILED
                          -> TIMED_OUT

An invocation context is ``(owner.user_id, context_id)``. At most one run is
active per context; a second start while one is in flight is rejected with
AlreadyInProgressError. Finished runs stay queryable in a bounded registry so
callers can read the outcome, and a retry is simply a new run for the same
context with a fresh provider job.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Tuple

from scriptreel.core import (
    AlreadyInProgressError,
    InternalError,
    OwnerContext,
    PersistenceError,
    ScriptReelError,
    get_logger,
    sanitize_script,
    set_job_id,
)
from scriptreel.models.status import VideoJobState

from .clock import CancellationToken
from .job import VideoJob
from .poller import JobStatusPoller
from .reconciler import ResultReconciler
from .submitter import VideoJobSubmitter

logger = get_logger(__name__, service="video_lifecycle")

ContextKey = Tuple[str, str]

DEFAULT_RUN_CACHE_LIMIT = 200


class LifecycleEventKind(str, Enum):
    STATE_CHANGED = "state_changed"
    PERSISTED = "persisted"
    PERSISTENCE_FAILED = "persistence_failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class LifecycleEvent:
    """One observable step of a run. ``job`` is a detached snapshot."""
    context_key: ContextKey
    kind: LifecycleEventKind
    job: VideoJob
    record_id: Optional[str] = None
    error: Optional[str] = None


Listener = Callable[[LifecycleEvent], None]


@dataclass
class LifecycleRun:
    """Bookkeeping for one run of the lifecycle."""
    context_key: ContextKey
    owner: OwnerContext
    job: VideoJob
    token: CancellationToken = field(default_factory=CancellationToken)
    record_id: Optional[str] = None
    persistence_error: Optional[str] = None
    finished: bool = False
    updated_at: datetime = field(default_factory=datetime.now)
    task: Optional["asyncio.Task[None]"] = None

    @property
    def context_id(self) -> str:
        return self.context_key[1]

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    @property
    def active(self) -> bool:
        return not self.finished and not self.token.cancelled

    def to_dict(self) -> Dict[str, Any]:
        job = self.job
        return {
            "context_id": self.context_id,
            "job_id": job.job_id,
            "state": job.state.value,
            "cleaned_script": job.cleaned_script,
            "title": job.title,
            "video_url": job.video_url,
            "thumbnail_url": job.thumbnail_url,
            "error_message": job.error_message,
            "error_kind": job.error_kind,
            "error_details": job.error_details,
            "record_id": self.record_id,
            "persistence_error": self.persistence_error,
            "cancelled": self.cancelled,
        }


class LifecycleController:
    def __init__(
        self,
        submitter: Optional[VideoJobSubmitter] = None,
        poller: Optional[JobStatusPoller] = None,
        reconciler: Optional[ResultReconciler] = None,
        cache_limit: int = DEFAULT_RUN_CACHE_LIMIT,
    ):
        self.submitter = submitter or VideoJobSubmitter()
        self.poller = poller or JobStatusPoller(client=self.submitter.client)
        self.reconciler = reconciler or ResultReconciler()
        self._cache_limit = max(1, cache_limit)
        self._runs: Dict[ContextKey, LifecycleRun] = {}
        self._listeners: List[Listener] = []
        self._lock = RLock()

    # --- observers ---

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, run: LifecycleRun, kind: LifecycleEventKind, error: Optional[str] = None) -> None:
        run.updated_at = datetime.now()
        event = LifecycleEvent(
            context_key=run.context_key,
            kind=kind,
            job=run.job.snapshot(),
            record_id=run.record_id,
            error=error,
        )
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as exc:
                logger.warning("Lifecycle listener raised", extra={"error": str(exc), "event_kind": kind.value})

    def _transitioned(self, run: LifecycleRun) -> None:
        job = run.job
        log = logger.warning if job.state.is_failure() else logger.info
        log(
            "Video job state changed",
            extra={"state": job.state.value, "context_id": run.context_id, "error": job.error_message},
        )
        self._emit(run, LifecycleEventKind.STATE_CHANGED)

    # --- registry ---

    def _prune_runs(self) -> None:
        if len(self._runs) <= self._cache_limit:
            return
        evictable = [key for key, run in self._runs.items() if not run.active]
        evictable.sort(key=lambda key: self._runs[key].updated_at)
        while len(self._runs) > self._cache_limit and evictable:
            self._runs.pop(evictable.pop(0), None)

    def _register(
        self,
        owner: OwnerContext,
        script: str,
        context_id: str,
        avatar_id: Optional[str],
        voice_id: Optional[str],
        title: Optional[str],
    ) -> LifecycleRun:
        self.submitter.validate(script)
        key: ContextKey = (owner.user_id, context_id)
        with self._lock:
            existing = self._runs.get(key)
            if existing is not None and existing.active:
                raise AlreadyInProgressError("A video is already being generated for this script")
            job = VideoJob(
                source_script=script,
                cleaned_script=sanitize_script(script),
                avatar_id=avatar_id,
                voice_id=voice_id,
                title=title,
            )
            run = LifecycleRun(context_key=key, owner=owner, job=job)
            self._runs[key] = run
            self._prune_runs()
        self._transitioned(run)
        return run

    def get(self, owner: OwnerContext, context_id: str) -> Optional[LifecycleRun]:
        with self._lock:
            return self._runs.get((owner.user_id, context_id))

    def active_runs(self) -> List[LifecycleRun]:
        with self._lock:
            return [run for run in self._runs.values() if run.active]

    # --- lifecycle ---

    def start(
        self,
        owner: OwnerContext,
        script: str,
        *,
        context_id: str,
        avatar_id: Optional[str] = None,
        voice_id: Optional[str] = None,
        title: Optional[str] = None,
    ) -> LifecycleRun:
        """Register a run and schedule it on the running loop.

        Input and configuration errors are raised here, before anything is
        scheduled. Everything after that is reported through the run's state.
        """
        run = self._register(owner, script, context_id, avatar_id, voice_id, title)
        run.task = asyncio.create_task(self._drive(run))
        return run

    async def run(
        self,
        owner: OwnerContext,
        script: str,
        *,
        context_id: str,
        avatar_id: Optional[str] = None,
        voice_id: Optional[str] = None,
        title: Optional[str] = None,
    ) -> LifecycleRun:
        """Run the whole lifecycle and return the finished run."""
        run = self._register(owner, script, context_id, avatar_id, voice_id, title)
        await self._drive(run)
        return run

    def cancel(self, owner: OwnerContext, context_id: str) -> bool:
        """Request cooperative cancellation. False if there is no active run."""
        run = self.get(owner, context_id)
        if run is None or not run.active:
            return False
        run.token.cancel()
        logger.info("Video job cancellation requested", extra={"context_id": context_id})
        return True

    async def shutdown(self) -> None:
        """Cancel every active run and wait for their tasks to stop."""
        runs = self.active_runs()
        tasks = []
        for run in runs:
            run.token.cancel()
            if run.task is not None and not run.task.done():
                run.task.cancel()
                tasks.append(run.task)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Lifecycle controller stopped", extra={"cancelled_runs": len(runs)})

    async def _drive(self, run: LifecycleRun) -> None:
        job = run.job
        try:
            try:
                job_id = await self.submitter.submit(
                    job.source_script,
                    avatar_id=job.avatar_id,
                    voice_id=job.voice_id,
                    title=job.title,
                )
            except ScriptReelError as exc:
                job.fail_with(exc)
                self._transitioned(run)
                return

            job.begin_polling(job_id)
            set_job_id(job_id)
            if run.token.cancelled:
                self._emit(run, LifecycleEventKind.CANCELLED)
                return
            self._transitioned(run)

            await self.poller.poll(job, run.token)
            if run.token.cancelled:
                logger.info("Video job cancelled", extra={"context_id": run.context_id})
                self._emit(run, LifecycleEventKind.CANCELLED)
                return
            self._transitioned(run)

            if job.state is VideoJobState.COMPLETED:
                await self._reconcile(run)
        except asyncio.CancelledError:
            run.token.cancel()
            raise
        except Exception as exc:
            logger.error("Unexpected error in video lifecycle", extra={"error": str(exc)}, exc_info=True)
            if not job.is_terminal:
                job.fail_with(InternalError(f"Unexpected error: {exc}"))
                self._transitioned(run)
        finally:
            run.finished = True
            run.updated_at = datetime.now()
            set_job_id(None)

    async def _reconcile(self, run: LifecycleRun) -> None:
        try:
            run.record_id = await self.reconciler.reconcile(run.job, run.owner)
        except PersistenceError as exc:
            # The video exists at the provider; the job stays COMPLETED.
            run.persistence_error = exc.message
            self._emit(run, LifecycleEventKind.PERSISTENCE_FAILED, error=exc.message)
            return
        self._emit(run, LifecycleEventKind.PERSISTED)


_controller_instance: Optional[LifecycleController] = None


def get_lifecycle_controller() -> LifecycleController:
    """Get the shared LifecycleController instance (singleton pattern)."""
    global _controller_instance
    if _controller_instance is None:
        _controller_instance = LifecycleController()
    return _controller_instance


def reset_lifecycle_controller() -> None:
    global _controller_instance
    _controller_instance = None
