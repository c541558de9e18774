"""
Result Reconciler

Maps a terminal VideoJob onto durable storage. Only COMPLETED jobs produce a
GeneratedVideo record; failed and timed-out jobs leave nothing behind.
"""

import asyncio
from datetime import datetime
from typing import Optional

from scriptreel.core import OwnerContext, PersistenceError, get_logger
from scriptreel.models.status import VideoJobState
from scriptreel.services.infrastructure.storage import (
    DocumentVideoRepository,
    GeneratedVideoRecord,
    VideoRepository,
)

from .job import VideoJob

logger = get_logger(__name__, service="video_lifecycle")


class ResultReconciler:
    def __init__(self, repository: Optional[VideoRepository] = None):
        self._repository = repository

    @property
    def repository(self) -> VideoRepository:
        # Resolved lazily so the store directory is read when first needed.
        if self._repository is None:
            self._repository = DocumentVideoRepository()
        return self._repository

    async def reconcile(self, job: VideoJob, owner: OwnerContext) -> Optional[str]:
        """Persist a completed job and return the new record id.

        Returns None for FAILED/TIMED_OUT jobs.

        Raises:
            ValueError: ``job`` is not terminal
            PersistenceError: the store write failed; carries ``video_url``
        """
        if not job.is_terminal:
            raise ValueError(f"Cannot reconcile a job in state {job.state.value}")
        if job.state is not VideoJobState.COMPLETED or not job.video_url:
            return None

        now = datetime.now()
        record = GeneratedVideoRecord(
            owner_id=owner.user_id,
            job_id=job.job_id,
            video_url=job.video_url,
            thumbnail_url=job.thumbnail_url,
            original_script=job.source_script,
            cleaned_script=job.cleaned_script,
            title=job.title,
            created_at=now,
            completed_at=now,
        )
        try:
            record_id = await asyncio.to_thread(self.repository.create, record)
        except Exception as exc:
            logger.error(
                "Failed to persist generated video",
                extra={"error": str(exc), "video_url": job.video_url},
                exc_info=True,
            )
            raise PersistenceError(f"Failed to save video: {exc}", video_url=job.video_url) from exc

        logger.info("Generated video persisted", extra={"record_id": record_id})
        return record_id
