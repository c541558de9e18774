"""
Job Status Poller

Bounded polling protocol for one provider job:

- wait ``initial_delay`` before the first check;
- at most ``max_attempts`` checks, strictly sequential, ``interval`` apart;
- ``pending``/``processing`` keep polling, ``completed``/``failed`` are terminal,
  any other status value fails the job with a diagnostic message;
- a request-level error on any single check fails the job, it is not retried;
- running out of attempts while still in progress times the job out.

Cancellation is cooperative: the token is checked before every delay and after
every check. A check already in flight is not aborted, but its result is
discarded and nothing further happens to the job.
"""

from typing import Optional

from scriptreel.config import PollSettings
from scriptreel.core import ScriptReelError, get_logger
from scriptreel.models.status import ProviderStatus, VideoJobState
from scriptreel.services.infrastructure.heygen import HeyGenClient, VideoStatus

from .clock import AsyncioClock, CancellationToken, Clock
from .job import DEFAULT_FAILURE_MESSAGE, VideoJob

logger = get_logger(__name__, service="video_lifecycle")

MISSING_URL_MESSAGE = "Provider reported completion without a video URL"


class JobStatusPoller:
    def __init__(
        self,
        client: Optional[HeyGenClient] = None,
        settings: Optional[PollSettings] = None,
        clock: Optional[Clock] = None,
    ):
        self.client = client or HeyGenClient()
        self.settings = settings or PollSettings.from_env()
        self.clock = clock or AsyncioClock()

    async def poll(self, job: VideoJob, token: Optional[CancellationToken] = None) -> VideoJob:
        """Drive ``job`` from POLLING to a terminal state.

        Returns the same job. If cancelled, the job is returned still POLLING.
        """
        if job.state is not VideoJobState.POLLING:
            raise ValueError(f"Cannot poll a job in state {job.state.value}")
        token = token or CancellationToken()
        settings = self.settings

        if token.cancelled:
            return job
        await self.clock.sleep(settings.initial_delay)

        for attempt in range(1, settings.max_attempts + 1):
            if token.cancelled:
                return job
            try:
                status = await self.client.get_status(job.job_id)
            except ScriptReelError as exc:
                if token.cancelled:
                    return job
                logger.warning(
                    "Status check failed",
                    extra={"attempt": attempt, "error": exc.message, "kind": exc.kind},
                )
                job.fail_with(exc)
                return job

            if token.cancelled:
                return job
            if self._apply(job, status, attempt):
                return job

            if attempt < settings.max_attempts:
                if token.cancelled:
                    return job
                await self.clock.sleep(settings.interval)

        if token.cancelled:
            return job
        logger.warning("Polling bound exceeded", extra={"attempts": settings.max_attempts})
        job.time_out(settings.timeout_message)
        return job

    def _apply(self, job: VideoJob, status: VideoStatus, attempt: int) -> bool:
        """Fold one status check into the job. Returns True once terminal."""
        logger.debug(
            "Status check",
            extra={"attempt": attempt, "provider_status": status.raw_status},
        )
        if status.status.is_in_progress():
            return False
        if status.status is ProviderStatus.COMPLETED:
            if status.video_url:
                job.complete(status.video_url, status.thumbnail_url)
            else:
                job.fail(MISSING_URL_MESSAGE)
            return True
        if status.status is ProviderStatus.FAILED:
            job.fail(status.error or DEFAULT_FAILURE_MESSAGE)
            return True
        job.fail(f"Unrecognized provider status: {status.raw_status!r}")
        return True
