"""
Tests for JobStatusPoller.

Uses a fake clock so the full 60-check protocol runs instantly; the recorded
delays show exactly what the poller would have waited.
"""

import pytest

from scriptreel.config import PollSettings
from scriptreel.core import ProviderError
from scriptreel.models.status import VideoJobState
from scriptreel.services.video_lifecycle import (
    CancellationToken,
    JobStatusPoller,
    MISSING_URL_MESSAGE,
    VideoJob,
)

SETTINGS = PollSettings(initial_delay=3.0, interval=5.0, max_attempts=60, timeout_message="Too slow")


@pytest.fixture
def polling_job():
    job = VideoJob(source_script="Hello", cleaned_script="Hello")
    job.begin_polling("vid_123")
    return job


@pytest.fixture
def poller(fake_heygen, fake_clock):
    return JobStatusPoller(client=fake_heygen, settings=SETTINGS, clock=fake_clock)


class TestPollingProtocol:
    @pytest.mark.asyncio
    async def test_completed_on_last_attempt(self, poller, polling_job, fake_heygen, fake_clock, provider_status):
        fake_heygen.statuses = [provider_status("processing")] * 59 + [
            provider_status("completed", video_url="https://cdn/v.mp4", thumbnail_url="https://cdn/t.jpg")
        ]

        job = await poller.poll(polling_job)

        assert job.state is VideoJobState.COMPLETED
        assert job.video_url == "https://cdn/v.mp4"
        assert job.thumbnail_url == "https://cdn/t.jpg"
        assert len(fake_heygen.status_calls) == 60
        assert fake_clock.sleeps == [3.0] + [5.0] * 59

    @pytest.mark.asyncio
    async def test_times_out_after_bound(self, poller, polling_job, fake_heygen, fake_clock, provider_status):
        fake_heygen.statuses = [provider_status("processing")]

        job = await poller.poll(polling_job)

        assert job.state is VideoJobState.TIMED_OUT
        assert job.state is not VideoJobState.FAILED
        assert job.error_message == "Too slow"
        assert job.video_url is None
        assert len(fake_heygen.status_calls) == 60
        # No delay is scheduled after the final check.
        assert fake_clock.sleeps == [3.0] + [5.0] * 59

    @pytest.mark.asyncio
    async def test_pending_keeps_polling(self, poller, polling_job, fake_heygen, provider_status):
        fake_heygen.statuses = [
            provider_status("pending"),
            provider_status("processing"),
            provider_status("completed", video_url="https://cdn/v.mp4"),
        ]
        job = await poller.poll(polling_job)
        assert job.state is VideoJobState.COMPLETED
        assert len(fake_heygen.status_calls) == 3

    @pytest.mark.asyncio
    async def test_provider_failure_captures_error(self, poller, polling_job, fake_heygen, provider_status):
        fake_heygen.statuses = [provider_status("processing"), provider_status("failed", error="Avatar unavailable")]
        job = await poller.poll(polling_job)
        assert job.state is VideoJobState.FAILED
        assert job.error_message == "Avatar unavailable"
        assert job.video_url is None

    @pytest.mark.asyncio
    async def test_provider_failure_without_message(self, poller, polling_job, fake_heygen, provider_status):
        fake_heygen.statuses = [provider_status("failed")]
        job = await poller.poll(polling_job)
        assert job.error_message == "Video generation failed"

    @pytest.mark.asyncio
    async def test_transport_error_fails_immediately(self, poller, polling_job, fake_heygen, fake_clock, provider_status):
        fake_heygen.statuses = [
            provider_status("processing"),
            ProviderError("HeyGen request failed: connection reset"),
            provider_status("completed", video_url="https://cdn/v.mp4"),
        ]

        job = await poller.poll(polling_job)

        assert job.state is VideoJobState.FAILED
        assert job.error_message == "HeyGen request failed: connection reset"
        assert len(fake_heygen.status_calls) == 2
        assert fake_clock.sleeps == [3.0, 5.0]

    @pytest.mark.asyncio
    async def test_unrecognized_status_fails(self, poller, polling_job, fake_heygen, provider_status):
        fake_heygen.statuses = [provider_status("waiting_for_gpu")]
        job = await poller.poll(polling_job)
        assert job.state is VideoJobState.FAILED
        assert "waiting_for_gpu" in job.error_message
        assert len(fake_heygen.status_calls) == 1

    @pytest.mark.asyncio
    async def test_completed_without_url_fails(self, poller, polling_job, fake_heygen, provider_status):
        fake_heygen.statuses = [provider_status("completed")]
        job = await poller.poll(polling_job)
        assert job.state is VideoJobState.FAILED
        assert job.error_message == MISSING_URL_MESSAGE
        assert job.video_url is None

    @pytest.mark.asyncio
    async def test_rejects_job_not_polling(self, poller):
        job = VideoJob(source_script="Hello", cleaned_script="Hello")
        with pytest.raises(ValueError):
            await poller.poll(job)


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancel_during_wait_stops_checks(self, poller, polling_job, fake_heygen, fake_clock, provider_status):
        fake_heygen.statuses = [provider_status("processing")]
        token = CancellationToken()

        def cancel_on_third_sleep(count):
            if count == 3:
                token.cancel()

        fake_clock.on_sleep = cancel_on_third_sleep

        job = await poller.poll(polling_job, token)

        assert job.state is VideoJobState.POLLING
        assert len(fake_heygen.status_calls) == 2
        assert len(fake_clock.sleeps) == 3

    @pytest.mark.asyncio
    async def test_result_of_in_flight_check_is_discarded(self, poller, polling_job, fake_heygen, provider_status):
        fake_heygen.statuses = [provider_status("completed", video_url="https://cdn/v.mp4")]
        token = CancellationToken()
        fake_heygen.on_status = lambda count: token.cancel()

        job = await poller.poll(polling_job, token)

        assert job.state is VideoJobState.POLLING
        assert job.video_url is None

    @pytest.mark.asyncio
    async def test_cancelled_before_start(self, poller, polling_job, fake_heygen, fake_clock):
        token = CancellationToken()
        token.cancel()
        job = await poller.poll(polling_job, token)
        assert job.state is VideoJobState.POLLING
        assert fake_heygen.status_calls == []
        assert fake_clock.sleeps == []
