"""
Tests for the VideoJob entity and its transitions.
"""

import pytest

from scriptreel.core import ConfigurationError
from scriptreel.models.status import VideoJobState
from scriptreel.services.video_lifecycle import InvalidTransitionError, VideoJob


@pytest.fixture
def job():
    return VideoJob(source_script="[HOOK] Hi", cleaned_script="Hi")


class TestVideoJob:
    def test_starts_submitting_without_id(self, job):
        assert job.state is VideoJobState.SUBMITTING
        assert job.job_id is None
        assert job.video_url is None
        assert job.error_message is None

    def test_begin_polling_assigns_id_once(self, job):
        job.begin_polling("vid_1")
        assert job.state is VideoJobState.POLLING
        assert job.job_id == "vid_1"
        with pytest.raises(InvalidTransitionError):
            job.begin_polling("vid_2")
        assert job.job_id == "vid_1"

    def test_begin_polling_requires_id(self, job):
        with pytest.raises(InvalidTransitionError):
            job.begin_polling("")

    def test_complete_sets_url_only_when_completed(self, job):
        job.begin_polling("vid_1")
        job.complete("https://cdn/v.mp4", "https://cdn/t.jpg")
        assert job.state is VideoJobState.COMPLETED
        assert job.video_url == "https://cdn/v.mp4"
        assert job.error_message is None
        assert job.finished_at is not None

    def test_complete_requires_url(self, job):
        job.begin_polling("vid_1")
        with pytest.raises(InvalidTransitionError):
            job.complete("")

    def test_cannot_complete_before_polling(self, job):
        with pytest.raises(InvalidTransitionError):
            job.complete("https://cdn/v.mp4")

    def test_fail_from_submitting(self, job):
        job.fail("HeyGen API error: Unauthorized")
        assert job.state is VideoJobState.FAILED
        assert job.error_message == "HeyGen API error: Unauthorized"
        assert job.video_url is None

    def test_fail_records_error_kind(self, job):
        job.fail_with(ConfigurationError("HeyGen API key not configured"))
        assert job.error_kind == "configuration"
        assert job.error_details is None
        assert job.to_dict()["error_kind"] == "configuration"

    def test_provider_status_failure_defaults_to_provider_kind(self, job):
        job.begin_polling("vid_1")
        job.fail("Voice not found")
        assert job.error_kind == "provider"

    def test_fail_without_message_uses_default(self, job):
        job.fail("")
        assert job.error_message == "Video generation failed"

    def test_time_out_only_from_polling(self, job):
        with pytest.raises(InvalidTransitionError):
            job.time_out("late")
        job.begin_polling("vid_1")
        job.time_out("late")
        assert job.state is VideoJobState.TIMED_OUT
        assert job.error_message == "late"
        assert job.error_kind == "timeout"

    def test_terminal_states_are_final(self, job):
        job.begin_polling("vid_1")
        job.fail("boom")
        with pytest.raises(InvalidTransitionError):
            job.complete("https://cdn/v.mp4")
        with pytest.raises(InvalidTransitionError):
            job.fail("again")

    def test_snapshot_is_detached(self, job):
        snapshot = job.snapshot()
        job.begin_polling("vid_1")
        assert snapshot.state is VideoJobState.SUBMITTING
        assert snapshot.job_id is None

    def test_to_dict(self, job):
        data = job.to_dict()
        assert data["state"] == "submitting"
        assert data["cleaned_script"] == "Hi"
        assert data["finished_at"] is None
