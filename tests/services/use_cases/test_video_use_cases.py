"""
Tests for the video use cases.
"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from scriptreel.core import NotFoundError, OwnerContext, ValidationError
from scriptreel.models import CreateVideoRequest
from scriptreel.services.infrastructure.storage import (
    DocumentVideoRepository,
    FileDocumentStore,
    GeneratedVideoRecord,
)
from scriptreel.services.use_cases import (
    CreateVideoUseCase,
    DeleteVideoUseCase,
    GetVideoJobUseCase,
    GetVideoUseCase,
    JobLookupRequest,
    ListVideosRequest,
    ListVideosUseCase,
    StartVideoRequest,
    VideoLookupRequest,
    default_context_id,
    default_title,
)
from scriptreel.services.video_lifecycle import LifecycleRun, VideoJob

OWNER = OwnerContext(user_id="u1")


@pytest.fixture
def repository(tmp_path):
    return DocumentVideoRepository(FileDocumentStore(str(tmp_path / "store")))


def _seed(repository, owner_id, count):
    base = datetime(2026, 1, 1)
    ids = []
    for index in range(count):
        created = base + timedelta(minutes=index)
        ids.append(repository.create(GeneratedVideoRecord(
            owner_id=owner_id,
            job_id=f"vid_{index}",
            video_url=f"https://cdn/{index}.mp4",
            original_script="Hi",
            cleaned_script="Hi",
            created_at=created,
            completed_at=created,
        )))
    return ids


class TestCreateVideoUseCase:
    @pytest.mark.asyncio
    async def test_defaults_context_and_title(self):
        controller = MagicMock()
        job = VideoJob(source_script="[HOOK] Hi", cleaned_script="Hi", title="Script 2 - Video")
        controller.start.return_value = LifecycleRun(context_key=("u1", "ctx"), owner=OWNER, job=job)

        response = await CreateVideoUseCase(controller).execute(
            StartVideoRequest(owner=OWNER, body=CreateVideoRequest(script="[HOOK] Hi", script_id=2))
        )

        kwargs = controller.start.call_args.kwargs
        assert kwargs["context_id"] == default_context_id("[HOOK] Hi")
        assert kwargs["title"] == "Script 2 - Video"
        assert response.state == "submitting"
        assert response.cleaned_script == "Hi"

    @pytest.mark.asyncio
    async def test_explicit_title_and_context(self):
        controller = MagicMock()
        controller.start.return_value = LifecycleRun(
            context_key=("u1", "card-1"), owner=OWNER, job=VideoJob(source_script="Hi", cleaned_script="Hi")
        )
        await CreateVideoUseCase(controller).execute(StartVideoRequest(
            owner=OWNER, body=CreateVideoRequest(script="Hi", title="Mine", script_id=2, context_id="card-1")
        ))
        kwargs = controller.start.call_args.kwargs
        assert kwargs["context_id"] == "card-1"
        assert kwargs["title"] == "Mine"

    def test_helpers(self):
        assert default_title(None) is None
        assert default_title(3) == "Script 3 - Video"
        assert default_context_id("a") == default_context_id("a")
        assert default_context_id("a") != default_context_id("b")


class TestGetVideoJobUseCase:
    @pytest.mark.asyncio
    async def test_timed_out_job_reports_timeout_kind(self):
        job = VideoJob(source_script="Hi", cleaned_script="Hi")
        job.begin_polling("vid_1")
        job.time_out("Video generation is taking longer than expected. Please check back later.")
        controller = MagicMock()
        controller.get.return_value = LifecycleRun(context_key=("u1", "ctx"), owner=OWNER, job=job)

        response = await GetVideoJobUseCase(controller).execute(JobLookupRequest(owner=OWNER, context_id="ctx"))

        assert response.state == "timed_out"
        assert response.error_kind == "timeout"
        assert response.error_details is None

    @pytest.mark.asyncio
    async def test_unknown_context_is_not_found(self):
        controller = MagicMock()
        controller.get.return_value = None
        with pytest.raises(NotFoundError):
            await GetVideoJobUseCase(controller).execute(JobLookupRequest(owner=OWNER, context_id="nope"))


class TestListVideosUseCase:
    @pytest.mark.asyncio
    async def test_pages_newest_first(self, repository):
        _seed(repository, "u1", 14)
        _seed(repository, "u2", 3)
        use_case = ListVideosUseCase(repository, page_size=12)

        first = await use_case.execute(ListVideosRequest(owner=OWNER, page=1))
        second = await use_case.execute(ListVideosRequest(owner=OWNER, page=2))

        assert first.total == 14
        assert first.total_pages == 2
        assert len(first.items) == 12
        assert first.items[0].job_id == "vid_13"
        assert [item.job_id for item in second.items] == ["vid_1", "vid_0"]

    @pytest.mark.asyncio
    async def test_out_of_range_page_is_empty(self, repository):
        _seed(repository, "u1", 2)
        page = await ListVideosUseCase(repository, page_size=12).execute(ListVideosRequest(owner=OWNER, page=5))
        assert page.items == []
        assert page.total == 2
        assert page.total_pages == 1

    @pytest.mark.asyncio
    async def test_page_must_be_positive(self, repository):
        with pytest.raises(ValidationError):
            await ListVideosUseCase(repository).execute(ListVideosRequest(owner=OWNER, page=0))


class TestVideoLookup:
    @pytest.mark.asyncio
    async def test_get_own_video(self, repository):
        video_id = _seed(repository, "u1", 1)[0]
        video = await GetVideoUseCase(repository).execute(VideoLookupRequest(owner=OWNER, video_id=video_id))
        assert video.id == video_id

    @pytest.mark.asyncio
    async def test_other_owner_cannot_delete(self, repository):
        video_id = _seed(repository, "u2", 1)[0]
        with pytest.raises(NotFoundError):
            await DeleteVideoUseCase(repository).execute(VideoLookupRequest(owner=OWNER, video_id=video_id))
        assert repository.get(video_id) is not None

    @pytest.mark.asyncio
    async def test_owner_deletes(self, repository):
        video_id = _seed(repository, "u1", 1)[0]
        await DeleteVideoUseCase(repository).execute(VideoLookupRequest(owner=OWNER, video_id=video_id))
        assert repository.get(video_id) is None
