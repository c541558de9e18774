"""
Video use cases - start a lifecycle run and browse/delete persisted videos.
"""

import asyncio
import hashlib
import math
from dataclasses import dataclass
from typing import Optional

from scriptreel.config import get_videos_page_size
from scriptreel.core import NotFoundError, OwnerContext, ValidationError
from scriptreel.models import (
    CreateVideoRequest,
    GeneratedVideoResponse,
    VideoJobResponse,
    VideoPageResponse,
)
from scriptreel.services.infrastructure.storage import (
    DocumentVideoRepository,
    GeneratedVideoRecord,
    VideoRepository,
)
from scriptreel.services.video_lifecycle import LifecycleController, get_lifecycle_controller

from .base import UseCase


def default_context_id(script: str) -> str:
    """Stable context id for a script, so repeated clicks map to one context."""
    return hashlib.sha256(script.encode("utf-8")).hexdigest()[:16]


def default_title(script_id: Optional[int]) -> Optional[str]:
    return f"Script {script_id} - Video" if script_id is not None else None


def to_video_response(record: GeneratedVideoRecord) -> GeneratedVideoResponse:
    return GeneratedVideoResponse(
        id=record.id,
        job_id=record.job_id,
        video_url=record.video_url,
        thumbnail_url=record.thumbnail_url,
        original_script=record.original_script,
        cleaned_script=record.cleaned_script,
        title=record.title,
        status=record.status,
        created_at=record.created_at,
        completed_at=record.completed_at,
    )


@dataclass
class StartVideoRequest:
    owner: OwnerContext
    body: CreateVideoRequest


class CreateVideoUseCase(UseCase[StartVideoRequest, VideoJobResponse]):
    """Start a lifecycle run in the background and return its first snapshot."""

    def __init__(self, controller: Optional[LifecycleController] = None):
        self.controller = controller or get_lifecycle_controller()

    async def execute(self, request: StartVideoRequest) -> VideoJobResponse:
        body = request.body
        script = body.script or ""
        context_id = (body.context_id or "").strip() or default_context_id(script)
        run = self.controller.start(
            request.owner,
            script,
            context_id=context_id,
            avatar_id=body.avatar_id,
            voice_id=body.voice_id,
            title=body.title or default_title(body.script_id),
        )
        return VideoJobResponse(**run.to_dict())


@dataclass
class JobLookupRequest:
    owner: OwnerContext
    context_id: str


class GetVideoJobUseCase(UseCase[JobLookupRequest, VideoJobResponse]):
    def __init__(self, controller: Optional[LifecycleController] = None):
        self.controller = controller or get_lifecycle_controller()

    async def execute(self, request: JobLookupRequest) -> VideoJobResponse:
        run = self.controller.get(request.owner, request.context_id)
        if run is None:
            raise NotFoundError("Video job not found")
        return VideoJobResponse(**run.to_dict())


class CancelVideoJobUseCase(UseCase[JobLookupRequest, VideoJobResponse]):
    def __init__(self, controller: Optional[LifecycleController] = None):
        self.controller = controller or get_lifecycle_controller()

    async def execute(self, request: JobLookupRequest) -> VideoJobResponse:
        run = self.controller.get(request.owner, request.context_id)
        if run is None:
            raise NotFoundError("Video job not found")
        self.controller.cancel(request.owner, request.context_id)
        return VideoJobResponse(**run.to_dict())


@dataclass
class ListVideosRequest:
    owner: OwnerContext
    page: int = 1


class ListVideosUseCase(UseCase[ListVideosRequest, VideoPageResponse]):
    """Owner's videos, newest first, in fixed-size 1-based pages."""

    def __init__(self, repository: Optional[VideoRepository] = None, page_size: Optional[int] = None):
        self.repository = repository or DocumentVideoRepository()
        self.page_size = page_size or get_videos_page_size()

    async def execute(self, request: ListVideosRequest) -> VideoPageResponse:
        if request.page < 1:
            raise ValidationError("page must be 1 or greater")
        records = await asyncio.to_thread(self.repository.list_by_owner, request.owner.user_id)
        total = len(records)
        start = (request.page - 1) * self.page_size
        items = records[start:start + self.page_size]
        return VideoPageResponse(
            items=[to_video_response(record) for record in items],
            page=request.page,
            page_size=self.page_size,
            total=total,
            total_pages=math.ceil(total / self.page_size),
        )


@dataclass
class VideoLookupRequest:
    owner: OwnerContext
    video_id: str


def _owned_record(repository: VideoRepository, request: VideoLookupRequest) -> GeneratedVideoRecord:
    record = repository.get(request.video_id)
    # Other owners' records are indistinguishable from missing ones.
    if record is None or record.owner_id != request.owner.user_id:
        raise NotFoundError("Video not found")
    return record


class GetVideoUseCase(UseCase[VideoLookupRequest, GeneratedVideoResponse]):
    def __init__(self, repository: Optional[VideoRepository] = None):
        self.repository = repository or DocumentVideoRepository()

    async def execute(self, request: VideoLookupRequest) -> GeneratedVideoResponse:
        record = await asyncio.to_thread(_owned_record, self.repository, request)
        return to_video_response(record)


class DeleteVideoUseCase(UseCase[VideoLookupRequest, None]):
    def __init__(self, repository: Optional[VideoRepository] = None):
        self.repository = repository or DocumentVideoRepository()

    async def execute(self, request: VideoLookupRequest) -> None:
        await asyncio.to_thread(_owned_record, self.repository, request)
        deleted = await asyncio.to_thread(self.repository.delete, request.video_id)
        if not deleted:
            raise NotFoundError("Video not found")
