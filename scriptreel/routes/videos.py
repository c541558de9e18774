"""
Video routes

Creating a video starts a lifecycle run in the background; the caller then
reads the run's snapshot from ``/videos/jobs/{context_id}`` until it is
terminal. Persisted videos are browsed, fetched and deleted by record id.
"""

from fastapi import APIRouter, Depends, Query, Response

from ..core import OwnerContext, require_owner
from ..models import (
    CreateVideoRequest,
    GeneratedVideoResponse,
    VideoJobResponse,
    VideoPageResponse,
)
from ..services.use_cases import (
    CancelVideoJobUseCase,
    CreateVideoUseCase,
    DeleteVideoUseCase,
    GetVideoJobUseCase,
    GetVideoUseCase,
    JobLookupRequest,
    ListVideosRequest,
    ListVideosUseCase,
    StartVideoRequest,
    VideoLookupRequest,
)

router = APIRouter(prefix="/videos", tags=["videos"])


@router.post("", response_model=VideoJobResponse, status_code=202)
async def create_video(request: CreateVideoRequest, owner: OwnerContext = Depends(require_owner)):
    """Start generating an avatar video from a script"""
    return await CreateVideoUseCase().execute(StartVideoRequest(owner=owner, body=request))


@router.get("/jobs/{context_id}", response_model=VideoJobResponse)
async def get_video_job(context_id: str, owner: OwnerContext = Depends(require_owner)):
    return await GetVideoJobUseCase().execute(JobLookupRequest(owner=owner, context_id=context_id))


@router.post("/jobs/{context_id}/cancel", response_model=VideoJobResponse)
async def cancel_video_job(context_id: str, owner: OwnerContext = Depends(require_owner)):
    """Stop polling for a run; a check already in flight is discarded"""
    return await CancelVideoJobUseCase().execute(JobLookupRequest(owner=owner, context_id=context_id))


@router.get("", response_model=VideoPageResponse)
async def list_videos(page: int = Query(1, ge=1), owner: OwnerContext = Depends(require_owner)):
    """One page of the owner's videos, newest first"""
    return await ListVideosUseCase().execute(ListVideosRequest(owner=owner, page=page))


@router.get("/{video_id}", response_model=GeneratedVideoResponse)
async def get_video(video_id: str, owner: OwnerContext = Depends(require_owner)):
    return await GetVideoUseCase().execute(VideoLookupRequest(owner=owner, video_id=video_id))


@router.delete("/{video_id}", status_code=204)
async def delete_video(video_id: str, owner: OwnerContext = Depends(require_owner)):
    await DeleteVideoUseCase().execute(VideoLookupRequest(owner=owner, video_id=video_id))
    return Response(status_code=204)
