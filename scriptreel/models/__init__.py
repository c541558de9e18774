"""
Pydantic models for API request/response schemas
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..config import MIN_SCRIPT_VARIATIONS, MAX_SCRIPT_VARIATIONS
from .status import VideoJobState, ProviderStatus, TERMINAL_STATES


# === Scripts ===

class Script(BaseModel):
    """One generated script variant"""
    id: int
    content: str


class GenerateScriptsRequest(BaseModel):
    """Request to generate script variants for a topic"""
    topic: str = Field(min_length=1)
    num_variations: int = Field(default=MIN_SCRIPT_VARIATIONS, ge=MIN_SCRIPT_VARIATIONS, le=MAX_SCRIPT_VARIATIONS)


class GenerateScriptsResponse(BaseModel):
    """Generated scripts plus where (and whether) they were saved"""
    script_set_id: Optional[str] = None
    topic: str
    scripts: List[Script]
    saved: bool


class ScriptSetResponse(BaseModel):
    id: str
    topic: str
    scripts: List[Script]
    created_at: datetime


# === Videos ===

class CreateVideoRequest(BaseModel):
    """Request to turn a script into an avatar video"""
    script: str
    avatar_id: Optional[str] = None
    voice_id: Optional[str] = None
    title: Optional[str] = None
    script_id: Optional[int] = None  # Variant ordinal, used for the default title
    context_id: Optional[str] = None  # One active job per (owner, context_id)


class VideoJobResponse(BaseModel):
    """Observable snapshot of a video lifecycle run"""
    context_id: str
    job_id: Optional[str] = None
    state: str
    cleaned_script: str
    title: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    error_message: Optional[str] = None
    error_kind: Optional[str] = None
    error_details: Optional[Dict[str, Any]] = None
    record_id: Optional[str] = None
    persistence_error: Optional[str] = None
    cancelled: bool = False


class GeneratedVideoResponse(BaseModel):
    """A persisted video record"""
    id: str
    job_id: str
    video_url: str
    thumbnail_url: Optional[str] = None
    original_script: str
    cleaned_script: str
    title: Optional[str] = None
    status: str
    created_at: datetime
    completed_at: datetime


class VideoPageResponse(BaseModel):
    """One page of the owner's video gallery"""
    items: List[GeneratedVideoResponse]
    page: int
    page_size: int
    total: int
    total_pages: int


__all__ = [
    "Script",
    "GenerateScriptsRequest",
    "GenerateScriptsResponse",
    "ScriptSetResponse",
    "CreateVideoRequest",
    "VideoJobResponse",
    "GeneratedVideoResponse",
    "VideoPageResponse",
    "VideoJobState",
    "ProviderStatus",
    "TERMINAL_STATES",
]
