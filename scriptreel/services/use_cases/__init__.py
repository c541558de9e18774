"""
Use cases - business operations behind the HTTP routes.
"""

from .base import UseCase
from .script_use_cases import (
    ScriptGenerationRequest,
    GenerateScriptsUseCase,
    ListScriptSetsUseCase,
)
from .video_use_cases import (
    StartVideoRequest,
    JobLookupRequest,
    ListVideosRequest,
    VideoLookupRequest,
    CreateVideoUseCase,
    GetVideoJobUseCase,
    CancelVideoJobUseCase,
    ListVideosUseCase,
    GetVideoUseCase,
    DeleteVideoUseCase,
    default_context_id,
    default_title,
)

__all__ = [
    "UseCase",
    "ScriptGenerationRequest",
    "GenerateScriptsUseCase",
    "ListScriptSetsUseCase",
    "StartVideoRequest",
    "JobLookupRequest",
    "ListVideosRequest",
    "VideoLookupRequest",
    "CreateVideoUseCase",
    "GetVideoJobUseCase",
    "CancelVideoJobUseCase",
    "ListVideosUseCase",
    "GetVideoUseCase",
    "DeleteVideoUseCase",
    "default_context_id",
    "default_title",
]
