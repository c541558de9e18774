"""Storage - document store and repositories."""

from .document_store import (
    DocumentStore,
    FileDocumentStore,
    get_document_store,
    reset_document_store,
)
from .video_repository import (
    GeneratedVideoRecord,
    VideoRepository,
    DocumentVideoRepository,
)
from .script_repository import (
    ScriptSetRecord,
    ScriptSetRepository,
    DocumentScriptSetRepository,
)

__all__ = [
    "DocumentStore",
    "FileDocumentStore",
    "get_document_store",
    "reset_document_store",
    "GeneratedVideoRecord",
    "VideoRepository",
    "DocumentVideoRepository",
    "ScriptSetRecord",
    "ScriptSetRepository",
    "DocumentScriptSetRepository",
]
