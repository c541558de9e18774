"""
Video repository - Data access for persisted GeneratedVideo records.

Implements the Repository pattern over the ``videos`` collection of the
document store, so the reconciler and routes never touch storage details.

Classes:
    GeneratedVideoRecord: A video produced by a completed job
    VideoRepository: Abstract interface for video data access
    DocumentVideoRepository: Implementation backed by a DocumentStore
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from scriptreel.config import VIDEOS_COLLECTION

from .document_store import DocumentStore, get_document_store

COMPLETED_STATUS = "completed"


@dataclass
class GeneratedVideoRecord:
    """
    A persisted video. Only ever created from a Completed job.

    Attributes:
        owner_id: User the video belongs to
        job_id: Provider-assigned job identifier
        video_url: Provider URL of the rendered video
        original_script: Script text as generated, annotations included
        cleaned_script: Narrated text actually sent to the provider
        created_at: When the record was written
        completed_at: When the job was observed as completed
        id: Store-assigned identifier (None until persisted)
    """
    owner_id: str
    job_id: str
    video_url: str
    original_script: str
    cleaned_script: str
    created_at: datetime
    completed_at: datetime
    thumbnail_url: Optional[str] = None
    title: Optional[str] = None
    status: str = COMPLETED_STATUS
    id: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        return {
            "owner_id": self.owner_id,
            "job_id": self.job_id,
            "video_url": self.video_url,
            "thumbnail_url": self.thumbnail_url,
            "original_script": self.original_script,
            "cleaned_script": self.cleaned_script,
            "title": self.title,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "completed_at": self.completed_at.isoformat(),
        }

    @classmethod
    def from_document(cls, data: Dict[str, Any]) -> "GeneratedVideoRecord":
        created_at = datetime.fromisoformat(data["created_at"])
        completed_raw = data.get("completed_at")
        return cls(
            id=data.get("id"),
            owner_id=data["owner_id"],
            job_id=data["job_id"],
            video_url=data["video_url"],
            thumbnail_url=data.get("thumbnail_url"),
            original_script=data.get("original_script", ""),
            cleaned_script=data.get("cleaned_script", ""),
            title=data.get("title"),
            status=data.get("status", COMPLETED_STATUS),
            created_at=created_at,
            completed_at=datetime.fromisoformat(completed_raw) if completed_raw else created_at,
        )


class VideoRepository(ABC):
    """Abstract repository for generated videos."""

    @abstractmethod
    def create(self, record: GeneratedVideoRecord) -> str:
        """Persist a new record and return its id."""
        pass

    @abstractmethod
    def get(self, video_id: str) -> Optional[GeneratedVideoRecord]:
        pass

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> List[GeneratedVideoRecord]:
        """All of an owner's videos, newest first."""
        pass

    @abstractmethod
    def delete(self, video_id: str) -> bool:
        pass


class DocumentVideoRepository(VideoRepository):
    """Video repository over the ``videos`` document collection."""

    def __init__(self, store: Optional[DocumentStore] = None):
        self.store = store or get_document_store()

    def create(self, record: GeneratedVideoRecord) -> str:
        video_id = self.store.create(VIDEOS_COLLECTION, record.to_document())
        record.id = video_id
        return video_id

    def get(self, video_id: str) -> Optional[GeneratedVideoRecord]:
        data = self.store.get(VIDEOS_COLLECTION, video_id)
        return GeneratedVideoRecord.from_document(data) if data else None

    def list_by_owner(self, owner_id: str) -> List[GeneratedVideoRecord]:
        records = [
            GeneratedVideoRecord.from_document(data)
            for data in self.store.query(VIDEOS_COLLECTION, "owner_id", owner_id)
        ]
        records.sort(key=lambda r: r.created_at, reverse=True)
        return records

    def delete(self, video_id: str) -> bool:
        return self.store.delete(VIDEOS_COLLECTION, video_id)
