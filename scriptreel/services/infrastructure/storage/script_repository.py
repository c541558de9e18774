"""
Script set repository - Data access for persisted ScriptSet records.

One ScriptSet is written per generation request and never mutated.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from scriptreel.config import SCRIPTS_COLLECTION

from .document_store import DocumentStore, get_document_store


@dataclass
class ScriptSetRecord:
    """The scripts generated for one topic, in variant order."""
    owner_id: str
    topic: str
    created_at: datetime
    scripts: List[Dict[str, Any]] = field(default_factory=list)
    id: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        return {
            "owner_id": self.owner_id,
            "topic": self.topic,
            "scripts": [{"id": int(s["id"]), "content": s["content"]} for s in self.scripts],
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_document(cls, data: Dict[str, Any]) -> "ScriptSetRecord":
        return cls(
            id=data.get("id"),
            owner_id=data["owner_id"],
            topic=data.get("topic", ""),
            scripts=list(data.get("scripts", [])),
            created_at=datetime.fromisoformat(data["created_at"]),
        )


class ScriptSetRepository(ABC):
    """Abstract repository for script sets."""

    @abstractmethod
    def create(self, record: ScriptSetRecord) -> str:
        pass

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> List[ScriptSetRecord]:
        """All of an owner's script sets, newest first."""
        pass


class DocumentScriptSetRepository(ScriptSetRepository):
    """Script set repository over the ``scripts`` document collection."""

    def __init__(self, store: Optional[DocumentStore] = None):
        self.store = store or get_document_store()

    def create(self, record: ScriptSetRecord) -> str:
        script_set_id = self.store.create(SCRIPTS_COLLECTION, record.to_document())
        record.id = script_set_id
        return script_set_id

    def list_by_owner(self, owner_id: str) -> List[ScriptSetRecord]:
        records = [
            ScriptSetRecord.from_document(data)
            for data in self.store.query(SCRIPTS_COLLECTION, "owner_id", owner_id)
        ]
        records.sort(key=lambda r: r.created_at, reverse=True)
        return records
