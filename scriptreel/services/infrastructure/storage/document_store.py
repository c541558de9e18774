"""
Document Store - File-backed collections of JSON documents.

Each collection is a directory and each document one ``<id>.json`` file inside
it. Ids are generated by the store. Operations are independent and need no
transactions: a retried create simply yields a new document.
"""

import json
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from threading import RLock
from typing import Any, Dict, List, Optional

from scriptreel.config import get_store_data_dir
from scriptreel.core import get_logger

logger = get_logger(__name__, service="document_store")


class DocumentStore(ABC):
    """Create/read/delete documents in named collections, with query by field."""

    @abstractmethod
    def create(self, collection: str, data: Dict[str, Any]) -> str:
        """Store ``data`` as a new document and return its generated id."""
        pass

    @abstractmethod
    def get(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        """Return the document (with its ``id``) or None."""
        pass

    @abstractmethod
    def query(self, collection: str, field: str, value: Any) -> List[Dict[str, Any]]:
        """Return every document whose ``field`` equals ``value``."""
        pass

    @abstractmethod
    def delete(self, collection: str, document_id: str) -> bool:
        """Delete a document; False if it did not exist."""
        pass


class FileDocumentStore(DocumentStore):
    """Document store persisting each document as a JSON file."""

    def __init__(self, root_dir: Optional[str] = None):
        self._root = Path(root_dir) if root_dir else get_store_data_dir()
        self._root.mkdir(parents=True, exist_ok=True)
        self._lock = RLock()

    @property
    def root(self) -> Path:
        return self._root

    def _collection_dir(self, collection: str) -> Path:
        if not collection or not collection.replace("_", "").isalnum():
            raise ValueError(f"Invalid collection name: {collection!r}")
        path = self._root / collection
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _document_file(self, collection: str, document_id: str) -> Optional[Path]:
        # Ids are generated here as hex; anything else cannot name a document.
        if not document_id or not all(ch in "0123456789abcdef" for ch in document_id):
            return None
        return self._collection_dir(collection) / f"{document_id}.json"

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def create(self, collection: str, data: Dict[str, Any]) -> str:
        document_id = uuid.uuid4().hex
        document = {**data, "id": document_id}
        path = self._collection_dir(collection) / f"{document_id}.json"
        with self._lock:
            tmp_path = path.with_suffix(".json.tmp")
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2, ensure_ascii=False, default=str)
                tmp_path.replace(path)
            except (OSError, TypeError, ValueError):
                tmp_path.unlink(missing_ok=True)
                raise
        logger.debug("Created document", extra={"collection": collection, "document_id": document_id})
        return document_id

    def get(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        path = self._document_file(collection, document_id)
        if path is None:
            return None
        with self._lock:
            if not path.exists():
                return None
            return self._read(path)

    def query(self, collection: str, field: str, value: Any) -> List[Dict[str, Any]]:
        results: List[Dict[str, Any]] = []
        with self._lock:
            for path in sorted(self._collection_dir(collection).glob("*.json")):
                try:
                    document = self._read(path)
                except (OSError, json.JSONDecodeError) as exc:
                    logger.warning("Skipping unreadable document", extra={"path": str(path), "error": str(exc)})
                    continue
                if document.get(field) == value:
                    results.append(document)
        return results

    def delete(self, collection: str, document_id: str) -> bool:
        path = self._document_file(collection, document_id)
        if path is None:
            return False
        with self._lock:
            if not path.exists():
                return False
            path.unlink()
        logger.debug("Deleted document", extra={"collection": collection, "document_id": document_id})
        return True


_document_store_instance: Optional[DocumentStore] = None


def get_document_store() -> DocumentStore:
    """Get the shared DocumentStore instance (singleton pattern)."""
    global _document_store_instance
    if _document_store_instance is None:
        _document_store_instance = FileDocumentStore()
    return _document_store_instance


def reset_document_store() -> None:
    """Drop the shared instance so the next call re-reads ``STORE_DATA_DIR``."""
    global _document_store_instance
    _document_store_instance = None
