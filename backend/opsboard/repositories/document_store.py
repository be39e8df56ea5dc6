"""Document Stores - Swappable persistence for the CRUD repositories

Documents are plain JSON-compatible dicts keyed by their "id" field.
Queries are equality matches; dotted keys reach into embedded documents and
arrays the way MongoDB does ("bases.id" matches any base with that id).
"""
import copy
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection

from ..utils.logger import get_logger

logger = get_logger(__name__)

Document = Dict[str, Any]
Query = Dict[str, Any]
# (field, descending)
SortSpec = Tuple[str, bool]


class DocumentStore(ABC):
    """One collection of documents"""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def insert(self, doc: Document) -> Document:
        """Store a new document"""

    @abstractmethod
    def get(self, doc_id: str) -> Optional[Document]:
        """Document by id, or None"""

    @abstractmethod
    def find(self, query: Optional[Query] = None, sort: Optional[SortSpec] = None) -> List[Document]:
        """Documents matching every key of the query"""

    @abstractmethod
    def update(self, doc_id: str, fields: Dict[str, Any]) -> Optional[Document]:
        """Set top-level fields and return the updated document (None if missing)"""

    @abstractmethod
    def delete(self, doc_id: str) -> bool:
        """Delete one document, True when something was removed"""

    @abstractmethod
    def delete_many(self, query: Query) -> int:
        """Delete matching documents, returning how many were removed"""

    @abstractmethod
    def replace_all(self, docs: Iterable[Document]) -> None:
        """Swap the whole collection content for the given documents"""

    def find_one(self, query: Query) -> Optional[Document]:
        docs = self.find(query)
        return docs[0] if docs else None


# =============================================================================
# In-memory
# =============================================================================

def _values_at(doc: Any, path: str) -> List[Any]:
    """Every value reachable through a dotted path, fanning out over arrays"""
    values = [doc]
    for part in path.split("."):
        found = []
        for value in values:
            if isinstance(value, dict):
                if part in value:
                    found.append(value[part])
            elif isinstance(value, list):
                found.extend(item[part] for item in value if isinstance(item, dict) and part in item)
        values = found
    return values


def _matches(doc: Document, query: Query) -> bool:
    for path, expected in query.items():
        values = _values_at(doc, path)
        if not any(v == expected or (isinstance(v, list) and expected in v) for v in values):
            return False
    return True


class MemoryDocumentStore(DocumentStore):
    """
    Process-local store guarded by a re-entrant lock.

    Documents are deep-copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self, name: str):
        super().__init__(name)
        self._docs: Dict[str, Document] = {}
        self._lock = threading.RLock()

    def insert(self, doc: Document) -> Document:
        with self._lock:
            self._docs[doc["id"]] = copy.deepcopy(doc)
            return copy.deepcopy(doc)

    def get(self, doc_id: str) -> Optional[Document]:
        with self._lock:
            doc = self._docs.get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def find(self, query: Optional[Query] = None, sort: Optional[SortSpec] = None) -> List[Document]:
        with self._lock:
            docs = [copy.deepcopy(d) for d in self._docs.values() if _matches(d, query or {})]
        if sort:
            field, descending = sort
            docs.sort(key=lambda d: (d.get(field) is not None, d.get(field)), reverse=descending)
        return docs

    def update(self, doc_id: str, fields: Dict[str, Any]) -> Optional[Document]:
        with self._lock:
            doc = self._docs.get(doc_id)
            if doc is None:
                return None
            doc.update(copy.deepcopy(fields))
            return copy.deepcopy(doc)

    def delete(self, doc_id: str) -> bool:
        with self._lock:
            return self._docs.pop(doc_id, None) is not None

    def delete_many(self, query: Query) -> int:
        with self._lock:
            doomed = [doc_id for doc_id, doc in self._docs.items() if _matches(doc, query)]
            for doc_id in doomed:
                del self._docs[doc_id]
            return len(doomed)

    def replace_all(self, docs: Iterable[Document]) -> None:
        with self._lock:
            self._docs = {doc["id"]: copy.deepcopy(doc) for doc in docs}


# =============================================================================
# MongoDB
# =============================================================================

def _strip_id(doc: Optional[Document]) -> Optional[Document]:
    if doc is not None:
        doc.pop("_id", None)
    return doc


class MongoDocumentStore(DocumentStore):
    """Store backed by a pymongo collection, using the document id as _id"""

    def __init__(self, collection: Collection):
        super().__init__(collection.name)
        self._collection = collection

    def insert(self, doc: Document) -> Document:
        stored = dict(doc)
        stored["_id"] = doc["id"]
        self._collection.insert_one(stored)
        return dict(doc)

    def get(self, doc_id: str) -> Optional[Document]:
        return _strip_id(self._collection.find_one({"_id": doc_id}))

    def find(self, query: Optional[Query] = None, sort: Optional[SortSpec] = None) -> List[Document]:
        cursor = self._collection.find(query or {})
        if sort:
            field, descending = sort
            cursor = cursor.sort(field, DESCENDING if descending else ASCENDING)
        return [_strip_id(doc) for doc in cursor]

    def update(self, doc_id: str, fields: Dict[str, Any]) -> Optional[Document]:
        doc = self._collection.find_one_and_update(
            {"_id": doc_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER
        )
        return _strip_id(doc)

    def delete(self, doc_id: str) -> bool:
        return self._collection.delete_one({"_id": doc_id}).deleted_count > 0

    def delete_many(self, query: Query) -> int:
        return self._collection.delete_many(query).deleted_count

    def replace_all(self, docs: Iterable[Document]) -> None:
        stored = [dict(doc, _id=doc["id"]) for doc in docs]
        self._collection.delete_many({})
        if stored:
            self._collection.insert_many(stored)
        logger.info(f"Replaced {self.name} with {len(stored)} documents", extra={"count": len(stored)})
