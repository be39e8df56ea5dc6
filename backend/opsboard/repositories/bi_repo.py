"""BI Repository - Data access for BIs and their embedded bases"""
from typing import Any, Dict, List, Optional

from .document_store import DocumentStore
from ..domain.models import Bi
from ..domain.errors import BiNotFoundError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class BiRepository:
    """Repository for BI intake records"""

    def __init__(self, store: DocumentStore):
        self._bis = store

    def create(self, bi: Bi) -> Bi:
        """Persist a new BI with its bases"""
        self._bis.insert(bi.model_dump(mode="json"))
        logger.info(f"Created BI: {bi.id} with {len(bi.bases)} bases", extra={"bi_id": bi.id})
        return bi

    def get(self, bi_id: str) -> Optional[Bi]:
        doc = self._bis.get(bi_id)
        return Bi.model_validate(doc) if doc else None

    def get_or_raise(self, bi_id: str) -> Bi:
        bi = self.get(bi_id)
        if not bi:
            raise BiNotFoundError("BI not found", details={"bi_id": bi_id})
        return bi

    def find_by_base_id(self, base_id: str) -> Optional[Bi]:
        """BI owning the given base"""
        doc = self._bis.find_one({"bases.id": base_id})
        return Bi.model_validate(doc) if doc else None

    def list_all(self) -> List[Bi]:
        """All BIs, newest first"""
        docs = self._bis.find(sort=("created_at", True))
        return [Bi.model_validate(doc) for doc in docs]

    def update(self, bi_id: str, fields: Dict[str, Any]) -> Bi:
        """Set fields on a BI (values must already be JSON-compatible)"""
        doc = self._bis.update(bi_id, fields)
        if doc is None:
            raise BiNotFoundError("BI not found", details={"bi_id": bi_id})
        return Bi.model_validate(doc)

    def save(self, bi: Bi) -> Bi:
        """Write back status and bases of a BI read earlier"""
        data = bi.model_dump(mode="json")
        return self.update(bi.id, {"status": data["status"], "bases": data["bases"]})

    def delete(self, bi_id: str) -> bool:
        deleted = self._bis.delete(bi_id)
        if deleted:
            logger.info(f"Deleted BI: {bi_id}", extra={"bi_id": bi_id})
        return deleted
