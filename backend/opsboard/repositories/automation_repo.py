"""Automation Repository - Data access for registered automations"""
from typing import Any, Dict, List, Optional

from .document_store import DocumentStore
from ..domain.models import Automation
from ..domain.errors import AutomationNotFoundError


class AutomationRepository:
    """Repository for automations"""

    def __init__(self, store: DocumentStore):
        self._automations = store

    def create(self, automation: Automation) -> Automation:
        self._automations.insert(automation.model_dump(mode="json"))
        return automation

    def get(self, automation_id: str) -> Optional[Automation]:
        doc = self._automations.get(automation_id)
        return Automation.model_validate(doc) if doc else None

    def get_or_raise(self, automation_id: str) -> Automation:
        automation = self.get(automation_id)
        if not automation:
            raise AutomationNotFoundError(
                "Automation not found", details={"automation_id": automation_id}
            )
        return automation

    def list_all(self) -> List[Automation]:
        """All automations, newest first"""
        return [Automation.model_validate(doc) for doc in self._automations.find(sort=("created_at", True))]

    def update(self, automation_id: str, fields: Dict[str, Any]) -> Automation:
        doc = self._automations.update(automation_id, fields)
        if doc is None:
            raise AutomationNotFoundError(
                "Automation not found", details={"automation_id": automation_id}
            )
        return Automation.model_validate(doc)

    def delete(self, automation_id: str) -> bool:
        return self._automations.delete(automation_id)
