"""Automation Service - Registry of scheduled integrations"""
from typing import List

from ..domain.models import Automation, AutomationCreate, AutomationUpdate
from ..domain.errors import AutomationNotFoundError
from ..repositories.automation_repo import AutomationRepository
from ..utils.idgen import generate_automation_id
from ..utils.time import utc_now
from ..utils.logger import get_logger

logger = get_logger(__name__)


class AutomationService:
    """Service for automation registry operations"""

    def __init__(self, repo: AutomationRepository):
        self.repo = repo

    def list_automations(self) -> List[Automation]:
        return self.repo.list_all()

    def get_automation(self, automation_id: str) -> Automation:
        return self.repo.get_or_raise(automation_id)

    def create_automation(self, data: AutomationCreate) -> Automation:
        automation = Automation(
            id=generate_automation_id(),
            created_at=utc_now(),
            **data.model_dump(),
        )
        self.repo.create(automation)
        logger.info(
            f"Registered automation {automation.nome_integracao}",
            extra={"automation_id": automation.id}
        )
        return automation

    def update_automation(self, automation_id: str, patch: AutomationUpdate) -> Automation:
        fields = patch.model_dump(mode="json", exclude_none=True)
        if not fields:
            return self.repo.get_or_raise(automation_id)
        return self.repo.update(automation_id, fields)

    def delete_automation(self, automation_id: str) -> None:
        if not self.repo.delete(automation_id):
            raise AutomationNotFoundError(
                "Automation not found", details={"automation_id": automation_id}
            )
