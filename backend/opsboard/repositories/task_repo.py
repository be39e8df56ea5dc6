"""Task Repository - Data access for the task board"""
from typing import Any, Dict, List, Optional

from .document_store import DocumentStore
from ..domain.models import Task
from ..domain.errors import TaskNotFoundError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class TaskRepository:
    """Repository for task board entries"""

    def __init__(self, store: DocumentStore):
        self._tasks = store

    def create_many(self, tasks: List[Task]) -> List[Task]:
        for task in tasks:
            self._tasks.insert(task.model_dump(mode="json"))
        return tasks

    def get(self, task_id: str) -> Optional[Task]:
        doc = self._tasks.get(task_id)
        return Task.model_validate(doc) if doc else None

    def get_or_raise(self, task_id: str) -> Task:
        task = self.get(task_id)
        if not task:
            raise TaskNotFoundError(f"Task {task_id} not found", details={"task_id": task_id})
        return task

    def find(self, query: Dict[str, Any]) -> List[Task]:
        """Tasks matching an equality query, ordered by start time"""
        docs = self._tasks.find(query, sort=("inicio", False))
        return [Task.model_validate(doc) for doc in docs]

    def update(self, task_id: str, fields: Dict[str, Any]) -> Task:
        doc = self._tasks.update(task_id, fields)
        if doc is None:
            raise TaskNotFoundError(f"Task {task_id} not found", details={"task_id": task_id})
        return Task.model_validate(doc)

    def delete(self, task_id: str) -> bool:
        return self._tasks.delete(task_id)

    def delete_many(self, query: Dict[str, Any]) -> int:
        return self._tasks.delete_many(query)
