"""Repository modules - Data access layer"""
from .mongo_client import get_database, get_collection
from .document_store import DocumentStore, MemoryDocumentStore, MongoDocumentStore
from .bi_repo import BiRepository
from .task_repo import TaskRepository
from .automation_repo import AutomationRepository
from .canvas_repo import CanvasRepository
from .factory import Repositories, build_repositories

__all__ = [
    "get_database",
    "get_collection",
    "DocumentStore",
    "MemoryDocumentStore",
    "MongoDocumentStore",
    "BiRepository",
    "TaskRepository",
    "AutomationRepository",
    "CanvasRepository",
    "Repositories",
    "build_repositories",
]
