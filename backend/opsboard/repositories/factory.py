"""Repository wiring for the configured storage backend"""
from dataclasses import dataclass
from typing import Callable

from .automation_repo import AutomationRepository
from .bi_repo import BiRepository
from .canvas_repo import CanvasRepository
from .document_store import DocumentStore, MemoryDocumentStore, MongoDocumentStore
from .mongo_client import (
    get_collection, AUTOMATIONS_COLLECTION, BIS_COLLECTION, CANVAS_EDGES_COLLECTION,
    CANVAS_NODES_COLLECTION, TASKS_COLLECTION
)
from .task_repo import TaskRepository
from ..config.settings import Settings
from ..domain.enums import StorageBackend
from ..domain.errors import ConfigurationError
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Repositories:
    """Every CRUD repository, built once per application"""
    bis: BiRepository
    tasks: TaskRepository
    automations: AutomationRepository
    canvas: CanvasRepository


def _store_factory(backend: StorageBackend) -> Callable[[str], DocumentStore]:
    if backend == StorageBackend.MONGO:
        return lambda name: MongoDocumentStore(get_collection(name))
    return MemoryDocumentStore


def build_repositories(settings: Settings) -> Repositories:
    """Build repositories over the storage backend named in settings"""
    try:
        backend = StorageBackend(settings.storage_backend.lower())
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown storage backend: {settings.storage_backend}",
            details={"allowed": [b.value for b in StorageBackend]}
        ) from e

    make_store = _store_factory(backend)
    logger.info(f"Using {backend.value} storage backend")
    return build_repositories_from(make_store)


def build_repositories_from(make_store: Callable[[str], DocumentStore]) -> Repositories:
    """Build repositories from a `name -> DocumentStore` factory"""
    stores = {
        name: make_store(name)
        for name in (
            BIS_COLLECTION, TASKS_COLLECTION, AUTOMATIONS_COLLECTION,
            CANVAS_NODES_COLLECTION, CANVAS_EDGES_COLLECTION,
        )
    }
    return Repositories(
        bis=BiRepository(stores[BIS_COLLECTION]),
        tasks=TaskRepository(stores[TASKS_COLLECTION]),
        automations=AutomationRepository(stores[AUTOMATIONS_COLLECTION]),
        canvas=CanvasRepository(stores[CANVAS_NODES_COLLECTION], stores[CANVAS_EDGES_COLLECTION]),
    )
