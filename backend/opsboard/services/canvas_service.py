"""Canvas Service - BI flow diagram persistence"""
import threading
from collections import Counter
from typing import List, Sequence

from ..domain.errors import ValidationError
from ..domain.models import CanvasData, CanvasEdge, CanvasNode
from ..repositories.canvas_repo import CanvasRepository
from ..utils.logger import get_logger

logger = get_logger(__name__)


def _duplicate_ids(items: Sequence) -> List[str]:
    counts = Counter(item.id for item in items)
    return sorted(item_id for item_id, count in counts.items() if count > 1)


class CanvasService:
    """The canvas is always saved whole: the previous nodes and edges are dropped"""

    def __init__(self, repo: CanvasRepository):
        self.repo = repo
        self._lock = threading.Lock()

    def get_canvas(self) -> CanvasData:
        with self._lock:
            return self.repo.load()

    def save_canvas(self, nodes: List[CanvasNode], edges: List[CanvasEdge]) -> CanvasData:
        """
        Replace the stored canvas.

        Raises:
            ValidationError: Node or edge ids repeat; nothing is written
        """
        duplicates = {"nodes": _duplicate_ids(nodes), "edges": _duplicate_ids(edges)}
        if duplicates["nodes"] or duplicates["edges"]:
            raise ValidationError("Canvas contains duplicate ids", details=duplicates)

        with self._lock:
            canvas = self.repo.replace(nodes, edges)
        logger.info(
            f"Saved canvas with {len(nodes)} nodes and {len(edges)} edges",
            extra={"count": len(nodes) + len(edges)}
        )
        return canvas
