"""Canvas Repository - Diagram nodes and edges"""
from typing import List

from .document_store import DocumentStore
from ..domain.models import CanvasData, CanvasEdge, CanvasNode


class CanvasRepository:
    """Repository for the single BI canvas"""

    def __init__(self, nodes: DocumentStore, edges: DocumentStore):
        self._nodes = nodes
        self._edges = edges

    def load(self) -> CanvasData:
        return CanvasData(
            nodes=[CanvasNode.model_validate(doc) for doc in self._nodes.find()],
            edges=[CanvasEdge.model_validate(doc) for doc in self._edges.find()],
        )

    def replace(self, nodes: List[CanvasNode], edges: List[CanvasEdge]) -> CanvasData:
        self._nodes.replace_all(node.model_dump(mode="json") for node in nodes)
        self._edges.replace_all(edge.model_dump(mode="json") for edge in edges)
        return CanvasData(nodes=nodes, edges=edges)
