"""Canvas API Routes - BI flow diagram"""
from fastapi import APIRouter, Depends

from ..deps import get_canvas_service
from ...domain.models import CanvasData
from ...services.canvas_service import CanvasService

router = APIRouter()


@router.get("", response_model=CanvasData)
async def get_canvas(service: CanvasService = Depends(get_canvas_service)):
    """Saved canvas, empty when nothing was saved yet"""
    return service.get_canvas()


@router.post("", response_model=CanvasData)
async def save_canvas(request: CanvasData, service: CanvasService = Depends(get_canvas_service)):
    """Replace the whole canvas with the given nodes and edges"""
    return service.save_canvas(request.nodes, request.edges)
