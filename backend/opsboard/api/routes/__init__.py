"""API Routes module"""
from fastapi import APIRouter

from .tickets import crud_router as tickets_router, stats_router as ticket_stats_router
from .lookups import router as lookups_router
from .bis import router as bis_router, bases_router
from .automacoes import router as automacoes_router
from .canvas import router as canvas_router
from .tasks import router as tasks_router

# Main API router
api_router = APIRouter()

# Include all route modules
api_router.include_router(ticket_stats_router, prefix="/tickets", tags=["Tickets"])
api_router.include_router(tickets_router, prefix="/tickets", tags=["Tickets"])
api_router.include_router(lookups_router, tags=["Lookups"])
api_router.include_router(bis_router, prefix="/bis", tags=["BIs"])
api_router.include_router(bases_router, prefix="/bases", tags=["BIs"])
api_router.include_router(automacoes_router, prefix="/automacoes", tags=["Automations"])
api_router.include_router(canvas_router, prefix="/canvas", tags=["Canvas"])
api_router.include_router(tasks_router, prefix="/tasks", tags=["Tasks"])

__all__ = ["api_router"]
