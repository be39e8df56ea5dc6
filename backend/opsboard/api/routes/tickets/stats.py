"""Ticket Statistics Routes"""

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from ...deps import get_glpi_client, get_settings_dep, get_ticket_service
from ....config.settings import Settings
from ....domain.models import TicketStats
from ....glpi.client import GlpiClient
from ....services.ticket_service import TicketService, parse_filters
from .session import schedule_session_release

router = APIRouter()


@router.get("/stats", response_model=TicketStats)
async def get_ticket_stats(
    request: Request,
    background_tasks: BackgroundTasks,
    service: TicketService = Depends(get_ticket_service),
    glpi: GlpiClient = Depends(get_glpi_client),
    settings: Settings = Depends(get_settings_dep)
):
    """
    Ticket KPIs for the dashboard

    Takes the same filter parameters as the ticket list.
    """
    filters = parse_filters(request.query_params)
    schedule_session_release(background_tasks, glpi, settings)
    return await service.get_stats(filters)
