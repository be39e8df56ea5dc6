"""
Ticket List Routes

Filtered, paginated ticket list and raw ticket detail.
"""

from typing import Any, Dict
from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request

from ...deps import get_glpi_client, get_settings_dep, get_ticket_service
from ....config.settings import Settings
from ....domain.models import TicketPage
from ....glpi.client import GlpiClient
from ....services.pagination import DEFAULT_TICKET_PAGE_SIZE, MAX_PAGE_SIZE
from ....services.ticket_service import TicketService, parse_filters
from .session import schedule_session_release

router = APIRouter()


@router.get("", response_model=TicketPage)
async def list_tickets(
    request: Request,
    background_tasks: BackgroundTasks,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_TICKET_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    service: TicketService = Depends(get_ticket_service),
    glpi: GlpiClient = Depends(get_glpi_client),
    settings: Settings = Depends(get_settings_dep)
):
    """
    List tickets

    Array filters (status, priority, type, category, assignedTo,
    assignedGroup, users_id_recipient) are JSON arrays, e.g. `status=[1,2]`.
    `total` is the number of tickets matching the filters.
    """
    filters = parse_filters(request.query_params)
    schedule_session_release(background_tasks, glpi, settings)
    return await service.list_tickets(filters, page=page, limit=limit)


@router.get("/{ticket_id}/full")
async def get_ticket_full(
    ticket_id: int,
    background_tasks: BackgroundTasks,
    service: TicketService = Depends(get_ticket_service),
    glpi: GlpiClient = Depends(get_glpi_client),
    settings: Settings = Depends(get_settings_dep)
) -> Dict[str, Any]:
    """Raw GLPI ticket with every upstream field"""
    schedule_session_release(background_tasks, glpi, settings)
    return await service.get_ticket_detail(ticket_id)
