"""Lookup API Routes - GLPI reference data (categories, users, groups)"""
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, Query

from ..deps import get_glpi_client, get_settings_dep, get_ticket_service
from ...config.settings import Settings
from ...domain.models import LookupItem
from ...glpi.client import GlpiClient
from ...services.pagination import DEFAULT_USER_PAGE_SIZE, MAX_PAGE_SIZE
from ...services.ticket_service import TicketService
from .tickets.session import schedule_session_release

router = APIRouter()


@router.get("/categories", response_model=List[LookupItem])
async def list_categories(
    background_tasks: BackgroundTasks,
    service: TicketService = Depends(get_ticket_service),
    glpi: GlpiClient = Depends(get_glpi_client),
    settings: Settings = Depends(get_settings_dep)
):
    """ITIL categories, named by their full path when GLPI provides one"""
    schedule_session_release(background_tasks, glpi, settings)
    return await service.list_categories()


@router.get("/users", response_model=List[LookupItem])
async def list_users(
    background_tasks: BackgroundTasks,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_USER_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    service: TicketService = Depends(get_ticket_service),
    glpi: GlpiClient = Depends(get_glpi_client),
    settings: Settings = Depends(get_settings_dep)
):
    """Active GLPI users, one page at a time"""
    schedule_session_release(background_tasks, glpi, settings)
    return await service.list_users(page=page, limit=limit)


@router.get("/groups", response_model=List[LookupItem])
async def list_groups(
    background_tasks: BackgroundTasks,
    service: TicketService = Depends(get_ticket_service),
    glpi: GlpiClient = Depends(get_glpi_client),
    settings: Settings = Depends(get_settings_dep)
):
    schedule_session_release(background_tasks, glpi, settings)
    return await service.list_groups()
