"""API Dependencies - Common dependencies for routes"""
from fastapi import Depends, Request

from ..config.settings import Settings, get_settings
from ..domain.errors import ConfigurationError
from ..glpi.client import GlpiClient
from ..repositories.factory import Repositories
from ..services.automation_service import AutomationService
from ..services.bi_service import BiService
from ..services.canvas_service import CanvasService
from ..services.task_service import TaskService
from ..services.ticket_service import TicketService


def get_settings_dep() -> Settings:
    return get_settings()


def get_glpi_client(
    request: Request, settings: Settings = Depends(get_settings_dep)
) -> GlpiClient:
    """
    GLPI client for the current request.

    With per-request release enabled every request gets its own session,
    which its background teardown kills. Otherwise requests share the
    startup client's cached session.

    Raises:
        ConfigurationError: GLPI credentials were not configured
    """
    client = getattr(request.app.state, "glpi", None)
    if client is None:
        raise ConfigurationError(
            "Missing GLPI configuration. Please set GLPI_API_URL, GLPI_USER_TOKEN, "
            "and GLPI_APP_TOKEN environment variables.",
            details={"missing": settings.missing_glpi_settings}
        )
    if settings.glpi_release_session_per_request:
        return client.new_session()
    return client


def get_ticket_service(
    glpi: GlpiClient = Depends(get_glpi_client),
    settings: Settings = Depends(get_settings_dep)
) -> TicketService:
    return TicketService(glpi, ticket_range=settings.glpi_ticket_range)


def get_repositories(request: Request) -> Repositories:
    return request.app.state.repositories


def get_bi_service(request: Request) -> BiService:
    return request.app.state.bi_service


def get_task_service(repos: Repositories = Depends(get_repositories)) -> TaskService:
    return TaskService(repos.tasks)


def get_automation_service(repos: Repositories = Depends(get_repositories)) -> AutomationService:
    return AutomationService(repos.automations)


def get_canvas_service(request: Request) -> CanvasService:
    return request.app.state.canvas_service
