"""API module - Routes and dependencies"""
from .deps import get_glpi_client, get_ticket_service

__all__ = ["get_glpi_client", "get_ticket_service"]
