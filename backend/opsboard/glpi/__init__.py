"""GLPI helpdesk integration"""
from .client import GlpiClient

__all__ = ["GlpiClient"]
