"""Service modules - Business logic layer"""
from .ticket_service import TicketService
from .bi_service import BiService
from .task_service import TaskService
from .automation_service import AutomationService
from .canvas_service import CanvasService

__all__ = [
    "TicketService",
    "BiService",
    "TaskService",
    "AutomationService",
    "CanvasService",
]
