"""
Ticket Routes Module

GLPI ticket endpoints, read-only:

- crud.py: Paginated filtered list and raw ticket detail
- stats.py: Aggregated KPIs over the filtered tickets

Both routers are mounted under /tickets by the API router. The list route
has an empty path, so they cannot be nested under a prefix-less router.
"""

from .crud import router as crud_router
from .stats import router as stats_router

__all__ = ["crud_router", "stats_router"]
