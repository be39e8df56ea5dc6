"""Pagination helpers"""
from typing import List, Sequence, TypeVar

T = TypeVar("T")

DEFAULT_TICKET_PAGE_SIZE = 20
DEFAULT_USER_PAGE_SIZE = 50
MAX_PAGE_SIZE = 1000


def paginate(items: Sequence[T], page: int = 1, limit: int = DEFAULT_TICKET_PAGE_SIZE) -> List[T]:
    """
    Slice one 1-based page out of a sequence.

    Pages past the end come back empty. Pages below 1 are treated as page 1;
    the HTTP layer rejects them before they get here.
    """
    page = max(page, 1)
    start = (page - 1) * limit
    return list(items[start:start + limit])


def glpi_range(page: int = 1, limit: int = DEFAULT_USER_PAGE_SIZE) -> str:
    """GLPI `range` value ("start-end", inclusive) for a 1-based page"""
    page = max(page, 1)
    start = (page - 1) * limit
    return f"{start}-{start + limit - 1}"
