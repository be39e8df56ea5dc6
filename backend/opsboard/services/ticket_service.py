"""Ticket Service - GLPI fetch, filter, paginate and aggregate"""
import json
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from ..domain.models import GlpiTicket, LookupItem, TicketFilters, TicketPage, TicketStats
from ..domain.errors import MalformedFilterError, ValidationError
from ..glpi.client import GlpiClient
from .pagination import DEFAULT_TICKET_PAGE_SIZE, DEFAULT_USER_PAGE_SIZE, glpi_range, paginate
from .ticket_filters import filter_tickets
from .ticket_stats import compute_stats
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Query parameters carrying a JSON-encoded array of ids
ARRAY_FILTER_PARAMS = (
    "status", "priority", "type", "category",
    "assignedTo", "assignedGroup", "users_id_recipient",
)
SCALAR_FILTER_PARAMS = (
    "search", "name", "dateFrom", "dateTo", "closeDateFrom", "closeDateTo",
)


def _decode_array_param(key: str, raw: str) -> Optional[List[Any]]:
    raw = raw.strip()
    if not raw:
        return None
    if raw.startswith("["):
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as e:
            raise MalformedFilterError(
                "Malformed filter parameters",
                details={"param": key, "reason": str(e)}
            ) from e
        return value
    # Plain "1,2" is accepted as well
    return [part.strip() for part in raw.split(",") if part.strip()]


def parse_filters(params: Mapping[str, str]) -> TicketFilters:
    """
    Build TicketFilters from raw query parameters.

    Array dimensions arrive as JSON arrays (`status=[1,2]`) or comma lists.
    Unknown parameters (page, limit, ...) are ignored.

    Raises:
        MalformedFilterError: An array parameter is not valid JSON
        ValidationError: A value has the wrong type
    """
    data: Dict[str, Any] = {}
    for key in ARRAY_FILTER_PARAMS:
        if params.get(key) is not None:
            values = _decode_array_param(key, params[key])
            if values is not None:
                data[key] = values
    for key in SCALAR_FILTER_PARAMS:
        if params.get(key):
            data[key] = params[key]

    try:
        return TicketFilters.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid filter parameters",
            details={"errors": e.errors(include_url=False, include_context=False)}
        ) from e


def parse_tickets(records: Iterable[Any]) -> List[GlpiTicket]:
    """Validate raw GLPI records, skipping the ones that do not fit the model"""
    tickets: List[GlpiTicket] = []
    skipped = 0
    for record in records:
        try:
            tickets.append(GlpiTicket.model_validate(record))
        except PydanticValidationError as e:
            skipped += 1
            record_id = record.get("id") if isinstance(record, dict) else None
            logger.warning(f"Skipping invalid GLPI ticket {record_id}: {e.error_count()} errors")
    if skipped:
        logger.warning(f"Skipped {skipped} invalid GLPI ticket records", extra={"count": skipped})
    return tickets


def _first_present(record: Dict[str, Any], keys: Sequence[str], fallback: str) -> str:
    for key in keys:
        value = record.get(key)
        if value:
            return str(value)
    return fallback


def _lookup_items(
    records: Iterable[Dict[str, Any]], keys: Sequence[str], label: str
) -> List[LookupItem]:
    items = []
    for record in records:
        if not isinstance(record, dict) or record.get("id") is None:
            continue
        items.append(LookupItem(
            id=record["id"],
            name=_first_present(record, keys, f"{label} {record['id']}")
        ))
    return items


class TicketService:
    """Read-only ticket operations backed by GLPI"""

    def __init__(self, glpi: GlpiClient, ticket_range: str = "0-999"):
        self.glpi = glpi
        self.ticket_range = ticket_range

    # =========================================================================
    # Tickets
    # =========================================================================

    async def fetch_tickets(self) -> List[GlpiTicket]:
        """Fetch and validate the whole ticket window"""
        records = await self.glpi.get_tickets(self.ticket_range)
        return parse_tickets(records)

    async def list_tickets(
        self,
        filters: TicketFilters,
        page: int = 1,
        limit: int = DEFAULT_TICKET_PAGE_SIZE
    ) -> TicketPage:
        """Filtered tickets, one page at a time"""
        matching = filter_tickets(await self.fetch_tickets(), filters)
        items = paginate(matching, page, limit)
        logger.info(
            f"Returning {len(items)} of {len(matching)} tickets for page {page}",
            extra={"count": len(items)}
        )
        return TicketPage(page=page, limit=limit, total=len(matching), items=items)

    async def get_stats(self, filters: TicketFilters, today: Optional[str] = None) -> TicketStats:
        """Aggregated KPIs over the filtered tickets"""
        matching = filter_tickets(await self.fetch_tickets(), filters)
        return compute_stats(matching, today=today)

    async def get_ticket_detail(self, ticket_id: int) -> Dict[str, Any]:
        """Raw GLPI ticket, unmodified"""
        return await self.glpi.get_ticket(ticket_id)

    # =========================================================================
    # Reference data
    # =========================================================================

    async def list_categories(self) -> List[LookupItem]:
        records = await self.glpi.get_categories()
        return _lookup_items(records, ("completename", "name"), "Category")

    async def list_users(self, page: int = 1, limit: int = DEFAULT_USER_PAGE_SIZE) -> List[LookupItem]:
        """Active users within one GLPI range window"""
        records = await self.glpi.get_users(glpi_range(page, limit))
        active = [r for r in records if isinstance(r, dict) and r.get("is_active")]
        return _lookup_items(active, ("realname", "name"), "User")

    async def list_groups(self) -> List[LookupItem]:
        records = await self.glpi.get_groups()
        return _lookup_items(records, ("name", "completename"), "Group")
