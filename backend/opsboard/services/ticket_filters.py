"""Ticket Filter Predicates

Turns a TicketFilters object into a single predicate over GlpiTicket.
Dimensions combine with AND; multi-value dimensions are membership tests.
Date ranges compare the fixed-width "YYYY-MM-DD HH:MM:SS" strings lexically.
"""
from typing import Callable, Iterable, List, Optional, Sequence

from ..domain.models import GlpiTicket, TicketFilters

TicketPredicate = Callable[[GlpiTicket], bool]


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def _search(needle: str) -> TicketPredicate:
    needle = needle.lower()
    return lambda t: _contains(t.name, needle) or _contains(t.content, needle)


def _name(needle: str) -> TicketPredicate:
    needle = needle.lower()
    return lambda t: _contains(t.name, needle)


def _member(field: str, values: Sequence[int]) -> TicketPredicate:
    allowed = set(values)
    return lambda t: getattr(t, field) in allowed


def _optional_member(field: str, values: Sequence[int]) -> TicketPredicate:
    # 0 is GLPI's "not set" for foreign keys
    allowed = set(values)
    return lambda t: bool(getattr(t, field)) and getattr(t, field) in allowed


def _at_least(field: str, bound: str) -> TicketPredicate:
    return lambda t: bool(getattr(t, field)) and getattr(t, field) >= bound


def _at_most(field: str, bound: str) -> TicketPredicate:
    return lambda t: bool(getattr(t, field)) and getattr(t, field) <= bound


def build_predicates(filters: TicketFilters) -> List[TicketPredicate]:
    """One predicate per constrained dimension of the filter"""
    predicates: List[TicketPredicate] = []

    if filters.search:
        predicates.append(_search(filters.search))
    if filters.status:
        predicates.append(_member("status", filters.status))
    if filters.priority:
        predicates.append(_member("priority", filters.priority))
    if filters.type:
        predicates.append(_member("type", filters.type))
    if filters.category:
        predicates.append(_optional_member("itilcategories_id", filters.category))
    if filters.assigned_to:
        predicates.append(_optional_member("users_id_assign", filters.assigned_to))
    if filters.assigned_group:
        predicates.append(_optional_member("groups_id_assign", filters.assigned_group))
    if filters.date_from:
        predicates.append(_at_least("date", filters.date_from))
    if filters.date_to:
        predicates.append(_at_most("date", filters.date_to))
    if filters.name:
        predicates.append(_name(filters.name))
    if filters.close_date_from:
        predicates.append(_at_least("closedate", filters.close_date_from))
    if filters.close_date_to:
        predicates.append(_at_most("closedate", filters.close_date_to))
    if filters.users_id_recipient:
        predicates.append(_optional_member("users_id_recipient", filters.users_id_recipient))

    return predicates


def build_predicate(filters: TicketFilters) -> TicketPredicate:
    """Compose every filter dimension into one predicate"""
    predicates = build_predicates(filters)
    return lambda ticket: all(predicate(ticket) for predicate in predicates)


def filter_tickets(tickets: Iterable[GlpiTicket], filters: TicketFilters) -> List[GlpiTicket]:
    """Tickets satisfying every constrained dimension, in input order"""
    predicate = build_predicate(filters)
    return [ticket for ticket in tickets if predicate(ticket)]
