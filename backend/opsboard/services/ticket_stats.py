"""Ticket Statistics - KPI and chart aggregation over a filtered ticket list"""
from collections import Counter
from typing import Dict, Iterable, Optional, Tuple

from ..domain.enums import GlpiTicketStatus
from ..domain.models import (
    GlpiTicket, TicketStats, StatusCount, PriorityCount, TypeCount, CategoryCount,
    RequesterCount, TimelinePoint, TimelineComparisonPoint
)
from ..utils.time import today_ymd

TOP_REQUESTERS_LIMIT = 10

# KPI bucket per raw status code. Both waiting codes count as pending.
STATUS_BUCKETS: Dict[int, str] = {
    GlpiTicketStatus.NEW: "new",
    GlpiTicketStatus.PROCESSING: "in_progress",
    GlpiTicketStatus.PENDING: "pending",
    GlpiTicketStatus.PENDING_LEGACY: "pending",
    GlpiTicketStatus.SOLVED: "solved",
    GlpiTicketStatus.CLOSED: "closed",
}

# (ticket field, stats field) for each averaged delay
DELAY_METRICS: Tuple[Tuple[str, str], ...] = (
    ("close_delay_stat", "avg_close_delay"),
    ("solve_delay_stat", "avg_solve_delay"),
    ("takeintoaccount_delay_stat", "avg_take_into_account_delay"),
    ("waiting_duration", "avg_waiting_duration"),
)


def day_key(timestamp: str) -> str:
    """Date portion of a GLPI timestamp (text before the first space)"""
    return timestamp.split(" ", 1)[0]


def _average(total: float, count: int) -> float:
    return total / count if count > 0 else 0


def compute_stats(tickets: Iterable[GlpiTicket], today: Optional[str] = None) -> TicketStats:
    """
    Aggregate a filtered ticket collection in a single pass.

    Args:
        tickets: Already-filtered tickets
        today: Day key used for tickets without an opening date
            (defaults to the current UTC day)

    Returns:
        TicketStats with KPI counts, delay averages, breakdowns and timelines
    """
    fallback_day = today or today_ymd()

    total = 0
    buckets: Counter = Counter()
    delay_sums: Dict[str, float] = {field: 0 for field, _ in DELAY_METRICS}
    delay_counts: Dict[str, int] = {field: 0 for field, _ in DELAY_METRICS}

    by_status: Counter = Counter()
    by_priority: Counter = Counter()
    by_type: Counter = Counter()
    by_category: Counter = Counter()
    by_requester: Counter = Counter()
    opened_by_day: Counter = Counter()
    closed_by_day: Counter = Counter()

    for ticket in tickets:
        total += 1

        bucket = STATUS_BUCKETS.get(ticket.status)
        if bucket:
            buckets[bucket] += 1

        by_status[ticket.status] += 1
        by_priority[ticket.priority] += 1
        by_type[ticket.type] += 1

        if ticket.itilcategories_id:
            by_category[ticket.itilcategories_id] += 1
        if ticket.users_id_recipient:
            by_requester[ticket.users_id_recipient] += 1

        # Absent or zero metrics do not dilute the average
        for field, _ in DELAY_METRICS:
            value = getattr(ticket, field)
            if value:
                delay_sums[field] += value
                delay_counts[field] += 1

        opened_by_day[day_key(ticket.date) if ticket.date else fallback_day] += 1
        if ticket.closedate:
            closed_by_day[day_key(ticket.closedate)] += 1

    # Counter.most_common keeps first-seen order among equal counts
    top_requesters = [
        RequesterCount(user_id=user_id, user_name=f"User {user_id}", count=count)
        for user_id, count in by_requester.most_common(TOP_REQUESTERS_LIMIT)
    ]
    categories = [
        CategoryCount(category_id=category_id, category_name=f"Category {category_id}", count=count)
        for category_id, count in by_category.most_common()
    ]

    all_days = sorted(set(opened_by_day) | set(closed_by_day))
    timeline_comparison = [
        TimelineComparisonPoint(date=day, opened=opened_by_day[day], closed=closed_by_day[day])
        for day in all_days
    ]
    timeline = [
        TimelinePoint(date=day, count=count)
        for day, count in sorted(opened_by_day.items())
    ]

    averages = {
        stats_field: _average(delay_sums[field], delay_counts[field])
        for field, stats_field in DELAY_METRICS
    }

    return TicketStats(
        total=total,
        new=buckets["new"],
        in_progress=buckets["in_progress"],
        pending=buckets["pending"],
        solved=buckets["solved"],
        closed=buckets["closed"],
        by_status=[StatusCount(status=k, count=v) for k, v in by_status.items()],
        by_priority=[PriorityCount(priority=k, count=v) for k, v in by_priority.items()],
        by_type=[TypeCount(type=k, count=v) for k, v in by_type.items()],
        by_category=categories,
        top_requesters=top_requesters,
        timeline=timeline,
        timeline_comparison=timeline_comparison,
        **averages,
    )
