"""
Tests for Ticket Statistics

Covers KPI buckets, delay averages, breakdown ordering and timelines.
"""
from opsboard.services.ticket_stats import STATUS_BUCKETS, compute_stats, day_key
from tests.factories import make_ticket


class TestKpiCounts:
    """Status buckets and breakdown totals"""

    def test_empty_collection(self):
        stats = compute_stats([], today="2024-01-01")
        assert stats.total == 0
        assert stats.avg_close_delay == 0
        assert stats.by_status == []
        assert stats.timeline == []
        assert stats.timeline_comparison == []

    def test_status_buckets(self):
        tickets = [make_ticket(i, status=s) for i, s in enumerate([1, 2, 3, 4, 5, 6, 6], start=1)]
        stats = compute_stats(tickets)
        assert (stats.new, stats.in_progress, stats.pending, stats.solved, stats.closed) == (1, 1, 2, 1, 2)
        assert STATUS_BUCKETS[3] == STATUS_BUCKETS[4] == "pending"

    def test_breakdowns_sum_to_total(self):
        tickets = [
            make_ticket(i, status=(i % 6) + 1, priority=(i % 4) + 1, type=(i % 2) + 1)
            for i in range(25)
        ]
        stats = compute_stats(tickets)
        assert stats.total == 25
        assert sum(s.count for s in stats.by_status) == 25
        assert sum(p.count for p in stats.by_priority) == 25
        assert sum(t.count for t in stats.by_type) == 25

    def test_breakdowns_keep_first_seen_order(self):
        tickets = [make_ticket(1, priority=4), make_ticket(2, priority=2), make_ticket(3, priority=4)]
        stats = compute_stats(tickets)
        assert [(p.priority, p.count) for p in stats.by_priority] == [(4, 2), (2, 1)]


class TestDelayAverages:
    """Missing or zero metrics are excluded, not averaged as zero"""

    def test_zero_and_missing_do_not_dilute(self):
        tickets = [
            make_ticket(1, close_delay_stat=3600),
            make_ticket(2, close_delay_stat=0),
            make_ticket(3),
        ]
        stats = compute_stats(tickets)
        assert stats.avg_close_delay == 3600

    def test_average_of_contributors(self):
        tickets = [make_ticket(1, solve_delay_stat=100), make_ticket(2, solve_delay_stat=300)]
        assert compute_stats(tickets).avg_solve_delay == 200

    def test_no_contributor_gives_zero(self):
        stats = compute_stats([make_ticket(1), make_ticket(2)])
        assert stats.avg_take_into_account_delay == 0
        assert stats.avg_waiting_duration == 0

    def test_negative_metric_keeps_ticket_in_totals(self):
        tickets = [make_ticket(1, close_delay_stat=-30, status=6), make_ticket(2, close_delay_stat=90, status=6)]
        stats = compute_stats(tickets)
        assert stats.total == 2
        assert stats.closed == 2
        assert stats.avg_close_delay == 90


class TestRankings:
    """Requester and category rankings"""

    def test_top_requesters_truncated_to_ten(self):
        tickets = []
        next_id = 1
        for user_id in range(1, 13):
            for _ in range(user_id):
                tickets.append(make_ticket(next_id, users_id_recipient=user_id))
                next_id += 1
        stats = compute_stats(tickets)
        assert len(stats.top_requesters) == 10
        assert stats.top_requesters[0].user_id == 12
        assert stats.top_requesters[0].user_name == "User 12"
        counts = [r.count for r in stats.top_requesters]
        assert counts == sorted(counts, reverse=True)

    def test_ties_keep_first_seen_order(self):
        tickets = [
            make_ticket(1, itilcategories_id=9),
            make_ticket(2, itilcategories_id=3),
            make_ticket(3, itilcategories_id=3),
            make_ticket(4, itilcategories_id=9),
            make_ticket(5, itilcategories_id=1),
        ]
        stats = compute_stats(tickets)
        assert [c.category_id for c in stats.by_category] == [9, 3, 1]
        assert stats.by_category[0].category_name == "Category 9"

    def test_unset_ids_are_not_ranked(self):
        tickets = [make_ticket(1, itilcategories_id=0, users_id_recipient=0), make_ticket(2)]
        stats = compute_stats(tickets)
        assert stats.by_category == []
        assert stats.top_requesters == []


class TestTimelines:
    """Opened/closed per day"""

    def test_day_key(self):
        assert day_key("2024-01-10 09:00:00") == "2024-01-10"

    def test_timeline_sorted_ascending(self):
        tickets = [
            make_ticket(1, date="2024-01-12 10:00:00"),
            make_ticket(2, date="2024-01-10 08:00:00"),
            make_ticket(3, date="2024-01-12 11:00:00"),
        ]
        stats = compute_stats(tickets)
        assert [(p.date, p.count) for p in stats.timeline] == [("2024-01-10", 1), ("2024-01-12", 2)]

    def test_missing_opening_date_falls_back_to_today(self):
        stats = compute_stats([make_ticket(1, date=None)], today="2024-05-05")
        assert [(p.date, p.count) for p in stats.timeline] == [("2024-05-05", 1)]

    def test_comparison_is_union_of_days(self):
        tickets = [
            make_ticket(1, date="2024-01-01 09:00:00", closedate="2024-01-03 10:00:00"),
            make_ticket(2, date="2024-01-02 09:00:00"),
        ]
        stats = compute_stats(tickets)
        points = [(p.date, p.opened, p.closed) for p in stats.timeline_comparison]
        assert points == [
            ("2024-01-01", 1, 0),
            ("2024-01-02", 1, 0),
            ("2024-01-03", 0, 1),
        ]
        opened_days = {p.date for p in stats.timeline}
        assert opened_days <= {p.date for p in stats.timeline_comparison}

    def test_serialized_with_camel_case_keys(self):
        stats = compute_stats([make_ticket(1, users_id_recipient=2, itilcategories_id=3)])
        body = stats.model_dump(by_alias=True)
        assert "inProgress" in body
        assert "avgTakeIntoAccountDelay" in body
        assert body["topRequesters"][0] == {"userId": 2, "userName": "User 2", "count": 1}
        assert body["byCategory"][0]["categoryName"] == "Category 3"
        assert "timelineComparison" in body
