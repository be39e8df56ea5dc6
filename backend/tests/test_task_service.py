"""
Tests for the Task Service

Recurrence expansion, board ordering, series deletion and day summaries.
"""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from opsboard.domain.enums import RecurrenceKind
from opsboard.domain.errors import NotFoundError, TaskNotFoundError, ValidationError
from opsboard.domain.models import TaskCreate, TaskUpdate
from opsboard.services.task_service import TaskService, is_late, occurrence_days


@pytest.fixture
def service(repositories):
    return TaskService(repositories.tasks)


def task_input(**fields):
    data = {
        "titulo": "Conferir carga",
        "inicio": "08:00",
        "fim": "09:00",
        "responsavel": "Ana",
        "operacao": "Service Desk",
        "ymd": "2024-01-01",
        "workspace_id": "ws1",
    }
    data.update(fields)
    return TaskCreate(**data)


class TestOccurrences:

    def test_once(self):
        assert occurrence_days(RecurrenceKind.ONCE, "2024-01-01") == ["2024-01-01"]

    def test_daily_covers_thirty_days(self):
        days = occurrence_days(RecurrenceKind.DAILY, "2024-01-30")
        assert len(days) == 30
        assert days[0] == "2024-01-30"
        assert days[2] == "2024-02-01"
        assert days[-1] == "2024-02-28"

    def test_weekly_eight_weeks(self):
        days = occurrence_days(RecurrenceKind.WEEKLY, "2024-01-01")
        assert len(days) == 8
        assert days[1] == "2024-01-08"

    def test_weekly_aligned_to_weekday(self):
        # 2024-01-03 is a Wednesday; 4 = Friday
        days = occurrence_days(RecurrenceKind.WEEKLY, "2024-01-03", week_day=4)
        assert days[0] == "2024-01-05"
        assert days[1] == "2024-01-12"

    def test_weekly_same_weekday_starts_on_start_day(self):
        days = occurrence_days(RecurrenceKind.WEEKLY, "2024-01-03", week_day=2)
        assert days[0] == "2024-01-03"


class TestTaskCrud:

    def test_create_once(self, service):
        tasks = service.create_task(task_input())
        assert len(tasks) == 1
        assert tasks[0].id.startswith("TSK-")
        assert tasks[0].series_id is None
        assert tasks[0].concluida is False

    def test_recurring_tasks_share_series(self, service):
        tasks = service.create_task(task_input(rec_kind=RecurrenceKind.WEEKLY))
        assert len(tasks) == 8
        assert len({t.series_id for t in tasks}) == 1
        assert tasks[0].series_id.startswith("SER-")

    def test_list_in_board_order(self, service):
        service.create_task(task_input(titulo="late", inicio="14:00", fim="15:00"))
        service.create_task(task_input(titulo="b", inicio="08:00", fim="10:00"))
        service.create_task(task_input(titulo="a", inicio="08:00", fim="10:00"))
        service.create_task(task_input(titulo="short", inicio="08:00", fim="08:30"))
        titles = [t.titulo for t in service.list_tasks("ws1", "2024-01-01")]
        assert titles == ["short", "a", "b", "late"]

    def test_list_is_scoped(self, service):
        service.create_task(task_input())
        service.create_task(task_input(workspace_id="ws2"))
        service.create_task(task_input(ymd="2024-01-02"))
        service.create_task(task_input(responsavel="Bruno"))
        assert len(service.list_tasks("ws1", "2024-01-01")) == 2
        assert len(service.list_tasks("ws1", "2024-01-01", responsavel="Bruno")) == 1
        assert len(service.list_tasks("ws1")) == 3

    def test_list_rejects_bad_day(self, service):
        with pytest.raises(ValidationError):
            service.list_tasks("ws1", "01/01/2024")

    def test_list_rejects_impossible_calendar_day(self, service):
        with pytest.raises(ValidationError):
            service.list_tasks("ws1", "2024-02-30")

    def test_update_drops_nulls(self, service):
        task = service.create_task(task_input())[0]
        updated = service.update_task(task.id, TaskUpdate(concluida=True, titulo=None))
        assert updated.concluida is True
        assert updated.titulo == "Conferir carga"

    def test_update_missing(self, service):
        with pytest.raises(TaskNotFoundError):
            service.update_task("TSK-missing", TaskUpdate(concluida=True))

    def test_delete(self, service):
        task = service.create_task(task_input())[0]
        service.delete_task(task.id)
        with pytest.raises(TaskNotFoundError):
            service.get_task(task.id)

    def test_delete_series(self, service):
        tasks = service.create_task(task_input(rec_kind=RecurrenceKind.DAILY))
        service.create_task(task_input(titulo="keep"))
        assert service.delete_series("ws1", tasks[0].series_id) == 30
        assert [t.titulo for t in service.list_tasks("ws1")] == ["keep"]
        with pytest.raises(NotFoundError):
            service.delete_series("ws1", tasks[0].series_id)

    def test_clear_workspace(self, service):
        service.create_task(task_input(rec_kind=RecurrenceKind.WEEKLY))
        service.create_task(task_input(workspace_id="ws2"))
        assert service.clear_workspace("ws1") == 8
        assert service.list_tasks("ws1") == []
        assert len(service.list_tasks("ws2")) == 1


class TestDaySummary:

    NOW = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)

    def test_lateness(self, service):
        task = service.create_task(task_input(fim="10:00"))[0]
        assert is_late(task, self.NOW)
        later = service.create_task(task_input(fim="10:01"))[0]
        assert not is_late(later, self.NOW)
        yesterday = service.create_task(task_input(ymd="2023-12-31", fim="23:00"))[0]
        assert is_late(yesterday, self.NOW)
        tomorrow = service.create_task(task_input(ymd="2024-01-02", fim="00:30"))[0]
        assert not is_late(tomorrow, self.NOW)

    def test_summary_counts(self, service):
        done = service.create_task(task_input(responsavel="Bruno", fim="09:00"))[0]
        service.update_task(done.id, TaskUpdate(concluida=True))
        service.create_task(task_input(responsavel="Ana", fim="09:30"))
        service.create_task(task_input(responsavel="Ana", fim="18:00"))

        summary = service.day_summary("ws1", "2024-01-01", now=self.NOW)
        assert summary.total == 3
        assert summary.concluida == 1
        assert summary.atrasada == 1
        assert summary.no_prazo == 1
        assert [(v.responsavel, v.count) for v in summary.por_responsavel] == [("Ana", 2), ("Bruno", 1)]
        assert summary.concluida + summary.atrasada + summary.no_prazo == summary.total


class TestTaskInputValidation:

    @pytest.mark.parametrize("field,value", [
        ("ymd", "2024-02-30"),
        ("ymd", "2023-13-01"),
        ("inicio", "25:00"),
        ("fim", "23:60"),
    ])
    def test_create_rejects_out_of_range_values(self, field, value):
        with pytest.raises(PydanticValidationError):
            task_input(**{field: value})

    def test_create_accepts_leap_day_and_day_edges(self):
        data = task_input(ymd="2024-02-29", inicio="00:00", fim="23:59")
        assert data.ymd == "2024-02-29"

    def test_patch_rejects_impossible_day(self):
        with pytest.raises(PydanticValidationError):
            TaskUpdate(ymd="2024-04-31")
