"""Task Service - Task board ("esteira de demandas") scheduling"""
from collections import Counter
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..domain.models import (
    Task, TaskCreate, TaskUpdate, TaskDaySummary, ResponsavelVolume
)
from ..domain.enums import RecurrenceKind
from ..domain.errors import NotFoundError, TaskNotFoundError, ValidationError
from ..repositories.task_repo import TaskRepository
from ..utils.idgen import generate_series_id, generate_task_id
from ..utils.time import add_days, hhmm_to_minutes, is_hhmm, is_ymd, today_ymd, utc_now, weekday_of
from ..utils.logger import get_logger

logger = get_logger(__name__)

DAILY_HORIZON_DAYS = 30
WEEKLY_OCCURRENCES = 8


def occurrence_days(kind: RecurrenceKind, start_ymd: str, week_day: Optional[int] = None) -> List[str]:
    """
    Days on which a task occurs.

    Args:
        kind: once, daily (30 consecutive days) or weekly (8 weeks)
        start_ymd: First eligible day
        week_day: For weekly tasks, align the first occurrence to this weekday
            (0=Monday ... 6=Sunday), on or after start_ymd

    Returns:
        YYYY-MM-DD strings in ascending order
    """
    if kind == RecurrenceKind.DAILY:
        return [add_days(start_ymd, i) for i in range(DAILY_HORIZON_DAYS)]

    if kind == RecurrenceKind.WEEKLY:
        first = start_ymd
        if week_day is not None:
            first = add_days(start_ymd, (week_day - weekday_of(start_ymd)) % 7)
        return [add_days(first, 7 * week) for week in range(WEEKLY_OCCURRENCES)]

    return [start_ymd]


def board_order(task: Task):
    """Sort key: start time, then end time, then title"""
    return (hhmm_to_minutes(task.inicio), hhmm_to_minutes(task.fim), task.titulo.lower())


def is_late(task: Task, now: datetime) -> bool:
    """Open task whose day is over, or whose end time has passed today"""
    if task.concluida:
        return False
    today = today_ymd(now)
    if task.ymd < today:
        return True
    if task.ymd > today:
        return False
    return hhmm_to_minutes(task.fim) <= now.hour * 60 + now.minute


class TaskService:
    """Service for task board operations"""

    def __init__(self, repo: TaskRepository):
        self.repo = repo

    def create_task(self, data: TaskCreate) -> List[Task]:
        """Create a task, expanding its recurrence into one entry per day"""
        if data.rec_kind == RecurrenceKind.ONCE:
            series_id = None
        else:
            series_id = generate_series_id()

        now = utc_now()
        tasks = [
            Task(
                id=generate_task_id(),
                titulo=data.titulo,
                inicio=data.inicio,
                fim=data.fim,
                concluida=data.concluida,
                responsavel=data.responsavel,
                operacao=data.operacao,
                ymd=ymd,
                series_id=series_id,
                rec_kind=data.rec_kind,
                workspace_id=data.workspace_id,
                created_at=now,
            )
            for ymd in occurrence_days(data.rec_kind, data.ymd, data.week_day)
        ]
        self.repo.create_many(tasks)

        logger.info(
            f"Created {len(tasks)} task occurrence(s) for '{data.titulo}'",
            extra={"workspace": data.workspace_id, "series_id": series_id, "count": len(tasks)}
        )
        return tasks

    def list_tasks(
        self,
        workspace_id: str,
        ymd: Optional[str] = None,
        responsavel: Optional[str] = None,
        operacao: Optional[str] = None
    ) -> List[Task]:
        """Tasks of a workspace (optionally one day), in board order"""
        if ymd is not None and not is_ymd(ymd):
            raise ValidationError("ymd must be YYYY-MM-DD", details={"ymd": ymd})

        query: Dict[str, Any] = {"workspace_id": workspace_id}
        if ymd:
            query["ymd"] = ymd
        if responsavel:
            query["responsavel"] = responsavel
        if operacao:
            query["operacao"] = operacao

        return sorted(self.repo.find(query), key=board_order)

    def get_task(self, task_id: str) -> Task:
        return self.repo.get_or_raise(task_id)

    def update_task(self, task_id: str, patch: TaskUpdate) -> Task:
        """Apply the fields present in the patch; nulls are ignored"""
        fields = patch.model_dump(mode="json", exclude_none=True)
        for key in ("inicio", "fim"):
            if key in fields and not is_hhmm(fields[key]):
                raise ValidationError(f"{key} must be HH:MM", details={key: fields[key]})
        if "ymd" in fields and not is_ymd(fields["ymd"]):
            raise ValidationError("ymd must be YYYY-MM-DD", details={"ymd": fields["ymd"]})
        if not fields:
            return self.repo.get_or_raise(task_id)

        task = self.repo.update(task_id, fields)
        logger.info(f"Updated task {task_id}", extra={"task_id": task_id})
        return task

    def delete_task(self, task_id: str) -> None:
        if not self.repo.delete(task_id):
            raise TaskNotFoundError(f"Task {task_id} not found", details={"task_id": task_id})

    def delete_series(self, workspace_id: str, series_id: str) -> int:
        """Delete every occurrence of a recurring task"""
        deleted = self.repo.delete_many({"workspace_id": workspace_id, "series_id": series_id})
        if deleted == 0:
            raise NotFoundError(
                f"Series {series_id} not found",
                details={"series_id": series_id, "workspace": workspace_id}
            )
        logger.info(
            f"Deleted {deleted} occurrences of series {series_id}",
            extra={"series_id": series_id, "count": deleted}
        )
        return deleted

    def clear_workspace(self, workspace_id: str) -> int:
        """Delete every task of a workspace"""
        deleted = self.repo.delete_many({"workspace_id": workspace_id})
        logger.warning(
            f"Cleared {deleted} tasks from workspace {workspace_id}",
            extra={"workspace": workspace_id, "count": deleted}
        )
        return deleted

    def day_summary(
        self,
        workspace_id: str,
        ymd: str,
        responsavel: Optional[str] = None,
        operacao: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> TaskDaySummary:
        """KPI cards and per-owner volume for one board day"""
        now = now or utc_now()
        tasks = self.list_tasks(workspace_id, ymd, responsavel, operacao)

        concluida = sum(1 for t in tasks if t.concluida)
        atrasada = sum(1 for t in tasks if is_late(t, now))
        volume = Counter(t.responsavel for t in tasks)

        return TaskDaySummary(
            total=len(tasks),
            concluida=concluida,
            atrasada=atrasada,
            no_prazo=len(tasks) - concluida - atrasada,
            por_responsavel=[
                ResponsavelVolume(responsavel=name, count=count)
                for name, count in sorted(volume.items())
            ],
        )
