"""Task Board API Routes - "Esteira de demandas" """
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel

from ..deps import get_task_service
from ...domain.models import Task, TaskCreate, TaskUpdate, TaskDaySummary
from ...services.task_service import TaskService

router = APIRouter()

YMD_QUERY = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$")


class DeletedResponse(BaseModel):
    deleted: int


@router.get("", response_model=List[Task])
async def list_tasks(
    workspace: str = Query(..., min_length=1),
    ymd: Optional[str] = YMD_QUERY,
    responsavel: Optional[str] = None,
    operacao: Optional[str] = None,
    service: TaskService = Depends(get_task_service)
):
    """Tasks of a workspace, optionally for one day, ordered by start time"""
    return service.list_tasks(workspace, ymd, responsavel, operacao)


@router.post("", response_model=List[Task], status_code=status.HTTP_201_CREATED)
async def create_task(request: TaskCreate, service: TaskService = Depends(get_task_service)):
    """
    Create a task

    Daily tasks are expanded over 30 days and weekly tasks over 8 weeks; the
    occurrences share a seriesId. Returns every created occurrence.
    """
    return service.create_task(request)


@router.delete("", response_model=DeletedResponse)
async def clear_workspace(
    workspace: str = Query(..., min_length=1),
    service: TaskService = Depends(get_task_service)
):
    """Delete every task of a workspace"""
    return DeletedResponse(deleted=service.clear_workspace(workspace))


@router.get("/summary", response_model=TaskDaySummary)
async def task_summary(
    workspace: str = Query(..., min_length=1),
    ymd: str = Query(..., pattern=r"^\d{4}-\d{2}-\d{2}$"),
    responsavel: Optional[str] = None,
    operacao: Optional[str] = None,
    service: TaskService = Depends(get_task_service)
):
    """Done / late / on-time counts and volume per owner for one day"""
    return service.day_summary(workspace, ymd, responsavel, operacao)


@router.delete("/series/{series_id}", response_model=DeletedResponse)
async def delete_series(
    series_id: str,
    workspace: str = Query(..., min_length=1),
    service: TaskService = Depends(get_task_service)
):
    """Delete every occurrence of a recurring task"""
    return DeletedResponse(deleted=service.delete_series(workspace, series_id))


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    return service.get_task(task_id)


@router.patch("/{task_id}", response_model=Task)
async def update_task(task_id: str, request: TaskUpdate, service: TaskService = Depends(get_task_service)):
    return service.update_task(task_id, request)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    service.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
