"""Automation API Routes - Registry of scheduled integrations"""
from typing import List
from fastapi import APIRouter, Depends, Response, status

from ..deps import get_automation_service
from ...domain.models import Automation, AutomationCreate, AutomationUpdate
from ...services.automation_service import AutomationService

router = APIRouter()


@router.get("", response_model=List[Automation])
async def list_automacoes(service: AutomationService = Depends(get_automation_service)):
    return service.list_automations()


@router.post("", response_model=Automation, status_code=status.HTTP_201_CREATED)
async def create_automacao(
    request: AutomationCreate,
    service: AutomationService = Depends(get_automation_service)
):
    return service.create_automation(request)


@router.get("/{automation_id}", response_model=Automation)
async def get_automacao(automation_id: str, service: AutomationService = Depends(get_automation_service)):
    return service.get_automation(automation_id)


@router.patch("/{automation_id}", response_model=Automation)
async def update_automacao(
    automation_id: str,
    request: AutomationUpdate,
    service: AutomationService = Depends(get_automation_service)
):
    return service.update_automation(automation_id, request)


@router.delete("/{automation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_automacao(automation_id: str, service: AutomationService = Depends(get_automation_service)):
    service.delete_automation(automation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
