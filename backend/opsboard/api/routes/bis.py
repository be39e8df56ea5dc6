"""BI API Routes - BI intake tracker and its data-source bases"""
from typing import List
from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from ..deps import get_bi_service
from ...domain.models import Bi, BiCreate, BiUpdate, BaseStatusUpdate
from ...services.bi_service import BiService

router = APIRouter()
bases_router = APIRouter()


# ============================================================================
# Request Models
# ============================================================================

class InativarRequest(BaseModel):
    """Request to (de)activate a BI"""
    inativo: bool = True


# ============================================================================
# BIs
# ============================================================================

@router.get("", response_model=List[Bi])
async def list_bis(service: BiService = Depends(get_bi_service)):
    """All BIs with their bases, newest first"""
    return service.list_bis()


@router.post("", response_model=Bi, status_code=status.HTTP_201_CREATED)
async def create_bi(request: BiCreate, service: BiService = Depends(get_bi_service)):
    """Create a BI together with its bases (all start as aguardando)"""
    return service.create_bi(request)


@router.get("/{bi_id}", response_model=Bi)
async def get_bi(bi_id: str, service: BiService = Depends(get_bi_service)):
    return service.get_bi(bi_id)


@router.patch("/{bi_id}", response_model=Bi)
async def update_bi(bi_id: str, request: BiUpdate, service: BiService = Depends(get_bi_service)):
    """Update the BI fields present in the body"""
    return service.update_bi(bi_id, request)


@router.patch("/{bi_id}/inativar", response_model=Bi)
async def inativar_bi(
    bi_id: str,
    request: InativarRequest,
    service: BiService = Depends(get_bi_service)
):
    return service.set_inativo(bi_id, request.inativo)


@router.delete("/{bi_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bi(bi_id: str, service: BiService = Depends(get_bi_service)):
    service.delete_bi(bi_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Bases
# ============================================================================

@bases_router.patch("/{base_id}/status", response_model=Bi)
async def update_base_status(
    base_id: str,
    request: BaseStatusUpdate,
    service: BiService = Depends(get_bi_service)
):
    """
    Update a base status

    Returns the owning BI, which is concluded once every base is concluido.
    """
    return service.update_base_status(
        base_id, request.status, observacao=request.observacao, bi_id=request.bi_id
    )
