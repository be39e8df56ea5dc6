"""Domain Models - Pydantic schemas for all entities"""
from datetime import datetime
from typing import List, Optional, Union
from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from .enums import BiStatus, BaseStatus, RecurrenceKind, Recorrencia
from ..utils.time import is_hhmm, is_ymd


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys on the wire"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# GLPI Tickets (external, read-only)
# ============================================================================

class GlpiTicket(BaseModel):
    """
    Ticket record as returned by the GLPI REST API.

    Only the classification fields are required; GLPI omits or nulls the rest
    depending on version and entity configuration. Unknown fields are dropped.
    """
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str = ""
    content: Optional[str] = None
    status: int = Field(..., description="1 New, 2 Processing, 3/4 Pending, 5 Solved, 6 Closed")
    priority: int
    urgency: Optional[int] = None
    impact: Optional[int] = None
    type: int
    date: Optional[str] = Field(None, description="Opening timestamp YYYY-MM-DD HH:MM:SS")
    date_mod: Optional[str] = None
    solvedate: Optional[str] = None
    closedate: Optional[str] = None
    entities_id: Optional[int] = None
    itilcategories_id: Optional[int] = None
    users_id_recipient: Optional[int] = None
    users_id_assign: Optional[int] = None
    groups_id_assign: Optional[int] = None
    locations_id: Optional[int] = None
    requesttypes_id: Optional[int] = None

    # Time metrics (seconds)
    close_delay_stat: Optional[int] = None
    solve_delay_stat: Optional[int] = None
    takeintoaccount_delay_stat: Optional[int] = None
    waiting_duration: Optional[int] = None
    actiontime: Optional[int] = None

    @field_validator(
        "close_delay_stat", "solve_delay_stat", "takeintoaccount_delay_stat",
        "waiting_duration", "actiontime"
    )
    @classmethod
    def drop_negative_metric(cls, v: Optional[int]) -> Optional[int]:
        """A negative duration is unusable; treat it as not reported"""
        return v if v is None or v >= 0 else None


class TicketFilters(BaseModel):
    """Structured ticket filter. Empty or missing arrays impose no constraint."""
    model_config = ConfigDict(populate_by_name=True)

    search: Optional[str] = None
    status: Optional[List[int]] = None
    priority: Optional[List[int]] = None
    type: Optional[List[int]] = None
    category: Optional[List[int]] = None
    assigned_to: Optional[List[int]] = Field(None, alias="assignedTo")
    assigned_group: Optional[List[int]] = Field(None, alias="assignedGroup")
    users_id_recipient: Optional[List[int]] = None
    name: Optional[str] = None
    date_from: Optional[str] = Field(None, alias="dateFrom")
    date_to: Optional[str] = Field(None, alias="dateTo")
    close_date_from: Optional[str] = Field(None, alias="closeDateFrom")
    close_date_to: Optional[str] = Field(None, alias="closeDateTo")


class TicketPage(BaseModel):
    """Paginated ticket list envelope"""
    page: int
    limit: int
    total: int
    items: List[GlpiTicket]


class LookupItem(BaseModel):
    """Simplified GLPI reference entity (category, user, group)"""
    id: int
    name: str


# ============================================================================
# Ticket Statistics (derived, never persisted)
# ============================================================================

class StatusCount(CamelModel):
    status: int
    count: int


class PriorityCount(CamelModel):
    priority: int
    count: int


class TypeCount(CamelModel):
    type: int
    count: int


class CategoryCount(CamelModel):
    category_id: int
    category_name: str
    count: int


class RequesterCount(CamelModel):
    user_id: int
    user_name: str
    count: int


class TimelinePoint(CamelModel):
    date: str
    count: int


class TimelineComparisonPoint(CamelModel):
    date: str
    opened: int
    closed: int


class TicketStats(CamelModel):
    """Aggregated KPIs and chart series for a filtered ticket collection"""
    total: int
    new: int
    in_progress: int
    pending: int
    solved: int
    closed: int

    # Averages in seconds, 0 when no ticket contributed
    avg_close_delay: float = 0
    avg_solve_delay: float = 0
    avg_take_into_account_delay: float = 0
    avg_waiting_duration: float = 0

    by_status: List[StatusCount] = Field(default_factory=list)
    by_priority: List[PriorityCount] = Field(default_factory=list)
    by_type: List[TypeCount] = Field(default_factory=list)
    by_category: List[CategoryCount] = Field(default_factory=list)
    top_requesters: List[RequesterCount] = Field(default_factory=list)
    timeline: List[TimelinePoint] = Field(default_factory=list)
    timeline_comparison: List[TimelineComparisonPoint] = Field(default_factory=list)


# ============================================================================
# BI Intake
# ============================================================================

class BiBase(CamelModel):
    """Data-source base feeding a BI"""
    id: str
    bi_id: str
    nome_ferramenta: str
    pasta_origem: str
    tem_api: bool = False
    status: BaseStatus = BaseStatus.AGUARDANDO
    observacao: Optional[str] = None


class Bi(CamelModel):
    """BI intake record with its owned bases"""
    id: str
    nome: str
    data_inicio: str
    data_final: str
    responsavel: str
    operacao: str
    status: BiStatus = BiStatus.EM_ABERTO
    inativo: bool = False
    created_at: datetime
    bases: List[BiBase] = Field(default_factory=list)


# ============================================================================
# Task Board
# ============================================================================

class Task(CamelModel):
    """Scheduled demand on the task board"""
    id: str
    titulo: str
    inicio: str = Field(..., description="HH:MM")
    fim: str = Field(..., description="HH:MM")
    concluida: bool = False
    responsavel: str
    operacao: str
    ymd: str = Field(..., description="YYYY-MM-DD")
    series_id: Optional[str] = None
    rec_kind: RecurrenceKind = RecurrenceKind.ONCE
    workspace_id: str
    created_at: datetime


class ResponsavelVolume(CamelModel):
    responsavel: str
    count: int


class TaskDaySummary(CamelModel):
    """KPIs for one workspace day"""
    total: int
    concluida: int
    atrasada: int
    no_prazo: int
    por_responsavel: List[ResponsavelVolume] = Field(default_factory=list)


# ============================================================================
# Automations
# ============================================================================

class Automation(CamelModel):
    """Registered scheduled integration"""
    id: str
    nome_integracao: str
    recorrencia: Recorrencia
    data_hora: str
    repetir_uma_hora: bool = False
    nome_executavel: str
    pasta_fim_atualizacao: str
    created_at: datetime


# ============================================================================
# Canvas
# ============================================================================

class CanvasNode(CamelModel):
    """Diagram node"""
    id: str
    type: str = "default"
    position_x: float
    position_y: float
    data: Union[dict, str, None] = None
    width: Optional[float] = None
    height: Optional[float] = None


class CanvasEdge(CamelModel):
    """Diagram edge"""
    id: str
    source: str
    target: str
    type: str = "smoothstep"
    animated: bool = False


class CanvasData(CamelModel):
    """Whole canvas, always saved as a unit"""
    nodes: List[CanvasNode] = Field(default_factory=list)
    edges: List[CanvasEdge] = Field(default_factory=list)


# ============================================================================
# Inputs (create / patch payloads)
# ============================================================================

class BaseCreate(CamelModel):
    nome_ferramenta: str = Field(..., min_length=1)
    pasta_origem: str = Field(..., min_length=1)
    tem_api: bool = False


class BiCreate(CamelModel):
    nome: str = Field(..., min_length=1)
    data_inicio: str
    data_final: str
    responsavel: str = Field(..., min_length=1)
    operacao: str = Field(..., min_length=1)
    bases: List[BaseCreate] = Field(default_factory=list)


class BiUpdate(CamelModel):
    """Merge patch for a BI; only fields sent are applied"""
    nome: Optional[str] = None
    data_inicio: Optional[str] = None
    data_final: Optional[str] = None
    responsavel: Optional[str] = None
    operacao: Optional[str] = None
    status: Optional[BiStatus] = None
    inativo: Optional[bool] = None


class BaseStatusUpdate(CamelModel):
    status: BaseStatus
    observacao: Optional[str] = None
    bi_id: Optional[str] = None


def _check_clock(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_hhmm(value):
        raise ValueError("must be an HH:MM time between 00:00 and 23:59")
    return value


def _check_day(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_ymd(value):
        raise ValueError("must be a calendar day as YYYY-MM-DD")
    return value


class TaskCreate(CamelModel):
    titulo: str = Field(..., min_length=1)
    inicio: str
    fim: str
    responsavel: str = Field(..., min_length=1)
    operacao: str = ""
    ymd: str
    concluida: bool = False
    rec_kind: RecurrenceKind = RecurrenceKind.ONCE
    week_day: Optional[int] = Field(None, ge=0, le=6, description="0=Monday ... 6=Sunday")
    workspace_id: str = Field(..., min_length=1)

    @field_validator("inicio", "fim")
    @classmethod
    def validate_clock(cls, v: Optional[str]) -> Optional[str]:
        """HH:MM between 00:00 and 23:59"""
        return _check_clock(v)

    @field_validator("ymd")
    @classmethod
    def validate_day(cls, v: Optional[str]) -> Optional[str]:
        """A real calendar day, so 2024-02-30 is rejected"""
        return _check_day(v)


class TaskUpdate(CamelModel):
    titulo: Optional[str] = None
    inicio: Optional[str] = None
    fim: Optional[str] = None
    concluida: Optional[bool] = None
    responsavel: Optional[str] = None
    operacao: Optional[str] = None
    ymd: Optional[str] = None

    @field_validator("inicio", "fim")
    @classmethod
    def validate_clock(cls, v: Optional[str]) -> Optional[str]:
        """HH:MM between 00:00 and 23:59"""
        return _check_clock(v)

    @field_validator("ymd")
    @classmethod
    def validate_day(cls, v: Optional[str]) -> Optional[str]:
        """A real calendar day, so 2024-02-30 is rejected"""
        return _check_day(v)


class AutomationCreate(CamelModel):
    nome_integracao: str = Field(..., min_length=1)
    recorrencia: Recorrencia
    data_hora: str
    repetir_uma_hora: bool = False
    nome_executavel: str = Field(..., min_length=1)
    pasta_fim_atualizacao: str = Field(..., min_length=1)


class AutomationUpdate(CamelModel):
    nome_integracao: Optional[str] = None
    recorrencia: Optional[Recorrencia] = None
    data_hora: Optional[str] = None
    repetir_uma_hora: Optional[bool] = None
    nome_executavel: Optional[str] = None
    pasta_fim_atualizacao: Optional[str] = None
