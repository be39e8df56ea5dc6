"""Domain Enumerations - All status and type definitions"""
from enum import Enum, IntEnum


class GlpiTicketStatus(IntEnum):
    """Raw GLPI ticket status codes"""
    NEW = 1
    PROCESSING = 2
    PENDING = 3
    PENDING_LEGACY = 4  # Legacy installs report a second waiting code here
    SOLVED = 5
    CLOSED = 6


class GlpiTicketType(IntEnum):
    """GLPI ticket type"""
    INCIDENT = 1
    REQUEST = 2


class BiStatus(str, Enum):
    """BI intake status"""
    EM_ABERTO = "em_aberto"
    CONCLUIDO = "concluido"


class BaseStatus(str, Enum):
    """Data-source base status within a BI"""
    AGUARDANDO = "aguardando"
    EM_ANDAMENTO = "em_andamento"
    PENDENTE = "pendente"
    CONCLUIDO = "concluido"


class RecurrenceKind(str, Enum):
    """Task board recurrence"""
    ONCE = "once"
    DAILY = "daily"
    WEEKLY = "weekly"


class Recorrencia(str, Enum):
    """Automation schedule recurrence"""
    UMA_VEZ = "Uma vez"
    DIARIO = "Diário"
    SEMANAL = "Semanal"
    MENSALMENTE = "Mensalmente"


class StorageBackend(str, Enum):
    """Persistence backend for CRUD stores"""
    MEMORY = "memory"
    MONGO = "mongo"
