"""
Modelos de tickets de soporte.

Define el ticket persistido y los requests de creación, actualización
y consulta usados por la API y por la auto-creación desde conversaciones.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import Field, field_validator

from models.states.conversation import CamelModel
from services.validation.email_validator import is_valid_email


def _utcnow() -> str:
    """Retorna timestamp ISO UTC actual."""
    return datetime.now(timezone.utc).isoformat()


class TicketStatus(str, Enum):
    """Estado de un ticket."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class TicketPriority(str, Enum):
    """Prioridad de un ticket."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TicketCategory(str, Enum):
    """Categorías de ticket; el orden de las primeras cinco es el de detección."""

    TECHNICAL = "technical"
    BILLING = "billing"
    ACCOUNT = "account"
    FEATURE_REQUEST = "feature_request"
    BUG_REPORT = "bug_report"
    GENERAL = "general"
    OTHER = "other"


# Orden usado al ordenar por prioridad
PRIORITY_RANK = {
    TicketPriority.LOW: 0,
    TicketPriority.MEDIUM: 1,
    TicketPriority.HIGH: 2,
    TicketPriority.URGENT: 3,
}


class Ticket(CamelModel):
    """Ticket de soporte persistido."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_name: str = Field(..., min_length=1)
    user_email: Optional[str] = None
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: TicketCategory = TicketCategory.GENERAL
    status: TicketStatus = TicketStatus.OPEN
    priority: TicketPriority = TicketPriority.MEDIUM
    created_at: str = Field(default_factory=_utcnow)
    updated_at: str = Field(default_factory=_utcnow)
    resolved_at: Optional[str] = None
    assigned_to: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    conversation_id: Optional[str] = None

    def to_dict(self) -> dict:
        """Serializa el ticket con claves camelCase."""
        return self.model_dump(mode="json", by_alias=True)


class TicketDraft(CamelModel):
    """Datos de un ticket enviados por el cliente."""

    user_name: str = Field(..., min_length=1)
    user_email: Optional[str] = None
    title: str = Field(..., min_length=5)
    description: str = Field(..., min_length=10)
    category: TicketCategory
    priority: TicketPriority = TicketPriority.MEDIUM
    tags: List[str] = Field(default_factory=list)

    @field_validator("user_email")
    @classmethod
    def validar_email(cls, valor: Optional[str]) -> Optional[str]:
        """Aplica la misma validación estructural que el asistente."""
        if valor is None:
            return None
        if not is_valid_email(valor):
            raise ValueError("Invalid email format")
        return valor.strip().lower()


class CreateTicketRequest(CamelModel):
    """Request de creación manual de ticket."""

    ticket: TicketDraft
    conversation_id: Optional[str] = None


class UpdateTicketRequest(CamelModel):
    """Request de actualización parcial de ticket."""

    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    assigned_to: Optional[str] = None
    tags: Optional[List[str]] = None


class TicketQuery(CamelModel):
    """Filtros, orden y paginación para el listado de tickets."""

    status: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    assigned_to: Optional[str] = None
    search_query: Optional[str] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    sort_by: Literal["createdAt", "updatedAt", "priority", "status"] = "createdAt"
    sort_order: Literal["asc", "desc"] = "desc"


class Pagination(CamelModel):
    """Metadatos de paginación."""

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class TicketPage(CamelModel):
    """Página de tickets."""

    data: List[Ticket]
    pagination: Pagination


class StatsQuery(CamelModel):
    """Filtros para estadísticas de tickets."""

    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    status: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None


class TicketStats(CamelModel):
    """Estadísticas agregadas de tickets."""

    total_tickets: int
    open_tickets: int
    in_progress_tickets: int
    resolved_tickets: int
    closed_tickets: int
    by_status: Dict[str, int]
    by_category: Dict[str, int]
    by_priority: Dict[str, int]
    # Horas promedio entre creación y resolución (tickets resueltos)
    average_resolution_time: float = 0.0
