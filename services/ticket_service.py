"""
Ticket Service.

Creación, consulta, actualización, listado y estadísticas de tickets de
soporte, incluida la creación automática al completar una conversación.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from config.configuration import configuration
from contracts.events import ITicketEventPublisher
from contracts.repositories import ITicketRepository
from core.exceptions import TicketNotFoundError
from models.states import ConversationState
from models.tickets import (
    PRIORITY_RANK,
    CreateTicketRequest,
    Pagination,
    StatsQuery,
    Ticket,
    TicketCategory,
    TicketPage,
    TicketPriority,
    TicketQuery,
    TicketStats,
    TicketStatus,
    UpdateTicketRequest,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Support Request"

# Orden del ciclo de vida, usado al ordenar por estado
STATUS_RANK = {
    TicketStatus.OPEN: 0,
    TicketStatus.IN_PROGRESS: 1,
    TicketStatus.RESOLVED: 2,
    TicketStatus.CLOSED: 3,
}

_SORT_KEYS: Dict[str, Callable[[Ticket], object]] = {
    "createdAt": lambda t: t.created_at,
    "updatedAt": lambda t: t.updated_at,
    "priority": lambda t: PRIORITY_RANK[t.priority],
    "status": lambda t: STATUS_RANK[t.status],
}


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def _parse_timestamp(valor: str) -> datetime:
    fecha = datetime.fromisoformat(valor)
    if fecha.tzinfo is None:
        fecha = fecha.replace(tzinfo=timezone.utc)
    return fecha


def _split_filter(valor: Optional[str]) -> Optional[set]:
    """'open,resolved' -> {'open', 'resolved'}; None si no hay filtro."""
    if not valor:
        return None
    return {parte.strip() for parte in valor.split(",") if parte.strip()}


def _coerce_category(valor: Optional[str]) -> TicketCategory:
    try:
        return TicketCategory(valor)
    except ValueError:
        return TicketCategory.GENERAL


class TicketService:
    """
    Servicio de tickets sobre un ITicketRepository.

    Los eventos se publican si hay un publicador inyectado.
    """

    def __init__(
        self,
        repository: ITicketRepository,
        events: Optional[ITicketEventPublisher] = None,
        default_priority: Optional[str] = None,
    ):
        self.repository = repository
        self.events = events
        self.default_priority = TicketPriority(
            default_priority or configuration.default_ticket_priority
        )

    async def _store_new(self, ticket: Ticket) -> Ticket:
        guardado = await self.repository.create(ticket)
        if self.events:
            await self.events.ticket_created(guardado)
        return guardado

    async def create_ticket(self, request: CreateTicketRequest) -> Ticket:
        """Crea un ticket desde un request de la API."""
        borrador = request.ticket
        ticket = Ticket(
            user_name=borrador.user_name,
            user_email=borrador.user_email,
            title=borrador.title,
            description=borrador.description,
            category=borrador.category,
            priority=borrador.priority,
            tags=list(borrador.tags),
            conversation_id=request.conversation_id,
        )
        guardado = await self._store_new(ticket)
        logger.info(f"🎫 Ticket creado manualmente: {guardado.id}")
        return guardado

    async def create_from_conversation(self, conversation: ConversationState) -> Ticket:
        """
        Crea el ticket de una conversación completa.

        Raises:
            ValidationError: Si faltan el nombre o la descripción
        """
        datos = conversation.collected_data
        ticket = Ticket(
            user_name=datos.user_name or "",
            user_email=datos.user_email,
            title=datos.issue_title or DEFAULT_TITLE,
            description=datos.issue_description or "",
            category=_coerce_category(datos.confirmed_category),
            priority=self.default_priority,
            status=TicketStatus.OPEN,
            conversation_id=conversation.id,
        )
        guardado = await self._store_new(ticket)
        logger.info(
            f"🎫 Auto-created ticket: {guardado.id} for conversation: {conversation.id}"
        )
        return guardado

    async def get_ticket(self, ticket_id: str) -> Ticket:
        """
        Raises:
            TicketNotFoundError: Si el ticket no existe
        """
        ticket = await self.repository.get(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        return ticket

    async def update_ticket(self, ticket_id: str, request: UpdateTicketRequest) -> Ticket:
        """
        Aplica una actualización parcial.

        `resolved_at` se fija la primera vez que el ticket pasa a resuelto.
        """
        actual = await self.get_ticket(ticket_id)
        cambios = request.model_dump(exclude_none=True)
        cambios["updated_at"] = _utcnow()

        if (
            request.status == TicketStatus.RESOLVED
            and actual.status != TicketStatus.RESOLVED
        ):
            cambios["resolved_at"] = cambios["updated_at"]

        actualizado = actual.model_copy(update=cambios)
        actualizado = await self.repository.update(actualizado)
        if self.events:
            await self.events.ticket_updated(actualizado)
        logger.info(f"✏️ Ticket {ticket_id} actualizado: {sorted(cambios)}")
        return actualizado

    async def list_tickets(self, query: TicketQuery) -> TicketPage:
        """Filtra, ordena y pagina los tickets."""
        estados = _split_filter(query.status)
        categorias = _split_filter(query.category)
        prioridades = _split_filter(query.priority)
        busqueda = (query.search_query or "").lower()

        def coincide(ticket: Ticket) -> bool:
            if estados is not None and ticket.status.value not in estados:
                return False
            if categorias is not None and ticket.category.value not in categorias:
                return False
            if prioridades is not None and ticket.priority.value not in prioridades:
                return False
            if query.assigned_to and ticket.assigned_to != query.assigned_to:
                return False
            if busqueda and not (
                busqueda in ticket.title.lower() or busqueda in ticket.description.lower()
            ):
                return False
            return True

        filtrados = [t for t in await self.repository.list_all() if coincide(t)]
        clave = _SORT_KEYS[query.sort_by]
        filtrados.sort(
            key=lambda t: (clave(t), t.created_at),
            reverse=query.sort_order == "desc",
        )

        total = len(filtrados)
        total_pages = math.ceil(total / query.limit)
        inicio = (query.page - 1) * query.limit

        return TicketPage(
            data=filtrados[inicio:inicio + query.limit],
            pagination=Pagination(
                page=query.page,
                limit=query.limit,
                total=total,
                total_pages=total_pages,
                has_next=query.page < total_pages,
                has_prev=query.page > 1,
            ),
        )

    async def get_stats(self, query: Optional[StatsQuery] = None) -> TicketStats:
        """Estadísticas agregadas sobre los tickets que pasan los filtros."""
        query = query or StatsQuery()
        tickets = [t for t in await self.repository.list_all() if _matches_stats(t, query)]

        por_estado = {estado.value: 0 for estado in TicketStatus}
        por_categoria: Dict[str, int] = {}
        por_prioridad: Dict[str, int] = {}
        for ticket in tickets:
            por_estado[ticket.status.value] += 1
            por_categoria[ticket.category.value] = por_categoria.get(ticket.category.value, 0) + 1
            por_prioridad[ticket.priority.value] = por_prioridad.get(ticket.priority.value, 0) + 1

        return TicketStats(
            total_tickets=len(tickets),
            open_tickets=por_estado[TicketStatus.OPEN.value],
            in_progress_tickets=por_estado[TicketStatus.IN_PROGRESS.value],
            resolved_tickets=por_estado[TicketStatus.RESOLVED.value],
            closed_tickets=por_estado[TicketStatus.CLOSED.value],
            by_status=por_estado,
            by_category=por_categoria,
            by_priority=por_prioridad,
            average_resolution_time=_average_resolution_hours(tickets),
        )


def _matches_stats(ticket: Ticket, query: StatsQuery) -> bool:
    if query.status and ticket.status.value != query.status:
        return False
    if query.category and ticket.category.value != query.category:
        return False
    if query.priority and ticket.priority.value != query.priority:
        return False
    if query.date_from or query.date_to:
        creado = _parse_timestamp(ticket.created_at)
        if query.date_from and creado < _as_utc(query.date_from):
            return False
        if query.date_to and creado > _as_utc(query.date_to):
            return False
    return True


def _as_utc(fecha: datetime) -> datetime:
    return fecha if fecha.tzinfo else fecha.replace(tzinfo=timezone.utc)


def _average_resolution_hours(tickets: Iterable[Ticket]) -> float:
    horas: List[float] = [
        (_parse_timestamp(t.resolved_at) - _parse_timestamp(t.created_at)).total_seconds() / 3600
        for t in tickets
        if t.status == TicketStatus.RESOLVED and t.resolved_at
    ]
    if not horas:
        return 0.0
    return round(sum(horas) / len(horas), 2)
