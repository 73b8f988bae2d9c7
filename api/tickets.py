"""
Ticket management endpoints.
"""
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_ticket_service
from models.schemas import ApiResponse
from models.tickets import CreateTicketRequest, TicketQuery, UpdateTicketRequest
from services.ticket_service import TicketService

router = APIRouter(prefix="/api/tickets", tags=["tickets"])


def ticket_query(
    status_filter: Optional[str] = Query(None, alias="status", description="Estados separados por coma"),
    category: Optional[str] = Query(None, description="Categorías separadas por coma"),
    priority: Optional[str] = Query(None, description="Prioridades separadas por coma"),
    assigned_to: Optional[str] = Query(None, alias="assignedTo"),
    search_query: Optional[str] = Query(None, alias="searchQuery"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort_by: Literal["createdAt", "updatedAt", "priority", "status"] = Query(
        "createdAt", alias="sortBy"
    ),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
) -> TicketQuery:
    """Construye el TicketQuery desde los query params camelCase."""
    return TicketQuery(
        status=status_filter,
        category=category,
        priority=priority,
        assigned_to=assigned_to,
        search_query=search_query,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("")
async def list_tickets(
    query: TicketQuery = Depends(ticket_query),
    service: TicketService = Depends(get_ticket_service),
) -> dict:
    """Lista tickets con filtros, orden y paginación."""
    pagina = await service.list_tickets(query)
    return ApiResponse.ok(pagina.model_dump(mode="json", by_alias=True))


@router.get("/{ticket_id}")
async def get_ticket(
    ticket_id: str,
    service: TicketService = Depends(get_ticket_service),
) -> dict:
    ticket = await service.get_ticket(ticket_id)
    return ApiResponse.ok(ticket.to_dict())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_ticket(
    request: CreateTicketRequest,
    service: TicketService = Depends(get_ticket_service),
) -> dict:
    ticket = await service.create_ticket(request)
    return ApiResponse.ok(ticket.to_dict(), message="Ticket created successfully")


@router.patch("/{ticket_id}")
async def update_ticket(
    ticket_id: str,
    request: UpdateTicketRequest,
    service: TicketService = Depends(get_ticket_service),
) -> dict:
    ticket = await service.update_ticket(ticket_id, request)
    return ApiResponse.ok(ticket.to_dict(), message="Ticket updated successfully")
