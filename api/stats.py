"""
Statistics endpoints.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_ticket_service
from models.schemas import ApiResponse
from models.tickets import StatsQuery
from services.ticket_service import TicketService

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/tickets")
async def ticket_stats(
    date_from: Optional[datetime] = Query(None, alias="dateFrom"),
    date_to: Optional[datetime] = Query(None, alias="dateTo"),
    status: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    priority: Optional[str] = Query(None),
    service: TicketService = Depends(get_ticket_service),
) -> dict:
    """Estadísticas de tickets con filtros opcionales."""
    estadisticas = await service.get_stats(
        StatsQuery(
            date_from=date_from,
            date_to=date_to,
            status=status,
            category=category,
            priority=priority,
        )
    )
    return ApiResponse.ok(estadisticas.model_dump(mode="json", by_alias=True))
