"""
API routers del servicio de tickets de soporte.

Este módulo contiene todos los routers HTTP organizados por responsabilidad.
"""
from api.chat import router as chat_router
from api.health import router as health_router
from api.stats import router as stats_router
from api.tickets import router as tickets_router

__all__ = [
    "chat_router",
    "health_router",
    "stats_router",
    "tickets_router",
]
