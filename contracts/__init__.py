"""
Contratos (interfaces) del servicio.

Permiten inyectar implementaciones de persistencia y eventos en los
servicios y sustituirlas por dobles en los tests.
"""

from .events import ITicketEventPublisher
from .repositories import IConversationRepository, ITicketRepository

__all__ = [
    "IConversationRepository",
    "ITicketRepository",
    "ITicketEventPublisher",
]
