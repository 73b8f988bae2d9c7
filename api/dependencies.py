"""Inyección de dependencias para FastAPI."""

from typing import Optional

from infrastructure.persistence import (
    RedisClient,
    RedisConversationRepository,
    RedisTicketRepository,
)
from services.conversation_service import ConversationService
from services.ticket_events import TicketEventPublisher
from services.ticket_service import TicketService

# Instancias globales (lazy initialization)
_redis_client: Optional[RedisClient] = None
_ticket_service: Optional[TicketService] = None
_conversation_service: Optional[ConversationService] = None


def get_redis_client() -> RedisClient:
    """Obtener cliente Redis (singleton)."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client


def get_event_publisher() -> TicketEventPublisher:
    return TicketEventPublisher(get_redis_client())


def get_ticket_service() -> TicketService:
    """Obtener servicio de tickets (singleton)."""
    global _ticket_service
    if _ticket_service is None:
        _ticket_service = TicketService(
            RedisTicketRepository(get_redis_client()),
            events=get_event_publisher(),
        )
    return _ticket_service


def get_conversation_service() -> ConversationService:
    """Obtener servicio de conversaciones (singleton)."""
    global _conversation_service
    if _conversation_service is None:
        _conversation_service = ConversationService(
            RedisConversationRepository(get_redis_client()),
            get_ticket_service(),
            events=get_event_publisher(),
        )
    return _conversation_service
