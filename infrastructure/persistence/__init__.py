# Persistence infrastructure module
from .conversation_repository import RedisConversationRepository
from .redis_client import RedisClient
from .ticket_repository import RedisTicketRepository

__all__ = [
    "RedisClient",
    "RedisConversationRepository",
    "RedisTicketRepository",
]
