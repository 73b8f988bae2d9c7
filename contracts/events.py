"""
Contratos para publicación de eventos.

Define la interfaz del publicador de eventos de tickets y conversaciones,
permitiendo diferentes transportes (Redis Pub/Sub, no-op en tests).
"""

from typing import Protocol, runtime_checkable

from models.states import ConversationState
from models.tickets import Ticket


@runtime_checkable
class ITicketEventPublisher(Protocol):
    """
    Interfaz para publicación de eventos de tickets.

    Implementaciones:
    - TicketEventPublisher: Redis Pub/Sub

    Las implementaciones no lanzan excepciones: un fallo de publicación
    no debe interrumpir la conversación.
    """

    async def ticket_created(self, ticket: Ticket) -> None:
        """Publica la creación de un ticket."""
        ...

    async def ticket_updated(self, ticket: Ticket) -> None:
        """Publica la actualización de un ticket."""
        ...

    async def conversation_updated(self, conversation: ConversationState) -> None:
        """Publica el nuevo estado de una conversación."""
        ...
