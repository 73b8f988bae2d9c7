"""
Contratos para repositorios de persistencia.

Define las interfaces de acceso a conversaciones y tickets, permitiendo
intercambiar implementaciones (Redis, memoria) sin afectar los servicios.
"""

from typing import List, Optional, Protocol, runtime_checkable

from models.states import ConversationState
from models.tickets import Ticket


@runtime_checkable
class IConversationRepository(Protocol):
    """
    Interfaz para el repositorio de conversaciones.

    Implementaciones:
    - RedisConversationRepository: Persistencia en Redis con TTL
    """

    async def get(self, conversation_id: str) -> Optional[ConversationState]:
        """
        Obtiene una conversación.

        Args:
            conversation_id: ID de la conversación

        Returns:
            ConversationState o None si no existe
        """
        ...

    async def save(self, conversation: ConversationState) -> None:
        """
        Guarda (crea o reemplaza) una conversación.

        Args:
            conversation: Estado a guardar
        """
        ...

    async def delete(self, conversation_id: str) -> None:
        """Elimina una conversación."""
        ...

    async def list_ids(self) -> List[str]:
        """IDs de todas las conversaciones guardadas."""
        ...


@runtime_checkable
class ITicketRepository(Protocol):
    """
    Interfaz para el repositorio de tickets.

    Implementaciones:
    - RedisTicketRepository: Persistencia en Redis con índice de IDs
    """

    async def create(self, ticket: Ticket) -> Ticket:
        """
        Persiste un ticket nuevo.

        Returns:
            El ticket guardado
        """
        ...

    async def get(self, ticket_id: str) -> Optional[Ticket]:
        """Obtiene un ticket o None si no existe."""
        ...

    async def update(self, ticket: Ticket) -> Ticket:
        """
        Reemplaza un ticket existente.

        Raises:
            TicketNotFoundError: Si el ticket no existe
        """
        ...

    async def list_all(self) -> List[Ticket]:
        """Todos los tickets guardados, sin orden garantizado."""
        ...
