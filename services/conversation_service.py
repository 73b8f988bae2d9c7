"""
Conversation Service.

Orquesta un turno completo alrededor del motor de diálogo: carga el
estado, procesa el mensaje, crea el ticket cuando la conversación se
completa, persiste y publica el nuevo estado.
"""

import asyncio
import logging
import uuid
import weakref
from typing import Optional

from contracts.events import ITicketEventPublisher
from contracts.repositories import IConversationRepository
from core.exceptions import ApiError, ConversationNotFoundError
from flows import process_turn
from flows.step_handlers import HandlerRegistry
from infrastructure.logging import bind_conversation
from models.responses import TurnResult
from models.states import ConversationState, ConversationStep, MessageRole
from services.ticket_service import TicketService
from templates import prompts
from templates.messages import tickets as ticket_messages

logger = logging.getLogger(__name__)


def replace_last_assistant_message(
    conversation: ConversationState, content: str
) -> ConversationState:
    """Reemplaza el texto del último mensaje del asistente."""
    mensajes = list(conversation.messages)
    for indice in range(len(mensajes) - 1, -1, -1):
        if mensajes[indice].role == MessageRole.ASSISTANT:
            mensajes[indice] = mensajes[indice].model_copy(update={"content": content})
            break
    return conversation.model_copy(update={"messages": mensajes})


class ConversationService:
    """
    Servicio de conversaciones de creación de tickets.

    Los turnos de una misma conversación se serializan con un lock por ID;
    conversaciones distintas se procesan en paralelo.
    """

    def __init__(
        self,
        repository: IConversationRepository,
        ticket_service: TicketService,
        events: Optional[ITicketEventPublisher] = None,
        registry: Optional[HandlerRegistry] = None,
    ):
        self.repository = repository
        self.ticket_service = ticket_service
        self.events = events
        self.registry = registry
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, conversation_id: str) -> asyncio.Lock:
        lock = self._locks.get(conversation_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[conversation_id] = lock
        return lock

    async def _persist(self, conversation: ConversationState) -> None:
        await self.repository.save(conversation)
        if self.events:
            await self.events.conversation_updated(conversation)

    async def start_conversation(
        self, conversation_id: Optional[str] = None
    ) -> ConversationState:
        """Crea una conversación nueva con el saludo del asistente."""
        conversacion = ConversationState(
            id=conversation_id or str(uuid.uuid4())
        ).with_message(
            MessageRole.ASSISTANT,
            prompts.GREETING,
            metadata={"type": "question", "nextStep": ConversationStep.GREETING.value},
        )
        await self._persist(conversacion)
        logger.info(f"💬 Conversación iniciada: {conversacion.id}")
        return conversacion

    async def get_conversation(self, conversation_id: str) -> ConversationState:
        """
        Raises:
            ConversationNotFoundError: Si la conversación no existe
        """
        conversacion = await self.repository.get(conversation_id)
        if conversacion is None:
            raise ConversationNotFoundError(conversation_id)
        return conversacion

    async def send_message(
        self,
        conversation_id: str,
        message: str,
        state: Optional[ConversationState] = None,
    ) -> TurnResult:
        """
        Procesa un mensaje del usuario.

        Args:
            conversation_id: ID de la conversación
            message: Texto del usuario
            state: Estado enviado por el cliente; si falta se usa el guardado

        Returns:
            TurnResult con la conversación ya persistida

        Raises:
            ConversationNotFoundError: Si no hay estado enviado ni guardado
            ApiError: Si el estado enviado pertenece a otra conversación
        """
        if state is not None and state.id != conversation_id:
            raise ApiError(
                "Conversation state does not match conversationId",
                status_code=400,
                error_type="validation_error",
            )

        async with self._lock_for(conversation_id):
            bind_conversation(conversation_id)
            conversacion = state or await self.get_conversation(conversation_id)

            resultado = process_turn(message, conversacion, self.registry)
            actualizada = resultado.updated_conversation

            if actualizada.is_complete and not actualizada.created_ticket_id:
                actualizada = await self._create_ticket(actualizada)

            await self._persist(actualizada)
            return resultado.model_copy(update={"updated_conversation": actualizada})

    async def _create_ticket(self, conversation: ConversationState) -> ConversationState:
        try:
            ticket = await self.ticket_service.create_from_conversation(conversation)
        except Exception:
            logger.exception(
                f"❌ Failed to auto-create ticket for conversation {conversation.id}"
            )
            return replace_last_assistant_message(
                conversation, ticket_messages.ticket_creation_failed
            )

        conversacion = conversation.model_copy(update={"created_ticket_id": ticket.id})
        return replace_last_assistant_message(
            conversacion,
            prompts.ticket_created(ticket.id, ticket.status.value, ticket.priority.value),
        )
