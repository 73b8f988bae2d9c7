"""
Publicador de eventos de tickets y conversaciones sobre Redis Pub/Sub.

Canales:
- `{prefijo}:tickets`: ticket_created, ticket_updated
- `{prefijo}:conversations`: conversation_update
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from config.configuration import configuration
from models.states import ConversationState, ConversationStep
from models.tickets import Ticket

logger = logging.getLogger(__name__)

# Avance (%) mostrado al equipo de soporte por paso
STEP_PROGRESS: Dict[ConversationStep, int] = {
    ConversationStep.GREETING: 0,
    ConversationStep.COLLECT_ISSUE: 15,
    ConversationStep.CLARIFY_DETAILS: 30,
    ConversationStep.SUGGEST_CATEGORY: 45,
    ConversationStep.CONFIRM_CATEGORY: 55,
    ConversationStep.COLLECT_NAME: 70,
    ConversationStep.FINAL_CONFIRMATION: 85,
    ConversationStep.TICKET_CREATED: 100,
    ConversationStep.ERROR: 0,
}


class TicketEventPublisher:
    """
    Publica eventos JSON en Redis.

    Nunca lanza excepciones: un fallo de publicación se registra y la
    operación que lo originó continúa.
    """

    def __init__(self, redis_cliente, channel_prefix: Optional[str] = None):
        self.redis = redis_cliente
        prefijo = channel_prefix or configuration.events_channel_prefix
        self.tickets_channel = f"{prefijo}:tickets"
        self.conversations_channel = f"{prefijo}:conversations"

    async def _publish(self, channel: str, event: str, data: Dict[str, Any]) -> None:
        mensaje = {
            "event": event,
            "data": data,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        try:
            await self.redis.publish(channel, mensaje)
        except Exception as e:
            logger.warning(f"⚠️ No se pudo publicar '{event}' en '{channel}': {e}")

    async def ticket_created(self, ticket: Ticket) -> None:
        await self._publish(
            self.tickets_channel,
            "ticket_created",
            {"ticket": ticket.to_dict(), "conversationId": ticket.conversation_id},
        )

    async def ticket_updated(self, ticket: Ticket) -> None:
        await self._publish(
            self.tickets_channel,
            "ticket_updated",
            {"ticketId": ticket.id, "ticket": ticket.to_dict()},
        )

    async def conversation_updated(self, conversation: ConversationState) -> None:
        await self._publish(
            self.conversations_channel,
            "conversation_update",
            {
                "conversationId": conversation.id,
                "step": conversation.current_step.value,
                "progress": STEP_PROGRESS.get(conversation.current_step, 0),
                "isComplete": conversation.is_complete,
            },
        )
