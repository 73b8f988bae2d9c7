"""Repositorio de conversaciones en Redis con validación Pydantic."""

import logging
from typing import List, Optional

from pydantic import ValidationError

from config.configuration import configuration
from core.exceptions import RepositoryError
from models.states import ConversationState

logger = logging.getLogger(__name__)


class RedisConversationRepository:
    """
    Repositorio de conversaciones sobre RedisClient.

    Cada conversación se guarda como JSON (claves camelCase) en
    `conversation:{id}` con TTL.
    """

    KEY_TEMPLATE = "conversation:{}"

    def __init__(self, redis_cliente, ttl_seconds: Optional[int] = None):
        """
        Args:
            redis_cliente: RedisClient (o un doble con get/set/delete/keys)
            ttl_seconds: TTL de cada conversación; por defecto el configurado
        """
        self.redis = redis_cliente
        self.ttl = ttl_seconds if ttl_seconds is not None else configuration.conversation_ttl_seconds

    async def get(self, conversation_id: str) -> Optional[ConversationState]:
        datos = await self.redis.get(self.KEY_TEMPLATE.format(conversation_id))
        if not datos:
            return None

        try:
            conversacion = ConversationState.from_dict(datos)
        except (ValidationError, TypeError, ValueError) as e:
            logger.error(f"❌ Conversación {conversation_id} corrupta en Redis: {e}")
            raise RepositoryError(f"Invalid conversation data for {conversation_id}") from e

        logger.debug(
            f"📖 Conversación {conversation_id}: step={conversacion.current_step.value}"
        )
        return conversacion

    async def save(self, conversation: ConversationState) -> None:
        clave = self.KEY_TEMPLATE.format(conversation.id)
        await self.redis.set(clave, conversation.to_dict(), expire=self.ttl or None)
        logger.debug(
            f"💾 Conversación {conversation.id} guardada: "
            f"step={conversation.current_step.value}"
        )

    async def delete(self, conversation_id: str) -> None:
        await self.redis.delete(self.KEY_TEMPLATE.format(conversation_id))

    async def list_ids(self) -> List[str]:
        prefijo = self.KEY_TEMPLATE.format("")
        claves = await self.redis.keys(self.KEY_TEMPLATE.format("*"))
        return sorted(clave[len(prefijo):] for clave in claves)
