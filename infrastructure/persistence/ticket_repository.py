"""Repositorio de tickets en Redis con índice de IDs."""

import logging
from typing import List, Optional

from pydantic import ValidationError

from config.configuration import configuration
from core.exceptions import RepositoryError, TicketNotFoundError
from models.tickets import Ticket

from .redis_client import member_keys

logger = logging.getLogger(__name__)


class RedisTicketRepository:
    """
    Repositorio de tickets sobre RedisClient.

    Cada ticket vive en `ticket:{id}`; el conjunto `tickets:index` guarda
    los IDs para poder listarlos sin escanear claves.
    """

    KEY_TEMPLATE = "ticket:{}"
    INDEX_KEY = "tickets:index"

    def __init__(self, redis_cliente, ttl_seconds: Optional[int] = None):
        self.redis = redis_cliente
        self.ttl = ttl_seconds if ttl_seconds is not None else configuration.ticket_ttl_seconds

    def _parse(self, ticket_id: str, datos) -> Ticket:
        try:
            return Ticket.model_validate(datos)
        except ValidationError as e:
            logger.error(f"❌ Ticket {ticket_id} corrupto en Redis: {e}")
            raise RepositoryError(f"Invalid ticket data for {ticket_id}") from e

    async def create(self, ticket: Ticket) -> Ticket:
        await self.redis.set(
            self.KEY_TEMPLATE.format(ticket.id), ticket.to_dict(), expire=self.ttl or None
        )
        await self.redis.sadd(self.INDEX_KEY, ticket.id)
        logger.info(f"🎫 Ticket {ticket.id} guardado (category={ticket.category.value})")
        return ticket

    async def get(self, ticket_id: str) -> Optional[Ticket]:
        datos = await self.redis.get(self.KEY_TEMPLATE.format(ticket_id))
        if not datos:
            return None
        return self._parse(ticket_id, datos)

    async def update(self, ticket: Ticket) -> Ticket:
        clave = self.KEY_TEMPLATE.format(ticket.id)
        if not await self.redis.get(clave):
            raise TicketNotFoundError(ticket.id)
        await self.redis.set(clave, ticket.to_dict(), expire=self.ttl or None)
        return ticket

    async def list_all(self) -> List[Ticket]:
        ids = sorted(await self.redis.smembers(self.INDEX_KEY))
        if not ids:
            return []

        encontrados = await self.redis.get_many(member_keys(self.KEY_TEMPLATE, ids))
        tickets = []
        for ticket_id in ids:
            datos = encontrados.get(self.KEY_TEMPLATE.format(ticket_id))
            if datos is None:
                # Expirado o eliminado: limpiar el índice
                await self.redis.srem(self.INDEX_KEY, ticket_id)
                continue
            tickets.append(self._parse(ticket_id, datos))
        return tickets
