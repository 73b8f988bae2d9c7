"""
Unit tests for the Redis repositories.

Tests the conversation and ticket repositories with Pydantic validation
on top of the mocked Redis client.
"""

import json

import pytest

from contracts.repositories import IConversationRepository, ITicketRepository
from core.exceptions import RepositoryError, TicketNotFoundError
from models.states import ConversationStep, MessageRole
from models.tickets import TicketStatus


class TestRedisConversationRepository:
    """Tests for RedisConversationRepository."""

    def test_cumple_el_contrato(self, conversation_repository):
        assert isinstance(conversation_repository, IConversationRepository)

    @pytest.mark.asyncio
    async def test_guardar_conversacion(
        self, conversation_repository, mock_redis, conversation_factory
    ):
        await conversation_repository.save(conversation_factory.crear(id="abc"))

        assert mock_redis.set_called
        assert "conversation:abc" in mock_redis._data
        assert mock_redis.expirations["conversation:abc"] == 3600

        guardado = json.loads(mock_redis._data["conversation:abc"])
        assert guardado["currentStep"] == "greeting"

    @pytest.mark.asyncio
    async def test_obtener_conversacion(self, conversation_repository, conversation_factory):
        original = conversation_factory.en_detalles(id="abc").with_message(
            MessageRole.USER, "hola"
        )
        await conversation_repository.save(original)

        recuperada = await conversation_repository.get("abc")

        assert recuperada == original
        assert recuperada.current_step == ConversationStep.CLARIFY_DETAILS

    @pytest.mark.asyncio
    async def test_obtener_inexistente(self, conversation_repository):
        assert await conversation_repository.get("nope") is None

    @pytest.mark.asyncio
    async def test_datos_corruptos(self, conversation_repository, mock_redis):
        mock_redis._data["conversation:bad"] = json.dumps({"id": "", "messages": "x"})

        with pytest.raises(RepositoryError):
            await conversation_repository.get("bad")

    @pytest.mark.asyncio
    async def test_eliminar_y_listar(self, conversation_repository, conversation_factory):
        await conversation_repository.save(conversation_factory.crear(id="b"))
        await conversation_repository.save(conversation_factory.crear(id="a"))

        assert await conversation_repository.list_ids() == ["a", "b"]

        await conversation_repository.delete("a")

        assert await conversation_repository.list_ids() == ["b"]


class TestRedisTicketRepository:
    """Tests for RedisTicketRepository."""

    def test_cumple_el_contrato(self, ticket_repository):
        assert isinstance(ticket_repository, ITicketRepository)

    @pytest.mark.asyncio
    async def test_crear_indexa(self, ticket_repository, mock_redis, ticket_factory):
        await ticket_repository.create(ticket_factory.crear(id="t1"))

        assert "ticket:t1" in mock_redis._data
        assert await mock_redis.smembers("tickets:index") == {"t1"}
        assert mock_redis.expirations["ticket:t1"] is None

    @pytest.mark.asyncio
    async def test_obtener(self, ticket_repository, ticket_factory):
        ticket = ticket_factory.crear(id="t1", tags=["vip"])
        await ticket_repository.create(ticket)

        assert await ticket_repository.get("t1") == ticket
        assert await ticket_repository.get("t2") is None

    @pytest.mark.asyncio
    async def test_actualizar(self, ticket_repository, ticket_factory):
        ticket = ticket_factory.crear(id="t1")
        await ticket_repository.create(ticket)

        await ticket_repository.update(ticket.model_copy(update={"status": TicketStatus.CLOSED}))

        assert (await ticket_repository.get("t1")).status == TicketStatus.CLOSED

    @pytest.mark.asyncio
    async def test_actualizar_inexistente(self, ticket_repository, ticket_factory):
        with pytest.raises(TicketNotFoundError):
            await ticket_repository.update(ticket_factory.crear(id="ghost"))

    @pytest.mark.asyncio
    async def test_listar_limpia_indice(self, ticket_repository, mock_redis, ticket_factory):
        await ticket_repository.create(ticket_factory.crear(id="t1"))
        await ticket_repository.create(ticket_factory.crear(id="t2"))
        await mock_redis.delete("ticket:t1")

        tickets = await ticket_repository.list_all()

        assert [t.id for t in tickets] == ["t2"]
        assert await mock_redis.smembers("tickets:index") == {"t2"}

    @pytest.mark.asyncio
    async def test_ticket_corrupto(self, ticket_repository, mock_redis):
        mock_redis._data["ticket:bad"] = json.dumps({"id": "bad"})

        with pytest.raises(RepositoryError):
            await ticket_repository.get("bad")
