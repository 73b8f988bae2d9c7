"""
Unit tests for TicketEventPublisher.
"""

import pytest

from contracts.events import ITicketEventPublisher
from models.states import ConversationStep
from services.ticket_events import STEP_PROGRESS, TicketEventPublisher


class FailingRedis:
    async def publish(self, channel, message):
        raise ConnectionError("redis down")


class TestTicketEventPublisher:

    def test_cumple_el_contrato(self, event_publisher):
        assert isinstance(event_publisher, ITicketEventPublisher)

    def test_progreso_por_paso(self):
        assert set(STEP_PROGRESS) == set(ConversationStep)
        assert STEP_PROGRESS[ConversationStep.TICKET_CREATED] == 100

    @pytest.mark.asyncio
    async def test_ticket_created(self, event_publisher, mock_redis, ticket_factory):
        await event_publisher.ticket_created(ticket_factory.crear(id="t1", conversation_id="c1"))

        canal, mensaje = mock_redis.published[0]
        assert canal == "test:tickets"
        assert mensaje["event"] == "ticket_created"
        assert mensaje["data"]["ticket"]["id"] == "t1"
        assert mensaje["data"]["conversationId"] == "c1"
        assert mensaje["timestamp"]

    @pytest.mark.asyncio
    async def test_ticket_updated(self, event_publisher, mock_redis, ticket_factory):
        await event_publisher.ticket_updated(ticket_factory.crear(id="t1"))

        canal, mensaje = mock_redis.published[0]
        assert canal == "test:tickets"
        assert mensaje["event"] == "ticket_updated"
        assert mensaje["data"]["ticketId"] == "t1"

    @pytest.mark.asyncio
    async def test_conversation_updated(self, event_publisher, mock_redis, conversation_factory):
        await event_publisher.conversation_updated(conversation_factory.en_detalles(id="c1"))

        canal, mensaje = mock_redis.published[0]
        assert canal == "test:conversations"
        assert mensaje["event"] == "conversation_update"
        assert mensaje["data"] == {
            "conversationId": "c1",
            "step": "clarify_details",
            "progress": 30,
            "isComplete": False,
        }

    @pytest.mark.asyncio
    async def test_fallo_de_publicacion_no_se_propaga(self, ticket_factory):
        publicador = TicketEventPublisher(FailingRedis(), channel_prefix="test")

        await publicador.ticket_created(ticket_factory.crear())
