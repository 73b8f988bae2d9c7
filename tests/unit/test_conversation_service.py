"""
Unit tests for ConversationService.

Covers persistence of each turn, automatic ticket creation on completion
and the handling of client supplied state.
"""

import asyncio

import pytest

from core.exceptions import ApiError, ConversationNotFoundError
from models.states import ConversationStep, MessageRole
from services.conversation_service import ConversationService, replace_last_assistant_message
from services.ticket_service import TicketService
from templates import prompts
from templates.messages import tickets as ticket_messages


class FailingTicketRepository:
    async def create(self, ticket):
        raise ConnectionError("storage down")

    async def get(self, ticket_id):
        return None

    async def update(self, ticket):
        raise ConnectionError("storage down")

    async def list_all(self):
        return []


class TestIniciarConversacion:

    @pytest.mark.asyncio
    async def test_saludo_inicial(self, conversation_service, conversation_repository):
        conversacion = await conversation_service.start_conversation()

        assert conversacion.current_step == ConversationStep.GREETING
        assert len(conversacion.messages) == 1
        assert conversacion.messages[0].role == MessageRole.ASSISTANT
        assert conversacion.messages[0].content == prompts.GREETING
        assert conversacion.messages[0].metadata == {"type": "question", "nextStep": "greeting"}
        assert await conversation_repository.get(conversacion.id) == conversacion

    @pytest.mark.asyncio
    async def test_id_explicito(self, conversation_service):
        conversacion = await conversation_service.start_conversation("mi-id")

        assert conversacion.id == "mi-id"

    @pytest.mark.asyncio
    async def test_obtener_inexistente(self, conversation_service):
        with pytest.raises(ConversationNotFoundError):
            await conversation_service.get_conversation("ghost")


class TestEnviarMensaje:

    @pytest.mark.asyncio
    async def test_turno_persistido_y_publicado(self, conversation_service, mock_redis):
        conversacion = await conversation_service.start_conversation("c1")

        resultado = await conversation_service.send_message("c1", "John Smith")

        guardada = await conversation_service.get_conversation("c1")
        assert guardada.current_step == ConversationStep.COLLECT_ISSUE
        assert len(guardada.messages) == len(conversacion.messages) + 2
        assert resultado.updated_conversation == guardada
        assert mock_redis.events("test:conversations") == [
            "conversation_update",
            "conversation_update",
        ]

    @pytest.mark.asyncio
    async def test_conversacion_inexistente(self, conversation_service):
        with pytest.raises(ConversationNotFoundError):
            await conversation_service.send_message("ghost", "hola")

    @pytest.mark.asyncio
    async def test_estado_del_cliente(self, conversation_service, conversation_factory):
        estado = conversation_factory.en_detalles(id="c2")

        resultado = await conversation_service.send_message("c2", "skip", estado)

        assert resultado.updated_conversation.current_step == ConversationStep.SUGGEST_CATEGORY
        assert (await conversation_service.get_conversation("c2")).current_step == (
            ConversationStep.SUGGEST_CATEGORY
        )

    @pytest.mark.asyncio
    async def test_estado_de_otra_conversacion(self, conversation_service, conversation_factory):
        with pytest.raises(ApiError) as error:
            await conversation_service.send_message(
                "c1", "skip", conversation_factory.en_detalles(id="otra")
            )

        assert error.value.status_code == 400
        assert error.value.error_type == "validation_error"

    @pytest.mark.asyncio
    async def test_turnos_concurrentes_se_serializan(self, conversation_service):
        await conversation_service.start_conversation("c1")

        await asyncio.gather(
            conversation_service.send_message("c1", "John Smith"),
            conversation_service.send_message("c1", "My laptop crashes when I open the app"),
        )

        guardada = await conversation_service.get_conversation("c1")
        assert guardada.current_step == ConversationStep.CLARIFY_DETAILS
        assert len(guardada.messages) == 5


class TestCreacionAutomaticaDeTicket:

    @pytest.mark.asyncio
    async def test_confirmacion_crea_ticket(
        self, conversation_service, ticket_service, conversation_factory, mock_redis
    ):
        estado = conversation_factory.en_confirmacion_final(id="c1")

        resultado = await conversation_service.send_message("c1", "yes", estado)
        final = resultado.updated_conversation

        assert final.is_complete is True
        assert final.created_ticket_id is not None
        ticket = await ticket_service.get_ticket(final.created_ticket_id)
        assert ticket.conversation_id == "c1"
        assert final.messages[-1].content == prompts.ticket_created(
            ticket.id, ticket.status.value, ticket.priority.value
        )
        assert resultado.assistant_response.content == ticket_messages.creating_ticket
        assert mock_redis.events("test:tickets") == ["ticket_created"]

    @pytest.mark.asyncio
    async def test_fallo_al_crear_ticket(self, conversation_repository, conversation_factory):
        servicio = ConversationService(
            conversation_repository, TicketService(FailingTicketRepository())
        )
        estado = conversation_factory.en_confirmacion_final(id="c1")

        resultado = await servicio.send_message("c1", "yes", estado)
        final = resultado.updated_conversation

        assert final.is_complete is True
        assert final.created_ticket_id is None
        assert final.messages[-1].content == ticket_messages.ticket_creation_failed
        assert (await conversation_repository.get("c1")) == final


def test_replace_last_assistant_message(conversation_factory):
    conversacion = (
        conversation_factory.crear()
        .with_message(MessageRole.ASSISTANT, "primero")
        .with_message(MessageRole.USER, "respuesta")
    )

    actualizada = replace_last_assistant_message(conversacion, "nuevo")

    assert [m.content for m in actualizada.messages] == ["nuevo", "respuesta"]
    assert conversacion.messages[0].content == "primero"
