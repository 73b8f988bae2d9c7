"""
Unit tests for the turn processor.

Each test drives process_turn with a conversation snapshot and checks the
reply and the new snapshot.
"""

import pytest

from flows import process_turn
from flows.step_handlers import HandlerRegistry, StepHandler
from models.responses import ResponseType
from models.states import ConversationState, ConversationStep, MessageRole
from templates import prompts
from templates.messages import tickets as ticket_messages


class ExplodingHandler(StepHandler):
    """Handler that always fails, to exercise the error path."""

    step = ConversationStep.GREETING

    def handle(self, user_input, conversation):
        raise RuntimeError("boom")


def _conversar(conversacion: ConversationState, *entradas: str):
    resultado = None
    for entrada in entradas:
        resultado = process_turn(entrada, conversacion)
        conversacion = resultado.updated_conversation
    return resultado


class TestFlujoCompleto:
    """End to end runs through the dialogue engine."""

    ENTRADAS = (
        "John Smith",
        "My laptop crashes when I open the app",
        "skip",
        "yes",
        "john@example.com",
        "yes",
    )

    def test_seis_turnos_completan_la_conversacion(self):
        resultado = _conversar(ConversationState(id="conv-1"), *self.ENTRADAS)
        final = resultado.updated_conversation

        assert final.current_step == ConversationStep.TICKET_CREATED
        assert final.is_complete is True
        assert final.completed_at is not None
        assert final.collected_data.user_name == "John Smith"
        assert final.collected_data.user_email == "john@example.com"
        assert final.collected_data.confirmed_category == "technical"
        assert final.collected_data.issue_title == "My laptop crashes when I open the app"
        assert len(final.messages) == 12

        assert resultado.assistant_response.type == ResponseType.SUCCESS
        assert resultado.assistant_response.content == ticket_messages.creating_ticket
        assert resultado.assistant_response.should_create_ticket

    def test_pasos_por_turno(self):
        conversacion = ConversationState(id="conv-1")
        pasos = []
        for entrada in self.ENTRADAS:
            resultado = process_turn(entrada, conversacion)
            conversacion = resultado.updated_conversation
            pasos.append(resultado.assistant_response.next_step)

        assert pasos == [
            ConversationStep.COLLECT_ISSUE,
            ConversationStep.CLARIFY_DETAILS,
            ConversationStep.SUGGEST_CATEGORY,
            ConversationStep.COLLECT_NAME,
            ConversationStep.FINAL_CONFIRMATION,
            ConversationStep.TICKET_CREATED,
        ]

    def test_sugerencia_de_categoria_en_el_turno_de_detalles(self):
        conversacion = ConversationState(id="conv-1")
        resultado = _conversar(conversacion, *self.ENTRADAS[:3])

        assert resultado.suggested_category == "technical"
        assert resultado.assistant_response.type == ResponseType.CATEGORY_SUGGESTION

    def test_nombre_en_oracion_confirmado(self):
        resultado = _conversar(
            ConversationState(id="conv-1"),
            "Hi, my name is Alice and I need help",
            "yes",
        )
        final = resultado.updated_conversation

        assert final.current_step == ConversationStep.COLLECT_ISSUE
        assert final.collected_data.user_name == "Alice"
        assert final.collected_data.potential_name is None


class TestMensajes:
    """Every handled turn appends one user and one assistant message."""

    def test_mensajes_y_metadata(self):
        resultado = process_turn("John Smith", ConversationState(id="conv-1"))
        usuario, asistente = resultado.updated_conversation.messages

        assert usuario.role == MessageRole.USER
        assert usuario.content == "John Smith"
        assert asistente.role == MessageRole.ASSISTANT
        assert asistente.content == resultado.assistant_response.content
        assert asistente.metadata == {"type": "question", "nextStep": "collect_issue"}

    def test_metadata_con_sugerencias(self, conversation_factory):
        resultado = process_turn("skip", conversation_factory.en_detalles())
        asistente = resultado.updated_conversation.messages[-1]

        assert asistente.metadata["type"] == "category_suggestion"
        assert asistente.metadata["suggestions"] == prompts.CONFIRM_CATEGORY_SUGGESTIONS

    def test_no_modifica_la_entrada(self, conversation_factory):
        conversacion = conversation_factory.en_detalles()
        antes = conversacion.model_dump()

        process_turn("The export also fails on mobile", conversacion)

        assert conversacion.model_dump() == antes


class TestReintentosYReinicio:

    def test_reintento_se_queda_en_el_paso(self):
        conversacion = ConversationState(id="conv-1", current_step=ConversationStep.COLLECT_ISSUE)

        resultado = process_turn("short", conversacion)

        assert resultado.updated_conversation.current_step == ConversationStep.COLLECT_ISSUE
        assert resultado.assistant_response.next_step == ConversationStep.COLLECT_ISSUE
        assert len(resultado.updated_conversation.messages) == 2

    def test_rechazo_final_reinicia_conservando_datos(self, conversation_factory):
        conversacion = conversation_factory.en_confirmacion_final()

        resultado = process_turn("No, let me modify something", conversacion)
        actualizada = resultado.updated_conversation

        assert actualizada.current_step == ConversationStep.GREETING
        assert actualizada.is_complete is False
        assert actualizada.collected_data == conversacion.collected_data
        assert resultado.assistant_response.content == prompts.restart()


class TestErrores:

    def test_excepcion_en_handler(self):
        registry = HandlerRegistry().register(ExplodingHandler())
        conversacion = ConversationState(id="conv-1")

        resultado = process_turn("John Smith", conversacion, registry)

        assert resultado.assistant_response.type == ResponseType.ERROR
        assert resultado.assistant_response.content == prompts.ERROR
        assert resultado.updated_conversation.current_step == ConversationStep.ERROR
        assert resultado.updated_conversation.messages == []
        assert conversacion.current_step == ConversationStep.GREETING

    def test_paso_sin_handler_va_a_error(self):
        conversacion = ConversationState(
            id="conv-1",
            current_step=ConversationStep.TICKET_CREATED,
            is_complete=True,
            completed_at="2024-01-01T10:00:00+00:00",
        )

        resultado = process_turn("hello again", conversacion)
        actualizada = resultado.updated_conversation

        assert resultado.assistant_response.type == ResponseType.ERROR
        assert actualizada.current_step == ConversationStep.ERROR
        assert actualizada.is_complete is False
        assert actualizada.completed_at == "2024-01-01T10:00:00+00:00"
        assert len(actualizada.messages) == 2

    @pytest.mark.parametrize("entrada", ["", "   "])
    def test_entrada_vacia_no_lanza(self, entrada):
        resultado = process_turn(entrada, ConversationState(id="conv-1"))

        assert resultado.updated_conversation.current_step == ConversationStep.GREETING
