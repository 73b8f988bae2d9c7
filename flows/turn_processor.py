"""
Turn processor of the ticket-intake conversation.

`process_turn` is the single entry point of the dialogue engine: it takes
one user input and a conversation snapshot and returns the assistant
reply plus a new snapshot. It never raises.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.exceptions import StepHandlerNotFoundError
from models.responses import AssistantResponse, ResponseType, TurnResult
from models.states import ConversationState, ConversationStep, MessageRole
from templates import prompts

from .outcomes import StepOutcome
from .step_handlers import HandlerRegistry, build_default_registry

logger = logging.getLogger(__name__)

_registry_por_defecto: Optional[HandlerRegistry] = None


def _default_registry() -> HandlerRegistry:
    global _registry_por_defecto
    if _registry_por_defecto is None:
        _registry_por_defecto = build_default_registry()
    return _registry_por_defecto


def _error_response() -> AssistantResponse:
    return AssistantResponse(
        type=ResponseType.ERROR,
        content=prompts.ERROR,
        next_step=ConversationStep.ERROR,
    )


def _assistant_metadata(response: AssistantResponse) -> Dict[str, Any]:
    metadata: Dict[str, Any] = {"type": response.type.value}
    if response.next_step is not None:
        metadata["nextStep"] = response.next_step.value
    if response.suggestions is not None:
        metadata["suggestions"] = list(response.suggestions)
    return metadata


def _run_handler(
    user_input: str,
    conversation: ConversationState,
    registry: HandlerRegistry,
) -> StepOutcome:
    try:
        handler = registry.resolve(conversation.current_step)
    except StepHandlerNotFoundError:
        logger.warning(
            f"⚠️ No handler for step '{conversation.current_step.value}' "
            f"(conversation {conversation.id}), moving to error"
        )
        return StepOutcome.fail(_error_response(), conversation.collected_data)

    return handler.handle(user_input, conversation)


def apply_outcome(
    user_input: str,
    conversation: ConversationState,
    outcome: StepOutcome,
) -> TurnResult:
    """
    Builds the new conversation snapshot from a step outcome.

    Appends the user message and the assistant message, stores the
    collected data and recomputes completion.
    """
    paso = outcome.resolve_step(conversation.current_step)
    respuesta = outcome.response.model_copy(update={"next_step": paso})

    completa = paso == ConversationStep.TICKET_CREATED
    completed_at = conversation.completed_at
    if completa and completed_at is None:
        completed_at = datetime.now(timezone.utc).isoformat()

    actualizada = (
        conversation.update(
            current_step=paso,
            collected_data=outcome.collected_data,
            is_complete=completa,
            completed_at=completed_at,
        )
        .with_message(MessageRole.USER, user_input)
        .with_message(
            MessageRole.ASSISTANT,
            respuesta.content,
            metadata=_assistant_metadata(respuesta),
        )
    )

    return TurnResult(
        assistant_response=respuesta,
        updated_conversation=actualizada,
        suggested_category=outcome.suggested_category,
    )


def process_turn(
    user_input: str,
    conversation: ConversationState,
    registry: Optional[HandlerRegistry] = None,
) -> TurnResult:
    """
    Processes one user turn.

    Args:
        user_input: Raw text sent by the user
        conversation: Conversation snapshot; it is never mutated
        registry: Step handlers to use (defaults to every built-in handler)

    Returns:
        TurnResult with the assistant reply, the new conversation snapshot
        and the category suggested on this turn, if any. Any unexpected
        failure yields the generic error reply and the original
        conversation with only its step set to ERROR.
    """
    registry = registry or _default_registry()
    paso_actual = conversation.current_step

    try:
        outcome = _run_handler(user_input, conversation, registry)
        resultado = apply_outcome(user_input, conversation, outcome)
    except Exception:
        logger.exception(
            f"❌ Error processing turn for conversation {conversation.id} "
            f"on step '{paso_actual.value}'"
        )
        return TurnResult(
            assistant_response=_error_response(),
            updated_conversation=conversation.model_copy(
                update={"current_step": ConversationStep.ERROR}
            ),
        )

    logger.debug(
        f"Conversation {conversation.id}: {paso_actual.value} -> "
        f"{resultado.updated_conversation.current_step.value} "
        f"({outcome.kind.value})"
    )
    return resultado
