"""
Modelos de estado para la conversación de creación de tickets.

Este módulo define los schemas validados con Pydantic y la máquina de
pasos que gobierna el avance de la conversación.
"""

from .conversation import (
    ChatMessage,
    CollectedData,
    ConversationState,
    ConversationStep,
    MessageRole,
    NameConfirmation,
)
from .transitions import (
    PASS_THROUGH_STEPS,
    VALID_TRANSITIONS,
    advance,
    can_transition,
    get_valid_transitions,
    next_step,
    validate_transition_path,
)

__all__ = [
    # Pasos
    "ConversationStep",
    "MessageRole",
    # Modelos principales
    "ConversationState",
    "CollectedData",
    "NameConfirmation",
    "ChatMessage",
    # Transiciones
    "PASS_THROUGH_STEPS",
    "VALID_TRANSITIONS",
    "advance",
    "can_transition",
    "get_valid_transitions",
    "next_step",
    "validate_transition_path",
]
