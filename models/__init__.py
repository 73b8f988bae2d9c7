"""
Modelos de datos del servicio de tickets de soporte
Define modelos Pydantic para el estado de conversación, tickets y la API
"""

from models.responses import AssistantResponse, ResponseType, TurnResult
from models.states import (
    ChatMessage,
    CollectedData,
    ConversationState,
    ConversationStep,
    MessageRole,
    NameConfirmation,
    VALID_TRANSITIONS,
    can_transition,
    get_valid_transitions,
)
from models.tickets import (
    Ticket,
    TicketCategory,
    TicketPriority,
    TicketStatus,
)

__all__ = [
    # From models.states
    "ChatMessage",
    "CollectedData",
    "ConversationState",
    "ConversationStep",
    "MessageRole",
    "NameConfirmation",
    "VALID_TRANSITIONS",
    "can_transition",
    "get_valid_transitions",
    # From models.responses
    "AssistantResponse",
    "ResponseType",
    "TurnResult",
    # From models.tickets
    "Ticket",
    "TicketCategory",
    "TicketPriority",
    "TicketStatus",
]
