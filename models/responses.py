"""
Modelos de respuesta del motor de diálogo.

Define la respuesta del asistente y el resultado de un turno completo.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from models.states import ConversationState, ConversationStep
from models.states.conversation import CamelModel


class ResponseType(str, Enum):
    """Tipo de respuesta del asistente."""

    QUESTION = "question"
    CLARIFICATION = "clarification"
    CATEGORY_SUGGESTION = "category_suggestion"
    CONFIRMATION = "confirmation"
    SUCCESS = "success"
    ERROR = "error"
    TYPING = "typing"


class AssistantResponse(CamelModel):
    """
    Respuesta del asistente para un turno.

    Attributes:
        type: Tipo de respuesta
        content: Texto a mostrar al usuario
        next_step: Paso en el que queda la conversación
        suggestions: Respuestas rápidas sugeridas
        requires_input: Si se espera una respuesta del usuario
        metadata: Datos adicionales (p. ej. shouldCreateTicket)
    """

    type: ResponseType
    content: str
    next_step: Optional[ConversationStep] = None
    suggestions: Optional[List[str]] = None
    requires_input: bool = True
    metadata: Optional[Dict[str, Any]] = None

    @property
    def should_create_ticket(self) -> bool:
        """Indica si el turno pide crear el ticket."""
        return bool((self.metadata or {}).get("shouldCreateTicket"))


class TurnResult(CamelModel):
    """Resultado de procesar un turno."""

    assistant_response: AssistantResponse
    updated_conversation: ConversationState
    suggested_category: Optional[str] = Field(default=None)

    def to_dict(self) -> Dict[str, Any]:
        """Serializa el resultado con claves camelCase."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
