"""
Modelos Pydantic de la API HTTP.

Requests y envelope de respuesta compartidos por los routers de chat,
tickets, estadísticas y health.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import Field

from models.states import ConversationState
from models.states.conversation import CamelModel


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class ApiResponse(CamelModel):
    """Envelope común de todas las respuestas de la API."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    message: Optional[str] = None
    timestamp: str = Field(default_factory=_utcnow)

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
        """Envelope de éxito serializado."""
        return cls(success=True, data=data, message=message).to_dict()

    @classmethod
    def fail(cls, error: str, data: Any = None) -> Dict[str, Any]:
        """Envelope de error serializado."""
        return cls(success=False, error=error, data=data).to_dict()

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ChatInput(CamelModel):
    """Mensaje enviado por el usuario."""

    message: str = Field(..., min_length=1)
    conversation_id: str = Field(..., min_length=1)
    quick_reply: bool = False


class SendMessageRequest(CamelModel):
    """
    Request de POST /api/chat/message.

    Si el cliente envía `conversationState` se usa en lugar del estado
    persistido.
    """

    input: ChatInput
    conversation_state: Optional[ConversationState] = None


class StartConversationRequest(CamelModel):
    """Request opcional para iniciar una conversación."""

    conversation_id: Optional[str] = None


class HealthResponse(CamelModel):
    """Respuesta del health check."""

    status: str
    service: str
    timestamp: str
    redis: Optional[str] = None
    version: Optional[str] = None


class ValidationErrorDetail(CamelModel):
    """Detalle de un error de validación de request."""

    field: str
    message: str


class ValidationErrorData(CamelModel):
    """Lista de errores de validación."""

    errors: List[ValidationErrorDetail]
