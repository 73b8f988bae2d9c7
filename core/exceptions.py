"""Excepciones personalizadas del dominio de tickets de soporte."""

from typing import Any, Dict, Optional


class RepositoryError(Exception):
    """Error en operaciones del repositorio."""
    pass


class ConversationNotFoundError(Exception):
    """Error cuando no se encuentra una conversación."""

    def __init__(self, conversation_id: str):
        super().__init__(f"Conversation not found: {conversation_id}")
        self.conversation_id = conversation_id


class TicketNotFoundError(Exception):
    """Error cuando no se encuentra un ticket."""

    def __init__(self, ticket_id: str):
        super().__init__(f"Ticket not found: {ticket_id}")
        self.ticket_id = ticket_id


class StepHandlerNotFoundError(Exception):
    """Error cuando no hay handler para un paso de la conversación."""

    def __init__(self, step):
        super().__init__(f"No handler found for step: {step}")
        self.step = step


class ApiError(Exception):
    """Error de API con código HTTP y tipo."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_type: str = "internal_error",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
