"""Core domain components."""

from .exceptions import (
    ApiError,
    ConversationNotFoundError,
    RepositoryError,
    StepHandlerNotFoundError,
    TicketNotFoundError,
)

__all__ = [
    "ApiError",
    "ConversationNotFoundError",
    "RepositoryError",
    "StepHandlerNotFoundError",
    "TicketNotFoundError",
]
