"""
Módulo de logging estructurado.

Proporciona logging en formato JSON con correlation IDs y el ID de la
conversación en curso.
"""

from .middleware import CorrelationIdMiddleware, setup_logging_middleware
from .structured_logger import (
    HumanReadableFormatter,
    StructuredFormatter,
    bind_conversation,
    clear_correlation_id,
    clear_request_context,
    configure_logging,
    get_correlation_id,
    get_logger,
    get_request_context,
    set_correlation_id,
    set_request_context,
)

__all__ = [
    # Configuration
    "configure_logging",
    "get_logger",
    "setup_logging_middleware",
    # Context management
    "bind_conversation",
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    "get_request_context",
    "set_request_context",
    "clear_request_context",
    # Formatters
    "StructuredFormatter",
    "HumanReadableFormatter",
    # Middleware
    "CorrelationIdMiddleware",
]
