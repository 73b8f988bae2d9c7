"""
Logging estructurado con JSON, correlation IDs y contexto de conversación.

Los formatters agregan automáticamente a cada línea:
- El correlation ID de la request en curso
- El contexto de la request (método, ruta, IP)
- El ID de conversación o ticket que se está procesando
"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from config.configuration import configuration

# Context variables para tracing
correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
request_context: ContextVar[Optional[Dict[str, Any]]] = ContextVar(
    "request_context", default=None
)
conversation_id: ContextVar[Optional[str]] = ContextVar("conversation_id", default=None)

# Atributos propios de LogRecord; el resto son campos `extra`
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def get_correlation_id() -> Optional[str]:
    """Obtiene el correlation ID del contexto actual."""
    return correlation_id.get()


def set_correlation_id(cid: Optional[str] = None) -> str:
    """
    Establece un correlation ID en el contexto.

    Args:
        cid: ID existente o None para generar uno nuevo

    Returns:
        El correlation ID establecido
    """
    cid = cid or str(uuid.uuid4())
    correlation_id.set(cid)
    return cid


def clear_correlation_id() -> None:
    correlation_id.set(None)


def get_request_context() -> Dict[str, Any]:
    """Copia del contexto de la request actual."""
    return dict(request_context.get() or {})


def set_request_context(**kwargs) -> None:
    """Agrega pares clave-valor al contexto de la request (omite None)."""
    actual = get_request_context()
    actual.update({k: v for k, v in kwargs.items() if v is not None})
    request_context.set(actual)


def clear_request_context() -> None:
    request_context.set(None)


def bind_conversation(cid: Optional[str]) -> None:
    """Asocia los logs siguientes a una conversación."""
    conversation_id.set(cid)


class StructuredFormatter(logging.Formatter):
    """
    Formatter que produce una línea JSON por registro.

    Campos: timestamp, level, logger, message, service, correlation_id,
    conversation_id, context, location, extra y exception.
    """

    def __init__(self, service_name: Optional[str] = None):
        super().__init__()
        self.service_name = service_name or configuration.service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
        }

        cid = get_correlation_id()
        if cid:
            log_data["correlation_id"] = cid

        conversacion = conversation_id.get()
        if conversacion:
            log_data["conversation_id"] = conversacion

        contexto = get_request_context()
        if contexto:
            log_data["context"] = contexto

        log_data["location"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES
        }
        if extra:
            log_data["extra"] = extra

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Formatter legible para desarrollo local."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, timezone.utc).strftime(
            "%Y-%m-%d %H:%M:%S"
        )

        if self.use_colors:
            color = self.COLORS.get(record.levelname, "")
            level = f"{color}{record.levelname:8}{self.RESET}"
        else:
            level = f"{record.levelname:8}"

        cid = get_correlation_id()
        prefijo = f"[{cid[:8]}] " if cid else ""
        conversacion = conversation_id.get()
        if conversacion:
            prefijo += f"<{conversacion[:8]}> "

        linea = f"{timestamp} {level} {prefijo}{record.name}: {record.getMessage()}"

        contexto = get_request_context()
        if contexto:
            linea += " | " + " | ".join(f"{k}={v}" for k, v in contexto.items())

        if record.exc_info:
            linea += f"\n{self.formatException(record.exc_info)}"

        return linea


def configure_logging(
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
    service_name: Optional[str] = None,
) -> None:
    """
    Configura el logging del proceso.

    Args:
        level: Nivel de logging; por defecto LOG_LEVEL de la configuración
        json_output: True para JSON, False para texto; por defecto según LOG_FORMAT
        service_name: Nombre del servicio en los logs
    """
    nivel = (level or configuration.log_level).upper()
    if json_output is None:
        json_output = configuration.log_format.lower() == "json"

    formatter: logging.Formatter
    if json_output:
        formatter = StructuredFormatter(service_name=service_name)
    else:
        formatter = HumanReadableFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, nivel, logging.INFO))
    for existente in root_logger.handlers[:]:
        root_logger.removeHandler(existente)
    root_logger.addHandler(handler)

    # Loggers de terceros
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Obtiene un logger por nombre (usualmente __name__)."""
    return logging.getLogger(name)
