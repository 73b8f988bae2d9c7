"""
Middleware de FastAPI para correlation IDs y log de requests.

Cada request recibe un correlation ID (el del header X-Correlation-ID o
uno nuevo), que se devuelve en la respuesta y se agrega a todos los logs
emitidos mientras se procesa.
"""

import logging
import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from infrastructure.logging.structured_logger import (
    bind_conversation,
    clear_correlation_id,
    clear_request_context,
    configure_logging,
    set_correlation_id,
    set_request_context,
)

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Propaga el correlation ID y registra método, ruta, estado y duración."""

    CORRELATION_ID_HEADER = "X-Correlation-ID"
    RESPONSE_TIME_HEADER = "X-Response-Time-ms"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        cid = set_correlation_id(request.headers.get(self.CORRELATION_ID_HEADER))
        set_request_context(
            method=request.method,
            path=request.url.path,
            client_ip=self._client_ip(request),
        )
        inicio = time.monotonic()

        try:
            response = await call_next(request)
            duracion_ms = (time.monotonic() - inicio) * 1000

            response.headers[self.CORRELATION_ID_HEADER] = cid
            response.headers[self.RESPONSE_TIME_HEADER] = f"{duracion_ms:.2f}"

            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"({duracion_ms:.1f}ms)"
            )
            return response
        finally:
            clear_correlation_id()
            clear_request_context()
            bind_conversation(None)

    @staticmethod
    def _client_ip(request: Request) -> str:
        reenviado = request.headers.get("x-forwarded-for")
        if reenviado:
            return reenviado.split(",")[0].strip()
        if request.client:
            return request.client.host
        return "unknown"


def setup_logging_middleware(app: FastAPI, service_name: str) -> FastAPI:
    """
    Configura logging estructurado y registra el middleware.

    Args:
        app: Aplicación FastAPI
        service_name: Nombre del servicio para logs
    """
    configure_logging(service_name=service_name)
    app.add_middleware(CorrelationIdMiddleware)
    return app
