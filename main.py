"""
Support Intake Service - Asistente de creación de tickets de soporte
Conduce al usuario por una conversación guiada y crea el ticket al confirmar
"""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import chat_router, health_router, stats_router, tickets_router
from api.dependencies import get_redis_client
from config.configuration import configuration
from core.exceptions import ApiError, ConversationNotFoundError, TicketNotFoundError
from infrastructure.logging import setup_logging_middleware
from models.schemas import ApiResponse, ValidationErrorData, ValidationErrorDetail

logger = logging.getLogger(__name__)

# Inicializar FastAPI
app = FastAPI(
    title="Support Intake Service",
    description="Asistente conversacional para la creación de tickets de soporte",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=configuration.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
setup_logging_middleware(app, configuration.service_name)

app.include_router(health_router)
app.include_router(chat_router)
app.include_router(tickets_router)
app.include_router(stats_router)


# Manejadores de excepciones
@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(
        status_code=exc.status_code,
        content=ApiResponse.fail(exc.message, data=exc.details),
    )


@app.exception_handler(ConversationNotFoundError)
async def conversation_not_found_handler(request: Request, exc: ConversationNotFoundError):
    return JSONResponse(status_code=404, content=ApiResponse.fail("Conversation not found"))


@app.exception_handler(TicketNotFoundError)
async def ticket_not_found_handler(request: Request, exc: TicketNotFoundError):
    return JSONResponse(status_code=404, content=ApiResponse.fail("Ticket not found"))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Errores de validación del request: 400 con la lista de campos."""
    errores = [
        ValidationErrorDetail(
            field=".".join(str(parte) for parte in error["loc"] if parte != "body"),
            message=error["msg"],
        )
        for error in exc.errors()
    ]
    logger.warning(f"⚠️ Request inválido {request.method} {request.url.path}: {len(errores)} errores")
    return JSONResponse(
        status_code=400,
        content=ApiResponse.fail(
            "Validation failed",
            data=ValidationErrorData(errors=errores).model_dump(by_alias=True),
        ),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Manejador global de excepciones no manejadas"""
    logger.error(
        f"Unhandled exception | "
        f"Exception: {str(exc)} | "
        f"Path: {request.url.path} | "
        f"Method: {request.method}"
    )
    return JSONResponse(status_code=500, content=ApiResponse.fail("Internal server error"))


@app.on_event("startup")
async def startup_event():
    """Inicializar conexiones al arrancar el servicio"""
    logger.info("🚀 Iniciando Support Intake Service...")
    await get_redis_client().connect()
    logger.info("✅ Support Intake Service listo")


@app.on_event("shutdown")
async def shutdown_event():
    """Limpiar conexiones al detener el servicio"""
    logger.info("🔴 Deteniendo Support Intake Service...")
    await get_redis_client().disconnect()
    logger.info("✅ Conexiones cerradas")


if __name__ == "__main__":
    config = {
        "app": "main:app",
        "host": configuration.server_host,
        "port": configuration.server_port,
        "reload": False,
        "log_level": configuration.log_level.lower(),
    }
    uvicorn.run(**config)
