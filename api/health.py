"""
Health check endpoint.
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from api.dependencies import get_redis_client
from config.configuration import configuration
from infrastructure.persistence import RedisClient
from models.schemas import HealthResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
async def health_check(redis_client: RedisClient = Depends(get_redis_client)) -> HealthResponse:
    """
    Health check endpoint.

    El servicio sigue sano sin Redis (modo fallback en memoria); el campo
    `redis` indica cuál de los dos está en uso.
    """
    redis_status = "connected" if await redis_client.ping() else "fallback"
    if redis_status == "fallback":
        logger.warning("⚠️ Health check: Redis no disponible, usando memoria local")

    return HealthResponse(
        status="healthy",
        service=configuration.service_name,
        timestamp=datetime.now(timezone.utc).isoformat(),
        redis=redis_status,
    )
