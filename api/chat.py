"""
Chat endpoints: conversaciones de creación de tickets.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from api.dependencies import get_conversation_service
from models.schemas import ApiResponse, SendMessageRequest, StartConversationRequest
from services.conversation_service import ConversationService

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("/conversations", status_code=status.HTTP_201_CREATED)
async def start_conversation(
    request: Optional[StartConversationRequest] = Body(default=None),
    service: ConversationService = Depends(get_conversation_service),
) -> dict:
    """Inicia una conversación y devuelve el estado con el saludo."""
    conversacion = await service.start_conversation(
        request.conversation_id if request else None
    )
    return ApiResponse.ok(conversacion.to_dict(), message="Conversation started")


@router.post("/message")
async def send_message(
    request: SendMessageRequest,
    service: ConversationService = Depends(get_conversation_service),
) -> dict:
    """
    Procesa un mensaje del usuario.

    Usa `conversationState` si viene en el body; si no, el estado guardado.
    """
    resultado = await service.send_message(
        request.input.conversation_id,
        request.input.message,
        request.conversation_state,
    )
    return ApiResponse.ok(resultado.to_dict())


@router.get("/conversations/{conversation_id}")
async def get_conversation(
    conversation_id: str,
    service: ConversationService = Depends(get_conversation_service),
) -> dict:
    """Obtiene una conversación por ID (404 si no existe)."""
    conversacion = await service.get_conversation(conversation_id)
    return ApiResponse.ok(conversacion.to_dict())
