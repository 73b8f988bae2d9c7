"""
Schema validado para el estado de la conversación usando Pydantic.

Este módulo define el modelo ConversationState que el motor de diálogo
recibe y devuelve en cada turno, junto con los datos recolectados.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def _utcnow() -> str:
    """Retorna timestamp ISO UTC actual."""
    return datetime.now(timezone.utc).isoformat()


class ConversationStep(str, Enum):
    """
    Pasos válidos de la conversación de creación de tickets.

    Flujo principal:
    greeting -> collect_issue -> clarify_details -> suggest_category ->
    confirm_category -> collect_name (email) -> final_confirmation ->
    ticket_created
    """

    GREETING = "greeting"
    # Se usa para pedir el email; el nombre se recoge en GREETING
    COLLECT_NAME = "collect_name"
    COLLECT_ISSUE = "collect_issue"
    CLARIFY_DETAILS = "clarify_details"
    SUGGEST_CATEGORY = "suggest_category"
    CONFIRM_CATEGORY = "confirm_category"
    FINAL_CONFIRMATION = "final_confirmation"

    # Estados especiales
    TICKET_CREATED = "ticket_created"
    ERROR = "error"


class MessageRole(str, Enum):
    """Rol del autor de un mensaje."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class CamelModel(BaseModel):
    """Base con alias camelCase para el contrato JSON del frontend."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ChatMessage(CamelModel):
    """Mensaje individual del historial de la conversación."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    role: MessageRole
    content: str
    timestamp: str = Field(default_factory=_utcnow)
    metadata: Optional[Dict[str, Any]] = None


class NameConfirmation(CamelModel):
    """Sub-estado de GREETING: nombre extraído pendiente de confirmación."""

    potential_name: str = Field(..., min_length=1)


class CollectedData(CamelModel):
    """Datos estructurados extraídos del texto libre a lo largo de los turnos."""

    user_name: Optional[str] = None
    user_email: Optional[str] = None
    issue_description: Optional[str] = None
    issue_title: Optional[str] = None
    suggested_category: Optional[str] = None
    confirmed_category: Optional[str] = None
    additional_details: List[str] = Field(default_factory=list)
    name_confirmation: Optional[NameConfirmation] = None

    @model_validator(mode="before")
    @classmethod
    def migrar_nombre_legacy(cls, datos: Any) -> Any:
        """Convierte el campo legacy `potentialName` al sub-estado explícito."""
        if isinstance(datos, dict):
            legacy = datos.get("potentialName", datos.get("potential_name"))
            if legacy and not datos.get("nameConfirmation") and not datos.get(
                "name_confirmation"
            ):
                datos = {
                    k: v
                    for k, v in datos.items()
                    if k not in ("potentialName", "potential_name")
                }
                datos["name_confirmation"] = {"potential_name": legacy}
        return datos

    @property
    def potential_name(self) -> Optional[str]:
        """Nombre en espera de confirmación, si existe."""
        if self.name_confirmation is None:
            return None
        return self.name_confirmation.potential_name

    def update(self, **kwargs) -> "CollectedData":
        """
        Actualiza campos de forma inmutable.

        Returns:
            Nueva instancia con los campos actualizados
        """
        datos = self.model_dump()
        datos.update(kwargs)
        return CollectedData(**datos)

    def stage_name(self, name: str) -> "CollectedData":
        """Guarda un nombre pendiente de confirmación."""
        return self.update(name_confirmation={"potential_name": name})

    def clear_staged_name(self) -> "CollectedData":
        """Elimina el nombre pendiente de confirmación."""
        return self.update(name_confirmation=None)

    def with_detail(self, detail: str) -> "CollectedData":
        """Agrega un detalle adicional al final de la lista."""
        return self.update(additional_details=[*self.additional_details, detail])


class ConversationState(CamelModel):
    """
    Modelo principal del estado de la conversación.

    El motor recibe una instancia y devuelve otra nueva; nunca modifica
    la instancia del llamador.
    """

    id: str = Field(..., min_length=1)
    current_step: ConversationStep = Field(default=ConversationStep.GREETING)
    collected_data: CollectedData = Field(default_factory=CollectedData)
    messages: List[ChatMessage] = Field(default_factory=list)
    is_complete: bool = False
    created_ticket_id: Optional[str] = None
    started_at: str = Field(default_factory=_utcnow)
    completed_at: Optional[str] = None

    def update(self, **kwargs) -> "ConversationState":
        """
        Actualiza campos del estado de forma inmutable.

        Returns:
            Nueva instancia con los campos actualizados
        """
        datos = self.model_dump()
        datos.update(kwargs)
        return ConversationState(**datos)

    def with_message(
        self,
        role: MessageRole,
        content: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ConversationState":
        """
        Agrega un mensaje al final del historial.

        Args:
            role: Autor del mensaje
            content: Texto del mensaje
            metadata: Metadata opcional (tipo de respuesta, sugerencias...)

        Returns:
            Nueva instancia con el mensaje agregado
        """
        mensaje = ChatMessage(role=role, content=content, metadata=metadata)
        historial = [m.model_dump() for m in self.messages]
        historial.append(mensaje.model_dump())
        return self.update(messages=historial)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convierte el modelo a diccionario JSON (claves camelCase).

        Returns:
            Dict con los datos de la conversación
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, datos: Dict[str, Any]) -> "ConversationState":
        """
        Crea una instancia desde un diccionario.

        Un paso desconocido se normaliza a ERROR.

        Args:
            datos: Diccionario con datos de la conversación

        Returns:
            Instancia de ConversationState
        """
        datos_normalizados = dict(datos)
        clave_paso = "currentStep" if "currentStep" in datos_normalizados else "current_step"
        paso_raw = datos_normalizados.get(clave_paso, ConversationStep.GREETING.value)
        try:
            paso = ConversationStep(paso_raw)
        except ValueError:
            paso = ConversationStep.ERROR
        datos_normalizados[clave_paso] = paso

        return cls.model_validate(datos_normalizados)
