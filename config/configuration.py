"""
Configuración del servicio de tickets de soporte

Este módulo centraliza las variables de configuración del asistente de
creación de tickets. Utiliza pydantic-settings para validación y manejo de
variables de entorno, con soporte para archivos .env.

Variables de entorno soportadas:
- LOG_LEVEL: Nivel de logging (DEBUG, INFO, WARNING, ERROR). Default: INFO
- LOG_FORMAT: Formato de logs (json | text). Default: json
- SERVICE_NAME: Nombre del servicio en los logs. Default: "support-intake"
- REDIS_URL: URL de Redis para conversaciones, tickets y eventos
- CONVERSATION_TTL_SECONDS: TTL de una conversación en Redis. Default: 604800
- TICKET_TTL_SECONDS: TTL de un ticket en Redis. Default: sin expiración
- SERVER_HOST / SERVER_PORT: Dirección del servidor HTTP
- CORS_ORIGINS: Orígenes permitidos, separados por coma. Default: "*"
- DEFAULT_TICKET_PRIORITY: Prioridad de tickets auto-creados. Default: medium
- EVENTS_CHANNEL_PREFIX: Prefijo de canales pub/sub. Default: "support"
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceConfiguration(BaseSettings):
    """
    Configuración centralizada del servicio.

    Maneja todas las variables necesarias para el funcionamiento del
    servicio, con validación de tipos y valores por defecto.
    """

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    service_name: str = "support-intake"

    # Redis Configuration
    redis_url: str = "redis://localhost:6379"
    conversation_ttl_seconds: int = 604800  # 7 días
    ticket_ttl_seconds: Optional[int] = None

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8000
    cors_origins: str = "*"

    # Tickets
    default_ticket_priority: str = "medium"

    # Events
    events_channel_prefix: str = "support"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Orígenes CORS como lista."""
        return [
            origen.strip() for origen in self.cors_origins.split(",") if origen.strip()
        ]


# Instancia global de configuración
configuration = ServiceConfiguration()
