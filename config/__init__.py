"""Configuración del servicio."""

from .configuration import ServiceConfiguration, configuration

__all__ = ["ServiceConfiguration", "configuration"]
