"""Plantillas de texto del asistente."""
