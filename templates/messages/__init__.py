"""Mensajes cortos del asistente agrupados por tema."""
