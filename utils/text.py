"""Utilidades para normalización de texto libre."""

import re

_ESPACIOS = re.compile(r"\s+")


def collapse_whitespace(texto: str) -> str:
    """
    Recorta extremos y colapsa secuencias de espacios en uno solo.

    Args:
        texto: Texto a normalizar

    Returns:
        Texto normalizado
    """
    return _ESPACIOS.sub(" ", (texto or "").strip())


def clean_and_truncate(texto: str, limite: int) -> str:
    """Colapsa espacios y trunca al límite indicado."""
    return collapse_whitespace(texto)[:limite]


def normalize_for_matching(texto: str) -> str:
    """Minúsculas y sin espacios en los extremos."""
    return (texto or "").lower().strip()


def derive_title(descripcion: str, limite: int = 100, fallback: str = "Support Request") -> str:
    """
    Deriva un título desde la descripción del problema.

    Usa el texto anterior al primer punto, truncado al límite.
    """
    titulo = descripcion.split(".")[0][:limite]
    return titulo or fallback
