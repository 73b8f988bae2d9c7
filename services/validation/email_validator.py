"""Validación estructural de emails."""

import re
from typing import Optional, Pattern

# Algo@algo.algo, sin espacios ni arrobas adicionales en cada parte
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(text: str) -> str:
    """Recorta y pasa a minúsculas."""
    return (text or "").strip().lower()


class EmailValidator:
    """
    Validador de emails por patrón.

    No es una validación RFC: solo exige local@dominio.tld.
    """

    def __init__(self, pattern: Pattern[str] = EMAIL_PATTERN):
        self._patron = pattern

    def validate(self, text: str) -> Optional[str]:
        """Retorna el email normalizado si es válido, None en caso contrario."""
        email = normalize_email(text)
        return email if self._patron.fullmatch(email) else None


_validador_por_defecto = EmailValidator()


def is_valid_email(text: str) -> bool:
    """Valida la forma de un email."""
    return _validador_por_defecto.validate(text) is not None


def parse_email(text: str) -> Optional[str]:
    """Retorna el email normalizado si es válido, None en caso contrario."""
    return _validador_por_defecto.validate(text)
