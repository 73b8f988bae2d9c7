"""
Category Detector.

Detecta la categoría de un ticket contando coincidencias de palabras
clave por categoría. Sin modelos externos: mismo texto, misma categoría.
"""

from typing import Mapping, Sequence

from config.lexicon import CATEGORY_KEYWORDS

GENERAL_CATEGORY = "general"


class CategoryDetector:
    """
    Detector de categoría basado en palabras clave.

    Las coincidencias son por subcadena sobre el texto en minúsculas. Gana
    la categoría con más coincidencias; en empate gana la declarada primero
    y sin coincidencias se devuelve "general".

    Example:
        >>> detector = CategoryDetector()
        >>> detector.detect("I can't login, forgot my password")
        'account'
    """

    def __init__(self, keywords: Mapping[str, Sequence[str]] = CATEGORY_KEYWORDS):
        self._keywords = keywords

    def count_matches(self, text: str) -> dict[str, int]:
        """Cuenta coincidencias por categoría, en orden de declaración."""
        texto = (text or "").lower()
        return {
            categoria: sum(1 for palabra in palabras if palabra in texto)
            for categoria, palabras in self._keywords.items()
        }

    def detect(self, text: str) -> str:
        """
        Detecta la categoría del texto.

        Args:
            text: Texto libre del usuario

        Returns:
            Valor de la categoría detectada
        """
        max_coincidencias = 0
        detectada = GENERAL_CATEGORY

        for categoria, coincidencias in self.count_matches(text).items():
            # Estrictamente mayor: el empate conserva la primera
            if coincidencias > max_coincidencias:
                max_coincidencias = coincidencias
                detectada = categoria

        return detectada


_detector_por_defecto = CategoryDetector()


def detect_category(text: str) -> str:
    """Detecta la categoría con el léxico por defecto."""
    return _detector_por_defecto.detect(text)
