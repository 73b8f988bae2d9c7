"""Detección de respuestas afirmativas y negativas."""

from typing import Sequence

from config.lexicon import AFFIRMATIVE_PHRASES, NEGATIVE_PHRASES
from utils.text import normalize_for_matching


def _coincide(texto: str, frases: Sequence[str]) -> bool:
    entrada = normalize_for_matching(texto)
    if not entrada:
        return False
    return any(entrada == frase or frase in entrada for frase in frases)


class ConfirmationDetector:
    """
    Clasifica una respuesta como afirmativa o negativa.

    Ambas comprobaciones son independientes: una entrada puede coincidir
    con las dos listas. Los handlers evalúan siempre la afirmativa primero.
    """

    def __init__(
        self,
        affirmative_phrases: Sequence[str] = AFFIRMATIVE_PHRASES,
        negative_phrases: Sequence[str] = NEGATIVE_PHRASES,
    ):
        self._afirmativas = affirmative_phrases
        self._negativas = negative_phrases

    def is_affirmative(self, text: str) -> bool:
        return _coincide(text, self._afirmativas)

    def is_negative(self, text: str) -> bool:
        return _coincide(text, self._negativas)


_detector_por_defecto = ConfirmationDetector()


def is_affirmative(text: str) -> bool:
    """True si el texto es o contiene una frase afirmativa."""
    return _detector_por_defecto.is_affirmative(text)


def is_negative(text: str) -> bool:
    """True si el texto es o contiene una frase negativa."""
    return _detector_por_defecto.is_negative(text)
