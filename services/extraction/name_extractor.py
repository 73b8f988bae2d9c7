"""
Name Extractor.

Extrae el nombre del usuario desde texto libre. Distingue entre una
respuesta directa ("John Smith") y una oración ("Hi, my name is John and
I need help"); en el segundo caso el nombre extraído queda pendiente de
confirmación.
"""

import re
from dataclasses import dataclass
from typing import Sequence

from config.lexicon import NAME_PATTERNS, SENTENCE_MARKERS
from utils.text import collapse_whitespace

_CARACTERES_NO_NOMBRE = re.compile(r"[^\w\s\-'.]")

MIN_NAME_LENGTH = 2
MAX_EXTRACTED_NAME_LENGTH = 30
MAX_DIRECT_NAME_LENGTH = 50
MAX_PLAIN_TOKENS = 3


@dataclass(frozen=True)
class NameExtraction:
    """
    Resultado de la extracción de nombre.

    Attributes:
        name: Nombre extraído ("" si no se pudo extraer)
        is_sentence: Si la entrada parece una oración
        needs_clarification: Si hay que confirmar o volver a pedir el nombre
    """

    name: str
    is_sentence: bool
    needs_clarification: bool


def _limpiar_nombre(texto: str) -> str:
    return re.sub(r"\s+", " ", _CARACTERES_NO_NOMBRE.sub("", texto))


class NameExtractor:
    """Extractor de nombres con marcadores y patrones inyectables."""

    def __init__(
        self,
        sentence_markers: Sequence[str] = SENTENCE_MARKERS,
        name_patterns: Sequence[str] = NAME_PATTERNS,
    ):
        self._marcadores = [re.compile(patron) for patron in sentence_markers]
        self._patrones = [re.compile(patron, re.IGNORECASE) for patron in name_patterns]

    def is_sentence(self, text: str) -> bool:
        """True si el texto tiene marcadores de oración o más de 3 palabras."""
        entrada = (text or "").strip()
        minusculas = entrada.lower()
        if any(marcador.search(minusculas) for marcador in self._marcadores):
            return True
        return len(entrada.split()) > MAX_PLAIN_TOKENS

    def extract(self, text: str) -> NameExtraction:
        """
        Extrae un nombre del texto.

        Args:
            text: Entrada cruda del usuario

        Returns:
            NameExtraction con el nombre y las banderas de clasificación
        """
        entrada = (text or "").strip()

        if self.is_sentence(entrada):
            for patron in self._patrones:
                coincidencia = patron.search(entrada)
                if not coincidencia:
                    continue
                nombre = _limpiar_nombre(coincidencia.group(1).strip())
                if MIN_NAME_LENGTH <= len(nombre) <= MAX_EXTRACTED_NAME_LENGTH:
                    return NameExtraction(
                        name=nombre, is_sentence=True, needs_clarification=True
                    )

            return NameExtraction(name="", is_sentence=True, needs_clarification=True)

        nombre = _limpiar_nombre(entrada)[:MAX_DIRECT_NAME_LENGTH]
        return NameExtraction(
            name=nombre,
            is_sentence=False,
            needs_clarification=len(nombre) < MIN_NAME_LENGTH,
        )


_extractor_por_defecto = NameExtractor()


def extract_name(text: str) -> NameExtraction:
    """Extrae un nombre con los patrones por defecto."""
    return _extractor_por_defecto.extract(text)
