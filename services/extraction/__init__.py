"""Extracción de datos estructurados desde texto libre."""

from .name_extractor import NameExtraction, NameExtractor, extract_name

__all__ = ["NameExtraction", "NameExtractor", "extract_name"]
