"""Clasificadores de texto: categoría y confirmación."""

from .category_detector import GENERAL_CATEGORY, CategoryDetector, detect_category
from .confirmation_detector import ConfirmationDetector, is_affirmative, is_negative

__all__ = [
    "GENERAL_CATEGORY",
    "CategoryDetector",
    "detect_category",
    "ConfirmationDetector",
    "is_affirmative",
    "is_negative",
]
