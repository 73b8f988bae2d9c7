"""Nombres visibles de las categorías de ticket."""

from types import MappingProxyType
from typing import Mapping, Optional

UNKNOWN_CATEGORY_LABEL = "Unknown"

CATEGORY_DISPLAY_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "technical": "Technical Issue",
        "billing": "Billing & Payments",
        "account": "Account Management",
        "feature_request": "Feature Request",
        "bug_report": "Bug Report",
        "general": "General Inquiry",
        "other": "Other",
    }
)


def category_display_name(category: Optional[str]) -> str:
    """Retorna el nombre visible; categorías desconocidas -> "Unknown"."""
    valor = getattr(category, "value", category)
    return CATEGORY_DISPLAY_NAMES.get(valor, UNKNOWN_CATEGORY_LABEL)
