"""Utilidades compartidas."""

from .text import (
    clean_and_truncate,
    collapse_whitespace,
    derive_title,
    normalize_for_matching,
)

__all__ = [
    "clean_and_truncate",
    "collapse_whitespace",
    "derive_title",
    "normalize_for_matching",
]
