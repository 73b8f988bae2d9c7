"""Validadores de entrada."""

from .email_validator import EmailValidator, is_valid_email, normalize_email, parse_email

__all__ = ["EmailValidator", "is_valid_email", "normalize_email", "parse_email"]
