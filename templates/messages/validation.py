"""Mensajes de validación para reintentos en el mismo paso."""

# ==================== MENSAJES ====================

issue_too_short = "Please provide more details about your issue (at least 10 characters)."

details_too_short = (
    'Please provide some additional details (at least 5 characters), or type "skip" '
    "if you have nothing to add."
)

invalid_email = "Please provide a valid email address (e.g., john@example.com)."
