"""
Textos del asistente de creación de tickets.

Funciones puras: reciben fragmentos de los datos recolectados y
devuelven el texto a mostrar.
"""

from typing import Optional

from templates.categories import category_display_name

GREETING = (
    "Hi there! 👋 I'm here to help you create a support ticket. "
    "To get started, could you please tell me your name?"
)

CLARIFY_DETAILS = (
    "Thank you for that information. Could you provide any additional details "
    "that might help us understand the issue better? For example, when did this "
    "start happening, or what steps led to this issue?"
)

COLLECT_EMAIL = (
    "Great! To complete your support ticket, could you please provide your "
    "email address? This will help our support team get back to you."
)

ERROR = (
    "I apologize, but something went wrong. Let me try to help you in a "
    "different way. Could you please tell me what you were trying to do?"
)

INVALID_INPUT = "I didn't quite understand that. Could you please rephrase your response?"

RESTART_PREFIX = "Let's start over. "

# ==================== SUGERENCIAS ====================

CONFIRM_CATEGORY_SUGGESTIONS = ["Yes, that's correct", "No, different category"]
CONFIRM_NAME_SUGGESTIONS = ["Yes, that's correct", "No, my name is..."]
FINAL_CONFIRMATION_SUGGESTIONS = ["Yes, create the ticket", "No, let me modify something"]


def collect_issue(name: str) -> str:
    """Saluda por nombre y pide la descripción del problema."""
    return (
        f"Nice to meet you, {name}! Now, could you please describe the issue "
        "you're experiencing? Be as detailed as possible - this will help our "
        "support team assist you better."
    )


def suggest_category(category: str) -> str:
    """Propone la categoría detectada."""
    return (
        f"Based on your description, this seems like a "
        f"**{category_display_name(category)}** issue. Does this sound right to "
        "you? You can confirm this category or let me know if you think it "
        "should be categorized differently."
    )


def final_confirmation(
    user_name: str,
    issue_description: str,
    category: Optional[str],
    user_email: Optional[str] = None,
) -> str:
    """Resumen de los datos del ticket antes de crearlo."""
    return (
        "Perfect! Let me confirm the details for your support ticket:\n"
        "\n"
        f"**Name:** {user_name}\n"
        f"**Email:** {user_email or 'Not provided'}\n"
        f"**Issue:** {issue_description}\n"
        f"**Category:** {category_display_name(category)}\n"
        "\n"
        "Does everything look correct? If yes, I'll create your support ticket right away!"
    )


def ticket_created(
    ticket_id: str,
    status: Optional[str] = None,
    priority: Optional[str] = None,
) -> str:
    """Confirmación de ticket creado; estado y prioridad son opcionales."""
    lineas = f"**Ticket ID:** {ticket_id}\n"
    if status:
        lineas += f"**Status:** {status.replace('_', ' ').title()}\n"
    if priority:
        lineas += f"**Priority:** {priority.title()}\n"
    return (
        "✅ Great! Your support ticket has been created successfully.\n"
        "\n"
        + lineas
        + "\n"
        "Our support team will review your ticket and get back to you soon. "
        "You can reference this ticket ID in any future communications.\n"
        "\n"
        "Is there anything else I can help you with today?"
    )


def restart() -> str:
    """Reinicio tras rechazar la confirmación final."""
    return RESTART_PREFIX + GREETING
