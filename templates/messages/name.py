"""Mensajes del sub-diálogo de nombre."""

ask_name_plainly = "I'd love to help you! Could you please just tell me your name first?"

name_too_short = "Please provide your name (at least 2 characters)."

name_rejected = "No problem! Please tell me your name."


def confirm_staged_name(name: str) -> str:
    """Pide confirmar el nombre extraído de una oración."""
    return (
        f'I think I heard your name is "{name}". Is that correct? '
        "If not, please just tell me your name."
    )
