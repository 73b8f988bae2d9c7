"""Léxicos compartidos por los clasificadores de texto del asistente.

Todas las colecciones son inmutables: los clasificadores las reciben por
inyección y nunca las modifican.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

# Orden de declaración = orden de desempate en la detección de categoría
CATEGORY_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "technical": (
            "bug", "error", "crash", "broken", "not working", "issue", "problem",
            "glitch", "freeze", "slow", "performance", "loading", "timeout",
            "connection", "server", "database", "api", "sync", "refresh",
        ),
        "billing": (
            "payment", "charge", "billing", "invoice", "refund", "subscription",
            "price", "cost", "credit card", "transaction", "money", "plan",
            "upgrade", "downgrade", "cancel", "receipt",
        ),
        "account": (
            "login", "password", "access", "account", "profile", "settings",
            "email", "username", "forgot", "reset", "security", "verification",
            "signin", "logout", "permissions",
        ),
        "feature_request": (
            "feature", "request", "suggestion", "improvement", "enhancement",
            "add", "new", "would like", "could you", "wish", "hope",
            "functionality", "option", "ability",
        ),
        "bug_report": (
            "bug", "error message", "unexpected", "wrong", "incorrect",
            "mistake", "fault", "defect", "glitch", "malfunction",
        ),
    }
)

AFFIRMATIVE_PHRASES: Tuple[str, ...] = (
    "yes", "yeah", "yep", "yup", "sure", "correct", "right", "exactly",
    "that's right", "sounds good", "looks good", "ok", "okay", "k",
    "absolutely", "definitely", "of course", "perfect", "great",
    "let's do it", "lets do it", "go ahead", "proceed", "continue",
    "create it", "create the ticket", "make the ticket", "submit it",
    "confirm", "approved", "good to go", "all good", "that works",
)

NEGATIVE_PHRASES: Tuple[str, ...] = (
    "no", "nope", "nah", "not", "wrong", "incorrect", "different",
    "that's wrong", "not right", "not correct", "not quite",
    "don't", "dont", "stop", "cancel", "abort", "nevermind",
    "never mind", "wait", "hold on", "not yet", "not ready",
)

# Marcadores de "oración" para el extractor de nombres (sobre texto en minúsculas)
SENTENCE_MARKERS: Tuple[str, ...] = (
    r"^(hi|hello|hey|good morning|good afternoon|good evening)",
    r"\b(my name is|i am|i'm|call me|name's)\s+",
    r"\b(and|but|so|because|i need|i want|please|help)",
    r"[.!?]",
)

# Patrones de extracción de nombre tras una frase de presentación
NAME_PATTERNS: Tuple[str, ...] = (
    r"(?:my name is|i am|i'm|call me|name's)\s+([a-zA-Z\s\-'\.]{2,30}?)(?:\s+and|\s+,|\s*\.|$)",
    r"^(?:hi|hello|hey),?\s+(?:my name is|i am|i'm)\s+([a-zA-Z\s\-'\.]{2,30}?)(?:\s+and|\s+,|\s*\.|$)",
)

SKIP_KEYWORD = "skip"
