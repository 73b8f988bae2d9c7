"""Step handlers of the ticket-intake conversation."""

from .base import StepHandler
from .category import CategoryHandler
from .details import DetailsHandler
from .email import EmailHandler
from .final_confirmation import FinalConfirmationHandler
from .greeting import GreetingHandler
from .issue import IssueHandler
from .registry import HandlerRegistry, build_default_registry

__all__ = [
    "StepHandler",
    "GreetingHandler",
    "IssueHandler",
    "DetailsHandler",
    "CategoryHandler",
    "EmailHandler",
    "FinalConfirmationHandler",
    "HandlerRegistry",
    "build_default_registry",
]
