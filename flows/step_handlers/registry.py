"""
Handler Registry - Dispatch of steps to their handlers

Keeps the list of step handlers and returns the one that owns the
current step.
"""

import logging
from typing import List, Optional

from core.exceptions import StepHandlerNotFoundError
from models.states import ConversationStep
from services.detection import CategoryDetector, ConfirmationDetector
from services.extraction import NameExtractor
from services.validation import EmailValidator

from .base import StepHandler
from .category import CategoryHandler
from .details import DetailsHandler
from .email import EmailHandler
from .final_confirmation import FinalConfirmationHandler
from .greeting import GreetingHandler
from .issue import IssueHandler

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Registry for step handlers with dispatch by step."""

    def __init__(self):
        """Initialize the handler registry with an empty handler list."""
        self._handlers: List[StepHandler] = []

    def register(self, handler: StepHandler) -> "HandlerRegistry":
        """
        Register a step handler.

        Args:
            handler: StepHandler instance to register

        Returns:
            The registry, to allow chaining
        """
        self._handlers.append(handler)
        logger.debug(f"Registered handler: {handler.__class__.__name__}")
        return self

    def resolve(self, step: ConversationStep) -> StepHandler:
        """
        Return the handler for a step.

        Raises:
            StepHandlerNotFoundError: If no registered handler owns the step
        """
        for handler in self._handlers:
            if handler.can_handle(step):
                logger.debug(
                    f"Dispatching step '{step.value}' to {handler.__class__.__name__}"
                )
                return handler

        raise StepHandlerNotFoundError(step.value)

    @property
    def steps(self) -> List[ConversationStep]:
        """Steps with a registered handler."""
        return [handler.step for handler in self._handlers]


def build_default_registry(
    category_detector: Optional[CategoryDetector] = None,
    confirmation_detector: Optional[ConfirmationDetector] = None,
    name_extractor: Optional[NameExtractor] = None,
    email_validator: Optional[EmailValidator] = None,
) -> HandlerRegistry:
    """
    Build a registry with every step handler.

    Classifiers can be injected to swap lexicons (tests, localization).
    """
    categorias = category_detector or CategoryDetector()
    confirmaciones = confirmation_detector or ConfirmationDetector()
    nombres = name_extractor or NameExtractor()

    return (
        HandlerRegistry()
        .register(GreetingHandler(nombres, confirmaciones))
        .register(IssueHandler())
        .register(DetailsHandler(categorias))
        .register(CategoryHandler(categorias, confirmaciones))
        .register(EmailHandler(email_validator))
        .register(FinalConfirmationHandler(confirmaciones))
    )
