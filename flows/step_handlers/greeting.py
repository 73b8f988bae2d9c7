"""
Greeting Handler - Collects the user's name

Handles the GREETING step, including the name confirmation sub-dialogue:
a name pulled out of a sentence is staged and only committed once the
user confirms it.
"""

import logging
from typing import Optional

from flows.outcomes import StepOutcome
from models.responses import AssistantResponse, ResponseType
from models.states import CollectedData, ConversationState, ConversationStep, advance
from services.detection import ConfirmationDetector
from services.extraction import NameExtractor
from templates import prompts
from templates.messages import name as name_messages

from .base import StepHandler

logger = logging.getLogger(__name__)


class GreetingHandler(StepHandler):
    """
    Handler for the 'greeting' step.

    A pending staged name is resolved first: affirmative input commits
    it, negative input discards it. Any other input goes through the
    name extractor.
    """

    step = ConversationStep.GREETING

    def __init__(
        self,
        name_extractor: Optional[NameExtractor] = None,
        confirmation_detector: Optional[ConfirmationDetector] = None,
    ):
        self.name_extractor = name_extractor or NameExtractor()
        self.confirmation_detector = confirmation_detector or ConfirmationDetector()

    def handle(self, user_input: str, conversation: ConversationState) -> StepOutcome:
        datos = conversation.collected_data
        nombre_pendiente = datos.potential_name

        if nombre_pendiente:
            if self.confirmation_detector.is_affirmative(user_input):
                logger.debug("Staged name confirmed: %s", nombre_pendiente)
                return self._commit_name(nombre_pendiente, user_input, datos)
            if self.confirmation_detector.is_negative(user_input):
                logger.debug("Staged name rejected: %s", nombre_pendiente)
                return StepOutcome.retry(
                    AssistantResponse(
                        type=ResponseType.QUESTION,
                        content=name_messages.name_rejected,
                    ),
                    datos.clear_staged_name(),
                )

        extraccion = self.name_extractor.extract(user_input)

        if extraccion.needs_clarification:
            if extraccion.name and extraccion.is_sentence:
                return StepOutcome.retry(
                    AssistantResponse(
                        type=ResponseType.CLARIFICATION,
                        content=name_messages.confirm_staged_name(extraccion.name),
                        suggestions=list(prompts.CONFIRM_NAME_SUGGESTIONS),
                    ),
                    datos.stage_name(extraccion.name),
                )

            contenido = (
                name_messages.ask_name_plainly
                if extraccion.is_sentence
                else name_messages.name_too_short
            )
            return StepOutcome.retry(
                AssistantResponse(type=ResponseType.QUESTION, content=contenido),
                datos,
            )

        return self._commit_name(extraccion.name, user_input, datos)

    def _commit_name(
        self, name: str, user_input: str, datos: CollectedData
    ) -> StepOutcome:
        nuevos = datos.update(user_name=name, name_confirmation=None)
        return StepOutcome.advance(
            AssistantResponse(
                type=ResponseType.QUESTION,
                content=prompts.collect_issue(name),
            ),
            nuevos,
            advance(self.step, user_input, nuevos),
        )
