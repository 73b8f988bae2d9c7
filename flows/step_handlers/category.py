"""
Category Handler - Confirms or corrects the suggested category

Always advances. Whether the conversation moves on to email collection or
straight to the final summary is decided by the step machine.
"""

from typing import Optional

from flows.outcomes import StepOutcome
from models.responses import AssistantResponse, ResponseType
from models.states import CollectedData, ConversationState, ConversationStep, advance
from services.detection import GENERAL_CATEGORY, CategoryDetector, ConfirmationDetector
from templates import prompts

from .base import StepHandler


def final_confirmation_response(datos: CollectedData) -> AssistantResponse:
    """Summary shown before creating the ticket."""
    return AssistantResponse(
        type=ResponseType.CONFIRMATION,
        content=prompts.final_confirmation(
            user_name=datos.user_name,
            issue_description=datos.issue_description,
            category=datos.confirmed_category,
            user_email=datos.user_email,
        ),
        suggestions=list(prompts.FINAL_CONFIRMATION_SUGGESTIONS),
    )


class CategoryHandler(StepHandler):
    """Handler for the 'suggest_category' step."""

    step = ConversationStep.SUGGEST_CATEGORY

    def __init__(
        self,
        category_detector: Optional[CategoryDetector] = None,
        confirmation_detector: Optional[ConfirmationDetector] = None,
    ):
        self.category_detector = category_detector or CategoryDetector()
        self.confirmation_detector = confirmation_detector or ConfirmationDetector()

    def handle(self, user_input: str, conversation: ConversationState) -> StepOutcome:
        datos = conversation.collected_data

        if self.confirmation_detector.is_affirmative(user_input):
            confirmada = datos.suggested_category
        elif self.confirmation_detector.is_negative(user_input):
            confirmada = GENERAL_CATEGORY
        else:
            # The user may have named another category
            confirmada = self.category_detector.detect(user_input)

        nuevos = datos.update(confirmed_category=confirmada)
        siguiente = advance(self.step, user_input, nuevos)

        if siguiente == ConversationStep.COLLECT_NAME:
            respuesta = AssistantResponse(
                type=ResponseType.QUESTION,
                content=prompts.COLLECT_EMAIL,
            )
        else:
            respuesta = final_confirmation_response(nuevos)

        return StepOutcome.advance(respuesta, nuevos, siguiente)
