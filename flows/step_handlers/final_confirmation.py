"""
Final Confirmation Handler

Affirmative input finishes the conversation and flags the turn for ticket
creation. Anything else restarts at GREETING keeping the collected data.
"""

from typing import Optional

from flows.outcomes import StepOutcome
from models.responses import AssistantResponse, ResponseType
from models.states import ConversationState, ConversationStep, advance
from services.detection import ConfirmationDetector
from templates import prompts
from templates.messages import tickets

from .base import StepHandler
from .issue import DEFAULT_TITLE


class FinalConfirmationHandler(StepHandler):
    """Handler for the 'final_confirmation' step."""

    step = ConversationStep.FINAL_CONFIRMATION

    def __init__(self, confirmation_detector: Optional[ConfirmationDetector] = None):
        self.confirmation_detector = confirmation_detector or ConfirmationDetector()

    def handle(self, user_input: str, conversation: ConversationState) -> StepOutcome:
        datos = conversation.collected_data

        if self.confirmation_detector.is_affirmative(user_input):
            nuevos = datos.update(issue_title=datos.issue_title or DEFAULT_TITLE)
            return StepOutcome.advance(
                AssistantResponse(
                    type=ResponseType.SUCCESS,
                    content=tickets.creating_ticket,
                    requires_input=False,
                    metadata={"shouldCreateTicket": True},
                ),
                nuevos,
                advance(self.step, user_input, nuevos),
            )

        return StepOutcome.restart(
            AssistantResponse(type=ResponseType.QUESTION, content=prompts.restart()),
            datos,
        )
