"""Email Handler - Collects the contact email (runs on the COLLECT_NAME step)."""

from typing import Optional

from flows.outcomes import StepOutcome
from models.responses import AssistantResponse, ResponseType
from models.states import ConversationState, ConversationStep, advance
from services.validation import EmailValidator
from templates.messages import validation

from .base import StepHandler
from .category import final_confirmation_response


class EmailHandler(StepHandler):
    """Handler for the 'collect_name' step, used to ask for the email."""

    step = ConversationStep.COLLECT_NAME

    def __init__(self, email_validator: Optional[EmailValidator] = None):
        self.email_validator = email_validator or EmailValidator()

    def handle(self, user_input: str, conversation: ConversationState) -> StepOutcome:
        datos = conversation.collected_data
        email = self.email_validator.validate(user_input)

        if email is None:
            return StepOutcome.retry(
                AssistantResponse(
                    type=ResponseType.QUESTION,
                    content=validation.invalid_email,
                ),
                datos,
            )

        nuevos = datos.update(user_email=email)
        return StepOutcome.advance(
            final_confirmation_response(nuevos),
            nuevos,
            advance(self.step, user_input, nuevos),
        )
