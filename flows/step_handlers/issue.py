"""Issue Handler - Collects the issue description."""

from flows.outcomes import StepOutcome
from models.responses import AssistantResponse, ResponseType
from models.states import ConversationState, ConversationStep, advance
from templates import prompts
from templates.messages import validation
from utils.text import clean_and_truncate, derive_title

from .base import StepHandler

MAX_ISSUE_LENGTH = 1000
MIN_ISSUE_LENGTH = 10
MAX_TITLE_LENGTH = 100
DEFAULT_TITLE = "Support Request"


class IssueHandler(StepHandler):
    """Handler for the 'collect_issue' step."""

    step = ConversationStep.COLLECT_ISSUE

    def handle(self, user_input: str, conversation: ConversationState) -> StepOutcome:
        datos = conversation.collected_data
        descripcion = clean_and_truncate(user_input, MAX_ISSUE_LENGTH)

        if len(descripcion) < MIN_ISSUE_LENGTH:
            return StepOutcome.retry(
                AssistantResponse(
                    type=ResponseType.QUESTION,
                    content=validation.issue_too_short,
                ),
                datos,
            )

        nuevos = datos.update(
            issue_description=descripcion,
            issue_title=derive_title(descripcion, MAX_TITLE_LENGTH, DEFAULT_TITLE),
        )
        return StepOutcome.advance(
            AssistantResponse(type=ResponseType.QUESTION, content=prompts.CLARIFY_DETAILS),
            nuevos,
            advance(self.step, user_input, nuevos),
        )
