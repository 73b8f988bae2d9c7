"""
Details Handler - Collects additional details and suggests a category

Accepts one more piece of free text (or "skip") and runs the category
detector over everything the user has described so far.
"""

from typing import Optional

from config.lexicon import SKIP_KEYWORD
from flows.outcomes import StepOutcome
from models.responses import AssistantResponse, ResponseType
from models.states import ConversationState, ConversationStep, advance
from services.detection import CategoryDetector
from templates import prompts
from templates.messages import validation
from utils.text import clean_and_truncate

from .base import StepHandler

MAX_DETAILS_LENGTH = 500
MIN_DETAILS_LENGTH = 5


class DetailsHandler(StepHandler):
    """Handler for the 'clarify_details' step."""

    step = ConversationStep.CLARIFY_DETAILS

    def __init__(self, category_detector: Optional[CategoryDetector] = None):
        self.category_detector = category_detector or CategoryDetector()

    def handle(self, user_input: str, conversation: ConversationState) -> StepOutcome:
        datos = conversation.collected_data
        detalle = clean_and_truncate(user_input, MAX_DETAILS_LENGTH)
        omitir = SKIP_KEYWORD in (user_input or "").lower()

        if len(detalle) < MIN_DETAILS_LENGTH and not omitir:
            return StepOutcome.retry(
                AssistantResponse(
                    type=ResponseType.QUESTION,
                    content=validation.details_too_short,
                ),
                datos,
            )

        if not omitir:
            datos = datos.with_detail(detalle)

        texto_completo = " ".join(
            [datos.issue_description or "", " ".join(datos.additional_details)]
        )
        categoria = self.category_detector.detect(texto_completo)
        nuevos = datos.update(suggested_category=categoria)

        return StepOutcome.advance(
            AssistantResponse(
                type=ResponseType.CATEGORY_SUGGESTION,
                content=prompts.suggest_category(categoria),
                suggestions=list(prompts.CONFIRM_CATEGORY_SUGGESTIONS),
            ),
            nuevos,
            advance(self.step, user_input, nuevos),
            suggested_category=categoria,
        )
