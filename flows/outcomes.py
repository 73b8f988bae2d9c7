"""
Step outcomes.

A step handler never picks the next step by hand. It returns a tagged
outcome and the turn processor resolves it: only ADVANCE consults the
step machine, the other kinds map to a fixed step.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from models.responses import AssistantResponse
from models.states import CollectedData, ConversationStep


class OutcomeKind(str, Enum):
    """Kind of result a step handler produced."""

    ADVANCE = "advance"    # Input accepted, move along the step machine
    RETRY = "retry"        # Input rejected, stay on the same step
    RESTART = "restart"    # Back to GREETING, collected data kept
    FAIL = "fail"          # Step cannot be handled, go to ERROR


@dataclass(frozen=True)
class StepOutcome:
    """
    Result of handling one turn on one step.

    Attributes:
        kind: Outcome tag
        response: Assistant reply for this turn
        collected_data: Collected data after this turn (a new instance)
        next_step: Target step, only meaningful for ADVANCE
        suggested_category: Category detected on this turn, if any
    """

    kind: OutcomeKind
    response: AssistantResponse
    collected_data: CollectedData
    next_step: Optional[ConversationStep] = None
    suggested_category: Optional[str] = None

    @classmethod
    def advance(
        cls,
        response: AssistantResponse,
        collected_data: CollectedData,
        next_step: ConversationStep,
        suggested_category: Optional[str] = None,
    ) -> "StepOutcome":
        return cls(
            kind=OutcomeKind.ADVANCE,
            response=response,
            collected_data=collected_data,
            next_step=next_step,
            suggested_category=suggested_category,
        )

    @classmethod
    def retry(cls, response: AssistantResponse, collected_data: CollectedData) -> "StepOutcome":
        return cls(kind=OutcomeKind.RETRY, response=response, collected_data=collected_data)

    @classmethod
    def restart(cls, response: AssistantResponse, collected_data: CollectedData) -> "StepOutcome":
        return cls(kind=OutcomeKind.RESTART, response=response, collected_data=collected_data)

    @classmethod
    def fail(cls, response: AssistantResponse, collected_data: CollectedData) -> "StepOutcome":
        return cls(kind=OutcomeKind.FAIL, response=response, collected_data=collected_data)

    def resolve_step(self, current_step: ConversationStep) -> ConversationStep:
        """Returns the step the conversation rests on after this outcome."""
        if self.kind == OutcomeKind.ADVANCE:
            return self.next_step or ConversationStep.ERROR
        if self.kind == OutcomeKind.RETRY:
            return current_step
        if self.kind == OutcomeKind.RESTART:
            return ConversationStep.GREETING
        return ConversationStep.ERROR
