"""
Base Step Handler - Abstract Base Class for step handlers

Every conversation step with input to validate has one handler. Handlers
are pure: they read the conversation and return a StepOutcome, never
touching the conversation they were given.
"""

from abc import ABC, abstractmethod

from flows.outcomes import StepOutcome
from models.states import ConversationState, ConversationStep


class StepHandler(ABC):
    """
    Abstract base class for step handlers.

    Subclasses declare the step they own in `step` and implement
    `handle`.
    """

    step: ConversationStep

    def can_handle(self, step: ConversationStep) -> bool:
        """
        Determine if this handler can process the given step.

        Args:
            step: The current conversation step

        Returns:
            True if this handler owns the step
        """
        return step == self.step

    @abstractmethod
    def handle(self, user_input: str, conversation: ConversationState) -> StepOutcome:
        """
        Process one user input on this handler's step.

        Args:
            user_input: Raw text sent by the user
            conversation: Conversation snapshot, never mutated

        Returns:
            StepOutcome with the reply, the new collected data and the
            outcome kind
        """
