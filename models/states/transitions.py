"""
Step machine of the ticket-intake conversation.

Defines the pure transition function between steps and the graph of
every step a single turn may leave the conversation on (advances, same
step retries, the final confirmation restart and the error sink).
"""

from typing import FrozenSet, Optional, Set

from .conversation import CollectedData, ConversationStep


# Steps that are never rested on: advancing into them resolves immediately
PASS_THROUGH_STEPS: FrozenSet[ConversationStep] = frozenset({
    ConversationStep.CONFIRM_CATEGORY,
})

_LINEAR_SUCCESSORS = {
    ConversationStep.GREETING: ConversationStep.COLLECT_ISSUE,
    ConversationStep.COLLECT_ISSUE: ConversationStep.CLARIFY_DETAILS,
    ConversationStep.CLARIFY_DETAILS: ConversationStep.SUGGEST_CATEGORY,
    ConversationStep.SUGGEST_CATEGORY: ConversationStep.CONFIRM_CATEGORY,
    ConversationStep.COLLECT_NAME: ConversationStep.FINAL_CONFIRMATION,
    ConversationStep.FINAL_CONFIRMATION: ConversationStep.TICKET_CREATED,
}


def next_step(
    current_step: ConversationStep,
    user_input: str,
    collected_data: Optional[CollectedData],
) -> ConversationStep:
    """
    Computes the successor of a step.

    Only CONFIRM_CATEGORY looks at its inputs: it branches to email
    collection when no email is known yet. Anything without a successor
    maps to ERROR.

    Args:
        current_step: Step being left
        user_input: Input of the current turn
        collected_data: Data collected so far (after this turn's updates)

    Returns:
        The next step
    """
    if current_step == ConversationStep.CONFIRM_CATEGORY:
        if collected_data is None or not collected_data.user_email:
            return ConversationStep.COLLECT_NAME
        return ConversationStep.FINAL_CONFIRMATION

    return _LINEAR_SUCCESSORS.get(current_step, ConversationStep.ERROR)


def advance(
    current_step: ConversationStep,
    user_input: str,
    collected_data: Optional[CollectedData],
) -> ConversationStep:
    """Applies next_step, resolving through pass-through steps."""
    paso = next_step(current_step, user_input, collected_data)
    while paso in PASS_THROUGH_STEPS:
        paso = next_step(paso, user_input, collected_data)
    return paso


# Step a turn starts on -> steps the same turn may end on
VALID_TRANSITIONS: dict[ConversationStep, FrozenSet[ConversationStep]] = {
    ConversationStep.GREETING: frozenset({
        ConversationStep.GREETING,           # Name missing or pending confirmation
        ConversationStep.COLLECT_ISSUE,
        ConversationStep.ERROR,
    }),
    ConversationStep.COLLECT_ISSUE: frozenset({
        ConversationStep.COLLECT_ISSUE,      # Description too short
        ConversationStep.CLARIFY_DETAILS,
        ConversationStep.ERROR,
    }),
    ConversationStep.CLARIFY_DETAILS: frozenset({
        ConversationStep.CLARIFY_DETAILS,    # Details too short
        ConversationStep.SUGGEST_CATEGORY,
        ConversationStep.ERROR,
    }),
    ConversationStep.SUGGEST_CATEGORY: frozenset({
        ConversationStep.COLLECT_NAME,       # Email still missing
        ConversationStep.FINAL_CONFIRMATION,
        ConversationStep.ERROR,
    }),
    ConversationStep.CONFIRM_CATEGORY: frozenset({
        ConversationStep.COLLECT_NAME,
        ConversationStep.FINAL_CONFIRMATION,
        ConversationStep.ERROR,
    }),
    ConversationStep.COLLECT_NAME: frozenset({
        ConversationStep.COLLECT_NAME,       # Invalid email
        ConversationStep.FINAL_CONFIRMATION,
        ConversationStep.ERROR,
    }),
    ConversationStep.FINAL_CONFIRMATION: frozenset({
        ConversationStep.TICKET_CREATED,
        ConversationStep.GREETING,           # Declined, start over
        ConversationStep.ERROR,
    }),
    ConversationStep.TICKET_CREATED: frozenset({
        ConversationStep.ERROR,
    }),
    ConversationStep.ERROR: frozenset({
        ConversationStep.ERROR,
    }),
}


def can_transition(
    current_step: ConversationStep,
    target_step: ConversationStep,
) -> bool:
    """Checks whether a turn starting on current_step may end on target_step."""
    return target_step in VALID_TRANSITIONS.get(current_step, frozenset())


def get_valid_transitions(current_step: ConversationStep) -> Set[ConversationStep]:
    """Returns every step a turn starting on current_step may end on."""
    return set(VALID_TRANSITIONS.get(current_step, frozenset()))


def validate_transition_path(
    path: list[ConversationStep],
) -> tuple[bool, str]:
    """
    Validates a sequence of steps, one per turn.

    Args:
        path: Steps in the order the conversation visited them

    Returns:
        Tuple (is_valid, error_message)
    """
    if not path:
        return False, "The path cannot be empty"

    for i in range(len(path) - 1):
        actual = path[i]
        siguiente = path[i + 1]

        if not can_transition(actual, siguiente):
            return False, (
                f"Invalid transition at turn {i + 1}: "
                f"{actual.value} -> {siguiente.value}"
            )

    return True, ""
