"""Dialogue engine: step handlers and turn processing."""

from .outcomes import OutcomeKind, StepOutcome
from .turn_processor import apply_outcome, process_turn

__all__ = ["OutcomeKind", "StepOutcome", "apply_outcome", "process_turn"]
