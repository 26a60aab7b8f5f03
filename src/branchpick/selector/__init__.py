"""Interactive branch selector: pure state machine plus its effect driver."""

from .session import CheckoutOperations, SelectorSession
from .state import (
    CONFLICT_OPTIONS,
    Browsing,
    ConflictPhase,
    ConflictPrompt,
    Done,
    OutcomeStatus,
    SelectorOutcome,
    key_to_event,
    step,
)

__all__ = [
    "CONFLICT_OPTIONS",
    "Browsing",
    "CheckoutOperations",
    "ConflictPhase",
    "ConflictPrompt",
    "Done",
    "OutcomeStatus",
    "SelectorOutcome",
    "SelectorSession",
    "key_to_event",
    "step",
]
