"""Synchronous driver that executes selector effects against git."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Sequence
from typing import Protocol

from branchpick.errors import CheckoutError, DestructiveOverwriteError, StashError
from branchpick.matching.fuzzy_filter import DEFAULT_THRESHOLD
from branchpick.models import BranchRef, CheckoutIntent
from branchpick.selector.state import (
    CheckoutConflicted,
    CheckoutFailed,
    CheckoutSucceeded,
    Done,
    Effect,
    RunCheckout,
    RunStash,
    SelectorEvent,
    SelectorOutcome,
    SelectorState,
    StashFailed,
    StashSucceeded,
    start,
    step,
)

logger = py_logging.getLogger(__name__)


class CheckoutOperations(Protocol):
    def checkout(self, intent: CheckoutIntent) -> None: ...

    def stash(self) -> None: ...


class SelectorSession:
    def __init__(
        self,
        candidates: Sequence[BranchRef],
        operations: CheckoutOperations,
        *,
        force: bool = False,
        remote: str = "origin",
        threshold: int = DEFAULT_THRESHOLD,
    ) -> None:
        self.operations = operations
        self.state: SelectorState = start(candidates, force=force, remote=remote, threshold=threshold)

    @property
    def done(self) -> bool:
        return isinstance(self.state, Done)

    @property
    def outcome(self) -> SelectorOutcome | None:
        if isinstance(self.state, Done):
            return self.state.outcome
        return None

    def dispatch(self, event: SelectorEvent) -> SelectorState:
        """Apply event, then run effects until the machine is waiting on input again."""
        transition = step(self.state, event)
        self.state = transition.state
        effect = transition.effect
        while effect is not None:
            result = self._perform(effect)
            transition = step(self.state, result)
            self.state = transition.state
            effect = transition.effect
        return self.state

    def _perform(self, effect: Effect) -> SelectorEvent:
        if isinstance(effect, RunCheckout):
            intent = effect.intent
            logger.debug("Selector checkout branch=%s force=%s", intent.branch.name, intent.force)
            try:
                self.operations.checkout(intent)
            except DestructiveOverwriteError:
                return CheckoutConflicted(intent)
            except CheckoutError as exc:
                return CheckoutFailed(intent, str(exc))
            return CheckoutSucceeded(intent)
        if isinstance(effect, RunStash):
            logger.debug("Selector stashing local changes")
            try:
                self.operations.stash()
            except StashError as exc:
                return StashFailed(str(exc))
            return StashSucceeded()
        raise TypeError(f"Unsupported selector effect: {effect!r}")
