"""Interactive selector as a pure state machine.

``step(state, event)`` never touches git. It returns the next state plus, at
most, one effect descriptor (``RunCheckout`` / ``RunStash``) for the caller to
execute; the caller reports the effect result back as another event.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

from branchpick.matching.fuzzy_filter import DEFAULT_THRESHOLD, fuzzy_filter
from branchpick.models import BranchRef, CheckoutIntent

CONFLICT_OPTIONS = ("Stash changes and retry", "Abort checkout")
STASH_AND_RETRY = 0
ABORT = 1


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    CANCELLED = "cancelled"


class ConflictPhase(str, Enum):
    CHOOSING = "choosing"
    STASHING = "stashing"
    RETRYING = "retrying"


@dataclass(frozen=True)
class SelectorOutcome:
    status: OutcomeStatus
    branch: str = ""
    message: str = ""


# States


@dataclass(frozen=True)
class Browsing:
    candidates: tuple[BranchRef, ...]
    filter_query: str = ""
    visible: tuple[int, ...] = ()
    cursor: int = 0
    force: bool = False
    remote: str = "origin"
    threshold: int = DEFAULT_THRESHOLD
    in_flight: CheckoutIntent | None = None

    def highlighted(self) -> BranchRef | None:
        if not self.visible:
            return None
        return self.candidates[self.visible[self.cursor]]


@dataclass(frozen=True)
class ConflictPrompt:
    intent: CheckoutIntent
    cursor: int = STASH_AND_RETRY
    phase: ConflictPhase = ConflictPhase.CHOOSING


@dataclass(frozen=True)
class Done:
    outcome: SelectorOutcome


SelectorState = Browsing | ConflictPrompt | Done


# Events


@dataclass(frozen=True)
class TypeChar:
    char: str


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class MoveUp:
    pass


@dataclass(frozen=True)
class MoveDown:
    pass


@dataclass(frozen=True)
class Confirm:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class CheckoutSucceeded:
    intent: CheckoutIntent


@dataclass(frozen=True)
class CheckoutConflicted:
    intent: CheckoutIntent


@dataclass(frozen=True)
class CheckoutFailed:
    intent: CheckoutIntent
    message: str


@dataclass(frozen=True)
class StashSucceeded:
    pass


@dataclass(frozen=True)
class StashFailed:
    message: str


KeyEvent = TypeChar | Backspace | MoveUp | MoveDown | Confirm | Cancel
ResultEvent = (
    CheckoutSucceeded | CheckoutConflicted | CheckoutFailed | StashSucceeded | StashFailed
)
SelectorEvent = KeyEvent | ResultEvent


# Effects


@dataclass(frozen=True)
class RunCheckout:
    intent: CheckoutIntent


@dataclass(frozen=True)
class RunStash:
    pass


Effect = RunCheckout | RunStash


@dataclass(frozen=True)
class Transition:
    state: SelectorState
    effect: Effect | None = None


_NAMED_KEYS: dict[str, KeyEvent] = {
    "up": MoveUp(),
    "down": MoveDown(),
    "k": MoveUp(),
    "j": MoveDown(),
    "enter": Confirm(),
    "backspace": Backspace(),
    "escape": Cancel(),
    "ctrl+c": Cancel(),
    "q": Cancel(),
}


def key_to_event(key: str, character: str | None = None) -> KeyEvent | None:
    """Map a terminal key name (``up``, ``enter``, ``a`` ...) to a selector event."""
    event = _NAMED_KEYS.get(key)
    if event is not None:
        return event
    if character and len(character) == 1 and character.isprintable():
        return TypeChar(character)
    return None


def start(
    candidates: Sequence[BranchRef],
    *,
    force: bool = False,
    remote: str = "origin",
    threshold: int = DEFAULT_THRESHOLD,
) -> Browsing:
    refs = tuple(candidates)
    return Browsing(
        candidates=refs,
        visible=tuple(range(len(refs))),
        force=force,
        remote=remote,
        threshold=threshold,
    )


def _refilter(state: Browsing, query: str) -> Browsing:
    names = [ref.name for ref in state.candidates]
    visible = tuple(fuzzy_filter(names, query, state.threshold))
    cursor = state.cursor if state.cursor < len(visible) else 0
    return replace(state, filter_query=query, visible=visible, cursor=cursor)


def _done(status: OutcomeStatus, intent: CheckoutIntent | None = None, message: str = "") -> Done:
    branch = intent.branch.name if intent is not None else ""
    return Done(SelectorOutcome(status=status, branch=branch, message=message))


def _step_browsing(state: Browsing, event: SelectorEvent) -> Transition:
    if state.in_flight is not None:
        if isinstance(event, CheckoutSucceeded):
            return Transition(_done(OutcomeStatus.SUCCESS, event.intent))
        if isinstance(event, CheckoutConflicted):
            if event.intent.force:
                message = "Forced checkout was refused by git."
                return Transition(_done(OutcomeStatus.ERROR, event.intent, message))
            return Transition(ConflictPrompt(intent=event.intent))
        if isinstance(event, CheckoutFailed):
            return Transition(_done(OutcomeStatus.ERROR, event.intent, event.message))
        return Transition(state)

    if isinstance(event, TypeChar):
        return Transition(_refilter(state, state.filter_query + event.char))
    if isinstance(event, Backspace):
        if not state.filter_query:
            return Transition(state)
        return Transition(_refilter(state, state.filter_query[:-1]))
    if isinstance(event, MoveUp):
        if state.cursor > 0:
            return Transition(replace(state, cursor=state.cursor - 1))
        return Transition(state)
    if isinstance(event, MoveDown):
        if state.cursor < len(state.visible) - 1:
            return Transition(replace(state, cursor=state.cursor + 1))
        return Transition(state)
    if isinstance(event, Cancel):
        return Transition(_done(OutcomeStatus.CANCELLED))
    if isinstance(event, Confirm):
        branch = state.highlighted()
        if branch is None:
            return Transition(state)
        intent = CheckoutIntent(branch=branch, force=state.force, remote=state.remote)
        return Transition(replace(state, in_flight=intent), RunCheckout(intent))
    return Transition(state)


def _step_conflict(state: ConflictPrompt, event: SelectorEvent) -> Transition:
    if state.phase is ConflictPhase.STASHING:
        if isinstance(event, StashSucceeded):
            return Transition(replace(state, phase=ConflictPhase.RETRYING), RunCheckout(state.intent))
        if isinstance(event, StashFailed):
            return Transition(_done(OutcomeStatus.ERROR, state.intent, event.message))
        return Transition(state)

    if state.phase is ConflictPhase.RETRYING:
        if isinstance(event, CheckoutSucceeded):
            return Transition(_done(OutcomeStatus.SUCCESS, state.intent))
        if isinstance(event, CheckoutConflicted):
            message = "Checkout still conflicts with local changes after stashing."
            return Transition(_done(OutcomeStatus.ERROR, state.intent, message))
        if isinstance(event, CheckoutFailed):
            return Transition(_done(OutcomeStatus.ERROR, state.intent, event.message))
        return Transition(state)

    if isinstance(event, (MoveUp, MoveDown)):
        cursor = ABORT if state.cursor == STASH_AND_RETRY else STASH_AND_RETRY
        return Transition(replace(state, cursor=cursor))
    if isinstance(event, Cancel):
        return Transition(_done(OutcomeStatus.CANCELLED, state.intent))
    if isinstance(event, Confirm):
        if state.cursor == ABORT:
            return Transition(_done(OutcomeStatus.CANCELLED, state.intent))
        return Transition(replace(state, phase=ConflictPhase.STASHING), RunStash())
    return Transition(state)


def step(state: SelectorState, event: SelectorEvent) -> Transition:
    if isinstance(state, Browsing):
        return _step_browsing(state, event)
    if isinstance(state, ConflictPrompt):
        return _step_conflict(state, event)
    return Transition(state)
