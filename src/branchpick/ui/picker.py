"""Terminal branch picker driving the selector state machine."""

from __future__ import annotations

import logging as py_logging

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.logging import TextualHandler
from textual.widgets import Static

from branchpick.config import DEFAULT_MAX_VISIBLE
from branchpick.logging import redirect_console_logging
from branchpick.selector.session import SelectorSession
from branchpick.selector.state import (
    CONFLICT_OPTIONS,
    Browsing,
    ConflictPrompt,
    Done,
    OutcomeStatus,
    SelectorOutcome,
    SelectorState,
    key_to_event,
)

logger = py_logging.getLogger(__name__)

BROWSING_HELP = "↑/↓ or j/k to navigate, Enter to select, q to quit"
CONFLICT_HELP = "Press Enter to confirm, q or Esc to abort"


def render_browsing(state: Browsing, max_visible: int = DEFAULT_MAX_VISIBLE) -> Text:
    text = Text()
    text.append("Search: ", style="bold")
    text.append(state.filter_query)
    text.append("\n\n")

    window_start = max(0, state.cursor - max_visible + 1)
    window = state.visible[window_start : window_start + max_visible]
    for offset, candidate_index in enumerate(window):
        branch = state.candidates[candidate_index]
        selected = window_start + offset == state.cursor
        line = Text(("> " if selected else "  ") + branch.label())
        if selected:
            line.stylize("reverse")
        elif not branch.is_local:
            line.stylize("dim")
        if state.filter_query:
            line.highlight_words([state.filter_query], style="bold", case_sensitive=False)
        text.append_text(line)
        text.append("\n")

    if window_start + max_visible < len(state.visible):
        text.append("  (more branches not shown)\n", style="dim")
    if not state.visible:
        text.append("\nNo matching branches found\n", style="yellow")

    text.append(f"\n{BROWSING_HELP}", style="dim")
    return text


def render_conflict(state: ConflictPrompt) -> Text:
    text = Text()
    text.append("You have uncommitted changes that would be overwritten.\n", style="bold yellow")
    text.append(f"Branch: {state.intent.branch.name}\n")
    text.append("What would you like to do?\n\n")
    for index, choice in enumerate(CONFLICT_OPTIONS):
        marker = ">" if index == state.cursor else " "
        text.append(f"{marker} {choice}\n", style="reverse" if index == state.cursor else "")
    text.append(f"\n{CONFLICT_HELP}", style="dim")
    return text


def render_state(state: SelectorState, max_visible: int = DEFAULT_MAX_VISIBLE) -> Text:
    if isinstance(state, Browsing):
        return render_browsing(state, max_visible)
    if isinstance(state, ConflictPrompt):
        return render_conflict(state)
    return Text(state.outcome.message)


class BranchPickerApp(App[SelectorOutcome]):
    CSS = """
    #picker {
        padding: 0 1;
    }
    """

    def __init__(self, session: SelectorSession, *, max_visible: int = DEFAULT_MAX_VISIBLE) -> None:
        super().__init__()
        self.session = session
        self.max_visible = max_visible

    def compose(self) -> ComposeResult:
        yield Static(id="picker")

    def on_mount(self) -> None:
        self._redraw()

    def on_key(self, event: events.Key) -> None:
        selector_event = key_to_event(event.key, event.character)
        if selector_event is None:
            return
        event.stop()
        event.prevent_default()
        # git runs inline; no further input is handled until it returns
        state = self.session.dispatch(selector_event)
        if isinstance(state, Done):
            logger.debug("Picker finished status=%s", state.outcome.status.value)
            self.exit(state.outcome)
            return
        self._redraw()

    def _redraw(self) -> None:
        self.query_one("#picker", Static).update(render_state(self.session.state, self.max_visible))


def run_picker(session: SelectorSession, *, max_visible: int = DEFAULT_MAX_VISIBLE) -> SelectorOutcome:
    """Run the picker until the selector reaches a terminal outcome."""
    app = BranchPickerApp(session, max_visible=max_visible)
    # stderr records would be drawn over the picker; textual keeps them off screen
    with redirect_console_logging(TextualHandler()):
        outcome = app.run()
    if outcome is not None:
        return outcome
    if session.outcome is not None:
        return session.outcome
    return SelectorOutcome(status=OutcomeStatus.CANCELLED)
