"""End-to-end flow from a user pattern to a checked-out branch."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from branchpick.config import AppConfig
from branchpick.errors import (
    CheckoutError,
    DestructiveOverwriteError,
    NoBranchesError,
    NoMatchError,
)
from branchpick.matching.ranker import rank, score_candidates
from branchpick.models import BranchRef, CheckoutIntent, ScoredCandidate
from branchpick.policy import SingleWinner, decide
from branchpick.selector.session import SelectorSession
from branchpick.selector.state import OutcomeStatus, SelectorOutcome

logger = py_logging.getLogger(__name__)

PREVIOUS_BRANCH = "-"


class BranchSource(Protocol):
    def ensure_repository(self) -> None: ...

    def list_branches(self) -> list[BranchRef]: ...


class GitExecutor(Protocol):
    def checkout(self, intent: CheckoutIntent) -> None: ...

    def stash(self) -> None: ...

    def refresh_remotes(self) -> None: ...

    def create_branch(self, name: str, *, force: bool = False) -> None: ...

    def checkout_previous(self, *, force: bool = False) -> None: ...


SelectorRunner = Callable[[SelectorSession], SelectorOutcome]


@dataclass(frozen=True)
class CheckoutOutcome:
    status: OutcomeStatus
    branch: str = ""
    message: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS


def _default_selector_runner(config: AppConfig) -> SelectorRunner:
    def run(session: SelectorSession) -> SelectorOutcome:
        from branchpick.ui.picker import run_picker

        return run_picker(session, max_visible=config.max_visible)

    return run


def _match(refs: Sequence[BranchRef], pattern: str) -> list[ScoredCandidate]:
    return rank(score_candidates(refs, pattern))


def _log_candidates(ranked: Sequence[ScoredCandidate]) -> None:
    logger.debug("Found %s matches", len(ranked))
    for position, candidate in enumerate(ranked, start=1):
        logger.debug(
            "%s. %s (score: %s, local: %s)",
            position,
            candidate.branch.name,
            candidate.score,
            candidate.branch.is_local,
        )


class SmartCheckout:
    def __init__(
        self,
        source: BranchSource,
        git: GitExecutor,
        *,
        config: AppConfig | None = None,
        selector_runner: SelectorRunner | None = None,
    ) -> None:
        self.source = source
        self.git = git
        self.config = config or AppConfig()
        self.selector_runner = selector_runner or _default_selector_runner(self.config)

    def run(
        self,
        pattern: str | None,
        *,
        force: bool = False,
        debug: bool = False,
        create: bool = False,
        stash_first: bool = False,
    ) -> CheckoutOutcome:
        self.source.ensure_repository()
        if debug:
            logger.debug("Starting checkout pattern=%r force=%s create=%s", pattern, force, create)

        if create:
            if not pattern:
                raise CheckoutError("A branch name is required to create a branch.")
            return self._create(pattern, force=force, stash_first=stash_first)

        if pattern == PREVIOUS_BRANCH:
            self._maybe_stash(stash_first)
            self.git.checkout_previous(force=force)
            return CheckoutOutcome(OutcomeStatus.SUCCESS, message="Switched to the previous branch.")

        if not pattern:
            return self._browse_all(force=force)

        return self._checkout_matching(pattern, force=force, debug=debug, stash_first=stash_first)

    def _create(self, name: str, *, force: bool, stash_first: bool) -> CheckoutOutcome:
        self._maybe_stash(stash_first)
        self.git.create_branch(name, force=force)
        return CheckoutOutcome(
            OutcomeStatus.SUCCESS,
            branch=name,
            message=f"Creating and checking out new branch: {name}",
        )

    def _browse_all(self, *, force: bool) -> CheckoutOutcome:
        self.git.refresh_remotes()
        refs = self.source.list_branches()
        if not refs:
            raise NoBranchesError("no branches found")
        ordered = sorted(refs, key=lambda ref: (not ref.is_local, ref.name))
        return self._select(ordered, force=force)

    def _checkout_matching(
        self,
        pattern: str,
        *,
        force: bool,
        debug: bool,
        stash_first: bool,
    ) -> CheckoutOutcome:
        refs = self.source.list_branches()
        if debug:
            logger.debug("Found %s branches", len(refs))
        if not refs:
            raise NoBranchesError("no branches found")

        ranked = _match(refs, pattern)
        if not ranked and self.config.refresh_on_miss:
            logger.info("No branch matches %r; fetching remotes once", pattern)
            self.git.refresh_remotes()
            refs = self.source.list_branches()
            ranked = _match(refs, pattern)
        if not ranked:
            raise NoMatchError(f"no branches match '{pattern}'")

        if debug:
            _log_candidates(ranked)

        decision = decide(ranked, dominance=self.config.dominance)
        if isinstance(decision, SingleWinner):
            return self._checkout_direct(decision.candidate.branch, force=force, stash_first=stash_first)

        logger.info("Multiple matches found for %r; starting interactive selector", pattern)
        return self._select(
            [candidate.branch for candidate in decision.candidates],
            force=force,
        )

    def _checkout_direct(self, branch: BranchRef, *, force: bool, stash_first: bool) -> CheckoutOutcome:
        intent = CheckoutIntent(branch=branch, force=force, remote=self.config.remote)
        self._maybe_stash(stash_first)
        try:
            self.git.checkout(intent)
        except DestructiveOverwriteError as exc:
            raise CheckoutError(exc.message, hint=exc.hint) from exc
        return CheckoutOutcome(OutcomeStatus.SUCCESS, branch=branch.name, message=intent.describe())

    def _select(self, refs: Sequence[BranchRef], *, force: bool) -> CheckoutOutcome:
        # local changes are handled by the conflict prompt once a branch is picked
        session = SelectorSession(
            refs,
            self.git,
            force=force,
            remote=self.config.remote,
            threshold=self.config.filter_threshold,
        )
        outcome = self.selector_runner(session)
        if outcome.status is OutcomeStatus.ERROR:
            raise CheckoutError(outcome.message or "Checkout failed.")
        if outcome.status is OutcomeStatus.CANCELLED:
            return CheckoutOutcome(OutcomeStatus.CANCELLED, branch=outcome.branch, message="Checkout aborted.")
        return CheckoutOutcome(
            OutcomeStatus.SUCCESS,
            branch=outcome.branch,
            message=f"Switched to branch: {outcome.branch}",
        )

    def _maybe_stash(self, stash_first: bool) -> None:
        if not stash_first:
            return
        logger.debug("Stashing before checkout")
        self.git.stash()


def smart_checkout(
    pattern: str | None,
    *,
    force: bool = False,
    debug: bool = False,
    source: BranchSource,
    git: GitExecutor,
    config: AppConfig | None = None,
    selector_runner: SelectorRunner | None = None,
    create: bool = False,
    stash_first: bool = False,
) -> CheckoutOutcome:
    flow = SmartCheckout(source, git, config=config, selector_runner=selector_runner)
    return flow.run(pattern, force=force, debug=debug, create=create, stash_first=stash_first)
