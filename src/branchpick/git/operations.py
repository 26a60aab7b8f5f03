"""Side-effecting git operations: checkout, stash, fetch."""

from __future__ import annotations

import logging as py_logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from branchpick.errors import CheckoutError, DestructiveOverwriteError, NetworkError, StashError
from branchpick.git.branch_provider import SubprocessRunner, run_git
from branchpick.models import CheckoutIntent

logger = py_logging.getLogger(__name__)

DEFAULT_STASH_MESSAGE = "Auto-stashed by branchpick"

_OVERWRITE_MARKERS = (
    "Your local changes to the following files would be overwritten by checkout",
    "The following untracked working tree files would be overwritten by checkout",
)


def is_destructive_overwrite(output: str) -> bool:
    return any(marker in output for marker in _OVERWRITE_MARKERS)


def _output(result: subprocess.CompletedProcess) -> str:
    return f"{result.stdout or ''}{result.stderr or ''}".strip()


@dataclass
class GitOperations:
    repo_path: str | Path = "."
    stash_message: str = DEFAULT_STASH_MESSAGE
    runner: SubprocessRunner = subprocess.run

    @property
    def repo(self) -> Path:
        return Path(self.repo_path)

    def checkout(self, intent: CheckoutIntent) -> None:
        args = list(intent.git_args())
        logger.debug("Running checkout repo=%s args=%s", self.repo, args)
        result = run_git(self.repo, args, self.runner)
        if result.returncode == 0:
            return
        output = _output(result)
        if is_destructive_overwrite(output):
            logger.info("Checkout blocked by local changes branch=%s", intent.branch.name)
            raise DestructiveOverwriteError(
                f"Checkout of {intent.branch.name} would overwrite local changes.",
                hint="Commit or stash your changes, or rerun with --stash or --force.",
            )
        logger.error("Checkout failed branch=%s output=%s", intent.branch.name, output)
        raise CheckoutError(
            f"Failed to checkout {intent.branch.name}.",
            hint=output or "Run `git status` to inspect repository state.",
        )

    def stash(self) -> None:
        logger.debug("Stashing local changes repo=%s", self.repo)
        result = run_git(self.repo, ["stash", "push", "-m", self.stash_message], self.runner)
        if result.returncode != 0:
            output = _output(result)
            logger.error("Stash failed repo=%s output=%s", self.repo, output)
            raise StashError("Failed to stash local changes.", hint=output)

    def refresh_remotes(self) -> None:
        logger.debug("Fetching remotes repo=%s", self.repo)
        result = run_git(self.repo, ["fetch", "--quiet"], self.runner)
        if result.returncode != 0:
            output = _output(result)
            logger.warning("Remote fetch failed repo=%s output=%s", self.repo, output)
            raise NetworkError(
                "Failed to fetch remote branches.",
                hint=output or "Check network access and remote configuration.",
            )

    def create_branch(self, name: str, *, force: bool = False) -> None:
        args = ["checkout", "-b", name]
        if force:
            args.append("-f")
        result = run_git(self.repo, args, self.runner)
        if result.returncode != 0:
            output = _output(result)
            logger.error("Branch creation failed branch=%s output=%s", name, output)
            raise CheckoutError(f"Failed to create branch {name}.", hint=output)

    def checkout_previous(self, *, force: bool = False) -> None:
        args = ["checkout", "-"]
        if force:
            args.append("-f")
        result = run_git(self.repo, args, self.runner)
        if result.returncode != 0:
            output = _output(result)
            logger.error("Checkout of previous branch failed output=%s", output)
            raise CheckoutError("Failed to checkout the previous branch.", hint=output)
