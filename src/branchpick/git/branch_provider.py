"""Local/remote branch listing provider."""

from __future__ import annotations

import logging as py_logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from branchpick.errors import RepoAccessError
from branchpick.models import BranchRef, merge_branch_refs

logger = py_logging.getLogger(__name__)

_EMPTY_REPO_RETURNCODE = 128


class SubprocessRunner(Protocol):
    def __call__(
        self,
        args: list[str],
        *,
        capture_output: bool = False,
        text: bool = False,
        check: bool = False,
    ) -> subprocess.CompletedProcess[str]: ...


def run_git(repo: Path, args: list[str], runner: SubprocessRunner) -> subprocess.CompletedProcess:
    cmd = ["git", "-C", str(repo), *args]
    return runner(cmd, capture_output=True, text=True, check=False)


@dataclass
class BranchProvider:
    repo_path: str | Path = "."
    remote: str = "origin"
    runner: SubprocessRunner = subprocess.run

    @property
    def repo(self) -> Path:
        return Path(self.repo_path)

    def ensure_repository(self) -> None:
        inside = run_git(self.repo, ["rev-parse", "--is-inside-work-tree"], self.runner)
        if inside.returncode != 0:
            logger.error("Repository is not accessible repo=%s", self.repo)
            raise RepoAccessError(
                "not a git repository",
                hint="Run branchpick inside a Git working tree or pass --repo.",
            )

    def list_local_branch_names(self) -> list[str]:
        listing = run_git(self.repo, ["branch", "--format=%(refname:short)"], self.runner)
        if listing.returncode == _EMPTY_REPO_RETURNCODE:
            return []
        if listing.returncode != 0:
            logger.error("Failed to list local branches repo=%s stderr=%s", self.repo, listing.stderr.strip())
            raise RepoAccessError(
                "Failed to list local branches.",
                hint=(listing.stderr or "Run `git branch` manually to inspect repository state.").strip(),
            )
        return _normalize_local_branches(listing.stdout)

    def list_remote_branch_names(self) -> list[str]:
        listing = run_git(self.repo, ["branch", "-r", "--format=%(refname:short)"], self.runner)
        if listing.returncode == _EMPTY_REPO_RETURNCODE:
            return []
        if listing.returncode != 0:
            logger.error("Failed to list remote branches repo=%s stderr=%s", self.repo, listing.stderr.strip())
            raise RepoAccessError(
                "Failed to list remote branches.",
                hint=(listing.stderr or "Check remote configuration.").strip(),
            )
        return _normalize_remote_branches(listing.stdout, self.remote)

    def current_branch_name(self) -> str:
        result = run_git(self.repo, ["symbolic-ref", "--short", "-q", "HEAD"], self.runner)
        if result.returncode != 0:
            logger.debug("Detached HEAD detected repo=%s", self.repo)
            return ""
        return result.stdout.strip()

    def list_branches(self) -> list[BranchRef]:
        local = self.list_local_branch_names()
        remote = self.list_remote_branch_names()
        current = self.current_branch_name()
        refs = merge_branch_refs(local, remote, current)
        logger.debug(
            "Discovered branches repo=%s local=%s remote=%s merged=%s",
            self.repo,
            len(local),
            len(remote),
            len(refs),
        )
        return refs


def _normalize_local_branches(raw: str) -> list[str]:
    result: list[str] = []
    for line in raw.splitlines():
        entry = line.strip()
        # "(HEAD detached at 1a2b3c)" and similar pseudo entries
        if not entry or entry.startswith("("):
            continue
        result.append(entry)
    return result


def _normalize_remote_branches(raw: str, remote: str) -> list[str]:
    prefix = f"{remote}/"
    result: list[str] = []
    seen: set[str] = set()
    for line in raw.splitlines():
        entry = line.strip()
        if not entry or "->" in entry or not entry.startswith(prefix):
            continue
        name = entry[len(prefix) :]
        if not name or name == "HEAD" or name in seen:
            continue
        seen.add(name)
        result.append(name)
    return result
