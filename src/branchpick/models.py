"""Branch domain models shared by matching, policy and selector."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class BranchRef:
    name: str
    is_local: bool = True
    is_current: bool = False

    def label(self) -> str:
        if self.is_current:
            return f"* {self.name}"
        if not self.is_local:
            return f"{self.name} (remote)"
        return self.name


@dataclass(frozen=True)
class ScoredCandidate:
    branch: BranchRef
    score: int


@dataclass(frozen=True)
class CheckoutIntent:
    """Abstract "checkout branch X" request executed by the git collaborator."""

    branch: BranchRef
    force: bool = False
    remote: str = "origin"

    def git_args(self) -> tuple[str, ...]:
        if self.branch.is_local:
            args: tuple[str, ...] = ("checkout", self.branch.name)
        else:
            args = ("checkout", "-b", self.branch.name, f"{self.remote}/{self.branch.name}")
        if self.force:
            args = (*args, "-f")
        return args

    def describe(self) -> str:
        if self.branch.is_local:
            return f"Checking out local branch: {self.branch.name}"
        return f"Creating local branch from remote: {self.branch.name}"


def merge_branch_refs(
    local_names: Iterable[str],
    remote_names: Iterable[str],
    current_name: str = "",
) -> list[BranchRef]:
    """Merge local and remote listings into one name-keyed set of refs.

    Local entries always win identity conflicts and carry the current-branch
    flag. Remote-only entries are appended after all local ones, in listing
    order.
    """
    merged: dict[str, BranchRef] = {}
    for raw in local_names:
        name = raw.strip()
        if not name or name in merged:
            continue
        is_current = bool(current_name) and name == current_name
        merged[name] = BranchRef(name=name, is_local=True, is_current=is_current)
    for raw in remote_names:
        name = raw.strip()
        if not name or name in merged:
            continue
        merged[name] = BranchRef(name=name, is_local=False)
    return list(merged.values())
