"""Deterministic error model and exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    CANCELLED = 1
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4
    GIT_ERROR = 5
    NO_MATCH = 6
    NETWORK_ERROR = 7


@dataclass
class BranchPickError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


@dataclass
class RepoAccessError(BranchPickError):
    """Not a repository, or branch enumeration failed."""

    code: ExitCode = ExitCode.GIT_ERROR


@dataclass
class NoBranchesError(BranchPickError):
    code: ExitCode = ExitCode.NO_MATCH
    hint: str = "Create a branch with `branchpick -b <name>`."


@dataclass
class NoMatchError(BranchPickError):
    code: ExitCode = ExitCode.NO_MATCH


@dataclass
class DestructiveOverwriteError(BranchPickError):
    """Checkout refused because it would overwrite uncommitted changes."""

    code: ExitCode = ExitCode.GIT_ERROR


@dataclass
class CheckoutError(BranchPickError):
    code: ExitCode = ExitCode.GIT_ERROR


@dataclass
class StashError(BranchPickError):
    code: ExitCode = ExitCode.GIT_ERROR


@dataclass
class NetworkError(BranchPickError):
    code: ExitCode = ExitCode.NETWORK_ERROR


@dataclass
class ConfigError(BranchPickError):
    code: ExitCode = ExitCode.CONFIG_ERROR


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
