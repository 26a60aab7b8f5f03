"""Errors module edge case tests."""

from __future__ import annotations

from branchpick.errors import (
    BranchPickError,
    CheckoutError,
    ExitCode,
    NetworkError,
    NoBranchesError,
    NoMatchError,
    RepoAccessError,
    user_facing_error,
)


def test_user_facing_error_without_hint() -> None:
    assert user_facing_error("no branches match 'x'") == "Error: no branches match 'x'."


def test_user_facing_error_with_hint() -> None:
    result = user_facing_error("something went wrong", hint="try again")
    assert result == "Error: something went wrong. Next step: try again"


def test_exit_code_values() -> None:
    assert int(ExitCode.SUCCESS) == 0
    assert int(ExitCode.CANCELLED) == 1
    assert int(ExitCode.INVALID_ARGS) == 2
    assert int(ExitCode.CONFIG_ERROR) == 3
    assert int(ExitCode.RUNTIME_ERROR) == 4
    assert int(ExitCode.GIT_ERROR) == 5
    assert int(ExitCode.NO_MATCH) == 6
    assert int(ExitCode.NETWORK_ERROR) == 7


def test_subclasses_carry_their_exit_codes() -> None:
    assert RepoAccessError("x").code is ExitCode.GIT_ERROR
    assert CheckoutError("x").code is ExitCode.GIT_ERROR
    assert NoMatchError("x").code is ExitCode.NO_MATCH
    assert NetworkError("x").code is ExitCode.NETWORK_ERROR
    assert isinstance(NoMatchError("x"), BranchPickError)


def test_no_branches_suggests_creating_one() -> None:
    error = NoBranchesError("no branches found")

    assert "-b" in error.hint
    assert "Hint:" in str(error)


def test_branch_pick_error_str_without_hint() -> None:
    assert str(BranchPickError("msg")) == "msg"
