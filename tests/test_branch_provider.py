from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from branchpick.errors import RepoAccessError
from branchpick.git.branch_provider import BranchProvider
from branchpick.models import BranchRef


def _cp(returncode: int, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def _provider(responses: dict[str, subprocess.CompletedProcess], remote: str = "origin") -> BranchProvider:
    def runner(cmd: list[str], **_: object) -> subprocess.CompletedProcess:
        assert cmd[:3] == ["git", "-C", str(Path("/tmp/repo"))]
        return responses[" ".join(cmd[3:])]

    return BranchProvider(repo_path="/tmp/repo", remote=remote, runner=runner)


def test_ensure_repository_rejects_non_repo() -> None:
    provider = _provider({"rev-parse --is-inside-work-tree": _cp(128, stderr="fatal: not a git repository")})

    with pytest.raises(RepoAccessError) as exc:
        provider.ensure_repository()
    assert "not a git repository" in exc.value.message


def test_local_branches_skip_detached_pseudo_entries() -> None:
    provider = _provider(
        {"branch --format=%(refname:short)": _cp(0, "(HEAD detached at 1a2b3c)\nmain\nfeature/a\n\n")}
    )

    assert provider.list_local_branch_names() == ["main", "feature/a"]


def test_local_listing_in_unborn_repo_is_empty() -> None:
    provider = _provider({"branch --format=%(refname:short)": _cp(128, stderr="fatal")})

    assert provider.list_local_branch_names() == []


def test_local_listing_failure_raises() -> None:
    provider = _provider({"branch --format=%(refname:short)": _cp(1, stderr="permission denied")})

    with pytest.raises(RepoAccessError) as exc:
        provider.list_local_branch_names()
    assert exc.value.hint == "permission denied"


def test_remote_branches_strip_prefix_and_symbolic_entries() -> None:
    provider = _provider(
        {
            "branch -r --format=%(refname:short)": _cp(
                0,
                "origin\norigin/HEAD\norigin/HEAD -> origin/main\norigin/main\norigin/feature/x\n"
                "upstream/other\norigin/main\n",
            )
        }
    )

    assert provider.list_remote_branch_names() == ["main", "feature/x"]


def test_remote_branches_honour_configured_remote() -> None:
    provider = _provider(
        {"branch -r --format=%(refname:short)": _cp(0, "origin/main\nupstream/release\n")},
        remote="upstream",
    )

    assert provider.list_remote_branch_names() == ["release"]


def test_remote_listing_failure_raises() -> None:
    provider = _provider({"branch -r --format=%(refname:short)": _cp(1, stderr="bad remote")})

    with pytest.raises(RepoAccessError) as exc:
        provider.list_remote_branch_names()
    assert "remote branches" in exc.value.message


def test_current_branch_is_empty_on_detached_head() -> None:
    provider = _provider({"symbolic-ref --short -q HEAD": _cp(1)})

    assert provider.current_branch_name() == ""


def test_list_branches_merges_local_and_remote() -> None:
    provider = _provider(
        {
            "branch --format=%(refname:short)": _cp(0, "main\nfeature/a\n"),
            "branch -r --format=%(refname:short)": _cp(0, "origin/main\norigin/feature/b\n"),
            "symbolic-ref --short -q HEAD": _cp(0, "main\n"),
        }
    )

    assert provider.list_branches() == [
        BranchRef("main", is_local=True, is_current=True),
        BranchRef("feature/a", is_local=True),
        BranchRef("feature/b", is_local=False),
    ]
