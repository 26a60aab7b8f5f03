"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import logging as py_logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import load_config
from .errors import BranchPickError, ExitCode, user_facing_error
from .git.branch_provider import BranchProvider
from .git.operations import GitOperations
from .logging import configure_logging, default_log_path
from .orchestrator import CheckoutOutcome, SelectorRunner, smart_checkout

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")

_EPILOG = """\
examples:
  branchpick prod         checkout the branch best matching 'prod'
  branchpick 123          checkout the branch referencing ticket #123
  branchpick -b feat/x    create and checkout a new branch 'feat/x'
  branchpick -f prod      force checkout, discarding local changes
  branchpick -s prod      stash local changes, then checkout
  branchpick -            checkout the previous branch
  branchpick              pick from every branch interactively
"""


def _log_level_type(value: str) -> str:
    normalized = value.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="branchpick",
        description="Switch Git branches by typing a short, fuzzy fragment of the name.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("pattern", nargs="?", default=None)
    parser.add_argument(
        "-b",
        "--branch",
        action="store_true",
        help="Create and checkout a new branch with the given name",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Force checkout, discarding any local changes",
    )
    parser.add_argument(
        "-s",
        "--stash",
        action="store_true",
        help="Always stash changes before checkout",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output for the branch matching process",
    )
    parser.add_argument("--repo", type=Path, default=Path("."))
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--log-level", type=_log_level_type, default="WARN")
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def run_cli_flow(
    namespace: argparse.Namespace,
    *,
    runner: Callable[..., object] | None = None,
    selector_runner: SelectorRunner | None = None,
) -> CheckoutOutcome:
    config = load_config(namespace.config, required=namespace.config is not None)
    provider_kwargs: dict[str, object] = {} if runner is None else {"runner": runner}
    source = BranchProvider(repo_path=namespace.repo, remote=config.remote, **provider_kwargs)
    git = GitOperations(repo_path=namespace.repo, stash_message=config.stash_message, **provider_kwargs)
    return smart_checkout(
        namespace.pattern,
        force=namespace.force,
        debug=namespace.debug,
        source=source,
        git=git,
        config=config,
        selector_runner=selector_runner,
        create=namespace.branch,
        stash_first=namespace.stash,
    )


def main(
    argv: Sequence[str] | None = None,
    *,
    runner: Callable[..., object] | None = None,
    selector_runner: SelectorRunner | None = None,
) -> int:
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    log_path = namespace.log_file.expanduser() if namespace.log_file is not None else default_log_path()
    level = "DEBUG" if namespace.debug else namespace.log_level
    logger = configure_logging(level=level, log_file=log_path)

    try:
        outcome = run_cli_flow(namespace, runner=runner, selector_runner=selector_runner)
    except BranchPickError as exc:
        logger.error(
            "Handled BranchPickError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        hint = f"Inspect logs: {log_path}"
        print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        return int(ExitCode.RUNTIME_ERROR)

    if outcome.succeeded:
        if outcome.message:
            print(outcome.message)
        return int(ExitCode.SUCCESS)

    print(outcome.message or "Checkout aborted.", file=sys.stderr)
    return int(ExitCode.CANCELLED)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
