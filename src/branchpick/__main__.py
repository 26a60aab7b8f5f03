"""Module entrypoint for `python -m branchpick`."""

from branchpick.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
