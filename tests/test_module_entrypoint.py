from __future__ import annotations

import runpy
from pathlib import Path


def test_module_entrypoint_exposes_run_without_executing() -> None:
    namespace = runpy.run_path(
        str(Path(__file__).resolve().parents[1] / "src" / "branchpick" / "__main__.py"),
        run_name="branchpick_entrypoint_test",
    )
    assert callable(namespace["run"])
