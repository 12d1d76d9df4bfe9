from __future__ import annotations

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

ROOT = Path(__file__).resolve().parent.parent


def test_project_metadata():
    project = tomllib.loads((ROOT / "pyproject.toml").read_text())["project"]
    # The design ledger is not a package description
    assert project.get("readme") != "DESIGN.md"
    assert {"numpy", "gymnasium", "pygame"} <= set(project["dependencies"])
    assert project["scripts"]["tetris-play"] == "tetris_device.terminal_play:main"
