# tests/conftest.py
from __future__ import annotations

import pytest

from cpnum.runtime import reset


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Every test gets its own workspace and a fresh runtime."""
    ws = tmp_path / "workspace"
    monkeypatch.setenv("CPNUM_HOME", str(ws))
    reset()
    return ws
