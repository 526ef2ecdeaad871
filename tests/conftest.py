from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Prevent developer machine `~/.config/gvt/config.json` and GVT_* vars from influencing tests."""

    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("GVT_DEBUG", "")
    monkeypatch.delenv("GVT_PROJECT_ROOT", raising=False)


@pytest.fixture
def workdir(tmp_path):
    """Create an empty working directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project
