"""Shared pytest fixtures for the browser discovery test suite."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _clear_browser_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment variables out of candidate construction."""

    for name in ("CHROME_PATH", "LOCALAPPDATA", "PROGRAMFILES", "PROGRAMFILES(X86)"):
        monkeypatch.delenv(name, raising=False)
