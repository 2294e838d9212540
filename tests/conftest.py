"""Shared fixtures."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI's default host book at a path that does not exist."""
    missing = tmp_path / "no-such-config.yaml"
    monkeypatch.setattr("wol.cli.DEFAULT_CONFIG", missing)
    monkeypatch.delenv("WOL_CONFIG", raising=False)
    return missing
