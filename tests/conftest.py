"""Test setup for jt."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from jt.config import JiraSettings  # noqa: E402


@pytest.fixture
def settings(tmp_path: Path) -> JiraSettings:
    """Settings pointing at a temporary tickets directory."""
    return JiraSettings(
        instance="https://example.atlassian.net",
        email="dev@example.com",
        api_token="token123",
        tickets_dir=str(tmp_path / "tickets"),
    )


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point the config file at an empty location so the user's own file is never read."""
    config_path = tmp_path / "config.yaml"
    monkeypatch.delenv("JT_CONFIG", raising=False)
    monkeypatch.setattr("jt.config.JT_CONFIG", str(config_path))
    return config_path
