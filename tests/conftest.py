from __future__ import annotations

import pytest

from gembot.config import SessionConfig


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in ("GEMBOT_API_KEY", "GEMBOT_MODEL", "GEMBOT_API_BASE", "GEMBOT_IDENTITY_TOKEN", "GEMBOT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def session_config() -> SessionConfig:
    return SessionConfig(service_endpoint="https://example.test/v1beta/models/test:generateContent")
