from pathlib import Path

import pytest

from gembot.config import DEFAULT_MODEL, get_settings
from gembot.errors import ApiKeyNotConfiguredError


def test_defaults_point_at_generate_content() -> None:
    settings = get_settings()

    assert settings.model == DEFAULT_MODEL
    assert settings.service_endpoint == (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
    )


def test_environment_and_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMBOT_API_KEY", "from-env")
    monkeypatch.setenv("GEMBOT_API_BASE", "https://proxy.test/v1/")

    settings = get_settings(model="gemini-pro", api_key=None)

    assert settings.api_key == "from-env"
    assert settings.service_endpoint == "https://proxy.test/v1/models/gemini-pro:generateContent"


def test_dotenv_file_is_read(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("GEMBOT_IDENTITY_TOKEN=tok\n", encoding="utf-8")

    config = get_settings(api_key="k").session_config()

    assert config.identity_token == "tok"
    assert config.api_key == "k"


def test_require_api_key() -> None:
    with pytest.raises(ApiKeyNotConfiguredError):
        get_settings().require_api_key()
    assert get_settings(api_key="abc").require_api_key() == "abc"
