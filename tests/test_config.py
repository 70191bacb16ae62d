"""Tests for settings loading."""

import pytest

from draftly.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without environment overrides the documented defaults apply."""

    for name in ("OPENROUTER_API_KEY", "OPENROUTER_URL", "APP_URL", "APP_TITLE"):
        monkeypatch.delenv(name, raising=False)

    config = Settings(_env_file=None)
    assert config.OPENROUTER_API_KEY is None
    assert config.OPENROUTER_URL == "https://openrouter.ai/api/v1/chat/completions"
    assert config.APP_TITLE == "Draftly AI"
    assert config.referer == "http://localhost:3000"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Values are read from the environment."""

    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-123")
    monkeypatch.setenv("APP_URL", "https://draftly.example")
    monkeypatch.setenv("HTTP_TIMEOUT", "12.5")

    config = Settings(_env_file=None)
    assert config.OPENROUTER_API_KEY == "sk-or-123"
    assert config.referer == "https://draftly.example"
    assert config.HTTP_TIMEOUT == 12.5


def test_env_file(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """A .env file is honoured and unrelated keys are ignored."""

    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("OPENROUTER_API_KEY=from-file\nNEXT_PUBLIC_SOMETHING=x\n", encoding="utf-8")

    config = Settings(_env_file=env_file)
    assert config.OPENROUTER_API_KEY == "from-file"
