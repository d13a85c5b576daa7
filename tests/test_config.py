"""Tests for environment-driven settings."""

from taskboard.config import Settings, load_settings


def test_defaults(monkeypatch):
    for suffix in ("HOST", "PORT", "RELOAD", "LOG_LEVEL", "LOCK_TIMEOUT_SEC", "CORS_ORIGINS"):
        monkeypatch.delenv(f"TASKBOARD_{suffix}", raising=False)

    assert load_settings() == Settings()
    assert load_settings().port == 8080


def test_overrides(monkeypatch):
    monkeypatch.setenv("TASKBOARD_PORT", "9000")
    monkeypatch.setenv("TASKBOARD_RELOAD", "yes")
    monkeypatch.setenv("TASKBOARD_LOG_LEVEL", "debug")
    monkeypatch.setenv("TASKBOARD_LOCK_TIMEOUT_SEC", "2.5")
    monkeypatch.setenv("TASKBOARD_CORS_ORIGINS", "http://localhost:3000, https://board.example.com,")

    settings = load_settings()

    assert settings.port == 9000
    assert settings.reload is True
    assert settings.log_level == "DEBUG"
    assert settings.lock_timeout_sec == 2.5
    assert settings.cors_origins == ["http://localhost:3000", "https://board.example.com"]
