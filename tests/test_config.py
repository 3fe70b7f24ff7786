"""Environment configuration helpers."""

import pytest

from core import config


def test_database_url_strips_sslmode(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/blog?sslmode=require&application_name=api")

    assert config.database_url() == "postgresql://u:p@db:5432/blog?application_name=api"


def test_database_url_required(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "  ")

    with pytest.raises(RuntimeError):
        config.database_url()


def test_port_defaults_and_ignores_garbage(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    assert config.port() == 8080

    monkeypatch.setenv("PORT", "not-a-number")
    assert config.port() == 8080

    monkeypatch.setenv("PORT", "9000")
    assert config.port() == 9000


def test_cors_origins_from_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")

    assert config.cors_origins() == ["https://a.example", "https://b.example"]


def test_log_level_is_upper_cased(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert config.log_level() == "DEBUG"


def test_setup_logging_applies_level():
    import logging

    from core.observability import setup_logging

    root = logging.getLogger()
    previous = root.level
    try:
        setup_logging("warning")
        assert root.level == logging.WARNING

        setup_logging("nonsense")
        assert root.level == logging.INFO
    finally:
        root.setLevel(previous)


def test_cors_origins_default_to_none(monkeypatch):
    monkeypatch.delenv("CORS_ORIGINS", raising=False)

    assert config.cors_origins() == []
