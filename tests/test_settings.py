"""Tests for environment-driven configuration."""

import pytest
from pydantic import ValidationError

from vibeshift.core.settings import Settings


def test_missing_database_url_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)  # type: ignore[call-arg]


def test_blank_database_url_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "   ")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)  # type: ignore[call-arg]


def test_port_and_defaults_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./shifters.db")
    monkeypatch.setenv("PORT", "8080")
    settings = Settings(_env_file=None)  # type: ignore[call-arg]
    assert settings.port == 8080
    assert settings.fingerprint_max_length == 512
    assert settings.sqlalchemy_database_url == "sqlite:///./shifters.db"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("postgres://u:p@db:5432/vibes", "postgresql+psycopg://u:p@db:5432/vibes"),
        ("postgresql://u:p@db/vibes?sslmode=require", "postgresql+psycopg://u:p@db/vibes?sslmode=require"),
        ("postgresql+psycopg://u:p@db/vibes", "postgresql+psycopg://u:p@db/vibes"),
    ],
)
def test_postgres_urls_use_psycopg_driver(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: str
) -> None:
    monkeypatch.setenv("DATABASE_URL", raw)
    assert Settings(_env_file=None).sqlalchemy_database_url == expected  # type: ignore[call-arg]
