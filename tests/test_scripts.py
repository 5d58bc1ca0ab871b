"""Tests for the migration and database bootstrap helpers."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import Session

from vibeshift.repositories.shifter_repo import ShifterRepository
from vibeshift.scripts.ensure_db import _split_db_url, normalize_to_psycopg
from vibeshift.scripts.migrate import (
    MIGRATIONS_DIR,
    MIGRATIONS_DIR_ENV,
    resolve_migrations_dir,
    run_upgrade,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("postgresql+psycopg://u:p@h:5432/vibes", "postgresql://u:p@h:5432/vibes"),
        ("'postgres://u:p@h/vibes'", "postgresql://u:p@h/vibes"),
        ("  postgresql://h/vibes  ", "postgresql://h/vibes"),
    ],
)
def test_normalize_to_psycopg(raw: str, expected: str) -> None:
    assert normalize_to_psycopg(raw) == expected


def test_normalize_rejects_empty_and_foreign_urls() -> None:
    with pytest.raises(ValueError):
        normalize_to_psycopg("")
    with pytest.raises(ValueError):
        normalize_to_psycopg("sqlite:///./shifters.db")


def test_split_db_url_targets_maintenance_database() -> None:
    admin_url, target = _split_db_url("postgresql+psycopg://u:p@h:5432/vibes")
    assert admin_url == "postgresql://u:p@h:5432/postgres"
    assert target == "vibes"


def test_migration_creates_usable_schema(tmp_path: Path) -> None:
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    run_upgrade("head", url)

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        assert {c["name"] for c in inspector.get_columns("shifters")} == {"id", "fingerprint"}
        indexes = {ix["name"]: ix for ix in inspector.get_indexes("shifters")}
        assert indexes["ix_shifters_fingerprint"]["unique"]

        with Session(engine) as session:
            repository = ShifterRepository(session)
            assert repository.insert_if_absent("abc") == (1, True)
            assert repository.insert_if_absent("abc") == (1, False)
    finally:
        engine.dispose()


def test_migrations_dir_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(MIGRATIONS_DIR_ENV, str(tmp_path))
    with pytest.raises(FileNotFoundError, match=MIGRATIONS_DIR_ENV):
        resolve_migrations_dir()

    (tmp_path / "alembic.ini").write_text("[alembic]\n")
    assert resolve_migrations_dir() == tmp_path.resolve()


def test_default_migrations_dir_is_checkout_folder(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(MIGRATIONS_DIR_ENV, raising=False)
    assert resolve_migrations_dir() == MIGRATIONS_DIR
    assert (MIGRATIONS_DIR / "versions").is_dir()
