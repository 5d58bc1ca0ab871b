# src/vibeshift/scripts/migrate.py
"""Apply Alembic migrations to the configured identity store.

The Alembic scripts live in the repository's top-level ``migrations/`` folder
and are not shipped inside the wheel. Run this command from a source checkout
(or an editable install), or point ``VIBESHIFT_MIGRATIONS_DIR`` /
``--migrations-dir`` at a copy of that folder.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

from vibeshift.core.logging import configure_logging
from vibeshift.core.settings import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"
MIGRATIONS_DIR_ENV = "VIBESHIFT_MIGRATIONS_DIR"


def resolve_migrations_dir(override: str | Path | None = None) -> Path:
    """Return the migrations folder, preferring an explicit override.

    Raises:
        FileNotFoundError: If the folder has no ``alembic.ini``.
    """
    raw = override or os.getenv(MIGRATIONS_DIR_ENV)
    migrations_dir = Path(raw).expanduser().resolve() if raw else MIGRATIONS_DIR
    if not (migrations_dir / "alembic.ini").is_file():
        raise FileNotFoundError(
            f"No alembic.ini under {migrations_dir}; run from a source checkout "
            f"or set {MIGRATIONS_DIR_ENV}"
        )
    return migrations_dir


def build_config(
    database_url: str | None = None,
    migrations_dir: str | Path | None = None,
) -> Config:
    """Return an Alembic config pointed at the project's migrations folder."""
    location = resolve_migrations_dir(migrations_dir)
    cfg = Config(str(location / "alembic.ini"))
    cfg.set_main_option("script_location", str(location))
    url = database_url or settings.sqlalchemy_database_url
    # ConfigParser interpolation treats % specially (e.g. in encoded passwords).
    cfg.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return cfg


def run_upgrade(
    revision: str = "head",
    database_url: str | None = None,
    migrations_dir: str | Path | None = None,
) -> None:
    cfg = build_config(database_url, migrations_dir)
    logger.info("Upgrading identity store to %s", revision)
    command.upgrade(cfg, revision)


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply database migrations")
    parser.add_argument("--revision", default="head", help="Target revision (default: head)")
    parser.add_argument("--url", default=None, help="Override database URL")
    parser.add_argument(
        "--migrations-dir",
        default=None,
        help=f"Folder holding alembic.ini (defaults to ${MIGRATIONS_DIR_ENV} or the checkout's migrations/)",
    )
    args = parser.parse_args()

    configure_logging()
    try:
        run_upgrade(args.revision, args.url, args.migrations_dir)
    except FileNotFoundError as exc:
        logger.error("migrate failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
