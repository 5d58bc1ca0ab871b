"""Utility script to create (or reset) the configured Postgres database."""
from __future__ import annotations

import argparse
import logging
import sys
from urllib.parse import urlsplit, urlunsplit

import psycopg
from psycopg import sql

from vibeshift.core.logging import configure_logging
from vibeshift.core.settings import settings

logger = logging.getLogger(__name__)


def normalize_to_psycopg(uri: str) -> str:
    """Return a Postgres URI suitable for psycopg.connect().

    - Strips quotes and whitespace.
    - Converts SQLAlchemy schemes (postgresql+*) and ``postgres`` to plain "postgresql".
    """
    uri = (uri or "").strip().strip("'\"")
    if not uri:
        raise ValueError("DATABASE_URL is empty")

    parts = urlsplit(uri)
    scheme = parts.scheme
    if scheme == "postgres" or scheme.startswith("postgresql+"):
        scheme = "postgresql"
    if scheme != "postgresql":
        raise ValueError(f"Not a Postgres DATABASE_URL: {uri.split('://', 1)[0]!r}")

    return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))


def _split_db_url(db_url: str) -> tuple[str, str]:
    """Return `(admin_url, target_db)` using the maintenance database."""
    parts = urlsplit(normalize_to_psycopg(db_url))
    target_db = parts.path.lstrip("/") or "postgres"
    admin_url = urlunsplit(("postgresql", parts.netloc, "/postgres", parts.query, parts.fragment))
    return admin_url, target_db


def ensure_database_exists(db_url: str) -> bool:
    """Create the configured database if it is missing.

    Returns:
        True if the database had to be created.
    """
    admin_url, target_db = _split_db_url(db_url)

    with psycopg.connect(admin_url, autocommit=True) as conn, conn.cursor() as cur:
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (target_db,))
        if cur.fetchone() is not None:
            logger.info("Database %s already exists", target_db)
            return False
        cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target_db)))
    logger.info("Created database %s", target_db)
    return True


def drop_all_tables(db_url: str) -> None:
    """Drop and recreate the public schema for the configured database."""
    with psycopg.connect(normalize_to_psycopg(db_url), autocommit=True) as conn, conn.cursor() as cur:
        cur.execute("DROP SCHEMA IF EXISTS public CASCADE")
        cur.execute("CREATE SCHEMA public")
    logger.info("Dropped all tables in public schema")


def main() -> None:
    parser = argparse.ArgumentParser(description="Ensure or reset the configured database")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop and recreate the public schema after ensuring the database exists.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to DATABASE_URL)",
    )
    args = parser.parse_args()

    configure_logging()
    raw_url = args.url or settings.database_url
    try:
        ensure_database_exists(raw_url)
        if args.drop_tables:
            drop_all_tables(raw_url)
    except (ValueError, psycopg.Error) as exc:
        logger.error("ensure_db failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
