# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

os.environ.setdefault("DATABASE_URL", "sqlite://")

from vibeshift.db.session import Base, engine_options
from vibeshift.db.session import get_db as app_get_session
from vibeshift.main import app as fastapi_app
from vibeshift.repositories.shifter_repo import ShifterRepository
from vibeshift.services.assignment import AssignmentService


@pytest.fixture()
def engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """File-backed SQLite store so ids start at 1 and threads share one database."""
    url = f"sqlite:///{tmp_path / 'shifters.db'}"
    engine = create_engine(url, **engine_options(url))
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def repository(db_session: Session) -> ShifterRepository:
    return ShifterRepository(db_session)


@pytest.fixture()
def service(repository: ShifterRepository) -> AssignmentService:
    return AssignmentService(repository)


@pytest.fixture()
def make_service(session_factory: sessionmaker[Session]) -> Iterator[Callable[[], AssignmentService]]:
    """Build services with their own sessions, one per simulated request."""
    sessions: list[Session] = []

    def _make() -> AssignmentService:
        session = session_factory()
        sessions.append(session)
        return AssignmentService(ShifterRepository(session))

    try:
        yield _make
    finally:
        for session in sessions:
            session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(
    app: FastAPI,
    session_factory: sessionmaker[Session],
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test", raise_server_exceptions=False) as test_client:
        yield test_client
