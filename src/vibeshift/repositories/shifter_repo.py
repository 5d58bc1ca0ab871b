"""Data access helpers for the shifters table (the identity store)."""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, NoReturn

from sqlalchemy import func, insert, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from vibeshift.core.errors import ConstraintRace, StoreUnavailable
from vibeshift.core.logging import redact_fingerprint
from vibeshift.models.shifter import Shifter

__all__ = ["ShifterRepository"]

logger = logging.getLogger(__name__)

# Dialects whose INSERT supports ON CONFLICT DO NOTHING ... RETURNING.
_CONFLICT_AWARE_INSERTS: dict[str, Callable[[Any], Any]] = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class ShifterRepository:
    """Uniqueness-enforcing persistence for fingerprint -> id mappings.

    Every public method is a single round of statements against the store.
    Database failures are rolled back and re-raised as ``StoreUnavailable``.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def count(self) -> int:
        """Return the number of claimed membership slots."""
        try:
            total = self.session.execute(
                select(func.count()).select_from(Shifter)
            ).scalar_one()
        except SQLAlchemyError as err:
            self._fail("count", err)
        return int(total)

    def lookup(self, fingerprint: str) -> int | None:
        """Return the id assigned to a fingerprint, if any."""
        try:
            return self.session.execute(
                select(Shifter.id).where(Shifter.fingerprint == fingerprint).limit(1)
            ).scalar_one_or_none()
        except SQLAlchemyError as err:
            self._fail("lookup", err)

    def insert_if_absent(self, fingerprint: str) -> tuple[int, bool]:
        """Atomically create a row for a fingerprint unless one exists.

        Args:
            fingerprint: Opaque client fingerprint, already validated.

        Returns:
            ``(id, created)`` where ``created`` is True only for the call
            whose insert committed the row.

        Notes:
            The insert is the only decision point. A row committed concurrently
            by another caller makes the insert a no-op (or a unique violation
            on dialects without ON CONFLICT), after which the winner's id is
            read back.
        """
        insert_factory = _CONFLICT_AWARE_INSERTS.get(self._dialect_name())
        try:
            if insert_factory is not None:
                created_id = self._insert_on_conflict_do_nothing(insert_factory, fingerprint)
            else:
                try:
                    created_id = self._insert_in_savepoint(fingerprint)
                except ConstraintRace:
                    created_id = None
            self.session.commit()
        except SQLAlchemyError as err:
            self._fail("insert", err)

        if created_id is not None:
            logger.debug("Inserted shifter %d for %s", created_id, redact_fingerprint(fingerprint))
            return int(created_id), True

        existing_id = self.lookup(fingerprint)
        if existing_id is None:
            # Conflict reported but the winning row is not visible.
            raise StoreUnavailable("claimed fingerprint could not be read back")
        return int(existing_id), False

    def _insert_on_conflict_do_nothing(
        self,
        insert_factory: Callable[[Any], Any],
        fingerprint: str,
    ) -> int | None:
        stmt = (
            insert_factory(Shifter)
            .values(fingerprint=fingerprint)
            .on_conflict_do_nothing(index_elements=[Shifter.fingerprint])
            .returning(Shifter.id)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def _insert_in_savepoint(self, fingerprint: str) -> int:
        try:
            with self.session.begin_nested():
                result = self.session.execute(
                    insert(Shifter).values(fingerprint=fingerprint)
                )
        except IntegrityError as err:
            raise ConstraintRace(redact_fingerprint(fingerprint)) from err
        return int(result.inserted_primary_key[0])

    def _dialect_name(self) -> str:
        return self.session.get_bind().dialect.name

    def _fail(self, operation: str, err: SQLAlchemyError) -> NoReturn:
        self.session.rollback()
        raise StoreUnavailable(f"identity store {operation} failed") from err
