# src/vibeshift/models/shifter.py
"""SQLAlchemy model for claimed membership slots."""

from __future__ import annotations

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from vibeshift.db.session import Base


class Shifter(Base):
    """One device fingerprint and the membership number it was given.

    Rows are written once and never updated. ``id`` comes from the table's
    auto-increment generator and is never reused, even after deletes.
    """

    __tablename__ = "shifters"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    fingerprint: Mapped[str] = mapped_column(Text, unique=True, index=True, nullable=False)

    def __repr__(self) -> str:
        return f"Shifter(id={self.id!r})"
