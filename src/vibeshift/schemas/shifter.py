"""Schemas for the count, check and shift endpoints."""
from __future__ import annotations

from pydantic import BaseModel, Field


class FingerprintIn(BaseModel):
    """Request body carrying a client-derived device fingerprint."""

    fingerprint: str | None = Field(
        default=None,
        description="Opaque, untrusted device fingerprint.",
    )


class CountOut(BaseModel):
    """Current number of claimed membership slots."""

    count: int


class CheckOut(BaseModel):
    """Membership status for a fingerprint.

    ``id`` and ``count`` are only present once the fingerprint has shifted.
    """

    shifted: bool
    id: int | None = None
    count: int | None = None


class ShiftOut(BaseModel):
    """Membership number for a fingerprint plus the post-claim count."""

    id: int
    count: int
