"""Exception types raised by the identity store and assignment service."""

from __future__ import annotations


class ShiftError(RuntimeError):
    """Base exception for all counter failures."""


class InvalidInput(ShiftError):
    """Raised when a request carries a missing or unusable fingerprint.

    This is a client error; the store is never touched.
    """


class StoreUnavailable(ShiftError):
    """Raised when the identity store cannot be reached or a transaction fails.

    Callers may retry; the service itself never does.
    """


class ConstraintRace(ShiftError):
    """A unique-constraint violation hit while inserting a fingerprint.

    Only ever raised and caught inside the identity store, where it means
    "another caller claimed this fingerprint first".
    """
