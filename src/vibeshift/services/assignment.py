"""Membership number assignment for device fingerprints."""

from __future__ import annotations

import logging
from typing import Any

from vibeshift.core.errors import InvalidInput
from vibeshift.core.logging import redact_fingerprint
from vibeshift.core.settings import settings
from vibeshift.repositories.shifter_repo import ShifterRepository
from vibeshift.schemas.shifter import CheckOut, CountOut, ShiftOut

logger = logging.getLogger(__name__)

MISSING_FINGERPRINT = "Missing fingerprint"
FINGERPRINT_TOO_LONG = "Fingerprint too long"
INVALID_FINGERPRINT = "Invalid fingerprint"


class AssignmentService:
    """Stateless request logic on top of the identity store.

    A fingerprint moves from unknown to claimed exactly once; every later
    claim returns the number it was first given. Fingerprints are only
    deduplicated by value: they say nothing reliable about device identity.
    """

    def __init__(self, repository: ShifterRepository, *, max_fingerprint_length: int | None = None) -> None:
        self.repository = repository
        self.max_fingerprint_length = max_fingerprint_length or settings.fingerprint_max_length

    def get_count(self) -> CountOut:
        """Return the current global count."""
        return CountOut(count=self.repository.count())

    def check_status(self, fingerprint: Any) -> CheckOut:
        """Report whether a fingerprint has already claimed a number.

        Read-only and safe to repeat.

        Raises:
            InvalidInput: If the fingerprint is missing or unusable.
            StoreUnavailable: If the identity store fails.
        """
        fingerprint = self.validate_fingerprint(fingerprint)
        existing_id = self.repository.lookup(fingerprint)
        if existing_id is None:
            return CheckOut(shifted=False)
        return CheckOut(shifted=True, id=existing_id, count=self.repository.count())

    def claim(self, fingerprint: Any) -> ShiftOut:
        """Assign (or return) the membership number for a fingerprint.

        Raises:
            InvalidInput: If the fingerprint is missing or unusable.
            StoreUnavailable: If the identity store fails.
        """
        fingerprint = self.validate_fingerprint(fingerprint)
        shifter_id, created = self.repository.insert_if_absent(fingerprint)
        if created:
            logger.info("Minted membership number %d", shifter_id)
        else:
            logger.debug("Re-claim of %d by %s", shifter_id, redact_fingerprint(fingerprint))
        return ShiftOut(id=shifter_id, count=self.repository.count())

    def validate_fingerprint(self, fingerprint: Any) -> str:
        """Return the fingerprint if it is a non-empty string within limits."""
        if not isinstance(fingerprint, str) or not fingerprint:
            raise InvalidInput(MISSING_FINGERPRINT)
        if len(fingerprint) > self.max_fingerprint_length:
            raise InvalidInput(FINGERPRINT_TOO_LONG)
        # Postgres text columns cannot store NUL characters.
        if "\x00" in fingerprint:
            raise InvalidInput(INVALID_FINGERPRINT)
        # Lone surrogates decode from JSON but cannot be encoded for the driver.
        try:
            fingerprint.encode("utf-8")
        except UnicodeEncodeError as err:
            raise InvalidInput(INVALID_FINGERPRINT) from err
        return fingerprint
