"""Logging setup for the service process."""

from __future__ import annotations

import logging

from vibeshift.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the running process."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )


def redact_fingerprint(fingerprint: str) -> str:
    """Return a short prefix of a fingerprint suitable for log lines."""
    if len(fingerprint) <= 8:
        return fingerprint
    return f"{fingerprint[:8]}..."
