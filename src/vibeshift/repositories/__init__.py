"""Repositories wrapping database access."""

from .shifter_repo import ShifterRepository

__all__ = ["ShifterRepository"]
