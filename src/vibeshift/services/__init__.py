# src/vibeshift/services/__init__.py
"""Business logic services for the VibeShift counter."""

from .assignment import AssignmentService

__all__ = ["AssignmentService"]
