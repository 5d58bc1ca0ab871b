# src/vibeshift/models/__init__.py
"""SQLAlchemy models for the VibeShift counter."""

from .shifter import Shifter

__all__ = ["Shifter"]
