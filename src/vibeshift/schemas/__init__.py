# src/vibeshift/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .shifter import CheckOut, CountOut, FingerprintIn, ShiftOut

__all__ = ["CheckOut", "CountOut", "FingerprintIn", "ShiftOut"]
