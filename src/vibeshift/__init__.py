"""VibeShift: fingerprint-deduplicated membership counter."""

__version__ = "0.1.0"
