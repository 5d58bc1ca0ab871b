"""HTTP API for the VibeShift counter."""

from .endpoints import shifters_router

__all__ = ["shifters_router"]
