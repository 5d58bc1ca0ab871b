"""API endpoint modules."""

from .shifters import router as shifters_router

__all__ = ["shifters_router"]
