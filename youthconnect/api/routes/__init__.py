"""API route modules."""

from . import analytics, discovery, health, recommendations, storage

__all__ = ["analytics", "discovery", "health", "recommendations", "storage"]
