"""Route group exports."""

from . import health, reference, routes

__all__ = ["health", "reference", "routes"]
