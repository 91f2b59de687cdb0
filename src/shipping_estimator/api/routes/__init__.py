"""Route group exports."""

from . import health, shipping

__all__ = ["health", "shipping"]
