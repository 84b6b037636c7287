"""Output directory handling."""

from .writer import OutputWriter

__all__ = ["OutputWriter"]
