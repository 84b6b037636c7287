"""Console reporting and logging setup."""

from .reporter import ProgressReporter, configure_logging

__all__ = ["ProgressReporter", "configure_logging"]
