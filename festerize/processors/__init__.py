"""Batch processing of input files."""

from .batch_runner import BatchRunner

__all__ = ["BatchRunner"]
