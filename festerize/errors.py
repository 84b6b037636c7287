"""Exceptions raised by the festerize pipeline."""

from __future__ import annotations


class FesterizeError(Exception):
    """Base class for all festerize errors."""
    pass


class ConfigError(FesterizeError):
    """Raised when required configuration, such as credentials, is missing."""
    pass


class PathError(FesterizeError):
    """Raised when a path string cannot be resolved to an absolute path."""
    pass


class IOFailure(FesterizeError):
    """Raised when a local file cannot be read or written."""
    pass


class OutputDirectoryError(FesterizeError):
    """Raised when the output directory cannot be created or was not confirmed."""
    pass


class ServiceUnavailableError(FesterizeError):
    """Raised when the Fester status endpoint does not report healthy."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
