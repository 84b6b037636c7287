"""Path and response parsing utilities."""

from .path_resolver import ResolvedPath, has_csv_extension, resolve
from .response_interpreter import extract_error_cause, interpret

__all__ = ["ResolvedPath", "extract_error_cause", "has_csv_extension", "interpret", "resolve"]
