"""Uploaders for the Fester service."""

from .fester import FesterUploader, get_credentials

__all__ = ["FesterUploader", "get_credentials"]
