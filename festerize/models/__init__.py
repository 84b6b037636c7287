"""Data models for festerize."""

from .batch import BatchConfig, ExitCode, ItemResult, ItemState, RunResult, SkipReason
from .upload import (
    RawResponse,
    ServerError,
    Success,
    TransportError,
    UploadMode,
    UploadOutcome,
    UploadRequest,
)

__all__ = [
    "BatchConfig",
    "ExitCode",
    "ItemResult",
    "ItemState",
    "RawResponse",
    "RunResult",
    "ServerError",
    "SkipReason",
    "Success",
    "TransportError",
    "UploadMode",
    "UploadOutcome",
    "UploadRequest",
]
