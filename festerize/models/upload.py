"""Upload request and outcome data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class UploadMode(Enum):
    """Which Fester endpoint a batch uploads to."""

    COLLECTIONS = "collections"
    THUMBNAILS = "thumbnails"

    @property
    def endpoint(self) -> str:
        return f"/{self.value}"

    @property
    def success_status(self) -> int:
        """HTTP status Fester returns when an upload to this endpoint succeeds."""
        return 200 if self is UploadMode.THUMBNAILS else 201


@dataclass(frozen=True)
class UploadRequest:
    """Everything needed to upload a single CSV file."""

    absolute_path: str
    display_name: str
    target_url: str
    api_version: str
    image_host: str | None = None
    metadata_update_only: bool = False
    extra_headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RawResponse:
    """Status code and fully-read body of a Fester response."""

    status_code: int
    body: bytes


@dataclass(frozen=True)
class Success:
    """Fester accepted the CSV and returned the updated copy."""

    status_code: int
    body: bytes


@dataclass(frozen=True)
class ServerError:
    """Fester answered with a status other than the expected success code."""

    status_code: int
    body: bytes
    extracted_cause: str | None = None


@dataclass(frozen=True)
class TransportError:
    """No HTTP response could be obtained from Fester."""

    cause: str


UploadOutcome = Union[Success, ServerError, TransportError]
