"""Batch configuration and run result data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

from festerize.models.upload import UploadMode, UploadOutcome


class ExitCode(IntEnum):
    """Process exit codes used by festerize."""

    SUCCESS = 0
    NO_FILES_SPECIFIED = 1
    NONEXISTENT_FILE_SPECIFIED = 2
    NON_CSV_FILE_SPECIFIED = 3
    FESTER_UNAVAILABLE = 4
    FESTER_ERROR_RESPONSE = 5
    FILE_IO_ERROR = 6
    INVALID_OUTPUT_SPECIFIED = 7


# Generic command and configuration errors share the "no files" code.
COMMAND_ERROR = ExitCode.NO_FILES_SPECIFIED


class SkipReason(Enum):
    """Why a file never reached Fester."""

    PATH_ERROR = "path could not be resolved"
    NOT_FOUND = "file does not exist"
    NOT_CSV = "file is not a CSV file"
    CONFIG_ERROR = "missing configuration"
    READ_ERROR = "file could not be read"


class ItemState(Enum):
    """Terminal state of one input path."""

    SKIPPED = "skipped"
    WRITTEN = "written"
    FAILED = "failed"


@dataclass(frozen=True)
class BatchConfig:
    """Validated, read-only settings for one festerize run."""

    server: str
    output_dir: str = "output"
    api_version: str = "2"
    image_host: str | None = None
    metadata_update_only: bool = False
    thumbnail_mode: bool = False
    strict_mode: bool = False
    request_headers: dict[str, str] = field(default_factory=dict)

    @property
    def mode(self) -> UploadMode:
        return UploadMode.THUMBNAILS if self.thumbnail_mode else UploadMode.COLLECTIONS

    @property
    def target_url(self) -> str:
        return self.server.rstrip("/") + self.mode.endpoint

    @property
    def status_url(self) -> str:
        return self.server.rstrip("/") + "/fester/status"


@dataclass
class ItemResult:
    """What happened to a single input path."""

    input_path: str
    display_name: str
    state: ItemState
    outcome: UploadOutcome | None = None
    skip_reason: SkipReason | None = None
    error: str | None = None


@dataclass
class RunResult:
    """Ordered per-file results of a run and the exit code they produce."""

    items: list[ItemResult] = field(default_factory=list)
    exit_code: ExitCode = ExitCode.SUCCESS

    def _count(self, state: ItemState) -> int:
        return sum(1 for item in self.items if item.state is state)

    @property
    def written(self) -> int:
        return self._count(ItemState.WRITTEN)

    @property
    def skipped(self) -> int:
        return self._count(ItemState.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(ItemState.FAILED)
