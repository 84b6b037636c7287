from __future__ import annotations

import io
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from festerize.models.upload import RawResponse, TransportError, UploadRequest
from festerize.progress.reporter import ProgressReporter
from festerize.uploaders.fester import PASSWORD_ENV, USERNAME_ENV

FESTERIZED_CSV = b"id,url\n1,http://x"
ERROR_PAGE = b"""<html><body>
<h1>Bad Request</h1>
<div id="error-message">Invalid row 3</div>
</body></html>"""


class FakeUploader:
    """Returns scripted responses and remembers what it was asked to upload."""

    def __init__(self, responses: list[RawResponse | TransportError | Exception] | None = None) -> None:
        self.responses = list(responses or [])
        self.requests: list[UploadRequest] = []

    def upload(self, request: UploadRequest) -> RawResponse | TransportError:
        self.requests.append(request)
        response = self.responses.pop(0) if self.responses else RawResponse(201, FESTERIZED_CSV)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def quiet_console() -> Console:
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def reporter(quiet_console: Console) -> ProgressReporter:
    return ProgressReporter(quiet_console)


@pytest.fixture
def logger() -> logging.Logger:
    test_logger = logging.getLogger("festerize.tests")
    test_logger.setLevel(logging.DEBUG)
    return test_logger


@pytest.fixture
def credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(USERNAME_ENV, "user")
    monkeypatch.setenv(PASSWORD_ENV, "secret")


@pytest.fixture
def no_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(USERNAME_ENV, raising=False)
    monkeypatch.delenv(PASSWORD_ENV, raising=False)


@pytest.fixture
def csv_dir(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.csv").write_text("Item ARK,Title,Object Type\nark:/1/a,A,Work\n")
    (src / "b.csv").write_text("Item ARK,Title,Object Type\nark:/1/b,B,Work\n")
    (src / "notes.txt").write_text("not a csv\n")
    return src


def http_response(status_code: int, content: bytes) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    return response
