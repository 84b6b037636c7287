"""Interpretation of Fester's HTTP responses."""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from festerize.models.upload import ServerError, Success, UploadMode

ERROR_MESSAGE_ID = "error-message"


def extract_error_cause(body: bytes) -> str | None:
    """
    Pull the human-readable failure cause out of a Fester HTML error page.

    Fester puts the cause in an element with the id ``error-message``.

    Args:
        body: Raw response body

    Returns:
        str | None: The element's text, or None if the body is not HTML,
        has no such element, or the element is empty
    """
    if not body:
        return None

    try:
        soup = BeautifulSoup(body, "html.parser")
    except (ParserRejectedMarkup, UnicodeDecodeError):
        return None

    element = soup.find(id=ERROR_MESSAGE_ID)
    if element is None:
        return None

    cause = element.get_text().strip()
    return cause or None


def interpret(status_code: int, body: bytes, mode: UploadMode) -> Success | ServerError:
    """
    Classify a Fester response as a success or a server-side failure.

    Only the success status of the endpoint that was used counts: 201 for
    collection uploads, 200 for thumbnail uploads.

    Args:
        status_code: HTTP status code of the response
        body: Raw response body
        mode: Upload mode the request was made in

    Returns:
        Success | ServerError: The outcome for this upload
    """
    if status_code == mode.success_status:
        return Success(status_code=status_code, body=body)

    return ServerError(
        status_code=status_code,
        body=body,
        extracted_cause=extract_error_cause(body),
    )
