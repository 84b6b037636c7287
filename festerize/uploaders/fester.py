"""Fester IIIF manifest service uploader implementation."""

from __future__ import annotations

import logging
import os
from typing import Any

import requests
from requests.auth import HTTPBasicAuth
from requests.exceptions import RequestException
from requests_toolbelt.multipart.encoder import MultipartEncoder

from festerize import __version__
from festerize.errors import ConfigError, IOFailure, ServiceUnavailableError
from festerize.models.upload import RawResponse, TransportError, UploadRequest

USERNAME_ENV = "FESTERIZE_USERNAME"
PASSWORD_ENV = "FESTERIZE_PASSWORD"
USER_AGENT = f"Festerize/{__version__}"

logger = logging.getLogger("festerize.uploader")


def get_credentials() -> HTTPBasicAuth:
    """Load Fester Basic auth credentials from the environment.

    Returns:
        HTTPBasicAuth for the configured user

    Raises:
        ConfigError: If either variable is unset or empty
    """
    username = os.getenv(USERNAME_ENV)
    password = os.getenv(PASSWORD_ENV)
    missing = [name for name, value in ((USERNAME_ENV, username), (PASSWORD_ENV, password)) if not value]
    if missing:
        raise ConfigError(
            f"{' and '.join(missing)} not found in environment variables. "
            + "Please add them to your .env file."
        )
    return HTTPBasicAuth(username, password)


class FesterUploader:
    """Handles CSV uploads to the Fester service."""

    def __init__(self, user_agent: str = USER_AGENT) -> None:
        """Initialize the uploader.

        Args:
            user_agent: Default User-Agent header; request headers may override it
        """
        self.user_agent = user_agent

    def _make_request(
        self,
        method: str,
        url: str,
        data: Any = None,
        headers: dict[str, str] | None = None,
        auth: HTTPBasicAuth | None = None,
    ) -> requests.Response:
        """Make a single HTTP request. No retries and no timeout override.

        Args:
            method: HTTP method
            url: Full request URL
            data: Request body (a MultipartEncoder for uploads)
            headers: Headers applied after the defaults
            auth: Basic auth credentials

        Returns:
            Response object

        Raises:
            requests.exceptions.RequestException: If the request fails
        """
        request_headers = {"User-Agent": self.user_agent}

        # A MultipartEncoder carries the boundary in its content type
        if hasattr(data, "content_type"):
            request_headers["Content-Type"] = data.content_type

        if headers:
            request_headers.update(headers)

        return requests.request(method, url, data=data, headers=request_headers, auth=auth)

    def upload(self, request: UploadRequest) -> RawResponse | TransportError:
        """Post one CSV file to Fester and return the raw response.

        Args:
            request: What to upload and where

        Returns:
            RawResponse with the status and body, or TransportError if no
            response could be obtained

        Raises:
            ConfigError: If credentials are missing; no request is made
            IOFailure: If the source file cannot be opened or read
        """
        auth = get_credentials()

        try:
            source = open(request.absolute_path, "rb")
        except OSError as e:
            raise IOFailure(f"Error opening {request.absolute_path}: {e}") from e

        with source:
            fields: list[tuple[str, Any]] = [
                ("file", (request.absolute_path, source, "text/csv")),
                ("iiif-version", f"v{request.api_version}"),
            ]
            if request.image_host:
                fields.append(("iiif-host", request.image_host))
            if request.metadata_update_only:
                fields.append(("metadata-update", "true"))

            encoder = MultipartEncoder(fields=fields)
            logger.debug(
                "Posting CSV to Fester",
                extra={"fields": {"filename": request.display_name, "url": request.target_url}},
            )

            try:
                response = self._make_request(
                    "POST",
                    request.target_url,
                    data=encoder,
                    headers=dict(request.extra_headers),
                    auth=auth,
                )
                body = response.content
            except RequestException as e:
                return TransportError(cause=str(e))
            except OSError as e:
                raise IOFailure(f"Error reading {request.absolute_path}: {e}") from e

        return RawResponse(status_code=response.status_code, body=body)

    def check_status(self, status_url: str, headers: dict[str, str] | None = None) -> int:
        """Check that Fester is up before uploading anything.

        Args:
            status_url: Fester's status endpoint
            headers: Extra request headers

        Returns:
            The 200 status code Fester answered with

        Raises:
            ServiceUnavailableError: If Fester cannot be reached or is not healthy
        """
        try:
            response = self._make_request("GET", status_url, headers=headers)
        except RequestException as e:
            raise ServiceUnavailableError(f"Error making HTTP request to Fester: {e}") from e

        if response.status_code != 200:
            raise ServiceUnavailableError(
                "Error connecting to Fester: Unexpected status code",
                status_code=response.status_code,
            )
        return response.status_code
