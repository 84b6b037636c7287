"""Sequential upload-and-reconcile processing of CSV files."""

from __future__ import annotations

import logging
from typing import Protocol, final

from festerize.errors import ConfigError, IOFailure, PathError
from festerize.models.batch import (
    COMMAND_ERROR,
    BatchConfig,
    ExitCode,
    ItemResult,
    ItemState,
    RunResult,
    SkipReason,
)
from festerize.models.upload import RawResponse, ServerError, TransportError, UploadRequest
from festerize.output.writer import OutputWriter
from festerize.parsers import path_resolver, response_interpreter
from festerize.progress.reporter import ProgressReporter

# Exit code used when strict mode stops on a file that never reached Fester.
SKIP_EXIT_CODES = {
    SkipReason.PATH_ERROR: ExitCode.FILE_IO_ERROR,
    SkipReason.NOT_FOUND: ExitCode.NONEXISTENT_FILE_SPECIFIED,
    SkipReason.NOT_CSV: ExitCode.NON_CSV_FILE_SPECIFIED,
    SkipReason.CONFIG_ERROR: COMMAND_ERROR,
    SkipReason.READ_ERROR: ExitCode.FILE_IO_ERROR,
}


class Uploader(Protocol):
    def upload(self, request: UploadRequest) -> RawResponse | TransportError: ...


@final
class BatchRunner:
    """Uploads each input file to Fester in order and saves what comes back."""

    def __init__(
        self,
        config: BatchConfig,
        uploader: Uploader,
        writer: OutputWriter,
        logger: logging.Logger,
        reporter: ProgressReporter | None = None,
    ) -> None:
        """Initialize the batch runner.

        Args:
            config: Validated run settings
            uploader: Sends a single file to Fester
            writer: Persists successful responses; its directory must
                already be prepared
            logger: Structured log sink
            reporter: Console output
        """
        self.config = config
        self.uploader = uploader
        self.writer = writer
        self.logger = logger
        self.reporter = reporter or ProgressReporter()

    def run(self, paths: list[str]) -> RunResult:
        """Process every path in order.

        In strict mode the first failure stops the run and its exit code is
        returned; nothing after it is processed. Otherwise every path gets a
        result and the exit code is 0.

        Args:
            paths: Input path strings, already glob-expanded

        Returns:
            RunResult with one item per processed path
        """
        result = RunResult()
        for path_string in paths:
            item, fatal_code = self._process(path_string)
            result.items.append(item)
            if fatal_code is not None and self.config.strict_mode:
                self.logger.debug(
                    "Strict mode: stopping after first failure",
                    extra={"fields": {"filename": item.display_name, "exit_code": int(fatal_code)}},
                )
                result.exit_code = fatal_code
                break
        return result

    def _skip(self, path_string: str, display_name: str, reason: SkipReason, error: str) -> tuple[ItemResult, ExitCode]:
        item = ItemResult(
            input_path=path_string,
            display_name=display_name,
            state=ItemState.SKIPPED,
            skip_reason=reason,
            error=error,
        )
        return item, SKIP_EXIT_CODES[reason]

    def _process(self, path_string: str) -> tuple[ItemResult, ExitCode | None]:
        """Run one path through resolve, upload, interpret and write.

        Returns:
            The item's result and, if it failed, the exit code strict mode
            would stop with
        """
        try:
            resolved = path_resolver.resolve(path_string)
        except PathError as e:
            self.logger.error("Error getting absolute path", extra={"fields": {"path": path_string, "error": str(e)}})
            self.reporter.display_error(f"Cannot resolve {path_string!r}", e)
            return self._skip(path_string, path_string, SkipReason.PATH_ERROR, str(e))

        filename = resolved.display_name

        if not resolved.exists:
            self.logger.error("File does not exist", extra={"fields": {"filename": filename}})
            self.reporter.display_error(f"{filename} does not exist")
            return self._skip(path_string, filename, SkipReason.NOT_FOUND, "File does not exist")

        if not resolved.has_csv_extension:
            self.logger.error("This file is not a CSV file", extra={"fields": {"filename": filename}})
            self.reporter.display_error(f"{filename} is not a CSV file")
            return self._skip(path_string, filename, SkipReason.NOT_CSV, "This file is not a CSV file")

        request = UploadRequest(
            absolute_path=str(resolved.absolute_path),
            display_name=filename,
            target_url=self.config.target_url,
            api_version=self.config.api_version,
            image_host=self.config.image_host,
            metadata_update_only=self.config.metadata_update_only,
            extra_headers=dict(self.config.request_headers),
        )

        self.reporter.display_info(f"Uploading {filename} to {request.target_url}")
        try:
            response = self.uploader.upload(request)
        except ConfigError as e:
            self.logger.error("Missing Fester credentials", extra={"fields": {"filename": filename, "error": str(e)}})
            self.reporter.display_error(f"{filename} was not uploaded: missing credentials", e)
            return self._skip(path_string, filename, SkipReason.CONFIG_ERROR, str(e))
        except IOFailure as e:
            self.logger.error("Error reading file", extra={"fields": {"filename": filename, "error": str(e)}})
            self.reporter.display_error(f"{filename} could not be read", e)
            return self._skip(path_string, filename, SkipReason.READ_ERROR, str(e))

        if isinstance(response, TransportError):
            self.logger.error(
                "There was an error creating and posting the request",
                extra={"fields": {"filename": filename, "error": response.cause}},
            )
            self.reporter.display_error(f"{filename} could not be sent to Fester: {response.cause}")
            item = ItemResult(path_string, filename, ItemState.FAILED, outcome=response, error=response.cause)
            return item, ExitCode.FESTER_UNAVAILABLE

        outcome = response_interpreter.interpret(response.status_code, response.body, self.config.mode)

        if isinstance(outcome, ServerError):
            self.logger.error(
                "Failed to upload file to Fester",
                extra={
                    "fields": {
                        "filename": filename,
                        "status_code": outcome.status_code,
                        "error": outcome.extracted_cause or "",
                    }
                },
            )
            self.reporter.display_error(
                f"Fester rejected {filename} (HTTP {outcome.status_code})"
                + (f": {outcome.extracted_cause}" if outcome.extracted_cause else "")
            )
            item = ItemResult(path_string, filename, ItemState.FAILED, outcome=outcome, error=outcome.extracted_cause)
            return item, ExitCode.FESTER_ERROR_RESPONSE

        self.logger.info("File was uploaded to Fester successfully", extra={"fields": {"filename": filename}})

        try:
            csv_path = self.writer.write(filename, outcome.body)
        except IOFailure as e:
            self.logger.error("Error writing to file", extra={"fields": {"filename": filename, "error": str(e)}})
            self.reporter.display_error(f"Could not save the updated {filename}", e)
            item = ItemResult(path_string, filename, ItemState.FAILED, outcome=outcome, error=str(e))
            return item, ExitCode.FILE_IO_ERROR

        self.logger.debug("Saved updated CSV", extra={"fields": {"filename": filename, "path": str(csv_path)}})
        self.reporter.display_success(f"{filename} was uploaded successfully")
        self.reporter.display_banner(filename)
        return ItemResult(path_string, filename, ItemState.WRITTEN, outcome=outcome), None
