#!/usr/bin/env python3
"""
Festerize

A command-line tool that uploads CSV files to the Fester IIIF manifest service
and saves the updated CSV files Fester sends back.

Usage:
    uv run main.py --iiif-api-version 2 [options] SRC [SRC ...]
"""

from __future__ import annotations

import argparse
import glob
import sys
from typing import NoReturn

from dotenv import load_dotenv
from rich.console import Console

from festerize import __version__
from festerize.errors import ConfigError, OutputDirectoryError, ServiceUnavailableError
from festerize.models.batch import COMMAND_ERROR, BatchConfig, ExitCode
from festerize.output.writer import OutputWriter
from festerize.processors.batch_runner import BatchRunner
from festerize.progress.reporter import LOG_LEVELS, ProgressReporter, configure_logging
from festerize.uploaders.fester import USER_AGENT, FesterUploader, get_credentials

# Load FESTERIZE_USERNAME and FESTERIZE_PASSWORD from a .env file
_ = load_dotenv()

# Initialize Rich console for output
console = Console()

DEFAULT_SERVER = "https://test.ingest.iiif.library.ucla.edu"
IIIF_API_VERSIONS = ("2", "3")

IIIF_API_HELP = """IIIF Presentation API version that Fester should use.

Version 3 may be used for content intended to be viewed exclusively with
Mirador 3. For all other cases, version 2 should be used, especially for any
content intended to be viewed with Universal Viewer."""

STRICT_MODE_HELP = """Exit immediately with an error code if Fester responds with an error, or
if a file on the command line does not exist or does not have a .csv
extension. Any remaining files are left unprocessed."""

DESCRIPTION = """Uploads CSV files to the Fester IIIF manifest service for processing.

Rows with an 'Object Type' of 'Collection' create a IIIF collection. Rows with
an 'Object Type' of 'Work' expand or revise the collection the work belongs to
and create a IIIF manifest for the work. Rows with an 'Object Type' of 'Page'
expand or revise the manifest of the work they belong to, unless
--metadata-update is given, in which case page rows are ignored.

Fester returns each CSV with a 'IIIF Manifest URL' column filled in for the
collection and work rows. The updated files are saved in the output directory.

Order matters: a work's collection, and a page's work, must already have been
festerized (in this CSV or an earlier one), otherwise Fester reports an error."""


class FesterizeArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with the command error exit code."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(int(COMMAND_ERROR), f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = FesterizeArgumentParser(
        prog="festerize",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  uv run main.py -v 2 works.csv              # Upload a single CSV
  uv run main.py -v 3 --strict-mode '*.csv'  # Upload every CSV, stop on the first failure
  uv run main.py -v 2 --thumbnails works.csv # Add default thumbnails instead
        """,
    )

    _ = parser.add_argument(
        "src",
        nargs="*",
        metavar="SRC",
        help="Path to a CSV file or a Unix-style glob like '*.csv'",
    )
    _ = parser.add_argument("--iiif-api-version", "-v", default="", help=IIIF_API_HELP)
    _ = parser.add_argument(
        "--server",
        default=DEFAULT_SERVER,
        help=f"URL of the Fester service dedicated for ingest (default: {DEFAULT_SERVER})",
    )
    _ = parser.add_argument(
        "--out",
        default="output",
        help="Local directory to put the updated CSV (default: output)",
    )
    _ = parser.add_argument("--iiifhost", default="", help="IIIF image server URL (optional)")
    _ = parser.add_argument(
        "--metadata-update",
        "-m",
        action="store_true",
        help="Only update manifest (work) metadata; don't update canvases (pages).",
    )
    _ = parser.add_argument(
        "--thumbnails",
        "-t",
        action="store_true",
        help="Upload to Fester's thumbnail endpoint to add default thumbnails",
    )
    _ = parser.add_argument("--strict-mode", action="store_true", help=STRICT_MODE_HELP)
    _ = parser.add_argument(
        "--loglevel",
        default="INFO",
        help="Log level (INFO, DEBUG, ERROR)",
    )
    _ = parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Reuse an existing output directory without asking",
    )
    _ = parser.add_argument(
        "--skip-status-check",
        action="store_true",
        help="Don't check that Fester is available before uploading",
    )
    _ = parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def expand_sources(patterns: list[str]) -> list[str]:
    """
    Expand Unix-style globs, keeping argument order.

    A pattern that matches nothing is kept as-is so that it is reported as a
    missing file.

    Args:
        patterns: Paths or globs from the command line

    Returns:
        list[str]: Flat list of path strings
    """
    sources: list[str] = []
    for pattern in patterns:
        matches = sorted(glob.glob(pattern))
        sources.extend(matches or [pattern])
    return sources


def fail(message: str, code: ExitCode) -> NoReturn:
    console.print(f"[red]{message}[/red]")
    sys.exit(int(code))


def main(argv: list[str] | None = None) -> None:
    """Main entry point for festerize."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.src:
        console.print("Please provide one or more CSV files")
        parser.print_help()
        sys.exit(int(ExitCode.NO_FILES_SPECIFIED))

    if args.iiif_api_version not in IIIF_API_VERSIONS:
        console.print("IIIF API Version must be specified. Allowed values are 2 or 3")
        console.print(IIIF_API_HELP)
        sys.exit(int(COMMAND_ERROR))

    if args.loglevel not in LOG_LEVELS:
        fail("Invalid log level. Allowed values are INFO, DEBUG, or ERROR.", COMMAND_ERROR)

    logger = configure_logging(args.loglevel)
    reporter = ProgressReporter(console)

    config = BatchConfig(
        server=args.server,
        output_dir=args.out,
        api_version=args.iiif_api_version,
        image_host=args.iiifhost or None,
        metadata_update_only=args.metadata_update,
        thumbnail_mode=args.thumbnails,
        strict_mode=args.strict_mode,
        request_headers={"User-Agent": USER_AGENT},
    )

    writer = OutputWriter(config.output_dir, console)
    try:
        writer.prepare((lambda _prompt: True) if args.yes else reporter.confirm)
    except OutputDirectoryError as e:
        logger.error("Error creating output directory", extra={"fields": {"error": str(e)}})
        fail(f"Output directory {config.output_dir} cannot be used: {e}", ExitCode.INVALID_OUTPUT_SPECIFIED)

    uploader = FesterUploader()
    check_status = not args.skip_status_check
    if check_status:
        try:
            _ = get_credentials()
        except ConfigError as e:
            # Nothing may reach Fester without credentials; each file reports the error.
            logger.warning("Skipping Fester status check", extra={"fields": {"error": str(e)}})
            reporter.display_warning("Fester credentials are missing, skipping the status check")
            check_status = False

    if check_status:
        try:
            status_code = uploader.check_status(config.status_url, headers=config.request_headers)
        except ServiceUnavailableError as e:
            logger.error(str(e), extra={"fields": {"status_code": e.status_code, "url": config.status_url}})
            fail("Fester is unavailable", ExitCode.FESTER_UNAVAILABLE)
        logger.info("Got valid status code connected to Fester", extra={"fields": {"status_code": status_code}})

    runner = BatchRunner(config, uploader, writer, logger, reporter)
    try:
        result = runner.run(expand_sources(args.src))
    except KeyboardInterrupt:
        console.print("\n[yellow]Processing interrupted by user.[/yellow]")
        sys.exit(int(COMMAND_ERROR))

    reporter.display_summary(result)
    sys.exit(int(result.exit_code))


if __name__ == "__main__":
    main()
