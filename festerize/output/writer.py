"""Persistence of Fester's updated CSV files."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from rich.console import Console

from festerize.errors import IOFailure, OutputDirectoryError


class OutputWriter:
    """Writes successful Fester responses into the output directory."""

    def __init__(self, output_dir: Path | str, console: Console | None = None) -> None:
        """Initialize the writer.

        Args:
            output_dir: Directory the updated CSV files go into
            console: Rich console instance
        """
        self.output_dir = Path(output_dir)
        self.console = console or Console()

    def prepare(self, confirm: Callable[[str], bool]) -> None:
        """Create the output directory, or confirm reuse of an existing one.

        Args:
            confirm: Asked whether to continue when the directory already exists

        Raises:
            OutputDirectoryError: If the directory cannot be created or the
                user declines to reuse it
        """
        if not self.output_dir.exists():
            self.console.print(f"Output directory {self.output_dir} not found, creating it.")
            try:
                self.output_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise OutputDirectoryError(f"error creating output directory: {e}") from e
            return

        if not self.output_dir.is_dir():
            raise OutputDirectoryError(f"{self.output_dir} exists and is not a directory")

        prompt = (
            f"Output directory {self.output_dir} found, should we continue? "
            + "YES might overwrite any existing output files. (yes/no): "
        )
        if not confirm(prompt):
            raise OutputDirectoryError("aborted")

    def write(self, display_name: str, body: bytes) -> Path:
        """Write a response body to ``output_dir/display_name``, replacing any old copy.

        Raises:
            IOFailure: If the file cannot be created or fully written
        """
        csv_path = self.output_dir / display_name
        try:
            with open(csv_path, "wb") as f:
                written = f.write(body)
        except OSError as e:
            raise IOFailure(f"Error writing to file {csv_path}: {e}") from e

        if written != len(body):
            raise IOFailure(f"Short write to {csv_path}: {written} of {len(body)} bytes")
        return csv_path
