"""Console output and logging for festerize runs."""

from __future__ import annotations

import logging
import random
from typing import final

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from festerize.models.batch import RunResult

LOGGER_NAME = "festerize"
LOG_LEVELS = {
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "ERROR": logging.ERROR,
}

# Add more awesome characters if needed
BANNER_CHARACTERS = ["🎉", "🎊", "✨", "💯", "😎", "✔️", "👍"]


class FieldFormatter(logging.Formatter):
    """Appends the ``fields`` passed through ``extra`` as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields: dict[str, object] | None = getattr(record, "fields", None)
        if not fields:
            return message
        rendered = " ".join(f"{key}={value!r}" for key, value in fields.items())
        return f"{message} {rendered}"


def configure_logging(level: str = "INFO", console: Console | None = None) -> logging.Logger:
    """
    Build the festerize logger with a fixed level.

    Args:
        level: One of INFO, DEBUG or ERROR
        console: Rich console the log lines are rendered to

    Returns:
        logging.Logger: Logger to pass into the batch runner

    Raises:
        ValueError: If the level is not one of the allowed values
    """
    if level not in LOG_LEVELS:
        raise ValueError("invalid log level. Allowed values are INFO, DEBUG, or ERROR")

    handler = RichHandler(console=console or Console(stderr=True), show_path=False)
    handler.setFormatter(FieldFormatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(LOG_LEVELS[level])
    return logger


@final
class ProgressReporter:
    """Short, human-facing console messages for a festerize run."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the reporter.

        Args:
            console: Rich console instance. If None, creates a new one.
        """
        self.console = console or Console()

    def confirm(self, prompt: str) -> bool:
        """Ask the user a yes/no question on the console.

        Args:
            prompt: Question to show

        Returns:
            True if the user answered yes
        """
        response = self.console.input(f"[bold]{prompt}[/bold]")
        return response.lower().strip() in ("y", "yes")

    def display_banner(self, filename: str) -> None:
        """Celebrate a successful upload."""
        border_char = random.choice(BANNER_CHARACTERS)
        message = f"SUCCESS! Uploaded {filename}"
        width = len(message) // 2 + 3
        self.console.print(border_char * width)
        self.console.print(f"{border_char} {message} {border_char}")
        self.console.print(border_char * width)

    def display_summary(self, result: RunResult) -> None:
        """Display a summary of the run.

        Args:
            result: Results collected by the batch runner
        """
        table = Table(title="Upload Summary")
        table.add_column("Metric", style="cyan")
        table.add_column("Count", style="green")

        table.add_row("Files Written", str(result.written))
        table.add_row("Files Skipped", str(result.skipped))
        table.add_row("Files Failed", str(result.failed))

        self.console.print("\n")
        self.console.print(table)

    def display_error(self, message: str, exception: Exception | None = None) -> None:
        """Display a one-line error message with optional exception details.

        Args:
            message: Error message to display
            exception: Optional exception for additional context
        """
        details = f" [dim]({exception})[/dim]" if exception else ""
        self.console.print(f"[red]Error: {message}[/red]{details}")

    def display_warning(self, message: str) -> None:
        self.console.print(f"[yellow]Warning: {message}[/yellow]")

    def display_success(self, message: str) -> None:
        self.console.print(f"[green]Success: {message}[/green]")

    def display_info(self, message: str) -> None:
        self.console.print(f"[blue]Info: {message}[/blue]")
