"""Resolution and classification of command-line path arguments."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from festerize.errors import PathError

CSV_EXTENSION = ".csv"


@dataclass(frozen=True)
class ResolvedPath:
    """An input path made absolute, with its existence and type classified."""

    absolute_path: Path
    display_name: str
    exists: bool
    has_csv_extension: bool


def has_csv_extension(filename: str) -> bool:
    """
    Check whether a filename ends in a .csv extension, ignoring case.

    Args:
        filename: File name or path to check

    Returns:
        bool: True for names like "a.csv" or "A.CSV", False for "a.txt" or "a"
    """
    return Path(filename).suffix.lower() == CSV_EXTENSION


def _file_exists(path: Path) -> bool:
    try:
        _ = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except ValueError as e:
        raise PathError(f"Invalid path {path!s}: {e}") from e
    except OSError:
        # The entry is there but unreadable; the upload step reports it.
        return True
    return True


def resolve(path_string: str) -> ResolvedPath:
    """
    Resolve a user-supplied path against the working directory and classify it.

    A missing file is not an error here; it is reported through
    ``ResolvedPath.exists`` so the caller can decide what to do with it.

    Args:
        path_string: Path as given on the command line, relative or absolute

    Returns:
        ResolvedPath: The absolute path, its final segment and classification

    Raises:
        PathError: If the path cannot be made absolute
    """
    try:
        absolute_path = Path(os.path.abspath(path_string))
    except (OSError, ValueError) as e:
        raise PathError(f"Error getting absolute path for {path_string!r}: {e}") from e

    display_name = absolute_path.name
    return ResolvedPath(
        absolute_path=absolute_path,
        display_name=display_name,
        exists=_file_exists(absolute_path),
        has_csv_extension=has_csv_extension(display_name),
    )
