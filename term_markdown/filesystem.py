"""Locate and read Markdown files for display."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSIONS

MAX_FILE_SIZE_ENV_VAR = "TERM_MARKDOWN_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return the read limit in bytes, honouring `TERM_MARKDOWN_MAX_FILE_SIZE`.

    Raises:
        ValueError: If the environment variable is set to anything but a
            positive integer.
    """
    raw_limit = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw_limit is None:
        return default

    try:
        limit = int(raw_limit)
    except ValueError as error:
        raise ValueError(
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {raw_limit!r} (expected positive integer)"
        ) from error
    if limit <= 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {limit}.")
    return limit


def normalize_filepath(raw_path: str) -> Path:
    """Turn a user-supplied path into the absolute path of a Markdown file.

    Args:
        raw_path: Absolute or relative path; ``~`` is expanded.

    Returns:
        Path: Resolved path to an existing regular file.

    Raises:
        ValueError: If nothing exists at the path, it is not a regular file,
            or its extension is not one of `MARKDOWN_EXTENSIONS`.

    Examples:
        normalize_filepath("~/notes/todo.md")
    """
    candidate = Path(raw_path).expanduser()
    try:
        resolved = candidate.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{candidate} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Error resolving {candidate}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")
    if resolved.suffix.lower() not in MARKDOWN_EXTENSIONS:
        raise ValueError(
            f"{resolved} is not a Markdown file.\n"
            f"Supported extensions are: {', '.join(MARKDOWN_EXTENSIONS)}"
        )
    return resolved


def read_markdown(filepath: Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> str:
    """Read a Markdown file as UTF-8 text.

    The file is checked with `os.stat` before it is opened, so devices, pipes
    and sockets are never read and oversized files are refused up front.

    Args:
        filepath: File to read.
        max_size: Largest accepted size in bytes.

    Returns:
        str: Decoded file content.

    Raises:
        IOError: If the file cannot be accessed, is not a regular file, is
            larger than `max_size`, or is not valid UTF-8.

    Examples:
        text = read_markdown(Path("README.md"), max_size=1024 * 1024)
    """
    try:
        file_stat = os.stat(filepath)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    if not stat.S_ISREG(file_stat.st_mode):
        raise IOError(f"{filepath} is not a regular file.")
    if file_stat.st_size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")

    try:
        return filepath.read_text(encoding="utf-8")
    except UnicodeDecodeError as error:
        raise IOError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error
