"""Content files that sit next to a resource's manifest (prompt text, README, ...)."""

from pathlib import Path

from .core import StorageError


def read_content_file(file_path: Path | str) -> str:
    try:
        return Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f"Failed to read file: {e}") from e


def save_content_file(file_path: Path | str, content: str) -> None:
    try:
        Path(file_path).write_text(content, encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Failed to write file: {e}") from e
