"""Data-dir context, error type, and JSON file helpers."""

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


class StorageError(RuntimeError):
    """An I/O, parse, or serialization failure, with a readable message."""


class DataDirState:
    """The data directory handed to the app at launch, if any.

    Set once when the app is built and read by the /api/data-dir handler,
    which may run on any worker thread.
    """

    def __init__(self, data_dir: Path | str | None = None) -> None:
        self._lock = threading.Lock()
        self._data_dir = str(data_dir) if data_dir is not None else None

    def get(self) -> str | None:
        with self._lock:
            return self._data_dir


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def read_json(path: Path, what: str) -> Any:
    """Load a JSON file. `what` names the file in error messages."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Failed to read {what}: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise StorageError(f"Failed to parse {what}: {e}") from e


def write_json(path: Path, data: Any, what: str) -> None:
    try:
        text = json.dumps(data, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise StorageError(f"Failed to serialize {what}: {e}") from e
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Failed to write {what}: {e}") from e
