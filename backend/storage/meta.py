"""Category metadata: the `_meta.json` file at the root of a data directory."""

from pathlib import Path

from pydantic import ValidationError

from resource_manager.models import MetaConfig

from .core import StorageError, read_json, write_json

META_FILE = "_meta.json"
DEFAULT_SCHEMA_VERSION = "1.0"


def read_meta(data_dir: Path | str) -> MetaConfig:
    """Read the category tree. A missing file means no categories yet."""
    path = Path(data_dir) / META_FILE
    if not path.exists():
        return MetaConfig(schema_version=DEFAULT_SCHEMA_VERSION)
    data = read_json(path, META_FILE)
    try:
        return MetaConfig.model_validate(data)
    except ValidationError as e:
        raise StorageError(f"Failed to parse {META_FILE}: {e}") from e


def save_meta(data_dir: Path | str, meta: MetaConfig) -> None:
    write_json(Path(data_dir) / META_FILE, meta.model_dump(by_alias=True), META_FILE)
