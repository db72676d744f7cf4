"""ZIP export and import of resource directories.

Export stores every file of a resource as `<resourceDirName>/<relative path>`.
Import unpacks into `<data_dir>/imported/`, one folder per top-level name in
the archive. A name that already exists there is skipped as a whole; the user
moves imported resources into a category afterwards.

Inside an accepted resource, directory creation is best effort (logged and
skipped). Failing to read an entry or to write a file raises StorageError.
"""

import logging
import zipfile
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from resource_manager.models import ImportFailure, ImportResult

from .core import StorageError

logger = logging.getLogger(__name__)

IMPORT_DIR = "imported"


def export_resources(resource_paths: Iterable[Path | str], output_path: Path | str) -> str:
    """Write the given resource directories into a deflated ZIP. Returns output_path."""
    try:
        with zipfile.ZipFile(output_path, "w", zipfile.ZIP_DEFLATED) as zf:
            for resource_path in resource_paths:
                resource_dir = Path(resource_path)
                if not resource_dir.is_dir():
                    continue
                for file in sorted(resource_dir.rglob("*")):
                    if file.is_file():
                        arcname = PurePosixPath(
                            resource_dir.name, *file.relative_to(resource_dir).parts
                        )
                        zf.write(file, str(arcname))
    except (OSError, zipfile.BadZipFile) as e:
        raise StorageError(f"Failed to write ZIP file: {e}") from e
    return str(output_path)


def _top_level(name: str) -> str:
    return name.split("/", 1)[0]


def _is_unsafe(name: str) -> bool:
    path = PurePosixPath(name)
    return path.is_absolute() or ".." in path.parts or "\\" in name


def _make_dirs(path: Path) -> None:
    """mkdir -p that logs a failure instead of raising."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("cannot create %s: %s", path, e)


def import_resources(zip_path: Path | str, data_dir: Path | str) -> ImportResult:
    try:
        zf = zipfile.ZipFile(zip_path)
    except (OSError, zipfile.BadZipFile) as e:
        raise StorageError(f"Failed to open ZIP file: {e}") from e

    import_root = Path(data_dir) / IMPORT_DIR
    result = ImportResult()
    with zf:
        entries = zf.infolist()

        # dict keeps archive order
        top_names = {_top_level(info.filename): None for info in entries}
        for name in top_names:
            if not name:
                continue
            if _is_unsafe(name):
                result.failed.append(ImportFailure(id=name, error="Unsafe path in archive"))
                continue
            target = import_root / name
            if target.exists():
                result.skipped.append(name)
                continue
            try:
                target.mkdir(parents=True)
            except OSError as e:
                raise StorageError(f"Failed to create directory: {e}") from e
            result.imported.append(name)

        accepted = set(result.imported)
        for info in entries:
            name = info.filename
            if _top_level(name) not in accepted:
                continue
            if _is_unsafe(name):
                logger.warning("refusing unsafe archive entry %s", name)
                result.failed.append(ImportFailure(id=name, error="Unsafe path in archive"))
                continue
            target = import_root / name
            if info.is_dir():
                _make_dirs(target)
                continue
            _make_dirs(target.parent)
            try:
                data = zf.read(info)
            except (OSError, zipfile.BadZipFile) as e:
                raise StorageError(f"Failed to read ZIP entry {name}: {e}") from e
            try:
                target.write_bytes(data)
            except OSError as e:
                raise StorageError(f"Failed to write {name}: {e}") from e

    logger.debug(
        "import %s: imported=%s skipped=%s", zip_path, result.imported, result.skipped
    )
    return result
