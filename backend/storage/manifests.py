"""Manifest read/write and the resource mutations built on it.

Every mutation reads the whole manifest, changes a few fields, stamps
updatedAt and rewrites the whole file. Errors propagate: a batch stops at
the first resource that cannot be read, written or moved. Paths with no
manifest at all are skipped.
"""

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from resource_manager.models import ContentFile, Manifest

from .core import StorageError, now_iso, read_json, write_json

logger = logging.getLogger(__name__)

MANIFEST_FILE = "manifest.json"


def manifest_path(resource_path: Path | str) -> Path:
    return Path(resource_path) / MANIFEST_FILE


def load_manifest(path: Path) -> Manifest:
    """Parse a manifest file into the typed model."""
    data = read_json(path, "manifest")
    try:
        return Manifest.model_validate(data)
    except ValidationError as e:
        raise StorageError(f"Invalid manifest {path}: {e}") from e


def write_manifest(path: Path, manifest: Manifest) -> None:
    write_json(path, manifest.to_json(), "manifest")


def read_manifest(resource_path: Path | str) -> Manifest:
    return load_manifest(manifest_path(resource_path))


def save_manifest(resource_path: Path | str, manifest: Manifest | dict[str, Any]) -> None:
    if not isinstance(manifest, Manifest):
        try:
            manifest = Manifest.model_validate(manifest)
        except ValidationError as e:
            raise StorageError(f"Invalid manifest: {e}") from e
    write_manifest(manifest_path(resource_path), manifest)


def _max_order(category_dir: Path) -> int:
    """Highest order among readable manifests in a category, -1 if none."""
    max_order = -1
    for child in category_dir.iterdir():
        path = child / MANIFEST_FILE
        if not path.is_file():
            continue
        try:
            manifest = load_manifest(path)
        except StorageError as e:
            logger.warning("ignoring unreadable manifest for ordering: %s", e)
            continue
        max_order = max(max_order, manifest.order)
    return max_order


def _content_target(resource_dir: Path, filename: str) -> Path:
    relative = Path(filename)
    if relative.is_absolute() or ".." in relative.parts or not relative.parts:
        raise StorageError(f"Invalid content file name: {filename!r}")
    return resource_dir / relative


def create_resource(
    data_dir: Path | str,
    category: str,
    resource_id: str,
    manifest: Manifest | dict[str, Any],
    content_files: Iterable[ContentFile] = (),
) -> str:
    """Create data_dir/category/resource_id with its manifest and content files.

    Within an existing category the new resource goes last (max order + 1).
    Returns the new resource directory path.
    """
    category_dir = Path(data_dir) / category
    resource_dir = category_dir / resource_id
    if resource_dir.exists():
        raise StorageError(f"Resource directory already exists: {resource_dir}")

    if not isinstance(manifest, Manifest):
        try:
            manifest = Manifest.model_validate(manifest)
        except ValidationError as e:
            raise StorageError(f"Invalid manifest: {e}") from e
    else:
        manifest = manifest.model_copy(deep=True)

    if category_dir.is_dir():
        manifest.order = _max_order(category_dir) + 1
    timestamp = now_iso()
    if not manifest.created_at:
        manifest.created_at = timestamp
    if not manifest.updated_at:
        manifest.updated_at = timestamp

    files = [(_content_target(resource_dir, f.filename), f.content) for f in content_files]

    try:
        resource_dir.mkdir(parents=True)
    except OSError as e:
        raise StorageError(f"Failed to create directory: {e}") from e
    write_manifest(resource_dir / MANIFEST_FILE, manifest)
    for target, content in files:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write {target.name}: {e}") from e

    logger.debug("created resource %s (order=%d)", resource_dir, manifest.order)
    return str(resource_dir)


def delete_resource(resource_path: Path | str) -> None:
    path = Path(resource_path)
    if not path.exists():
        raise StorageError(f"Resource directory does not exist: {path}")
    try:
        shutil.rmtree(path)
    except OSError as e:
        raise StorageError(f"Failed to delete resource: {e}") from e


def batch_delete_resources(resource_paths: Iterable[Path | str]) -> int:
    count = 0
    for resource_path in resource_paths:
        path = Path(resource_path)
        if not path.exists():
            continue
        try:
            shutil.rmtree(path)
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}") from e
        count += 1
    return count


def _update_each(resource_paths: Iterable[Path | str], **fields: Any) -> list[Path]:
    """Set fields + updatedAt on every existing manifest. Returns the paths touched."""
    touched = []
    for resource_path in resource_paths:
        path = manifest_path(resource_path)
        if not path.exists():
            continue
        manifest = load_manifest(path)
        for name, value in fields.items():
            setattr(manifest, name, value)
        manifest.updated_at = now_iso()
        write_manifest(path, manifest)
        touched.append(Path(resource_path))
    return touched


def reorder_resources(pairs: Iterable[tuple[Path | str, int]]) -> None:
    """Apply explicit (resource_path, order) pairs."""
    for resource_path, order in pairs:
        _update_each([resource_path], order=order)


def batch_set_enabled(resource_paths: Iterable[Path | str], enabled: bool) -> int:
    return len(_update_each(resource_paths, enabled=enabled))


def batch_move_category(resource_paths: Iterable[Path | str], new_category: str) -> int:
    """Set majorCategory and move each resource directory under new_category.

    The data directory is the resource's grandparent (data/<category>/<id>).
    """
    count = 0
    for resource_path in resource_paths:
        if not _update_each([resource_path], major_category=new_category):
            continue
        old_dir = Path(resource_path)
        new_dir = old_dir.parent.parent / new_category / old_dir.name
        if new_dir.resolve() != old_dir.resolve():
            try:
                new_dir.parent.mkdir(parents=True, exist_ok=True)
                old_dir.rename(new_dir)
            except OSError as e:
                raise StorageError(f"Failed to move {old_dir} to {new_dir}: {e}") from e
            logger.debug("moved resource %s -> %s", old_dir, new_dir)
        count += 1
    return count
