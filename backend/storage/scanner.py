"""Directory scanning and per-category order reindexing.

Both walk the same layout:

  <data_dir>/
    _meta.json               skipped (leading "_")
    .git/                    skipped (leading ".")
    <resource>/manifest.json flat layout: the directory is a resource
    <category>/
      <resource>/manifest.json

Both are best-effort: a manifest that cannot be read or parsed is logged and
left out, never allowed to abort the whole pass.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

from resource_manager.models import ResourceSummary

from .core import StorageError
from .manifests import MANIFEST_FILE, load_manifest, write_manifest

logger = logging.getLogger(__name__)


def _is_skipped(name: str) -> bool:
    return name.startswith("_") or name.startswith(".")


def _subdirs(path: Path) -> list[Path]:
    return sorted(p for p in path.iterdir() if p.is_dir())


def _list_root(data_dir: Path) -> list[Path]:
    try:
        return _subdirs(data_dir)
    except OSError as e:
        raise StorageError(f"Failed to read directory {data_dir}: {e}") from e


def _resource_dirs(data_dir: Path) -> Iterator[Path]:
    for top in _list_root(data_dir):
        if _is_skipped(top.name):
            continue
        if (top / MANIFEST_FILE).exists():
            yield top
            continue
        try:
            children = _subdirs(top)
        except OSError as e:
            logger.warning("cannot list %s: %s", top, e)
            continue
        for child in children:
            if (child / MANIFEST_FILE).exists():
                yield child


def sort_summaries(summaries: list[ResourceSummary]) -> list[ResourceSummary]:
    """Order by (category, order, name)."""
    return sorted(summaries, key=lambda s: (s.major_category, s.order, s.name))


def scan_resources(data_dir: Path | str) -> list[ResourceSummary]:
    root = Path(data_dir)
    logger.debug("scan_resources data_dir=%s", root)
    if not root.exists():
        return []

    summaries = []
    for resource_dir in _resource_dirs(root):
        try:
            manifest = load_manifest(resource_dir / MANIFEST_FILE)
        except StorageError as e:
            logger.warning("skipping resource %s: %s", resource_dir, e)
            continue
        summaries.append(manifest.to_summary(str(resource_dir)))
    return sort_summaries(summaries)


def _manifest_name(resource_dir: Path) -> str:
    try:
        return load_manifest(resource_dir / MANIFEST_FILE).name
    except StorageError:
        return ""


def reindex_all_orders(data_dir: Path | str) -> int:
    """Renumber every category 0..N-1 by manifest name.

    Returns the number of manifests rewritten.
    """
    root = Path(data_dir)
    if not root.exists():
        return 0

    total = 0
    for category_dir in _list_root(root):
        if _is_skipped(category_dir.name):
            continue
        try:
            children = _subdirs(category_dir)
        except OSError as e:
            logger.warning("cannot list %s: %s", category_dir, e)
            continue
        resources = [d for d in children if (d / MANIFEST_FILE).exists()]
        if not resources:
            continue

        resources.sort(key=_manifest_name)
        for order, resource_dir in enumerate(resources):
            path = resource_dir / MANIFEST_FILE
            try:
                manifest = load_manifest(path)
                manifest.order = order
                write_manifest(path, manifest)
            except StorageError as e:
                logger.warning("reindex skipped %s: %s", resource_dir, e)
                continue
            total += 1
        logger.debug("reindexed %s (%d resources)", category_dir.name, len(resources))
    return total
