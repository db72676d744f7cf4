"""JSON-template mode: one `<categoryKey>.json` file per category.

A template has no directory of its own; it is identified by
"<categoryKey>::<templateId>", so moving it to another category changes its
identity. Listings skip unreadable category files; reads and writes of a
named category or template raise StorageError.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from resource_manager.models import (
    CategoryDefinition,
    CategoryFile,
    ResourceSummary,
    TemplateDetail,
    TemplateEntry,
)

from .core import StorageError, read_json, write_json
from .scanner import sort_summaries

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_ICON = "📋"
NEW_CATEGORY_ORDER = 999
PATH_SEPARATOR = "::"


def template_path(category_key: str, template_id: str) -> str:
    return f"{category_key}{PATH_SEPARATOR}{template_id}"


def split_template_path(path: str) -> tuple[str, str] | None:
    if PATH_SEPARATOR not in path:
        return None
    category_key, template_id = path.split(PATH_SEPARATOR, 1)
    return category_key, template_id


def _category_path(data_dir: Path | str, category_key: str) -> Path:
    return Path(data_dir) / f"{category_key}.json"


def _read_category(path: Path) -> CategoryFile:
    data = read_json(path, str(path))
    try:
        return CategoryFile.model_validate(data)
    except ValidationError as e:
        raise StorageError(f"Failed to parse JSON {path}: {e}") from e


def _write_category(path: Path, category: CategoryFile) -> None:
    write_json(path, category.model_dump(by_alias=True), str(path))


def _read_or_new_category(path: Path, category_key: str) -> CategoryFile:
    if path.exists():
        return _read_category(path)
    return CategoryFile(
        key=category_key,
        name=category_key,
        icon=DEFAULT_CATEGORY_ICON,
        order=NEW_CATEGORY_ORDER,
    )


def _category_files(data_dir: Path) -> list[CategoryFile]:
    categories = []
    for path in sorted(data_dir.glob("*.json")):
        try:
            categories.append(_read_category(path))
        except StorageError as e:
            logger.warning("skipping category file: %s", e)
    return categories


def _find(category: CategoryFile, template_id: str) -> TemplateEntry:
    for tmpl in category.templates:
        if tmpl.id == template_id:
            return tmpl
    raise StorageError(f"Template {template_id} not found")


def _next_order(category: CategoryFile) -> int:
    return max((t.order for t in category.templates), default=-1) + 1


# ── Reads ────────────────────────────────────────────────


def scan_json_resources(data_dir: Path | str) -> list[ResourceSummary]:
    root = Path(data_dir)
    if not root.exists():
        return []
    summaries = [
        ResourceSummary(
            id=tmpl.id,
            name=tmpl.name,
            description=tmpl.description,
            icon=category.icon,
            major_category=category.key,
            order=tmpl.order,
            path=template_path(category.key, tmpl.id),
        )
        for category in _category_files(root)
        for tmpl in category.templates
    ]
    return sort_summaries(summaries)


def read_json_categories(data_dir: Path | str) -> list[CategoryDefinition]:
    root = Path(data_dir)
    if not root.exists():
        return []
    categories = [
        CategoryDefinition(
            key=category.key,
            name=category.name,
            icon=category.icon or DEFAULT_CATEGORY_ICON,
            order=category.order,
        )
        for category in _category_files(root)
    ]
    return sorted(categories, key=lambda c: c.order)


def read_json_template(
    data_dir: Path | str, category_key: str, template_id: str
) -> TemplateDetail:
    category = _read_category(_category_path(data_dir, category_key))
    tmpl = _find(category, template_id)
    return TemplateDetail(
        id=tmpl.id,
        name=tmpl.name,
        description=tmpl.description,
        content=tmpl.content,
        variables=list(tmpl.variables),
        order=tmpl.order,
        category_key=category.key,
        category_name=category.name,
    )


# ── Writes ───────────────────────────────────────────────


def save_json_template(
    data_dir: Path | str,
    category_key: str,
    template_id: str,
    name: str,
    description: str,
    content: str,
    variables: list[str],
) -> None:
    path = _category_path(data_dir, category_key)
    category = _read_category(path)
    tmpl = _find(category, template_id)
    tmpl.name = name
    tmpl.description = description
    tmpl.content = content
    tmpl.variables = list(variables)
    _write_category(path, category)


def create_json_template(
    data_dir: Path | str,
    category_key: str,
    template_id: str,
    name: str,
    description: str,
    content: str,
    variables: list[str],
) -> str:
    """Append a template, creating the category file if needed. Returns its path."""
    path = _category_path(data_dir, category_key)
    category = _read_or_new_category(path, category_key)
    if any(t.id == template_id for t in category.templates):
        raise StorageError(f"Template ID {template_id} already exists")

    category.templates.append(TemplateEntry(
        id=template_id,
        name=name,
        description=description,
        content=content,
        variables=list(variables),
        order=_next_order(category),
    ))
    _write_category(path, category)
    return template_path(category_key, template_id)


def delete_json_template(data_dir: Path | str, category_key: str, template_id: str) -> None:
    path = _category_path(data_dir, category_key)
    category = _read_category(path)
    before = len(category.templates)
    category.templates = [t for t in category.templates if t.id != template_id]
    if len(category.templates) == before:
        raise StorageError(f"Template {template_id} not found")
    _write_category(path, category)


def batch_delete_json_templates(data_dir: Path | str, paths: Iterable[str]) -> int:
    """Delete "key::id" templates grouped per category file. Returns the count."""
    grouped: dict[str, set[str]] = defaultdict(set)
    for path in paths:
        parts = split_template_path(path)
        if parts is not None:
            grouped[parts[0]].add(parts[1])

    count = 0
    for category_key, ids in grouped.items():
        path = _category_path(data_dir, category_key)
        try:
            category = _read_category(path)
        except StorageError as e:
            logger.warning("batch delete skipped %s: %s", category_key, e)
            continue
        kept = [t for t in category.templates if t.id not in ids]
        deleted = len(category.templates) - len(kept)
        if deleted:
            category.templates = kept
            _write_category(path, category)
            count += deleted
    return count


def reorder_json_templates(
    data_dir: Path | str,
    category_key: str,
    pairs: Iterable[tuple[str, int]],
) -> None:
    """Apply (template_id, order) pairs within one category; unknown ids are ignored."""
    path = _category_path(data_dir, category_key)
    category = _read_category(path)
    by_id = {t.id: t for t in category.templates}
    for template_id, order in pairs:
        if template_id in by_id:
            by_id[template_id].order = order
    _write_category(path, category)


def move_json_template(
    data_dir: Path | str,
    from_category: str,
    template_id: str,
    to_category: str,
) -> str:
    """Move a template to the end of another category. Returns its new path."""
    from_path = _category_path(data_dir, from_category)
    source = _read_category(from_path)
    tmpl = _find(source, template_id)
    source.templates.remove(tmpl)
    _write_category(from_path, source)

    to_path = _category_path(data_dir, to_category)
    target = _read_or_new_category(to_path, to_category)
    tmpl.order = _next_order(target)
    target.templates.append(tmpl)
    _write_category(to_path, target)
    return template_path(to_category, template_id)


def save_json_category(
    data_dir: Path | str,
    category_key: str,
    name: str,
    icon: str,
    order: int,
) -> None:
    """Create or update a category header, keeping its templates."""
    path = _category_path(data_dir, category_key)
    if path.exists():
        category = _read_category(path)
    else:
        category = CategoryFile(key=category_key, name=name)
    category.name = name
    category.icon = icon
    category.order = order
    _write_category(path, category)
