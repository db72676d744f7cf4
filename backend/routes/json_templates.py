"""JSON-template mode endpoints (one JSON file per category)."""

from fastapi import APIRouter

from backend import storage

from .models import (
    BatchDeleteTemplatesBody,
    CreateTemplateBody,
    DataDirBody,
    MoveTemplateBody,
    ReorderTemplatesBody,
    SaveCategoryBody,
    SaveTemplateBody,
    TemplateRefBody,
)

router = APIRouter(prefix="/json-templates")


@router.post("/scan")
async def scan_json_resources(body: DataDirBody):
    """List every template of every category file."""
    return storage.scan_json_resources(body.data_dir)


@router.post("/categories")
async def read_json_categories(body: DataDirBody):
    """List the categories, sorted by order."""
    return storage.read_json_categories(body.data_dir)


@router.post("/read")
async def read_json_template(body: TemplateRefBody):
    """Get one template with its category name."""
    return storage.read_json_template(body.data_dir, body.category_key, body.template_id)


@router.post("/save")
async def save_json_template(body: SaveTemplateBody):
    """Update an existing template."""
    storage.save_json_template(
        body.data_dir, body.category_key, body.template_id,
        body.name, body.description, body.content, body.variables,
    )
    return {"ok": True}


@router.post("/create", status_code=201)
async def create_json_template(body: CreateTemplateBody):
    """Append a new template to a category (created if missing)."""
    path = storage.create_json_template(
        body.data_dir, body.category_key, body.id,
        body.name, body.description, body.content, body.variables,
    )
    return {"path": path}


@router.post("/delete")
async def delete_json_template(body: TemplateRefBody):
    storage.delete_json_template(body.data_dir, body.category_key, body.template_id)
    return {"ok": True}


@router.post("/batch-delete")
async def batch_delete_json_templates(body: BatchDeleteTemplatesBody):
    """Delete "key::id" templates."""
    return {"count": storage.batch_delete_json_templates(body.data_dir, body.paths)}


@router.post("/reorder")
async def reorder_json_templates(body: ReorderTemplatesBody):
    storage.reorder_json_templates(body.data_dir, body.category_key, body.id_order_pairs)
    return {"ok": True}


@router.post("/move")
async def move_json_template(body: MoveTemplateBody):
    """Move a template to another category; its path changes."""
    path = storage.move_json_template(
        body.data_dir, body.from_category, body.template_id, body.to_category
    )
    return {"path": path}


@router.post("/category/save")
async def save_json_category(body: SaveCategoryBody):
    """Create or update a category's name, icon and order."""
    storage.save_json_category(
        body.data_dir, body.category_key, body.name, body.icon, body.order
    )
    return {"ok": True}
