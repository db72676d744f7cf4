"""Resource directory endpoints: scan, manifest CRUD, batch ops, content files."""

from fastapi import APIRouter

from backend import storage

from .models import (
    BatchEnabledBody,
    BatchMoveBody,
    CreateResourceBody,
    DataDirBody,
    FilePathBody,
    ReorderBody,
    ResourcePathBody,
    ResourcePathsBody,
    SaveContentBody,
    SaveManifestBody,
)

router = APIRouter()


@router.post("/resources/scan")
async def scan_resources(body: DataDirBody):
    """List every resource under a data directory, sorted by category/order/name."""
    return storage.scan_resources(body.data_dir)


@router.post("/resources/manifest/read")
async def read_manifest(body: ResourcePathBody):
    """Read a resource's full manifest."""
    return storage.read_manifest(body.resource_path).to_json()


@router.post("/resources/manifest/save")
async def save_manifest(body: SaveManifestBody):
    """Overwrite a resource's manifest."""
    storage.save_manifest(body.resource_path, body.manifest)
    return {"ok": True}


@router.post("/resources", status_code=201)
async def create_resource(body: CreateResourceBody):
    """Create a resource directory with its manifest and content files."""
    path = storage.create_resource(
        body.data_dir, body.category, body.id, body.manifest, body.content_files
    )
    return {"path": path}


@router.post("/resources/delete")
async def delete_resource(body: ResourcePathBody):
    """Delete a resource directory."""
    storage.delete_resource(body.resource_path)
    return {"ok": True}


@router.post("/resources/batch-delete")
async def batch_delete_resources(body: ResourcePathsBody):
    """Delete several resource directories; missing ones are skipped."""
    return {"count": storage.batch_delete_resources(body.resource_paths)}


@router.post("/resources/reorder")
async def reorder_resources(body: ReorderBody):
    """Apply (path, order) pairs."""
    storage.reorder_resources(body.id_order_pairs)
    return {"ok": True}


@router.post("/resources/reindex")
async def reindex_all_orders(body: DataDirBody):
    """Renumber every category 0..N-1 by name."""
    return {"count": storage.reindex_all_orders(body.data_dir)}


@router.post("/resources/batch-enabled")
async def batch_set_enabled(body: BatchEnabledBody):
    """Enable or disable several resources."""
    return {"count": storage.batch_set_enabled(body.resource_paths, body.enabled)}


@router.post("/resources/batch-move")
async def batch_move_category(body: BatchMoveBody):
    """Move several resources to another category."""
    return {"count": storage.batch_move_category(body.resource_paths, body.new_category)}


@router.post("/content/read")
async def read_content_file(body: FilePathBody):
    """Read a content file as text."""
    return {"content": storage.read_content_file(body.file_path)}


@router.post("/content/save")
async def save_content_file(body: SaveContentBody):
    """Overwrite a content file."""
    storage.save_content_file(body.file_path, body.content)
    return {"ok": True}
