"""Category metadata (_meta.json) endpoints."""

from fastapi import APIRouter

from backend import storage

from .models import DataDirBody, SaveMetaBody

router = APIRouter()


@router.post("/meta/read")
async def read_meta(body: DataDirBody):
    """Read the category tree; defaults when _meta.json is absent."""
    return storage.read_meta(body.data_dir)


@router.post("/meta/save")
async def save_meta(body: SaveMetaBody):
    """Overwrite the category tree."""
    storage.save_meta(body.data_dir, body.meta)
    return {"ok": True}
