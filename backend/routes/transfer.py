"""ZIP export/import endpoints."""

from fastapi import APIRouter

from backend import storage

from .models import ExportBody, ImportBody

router = APIRouter()


@router.post("/export")
async def export_resources(body: ExportBody):
    """Pack resource directories into a ZIP file."""
    return {"path": storage.export_resources(body.resource_paths, body.output_path)}


@router.post("/import")
async def import_resources(body: ImportBody):
    """Unpack a ZIP into <dataDir>/imported/, skipping names already there."""
    return storage.import_resources(body.zip_path, body.data_dir)
