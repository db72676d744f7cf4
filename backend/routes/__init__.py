"""FastAPI API endpoints under /api.

Endpoint groups: health + launch data dir + build, resources (scan, manifest
CRUD, batch ops, content files), category metadata, ZIP export/import,
JSON templates, AI generation + AI settings.

Every call is independent: the directory or path it works on comes in the
request body. Domain errors are mapped to HTTP statuses in
register_exception_handlers().
"""

import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from backend.build import BuildError
from backend.storage import StorageError
from resource_manager.ai import AIError

from .ai import router as ai_router
from .categories import router as categories_router
from .json_templates import router as json_templates_router
from .resources import router as resources_router
from .settings import router as settings_router
from .transfer import router as transfer_router

logger = logging.getLogger(__name__)

router = APIRouter()
router.include_router(settings_router)
router.include_router(resources_router)
router.include_router(categories_router)
router.include_router(transfer_router)
router.include_router(json_templates_router)
router.include_router(ai_router)


def register_exception_handlers(app: FastAPI) -> None:
    """Return domain errors as {"detail": message} like HTTPException does."""

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logger.info("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(BuildError)
    async def handle_build_error(request: Request, exc: BuildError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(AIError)
    async def handle_ai_error(request: Request, exc: AIError):
        logger.warning("AI call failed: %s", exc)
        return JSONResponse(status_code=502, content={"detail": str(exc)})
