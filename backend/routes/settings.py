"""Health check, launch data directory, and build trigger endpoints."""

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool

from backend.build import run_build_script

from .models import BuildBody

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/data-dir")
async def get_data_dir(request: Request):
    """The data directory passed at launch, or null."""
    return {"dataDir": request.app.state.data_dir.get()}


@router.post("/build")
async def run_build(body: BuildBody):
    """Run <repoDir>/scripts/build.sh and return its output."""
    output = await run_in_threadpool(run_build_script, body.repo_dir)
    return {"output": output}
