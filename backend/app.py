import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from backend.routes import register_exception_handlers, router
from backend.storage import DataDirState, default_config_dir

load_dotenv(Path(__file__).parent.parent / ".env")


def create_app(
    data_dir: Path | str | None = None,
    config_dir: Path | str | None = None,
) -> FastAPI:
    """Build the API app.

    data_dir is the directory handed over at launch (DATA_DIR env var when
    omitted); the GUI asks for it via /api/data-dir and then passes
    directories explicitly on every call. config_dir holds the AI settings
    (AIDOCPLUS_HOME or ~/.aidocplus when omitted).
    """
    launch_dir = data_dir if data_dir is not None else os.getenv("DATA_DIR") or None

    app = FastAPI(title="Resource Manager")
    app.state.data_dir = DataDirState(launch_dir)
    app.state.config_dir = Path(config_dir) if config_dir is not None else default_config_dir()
    register_exception_handlers(app)
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses DATA_DIR / AIDOCPLUS_HOME env vars)
app = create_app()
