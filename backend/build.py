"""Runs a repository's `scripts/build.sh` on request from the manager UI."""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

BUILD_SCRIPT = Path("scripts") / "build.sh"


class BuildError(RuntimeError):
    """Raised when the build script is missing, cannot start, or fails."""


def run_build_script(repo_dir: Path | str) -> str:
    """Run build.sh inside repo_dir and return its stdout."""
    repo = Path(repo_dir)
    script = repo / BUILD_SCRIPT
    if not script.exists():
        raise BuildError("build.sh does not exist")

    logger.debug("running %s", script)
    try:
        proc = subprocess.run(
            ["bash", str(script)],
            cwd=repo,
            capture_output=True,
            text=True,
            errors="replace",
        )
    except OSError as e:
        raise BuildError(f"Failed to run build.sh: {e}") from e

    if proc.returncode != 0:
        raise BuildError(f"build.sh failed:\n{proc.stderr}")
    return proc.stdout
