"""Resource Manager — launcher. Starts the backend API the GUI shell talks to."""

import argparse
import os
import signal
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "127.0.0.1")
BACKEND_PORT = os.getenv("BACKEND_PORT", "13015")


def main():
    parser = argparse.ArgumentParser(description="Resource Manager backend launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Resource data directory reported to the GUI")
    parser.add_argument("--config-dir", type=Path, default=None,
                        help="AI settings directory (default: ~/.aidocplus)")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", default=BACKEND_PORT)
    parser.add_argument("--reload", action="store_true",
                        help="Restart on source changes")
    args = parser.parse_args()

    # The app reads its launch settings from the environment
    env = os.environ.copy()
    if args.data_dir:
        env["DATA_DIR"] = str(args.data_dir.resolve())
    if args.config_dir:
        env["AIDOCPLUS_HOME"] = str(args.config_dir.resolve())

    cmd = [sys.executable, "-m", "uvicorn", "backend.app:app",
           "--host", args.host, "--port", str(args.port)]
    if args.reload:
        cmd.append("--reload")

    print(f"Starting backend on http://{args.host}:{args.port} ...")
    proc = subprocess.Popen(cmd, cwd=ROOT, env=env)

    def shutdown(*_):
        print("\nShutting down...")
        proc.terminate()
        proc.wait()
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    sys.exit(proc.wait())


if __name__ == "__main__":
    main()
