import json
from pathlib import Path

import pytest


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Empty resource data directory."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """AI settings directory; not created until something is saved."""
    path = tmp_path / "home" / ".aidocplus"
    monkeypatch.setenv("AIDOCPLUS_HOME", str(path))
    return path


@pytest.fixture
def make_resource():
    """Write <root>/<category>/<dir_name>/manifest.json and return the resource dir."""

    def _make(root: Path, category: str, dir_name: str, **fields) -> Path:
        resource_dir = root / category / dir_name if category else root / dir_name
        resource_dir.mkdir(parents=True)
        manifest = {"id": dir_name, "majorCategory": category, **fields}
        (resource_dir / "manifest.json").write_text(json.dumps(manifest, indent=2))
        return resource_dir

    return _make
