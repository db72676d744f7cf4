"""Tests for manifest read/write, create/delete, and batch mutations."""

import json

import pytest

from backend import storage
from resource_manager.models import ContentFile, Manifest


def _manifest(resource_dir):
    return json.loads((resource_dir / "manifest.json").read_text())


# ── Read & Save ──────────────────────────────────────────


def test_save_then_read_roundtrip(data_dir):
    resource_dir = data_dir / "writing" / "essay"
    resource_dir.mkdir(parents=True)
    manifest = Manifest(
        id="essay",
        name="Essay",
        author={"name": "Ada"},
        major_category="writing",
        tags=["long", "formal"],
        order=3,
        enabled=False,
        roles=["editor"],
        created_at="2024-01-01T00:00:00+00:00",
    )
    storage.save_manifest(resource_dir, manifest)
    loaded = storage.read_manifest(resource_dir)
    assert loaded.model_dump() == manifest.model_dump()
    assert loaded.author_name == "Ada"


def test_save_accepts_plain_dict(data_dir):
    resource_dir = data_dir / "r"
    resource_dir.mkdir()
    storage.save_manifest(resource_dir, {"id": "r", "majorCategory": "misc", "order": 2})
    loaded = storage.read_manifest(resource_dir)
    assert loaded.major_category == "misc"
    assert loaded.order == 2
    assert _manifest(resource_dir)["majorCategory"] == "misc"


def test_save_rejects_manifest_without_id(data_dir):
    with pytest.raises(storage.StorageError, match="Invalid manifest"):
        storage.save_manifest(data_dir, {"name": "no id"})


def test_unknown_fields_survive_rewrite(data_dir, make_resource):
    resource_dir = make_resource(data_dir, "cat", "r", customField={"a": 1})
    storage.batch_set_enabled([str(resource_dir)], False)
    on_disk = _manifest(resource_dir)
    assert on_disk["customField"] == {"a": 1}
    assert on_disk["enabled"] is False


def test_read_manifest_missing(data_dir):
    with pytest.raises(storage.StorageError, match="Failed to read manifest"):
        storage.read_manifest(data_dir / "nope")


def test_read_manifest_malformed(data_dir):
    (data_dir / "bad").mkdir()
    (data_dir / "bad" / "manifest.json").write_text("{")
    with pytest.raises(storage.StorageError, match="Failed to parse manifest"):
        storage.read_manifest(data_dir / "bad")


def test_author_string_or_missing():
    assert Manifest(id="a", author="Bob").author_name == "Bob"
    assert Manifest(id="a").author_name == ""
    assert Manifest(id="a", author=None).author_name == ""


# ── Create ───────────────────────────────────────────────


def test_create_resource_in_new_category(data_dir):
    path = storage.create_resource(
        data_dir, "roles", "critic",
        {"id": "critic", "name": "Critic", "order": 7},
        [ContentFile(filename="system-prompt.md", content="Be harsh.")],
    )
    resource_dir = data_dir / "roles" / "critic"
    assert path == str(resource_dir)
    manifest = storage.read_manifest(path)
    # category did not exist: order kept as given
    assert manifest.order == 7
    assert manifest.created_at
    assert manifest.updated_at
    assert (resource_dir / "system-prompt.md").read_text() == "Be harsh."


def test_create_resource_appends_after_max_order(data_dir, make_resource):
    make_resource(data_dir, "roles", "a", order=1)
    make_resource(data_dir, "roles", "b", order=3)
    path = storage.create_resource(data_dir, "roles", "c", {"id": "c", "order": 0})
    assert storage.read_manifest(path).order == 4


def test_create_resource_in_empty_category_gets_zero(data_dir):
    (data_dir / "roles").mkdir()
    path = storage.create_resource(data_dir, "roles", "first", {"id": "first", "order": 9})
    assert storage.read_manifest(path).order == 0


def test_create_resource_ignores_broken_siblings(data_dir, make_resource):
    make_resource(data_dir, "roles", "a", order=2)
    broken = data_dir / "roles" / "broken"
    broken.mkdir()
    (broken / "manifest.json").write_text("not json")
    path = storage.create_resource(data_dir, "roles", "c", {"id": "c"})
    assert storage.read_manifest(path).order == 3


def test_create_resource_keeps_given_timestamps(data_dir):
    path = storage.create_resource(
        data_dir, "x", "r", {"id": "r", "createdAt": "2020-01-01T00:00:00Z"}
    )
    assert storage.read_manifest(path).created_at == "2020-01-01T00:00:00Z"


def test_create_resource_existing_dir(data_dir, make_resource):
    make_resource(data_dir, "roles", "a")
    with pytest.raises(storage.StorageError, match="already exists"):
        storage.create_resource(data_dir, "roles", "a", {"id": "a"})


def test_create_resource_rejects_escaping_filename(data_dir):
    with pytest.raises(storage.StorageError, match="Invalid content file name"):
        storage.create_resource(
            data_dir, "roles", "evil", {"id": "evil"},
            [ContentFile(filename="../outside.md", content="x")],
        )
    assert not (data_dir / "roles" / "evil").exists()


# ── Delete ───────────────────────────────────────────────


def test_delete_resource(data_dir, make_resource):
    resource_dir = make_resource(data_dir, "roles", "a")
    (resource_dir / "notes.md").write_text("x")
    storage.delete_resource(str(resource_dir))
    assert not resource_dir.exists()


def test_delete_resource_missing(data_dir):
    with pytest.raises(storage.StorageError, match="does not exist"):
        storage.delete_resource(data_dir / "gone")


def test_batch_delete_skips_missing(data_dir, make_resource):
    a = make_resource(data_dir, "roles", "a")
    b = make_resource(data_dir, "roles", "b")
    count = storage.batch_delete_resources([str(a), str(data_dir / "nope"), str(b)])
    assert count == 2
    assert not a.exists() and not b.exists()


# ── Reorder / enable ─────────────────────────────────────


def test_reorder_resources(data_dir, make_resource):
    a = make_resource(data_dir, "roles", "a", order=0, updatedAt="old")
    b = make_resource(data_dir, "roles", "b", order=1)
    storage.reorder_resources([(str(a), 1), (str(b), 0), (str(data_dir / "x"), 5)])
    assert _manifest(a)["order"] == 1
    assert _manifest(b)["order"] == 0
    assert _manifest(a)["updatedAt"] != "old"


def test_reorder_stops_on_unreadable_manifest(data_dir, make_resource):
    bad = data_dir / "roles" / "bad"
    bad.mkdir(parents=True)
    (bad / "manifest.json").write_text("{oops")
    b = make_resource(data_dir, "roles", "b", order=1)
    with pytest.raises(storage.StorageError):
        storage.reorder_resources([(str(bad), 0), (str(b), 9)])
    assert _manifest(b)["order"] == 1


def test_batch_set_enabled(data_dir, make_resource):
    a = make_resource(data_dir, "roles", "a")
    b = make_resource(data_dir, "roles", "b", enabled=False)
    count = storage.batch_set_enabled([str(a), str(b), str(data_dir / "missing")], False)
    assert count == 2
    assert _manifest(a)["enabled"] is False
    assert "updatedAt" in _manifest(a)

    storage.batch_set_enabled([str(b)], True)
    assert _manifest(b)["enabled"] is True


# ── Move category ────────────────────────────────────────


def test_batch_move_category(data_dir, make_resource):
    a = make_resource(data_dir, "drafts", "a")
    (a / "content.md").write_text("hello")
    count = storage.batch_move_category([str(a)], "published")
    assert count == 1
    moved = data_dir / "published" / "a"
    assert not a.exists()
    assert _manifest(moved)["majorCategory"] == "published"
    assert (moved / "content.md").read_text() == "hello"


def test_batch_move_same_category_keeps_dir(data_dir, make_resource):
    a = make_resource(data_dir, "drafts", "a")
    assert storage.batch_move_category([str(a)], "drafts") == 1
    assert a.exists()
    assert _manifest(a)["majorCategory"] == "drafts"


def test_batch_move_skips_missing(data_dir, make_resource):
    a = make_resource(data_dir, "drafts", "a")
    count = storage.batch_move_category([str(data_dir / "drafts" / "zzz"), str(a)], "final")
    assert count == 1
    assert (data_dir / "final" / "a").exists()


def test_batch_move_rename_failure_stops_batch(data_dir, make_resource):
    a = make_resource(data_dir, "drafts", "a")
    b = make_resource(data_dir, "drafts", "b")
    # a non-empty directory already sits at the destination of "a"
    make_resource(data_dir, "final", "a")
    with pytest.raises(storage.StorageError, match="Failed to move"):
        storage.batch_move_category([str(a), str(b)], "final")
    assert b.exists()
    assert _manifest(b)["majorCategory"] == "drafts"
