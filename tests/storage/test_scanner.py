"""Tests for directory scanning and order reindexing."""

import json

from backend import storage


def _order(resource_dir):
    return json.loads((resource_dir / "manifest.json").read_text())["order"]


# ── Scan ─────────────────────────────────────────────────


def test_scan_missing_dir(tmp_path):
    assert storage.scan_resources(tmp_path / "nope") == []


def test_scan_two_level_layout(data_dir, make_resource):
    make_resource(data_dir, "writing", "essay", name="Essay", order=1)
    make_resource(data_dir, "writing", "poem", name="Poem", order=0)
    make_resource(data_dir, "coding", "review", name="Review", order=5)

    summaries = storage.scan_resources(data_dir)
    assert [s.id for s in summaries] == ["review", "poem", "essay"]
    assert summaries[0].path == str(data_dir / "coding" / "review")
    assert summaries[0].major_category == "coding"


def test_scan_flat_layout(data_dir, make_resource):
    make_resource(data_dir, "", "standalone", name="Standalone", majorCategory="misc")
    summaries = storage.scan_resources(data_dir)
    assert len(summaries) == 1
    assert summaries[0].path == str(data_dir / "standalone")


def test_scan_skips_malformed_and_hidden(data_dir, make_resource):
    make_resource(data_dir, "writing", "good1", name="A")
    make_resource(data_dir, "writing", "good2", name="B")
    make_resource(data_dir, "coding", "good3", name="C")

    bad_json = data_dir / "writing" / "bad-json"
    bad_json.mkdir()
    (bad_json / "manifest.json").write_text("{ nope")
    no_id = data_dir / "coding" / "no-id"
    no_id.mkdir()
    (no_id / "manifest.json").write_text(json.dumps({"name": "missing id"}))
    (data_dir / "coding" / "no-manifest").mkdir()

    make_resource(data_dir, "_drafts", "hidden1")
    make_resource(data_dir, ".git", "hidden2")
    (data_dir / "_meta.json").write_text("{}")

    summaries = storage.scan_resources(data_dir)
    assert sorted(s.id for s in summaries) == ["good1", "good2", "good3"]


def test_scan_sort_ties_broken_by_name(data_dir, make_resource):
    make_resource(data_dir, "cat", "x", name="Zeta", order=1)
    make_resource(data_dir, "cat", "y", name="Alpha", order=1)
    make_resource(data_dir, "cat", "z", name="Mid", order=0)
    assert [s.name for s in storage.scan_resources(data_dir)] == ["Mid", "Alpha", "Zeta"]


def test_scan_summary_defaults(data_dir, make_resource):
    make_resource(data_dir, "cat", "bare")
    summary = storage.scan_resources(data_dir)[0]
    assert summary.enabled is True
    assert summary.source == "builtin"
    assert summary.tags == []
    assert summary.order == 0


def test_summary_serializes_camel_case(data_dir, make_resource):
    make_resource(data_dir, "cat", "r", subCategory="sub")
    data = storage.scan_resources(data_dir)[0].model_dump(by_alias=True)
    assert data["majorCategory"] == "cat"
    assert data["subCategory"] == "sub"


# ── Reindex ──────────────────────────────────────────────


def test_reindex_by_name(data_dir, make_resource):
    b = make_resource(data_dir, "cat", "dir1", name="b", order=5)
    a = make_resource(data_dir, "cat", "dir2", name="a", order=5)
    c = make_resource(data_dir, "cat", "dir3", name="c", order=5)

    assert storage.reindex_all_orders(data_dir) == 3
    assert (_order(a), _order(b), _order(c)) == (0, 1, 2)


def test_reindex_per_category(data_dir, make_resource):
    x1 = make_resource(data_dir, "one", "x1", name="b", order=10)
    x2 = make_resource(data_dir, "one", "x2", name="a", order=20)
    y1 = make_resource(data_dir, "two", "y1", name="z", order=7)

    assert storage.reindex_all_orders(data_dir) == 3
    assert _order(x2) == 0
    assert _order(x1) == 1
    assert _order(y1) == 0


def test_reindex_skips_unreadable(data_dir, make_resource):
    good = make_resource(data_dir, "cat", "good", name="b", order=9)
    bad = data_dir / "cat" / "bad"
    bad.mkdir()
    (bad / "manifest.json").write_text("nope")

    assert storage.reindex_all_orders(data_dir) == 1
    assert _order(good) == 1  # the unreadable one sorted first (empty name)
    assert (bad / "manifest.json").read_text() == "nope"


def test_reindex_ignores_hidden_and_missing(tmp_path, data_dir, make_resource):
    hidden = make_resource(data_dir, "_archive", "old", order=4)
    assert storage.reindex_all_orders(data_dir) == 0
    assert _order(hidden) == 4
    assert storage.reindex_all_orders(tmp_path / "missing") == 0
