import datetime
import json

from blogindex.services.content_loader import load_posts
from blogindex.services.index_builder import build_index
from blogindex.services.manifest import build_manifest, find_drafts, write_manifest

NOW = datetime.datetime(2025, 1, 1, tzinfo=datetime.timezone.utc)


def test_build_manifest_lists_published_posts(content_dir):
    loaded = load_posts(content_dir)
    manifest = build_manifest(build_index(loaded.posts, loaded.diagnostics, now=NOW))

    assert [p["slug"] for p in manifest["posts"]] == [
        "post/kubernetes-upgrades",
        "post/linux-tuning",
    ]
    first = manifest["posts"][0]
    assert first["permalink"] == "/post/kubernetes-upgrades/"
    assert first["summary"] == "Upgrading a cluster is mostly about draining nodes."
    assert first["date"] == "2024-03-01T09:00:00-05:00"
    assert manifest["tags"]["Kubernetes"] == [
        "post/kubernetes-upgrades",
        "post/linux-tuning",
    ]
    assert manifest["categories"]["Linux"] == ["post/linux-tuning"]


def test_write_manifest_creates_parent_dirs(tmp_path):
    output = write_manifest({"posts": [], "tags": {}, "categories": {}}, tmp_path / "out" / "posts.json")

    assert json.loads(output.read_text(encoding="utf-8")) == {
        "posts": [],
        "tags": {},
        "categories": {},
    }


def test_find_drafts_lists_draft_paths(content_dir):
    assert find_drafts(load_posts(content_dir)) == ["post/draft-post.md"]
