"""
标签集合与标签存储测试
"""

import json

import pytest

from hostctl.tags import HostTags, TagSet, apply_tag_ops


# ---------------------------------------------------------------------------
# HostTags
# ---------------------------------------------------------------------------

def test_host_tags_are_case_insensitive_set():
    tags = HostTags(["Web", "web", "DEV"])
    assert len(tags) == 2
    assert "WEB" in tags
    assert "dev" in tags
    assert tags.sorted() == ["DEV", "Web"]


def test_host_tags_discard():
    tags = HostTags(["web"])
    assert tags.discard("WEB")
    assert not tags.discard("web")
    assert len(tags) == 0


def test_apply_tag_ops():
    tags = HostTags(["old", "keep"])
    apply_tag_ops(tags, " +web, -OLD ,dev,, -missing")
    assert tags.sorted() == ["dev", "keep", "web"]


# ---------------------------------------------------------------------------
# TagSet
# ---------------------------------------------------------------------------

def test_get_or_create_updates_hostname_casing():
    tag_set = TagSet()
    tag_set.get_or_create("nas.lan").add("storage")
    tag_set.get_or_create("NAS.lan").add("backup")
    assert len(tag_set) == 1
    assert tag_set.to_dict() == {"NAS.lan": ["backup", "storage"]}


def test_rename_merges_and_drops_old_key():
    tag_set = TagSet.from_dict({"old.lan": ["web", "dev"], "new.lan": ["WEB", "prod"]})
    assert tag_set.rename("OLD.lan", "new.lan")
    assert "old.lan" not in tag_set
    assert tag_set.get("new.lan").sorted() == ["dev", "prod", "WEB"]


def test_rename_without_old_tags_is_noop():
    tag_set = TagSet.from_dict({"other.lan": ["x"]})
    assert not tag_set.rename("old.lan", "new.lan")
    assert "new.lan" not in tag_set


def test_rename_case_only_keeps_tags():
    tag_set = TagSet.from_dict({"host.lan": ["a"]})
    assert tag_set.rename("host.lan", "Host.LAN")
    assert tag_set.to_dict() == {"Host.LAN": ["a"]}


def test_from_dict_merges_case_duplicates():
    tag_set = TagSet.from_dict({"a.lan": ["x"], "A.lan": ["y", "X"], "b.lan": None})
    assert tag_set.get("a.lan").sorted() == ["x", "y"]
    assert tag_set.get("b.lan").sorted() == []


def test_pop():
    tag_set = TagSet.from_dict({"a.lan": ["x"]})
    assert tag_set.pop("A.LAN").sorted() == ["x"]
    assert tag_set.pop("a.lan") is None


# ---------------------------------------------------------------------------
# TagStore
# ---------------------------------------------------------------------------

def test_load_missing_file_is_empty(tag_store, tags_path):
    assert not tags_path.exists()
    assert len(tag_store.load()) == 0


def test_save_creates_directory_and_sorted_json(tag_store, tags_path):
    tag_set = TagSet.from_dict({"zeta.lan": ["b", "A"], "Alpha.lan": ["web"]})
    tag_store.save(tag_set)

    text = tags_path.read_text(encoding="utf-8")
    assert json.loads(text) == {"Alpha.lan": ["web"], "zeta.lan": ["A", "b"]}
    assert text.index("Alpha.lan") < text.index("zeta.lan")
    assert text.startswith("{\n  ")


def test_save_then_load(tag_store):
    tag_store.save(TagSet.from_dict({"nas.lan": ["storage", "Backup"]}))
    loaded = tag_store.load()
    assert "NAS.LAN" in loaded
    assert "backup" in loaded.get("nas.lan")


def test_empty_file_loads_empty(tag_store, tags_path):
    tags_path.parent.mkdir(parents=True)
    tags_path.write_text("", encoding="utf-8")
    assert len(tag_store.load()) == 0


def test_invalid_structure_raises(tag_store, tags_path):
    tags_path.parent.mkdir(parents=True)
    tags_path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        tag_store.load()


@pytest.mark.parametrize("content", [
    '{"a.lan": "web"}',
    '{"a.lan": [1]}',
    '{"a.lan": {"web": true}}',
])
def test_invalid_tag_values_raise(tag_store, tags_path, content):
    tags_path.parent.mkdir(parents=True)
    tags_path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        tag_store.load()
    assert tags_path.read_text(encoding="utf-8") == content


def test_null_tag_list_loads_empty(tag_store, tags_path):
    tags_path.parent.mkdir(parents=True)
    tags_path.write_text('{"a.lan": null}', encoding="utf-8")
    assert tag_store.load().to_dict() == {"a.lan": []}
