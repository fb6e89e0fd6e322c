import json

import pytest

from siteGraph import (
    ConfigError,
    ContentRecord,
    RecordType,
    SiteConfig,
    SiteMap,
    load_site_config,
    load_site_map,
    resolve_locale,
)


def test_resolve_locale():
    assert resolve_locale("ko", "en") == "ko"
    assert resolve_locale("", "en") == "en"
    assert resolve_locale(None, "en") == "en"
    assert resolve_locale("fr", "en", ["en", "ko"]) == "en"
    assert resolve_locale("ko", "en", ["en", "ko"]) == "ko"


def test_record_from_snapshot_entry():
    rec = ContentRecord.from_dict({
        "pageId": "ignored",
        "title": "Hello",
        "type": "Post",
        "slug": "hello",
        "language": "en",
        "parentPageId": "cat",
        "parentDbId": "db1",
        "tags": ["a", "b"],
        "coverImage": "/c.png",
        "date": "2024-01-01",
    }, "p1")
    assert rec.id == "p1"
    assert rec.type == RecordType.POST
    assert rec.parent_record_id == "cat"
    assert rec.parent_container_id == "db1"
    assert rec.tags == ["a", "b"]
    assert rec.cover_image == "/c.png"
    assert rec.is_post


def test_record_defaults():
    rec = ContentRecord.from_dict({"pageId": "x", "type": "Weird", "parentPageId": ""})
    assert rec.id == "x"
    assert rec.type == RecordType.POST
    assert rec.parent_record_id is None
    assert rec.tags == []
    assert rec.children == []


def test_site_map_database_lookup():
    site_map = SiteMap.from_dict({
        "pageInfoMap": {"p1": {"title": "P", "type": "Post", "language": "en"}},
        "databaseInfoMap": {
            "db1_ko": {"name": {"ko": "블로그"}, "slug": "blog"},
            "db1_default": {"name": "Blog", "slug": "blog"},
        },
        "navigationTree": [
            {"pageId": "db1", "type": "Database", "children": [{"pageId": "p1", "type": "Post"}]},
        ],
    })
    assert site_map.page_info_map["p1"].id == "p1"
    assert site_map.database_info("db1", "ko").display_name("ko", "en") == "블로그"
    assert site_map.database_info("db1", "en").display_name("en", "en") == "Blog"
    assert site_map.database_info("db2", "en") is None
    assert site_map.navigation_tree[0].children[0].id == "p1"


def test_load_site_map(tmp_path):
    path = tmp_path / "site_map.json"
    path.write_text(json.dumps({"pageInfoMap": {"p1": {"type": "Home"}}}), encoding="utf-8")
    site_map = load_site_map(path)
    assert site_map.page_info_map["p1"].type == RecordType.HOME
    assert site_map.navigation_tree == []


def test_load_site_map_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_site_map(tmp_path / "nope.json")


def test_config_from_dict():
    config = SiteConfig.from_dict({
        "name": "Site",
        "databaseIds": ["db1"],
        "locale": {"localeList": ["ko"], "defaultLocale": "en"},
        "labels": {"en": {"allTags": "All tags"}},
    })
    assert config.locales == ["en", "ko"]
    assert config.database_ids == ["db1"]
    assert config.translator("en")("allTags") == "All tags"
    # ko has no labels: falls back to the default locale's table
    assert config.translator("ko")("allTags") == "All tags"
    assert config.translator("en")("unknown") == "unknown"


@pytest.mark.parametrize("raw", [
    {"locale": {"defaultLocale": "en"}},
    {"name": "Site"},
])
def test_config_requires_name_and_default_locale(raw):
    with pytest.raises(ConfigError):
        SiteConfig.from_dict(raw)


def test_load_site_config(tmp_path):
    path = tmp_path / "site.json"
    path.write_text(json.dumps({"name": "Site", "language": "ko"}), encoding="utf-8")
    config = load_site_config(path)
    assert config.default_locale == "ko"
    assert config.locales == ["ko"]
