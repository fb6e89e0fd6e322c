from siteGraph import (
    TagSummary,
    all_tags,
    build_tag_graph_data,
    pages_with_tag,
    related_tags,
    top_tags,
)


def _by_id(*records):
    return {r.id: r for r in records}


def test_counts_and_relationships(record):
    data = build_tag_graph_data(_by_id(
        record("p1", tags=["a", "b"]),
        record("p2", tags=["a", "c"]),
    ), "en")
    summary = data.locales["en"]
    assert summary.tag_counts == {"a": 2, "b": 1, "c": 1}
    assert summary.tag_relationships == {"a": ["b", "c"], "b": ["a"], "c": ["a"]}
    assert summary.tag_pages == {"a": ["p1", "p2"], "b": ["p1"], "c": ["p2"]}
    assert summary.total_posts == 2
    assert summary.last_updated > 0


def test_relationships_are_symmetric(record):
    data = build_tag_graph_data(_by_id(
        record("p1", tags=["x", "y", "z"]),
        record("p2", tags=["y", "w"]),
        record("p3", tags=["w", "x", "v"]),
        record("p4", tags=["solo"]),
    ), "en")
    rel = data.locales["en"].tag_relationships
    for a, related in rel.items():
        for b in related:
            assert a in rel[b]
    assert "solo" not in rel


def test_duplicate_tags_count_once_per_record(record):
    data = build_tag_graph_data(_by_id(record("p1", tags=["a", "a", "b"])), "en")
    summary = data.locales["en"]
    assert summary.tag_counts == {"a": 1, "b": 1}
    assert summary.tag_pages["a"] == ["p1"]


def test_tags_are_case_sensitive(record):
    data = build_tag_graph_data(_by_id(record("p1", tags=["Go", "go"])), "en")
    assert data.locales["en"].tag_counts == {"Go": 1, "go": 1}


def test_blank_tags_are_dropped(record):
    data = build_tag_graph_data(_by_id(
        record("p1", tags=["", "  ", "a"]),
        record("p2", tags=["\t"]),
    ), "en")
    summary = data.locales["en"]
    assert summary.tag_counts == {"a": 1}
    assert summary.total_posts == 1


def test_only_posts_and_home_are_scanned(record):
    data = build_tag_graph_data(_by_id(
        record("c1", type="Category", tags=["a"]),
        record("d1", type="Database", tags=["a"]),
        record("h1", type="Home", tags=["a"]),
        record("p1", tags=["a"]),
    ), "en")
    summary = data.locales["en"]
    assert summary.tag_counts == {"a": 2}
    assert summary.tag_pages["a"] == ["h1", "p1"]
    assert data.total_posts == 4


def test_records_partitioned_by_locale(record):
    data = build_tag_graph_data(_by_id(
        record("p1", tags=["a"]),
        record("p2", language="ko", tags=["가"]),
        record("p3", language="", tags=["b"]),
    ), "en")
    assert set(data.locales) == {"en", "ko"}
    assert data.locales["en"].tag_counts == {"a": 1, "b": 1}
    assert data.locales["ko"].tag_counts == {"가": 1}


def test_locale_without_tagged_posts_is_absent(record):
    data = build_tag_graph_data(_by_id(
        record("p1", tags=["a"]),
        record("p2", language="fr"),
    ), "en")
    assert "fr" not in data.locales
    empty = data.locale("fr")
    assert isinstance(empty, TagSummary)
    assert empty.tag_counts == {}
    assert empty.total_posts == 0


def test_empty_input():
    data = build_tag_graph_data({}, "en")
    assert data.locales == {}
    assert data.total_posts == 0


def test_page_lists_are_sorted(record):
    data = build_tag_graph_data(_by_id(
        record("zz", tags=["a"]),
        record("mm", tags=["a"]),
        record("aa", tags=["a"]),
    ), "en")
    assert data.locales["en"].tag_pages["a"] == ["aa", "mm", "zz"]


def test_summary_is_deterministic(record):
    records = _by_id(
        record("p1", tags=["b", "a"]),
        record("p2", tags=["c", "a", "b"]),
    )
    first = build_tag_graph_data(records, "en").locales["en"].to_dict()
    second = build_tag_graph_data(records, "en").locales["en"].to_dict()
    first.pop("lastUpdated")
    second.pop("lastUpdated")
    assert first == second


def test_derived_reads(record):
    data = build_tag_graph_data(_by_id(
        record("p1", tags=["b", "a"]),
        record("p2", tags=["a", "c"]),
        record("p3", tags=["b"]),
        record("p4", tags=["d"]),
    ), "en")
    assert top_tags(data, "en", "en") == [("a", 2), ("b", 2), ("c", 1), ("d", 1)]
    assert top_tags(data, "en", "en", limit=1) == [("a", 2)]
    assert top_tags(data, "fr", "en") == []
    assert related_tags(data, "a", "en", "en") == ["b", "c"]
    assert related_tags(data, "missing", "en", "en") == []
    assert pages_with_tag(data, "b", None, "en") == ["p1", "p3"]


def test_all_tags_falls_back_to_default_locale(record):
    data = build_tag_graph_data(_by_id(
        record("p1", tags=["b", "a"]),
        record("p2", tags=["b"]),
    ), "en")
    assert all_tags(data, "en", "en") == ["b", "a"]
    assert all_tags(data, "ko", "en") == ["b", "a"]
    assert all_tags(build_tag_graph_data({}, "en"), "en", "en") == []


def test_summary_from_dict():
    summary = TagSummary.from_dict({
        "tagCounts": {"a": 2, "b": 1},
        "tagRelationships": {"a": ["b"], "b": ["a"]},
        "tagPages": {"a": ["p1", "p2"], "b": ["p1"]},
        "totalPosts": 2,
        "lastUpdated": 1700000000000,
    })
    assert summary.tag_counts == {"a": 2, "b": 1}
    assert summary.tag_relationships["b"] == ["a"]
    assert summary.total_posts == 2
