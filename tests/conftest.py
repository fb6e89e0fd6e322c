import pytest

from siteGraph import ContentRecord, RecordType, SiteConfig, SiteMap


def _record(
    record_id, type="Post", language="en", tags=None, parent=None,
    container=None, title=None, children=None, date=None, slug=None,
):
    return ContentRecord(
        id=record_id,
        title=title or record_id.title(),
        type=RecordType(type),
        slug=record_id if slug is None else slug,
        language=language,
        parent_record_id=parent,
        parent_container_id=container,
        tags=list(tags or []),
        date=date,
        children=list(children or []),
    )


@pytest.fixture
def record():
    return _record


@pytest.fixture
def config():
    return SiteConfig(
        name="Test Site",
        default_locale="en",
        locales=["en", "ko"],
        description="A site about things",
        database_ids=["db1"],
        labels={"en": {"allTags": "All tags"}, "ko": {"allTags": "전체 태그"}},
    )


@pytest.fixture
def site_map_of():
    def build(*records, databases=None, tree=None):
        return SiteMap(
            page_info_map={r.id: r for r in records},
            database_info_map=dict(databases or {}),
            navigation_tree=list(tree or []),
        )
    return build
