"""
Content records: the read-only snapshot the graph builders consume.

A snapshot is the JSON dump of the site map produced by the content fetcher:

    {
      "pageInfoMap": {"<pageId>": {...record...}, ...},
      "databaseInfoMap": {"<dbId>_<locale>": {...}, "<dbId>_default": {...}},
      "navigationTree": [{...record..., "children": [...]}, ...]
    }
"""

import json
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class RecordType(str, Enum):
    ROOT = "Root"
    CATEGORY = "Category"
    POST = "Post"
    HOME = "Home"
    TAG = "Tag"
    DATABASE = "Database"

    @classmethod
    def parse(cls, value: str | None) -> "RecordType":
        """Map a snapshot type string to a RecordType, defaulting to Post."""
        try:
            return cls(value)
        except ValueError:
            return cls.POST


POST_TYPES = frozenset({RecordType.POST, RecordType.HOME})


def resolve_locale(
    requested: str | None, fallback: str, available=None,
) -> str:
    """Return the requested locale, or the fallback when it is unusable.

    A locale is unusable when it is empty or, if `available` is given, not
    one of the available locales.
    """
    if not requested:
        return fallback
    if available is not None and requested not in available:
        return fallback
    return requested


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass
class ContentRecord:
    id: str
    title: str
    type: RecordType
    slug: str = ""
    language: str = ""
    parent_record_id: str | None = None
    parent_container_id: str | None = None
    tags: list[str] = field(default_factory=list)
    cover_image: str | None = None
    description: str | None = None
    date: str | int | float | None = None
    children: list["ContentRecord"] = field(default_factory=list)

    @property
    def is_post(self) -> bool:
        return self.type in POST_TYPES

    @classmethod
    def from_dict(cls, raw: dict, record_id: str | None = None) -> "ContentRecord":
        """Build a record from a snapshot entry (camelCase keys)."""
        rid = record_id or raw.get("pageId") or raw.get("id") or ""
        return cls(
            id=str(rid),
            title=raw.get("title") or "",
            type=RecordType.parse(raw.get("type")),
            slug=raw.get("slug") or "",
            language=raw.get("language") or "",
            parent_record_id=raw.get("parentPageId") or None,
            parent_container_id=raw.get("parentDbId") or None,
            tags=[str(t) for t in (raw.get("tags") or [])],
            cover_image=raw.get("coverImage") or None,
            description=raw.get("description"),
            date=raw.get("date", raw.get("published")),
            children=[cls.from_dict(c) for c in raw.get("children") or []],
        )


@dataclass
class DatabaseInfo:
    """Display metadata for one database container in one locale."""
    name: str | dict[str, str] | None = None
    slug: str | None = None
    cover_image: str | None = None

    def display_name(self, locale: str, default_locale: str) -> str:
        if isinstance(self.name, dict):
            return self.name.get(locale) or self.name.get(default_locale) or "Database"
        if isinstance(self.name, str) and self.name:
            return self.name
        return "Database"

    @classmethod
    def from_dict(cls, raw: dict) -> "DatabaseInfo":
        return cls(
            name=raw.get("name"),
            slug=raw.get("slug") or None,
            cover_image=raw.get("coverImage") or None,
        )


@dataclass
class SiteMap:
    page_info_map: dict[str, ContentRecord] = field(default_factory=dict)
    database_info_map: dict[str, DatabaseInfo] = field(default_factory=dict)
    navigation_tree: list[ContentRecord] = field(default_factory=list)

    def database_info(self, db_id: str, locale: str) -> DatabaseInfo | None:
        """Locale-specific container metadata, else the `_default` variant."""
        info = self.database_info_map.get(f"{db_id}_{locale}")
        if info is None:
            info = self.database_info_map.get(f"{db_id}_default")
        return info

    @classmethod
    def from_dict(cls, raw: dict) -> "SiteMap":
        pages = {
            str(pid): ContentRecord.from_dict(entry, pid)
            for pid, entry in (raw.get("pageInfoMap") or {}).items()
        }
        dbs = {
            str(key): DatabaseInfo.from_dict(entry)
            for key, entry in (raw.get("databaseInfoMap") or {}).items()
        }
        tree = [ContentRecord.from_dict(r) for r in raw.get("navigationTree") or []]
        return cls(page_info_map=pages, database_info_map=dbs, navigation_tree=tree)


def load_site_map(path: Path) -> SiteMap:
    """Load a site map snapshot from JSON."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    site_map = SiteMap.from_dict(raw)
    print(
        f"Loaded {len(site_map.page_info_map)} records, "
        f"{len(site_map.database_info_map)} database entries "
        f"from {path}",
        file=sys.stderr,
    )
    return site_map
