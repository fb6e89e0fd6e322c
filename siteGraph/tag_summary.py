"""
Tag summary: per-locale tag frequencies, co-occurrences and a tag→records
reverse index, built in one pass over every content record.
"""

import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from .records import ContentRecord, resolve_locale


def is_valid_tag(tag) -> bool:
    """Empty and whitespace-only tags are never admitted."""
    return isinstance(tag, str) and bool(tag.strip())


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class TagSummary:
    tag_counts: dict[str, int] = field(default_factory=dict)
    tag_relationships: dict[str, list[str]] = field(default_factory=dict)
    tag_pages: dict[str, list[str]] = field(default_factory=dict)
    total_posts: int = 0
    last_updated: int = 0

    @classmethod
    def empty(cls) -> "TagSummary":
        return cls(last_updated=_now_ms())

    def to_dict(self) -> dict:
        return {
            "tagCounts": dict(self.tag_counts),
            "tagRelationships": {k: list(v) for k, v in self.tag_relationships.items()},
            "tagPages": {k: list(v) for k, v in self.tag_pages.items()},
            "totalPosts": self.total_posts,
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> "TagSummary":
        return cls(
            tag_counts={str(k): int(v) for k, v in (raw.get("tagCounts") or {}).items()},
            tag_relationships={
                str(k): list(v) for k, v in (raw.get("tagRelationships") or {}).items()
            },
            tag_pages={str(k): list(v) for k, v in (raw.get("tagPages") or {}).items()},
            total_posts=int(raw.get("totalPosts") or 0),
            last_updated=int(raw.get("lastUpdated") or 0),
        )


@dataclass
class TagGraphData:
    locales: dict[str, TagSummary] = field(default_factory=dict)
    total_posts: int = 0
    last_updated: int = 0

    def locale(self, code: str) -> TagSummary:
        """Summary for one locale; an empty summary when the locale has none."""
        summary = self.locales.get(code)
        return summary if summary is not None else TagSummary.empty()

    def to_dict(self) -> dict:
        return {
            "locales": {k: v.to_dict() for k, v in self.locales.items()},
            "totalPosts": self.total_posts,
            "lastUpdated": self.last_updated,
        }


# ---------------------------------------------------------------------------
# Build
# ---------------------------------------------------------------------------

def build_locale_summary(records: Iterable[tuple[str, ContentRecord]]) -> TagSummary | None:
    """Summarize one locale's records; None when no record qualifies."""
    tag_counts: dict[str, int] = {}
    relationships: dict[str, set[str]] = defaultdict(set)
    pages: dict[str, set[str]] = defaultdict(set)
    total = 0

    for record_id, record in records:
        if not record.is_post:
            continue
        # dict.fromkeys keeps first-seen order while dropping duplicates
        tags = list(dict.fromkeys(t for t in record.tags if is_valid_tag(t)))
        if not tags:
            continue
        total += 1

        for tag in tags:
            tag_counts[tag] = tag_counts.get(tag, 0) + 1
            pages[tag].add(record_id)

        for i, tag_a in enumerate(tags):
            for tag_b in tags[i + 1:]:
                relationships[tag_a].add(tag_b)
                relationships[tag_b].add(tag_a)

    if total == 0:
        return None

    return TagSummary(
        tag_counts=tag_counts,
        tag_relationships={tag: sorted(rel) for tag, rel in relationships.items()},
        tag_pages={tag: sorted(ids) for tag, ids in pages.items()},
        total_posts=total,
        last_updated=_now_ms(),
    )


def build_tag_graph_data(
    page_info_map: dict[str, ContentRecord], default_locale: str,
) -> TagGraphData:
    """Partition records by locale and summarize each partition."""
    by_locale: dict[str, list[tuple[str, ContentRecord]]] = defaultdict(list)
    for record_id, record in page_info_map.items():
        locale = resolve_locale(record.language, default_locale)
        by_locale[locale].append((record_id, record))

    locales: dict[str, TagSummary] = {}
    for locale, records in by_locale.items():
        summary = build_locale_summary(records)
        if summary is not None:
            locales[locale] = summary

    return TagGraphData(
        locales=locales,
        total_posts=len(page_info_map),
        last_updated=_now_ms(),
    )


# ---------------------------------------------------------------------------
# Derived reads
# ---------------------------------------------------------------------------

def _locale_summary(data: TagGraphData, locale: str | None, default_locale: str) -> TagSummary | None:
    return data.locales.get(resolve_locale(locale, default_locale))


def top_tags(
    data: TagGraphData, locale: str | None, default_locale: str, limit: int = 20,
) -> list[tuple[str, int]]:
    """Most frequent tags, count descending then name ascending."""
    summary = _locale_summary(data, locale, default_locale)
    if summary is None:
        return []
    ranked = sorted(summary.tag_counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return ranked[:limit]


def related_tags(
    data: TagGraphData, tag: str, locale: str | None, default_locale: str,
) -> list[str]:
    summary = _locale_summary(data, locale, default_locale)
    if summary is None:
        return []
    return list(summary.tag_relationships.get(tag, []))


def pages_with_tag(
    data: TagGraphData, tag: str, locale: str | None, default_locale: str,
) -> list[str]:
    summary = _locale_summary(data, locale, default_locale)
    if summary is None:
        return []
    return list(summary.tag_pages.get(tag, []))


def all_tags(data: TagGraphData, locale: str | None, default_locale: str) -> list[str]:
    """Every tag of the locale (or of the default locale when it has none)."""
    summary = _locale_summary(data, locale, default_locale)
    if summary is None or not summary.tag_counts:
        summary = data.locales.get(default_locale)
    if summary is None:
        return []
    counts = summary.tag_counts
    return sorted(
        (t for t in counts if is_valid_tag(t)),
        key=lambda t: (-counts[t], t),
    )
