"""
Navigation tree reducers: post counting and post collection over the
tree-shaped view of the site map (records with nested `children`).

Both walks track the record ids on the current path, so a tree that refers
back to one of its own ancestors terminates instead of recursing forever,
while a record listed under two branches is visited in each.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable

from .records import ContentRecord, resolve_locale


@dataclass(frozen=True)
class PostSummary:
    page_id: str
    title: str
    description: str | None
    date: str | int | float | None
    slug: str
    language: str
    cover_image: str | None = None


def count_posts(node: ContentRecord, _ancestors: set[str] | None = None) -> int:
    """Number of Post/Home records in the subtree rooted at `node`."""
    ancestors = set() if _ancestors is None else _ancestors
    if node.id in ancestors:
        return 0
    ancestors.add(node.id)
    count = 1 if node.is_post else 0
    for child in node.children:
        count += count_posts(child, ancestors)
    ancestors.discard(node.id)
    return count


def collect_posts(node: ContentRecord, default_locale: str) -> list[PostSummary]:
    """Depth-first pre-order projection of every Post/Home in the subtree.

    Categories nested inside categories are flattened. The result is in
    traversal order; use `sort_posts_by_date` for a chronological listing.
    """
    posts: list[PostSummary] = []
    ancestors: set[str] = set()

    def visit(item: ContentRecord) -> None:
        if item.id in ancestors:
            return
        ancestors.add(item.id)
        if item.is_post:
            posts.append(PostSummary(
                page_id=item.id,
                title=item.title,
                description=item.description,
                date=item.date,
                slug=item.slug,
                language=resolve_locale(item.language, default_locale),
                cover_image=item.cover_image,
            ))
        for child in item.children:
            visit(child)
        ancestors.discard(item.id)

    visit(node)
    return posts


def parse_date(value) -> datetime | None:
    """Parse an ISO-8601 string or epoch-milliseconds number; None if neither."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None


def sort_posts_by_date(posts: Iterable[PostSummary]) -> list[PostSummary]:
    """Newest first; posts without a usable date go last in their given order."""
    dated = []
    undated = []
    for post in posts:
        parsed = parse_date(post.date)
        if parsed is None:
            undated.append(post)
        else:
            dated.append((parsed, post))
    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [post for _, post in dated] + undated


def find_in_tree(items: Iterable[ContentRecord], page_id: str) -> ContentRecord | None:
    """Depth-first lookup of a record in the navigation tree."""
    stack = list(reversed(list(items)))
    seen: set[str] = set()
    while stack:
        item = stack.pop()
        if item.id in seen:
            continue
        seen.add(item.id)
        if item.id == page_id:
            return item
        stack.extend(reversed(item.children))
    return None
