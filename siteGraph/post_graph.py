"""
Post graph: the site's containment hierarchy for one locale.

The graph is a tree rooted at the site node: every database container hangs
off the root, and every record gets exactly one inbound edge from its
container, its parent record, or (when neither resolves) the root.
"""

import sys

from .config import SiteConfig
from .constants import (
    DATABASE_LINK_WIDTH,
    HOME_NODE_ID,
    LINK_WIDTH,
    NODE_SIZE,
    POST_GRAPH_COLORS,
)
from .graph_types import GraphData, GraphLink, GraphNode, NodeType
from .records import ContentRecord, RecordType, SiteMap


def _record_node(record_id: str, record: ContentRecord) -> GraphNode:
    tier = "category" if record.type == RecordType.CATEGORY else "post"
    return GraphNode(
        id=record_id,
        name=record.title or "Untitled",
        type=NodeType(record.type.value),
        color=POST_GRAPH_COLORS[tier],
        size=NODE_SIZE[tier],
        url=f"/{record.slug}" if record.slug else "#",
        slug=record.slug or None,
        description=record.description,
        image_url=record.cover_image,
    )


def _choose_parent(
    record_id: str,
    record: ContentRecord,
    records: dict[str, ContentRecord],
    database_ids: set[str],
    valid_ids: set[str],
) -> str | None:
    """Pick the single structural parent of a record; None for the root itself."""
    container = record.parent_container_id
    parent = record.parent_record_id

    if container and container != record_id:
        if not parent:
            if container in database_ids and container in valid_ids:
                return container
            return HOME_NODE_ID
        if parent in records and parent in valid_ids:
            return parent
    elif parent and parent in records and parent in valid_ids:
        return parent

    if record_id == HOME_NODE_ID:
        return None
    return HOME_NODE_ID


def _closes_cycle(child: str, parent: str, parent_of: dict[str, str]) -> bool:
    """True when `child` is already an ancestor of `parent`."""
    seen: set[str] = set()
    current: str | None = parent
    while current is not None and current not in seen:
        if current == child:
            return True
        seen.add(current)
        current = parent_of.get(current)
    return False


def build_post_graph(site_map: SiteMap, locale: str, config: SiteConfig) -> GraphData:
    """Build the post graph for one locale."""
    records = site_map.page_info_map
    if not records:
        return GraphData()

    nodes: list[GraphNode] = []
    links: list[GraphLink] = []
    node_ids: set[str] = set()

    # 1. Root
    nodes.append(GraphNode(
        id=HOME_NODE_ID,
        name=config.name,
        type=NodeType.ROOT,
        color=POST_GRAPH_COLORS["root"],
        size=NODE_SIZE["root"],
        url="/",
        description=config.description or None,
    ))
    node_ids.add(HOME_NODE_ID)

    # 2. Database containers, keyed by their real ID
    database_ids: set[str] = set()
    for db_id in config.database_ids:
        info = site_map.database_info(db_id, locale)
        if info is None or db_id in node_ids:
            continue
        slug = info.slug or db_id
        nodes.append(GraphNode(
            id=db_id,
            name=info.display_name(locale, config.default_locale),
            type=NodeType.DATABASE,
            color=POST_GRAPH_COLORS["database"],
            size=NODE_SIZE["database"],
            url=f"/category/{slug}",
            slug=slug,
            image_url=info.cover_image,
        ))
        node_ids.add(db_id)
        database_ids.add(db_id)

    # 3. Records of this locale
    in_locale: list[tuple[str, ContentRecord]] = []
    for record_id, record in records.items():
        if record.language != locale or record.type == RecordType.DATABASE:
            continue
        if record_id in node_ids:
            print(
                f"  WARNING: record {record_id} reuses an existing node id, skipped",
                file=sys.stderr,
            )
            continue
        nodes.append(_record_node(record_id, record))
        node_ids.add(record_id)
        in_locale.append((record_id, record))

    # 4. Every edge below stays inside this set
    valid_ids = frozenset(node_ids)

    # 5. Root -> database
    for db_id in config.database_ids:
        if db_id in database_ids:
            links.append(GraphLink(
                source=HOME_NODE_ID,
                target=db_id,
                color=POST_GRAPH_COLORS["link"],
                width=DATABASE_LINK_WIDTH,
            ))

    # 6. One parent edge per record
    parent_of: dict[str, str] = {}
    for record_id, record in in_locale:
        parent = _choose_parent(record_id, record, records, database_ids, valid_ids)
        if parent is None:
            continue
        if parent != HOME_NODE_ID and _closes_cycle(record_id, parent, parent_of):
            print(
                f"  WARNING: parent cycle through {record_id} -> {parent}, "
                f"linking {record_id} to the root",
                file=sys.stderr,
            )
            parent = HOME_NODE_ID
        parent_of[record_id] = parent
        links.append(GraphLink(
            source=parent,
            target=record_id,
            color=POST_GRAPH_COLORS["link"],
            width=LINK_WIDTH,
        ))

    return GraphData(nodes=tuple(nodes), links=tuple(links))
