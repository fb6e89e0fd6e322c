"""
Tag graph: clusters a locale's tags so the rendered graph stays readable.

Tags on two or more records are hubs. Hubs that co-occur form connected
components, and each component sends one ambassador (its most frequent tag,
ties broken by name) to the root. Records whose tags are all leaves get an
ambassador of their own, which the record's other tags attach to. Every
remaining leaf attaches to the hubs it shares a record with.
"""

import math
from typing import Callable
from urllib.parse import quote

import networkx as nx

from .constants import ALL_TAGS_NODE_ID, LEAF_LINK_WIDTH, LINK_WIDTH, TAG_GRAPH_COLORS
from .graph_types import GraphData, GraphLink, GraphNode, NodeType
from .tag_summary import TagSummary, is_valid_tag


def node_size(count: int) -> float:
    """Logarithmic size so frequent tags don't dominate the layout."""
    if count == 1:
        return 1.0
    return math.log(count + 1) * 10 + 5


# ---------------------------------------------------------------------------
# Clustering
# ---------------------------------------------------------------------------

def post_tags(summary: TagSummary, valid: set[str]) -> dict[str, list[str]]:
    """Invert tag_pages into record id -> tags (first-seen order)."""
    by_post: dict[str, list[str]] = {}
    for tag, pages in summary.tag_pages.items():
        if tag not in valid:
            continue
        for page in pages:
            by_post.setdefault(page, []).append(tag)
    return by_post


def hub_clusters(summary: TagSummary, hubs: list[str]) -> list[set[str]]:
    """Connected components of the hub-only co-occurrence graph."""
    g = nx.Graph()
    g.add_nodes_from(hubs)
    for tag, related in summary.tag_relationships.items():
        if tag not in g:
            continue
        for rel in related:
            if rel in g and rel != tag:
                g.add_edge(tag, rel)
    return list(nx.connected_components(g))


def select_ambassadors(
    summary: TagSummary,
    hubs: list[str],
    by_post: dict[str, list[str]],
) -> tuple[dict[str, None], list[tuple[str, str]]]:
    """Pick ambassadors and the isolated-leaf edges hanging off them.

    Returns (ambassadors, isolated_links); ambassadors is an insertion-ordered
    dict used as an ordered set.
    """
    counts = summary.tag_counts
    hub_set = set(hubs)
    ambassadors: dict[str, None] = {}

    for cluster in hub_clusters(summary, hubs):
        ranked = sorted(cluster, key=lambda t: (-counts[t], t))
        ambassadors[ranked[0]] = None

    isolated: list[tuple[str, str]] = []
    for tags in by_post.values():
        if not tags or any(t in hub_set for t in tags):
            continue
        ordered = sorted(tags)
        ambassador = ordered[0]
        ambassadors[ambassador] = None
        for leaf in ordered[1:]:
            isolated.append((ambassador, leaf))

    return ambassadors, isolated


def classify(count: int, is_ambassador: bool) -> NodeType:
    if is_ambassador:
        return NodeType.AMBASSADOR
    if count >= 2:
        return NodeType.HUB
    if count == 1:
        return NodeType.LEAF
    return NodeType.TAG


# ---------------------------------------------------------------------------
# Build
# ---------------------------------------------------------------------------

def build_tag_graph(
    summary: TagSummary | None,
    t: Callable[[str], str],
    locale: str,
) -> GraphData:
    """Build the clustered tag graph for one locale's summary."""
    if summary is None:
        return GraphData()

    counts = summary.tag_counts
    valid_tags = [tag for tag in counts if is_valid_tag(tag)]
    valid = set(valid_tags)
    hubs = [tag for tag in valid_tags if counts[tag] >= 2]
    hub_set = set(hubs)

    by_post = post_tags(summary, valid)
    ambassadors, isolated = select_ambassadors(summary, hubs, by_post)

    nodes: list[GraphNode] = []
    total_tags = len(valid_tags)
    nodes.append(GraphNode(
        id=ALL_TAGS_NODE_ID,
        name=t("allTags"),
        type=NodeType.ROOT,
        color=TAG_GRAPH_COLORS["root"],
        size=node_size(total_tags),
        count=total_tags,
        url=f"/{locale}/all-tags",
    ))

    for tag in valid_tags:
        count = counts[tag]
        kind = classify(count, tag in ambassadors)
        nodes.append(GraphNode(
            id=tag,
            name=tag,
            type=kind,
            color=TAG_GRAPH_COLORS[kind.value.lower()],
            size=node_size(count),
            count=None if kind == NodeType.LEAF else count,
            url=f"/{locale}/tag/{quote(tag, safe='')}",
        ))

    links: list[GraphLink] = []
    seen: set[tuple[str, str]] = set()

    def add(source: str, target: str, color: str, width: float, ordered: bool = True) -> None:
        key = (min(source, target), max(source, target))
        if key in seen:
            return
        seen.add(key)
        if ordered:
            source, target = key
        links.append(GraphLink(source=source, target=target, color=color, width=width))

    # Hub-hub
    for tag, related in summary.tag_relationships.items():
        if tag not in hub_set:
            continue
        for rel in related:
            if rel in hub_set and rel != tag:
                add(tag, rel, TAG_GRAPH_COLORS["hub_link"], LINK_WIDTH)

    # Leaf-hub, for records that carry at least one hub
    for tags in by_post.values():
        local_hubs = [tag for tag in tags if tag in hub_set]
        if not local_hubs:
            continue
        local_leaves = [
            tag for tag in tags if counts[tag] == 1 and tag not in ambassadors
        ]
        for leaf in local_leaves:
            for hub in local_hubs:
                add(leaf, hub, TAG_GRAPH_COLORS["leaf_link"], LEAF_LINK_WIDTH)

    # Isolated leaves
    for ambassador, leaf in isolated:
        add(ambassador, leaf, TAG_GRAPH_COLORS["leaf_link"], LEAF_LINK_WIDTH)

    # Root -> ambassadors
    for ambassador in ambassadors:
        add(ALL_TAGS_NODE_ID, ambassador, TAG_GRAPH_COLORS["leaf_link"],
            LEAF_LINK_WIDTH, ordered=False)

    return GraphData(nodes=tuple(nodes), links=tuple(links))
