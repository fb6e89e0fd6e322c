"""Graph derivation for a static content site: post graph and tag graph."""

from .cache import GraphDataCache
from .config import ConfigError, SiteConfig, load_site_config
from .constants import ALL_TAGS_NODE_ID, HOME_NODE_ID
from .graph_types import GraphData, GraphLink, GraphNode, NodeType
from .nav_tree import (
    PostSummary,
    collect_posts,
    count_posts,
    find_in_tree,
    sort_posts_by_date,
)
from .post_graph import build_post_graph
from .records import (
    ContentRecord,
    DatabaseInfo,
    RecordType,
    SiteMap,
    load_site_map,
    resolve_locale,
)
from .tag_graph import build_tag_graph, node_size
from .tag_summary import (
    TagGraphData,
    TagSummary,
    all_tags,
    build_tag_graph_data,
    pages_with_tag,
    related_tags,
    top_tags,
)

__all__ = [
    "ALL_TAGS_NODE_ID",
    "HOME_NODE_ID",
    "ConfigError",
    "ContentRecord",
    "DatabaseInfo",
    "GraphData",
    "GraphDataCache",
    "GraphLink",
    "GraphNode",
    "NodeType",
    "PostSummary",
    "RecordType",
    "SiteConfig",
    "SiteMap",
    "TagGraphData",
    "TagSummary",
    "all_tags",
    "build_post_graph",
    "build_tag_graph",
    "build_tag_graph_data",
    "collect_posts",
    "count_posts",
    "find_in_tree",
    "load_site_config",
    "load_site_map",
    "node_size",
    "pages_with_tag",
    "related_tags",
    "resolve_locale",
    "sort_posts_by_date",
    "top_tags",
]
