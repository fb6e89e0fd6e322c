"""Fixed visual settings and reserved node IDs shared by the graph builders."""

HOME_NODE_ID = "__home__"
ALL_TAGS_NODE_ID = "__all_tags__"

NODE_SIZE = {
    "root": 30.0,
    "database": 20.0,
    "category": 12.0,
    "post": 8.0,
}

POST_GRAPH_COLORS = {
    "root": "#8B5CF6",
    "database": "#FF6B6B",
    "category": "#8B5CF6",
    "post": "#3B82F6",
    "link": "#E5E7EB",
}

TAG_GRAPH_COLORS = {
    "root": "#059669",
    "ambassador": "#059669",
    "hub": "#34D399",
    "leaf": "#6EE7B7",
    "tag": "#10B981",
    "hub_link": "#9CA3AF",
    "leaf_link": "#D1D5DB",
}

DATABASE_LINK_WIDTH = 1.5
LINK_WIDTH = 1.0
LEAF_LINK_WIDTH = 0.5
