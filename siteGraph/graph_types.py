"""Graph node/link types shared by the post graph and the tag graph."""

from dataclasses import dataclass
from enum import Enum


class NodeType(str, Enum):
    ROOT = "Root"
    DATABASE = "Database"
    CATEGORY = "Category"
    POST = "Post"
    HOME = "Home"
    TAG = "Tag"
    AMBASSADOR = "Ambassador"
    HUB = "Hub"
    LEAF = "Leaf"


@dataclass(frozen=True)
class GraphNode:
    id: str
    name: str
    type: NodeType
    color: str
    size: float
    count: int | None = None
    url: str | None = None
    slug: str | None = None
    description: str | None = None
    image_url: str | None = None

    def to_dict(self) -> dict:
        """Renderer shape: camelCase keys, `val` mirrors `size`, no nulls."""
        out = {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "color": self.color,
            "size": self.size,
            "val": self.size,
        }
        optional = {
            "count": self.count,
            "url": self.url,
            "slug": self.slug,
            "description": self.description,
            "imageUrl": self.image_url,
        }
        out.update({k: v for k, v in optional.items() if v is not None})
        return out


@dataclass(frozen=True)
class GraphLink:
    source: str
    target: str
    color: str
    width: float

    @property
    def key(self) -> tuple[str, str]:
        """Canonical undirected key (sorted endpoint pair)."""
        return (min(self.source, self.target), max(self.source, self.target))

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "target": self.target,
            "color": self.color,
            "width": self.width,
        }


@dataclass(frozen=True)
class GraphData:
    """An immutable graph; callers rebuild instead of patching."""
    nodes: tuple[GraphNode, ...] = ()
    links: tuple[GraphLink, ...] = ()

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [link.to_dict() for link in self.links],
        }

    def node(self, node_id: str) -> GraphNode | None:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None
