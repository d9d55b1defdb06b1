"""
edge.py — Graph Edge
====================
Connects two nodes with an integer weight and its own directedness.

Design decisions:
  - `source` and `target` are node ids, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - `kind` is stored per-edge: a single Graph freely mixes directed and
    undirected edges, and every algorithm honours each edge's own kind.
  - Weight defaults to 1 — traversals simply never read it.
"""

from enum import Enum


# ---------------------------------------------------------------------------
# Edge kind
# ---------------------------------------------------------------------------
class EdgeKind(Enum):
    DIRECTED   = "directed"     # traversable source → target only
    UNDIRECTED = "undirected"   # traversable both ways

    @classmethod
    def parse(cls, value) -> "EdgeKind":
        """Accept an EdgeKind, its value string, or a `directed` bool."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.DIRECTED if value else cls.UNDIRECTED
        return cls(str(value).lower())


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
class Edge:
    """
    Attributes:
        id     : Integer handed out by the owning Graph's edge counter.
        source : Tail node id.
        target : Head node id.
        weight : Integer cost. Can be negative for Bellman-Ford demos.
        kind   : EdgeKind.
    """

    __slots__ = ("id", "source", "target", "weight", "kind")

    def __init__(
        self,
        edge_id: int,
        source: int,
        target: int,
        weight: int = 1,
        kind: EdgeKind = EdgeKind.UNDIRECTED,
    ):
        self.id:     int      = edge_id
        self.source: int      = source
        self.target: int      = target
        self.weight: int      = weight
        self.kind:   EdgeKind = kind

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def directed(self) -> bool:
        return self.kind is EdgeKind.DIRECTED

    def touches(self, node_id: int) -> bool:
        return node_id in (self.source, self.target)

    def connects(self, node_a: int, node_b: int) -> bool:
        """True if this edge links node_a → node_b (respects directedness)."""
        if self.directed:
            return self.source == node_a and self.target == node_b
        return {self.source, self.target} == {node_a, node_b}

    def clashes_with(self, source: int, target: int, kind: EdgeKind) -> bool:
        """
        De-duplication rule: two directed edges clash on the same ordered
        pair; an undirected edge on either side claims the unordered pair.
        """
        if self.directed and kind is EdgeKind.DIRECTED:
            return self.source == source and self.target == target
        return {self.source, self.target} == {source, target}

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
            "kind":   self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            edge_id=int(data["id"]),
            source=int(data["source"]),
            target=int(data["target"]),
            weight=int(data.get("weight", 1)),
            kind=EdgeKind.parse(data.get("kind", EdgeKind.UNDIRECTED)),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        arrow = " → " if self.directed else " ↔ "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
