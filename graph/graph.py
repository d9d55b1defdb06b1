"""
graph.py — Graph Container
===========================
Single source of truth for the graph.  The editing collaborator mutates
it; algorithms only ever read a copy of it.

Responsibilities:
  1. CRUD on nodes & edges                  (add / delete / set weight)
  2. Structural invariants                  (kind-aware de-duplication,
                                             no self-loops, cascade delete)
  3. The designated start node              (cleared when its node goes)
  4. Adjacency view                         (build_adjacency)
  5. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by integer id.  Python dicts
    keep insertion order, which is what makes every traversal reproducible
    for a fixed editing history.
  - Ids come from two counters that only ever grow, so a deleted id is
    never handed out again.
  - Adjacency is NOT maintained incrementally.  build_adjacency() derives
    it from the edge list every time, so there is exactly one place that
    decides how per-edge directedness turns into neighbour lists.
"""

import logging
from typing import Dict, List, NamedTuple, Optional

from graph.node import Node
from graph.edge import Edge, EdgeKind
from graph.errors import UnknownNodeError

logger = logging.getLogger(__name__)


class Adjacent(NamedTuple):
    """One entry of a node's neighbour list."""
    neighbor: int
    weight:   int
    kind:     EdgeKind
    edge_id:  int


Adjacency = Dict[int, List[Adjacent]]


class Graph:
    """
    Attributes:
        nodes : {node_id: Node}   (insertion ordered)
        edges : {edge_id: Edge}   (insertion ordered)
        start : designated start node id, or None
    """

    def __init__(self):
        self.nodes: Dict[int, Node] = {}
        self.edges: Dict[int, Edge] = {}
        self.start: Optional[int]   = None
        self._next_node_id: int     = 1
        self._next_edge_id: int     = 1

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, label: Optional[str] = None) -> int:
        node_id = self._next_node_id
        self._next_node_id += 1
        self.nodes[node_id] = Node(node_id, label)
        return node_id

    def delete_node(self, node_id: int) -> None:
        if node_id not in self.nodes:
            return
        # remove every edge touching this node
        for eid in [eid for eid, e in self.edges.items() if e.touches(node_id)]:
            del self.edges[eid]
        del self.nodes[node_id]
        if self.start == node_id:
            self.start = None

    def require_node(self, node_id: int) -> Node:
        node = self.nodes.get(node_id)
        if node is None:
            raise UnknownNodeError(node_id)
        return node

    def set_start(self, node_id: Optional[int]) -> None:
        if node_id is not None:
            self.require_node(node_id)
        self.start = node_id

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(
        self,
        source: int,
        target: int,
        weight: int = 1,
        kind: EdgeKind = EdgeKind.UNDIRECTED,
    ) -> Optional[int]:
        """
        Insert an edge and return its id.  Returns None — leaving the graph
        untouched — for a self-loop, an unknown endpoint, or a duplicate.
        """
        kind = EdgeKind.parse(kind)
        if source == target:
            logger.debug("Ignoring self-loop on node %s", source)
            return None
        if source not in self.nodes or target not in self.nodes:
            logger.debug("Ignoring edge %s-%s: unknown endpoint", source, target)
            return None
        if self.find_clash(source, target, kind) is not None:
            logger.debug("Ignoring duplicate edge %s-%s (%s)", source, target, kind.value)
            return None

        edge_id = self._next_edge_id
        self._next_edge_id += 1
        self.edges[edge_id] = Edge(edge_id, source, target, weight, kind)
        return edge_id

    def find_clash(self, source: int, target: int, kind: EdgeKind) -> Optional[Edge]:
        for e in self.edges.values():
            if e.clashes_with(source, target, kind):
                return e
        return None

    def delete_edge(self, source: int, target: int) -> int:
        """Remove every edge between the two nodes, in either direction."""
        doomed = [eid for eid, e in self.edges.items() if {e.source, e.target} == {source, target}]
        for eid in doomed:
            del self.edges[eid]
        return len(doomed)

    def set_edge_weight(self, source: int, target: int, weight: int) -> bool:
        edge = self.get_edge_between(source, target)
        if edge is None:
            return False
        edge.weight = weight
        return True

    def get_edge_between(self, a: int, b: int) -> Optional[Edge]:
        """First edge traversable from a to b (direction-aware)."""
        for e in self.edges.values():
            if e.connects(a, b):
                return e
        return None

    # ==================================================================
    # ADJACENCY
    # ==================================================================
    def build_adjacency(self) -> Adjacency:
        return build_adjacency(self)

    def copy(self) -> "Graph":
        return Graph.from_dict(self.to_dict())

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes":        [n.to_dict() for n in self.nodes.values()],
            "edges":        [e.to_dict() for e in self.edges.values()],
            "start":        self.start,
            "next_node_id": self._next_node_id,
            "next_edge_id": self._next_edge_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls()
        for nd in data.get("nodes", []):
            node = Node.from_dict(nd)
            g.nodes[node.id] = node
        for ed in data.get("edges", []):
            edge = Edge.from_dict(ed)
            g.edges[edge.id] = edge
        g.start = data.get("start")
        g._next_node_id = data.get("next_node_id", max(g.nodes, default=0) + 1)
        g._next_edge_id = data.get("next_edge_id", max(g.edges, default=0) + 1)
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edges.values())

    def node_ids(self) -> List[int]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, start={self.start})"


def build_adjacency(graph: Graph) -> Adjacency:
    """
    {node_id: [Adjacent, …]} for every node, in node insertion order.

    Each edge, in insertion order, contributes its forward entry; an
    undirected edge also contributes the reverse entry.  Directedness is
    decided per edge, never per graph.
    """
    adj: Adjacency = {nid: [] for nid in graph.nodes}
    for e in graph.edges.values():
        adj[e.source].append(Adjacent(e.target, e.weight, e.kind, e.id))
        if not e.directed:
            adj[e.target].append(Adjacent(e.source, e.weight, e.kind, e.id))
    return adj
