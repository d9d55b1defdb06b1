"""
union_find.py — Union-Find / Connected Components
==================================================
Disjoint sets over every node: `find` with path compression, `union`
by rank.  Edges are processed strictly in insertion order and their
direction is ignored — this answers "which nodes are connected", it
does NOT sort by weight and so never builds a minimum spanning tree.

Yields a PathSnapshot each time an edge merges two components (the
snapshot holds every merging edge so far), then
Outcome(COMPONENT_COUNT).  No start node needed.
"""

from typing import Dict, Generator, List, Optional

from graph import Graph
from algorithms.step import Event, Outcome, OutcomeKind, PathEdge, PathSnapshot


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Components(graph):",                      # 0
    "    for v in V: parent[v] ← v; rank[v] ← 0",  # 1
    "    for each edge (u, v) in insertion order:", # 2
    "        if find(u) ≠ find(v):",               # 3
    "            union(u, v)",                     # 4
    "            highlight(u, v)",                 # 5
    "    return |{find(v) for v in V}|",           # 6
]


# ---------------------------------------------------------------------------
# Disjoint sets
# ---------------------------------------------------------------------------
class DisjointSet:
    """
    Attributes:
        parent : {node_id: parent node_id} — roots point at themselves.
        rank   : {node_id: upper bound on tree height}
        count  : number of disjoint sets.
    """

    def __init__(self, items):
        self.parent: Dict[int, int] = {x: x for x in items}
        self.rank:   Dict[int, int] = {x: 0 for x in self.parent}
        self.count:  int            = len(self.parent)

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # path compression
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: int, b: int) -> bool:
        """Merge the sets of a and b.  False if they were already one set."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        self.count -= 1
        return True


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def union_find(graph: Graph, start: Optional[int] = None) -> Generator[Event, None, None]:
    sets   = DisjointSet(graph.node_ids())
    merged: List[PathEdge] = []

    for edge in graph.edges.values():
        if sets.union(edge.source, edge.target):
            merged.append(PathEdge(edge.source, edge.target))
            yield PathSnapshot(tuple(merged))

    yield Outcome(OutcomeKind.COMPONENT_COUNT, count=sets.count)
