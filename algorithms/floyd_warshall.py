"""
floyd_warshall.py — Floyd–Warshall (All-Pairs Shortest Paths)
===============================================================
Computes the full distance and next-hop matrices, but an all-pairs
run has no single meaningful animation — so only the START row is
animated:

  • Visit(start) first (distance 0 to itself).
  • Whenever dist[start][j] improves (direct edges at initialisation,
    then inside the k/i/j loop):
        – Visit(j) the first time j becomes reachable
        – PathSnapshot: the union of next-hop paths from start to every
          node reached so far
  • If a node reachable from start lies on a negative cycle
    (dist[v][v] < 0), the run ends with Outcome(NEGATIVE_CYCLE).

Structure:
  for k in nodes:          ← "intermediate" node
      for i in nodes:
          for j in nodes:
              if dist[i][k] + dist[k][j] < dist[i][j]:
                  dist[i][j] = dist[i][k] + dist[k][j]
                  next[i][j] = next[i][k]

Nodes are iterated in insertion order.  O(V³) time, O(V²) space.
"""

from typing import Dict, Generator, List, NamedTuple, Optional, Tuple

from graph import Graph
from algorithms.step import Event, Outcome, OutcomeKind, PathEdge, PathSnapshot, Visit

INF = float("inf")


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def FloydWarshall(graph):",                   # 0
    "    dist ← adjacency matrix",                 # 1
    "    next ← initialise next-hop matrix",       # 2
    "    for k in 0 … n-1:",                       # 3
    "        for i in 0 … n-1:",                   # 4
    "            for j in 0 … n-1:",               # 5
    "                if dist[i][k]+dist[k][j]",    # 6
    "                      < dist[i][j]:",         # 7
    "                    dist[i][j] = …",          # 8
    "                    next[i][j] = next[i][k]", # 9
    "    return dist, next",                       # 10
]


class Tables(NamedTuple):
    nodes: List[int]                     # matrix index → node id
    dist:  List[List[float]]
    nxt:   List[List[Optional[int]]]     # next-hop matrix index, None = no path

    def index(self, node_id: int) -> int:
        return self.nodes.index(node_id)


# ---------------------------------------------------------------------------
# Matrices
# ---------------------------------------------------------------------------
def _initial_tables(graph: Graph) -> Tables:
    adj   = graph.build_adjacency()
    nodes = list(adj)
    idx   = {nid: i for i, nid in enumerate(nodes)}
    n     = len(nodes)

    dist: List[List[float]]         = [[INF] * n for _ in range(n)]
    nxt:  List[List[Optional[int]]] = [[None] * n for _ in range(n)]
    for i in range(n):
        dist[i][i] = 0
        nxt[i][i]  = i

    for u, entries in adj.items():
        for entry in entries:
            i, j = idx[u], idx[entry.neighbor]
            if entry.weight < dist[i][j]:
                dist[i][j] = entry.weight
                nxt[i][j]  = j
    return Tables(nodes, dist, nxt)


def floyd_warshall_tables(graph: Graph) -> Tables:
    """Plain all-pairs computation, no events.  Handy for checks and tools."""
    t = _initial_tables(graph)
    n = len(t.nodes)
    for k in range(n):
        for i in range(n):
            if t.dist[i][k] == INF:
                continue
            for j in range(n):
                if t.dist[k][j] == INF:
                    continue
                if t.dist[i][k] + t.dist[k][j] < t.dist[i][j]:
                    t.dist[i][j] = t.dist[i][k] + t.dist[k][j]
                    t.nxt[i][j]  = t.nxt[i][k]
    return t


def reconstruct_path(tables: Tables, source: int, target: int) -> List[int]:
    """Node ids from source to target along next-hops; [] when unreachable."""
    si, ti = tables.index(source), tables.index(target)
    if tables.nxt[si][ti] is None:
        return []
    path = [source]
    cur  = si
    safety = len(tables.nodes)   # a negative cycle can make the chain loop
    while cur != ti and safety > 0:
        cur = tables.nxt[cur][ti]
        if cur is None:
            return []
        path.append(tables.nodes[cur])
        safety -= 1
    return path if cur == ti else []


def _start_row_snapshot(tables: Tables, start: int, reached: List[int]) -> PathSnapshot:
    edges: List[PathEdge] = []
    seen = set()
    for target in reached:
        path = reconstruct_path(tables, start, target)
        for a, b in zip(path, path[1:]):
            if (a, b) not in seen:
                seen.add((a, b))
                edges.append(PathEdge(a, b))
    return PathSnapshot(tuple(edges))


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def floyd_warshall(graph: Graph, start: Optional[int]) -> Generator[Event, None, Dict[int, float]]:
    t  = _initial_tables(graph)
    n  = len(t.nodes)
    si = t.index(start)

    yield Visit(start)
    reached: List[int] = []

    def improved(j: int) -> Tuple[Event, ...]:
        node = t.nodes[j]
        events: Tuple[Event, ...] = ()
        if node not in reached:
            reached.append(node)
            events += (Visit(node),)
        return events + (_start_row_snapshot(t, start, reached),)

    # direct edges out of start count as the first improvements
    for j in range(n):
        if j != si and t.dist[si][j] != INF:
            yield from improved(j)

    # ==============================================================
    # MAIN TRIPLE LOOP
    # ==============================================================
    for k in range(n):
        for i in range(n):
            if t.dist[i][k] == INF:
                continue          # skip entire row
            for j in range(n):
                if t.dist[k][j] == INF:
                    continue
                new_dist = t.dist[i][k] + t.dist[k][j]
                if new_dist < t.dist[i][j]:
                    t.dist[i][j] = new_dist
                    t.nxt[i][j]  = t.nxt[i][k]
                    if i == si and j != si:
                        yield from improved(j)

    distances = {t.nodes[j]: t.dist[si][j] for j in range(n)}

    # ==============================================================
    # NEGATIVE CYCLE reachable from start
    # ==============================================================
    if any(t.dist[si][v] != INF and t.dist[v][v] < 0 for v in range(n)):
        yield Outcome(OutcomeKind.NEGATIVE_CYCLE)

    return distances
