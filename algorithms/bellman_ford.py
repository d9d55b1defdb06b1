"""
bellman_ford.py — Bellman–Ford Algorithm
=========================================
The single-source shortest-path algorithm that tolerates NEGATIVE edge
weights and can tell when a negative cycle makes the answer undefined.

Structure:
  • Visit(start) — it is known at distance 0 before any relaxation.
  • Up to |V|-1 rounds relaxing every directed arc.  Arcs come from
    build_adjacency(), so an undirected edge relaxes both ways.  A node
    is Visited the first time one of its distances improves.  A round
    with no improvement means the distances have converged; the
    remaining rounds are skipped.
  • A detector round: if any arc can still relax, yield
    Outcome(NEGATIVE_CYCLE) and stop — no path is ever shown.
  • Otherwise one final PathSnapshot of the shortest-path tree.

The generator returns the final distance map.
"""

from typing import Dict, Generator, List, Optional, Set, Tuple

from graph import Graph
from algorithms.step import Event, Outcome, OutcomeKind, Visit, tree_snapshot

INF = float("inf")


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BellmanFord(graph, start):",              # 0
    "    dist ← {v: ∞ for v in V}",                # 1
    "    dist[start] ← 0",                         # 2
    "    for i in 1 … |V|-1:",                     # 3
    "        for each arc (u, v, w):",             # 4
    "            if dist[u] + w < dist[v]:",       # 5
    "                dist[v] ← dist[u] + w",       # 6
    "                previous[v] ← u",             # 7
    "    for each arc (u, v, w):",                 # 8
    "        if dist[u] + w < dist[v]:",           # 9
    "            return NEGATIVE CYCLE",           # 10
    "    return dist, previous",                   # 11
]


def directed_arcs(graph: Graph) -> List[Tuple[int, int, int]]:
    """Every traversable (u, v, w), undirected edges already expanded."""
    return [
        (u, entry.neighbor, entry.weight)
        for u, entries in graph.build_adjacency().items()
        for entry in entries
    ]


def relaxable(arcs: List[Tuple[int, int, int]], dist: Dict[int, float]) -> Optional[Tuple[int, int, int]]:
    """First arc that could still shorten a distance, or None."""
    for u, v, w in arcs:
        if dist[u] != INF and dist[u] + w < dist[v]:
            return u, v, w
    return None


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bellman_ford(graph: Graph, start: Optional[int]) -> Generator[Event, None, Dict[int, float]]:
    order = graph.node_ids()
    arcs  = directed_arcs(graph)

    dist:     Dict[int, float]         = {nid: INF for nid in order}
    previous: Dict[int, Optional[int]] = {nid: None for nid in order}
    dist[start] = 0
    seen: Set[int] = {start}
    yield Visit(start)

    # ==============================================================
    # MAIN ROUNDS
    # ==============================================================
    for _ in range(len(order) - 1):
        any_relaxed = False
        for u, v, w in arcs:
            if dist[u] == INF:
                continue          # can't relax from an unreachable node
            if dist[u] + w < dist[v]:
                dist[v]     = dist[u] + w
                previous[v] = u
                any_relaxed = True
                if v not in seen:
                    seen.add(v)
                    yield Visit(v)
        if not any_relaxed:
            break

    # ==============================================================
    # NEGATIVE-CYCLE DETECTOR
    # ==============================================================
    if relaxable(arcs, dist) is not None:
        yield Outcome(OutcomeKind.NEGATIVE_CYCLE)
        return dist

    yield tree_snapshot(order, previous)
    return dist
