"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
The classic O(V²) formulation: no priority queue.  Every round scans
all unfinalised nodes for the smallest tentative distance.

Tie-break: among equal distances the LOWEST node id wins, so the visit
order does not depend on dict iteration order.

Yields, per finalised node:
  1. Visit(node)
  2. PathSnapshot rebuilt from the WHOLE previous[] map (not a delta)

The generator returns the final distance map (inf = unreachable).

Correctness note: Dijkstra requires non-negative weights.  Negative
edges are not rejected — the run proceeds and a warning is logged.
"""

import logging
from typing import Dict, Generator, List, Optional, Set

from graph import Graph
from algorithms.step import Event, Visit, tree_snapshot

logger = logging.getLogger(__name__)

INF = float("inf")


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, start):",                    # 0
    "    dist ← {v: ∞ for v in V}; dist[start] ← 0",  # 1
    "    unvisited ← V",                              # 2
    "    while unvisited is not empty:",              # 3
    "        u ← argmin dist[u] over unvisited",      # 4
    "        if dist[u] = ∞: break",                  # 5
    "        unvisited.remove(u); visit(u)",          # 6
    "        for (v, w) in adj(u), v in unvisited:",  # 7
    "            if dist[u] + w < dist[v]:",          # 8
    "                dist[v] ← dist[u] + w",          # 9
    "                previous[v] ← u",                # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(graph: Graph, start: Optional[int]) -> Generator[Event, None, Dict[int, float]]:
    if graph.has_negative_edges():
        logger.warning("Dijkstra run on a graph with negative weights; distances may be wrong")

    adj   = graph.build_adjacency()
    order = list(adj)

    dist:     Dict[int, float]         = {nid: INF for nid in order}
    previous: Dict[int, Optional[int]] = {nid: None for nid in order}
    dist[start] = 0
    unvisited: Set[int] = set(order)

    while unvisited:
        current = _closest(unvisited, dist)
        if current is None:
            break                      # everything left is unreachable

        unvisited.discard(current)
        yield Visit(current)

        for entry in adj[current]:
            if entry.neighbor not in unvisited:
                continue
            alt = dist[current] + entry.weight
            if alt < dist[entry.neighbor]:
                dist[entry.neighbor]     = alt
                previous[entry.neighbor] = current

        yield tree_snapshot(order, previous)

    return dist


def _closest(unvisited: Set[int], dist: Dict[int, float]) -> Optional[int]:
    """Linear scan; lowest id wins ties.  None when every candidate is ∞."""
    best: Optional[int] = None
    for nid in sorted(unvisited):
        if dist[nid] == INF:
            continue
        if best is None or dist[nid] < dist[best]:
            best = nid
    return best
