"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS.  Yields a Visit each time a node is dequeued for
the first time, so the visit order is exactly the level order under
build_adjacency()'s neighbour ordering (edge insertion order).

Pseudocode lines match the PSEUDOCODE constant exported alongside the
generator so the UI can show them next to the animation.
"""

from collections import deque
from typing import Generator, List, Optional, Set

from graph import Graph
from algorithms.step import Event, Visit


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, start):",                   # 0
    "    queue ← [start]",                      # 1
    "    seen ← {start}",                       # 2
    "    while queue is not empty:",            # 3
    "        node ← queue.dequeue()",           # 4
    "        visit(node)",                      # 5
    "        for neighbour in adj(node):",      # 6
    "            if neighbour not in seen:",    # 7
    "                seen.add(neighbour)",      # 8
    "                queue.enqueue(neighbour)", # 9
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(graph: Graph, start: Optional[int]) -> Generator[Event, None, None]:
    """
    Args:
        graph : The graph to traverse.
        start : Starting node id.

    Yields:
        Visit – one per node, in dequeue order.
    """
    adj   = graph.build_adjacency()
    queue = deque([start])
    seen: Set[int] = {start}

    while queue:
        node = queue.popleft()
        yield Visit(node)

        for entry in adj[node]:
            if entry.neighbor not in seen:
                seen.add(entry.neighbor)
                queue.append(entry.neighbor)
