"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit frame stack (no Python recursion
limit issues).

Each frame remembers which neighbour it will look at next, so the visit
order is exactly the preorder of the textbook recursive version — unlike
the simpler "push every neighbour, mark on pop" stack, which can reorder
siblings.  Memory is bounded by the number of nodes.
"""

from typing import Generator, List, Optional, Set

from graph import Graph
from algorithms.step import Event, Visit


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, node):",                    # 0
    "    visit(node)",                          # 1
    "    visited.add(node)",                    # 2
    "    for neighbour in adj(node):",          # 3
    "        if neighbour not in visited:",     # 4
    "            DFS(graph, neighbour)",        # 5
]


class Frame:
    """One simulated call of the recursive DFS."""

    __slots__ = ("node", "cursor", "parent")

    def __init__(self, node: int, parent: Optional[int] = None):
        self.node:   int           = node
        self.cursor: int           = 0      # index of the next neighbour to examine
        self.parent: Optional[int] = parent


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(graph: Graph, start: Optional[int]) -> Generator[Event, None, None]:
    adj = graph.build_adjacency()
    visited: Set[int] = {start}
    stack: List[Frame] = [Frame(start)]
    yield Visit(start)

    while stack:
        frame = stack[-1]
        neighbours = adj[frame.node]

        if frame.cursor >= len(neighbours):
            stack.pop()           # "return" from this call
            continue

        nbr = neighbours[frame.cursor].neighbor
        frame.cursor += 1
        if nbr in visited:
            continue

        visited.add(nbr)
        yield Visit(nbr)
        stack.append(Frame(nbr, parent=frame.node))
