"""
cycle_detection.py — Cycle Detection
=====================================
Depth-first search with white / grey / black colouring, run on an
explicit frame stack like dfs.py.

  • grey  = on the current DFS path ("recursion stack")
  • black = finished

Reaching a grey neighbour closes a cycle — with one exception: walking
back over the very undirected edge we arrived by is not a cycle, it is
the same edge seen from the other end.  That rule is applied per edge,
so graphs mixing directed and undirected edges are handled uniformly.

The search starts at the start node, then sweeps every node it has not
reached yet (insertion order) so cycles elsewhere are not missed.

Yields Visit per node entered, then exactly one Outcome:
  • CYCLE_FOUND — edges of the cycle, closing edge last (stops at the first)
  • NO_CYCLE
"""

from typing import Dict, Generator, List, Optional, Tuple

from graph import Graph, EdgeKind
from algorithms.dfs import Frame
from algorithms.step import Event, Outcome, OutcomeKind, PathEdge, Visit


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def HasCycle(graph, node, via):",                         # 0
    "    colour[node] ← GREY; visit(node)",                    # 1
    "    for (neighbour, edge) in adj(node):",                 # 2
    "        if edge is undirected and edge == via: continue", # 3
    "        if colour[neighbour] = GREY: return CYCLE",       # 4
    "        if colour[neighbour] = WHITE:",                   # 5
    "            HasCycle(graph, neighbour, edge)",            # 6
    "    colour[node] ← BLACK",                                # 7
    "    return NO CYCLE",                                     # 8
]

WHITE, GREY, BLACK = 0, 1, 2


class _CycleFrame(Frame):
    __slots__ = ("via",)

    def __init__(self, node: int, parent: Optional[int] = None, via: Optional[int] = None):
        super().__init__(node, parent)
        self.via: Optional[int] = via          # id of the edge used to enter `node`


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def detect_cycle(graph: Graph, start: Optional[int]) -> Generator[Event, None, None]:
    adj    = graph.build_adjacency()
    colour: Dict[int, int] = {nid: WHITE for nid in adj}

    roots = list(adj)
    if start is not None:
        roots = [start] + [nid for nid in roots if nid != start]

    for root in roots:
        if colour[root] != WHITE:
            continue

        stack: List[_CycleFrame] = [_CycleFrame(root)]
        colour[root] = GREY
        yield Visit(root)

        while stack:
            frame = stack[-1]
            entries = adj[frame.node]
            if frame.cursor >= len(entries):
                colour[frame.node] = BLACK
                stack.pop()
                continue

            entry = entries[frame.cursor]
            frame.cursor += 1

            if entry.kind is EdgeKind.UNDIRECTED and entry.edge_id == frame.via:
                continue
            if colour[entry.neighbor] == GREY:
                yield Outcome(OutcomeKind.CYCLE_FOUND, edges=_cycle_edges(stack, entry.neighbor))
                return
            if colour[entry.neighbor] == WHITE:
                colour[entry.neighbor] = GREY
                yield Visit(entry.neighbor)
                stack.append(_CycleFrame(entry.neighbor, parent=frame.node, via=entry.edge_id))

    yield Outcome(OutcomeKind.NO_CYCLE)


def _cycle_edges(stack: List[_CycleFrame], ancestor: int) -> Tuple[PathEdge, ...]:
    """Tree edges from `ancestor` down to the top frame, plus the closing edge."""
    nodes = [f.node for f in stack]
    loop  = nodes[nodes.index(ancestor):]
    edges = [PathEdge(a, b) for a, b in zip(loop, loop[1:])]
    edges.append(PathEdge(loop[-1], ancestor))
    return tuple(edges)
