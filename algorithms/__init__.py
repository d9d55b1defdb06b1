"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, run

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, pseudocode, requires_start, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The runner, the session and the
HTTP layer all consume it, so adding an algorithm is: write the
generator, add one entry here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from graph import UnknownAlgorithmError

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bfs             import bfs            as _bfs,      PSEUDOCODE as _bfs_pc
from algorithms.dfs             import dfs            as _dfs,      PSEUDOCODE as _dfs_pc
from algorithms.dijkstra        import dijkstra       as _dijkstra, PSEUDOCODE as _dij_pc
from algorithms.bellman_ford    import bellman_ford   as _bf,       PSEUDOCODE as _bf_pc
from algorithms.floyd_warshall  import floyd_warshall as _fw,       PSEUDOCODE as _fw_pc
from algorithms.cycle_detection import detect_cycle   as _cycle,    PSEUDOCODE as _cycle_pc
from algorithms.union_find      import union_find     as _uf,       PSEUDOCODE as _uf_pc


class Algorithm(Enum):
    BFS             = "bfs"
    DFS             = "dfs"
    DIJKSTRA        = "dijkstra"
    BELLMAN_FORD    = "bellman_ford"
    FLOYD_WARSHALL  = "floyd_warshall"
    CYCLE_DETECTION = "cycle_detection"
    UNION_FIND      = "union_find"


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "bfs"
    label:             str                    # human label, e.g. "Breadth-First Search"
    fn:                Callable               # the event generator
    pseudocode:        List[str]              # lines for the side-panel
    requires_start:    bool     = True        # union-find is the only exception
    tags:              List[str] = field(default_factory=list)
    supports_negative: bool     = False
    complexity_time:   str      = ""
    complexity_space:  str      = ""
    description:       str      = ""

    def to_dict(self) -> dict:
        return {
            "key":               self.key,
            "label":             self.label,
            "pseudocode":        list(self.pseudocode),
            "requires_start":    self.requires_start,
            "tags":              list(self.tags),
            "supports_negative": self.supports_negative,
            "complexity_time":   self.complexity_time,
            "complexity_space":  self.complexity_space,
            "description":       self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs, pseudocode=_bfs_pc,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer by layer from the start node.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs, pseudocode=_dfs_pc,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, pseudocode=_dij_pc,
        tags=["weighted", "shortest-path"],
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Finalises the closest unvisited node each round. Needs non-negative weights.",
    ),

    "bellman_ford": AlgoInfo(
        key="bellman_ford", label="Bellman–Ford", fn=_bf, pseudocode=_bf_pc,
        tags=["weighted", "shortest-path", "negative-edges"],
        supports_negative=True,
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Handles negative edges and detects negative cycles.",
    ),

    "floyd_warshall": AlgoInfo(
        key="floyd_warshall", label="Floyd–Warshall", fn=_fw, pseudocode=_fw_pc,
        tags=["weighted", "all-pairs", "negative-edges"],
        supports_negative=True,
        complexity_time="O(V³)", complexity_space="O(V²)",
        description="All-pairs shortest paths; the start node's row is animated.",
    ),

    "cycle_detection": AlgoInfo(
        key="cycle_detection", label="Cycle Detection", fn=_cycle, pseudocode=_cycle_pc,
        tags=["traversal", "structure"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="DFS that reports the first cycle it closes.",
    ),

    "union_find": AlgoInfo(
        key="union_find", label="Union-Find (Components)", fn=_uf, pseudocode=_uf_pc,
        requires_start=False,
        tags=["structure", "connectivity"],
        complexity_time="O(E · α(V))", complexity_space="O(V)",
        description="Counts connected components. Edges in insertion order — not an MST.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: Union[str, Algorithm]) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key or enum member, or None."""
    if isinstance(key, Algorithm):
        key = key.value
    return REGISTRY.get(key)


def require_algorithm(key: Union[str, Algorithm]) -> AlgoInfo:
    info = get_algorithm(key)
    if info is None:
        raise UnknownAlgorithmError(key)
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


from algorithms.runner import run   # noqa: E402  (runner needs REGISTRY)


__all__ = [
    "Algorithm",
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "require_algorithm",
    "list_algorithms",
    "run",
]
