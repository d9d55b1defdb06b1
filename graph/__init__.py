"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge, EdgeKind
    from graph import build_adjacency, Adjacent
"""

from graph.node   import Node
from graph.edge   import Edge,  EdgeKind
from graph.graph  import Graph, Adjacent, Adjacency, build_adjacency
from graph.errors import (
    VisualizerError,
    UnknownNodeError,
    MissingStartNodeError,
    UnknownAlgorithmError,
    InvalidSpeedError,
    PlaybackActiveError,
)

__all__ = [
    "Node",
    "Edge",      "EdgeKind",
    "Graph",     "Adjacent",  "Adjacency", "build_adjacency",
    "VisualizerError",
    "UnknownNodeError",
    "MissingStartNodeError",
    "UnknownAlgorithmError",
    "InvalidSpeedError",
    "PlaybackActiveError",
]
