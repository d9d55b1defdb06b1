import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from graph import Graph, EdgeKind
from engine import ManualScheduler

D = EdgeKind.DIRECTED
U = EdgeKind.UNDIRECTED


def make_graph(n_nodes, edges):
    """Graph with nodes 1..n_nodes and (source, target, weight, kind) edges."""
    g = Graph()
    for _ in range(n_nodes):
        g.add_node()
    for source, target, weight, kind in edges:
        assert g.add_edge(source, target, weight, kind) is not None
    return g


@pytest.fixture
def path_graph() -> Graph:
    """1 - 2 - 3, undirected, unit weights."""
    return make_graph(3, [(1, 2, 1, U), (2, 3, 1, U)])


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()
