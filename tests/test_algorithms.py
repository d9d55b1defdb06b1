import heapq
import itertools
import random
from collections import deque

import pytest

from graph import Graph, MissingStartNodeError, UnknownAlgorithmError, UnknownNodeError
from algorithms import Algorithm, REGISTRY, run
from algorithms.bellman_ford import directed_arcs
from algorithms.floyd_warshall import floyd_warshall_tables, reconstruct_path
from algorithms.step import Outcome, OutcomeKind, PathEdge, PathSnapshot, Visit
from algorithms.union_find import DisjointSet

from conftest import D, U, make_graph

INF = float("inf")


# ---------------------------------------------------------------------------
# Reference implementations (tests only)
# ---------------------------------------------------------------------------
def reference_level_order(g: Graph, start):
    adj = g.build_adjacency()
    order, seen, queue = [], {start}, deque([start])
    while queue:
        node = queue.popleft()
        order.append(node)
        for a in adj[node]:
            if a.neighbor not in seen:
                seen.add(a.neighbor)
                queue.append(a.neighbor)
    return order


def reference_preorder(g: Graph, start):
    adj = g.build_adjacency()
    order = []

    def visit(node):
        order.append(node)
        for a in adj[node]:
            if a.neighbor not in order:
                visit(a.neighbor)

    visit(start)
    return order


def reference_heap_dijkstra(g: Graph, start):
    adj = g.build_adjacency()
    dist = {nid: INF for nid in adj}
    dist[start] = 0
    pq = [(0, start)]
    while pq:
        d, node = heapq.heappop(pq)
        if d > dist[node]:
            continue
        for a in adj[node]:
            if d + a.weight < dist[a.neighbor]:
                dist[a.neighbor] = d + a.weight
                heapq.heappush(pq, (dist[a.neighbor], a.neighbor))
    return dist


def random_graph(seed, n=8, p=0.35, negative=False):
    rng = random.Random(seed)
    g = Graph()
    for _ in range(n):
        g.add_node()
    for a, b in itertools.permutations(range(1, n + 1), 2):
        if rng.random() < p:
            low = -3 if negative else 0
            g.add_edge(a, b, rng.randint(low, 9), rng.choice([D, U]))
    return g


# ---------------------------------------------------------------------------
# Runner contract
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("key", [k for k, info in REGISTRY.items() if info.requires_start])
def test_missing_start_node_is_rejected_before_running(path_graph, key):
    with pytest.raises(MissingStartNodeError):
        run(path_graph, None, key)


def test_unknown_start_and_algorithm(path_graph):
    with pytest.raises(UnknownNodeError):
        run(path_graph, 99, "bfs")
    with pytest.raises(UnknownAlgorithmError):
        run(path_graph, 1, "a_star")


def test_all_seven_algorithms_registered():
    assert {a.value for a in Algorithm} == set(REGISTRY)
    assert [k for k, info in REGISTRY.items() if not info.requires_start] == ["union_find"]


def test_run_accepts_enum_and_is_isolated_from_later_edits(path_graph):
    seq = run(path_graph, 1, Algorithm.BFS)
    path_graph.add_edge(1, 3)
    path_graph.delete_node(2)

    assert seq.algorithm == "bfs"
    assert seq.visit_order() == [1, 2, 3]


# ---------------------------------------------------------------------------
# BFS / DFS
# ---------------------------------------------------------------------------
def test_bfs_scenario(path_graph):
    seq = run(path_graph, 1, "bfs")
    assert seq.visit_order() == [1, 2, 3]
    assert all(isinstance(ev, Visit) for ev in seq)


def test_dfs_scenario(path_graph):
    assert run(path_graph, 1, "dfs").visit_order() == [1, 2, 3]


def test_bfs_and_dfs_differ_on_a_star_with_a_tail():
    # 1 → {2, 3}, 2 → 4
    g = make_graph(4, [(1, 2, 1, U), (1, 3, 1, U), (2, 4, 1, U)])
    assert run(g, 1, "bfs").visit_order() == [1, 2, 3, 4]
    assert run(g, 1, "dfs").visit_order() == [1, 2, 4, 3]


def test_dfs_is_recursive_preorder_not_stack_order():
    # a push-everything stack would visit 3 before 2
    g = make_graph(4, [(1, 2, 1, D), (1, 3, 1, D), (3, 4, 1, D), (2, 3, 1, D)])
    assert run(g, 1, "dfs").visit_order() == [1, 2, 3, 4]


def test_traversals_respect_direction_and_skip_unreachable():
    g = make_graph(4, [(2, 1, 1, D), (1, 3, 1, D)])
    assert run(g, 1, "bfs").visit_order() == [1, 3]
    assert run(g, 1, "dfs").visit_order() == [1, 3]


@pytest.mark.parametrize("seed", range(12))
def test_traversal_orders_match_references(seed):
    g = random_graph(seed)
    assert run(g, 1, "bfs").visit_order() == reference_level_order(g, 1)
    assert run(g, 1, "dfs").visit_order() == reference_preorder(g, 1)


def test_dfs_handles_deep_chains():
    n = 5000
    g = Graph()
    for _ in range(n):
        g.add_node()
    for i in range(1, n):
        g.add_edge(i, i + 1, 1, D)
    assert run(g, 1, "dfs").visit_order() == list(range(1, n + 1))


# ---------------------------------------------------------------------------
# Dijkstra
# ---------------------------------------------------------------------------
def test_dijkstra_scenario():
    g = make_graph(3, [(1, 2, 5, D), (1, 3, 1, D), (3, 2, 1, D)])
    seq = run(g, 1, "dijkstra")

    assert seq.visit_order() == [1, 3, 2]
    assert dict(seq.distances) == {1: 0, 2: 2, 3: 1}
    assert set(seq.final_path()) == {PathEdge(1, 3), PathEdge(3, 2)}


def test_dijkstra_emits_full_tree_snapshot_after_each_visit():
    g = make_graph(3, [(1, 2, 5, D), (1, 3, 1, D), (3, 2, 1, D)])
    events = list(run(g, 1, "dijkstra"))

    assert events[0] == Visit(1)
    assert events[1] == PathSnapshot((PathEdge(1, 2), PathEdge(1, 3)))
    assert events[2] == Visit(3)
    assert events[3] == PathSnapshot((PathEdge(3, 2), PathEdge(1, 3)))
    assert [type(ev) for ev in events] == [Visit, PathSnapshot] * 3


def test_dijkstra_ties_go_to_lowest_node_id():
    g = Graph()
    for _ in range(3):
        g.add_node()
    # insert the edge to 3 first so iteration order would favour it
    g.add_edge(1, 3, 2, D)
    g.add_edge(1, 2, 2, D)
    assert run(g, 1, "dijkstra").visit_order() == [1, 2, 3]


def test_dijkstra_leaves_unreachable_nodes_at_infinity():
    g = make_graph(3, [(1, 2, 1, U)])
    seq = run(g, 1, "dijkstra")
    assert seq.visit_order() == [1, 2]
    assert seq.distances[3] == INF


@pytest.mark.parametrize("seed", range(15))
def test_dijkstra_matches_heap_reference(seed):
    g = random_graph(seed)
    seq = run(g, 1, "dijkstra")
    assert dict(seq.distances) == reference_heap_dijkstra(g, 1)


# ---------------------------------------------------------------------------
# Bellman-Ford
# ---------------------------------------------------------------------------
def test_bellman_ford_negative_cycle_scenario():
    g = make_graph(2, [(1, 2, -5, D), (2, 1, -5, D)])
    seq = run(g, 1, "bellman_ford")

    assert seq.outcome == Outcome(OutcomeKind.NEGATIVE_CYCLE)
    assert seq.final_path() == ()
    assert not any(isinstance(ev, PathSnapshot) for ev in seq)
    assert seq.visit_order() == [1, 2]


def test_bellman_ford_handles_negative_edges():
    g = make_graph(3, [(1, 2, 4, D), (1, 3, 5, D), (3, 2, -3, D)])
    seq = run(g, 1, "bellman_ford")

    assert dict(seq.distances) == {1: 0, 2: 2, 3: 5}
    assert seq.outcome is None
    assert isinstance(seq[-1], PathSnapshot)
    assert set(seq.final_path()) == {PathEdge(1, 3), PathEdge(3, 2)}


def test_bellman_ford_undirected_negative_edge_is_a_negative_cycle():
    g = make_graph(2, [(1, 2, -1, U)])
    assert run(g, 1, "bellman_ford").outcome.kind is OutcomeKind.NEGATIVE_CYCLE


@pytest.mark.parametrize("seed", range(20))
def test_bellman_ford_negative_cycle_iff_still_relaxable(seed):
    g = random_graph(seed, n=6, p=0.3, negative=True)
    seq = run(g, 1, "bellman_ford")

    # independent |V|-1 full passes
    arcs = directed_arcs(g)
    dist = {nid: INF for nid in g.nodes}
    dist[1] = 0
    for _ in range(g.node_count() - 1):
        for u, v, w in arcs:
            if dist[u] != INF and dist[u] + w < dist[v]:
                dist[v] = dist[u] + w
    still = any(dist[u] != INF and dist[u] + w < dist[v] for u, v, w in arcs)

    reported = seq.outcome is not None and seq.outcome.kind is OutcomeKind.NEGATIVE_CYCLE
    assert reported == still
    if not still:
        assert dict(seq.distances) == dist


@pytest.mark.parametrize("seed", range(10))
def test_bellman_ford_agrees_with_dijkstra_on_non_negative_graphs(seed):
    g = random_graph(seed)
    assert dict(run(g, 1, "bellman_ford").distances) == dict(run(g, 1, "dijkstra").distances)


# ---------------------------------------------------------------------------
# Floyd-Warshall
# ---------------------------------------------------------------------------
def path_cost(g: Graph, nodes):
    total = 0
    for a, b in zip(nodes, nodes[1:]):
        total += min(x.weight for x in g.build_adjacency()[a] if x.neighbor == b)
    return total


def test_floyd_warshall_animates_start_row_only():
    g = make_graph(4, [(1, 2, 5, D), (1, 3, 1, D), (3, 2, 1, D), (4, 1, 1, D)])
    seq = run(g, 1, "floyd_warshall")

    assert seq.visit_order() == [1, 2, 3]
    assert 4 not in seq.visit_order()
    assert dict(seq.distances) == {1: 0, 2: 2, 3: 1, 4: INF}
    assert set(seq.final_path()) == {PathEdge(1, 3), PathEdge(3, 2)}
    assert seq.outcome is None


@pytest.mark.parametrize("seed", range(12))
def test_floyd_warshall_paths_match_their_distances(seed):
    g = random_graph(seed)
    tables = floyd_warshall_tables(g)
    seq = run(g, 1, "floyd_warshall")
    si = tables.index(1)

    for j, target in enumerate(tables.nodes):
        d = tables.dist[si][j]
        assert seq.distances[target] == d
        if d == INF:
            assert reconstruct_path(tables, 1, target) == []
            continue
        nodes = reconstruct_path(tables, 1, target)
        assert nodes[0] == 1 and nodes[-1] == target
        assert path_cost(g, nodes) == d


@pytest.mark.parametrize("seed", range(8))
def test_floyd_warshall_agrees_with_dijkstra(seed):
    g = random_graph(seed)
    assert dict(run(g, 1, "floyd_warshall").distances) == dict(run(g, 1, "dijkstra").distances)


def test_floyd_warshall_flags_reachable_negative_cycle():
    g = make_graph(3, [(1, 2, 1, D), (2, 3, -4, D), (3, 2, 1, D)])
    assert run(g, 1, "floyd_warshall").outcome == Outcome(OutcomeKind.NEGATIVE_CYCLE)


# ---------------------------------------------------------------------------
# Cycle detection
# ---------------------------------------------------------------------------
def test_undirected_tree_has_no_cycle(path_graph):
    seq = run(path_graph, 1, "cycle_detection")
    assert seq.visit_order() == [1, 2, 3]
    assert seq.outcome == Outcome(OutcomeKind.NO_CYCLE)


def test_undirected_triangle_is_a_cycle():
    g = make_graph(3, [(1, 2, 1, U), (2, 3, 1, U), (3, 1, 1, U)])
    outcome = run(g, 1, "cycle_detection").outcome

    assert outcome.kind is OutcomeKind.CYCLE_FOUND
    assert outcome.edges == (PathEdge(1, 2), PathEdge(2, 3), PathEdge(3, 1))


def test_directed_diamond_is_not_a_cycle():
    g = make_graph(4, [(1, 2, 1, D), (1, 3, 1, D), (2, 4, 1, D), (3, 4, 1, D)])
    assert run(g, 1, "cycle_detection").outcome.kind is OutcomeKind.NO_CYCLE


def test_directed_two_cycle():
    g = make_graph(2, [(1, 2, 1, D), (2, 1, 1, D)])
    outcome = run(g, 1, "cycle_detection").outcome
    assert outcome.kind is OutcomeKind.CYCLE_FOUND
    assert outcome.edges[-1] == PathEdge(2, 1)


def test_mixed_edges_close_a_cycle():
    # 1 → 2 directed, 2 - 3 undirected, 3 → 1 directed
    g = make_graph(3, [(1, 2, 1, D), (2, 3, 1, U), (3, 1, 1, D)])
    assert run(g, 1, "cycle_detection").outcome.kind is OutcomeKind.CYCLE_FOUND


def test_cycle_outside_start_component_is_found():
    g = make_graph(5, [(1, 2, 1, U), (3, 4, 1, U), (4, 5, 1, U), (5, 3, 1, U)])
    seq = run(g, 1, "cycle_detection")

    assert seq.visit_order()[:2] == [1, 2]
    assert seq.outcome.kind is OutcomeKind.CYCLE_FOUND


def test_cycle_outcome_is_last_event():
    g = make_graph(3, [(1, 2, 1, U), (2, 3, 1, U), (3, 1, 1, U)])
    seq = run(g, 1, "cycle_detection")
    assert sum(isinstance(ev, Outcome) for ev in seq) == 1
    assert isinstance(seq[-1], Outcome)


# ---------------------------------------------------------------------------
# Union-Find
# ---------------------------------------------------------------------------
def test_union_find_scenario():
    g = make_graph(5, [(1, 2, 1, U), (3, 4, 1, U)])
    seq = run(g, None, "union_find")

    assert seq.outcome == Outcome(OutcomeKind.COMPONENT_COUNT, count=3)
    assert seq.start is None
    assert [ev for ev in seq if isinstance(ev, PathSnapshot)] == [
        PathSnapshot((PathEdge(1, 2),)),
        PathSnapshot((PathEdge(1, 2), PathEdge(3, 4))),
    ]


def test_union_find_ignores_weights_and_redundant_edges():
    # heavy edge first: an MST would skip it, plain connectivity keeps it
    g = make_graph(3, [(1, 2, 100, U), (2, 3, 1, D), (1, 3, 1, U)])
    seq = run(g, 1, "union_find")

    assert seq.final_path() == (PathEdge(1, 2), PathEdge(2, 3))
    assert seq.outcome.count == 1


@pytest.mark.parametrize("seed", range(6))
def test_component_count_is_invariant_under_edge_order(seed):
    rng = random.Random(seed)
    n = 9
    pairs = [(a, b) for a, b in itertools.combinations(range(1, n + 1), 2) if rng.random() < 0.15]
    counts = set()
    for _ in range(5):
        rng.shuffle(pairs)
        g = make_graph(n, [(a, b, 1, rng.choice([D, U])) for a, b in pairs])
        counts.add(run(g, None, "union_find").outcome.count)
    assert len(counts) == 1


def test_disjoint_set_path_compression():
    ds = DisjointSet([1, 2, 3, 4])
    assert ds.union(1, 2)
    assert ds.union(3, 4)
    assert ds.union(2, 4)
    assert not ds.union(1, 3)
    assert ds.count == 1
    root = ds.find(4)
    assert all(ds.parent[x] == root for x in (1, 2, 3, 4))
