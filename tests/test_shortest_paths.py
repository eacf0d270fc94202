from __future__ import annotations

from graph_utilities.random_graph import random_trail_graph
from graph_utilities.shortest_paths import Path, ShortestPathCache, path_to, shortest_path_tree
from graph_utilities.trail_graph import add_trail_edge, new_trail_graph


def _diamond():
    G = new_trail_graph()
    add_trail_edge(G, 0, 1, 1)
    add_trail_edge(G, 1, 3, 1)
    add_trail_edge(G, 0, 2, 5)
    add_trail_edge(G, 2, 3, 5)
    add_trail_edge(G, 0, 3, 7)
    add_trail_edge(G, 4, 5, 1)  # separate component
    return G


def test_tree_on_small_graph() -> None:
    tree = shortest_path_tree(_diamond(), 0)
    assert tree[0] == Path(None, 0)
    assert tree[1] == Path(0, 1)
    assert tree[3] == Path(1, 2)
    assert tree[2] == Path(0, 5)
    assert 4 not in tree and 5 not in tree
    assert path_to(tree, 3) == [0, 1, 3]


def test_parallel_edges_use_cheapest() -> None:
    G = new_trail_graph()
    add_trail_edge(G, 0, 1, 9)
    add_trail_edge(G, 0, 1, 4)
    add_trail_edge(G, 1, 1, 1)
    tree = shortest_path_tree(G, 1)
    assert tree[0] == Path(1, 4)


def test_predecessor_chain_matches_costs() -> None:
    G = random_trail_graph(12, p=0.3, seed=7, loop_p=0.2, parallel_p=0.3)
    tree = shortest_path_tree(G, 0)
    assert len(tree) == G.number_of_nodes()
    for node, p in tree.items():
        if p.prev is None:
            assert node == 0 and p.cost == 0
            continue
        step = min(d["weight"] for d in G[p.prev][node].values())
        assert tree[p.prev].cost + step == p.cost
    # no edge relaxes any recorded distance
    for u, v, w in G.edges(data="weight"):
        assert tree[v].cost <= tree[u].cost + w
        assert tree[u].cost <= tree[v].cost + w


def test_cache_computes_each_source_once() -> None:
    G = _diamond()
    cache = ShortestPathCache(G)
    first = cache[0]
    assert cache[0] is first
    assert 0 in cache and 3 not in cache
    cache[3]
    assert len(cache) == 2
