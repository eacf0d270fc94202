from __future__ import annotations

from typing import Optional, Set, Tuple
import networkx as nx


EdgeId = Tuple[int, int, int]


class NoUnusedEdgeError(RuntimeError):
    """Raised when a walk needs an edge between two nodes but none is available.

    This never happens on valid input: it means the marking state disagrees
    with a shortest-path tree or with the matching.
    """

    def __init__(self, u: int, v: int):
        super().__init__(f"no unmarked edge between {u} and {v}")
        self.u = u
        self.v = v


def new_trail_graph() -> nx.MultiGraph:
    return nx.MultiGraph()


def add_trail_edge(G: nx.MultiGraph, i: int, j: int, cost: int) -> int:
    """Insert an undirected edge i-j with the given cost, creating nodes on demand.

    Returns the multigraph key of the new edge. Parallel edges and self-loops
    are kept as distinct edges.
    """
    if cost < 0:
        raise ValueError(f"edge {i}/{j} has negative cost {cost}")
    return G.add_edge(i, j, weight=int(cost))


def edge_id(u: int, v: int, key: int) -> EdgeId:
    return (u, v, key) if u <= v else (v, u, key)


def total_weight(G: nx.MultiGraph) -> int:
    return sum(w for _, _, w in G.edges(data="weight"))


class EdgeMarks:
    """Per-query record of used edges.

    An edge is stored once under its EdgeId, so both endpoints always agree
    on whether it is used.
    """

    def __init__(self) -> None:
        self._used: Set[EdgeId] = set()

    def reset(self) -> None:
        self._used.clear()

    def mark(self, u: int, v: int, key: int) -> None:
        self._used.add(edge_id(u, v, key))

    def unmark(self, u: int, v: int, key: int) -> None:
        self._used.discard(edge_id(u, v, key))

    def toggle(self, u: int, v: int, key: int) -> None:
        eid = edge_id(u, v, key)
        if eid in self._used:
            self._used.remove(eid)
        else:
            self._used.add(eid)

    def is_used(self, u: int, v: int, key: int) -> bool:
        return edge_id(u, v, key) in self._used

    def used_edges(self) -> Set[EdgeId]:
        return set(self._used)

    def __len__(self) -> int:
        return len(self._used)


def _cheapest_key(G: nx.MultiGraph, u: int, v: int, marks: Optional[EdgeMarks] = None) -> Optional[int]:
    best = None
    best_cost = None
    for key, data in G[u].get(v, {}).items():
        if marks is not None and marks.is_used(u, v, key):
            continue
        w = data["weight"]
        if best_cost is None or w < best_cost:
            best, best_cost = key, w
    return best


def cheapest_edge(G: nx.MultiGraph, u: int, v: int) -> EdgeId:
    """The edge between u and v that shortest paths go through (first one on ties)."""
    key = _cheapest_key(G, u, v)
    if key is None:
        raise NoUnusedEdgeError(u, v)
    return edge_id(u, v, key)


def find_unused_edge(G: nx.MultiGraph, marks: EdgeMarks, u: int, v: int) -> EdgeId:
    """Return the cheapest unused edge between u and v (first one on ties)."""
    key = _cheapest_key(G, u, v, marks)
    if key is None:
        raise NoUnusedEdgeError(u, v)
    return edge_id(u, v, key)
