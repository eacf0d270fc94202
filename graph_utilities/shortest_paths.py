from __future__ import annotations

import logging
from typing import Dict, List, NamedTuple, Optional
import networkx as nx

logger = logging.getLogger(__name__)


class Path(NamedTuple):
    prev: Optional[int]  # previous node on the shortest path, None at the root
    cost: int            # total path length from the root


PathTree = Dict[int, Path]


def shortest_path_tree(G: nx.MultiGraph, source: int) -> PathTree:
    """
    Shortest paths from `source` to every reachable node, as a predecessor tree.

    Parallel edges contribute their cheapest member. Nodes that cannot be
    reached from `source` are not in the result.
    """
    lengths, paths = nx.single_source_dijkstra(G, source, weight="weight")
    tree: PathTree = {}
    for node, cost in lengths.items():
        p = paths[node]
        tree[node] = Path(p[-2] if len(p) >= 2 else None, int(cost))
    return tree


def path_to(tree: PathTree, node: int) -> List[int]:
    """Node sequence from the root of `tree` to `node` (inclusive)."""
    out = [node]
    prev = tree[node].prev
    while prev is not None:
        out.append(prev)
        prev = tree[prev].prev
    out.reverse()
    return out


class ShortestPathCache:
    """Lazily computed shortest-path trees, one per source node.

    The graph must not change structurally while the cache is in use; only
    edge usage changes between queries and that does not affect distances.
    """

    def __init__(self, G: nx.MultiGraph):
        self.G = G
        self._trees: Dict[int, PathTree] = {}

    def __getitem__(self, source: int) -> PathTree:
        tree = self._trees.get(source)
        if tree is None:
            tree = shortest_path_tree(self.G, source)
            self._trees[source] = tree
            logger.debug("shortest paths from %s: %d reachable nodes", source, len(tree))
        return tree

    def __contains__(self, source: int) -> bool:
        return source in self._trees

    def __len__(self) -> int:
        return len(self._trees)
