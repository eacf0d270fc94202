from __future__ import annotations

import logging
from typing import Dict
import networkx as nx

from graph_utilities.trail_graph import EdgeMarks

logger = logging.getLogger(__name__)


def _explore(G: nx.MultiGraph, marks: EdgeMarks, dist: Dict[int, int], i: int, cost: int) -> None:
    if dist.get(i, -1) < cost:
        dist[i] = cost
    for _, j, key, w in list(G.edges(i, keys=True, data="weight")):
        if marks.is_used(i, j, key):
            continue
        marks.mark(i, j, key)
        _explore(G, marks, dist, j, cost + w)
        marks.unmark(i, j, key)


def longest_trails_brute(G: nx.MultiGraph, source: int = 0) -> Dict[int, int]:
    """
    Exhaustively try every trail leaving `source` and keep, per node, the
    heaviest one ending there. Exponential; only for small graphs.
    """
    dist: Dict[int, int] = {}
    if source not in G:
        return dist
    marks = EdgeMarks()
    _explore(G, marks, dist, source, 0)
    logger.debug("brute force from %s reached %d nodes", source, len(dist))
    return dist
