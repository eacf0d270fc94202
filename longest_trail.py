"""Maximum weight trail (walk without repeated edges) in an undirected multigraph.

A trail from s to t uses an edge set in which every node has even degree,
except s and t (unless s == t). So the heaviest trail is the whole graph minus
the cheapest edge set that fixes the parity of the odd ("exposed") nodes. That
set is found as a minimum weight perfect matching over shortest-path distances
between exposed nodes (a minimum T-join); the matched paths are removed and the
rest of the source's component is what the trail can use.

Known limitation: when the removed paths cut edges off from the source's
component, only the source's component is counted, which can under-count the
true optimum. This is reported through ``TrailResult.stranded_weight``.
"""

from __future__ import annotations

import logging
from typing import Dict, List, NamedTuple, Optional, Set, cast
import networkx as nx
from networkx.algorithms.matching import min_weight_matching
from networkx.classes.reportviews import DegreeView

from graph_utilities.shortest_paths import PathTree, ShortestPathCache, path_to
from graph_utilities.trail_graph import (
    EdgeId,
    EdgeMarks,
    NoUnusedEdgeError,
    edge_id,
    cheapest_edge,
    total_weight,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ExposedSet",
    "TrailResult",
    "NoUnusedEdgeError",
    "find_exposed",
    "match_exposed",
    "mark_path",
    "assemble_trail",
    "longest_trail_to",
    "longest_trails",
    "longest_trail_length",
]

Matching = Dict[int, int]


class ExposedSet(NamedTuple):
    nodes: List[int]       # exposed node keys, in graph order
    index: Dict[int, int]  # node key -> position in `nodes`


class TrailResult(NamedTuple):
    weight: int
    removed: Set[EdgeId]          # the T-join taken out of the graph
    component_edges: Set[EdgeId]  # unused edges reachable from the source
    stranded_weight: int          # unused edges outside the source's component


def find_exposed(G: nx.MultiGraph, source: int, target: int) -> ExposedSet:
    """
    Nodes of odd degree once one extra edge end is added at `source` and one at
    `target` (both at the same node when source == target). Each of them needs
    exactly one incident edge removed for a source->target trail to cover the rest.
    """
    nodes: List[int] = []
    index: Dict[int, int] = {}
    for n, d in cast(DegreeView, G.degree()):
        if n == source:
            d += 1
        if n == target:
            d += 1
        if d % 2 == 1:
            index[n] = len(nodes)
            nodes.append(n)
            logger.debug("exposed: %s -> [%d]  (degree: %d)", n, index[n], d)
    return ExposedSet(nodes, index)


def match_exposed(exposed: ExposedSet, cache: ShortestPathCache) -> Optional[Matching]:
    """
    Pair up exposed nodes with a minimum weight perfect matching, where the
    weight of a pair is their shortest-path distance.

    Returns index -> partner index, or None when no perfect matching exists
    (odd count, or some node cannot reach any free partner).
    """
    k = len(exposed.nodes)
    if k % 2 == 1:
        logger.debug("odd number of exposed nodes (%d), no matching", k)
        return None
    if k == 0:
        return {}

    K = nx.Graph()
    K.add_nodes_from(range(k))
    for a, i in enumerate(exposed.nodes):
        tree = cache[i]
        for b in range(a + 1, k):
            j = exposed.nodes[b]
            p = tree.get(j)
            if p is None:
                continue
            K.add_edge(a, b, weight=p.cost)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("  [%d] - [%d] = %d  (path: %s)", a, b, p.cost, path_to(tree, j))

    pairs = min_weight_matching(K, weight="weight")
    if 2 * len(pairs) != k:
        logger.debug("no perfect matching over %d exposed nodes", k)
        return None

    matching: Matching = {}
    for a, b in pairs:
        matching[a] = b
        matching[b] = a
        logger.debug("  match: [%d] - [%d]", a, b)
    return matching


def mark_path(G: nx.MultiGraph, marks: EdgeMarks, tree: PathTree, node: int) -> None:
    """
    Toggle the edge of each step of the tree path from `node` back to its root.

    Each step uses the cheapest edge between the two nodes, the one the path
    cost was computed with. Matched paths may share zero-cost edges; toggling
    keeps the symmetric difference of the paths, which fixes the same parities.
    """
    prev = tree[node].prev
    while prev is not None:
        eid = cheapest_edge(G, prev, node)
        marks.toggle(*eid)
        logger.debug("    toggle %s - %s", prev, node)
        node = prev
        prev = tree[node].prev


def assemble_trail(G: nx.MultiGraph, marks: EdgeMarks, source: int) -> TrailResult:
    """
    Sum the unused edges of the component that `source` reaches through unused
    edges only. Every node there has even degree (apart from the trail ends), so
    one trail covers all of them.
    """
    counted: Set[EdgeId] = set()
    seen: Set[int] = set()
    stack = [source]
    while stack:
        i = stack.pop()
        if i in seen:
            continue
        seen.add(i)
        for _, j, key in G.edges(i, keys=True):
            if marks.is_used(i, j, key):
                continue
            eid = edge_id(i, j, key)
            if eid not in counted:
                counted.add(eid)
                logger.debug("  count  %s - %s", i, j)
            stack.append(j)

    weight = sum(G[u][v][key]["weight"] for u, v, key in counted)
    removed = marks.used_edges()
    removed_weight = sum(G[u][v][key]["weight"] for u, v, key in removed)
    stranded = total_weight(G) - weight - removed_weight
    if stranded > 0:
        logger.warning(
            "removing the matched paths cut off %d weight from node %s's component; "
            "the result may be below the true optimum", stranded, source)
    return TrailResult(weight, removed, counted, stranded)


def longest_trail_to(G: nx.MultiGraph,
                     source: int,
                     target: int,
                     cache: Optional[ShortestPathCache] = None,
                     marks: Optional[EdgeMarks] = None) -> Optional[TrailResult]:
    """
    Heaviest trail from `source` to `target`, or None if there is none
    (missing node, target unreachable, or no perfect matching).
    """
    if source not in G or target not in G:
        return None
    if cache is None:
        cache = ShortestPathCache(G)
    if marks is None:
        marks = EdgeMarks()

    if target not in cache[source]:
        return None

    exposed = find_exposed(G, source, target)
    matching = match_exposed(exposed, cache)
    if matching is None:
        return None

    marks.reset()
    for a, b in matching.items():
        i = exposed.nodes[a]
        j = exposed.nodes[b]
        if j < i:
            continue
        mark_path(G, marks, cache[i], j)

    return assemble_trail(G, marks, source)


def longest_trails(G: nx.MultiGraph, source: int = 0) -> Dict[int, Optional[int]]:
    """Heaviest trail weight from `source` to every node (None where there is no trail)."""
    cache = ShortestPathCache(G)
    marks = EdgeMarks()
    dist: Dict[int, Optional[int]] = {}
    for target in G.nodes():
        result = longest_trail_to(G, source, target, cache, marks)
        dist[target] = None if result is None else result.weight
        logger.debug("%s -> %s: %s", source, target, dist[target])
    return dist


def longest_trail_length(dist: Dict[int, Optional[int]]) -> int:
    return max((d for d in dist.values() if d is not None), default=0)
