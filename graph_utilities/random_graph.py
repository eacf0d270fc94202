from __future__ import annotations

import random
from typing import Tuple, Optional
import networkx as nx

from graph_utilities.trail_graph import add_trail_edge, new_trail_graph


def random_trail_graph(
    n: int,
    p: float = 0.4,
    seed: Optional[int] = None,
    cost_range: Tuple[int, int] = (1, 9),
    ensure_connected: bool = True,
    loop_p: float = 0.0,
    parallel_p: float = 0.0,
) -> nx.MultiGraph:
    """
    Return a networkx.MultiGraph on nodes 0..n-1 with integer 'weight' costs
    drawn uniformly from cost_range (inclusive).

      - every pair i<j gets an edge with probability p
      - each such edge gets a parallel twin with probability parallel_p
      - each node gets a self-loop with probability loop_p
    """
    rng = random.Random(seed)
    G = new_trail_graph()
    G.add_nodes_from(range(n))

    for i in range(n):
        for j in range(i + 1, n):
            if rng.random() < p:
                add_trail_edge(G, i, j, rng.randint(*cost_range))
                if rng.random() < parallel_p:
                    add_trail_edge(G, i, j, rng.randint(*cost_range))

    for i in range(n):
        if rng.random() < loop_p:
            add_trail_edge(G, i, i, rng.randint(*cost_range))

    # Ensure connectivity
    if ensure_connected and n > 0:
        comps = list(nx.connected_components(G))
        if len(comps) > 1:
            comp_nodes = [sorted(c) for c in comps]
            reps = [rng.choice(nodes) for nodes in comp_nodes]
            for a, b in zip(reps, reps[1:]):
                add_trail_edge(G, a, b, rng.randint(*cost_range))

    return G
