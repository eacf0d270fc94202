from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import networkx as nx

from cfg import CFG
from graph_utilities.edge_list import read_edge_list
from graph_utilities.random_graph import random_trail_graph
from graph_utilities.trail_graph import NoUnusedEdgeError
from longest_trail import longest_trail_length, longest_trail_to, longest_trails
from longest_trail_brute import longest_trails_brute

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> CFG:
    ap = argparse.ArgumentParser(
        description="Heaviest trail (no repeated edges) from a source node in an undirected multigraph.")
    ap.add_argument("mode", choices=["fast", "brute"])
    ap.add_argument("problem", nargs="?", type=int, default=CFG.PROBLEM,
                    help="cost policy for edges without '@C': 1 -> i+j, otherwise 10000000+i+j")
    ap.add_argument("input", nargs="?", default=CFG.INPUT, help="edge list file ('-' for stdin)")
    ap.add_argument("--source", type=int, default=CFG.SOURCE)
    ap.add_argument("--target", type=int, default=None,
                    help="also report the removed edges for this target (fast mode)")
    ap.add_argument("--random", type=int, default=CFG.RANDOM_N, metavar="N",
                    help="use a random multigraph on N nodes instead of reading input")
    ap.add_argument("--p", type=float, default=CFG.RANDOM_P, help="edge probability for --random")
    ap.add_argument("--seed", type=int, default=CFG.SEED)
    ap.add_argument("--plot", action="store_true")
    ap.add_argument("--log-level", default=CFG.LOG_LEVEL)
    args = ap.parse_args(argv)

    cfg = CFG()
    cfg.MODE = args.mode
    cfg.PROBLEM = 1 if args.problem == 1 else 2
    cfg.INPUT = args.input
    cfg.SOURCE = args.source
    cfg.RANDOM_N = args.random
    cfg.RANDOM_P = args.p
    cfg.SEED = args.seed
    cfg.PLOT = args.plot
    cfg.LOG_LEVEL = args.log_level.upper()
    cfg.TARGET = args.target
    return cfg


def load_graph(cfg: CFG) -> nx.MultiGraph:
    if cfg.RANDOM_N > 0:
        return random_trail_graph(cfg.RANDOM_N, p=cfg.RANDOM_P, seed=cfg.SEED)
    return read_edge_list(cfg.INPUT, cfg.PROBLEM)


def run(cfg: CFG) -> int:
    G = load_graph(cfg)
    print(f"{G.number_of_nodes()} nodes")

    if cfg.MODE == "brute":
        dists = longest_trails_brute(G, cfg.SOURCE)
    else:
        dists = longest_trails(G, cfg.SOURCE)
    for node, d in dists.items():
        logger.info("%s -> %s: %s", cfg.SOURCE, node, d)
    print(f"longest path length: {longest_trail_length(dists)}")

    target = cfg.TARGET
    if target is not None:
        result = longest_trail_to(G, cfg.SOURCE, target)
        if result is None:
            print(f"no trail from {cfg.SOURCE} to {target}")
        else:
            print(f"trail {cfg.SOURCE} -> {target}: {result.weight}")
            for u, v, key in sorted(result.removed):
                print(f"  removed {u}/{v}@{G[u][v][key]['weight']}")
            if result.stranded_weight:
                print(f"  stranded weight: {result.stranded_weight}")
        if cfg.PLOT:
            from graph_utilities.plotting import plot_trail
            plot_trail(G, result, show_edge_weights=True)
    elif cfg.PLOT:
        from graph_utilities.plotting import plot_trail
        plot_trail(G, show_edge_weights=True)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    cfg = parse_args(argv)
    logging.basicConfig(level=getattr(logging, cfg.LOG_LEVEL, logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        return run(cfg)
    except NoUnusedEdgeError as e:
        logger.error("inconsistent edge marking: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
