import re
import sys
from typing import Iterable
import networkx as nx

from graph_utilities.trail_graph import add_trail_edge, new_trail_graph


EDGE_RE = re.compile(r"^\s*(-?\d+)/(-?\d+)\s*(?:@\s*(\d+))?\s*$")

# second variant ranks by edge count first, then by strength
LONGEST_BONUS = 10000000


def edge_cost(problem: int, i: int, j: int) -> int:
    """Default cost of edge i/j when the input gives none."""
    if problem == 1:
        return i + j
    return LONGEST_BONUS + (i + j)


def parse_edge_list(lines: Iterable[str], problem: int = 1) -> nx.MultiGraph:
    """
    Builds a multigraph from lines of the form ``I/J`` or ``I/J@C``.

    Args:
        lines: the input lines.
        problem: cost policy for edges without an explicit ``@C``.

    Returns:
        networkx.MultiGraph with integer 'weight' on every edge.

    Blank lines are skipped; the first other line that does not match, or
    whose derived cost would be negative, ends the input.
    """
    G = new_trail_graph()
    for line in lines:
        if not line.strip():
            continue
        m = EDGE_RE.match(line)
        if m is None:
            break
        i, j = int(m.group(1)), int(m.group(2))
        cost = int(m.group(3)) if m.group(3) is not None else edge_cost(problem, i, j)
        if cost < 0:
            break
        add_trail_edge(G, i, j, cost)
    return G


def read_edge_list(path: str = "-", problem: int = 1) -> nx.MultiGraph:
    if path == "-":
        return parse_edge_list(sys.stdin, problem)
    with open(path, 'r') as f:
        return parse_edge_list(f, problem)


def format_edge_list(G: nx.MultiGraph) -> str:
    return "".join(f"{u}/{v}@{w}\n" for u, v, w in G.edges(data="weight"))
