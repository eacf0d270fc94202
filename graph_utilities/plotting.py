# draw a trail query: counted edges, removed T-join, stranded leftovers
from typing import List, Tuple, Dict, Optional, Any

from matplotlib.collections import LineCollection
from matplotlib.figure import Figure
from matplotlib.patches import Circle

import math
import networkx as nx
import matplotlib.pyplot as plt

from graph_utilities.trail_graph import EdgeId, edge_id

COUNTED_COLOR = "tab:blue"
REMOVED_COLOR = "tab:red"
STRANDED_COLOR = "lightgray"


def _compute_pos2d_from_graph(G: nx.MultiGraph) -> Dict[int, Tuple[float, float]]:
    pos = nx.get_node_attributes(G, "pos")
    if pos and len(pos) == G.number_of_nodes():
        return {k: (v[0], v[1]) for k, v in pos.items()}
    return nx.spring_layout(nx.Graph(G), seed=42, iterations=200)


def _offset_for_edge(p1: Tuple[float, float], p2: Tuple[float, float],
                     occurrence_index: int, delta: float) -> Tuple[float, float]:
    # parallel edges alternate sides with growing distance
    (x1, y1), (x2, y2) = p1, p2
    dx = x2 - x1
    dy = y2 - y1
    length = math.hypot(dx, dy)
    if length == 0 or occurrence_index == 0:
        return (0.0, 0.0)
    side = 1 if (occurrence_index % 2 == 1) else -1
    amount = delta * side * ((occurrence_index + 1) // 2)
    return (-dy / length * amount, dx / length * amount)


def plot_trail(
    G: nx.MultiGraph,
    result: Optional[Any] = None,
    show_edge_weights: bool = False,
    figsize: Tuple[int, int] = (6, 6),
    node_size: int = 300,
    parallel_offset_scale: float = 0.03,
    show: bool = True,
) -> Figure:
    """
    Plot G; if a TrailResult is given, counted edges are drawn solid blue,
    removed (matched path) edges dashed red and stranded edges faint grey.
    Parallel edges are drawn side by side, self-loops as small circles.
    """
    pos2d = _compute_pos2d_from_graph(G)

    removed = set(result.removed) if result is not None else set()
    counted = set(result.component_edges) if result is not None else None

    def classify(eid: EdgeId) -> str:
        if eid in removed:
            return REMOVED_COLOR
        if counted is None or eid in counted:
            return COUNTED_COLOR
        return STRANDED_COLOR

    fig, ax = plt.subplots(figsize=figsize)
    ax.set_aspect("equal")
    ax.axis("off")

    xs = [p[0] for p in pos2d.values()] or [0.0]
    ys = [p[1] for p in pos2d.values()] or [0.0]
    span = max(1e-6, max(max(xs) - min(xs), max(ys) - min(ys)))
    delta = parallel_offset_scale * span

    segments: List[Tuple[Tuple[float, float], Tuple[float, float]]] = []
    colors: List[str] = []
    styles: List[str] = []
    occurrences: Dict[Tuple[int, int], int] = {}
    for u, v, key, w in G.edges(keys=True, data="weight"):
        eid = edge_id(u, v, key)
        color = classify(eid)
        if u == v:
            x, y = pos2d[u]
            r = 0.04 * span
            ax.add_patch(Circle((x, y + r), r, fill=False, edgecolor=color,
                                linestyle="--" if color == REMOVED_COLOR else "-", zorder=1))
            if show_edge_weights:
                ax.text(x, y + 2.2 * r, str(w), fontsize=7, ha="center")
            continue
        pair = (eid[0], eid[1])
        occ = occurrences.get(pair, 0)
        occurrences[pair] = occ + 1
        p1, p2 = pos2d[eid[0]], pos2d[eid[1]]
        ox, oy = _offset_for_edge(p1, p2, occ, delta)
        a = (p1[0] + ox, p1[1] + oy)
        b = (p2[0] + ox, p2[1] + oy)
        segments.append((a, b))
        colors.append(color)
        styles.append("dashed" if color == REMOVED_COLOR else "solid")
        if show_edge_weights:
            ax.text((a[0] + b[0]) / 2, (a[1] + b[1]) / 2, str(w), fontsize=7,
                    bbox=dict(facecolor='white', alpha=0.8, edgecolor='none', pad=0.5))

    lc = LineCollection(segments, colors=colors, linestyles=styles, linewidths=2.0, zorder=1)
    ax.add_collection(lc)

    nx.draw_networkx_nodes(nx.Graph(G), pos2d, node_size=node_size, node_color="skyblue",
                           edgecolors="k", linewidths=0.6, ax=ax)
    nx.draw_networkx_labels(nx.Graph(G), pos2d, font_size=9, ax=ax)

    if result is not None:
        ax.set_title(f"trail weight: {result.weight}"
                     + (f"  (stranded: {result.stranded_weight})" if result.stranded_weight else ""))

    xmin, xmax = min(xs), max(xs)
    ymin, ymax = min(ys), max(ys)
    padx = (xmax - xmin) * 0.1 if xmax != xmin else 0.2
    pady = (ymax - ymin) * 0.1 if ymax != ymin else 0.2
    ax.set_xlim(xmin - padx, xmax + padx)
    ax.set_ylim(ymin - pady, ymax + pady)

    fig.tight_layout()
    if show:
        plt.show()
    return fig
