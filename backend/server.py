from typing import Dict, Any, List, Optional
import logging
import networkx as nx
from fastapi import Body, HTTPException, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from cfg import CFG
from graph_utilities.edge_list import edge_cost, parse_edge_list
from graph_utilities.trail_graph import NoUnusedEdgeError, add_trail_edge, new_trail_graph
from longest_trail import longest_trail_length, longest_trail_to, longest_trails
from longest_trail_brute import longest_trails_brute

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(title="Edge list→Longest trail")

# CORS for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5500", "http://localhost:8000"],
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)


def create_graph_helper(payload: Dict[str, Any]) -> nx.MultiGraph:
    """
    Build a MultiGraph from payload containing edges.
    Payload keys:
      "edges": either edge-list text ("I/J" or "I/J@C" per line)
               or a list of [i, j] / [i, j, cost]
      "problem": cost policy for edges without a cost (optional, default 1)
    """
    edges_raw = payload.get("edges")
    problem = 1 if int(payload.get("problem", CFG.PROBLEM)) == 1 else 2

    if isinstance(edges_raw, str):
        return parse_edge_list(edges_raw.splitlines(), problem)

    if not isinstance(edges_raw, list):
        raise ValueError("missing or invalid 'edges'")

    G = new_trail_graph()
    for e in edges_raw:
        if not isinstance(e, list) or len(e) not in (2, 3):
            raise ValueError(f"invalid edge {e!r}: expected [i, j] or [i, j, cost]")
        i, j = int(e[0]), int(e[1])
        cost = int(e[2]) if len(e) == 3 else edge_cost(problem, i, j)
        add_trail_edge(G, i, j, cost)
    return G


def _edge_rows(G: nx.MultiGraph, eids) -> List[List[int]]:
    return [[int(u), int(v), int(G[u][v][k]["weight"])] for u, v, k in sorted(eids)]


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/longest_trails")
async def post_longest_trails(payload: Dict[str, Any] = Body(...)):
    """
    POST /longest_trails
    Body JSON:
      {
        "edges": "0/1\\n1/2@5" | [[0, 1], [1, 2, 5], ...],
        "problem": 1,            # optional
        "mode": "fast"|"brute",  # optional, default fast
        "source": 0,             # optional
        "target": <int>          # optional; adds removed/counted edges for this target
      }
    Returns:
      n_nodes, n_edges, lengths: {node: weight|null}, longest, and for a target:
      trail: {weight, removed: [[u,v,w],...], counted: [[u,v,w],...], stranded_weight}
    """
    try:
        G = create_graph_helper(payload)
        source = int(payload.get("source", CFG.SOURCE))
        mode = str(payload.get("mode", CFG.MODE))
        target: Optional[int] = None if payload.get("target") is None else int(payload["target"])
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    if mode not in ("fast", "brute"):
        raise HTTPException(status_code=400, detail=f"unknown mode {mode!r}")

    logger.info("longest_trails: %d nodes, %d edges, source=%s, mode=%s",
                G.number_of_nodes(), G.number_of_edges(), source, mode)

    try:
        if mode == "brute":
            lengths: Dict[int, Optional[int]] = dict(longest_trails_brute(G, source))
        else:
            lengths = longest_trails(G, source)
        result = longest_trail_to(G, source, target) if target is not None else None
    except NoUnusedEdgeError as e:
        raise HTTPException(status_code=500, detail=f"longest_trails failed: {e}")

    json_resp: Dict[str, Any] = {
        "n_nodes": G.number_of_nodes(),
        "n_edges": G.number_of_edges(),
        "source": source,
        "mode": mode,
        "lengths": {str(n): d for n, d in lengths.items()},
        "longest": longest_trail_length(lengths),
    }
    if target is not None:
        json_resp["target"] = target
        json_resp["trail"] = None if result is None else {
            "weight": result.weight,
            "removed": _edge_rows(G, result.removed),
            "counted": _edge_rows(G, result.component_edges),
            "stranded_weight": result.stranded_weight,
        }
    return JSONResponse(json_resp)


if __name__ == "__main__":
    # Run without reloader to avoid multi-process side-effects.
    uvicorn.run("backend.server:app", host=CFG.HOST, port=CFG.PORT, reload=False)
