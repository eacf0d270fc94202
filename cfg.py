# cfg.py
from dataclasses import dataclass
from typing import Optional


@dataclass
class CFG:
    # Query
    SOURCE: int = 0
    TARGET: Optional[int] = None  # report the removed edges for this target
    MODE: str = "fast"      # "fast" (matching reduction) or "brute" (exhaustive search)

    # Input
    INPUT: str = "-"        # edge list file, "-" for stdin
    PROBLEM: int = 1        # cost policy for edges without an explicit "@C"

    # Random input instead of a file (RANDOM_N > 0)
    RANDOM_N: int = 0
    RANDOM_P: float = 0.4
    SEED: int = 0

    # Output
    PLOT: bool = False
    LOG_LEVEL: str = "WARNING"

    # HTTP service
    HOST: str = "0.0.0.0"
    PORT: int = 8000
