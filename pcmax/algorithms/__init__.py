"""Search algorithms module for parallel machine scheduling.

Contains:
- First-improvement and best-improvement local search
- Simulated Annealing (SA)
"""

from pcmax.algorithms.local_search import (
    local_search,
    run_best_improvement,
    run_first_improvement,
)
from pcmax.algorithms.sa import run_simulated_annealing, simulated_annealing

__all__ = [
    "local_search",
    "run_best_improvement",
    "run_first_improvement",
    "run_simulated_annealing",
    "simulated_annealing",
]
