"""Core package for P||Cmax local search experiments.

Exports the search entry points and base data structures.
"""

from pcmax.algorithms import (  # noqa: F401
    local_search,
    run_best_improvement,
    run_first_improvement,
    run_simulated_annealing,
    simulated_annealing,
)
from pcmax.errors import InvalidConfigurationError  # noqa: F401
from pcmax.evaluation import lower_bound, makespan  # noqa: F401
from pcmax.models import Move, ResultRecord, RunSummary, TracePoint  # noqa: F401

__all__ = [
    "InvalidConfigurationError",
    "Move",
    "ResultRecord",
    "RunSummary",
    "TracePoint",
    "local_search",
    "lower_bound",
    "makespan",
    "run_best_improvement",
    "run_first_improvement",
    "run_simulated_annealing",
    "simulated_annealing",
]
