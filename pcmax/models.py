"""Core data structures for identical parallel machine scheduling (P||Cmax).

This module defines:
    Move         -- reassignment of a single task to another machine.
    TracePoint   -- one row of an iteration trace recorded by the engines.
    RunSummary   -- final (makespan, iterations, elapsed_seconds) of one run.
    ResultRecord -- immutable row of the experiment export.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

Durations = list[int]  # durations[i] -> processing time of task i
Assignment = list[int]  # assignment[i] -> machine index of task i

# Labels used in the exported CSV (kept compatible with existing analysis sheets)
FIRST_IMPROVEMENT = "monotona_primeira_melhora"
BEST_IMPROVEMENT = "monotona_melhor_melhora"
SIMULATED_ANNEALING = "tempera_simulada"


@dataclass(frozen=True)
class Move:
    """Reassign ``task`` from ``from_machine`` to ``to_machine``."""

    task: int
    from_machine: int
    to_machine: int


@dataclass(frozen=True)
class TracePoint:
    """State of a search after one iteration.

    Fields:
        iteration: Iteration number (0 = start solution).
        current_makespan: Makespan of the working assignment.
        best_makespan: Best makespan seen so far in this run.
        temperature: Annealing temperature after cooling, ``None`` for local search.
    """

    iteration: int
    current_makespan: int
    best_makespan: int
    temperature: float | None = None


class RunSummary(NamedTuple):
    makespan: int
    iterations: int
    elapsed_seconds: float


@dataclass(frozen=True)
class ResultRecord:
    """Single experiment result row.

    Fields:
        heuristic: Export label of the heuristic (see module constants).
        n: Number of tasks.
        m: Number of machines.
        replication: Replication id (1-based).
        elapsed_seconds: Wall time of the run.
        iterations: Total iterations performed.
        makespan: Achieved (best) makespan.
        parameter: Cooling rate for simulated annealing, otherwise None.
    """

    heuristic: str
    n: int
    m: int
    replication: int
    elapsed_seconds: float
    iterations: int
    makespan: int
    parameter: float | None = None
