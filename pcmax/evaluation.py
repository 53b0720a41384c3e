"""Objective evaluation for parallel machine assignments.

``makespan`` is the reference evaluator (full recomputation). The engines use
``makespan_after_move`` on a maintained load vector instead; both return the
same value for the same neighbour.
"""

from __future__ import annotations

import heapq
from typing import Optional, Sequence

from pcmax.models import Move


def machine_loads(durations: Sequence[int], assignment: Sequence[int], m: int) -> list[int]:
    # total processing time per machine
    loads = [0] * m
    for task, machine in enumerate(assignment):
        loads[machine] += durations[task]
    return loads


def makespan(durations: Sequence[int], assignment: Sequence[int], m: int) -> int:
    """Maximum machine load of ``assignment`` (0 when there are no tasks)."""
    if not durations:
        return 0
    return max(machine_loads(durations, assignment, m))


def heaviest_machines(loads: Sequence[int], k: int = 3) -> list[tuple[int, int]]:
    """Return the ``k`` largest ``(machine, load)`` pairs, heaviest first."""
    return heapq.nlargest(k, enumerate(loads), key=lambda pair: pair[1])


def makespan_after_move(
    loads: Sequence[int],
    move: Move,
    duration: int,
    leaders: Optional[Sequence[tuple[int, int]]] = None,
) -> int:
    """Makespan of the neighbour reached by ``move``, without mutating ``loads``.

    Args:
        loads: Current load of every machine.
        move: Reassignment being evaluated.
        duration: Processing time of ``move.task``.
        leaders: Optional ``heaviest_machines(loads)`` of the same ``loads``;
            turns the O(m) scan into an O(1) lookup.

    Returns:
        Maximum load after moving ``duration`` from ``move.from_machine`` to
        ``move.to_machine``.
    """
    if leaders is not None:
        # heaviest machine untouched by the move (at most two are touched)
        rest = 0
        for machine, load in leaders:
            if machine != move.from_machine and machine != move.to_machine:
                rest = load
                break
        return max(loads[move.from_machine] - duration, loads[move.to_machine] + duration, rest)
    best = 0
    for machine, load in enumerate(loads):
        if machine == move.from_machine:
            load -= duration
        elif machine == move.to_machine:
            load += duration
        if load > best:
            best = load
    return best


def lower_bound(durations: Sequence[int], m: int) -> int:
    """Trivial lower bound: max(ceil(sum / m), longest task)."""
    if not durations:
        return 0
    total = sum(durations)
    return max(-(-total // m), max(durations))
