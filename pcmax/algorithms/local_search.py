"""Monotone local search (first- and best-improvement) for P||Cmax."""

from __future__ import annotations

import logging
import time
from typing import List, Optional, Sequence, Tuple

from pcmax.algorithms.base import SearchState, validate_inputs
from pcmax.evaluation import heaviest_machines, makespan_after_move
from pcmax.instance import generate_initial_assignment
from pcmax.models import Move, RunSummary, TracePoint
from pcmax.neighborhood import iter_moves

logger = logging.getLogger("pcmax.search")


def first_improving_move(state: SearchState, m: int) -> Optional[Tuple[Move, int]]:
    """Return the first move (task, machine order) that lowers the makespan."""
    leaders = heaviest_machines(state.loads)
    for move in iter_moves(state.current, m):
        value = makespan_after_move(state.loads, move, state.durations[move.task], leaders)
        if value < state.current_makespan:
            return move, value
    return None


def best_improving_move(state: SearchState, m: int) -> Optional[Tuple[Move, int]]:
    """Scan the whole neighbourhood; ties keep the earliest move."""
    leaders = heaviest_machines(state.loads)
    best_move = None
    best_value = state.current_makespan
    for move in iter_moves(state.current, m):
        value = makespan_after_move(state.loads, move, state.durations[move.task], leaders)
        if value < best_value:
            best_value = value
            best_move = move
    if best_move is None:
        return None
    return best_move, best_value


def local_search(
    durations: Sequence[int],
    start_assignment: Sequence[int],
    machine_count: int,
    no_improvement_limit: int,
    best_improvement: bool = False,
    trace: Optional[List[TracePoint]] = None,
) -> Tuple[List[int], int, int]:
    """Monotone local search over single-task reassignments.

    Each iteration scans the neighbourhood of the current assignment and applies
    at most one strictly improving move (the first found, or the best one when
    ``best_improvement`` is set). Search stops after ``no_improvement_limit``
    consecutive iterations without improvement.

    An iteration without improvement leaves the assignment untouched, so every
    following scan gives the same answer; the remaining budget is consumed at
    once instead of being rescanned.

    Args:
        durations: Task durations.
        start_assignment: Initial machine of every task (copied).
        machine_count: Number of identical machines.
        no_improvement_limit: Consecutive non-improving iterations before stop.
        best_improvement: Best-improvement policy instead of first-improvement.
        trace: Optional list extended with one ``TracePoint`` per iteration.

    Returns:
        ``(assignment, makespan, iterations)`` of the final local optimum.

    Raises:
        InvalidConfigurationError: On invalid inputs (see ``validate_inputs``).
    """
    validate_inputs(durations, machine_count, no_improvement_limit, start_assignment)
    tag = "bi" if best_improvement else "fi"
    if not durations:
        logger.info("[%s] empty task set, nothing to search", tag)
        return [], 0, 0
    pick = best_improving_move if best_improvement else first_improving_move
    state = SearchState.start(durations, start_assignment, machine_count, trace)
    start_makespan = state.current_makespan

    while state.no_improve < no_improvement_limit:
        state.iteration += 1
        found = pick(state, machine_count)
        if found is None:
            state.no_improve += 1
            state.record()
            # local optimum reached: fast-forward the remaining idle iterations
            while state.no_improve < no_improvement_limit:
                state.iteration += 1
                state.no_improve += 1
                state.record()
            break
        move, value = found
        state.apply(move, value)
        state.update_best()
        state.no_improve = 0
        state.record()
        logger.debug(
            "[%s] iter %d move task=%d %d->%d makespan=%d",
            tag,
            state.iteration,
            move.task,
            move.from_machine,
            move.to_machine,
            value,
        )

    logger.info(
        "[%s] stop iter=%d start=%d final=%d n=%d m=%d",
        tag,
        state.iteration,
        start_makespan,
        state.current_makespan,
        len(durations),
        machine_count,
    )
    return state.current.copy(), state.current_makespan, state.iteration


def _run(
    durations: Sequence[int],
    machine_count: int,
    no_improvement_limit: int,
    seed: int,
    best_improvement: bool,
) -> RunSummary:
    t0 = time.perf_counter()
    validate_inputs(durations, machine_count, no_improvement_limit)
    start = generate_initial_assignment(len(durations), machine_count, seed)
    _, value, iterations = local_search(
        durations,
        start,
        machine_count,
        no_improvement_limit,
        best_improvement=best_improvement,
    )
    return RunSummary(value, iterations, time.perf_counter() - t0)


def run_first_improvement(
    durations: Sequence[int], machine_count: int, no_improvement_limit: int, seed: int
) -> RunSummary:
    """First-improvement local search from a seeded random assignment."""
    return _run(durations, machine_count, no_improvement_limit, seed, best_improvement=False)


def run_best_improvement(
    durations: Sequence[int], machine_count: int, no_improvement_limit: int, seed: int
) -> RunSummary:
    """Best-improvement local search from a seeded random assignment."""
    return _run(durations, machine_count, no_improvement_limit, seed, best_improvement=True)
