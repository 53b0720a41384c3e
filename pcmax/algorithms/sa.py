"""Simulated Annealing for identical parallel machine scheduling."""

from __future__ import annotations

import logging
import math
import random
import time
from typing import List, Optional, Sequence, Tuple

from pcmax.algorithms.base import (
    INITIAL_TEMPERATURE_FACTOR,
    MIN_TEMPERATURE,
    SearchState,
    validate_alpha,
    validate_inputs,
)
from pcmax.evaluation import makespan_after_move
from pcmax.instance import generate_initial_assignment
from pcmax.models import RunSummary, TracePoint
from pcmax.neighborhood import random_move

logger = logging.getLogger("pcmax.search")


def annealing_seed(seed: int, alpha: float) -> int:
    """Seed of the move generator; differs per cooling rate for the same replication."""
    return seed + int(round(alpha * 100))


def simulated_annealing(
    durations: Sequence[int],
    start_assignment: Sequence[int],
    machine_count: int,
    no_improvement_limit: int,
    alpha: float,
    rng: random.Random,
    trace: Optional[List[TracePoint]] = None,
    min_temp: float = MIN_TEMPERATURE,
) -> Tuple[List[int], int, int]:
    """Simulated Annealing with geometric cooling.

    Parameters:
        durations: task durations
        start_assignment: initial machine of every task (copied)
        machine_count: number of identical machines
        no_improvement_limit: consecutive iterations without a new best before stop
        alpha: cooling factor (T *= alpha after every iteration)
        rng: move / acceptance generator owned by this run
        trace: optional list extended with one TracePoint per iteration
        min_temp: search stops once T <= min_temp

    Returns:
        (best_assignment, best_makespan, iterations)
    """
    validate_inputs(durations, machine_count, no_improvement_limit, start_assignment)
    validate_alpha(alpha)
    if not durations:
        logger.info("[sa] empty task set, nothing to search")
        return [], 0, 0

    state = SearchState.start(durations, start_assignment, machine_count, trace)
    # initial temperature tied to instance scale
    T = INITIAL_TEMPERATURE_FACTOR * state.current_makespan

    while state.no_improve < no_improvement_limit and T > min_temp:
        state.iteration += 1
        # single machine: no move exists, iteration counts as rejected
        move = random_move(state.current, machine_count, rng)
        accept = False
        delta = 0
        if move is not None:
            candidate = makespan_after_move(state.loads, move, durations[move.task])
            delta = candidate - state.current_makespan
            if delta < 0:
                accept = True
            else:
                prob = math.exp(-delta / T)
                if rng.random() < prob:
                    accept = True
        if accept:
            state.apply(move, candidate)
            if state.update_best():
                state.no_improve = 0
            else:
                state.no_improve += 1
        else:
            state.no_improve += 1
        prev_T = T
        T *= alpha
        state.record(T)
        logger.debug(
            "[sa] iter %d T=%.4f->%.4f current=%s best=%s delta=%s acc=%d",
            state.iteration,
            prev_T,
            T,
            state.current_makespan,
            state.best_makespan,
            delta,
            1 if accept else 0,
        )

    logger.info(
        "[sa] stop iter=%d best=%d T=%.4f stagnation=%d alpha=%s",
        state.iteration,
        state.best_makespan,
        T,
        state.no_improve,
        alpha,
    )
    return state.best.copy(), state.best_makespan, state.iteration


def run_simulated_annealing(
    durations: Sequence[int],
    machine_count: int,
    no_improvement_limit: int,
    alpha: float,
    seed: int,
) -> RunSummary:
    """Simulated Annealing from a seeded random assignment; returns the best makespan."""
    t0 = time.perf_counter()
    validate_inputs(durations, machine_count, no_improvement_limit)
    validate_alpha(alpha)
    start = generate_initial_assignment(len(durations), machine_count, seed)
    rng = random.Random(annealing_seed(seed, alpha))
    _, value, iterations = simulated_annealing(
        durations,
        start,
        machine_count,
        no_improvement_limit,
        alpha,
        rng=rng,
    )
    return RunSummary(value, iterations, time.perf_counter() - t0)
