import pytest

from pcmax.algorithms import local_search, run_best_improvement, run_first_improvement
from pcmax.algorithms.base import SearchState
from pcmax.algorithms.local_search import best_improving_move, first_improving_move
from pcmax.errors import InvalidConfigurationError
from pcmax.evaluation import lower_bound, makespan
from pcmax.instance import generate_durations, generate_initial_assignment
from pcmax.models import TracePoint
from pcmax.neighborhood import iter_moves

STRATEGIES = [False, True]


def _reference_local_search(durations, assignment, m, limit, best_improvement):
    """Plain version: full makespan recomputation for every neighbour."""
    current = list(assignment)
    value = makespan(durations, current, m)
    iterations = 0
    stagnation = 0
    while stagnation < limit:
        iterations += 1
        chosen = None
        chosen_value = value
        for move in iter_moves(current, m):
            neighbour = list(current)
            neighbour[move.task] = move.to_machine
            v = makespan(durations, neighbour, m)
            if v < chosen_value:
                chosen, chosen_value = move, v
                if not best_improvement:
                    break
        if chosen is None:
            stagnation += 1
        else:
            current[chosen.task] = chosen.to_machine
            value = chosen_value
            stagnation = 0
    return current, value, iterations


@pytest.mark.parametrize("best_improvement", STRATEGIES)
def test_matches_reference_implementation(best_improvement: bool) -> None:
    for seed in range(5):
        durations = generate_durations(12, seed=seed)
        start = generate_initial_assignment(12, 3, seed=seed + 50)
        expected = _reference_local_search(durations, start, 3, 3, best_improvement)
        got = local_search(durations, start, 3, 3, best_improvement=best_improvement)
        assert got == expected


@pytest.mark.parametrize("best_improvement", STRATEGIES)
def test_balanced_instance_reaches_optimum(best_improvement: bool) -> None:
    durations = [10, 10, 10, 10]
    for seed in (1, 2, 3, 1000):
        start = generate_initial_assignment(4, 2, seed=seed)
        assignment, value, iterations = local_search(
            durations, start, 2, 5, best_improvement=best_improvement
        )
        assert value == 20
        assert makespan(durations, assignment, 2) == 20
        assert iterations >= 5


@pytest.mark.parametrize("best_improvement", STRATEGIES)
def test_single_machine(best_improvement: bool) -> None:
    durations = [4, 8, 15]
    _, value, iterations = local_search(
        durations, [0, 0, 0], 1, 7, best_improvement=best_improvement
    )
    assert value == sum(durations)
    assert iterations == 7


@pytest.mark.parametrize("best_improvement", STRATEGIES)
def test_trace_is_monotone(small_instance, best_improvement: bool) -> None:
    durations, m = small_instance
    start = generate_initial_assignment(len(durations), m, seed=3)
    trace: list[TracePoint] = []
    _, value, iterations = local_search(
        durations, start, m, 10, best_improvement=best_improvement, trace=trace
    )
    assert len(trace) == iterations + 1
    assert [p.iteration for p in trace] == list(range(iterations + 1))
    assert trace[0].current_makespan == makespan(durations, start, m)
    values = [p.current_makespan for p in trace]
    assert all(b <= a for a, b in zip(values, values[1:]))
    assert trace[-1].best_makespan == value
    # the last 10 iterations found nothing
    assert len(set(values[-11:])) == 1
    assert all(p.temperature is None for p in trace)


def test_start_assignment_not_mutated(small_instance) -> None:
    durations, m = small_instance
    start = generate_initial_assignment(len(durations), m, seed=5)
    snapshot = list(start)
    assignment, _, _ = local_search(durations, start, m, 5)
    assert start == snapshot
    assert assignment is not start


@pytest.mark.parametrize("runner", [run_first_improvement, run_best_improvement])
def test_run_summary_deterministic_and_bounded(small_instance, runner) -> None:
    durations, m = small_instance
    a = runner(durations, m, 20, seed=1000)
    b = runner(durations, m, 20, seed=1000)
    assert (a.makespan, a.iterations) == (b.makespan, b.iterations)
    assert lower_bound(durations, m) <= a.makespan <= sum(durations)
    start = generate_initial_assignment(len(durations), m, seed=1000)
    assert a.makespan <= makespan(durations, start, m)
    assert a.iterations >= 20
    assert a.elapsed_seconds >= 0


def test_best_not_worse_on_balanced_instance() -> None:
    durations = [10] * 12
    for seed in range(5):
        fi = run_first_improvement(durations, 2, 10, seed)
        bi = run_best_improvement(durations, 2, 10, seed)
        assert bi.makespan <= fi.makespan
        assert bi.makespan == 60


def test_empty_task_set() -> None:
    assert local_search([], [], 3, 10) == ([], 0, 0)
    summary = run_first_improvement([], 3, 10, seed=0)
    assert (summary.makespan, summary.iterations) == (0, 0)


@pytest.mark.parametrize(
    "durations,start,m,limit",
    [
        ([1, 2], [0, 0], 0, 5),
        ([1, 2], [0, 0], 2, 0),
        ([1, 0], [0, 0], 2, 5),
        ([1, 2], [0], 2, 5),
        ([1, 2], [0, 2], 2, 5),
    ],
)
def test_invalid_inputs(durations, start, m, limit) -> None:
    with pytest.raises(InvalidConfigurationError):
        local_search(durations, start, m, limit)


def test_invalid_configuration_is_value_error() -> None:
    with pytest.raises(ValueError):
        run_best_improvement([3, 4], 0, 10, seed=0)


@pytest.mark.parametrize("pick", [first_improving_move, best_improving_move])
def test_candidate_scan_leaves_state_untouched(small_instance, pick) -> None:
    durations, m = small_instance
    start = generate_initial_assignment(len(durations), m, seed=12)
    state = SearchState.start(durations, start, m)
    assignment, loads = list(state.current), list(state.loads)
    found = pick(state, m)
    assert found is not None
    assert state.current == assignment
    assert state.loads == loads
    assert state.current_makespan == makespan(durations, start, m)
