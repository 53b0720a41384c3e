import random

from pcmax.evaluation import (
    heaviest_machines,
    lower_bound,
    machine_loads,
    makespan,
    makespan_after_move,
)
from pcmax.instance import generate_durations, generate_initial_assignment
from pcmax.models import Move
from pcmax.neighborhood import iter_moves


def test_machine_loads_and_makespan() -> None:
    durations = [3, 5, 2, 7]
    assignment = [0, 1, 0, 2]
    assert machine_loads(durations, assignment, 3) == [5, 5, 7]
    assert makespan(durations, assignment, 3) == 7


def test_makespan_empty_and_idle_machines() -> None:
    assert makespan([], [], 4) == 0
    assert machine_loads([4], [2], 4) == [0, 0, 4, 0]


def test_makespan_does_not_mutate_inputs() -> None:
    durations = [4, 4, 1]
    assignment = [1, 1, 0]
    makespan(durations, assignment, 2)
    assert durations == [4, 4, 1]
    assert assignment == [1, 1, 0]


def test_move_evaluation_matches_full_recompute() -> None:
    for m in (1, 2, 3, 7):
        durations = generate_durations(15, seed=m)
        assignment = generate_initial_assignment(15, m, seed=m + 100)
        loads = machine_loads(durations, assignment, m)
        leaders = heaviest_machines(loads)
        for move in iter_moves(assignment, m):
            moved = list(assignment)
            moved[move.task] = move.to_machine
            expected = makespan(durations, moved, m)
            d = durations[move.task]
            assert makespan_after_move(loads, move, d) == expected
            assert makespan_after_move(loads, move, d, leaders) == expected


def test_move_evaluation_leaves_loads_untouched() -> None:
    loads = [10, 4, 6]
    makespan_after_move(loads, Move(0, 0, 1), 5)
    makespan_after_move(loads, Move(0, 0, 2), 5, heaviest_machines(loads))
    assert loads == [10, 4, 6]


def test_heaviest_machines_order() -> None:
    assert heaviest_machines([3, 9, 1, 7]) == [(1, 9), (3, 7), (0, 3)]
    assert heaviest_machines([5]) == [(0, 5)]


def test_lower_bound() -> None:
    assert lower_bound([10, 10, 10, 10], 2) == 20
    assert lower_bound([3, 3, 1], 2) == 4  # ceil(7 / 2)
    assert lower_bound([100, 1, 1], 3) == 100  # longest task dominates
    assert lower_bound([], 5) == 0


def test_lower_bound_never_exceeds_any_assignment() -> None:
    rng = random.Random(5)
    durations = generate_durations(12, seed=11)
    for _ in range(50):
        assignment = [rng.randrange(3) for _ in durations]
        assert lower_bound(durations, 3) <= makespan(durations, assignment, 3) <= sum(durations)
