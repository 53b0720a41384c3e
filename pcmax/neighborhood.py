"""Single-task reassignment neighbourhood.

Concepts
--------
Move
    ``Move(task, from_machine, to_machine)`` with ``to_machine !=
    from_machine``. Applying a move changes exactly one entry of the
    assignment and shifts one duration between two machine loads.
"""

from __future__ import annotations

import random
from typing import Iterator, Optional, Sequence

from pcmax.models import Move


def iter_moves(assignment: Sequence[int], m: int) -> Iterator[Move]:
    """Yield every move in (task, target machine) lexicographic order."""
    for task, current in enumerate(assignment):
        for machine in range(m):
            if machine == current:
                continue
            yield Move(task, current, machine)


def neighborhood_size(n: int, m: int) -> int:
    return n * (m - 1)


def random_move(assignment: Sequence[int], m: int, rng: random.Random) -> Optional[Move]:
    """Sample a task uniformly and a different machine uniformly.

    Returns None when no move exists (no tasks or a single machine). The target
    is drawn from the ``m - 1`` other machines with one call to ``rng``.
    """
    if not assignment or m < 2:
        return None
    task = rng.randrange(len(assignment))
    current = assignment[task]
    target = rng.randrange(m - 1)
    if target >= current:
        target += 1
    return Move(task, current, target)


def apply_move(
    assignment: list[int], loads: list[int], move: Move, duration: int
) -> None:
    assignment[move.task] = move.to_machine
    loads[move.from_machine] -= duration
    loads[move.to_machine] += duration
