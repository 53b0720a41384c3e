"""Common structures and helper functions for search algorithms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from pcmax.errors import InvalidConfigurationError
from pcmax.evaluation import machine_loads
from pcmax.models import Move, TracePoint
from pcmax.neighborhood import apply_move

MIN_TEMPERATURE = 0.01
INITIAL_TEMPERATURE_FACTOR = 0.5


@dataclass
class SearchState:
    """Working state owned by one engine run."""

    durations: Sequence[int]
    current: List[int]
    loads: List[int]
    current_makespan: int
    best: List[int]
    best_makespan: int
    iteration: int = 0
    no_improve: int = 0
    trace: List[TracePoint] | None = field(default=None, repr=False)

    @classmethod
    def start(
        cls,
        durations: Sequence[int],
        assignment: Sequence[int],
        m: int,
        trace: List[TracePoint] | None = None,
    ) -> "SearchState":
        current = list(assignment)
        loads = machine_loads(durations, current, m)
        value = max(loads) if durations else 0
        state = cls(
            durations=durations,
            current=current,
            loads=loads,
            current_makespan=value,
            best=list(current),
            best_makespan=value,
            trace=trace,
        )
        state.record()
        return state

    def apply(self, move: Move, new_makespan: int) -> None:
        apply_move(self.current, self.loads, move, self.durations[move.task])
        self.current_makespan = new_makespan

    def update_best(self) -> bool:
        """Update best solution. Returns True if improved."""
        if self.current_makespan < self.best_makespan:
            self.best_makespan = self.current_makespan
            self.best = self.current.copy()
            return True
        return False

    def record(self, temperature: float | None = None) -> None:
        if self.trace is not None:
            self.trace.append(
                TracePoint(
                    iteration=self.iteration,
                    current_makespan=self.current_makespan,
                    best_makespan=self.best_makespan,
                    temperature=temperature,
                )
            )


def validate_inputs(
    durations: Sequence[int],
    machine_count: int,
    no_improvement_limit: int,
    start_assignment: Sequence[int] | None = None,
) -> None:
    """Check engine preconditions before any search begins.

    Raises:
        InvalidConfigurationError: If ``machine_count < 1``, a duration is not
            positive, ``no_improvement_limit < 1`` or ``start_assignment`` does
            not match the task set.
    """
    if machine_count < 1:
        raise InvalidConfigurationError(f"machine_count must be >= 1, got {machine_count}")
    if no_improvement_limit < 1:
        raise InvalidConfigurationError(
            f"no_improvement_limit must be >= 1, got {no_improvement_limit}"
        )
    for task, duration in enumerate(durations):
        if duration < 1:
            raise InvalidConfigurationError(f"duration of task {task} must be >= 1, got {duration}")
    if start_assignment is None:
        return
    if len(start_assignment) != len(durations):
        raise InvalidConfigurationError(
            f"assignment has {len(start_assignment)} entries for {len(durations)} tasks"
        )
    for task, machine in enumerate(start_assignment):
        if not (0 <= machine < machine_count):
            raise InvalidConfigurationError(f"machine index out of range for task {task}: {machine}")


def validate_alpha(alpha: float) -> None:
    if not (0.0 < alpha < 1.0):
        raise InvalidConfigurationError(f"alpha must be in (0, 1), got {alpha}")
