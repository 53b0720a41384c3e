from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from pcmax.algorithms import (
    run_best_improvement,
    run_first_improvement,
    run_simulated_annealing,
)
from pcmax.config import ExperimentConfig
from pcmax.instance import generate_durations, instance_seed
from pcmax.models import (
    BEST_IMPROVEMENT,
    FIRST_IMPROVEMENT,
    SIMULATED_ANNEALING,
    ResultRecord,
    RunSummary,
)

logger = logging.getLogger("pcmax.experiments")

LOCAL_SEARCH_HEURISTICS = ("first_improvement", "best_improvement")
HEURISTIC_LABELS = {
    "first_improvement": FIRST_IMPROVEMENT,
    "best_improvement": BEST_IMPROVEMENT,
    "simulated_annealing": SIMULATED_ANNEALING,
}


@dataclass(frozen=True)
class RunConfig:
    """Configuration of a single run."""

    heuristic: str  # 'first_improvement' | 'best_improvement' | 'simulated_annealing'
    n: int  # number of tasks
    m: int  # number of machines
    replication: int  # 1-based replication id
    no_improvement_limit: int
    instance_seed: int  # seed of the task durations
    seed: int  # seed of the initial assignment (and SA moves)
    alpha: float | None = None  # cooling rate, SA only


class ExperimentRunner:
    def __init__(self):
        self._dispatch = {
            "first_improvement": self._run_first_improvement,
            "best_improvement": self._run_best_improvement,
            "simulated_annealing": self._run_sa,
        }
        # durations of the most recent cell only; regenerated from its seed on revisit
        self._instances: Dict[tuple[int, int], List[int]] = {}

    def run(self, configs: Sequence[RunConfig]) -> List[ResultRecord]:
        results: List[ResultRecord] = []
        for idx, cfg in enumerate(configs, start=1):
            result = self._run_single(cfg)
            results.append(result)
            logger.info(
                "[Experiment] (%d/%d) %s m=%d n=%d rep=%d%s makespan=%d iters=%d time=%.2fs",
                idx,
                len(configs),
                cfg.heuristic,
                cfg.m,
                cfg.n,
                cfg.replication,
                f" alpha={cfg.alpha}" if cfg.alpha is not None else "",
                result.makespan,
                result.iterations,
                result.elapsed_seconds,
            )
        return results

    def instance(self, cfg: RunConfig) -> List[int]:
        key = (cfg.instance_seed, cfg.n)
        if key not in self._instances:
            self._instances.clear()
            self._instances[key] = generate_durations(cfg.n, cfg.instance_seed)
        return self._instances[key]

    def _run_single(self, cfg: RunConfig) -> ResultRecord:
        run_fn = self._dispatch.get(cfg.heuristic)
        if run_fn is None:
            raise ValueError(f"Unknown heuristic {cfg.heuristic}")
        summary = run_fn(self.instance(cfg), cfg)
        return ResultRecord(
            heuristic=HEURISTIC_LABELS[cfg.heuristic],
            n=cfg.n,
            m=cfg.m,
            replication=cfg.replication,
            elapsed_seconds=summary.elapsed_seconds,
            iterations=summary.iterations,
            makespan=summary.makespan,
            parameter=cfg.alpha,
        )

    # --- heuristic implementations for the dispatcher ---
    def _run_first_improvement(self, durations, cfg: RunConfig) -> RunSummary:
        return run_first_improvement(durations, cfg.m, cfg.no_improvement_limit, cfg.seed)

    def _run_best_improvement(self, durations, cfg: RunConfig) -> RunSummary:
        return run_best_improvement(durations, cfg.m, cfg.no_improvement_limit, cfg.seed)

    def _run_sa(self, durations, cfg: RunConfig) -> RunSummary:
        return run_simulated_annealing(
            durations, cfg.m, cfg.no_improvement_limit, cfg.alpha, cfg.seed
        )


def _make_config(
    config: ExperimentConfig, heuristic: str, m: int, n: int, rep: int, alpha: float | None = None
) -> RunConfig:
    return RunConfig(
        heuristic=heuristic,
        n=n,
        m=m,
        replication=rep,
        no_improvement_limit=config.no_improvement_limit,
        instance_seed=instance_seed(config.base_seed, m, n, rep),
        seed=rep * 1000,
        alpha=alpha,
    )


def generate_local_search_plan(config: ExperimentConfig) -> List[RunConfig]:
    """Plan ordered m -> ratio -> replication -> heuristic."""
    heuristics = [h for h in LOCAL_SEARCH_HEURISTICS if h in config.heuristics]
    configs: List[RunConfig] = []
    if not heuristics:
        return configs
    for m in config.machine_counts:
        for n in config.task_counts(m):
            for rep in range(1, config.replications + 1):
                for heuristic in heuristics:
                    configs.append(_make_config(config, heuristic, m, n, rep))
    return configs


def generate_annealing_plan(config: ExperimentConfig) -> List[RunConfig]:
    """Plan ordered m -> ratio -> alpha -> replication."""
    configs: List[RunConfig] = []
    if "simulated_annealing" not in config.heuristics:
        return configs
    for m in config.machine_counts:
        for n in config.task_counts(m):
            for alpha in config.alphas:
                for rep in range(1, config.replications + 1):
                    configs.append(
                        _make_config(config, "simulated_annealing", m, n, rep, alpha=alpha)
                    )
    return configs


def generate_plan(config: ExperimentConfig) -> List[RunConfig]:
    return generate_local_search_plan(config) + generate_annealing_plan(config)
