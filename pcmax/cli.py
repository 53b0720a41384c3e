"""Command line entry point: run the configured experiments and report."""

from __future__ import annotations

import argparse
import logging
import os
import random
from typing import List, Optional, Sequence

from pcmax.algorithms import local_search, simulated_annealing
from pcmax.algorithms.sa import annealing_seed
from pcmax.config import ExperimentConfig, load_config
from pcmax.experiments.aggregate import (
    format_annealing_report,
    format_local_search_report,
    split_records,
    write_results_csv,
    write_summary_csv,
)
from pcmax.experiments.runner import ExperimentRunner, generate_plan
from pcmax.instance import generate_durations, generate_initial_assignment, instance_seed
from pcmax.models import ResultRecord, TracePoint

logger = logging.getLogger("pcmax.cli")


def render_charts(config: ExperimentConfig, records: Sequence[ResultRecord]) -> List[str]:
    """Convergence and machine-load charts for one demonstration instance.

    Uses the first configured cell (smallest index m, first ratio, replication 1)
    and, for annealing, the middle cooling rate.
    """
    from pcmax.visualization import (
        save_alpha_comparison_plot,
        save_convergence_plot,
        save_machine_loads_chart,
    )

    m = config.machine_counts[0]
    n = config.task_counts(m)[0]
    durations = generate_durations(n, instance_seed(config.base_seed, m, n, 1))
    start = generate_initial_assignment(n, m, seed=1000)
    traces: dict[str, list[TracePoint]] = {}
    finals: dict[str, list[int]] = {}
    if "first_improvement" in config.heuristics:
        traces["first_improvement"] = []
        finals["first_improvement"], *_ = local_search(
            durations, start, m, config.no_improvement_limit, trace=traces["first_improvement"]
        )
    if "best_improvement" in config.heuristics:
        traces["best_improvement"] = []
        finals["best_improvement"], *_ = local_search(
            durations,
            start,
            m,
            config.no_improvement_limit,
            best_improvement=True,
            trace=traces["best_improvement"],
        )
    if "simulated_annealing" in config.heuristics:
        alpha = config.alphas[len(config.alphas) // 2]
        label = f"simulated_annealing a={alpha}"
        traces[label] = []
        finals[label], *_ = simulated_annealing(
            durations,
            start,
            m,
            config.no_improvement_limit,
            alpha,
            rng=random.Random(annealing_seed(1000, alpha)),
            trace=traces[label],
        )

    paths = [
        save_convergence_plot(
            traces,
            os.path.join(config.charts_dir, f"convergence_m{m}_n{n}.png"),
            title=f"Convergence m={m} n={n}",
        )
    ]
    for label, assignment in finals.items():
        safe = label.replace(" ", "_").replace("=", "")
        paths.append(
            save_machine_loads_chart(
                durations,
                assignment,
                m,
                os.path.join(config.charts_dir, f"loads_{safe}_m{m}_n{n}.png"),
            )
        )
    if any(r.parameter is not None for r in records):
        paths.append(
            save_alpha_comparison_plot(
                records, os.path.join(config.charts_dir, "alpha_comparison.png")
            )
        )
    return paths


def run(config: ExperimentConfig) -> List[ResultRecord]:
    plan = generate_plan(config)
    logger.info(
        "Experiment plan: %d runs (heuristics=%s, m=%s, ratios=%s, replications=%d)",
        len(plan),
        ",".join(config.heuristics),
        list(config.machine_counts),
        list(config.ratios),
        config.replications,
    )
    records = ExperimentRunner().run(plan)

    local, annealing = split_records(records)
    if local:
        path = write_results_csv(local, os.path.join(config.output_dir, config.local_search_csv))
        print(f"\n=== Results saved to: {path} ===")
        print(format_local_search_report(local))
    if annealing:
        path = write_results_csv(annealing, os.path.join(config.output_dir, config.annealing_csv))
        print(f"\n=== Results saved to: {path} ===")
        print(format_annealing_report(annealing))
    write_summary_csv(records, os.path.join(config.output_dir, config.summary_csv))

    if config.charts_enabled:
        try:
            for p in render_charts(config, records):
                logger.info("Chart: %s", p)
        except Exception as e:  # pragma: no cover
            logger.warning("Failed to create charts: %s", e)
    return records


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Local search for identical parallel machine scheduling (config only)"
    )
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to the YAML/JSON configuration file",
    )
    args = parser.parse_args(argv)

    config = load_config(args.config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run(config)
    return 0
