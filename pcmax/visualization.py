import logging
import os
from typing import Dict, List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from pcmax.evaluation import lower_bound, machine_loads  # noqa: E402
from pcmax.experiments.aggregate import summarize  # noqa: E402
from pcmax.models import ResultRecord, TracePoint  # noqa: E402

logger = logging.getLogger("pcmax.viz")


def _ensure_dir(path: str):
    if path:
        os.makedirs(path, exist_ok=True)


def save_convergence_plot(
    traces: Dict[str, List[TracePoint]],
    filepath: str,
    title: str = "Convergence",
    colors: Optional[Dict[str, str]] = None,
) -> str:
    """Draw current (thin) and best (thick) makespan per iteration for several runs.

    For local search both curves coincide; for annealing the current curve shows
    the accepted uphill excursions.
    """
    if colors is None:
        colors = {}
    fig, ax = plt.subplots(figsize=(10, 6), constrained_layout=True)
    for label, trace in traces.items():
        if not trace:
            continue
        iterations = [p.iteration for p in trace]
        color = colors.get(label)
        line = ax.plot(
            iterations,
            [p.best_makespan for p in trace],
            label=f"{label} (best)",
            linewidth=2,
            color=color,
        )[0]
        ax.plot(
            iterations,
            [p.current_makespan for p in trace],
            label=f"{label} (current)",
            linewidth=0.8,
            alpha=0.5,
            color=line.get_color(),
        )
        ax.annotate(
            f"Best: {trace[-1].best_makespan}",
            xy=(iterations[-1], trace[-1].best_makespan),
            xytext=(10, -20),
            textcoords="offset points",
            bbox=dict(boxstyle="round,pad=0.3", facecolor="lightgreen", alpha=0.7),
            arrowprops=dict(arrowstyle="->", connectionstyle="arc3,rad=0"),
        )
    ax.set_xlabel("Iteration", fontsize=12)
    ax.set_ylabel("Makespan", fontsize=12)
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right", fontsize=9, frameon=False)
    _ensure_dir(os.path.dirname(filepath))
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    logger.info("Convergence plot saved as: %s", filepath)
    return filepath


def save_alpha_comparison_plot(records: Sequence[ResultRecord], filepath: str) -> str:
    """Mean makespan and mean time per cooling rate (annealing rows only)."""
    stats = sorted(
        summarize(
            [r for r in records if r.parameter is not None], lambda r: r.parameter
        ).items()
    )
    if not stats:
        raise ValueError("no annealing records to plot")
    labels = [f"{alpha:.2f}" for alpha, _ in stats]
    fig, (ax_q, ax_t) = plt.subplots(1, 2, figsize=(12, 5), constrained_layout=True)
    ax_q.bar(labels, [s.mean_makespan for _, s in stats], color="#4C72B0", edgecolor="black")
    ax_q.set_xlabel("Alpha")
    ax_q.set_ylabel("Mean makespan")
    ax_q.set_title("Quality by cooling rate", fontweight="bold")
    ax_t.bar(labels, [s.mean_time for _, s in stats], color="#DD8452", edgecolor="black")
    ax_t.set_xlabel("Alpha")
    ax_t.set_ylabel("Mean time [s]")
    ax_t.set_title("Speed by cooling rate", fontweight="bold")
    for ax in (ax_q, ax_t):
        ax.grid(True, alpha=0.25, axis="y", linestyle="--", linewidth=0.7)
    _ensure_dir(os.path.dirname(filepath))
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    logger.info("Alpha comparison plot saved as: %s", filepath)
    return filepath


def save_machine_loads_chart(
    durations: Sequence[int],
    assignment: Sequence[int],
    m: int,
    filepath: str,
    title: Optional[str] = None,
    show_legend: Optional[bool] = None,
) -> str:
    """Stacked bar per machine: every task is a block of its duration.

    The dashed line marks the balanced-load lower bound.
    """
    n = len(durations)
    loads = machine_loads(durations, assignment, m)
    fig, ax = plt.subplots(
        figsize=(min(10 + m * 0.15, 18), 6),
        constrained_layout=True,
    )
    cmap = plt.get_cmap("tab20")
    stacked = [0] * m
    for task, machine in enumerate(assignment):
        ax.bar(
            machine,
            durations[task],
            bottom=stacked[machine],
            width=0.8,
            color=cmap(task % 20),
            alpha=0.85,
            edgecolor="black",
            linewidth=0.6,
            label=f"Task {task}",
        )
        stacked[machine] += durations[task]
    makespan = max(loads) if loads and n else 0
    ax.axhline(lower_bound(durations, m), color="red", linestyle="--", linewidth=1.2, label="LB")
    ax.set_xlabel("Machine", fontsize=12)
    ax.set_ylabel("Load", fontsize=12)
    ax.set_title(title or f"Machine loads - Cmax = {makespan}", fontsize=14, fontweight="bold")
    ax.set_xticks(range(m))
    ax.set_xticklabels([f"M{i}" for i in range(m)], rotation=90 if m > 25 else 0)
    ax.grid(True, alpha=0.25, axis="y", linestyle="--", linewidth=0.7)

    # only show task legend for small instances unless forced
    if show_legend is None:
        show_legend = n <= 30
    if show_legend:
        ax.legend(
            bbox_to_anchor=(1.02, 1),
            loc="upper left",
            borderaxespad=0.0,
            fontsize=8,
            frameon=False,
        )
    _ensure_dir(os.path.dirname(filepath))
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    logger.info("Machine loads chart saved as: %s", filepath)
    return filepath
