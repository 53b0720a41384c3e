from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Hashable, Iterable, List, Sequence, Tuple

from pcmax.models import SIMULATED_ANNEALING, ResultRecord

logger = logging.getLogger("pcmax.experiments")

RESULTS_HEADER = ["heuristica", "n", "m", "replicacao", "tempo", "iteracoes", "valor", "parametro"]
MISSING_PARAMETER = "NA"


@dataclass(frozen=True)
class GroupStats:
    count: int
    mean_makespan: float
    min_makespan: int
    max_makespan: int
    mean_iterations: float
    mean_time: float

    @classmethod
    def from_records(cls, records: Sequence[ResultRecord]) -> "GroupStats":
        if not records:
            raise ValueError("cannot aggregate an empty group")
        count = len(records)
        makespans = [r.makespan for r in records]
        return cls(
            count=count,
            mean_makespan=sum(makespans) / count,
            min_makespan=min(makespans),
            max_makespan=max(makespans),
            mean_iterations=sum(r.iterations for r in records) / count,
            mean_time=sum(r.elapsed_seconds for r in records) / count,
        )


def format_parameter(parameter: float | None) -> str:
    return MISSING_PARAMETER if parameter is None else str(parameter)


def result_row(record: ResultRecord) -> List[str]:
    return [
        record.heuristic,
        str(record.n),
        str(record.m),
        str(record.replication),
        f"{record.elapsed_seconds:.2f}",
        str(record.iterations),
        str(record.makespan),
        format_parameter(record.parameter),
    ]


def write_results_csv(records: Iterable[ResultRecord], path: str | Path) -> Path:
    """Write result rows in the exchange format (header + one row per run)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(RESULTS_HEADER)
        for record in records:
            writer.writerow(result_row(record))
    logger.info("[Aggregate] Results written: %s", path)
    return path


def read_results_csv(path: str | Path) -> List[ResultRecord]:
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        header = next(reader, None)
        if header != RESULTS_HEADER:
            raise ValueError(f"Unexpected header in {path}: {header}")
        records: List[ResultRecord] = []
        for line_no, row in enumerate(reader, start=2):
            if not row:
                continue
            if len(row) != len(RESULTS_HEADER):
                raise ValueError(f"{path}:{line_no}: expected {len(RESULTS_HEADER)} fields")
            heuristic, n, m, rep, tempo, iters, valor, param = row
            records.append(
                ResultRecord(
                    heuristic=heuristic,
                    n=int(n),
                    m=int(m),
                    replication=int(rep),
                    elapsed_seconds=float(tempo),
                    iterations=int(iters),
                    makespan=int(valor),
                    parameter=None if param == MISSING_PARAMETER else float(param),
                )
            )
    return records


def split_records(
    records: Iterable[ResultRecord],
) -> Tuple[List[ResultRecord], List[ResultRecord]]:
    """Split into (local search rows, simulated annealing rows)."""
    local, annealing = [], []
    for r in records:
        (annealing if r.heuristic == SIMULATED_ANNEALING else local).append(r)
    return local, annealing


def summarize(
    records: Iterable[ResultRecord], key: Callable[[ResultRecord], Hashable]
) -> Dict[Hashable, GroupStats]:
    """Group records by ``key`` (first-seen order) and aggregate each group."""
    groups: Dict[Hashable, List[ResultRecord]] = {}
    for r in records:
        groups.setdefault(key(r), []).append(r)
    return {k: GroupStats.from_records(v) for k, v in groups.items()}


def format_local_search_report(records: Sequence[ResultRecord]) -> str:
    """Per-heuristic statistics and per-(m, n) comparison of heuristics."""
    lines = ["", "=== SUMMARY STATISTICS ===", ""]
    if not records:
        lines.append("No results.")
        return "\n".join(lines)
    for heuristic, s in summarize(records, lambda r: r.heuristic).items():
        lines += [
            "",
            f"{heuristic}:",
            f"  Mean makespan: {s.mean_makespan:.2f}",
            f"  Min makespan: {s.min_makespan}",
            f"  Max makespan: {s.max_makespan}",
            f"  Mean iterations: {s.mean_iterations:.2f}",
            f"  Mean time: {s.mean_time:.4f}s",
        ]

    lines += ["", "", "=== COMPARISON BY CONFIGURATION (m machines) ===", ""]
    by_config: Dict[Tuple[int, int], List[ResultRecord]] = {}
    for r in records:
        by_config.setdefault((r.m, r.n), []).append(r)
    for m, n in sorted(by_config):
        lines += ["", f"m={m}, n={n}:"]
        for heuristic, s in summarize(by_config[(m, n)], lambda r: r.heuristic).items():
            lines += [
                f"  {heuristic}:",
                f"    Mean makespan: {s.mean_makespan:.2f}",
                f"    Mean time: {s.mean_time:.4f}s",
            ]
    return "\n".join(lines)


def balance_scores(records: Sequence[ResultRecord]) -> Dict[float, float]:
    """Score per cooling rate: mean/min makespan plus mean/min time (lower is better).

    The time term is dropped when the fastest run took no measurable time.
    """
    min_makespan = min(r.makespan for r in records)
    min_time = min(r.elapsed_seconds for r in records)
    scores: Dict[float, float] = {}
    for alpha, s in summarize(records, lambda r: r.parameter).items():
        score = s.mean_makespan / min_makespan if min_makespan > 0 else 0.0
        if min_time > 0:
            score += s.mean_time / min_time
        scores[alpha] = score
    return scores


def format_annealing_report(records: Sequence[ResultRecord]) -> str:
    """Overall statistics, cooling-rate tables, rankings and a recommendation."""
    records = [r for r in records if r.parameter is not None]
    lines = ["", "=== SUMMARY STATISTICS ===", ""]
    if not records:
        lines.append("No results.")
        return "\n".join(lines)
    overall = GroupStats.from_records(records)
    lines += [
        "OVERALL:",
        f"  Mean makespan: {overall.mean_makespan:.2f}",
        f"  Min makespan: {overall.min_makespan}",
        f"  Max makespan: {overall.max_makespan}",
        f"  Mean iterations: {overall.mean_iterations:.2f}",
        f"  Mean time: {overall.mean_time:.4f}s",
    ]

    by_alpha = sorted(summarize(records, lambda r: r.parameter).items())
    lines += ["", "", "=== ANALYSIS BY ALPHA ===", ""]
    lines.append(
        f"{'Alpha':<8} {'Mean makespan':<16} {'Min makespan':<14} "
        f"{'Mean time':<14} {'Mean iterations':<18}"
    )
    lines.append("-" * 75)
    for alpha, s in by_alpha:
        lines.append(
            f"{alpha:<8.2f} {s.mean_makespan:<16.2f} {s.min_makespan:<14} "
            f"{s.mean_time:<14.4f} {s.mean_iterations:<18.2f}"
        )

    by_quality = sorted(by_alpha, key=lambda item: item[1].mean_makespan)
    by_speed = sorted(by_alpha, key=lambda item: item[1].mean_time)
    best_q, best_s = by_quality[0], by_speed[0]
    lines += [
        "",
        f"Best alpha by QUALITY: {best_q[0]:.2f} "
        f"(mean makespan: {best_q[1].mean_makespan:.2f})",
        f"Best alpha by SPEED: {best_s[0]:.2f} (mean time: {best_s[1].mean_time:.4f}s)",
    ]

    lines += ["", "", "=== ANALYSIS BY CONFIGURATION ===", ""]
    by_config: Dict[Tuple[int, int], List[ResultRecord]] = {}
    for r in records:
        by_config.setdefault((r.m, r.n), []).append(r)
    for m, n in sorted(by_config):
        lines += ["", f"m={m}, n={n}:"]
        lines.append(f"  {'Alpha':<8} {'Mean makespan':<16} {'Mean time':<14}")
        lines.append("  " + "-" * 40)
        for alpha, s in sorted(summarize(by_config[(m, n)], lambda r: r.parameter).items()):
            lines.append(f"  {alpha:<8.2f} {s.mean_makespan:<16.2f} {s.mean_time:<14.4f}")

    lines += ["", "", "=== TRADE-OFF QUALITY vs SPEED ===", ""]
    lines.append("Ranking by QUALITY (lowest makespan):")
    for i, (alpha, s) in enumerate(by_quality, start=1):
        lines.append(f"  {i}. Alpha={alpha:.2f} - Makespan: {s.mean_makespan:.2f}")
    lines += ["", "Ranking by SPEED (lowest time):"]
    for i, (alpha, s) in enumerate(by_speed, start=1):
        lines.append(f"  {i}. Alpha={alpha:.2f} - Time: {s.mean_time:.4f}s")

    scores = balance_scores(records)
    stats = dict(by_alpha)
    best_alpha = min(sorted(scores), key=lambda a: scores[a])
    lines += [
        "",
        "",
        "=== RECOMMENDATION ===",
        "",
        f"Best quality/speed BALANCE: Alpha={best_alpha:.2f}",
        f"  - Mean makespan: {stats[best_alpha].mean_makespan:.2f}",
        f"  - Mean time: {stats[best_alpha].mean_time:.4f}s",
    ]
    return "\n".join(lines)


def write_summary_csv(records: Iterable[ResultRecord], path: str | Path) -> Path:
    """One row per (heuristic, m, n, parameter) with grouped statistics."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    columns = [
        "heuristic",
        "m",
        "n",
        "parameter",
        "runs",
        "mean_makespan",
        "min_makespan",
        "max_makespan",
        "mean_iterations",
        "mean_time_s",
    ]
    groups = summarize(records, lambda r: (r.heuristic, r.m, r.n, r.parameter))
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(columns)
        for (heuristic, m, n, parameter), s in groups.items():
            writer.writerow(
                [
                    heuristic,
                    m,
                    n,
                    format_parameter(parameter),
                    s.count,
                    f"{s.mean_makespan:.4f}",
                    s.min_makespan,
                    s.max_makespan,
                    f"{s.mean_iterations:.4f}",
                    f"{s.mean_time:.4f}",
                ]
            )
    logger.info("[Aggregate] Summary written: %s", path)
    return path
