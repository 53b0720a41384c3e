"""Experiment configuration loaded from YAML (or JSON).

The defaults reproduce the reference study: m in {10, 20, 50}, n = m * r for
r in {1.5, 2.0}, 10 replications, 1000 iterations without improvement and
cooling rates {0.8, 0.85, 0.9, 0.95, 0.99}.
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict

import yaml

HEURISTICS_ALL = ("first_improvement", "best_improvement", "simulated_annealing")


@dataclass(slots=True)
class ExperimentConfig:
    """Bundle of every setting read by the CLI and the experiment driver."""

    heuristics: tuple[str, ...] = HEURISTICS_ALL
    machine_counts: tuple[int, ...] = (10, 20, 50)
    ratios: tuple[float, ...] = (1.5, 2.0)
    replications: int = 10
    no_improvement_limit: int = 1000
    base_seed: int = 0
    alphas: tuple[float, ...] = (0.8, 0.85, 0.9, 0.95, 0.99)
    output_dir: str = "results"
    local_search_csv: str = "resultados_busca_monotona.csv"
    annealing_csv: str = "resultados_tempera_simulada.csv"
    summary_csv: str = "summary.csv"
    charts_enabled: bool = False
    charts_dir: str = "charts"
    log_level: str = "INFO"

    def task_counts(self, m: int) -> list[int]:
        """Task counts n = int(m * r) for every configured ratio."""
        return [int(m * r) for r in self.ratios]

    def validate(self) -> "ExperimentConfig":
        unknown = [h for h in self.heuristics if h not in HEURISTICS_ALL]
        if unknown:
            raise ValueError(f"Unknown heuristics: {unknown}")
        if not self.heuristics:
            raise ValueError("heuristics list must be non-empty")
        if not self.machine_counts or any(m < 1 for m in self.machine_counts):
            raise ValueError("experiment.machine_counts must be a non-empty list of ints >= 1")
        if not self.ratios or any(r <= 0 for r in self.ratios):
            raise ValueError("experiment.ratios must be a non-empty list of positive numbers")
        if self.replications < 1:
            raise ValueError("experiment.replications must be >= 1")
        if self.no_improvement_limit < 1:
            raise ValueError("experiment.no_improvement_limit must be >= 1")
        if "simulated_annealing" in self.heuristics:
            if not self.alphas or any(not (0.0 < a < 1.0) for a in self.alphas):
                raise ValueError("annealing.alphas must be a non-empty list of values in (0, 1)")
        return self


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = cfg.get(name, {})
    return value if isinstance(value, dict) else {}


def config_from_dict(cfg: Dict[str, Any]) -> ExperimentConfig:
    """Build a validated config; missing keys keep their defaults."""
    defaults = ExperimentConfig()
    exp_cfg = _section(cfg, "experiment")
    sa_cfg = _section(cfg, "annealing")
    out_cfg = _section(cfg, "output")
    charts_cfg = _section(cfg, "charts")
    try:
        config = ExperimentConfig(
            heuristics=tuple(cfg.get("heuristics") or defaults.heuristics),
            machine_counts=tuple(
                int(m) for m in exp_cfg.get("machine_counts", defaults.machine_counts)
            ),
            ratios=tuple(float(r) for r in exp_cfg.get("ratios", defaults.ratios)),
            replications=int(exp_cfg.get("replications", defaults.replications)),
            no_improvement_limit=int(
                exp_cfg.get("no_improvement_limit", defaults.no_improvement_limit)
            ),
            base_seed=int(exp_cfg.get("base_seed", defaults.base_seed)),
            alphas=tuple(float(a) for a in sa_cfg.get("alphas", defaults.alphas)),
            output_dir=str(out_cfg.get("dir", defaults.output_dir)),
            local_search_csv=str(out_cfg.get("local_search_csv", defaults.local_search_csv)),
            annealing_csv=str(out_cfg.get("annealing_csv", defaults.annealing_csv)),
            summary_csv=str(out_cfg.get("summary_csv", defaults.summary_csv)),
            charts_enabled=bool(charts_cfg.get("enabled", defaults.charts_enabled)),
            charts_dir=str(charts_cfg.get("dir", defaults.charts_dir)),
            log_level=str(cfg.get("log_level", defaults.log_level)),
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration value: {e}") from e
    return config.validate()


def load_config(config_file: str = "config.yaml") -> ExperimentConfig:
    """Load configuration from a YAML or JSON file."""
    if not os.path.isfile(config_file):
        raise FileNotFoundError(f"Config file not found: {config_file}")
    with open(config_file, "r", encoding="utf-8") as f:
        text = f.read()
    if config_file.endswith((".yml", ".yaml")):
        cfg = yaml.safe_load(text) or {}
    else:
        cfg = json.loads(text)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config root must be a mapping: {config_file}")
    return config_from_dict(cfg)
