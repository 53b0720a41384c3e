from __future__ import annotations

import json
from pathlib import Path

import pytest

from pcmax.config import HEURISTICS_ALL, ExperimentConfig, config_from_dict, load_config


def test_defaults() -> None:
    config = config_from_dict({})
    assert config.heuristics == HEURISTICS_ALL
    assert config.machine_counts == (10, 20, 50)
    assert config.task_counts(10) == [15, 20]
    assert config.task_counts(50) == [75, 100]
    assert config.replications == 10
    assert config.no_improvement_limit == 1000
    assert config.alphas == (0.8, 0.85, 0.9, 0.95, 0.99)
    assert config.charts_enabled is False


def test_repository_config_matches_defaults(project_root: Path) -> None:
    assert load_config(str(project_root / "config.yaml")) == ExperimentConfig()


def test_load_yaml(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text(
        "heuristics: [simulated_annealing]\n"
        "experiment:\n"
        "  machine_counts: [4]\n"
        "  replications: 2\n"
        "annealing:\n"
        "  alphas: [0.9]\n"
        "output:\n"
        "  dir: out\n",
        encoding="utf-8",
    )
    config = load_config(str(path))
    assert config.heuristics == ("simulated_annealing",)
    assert config.machine_counts == (4,)
    assert config.replications == 2
    assert config.alphas == (0.9,)
    assert config.output_dir == "out"
    assert config.ratios == (1.5, 2.0)


def test_load_json(tmp_path: Path) -> None:
    path = tmp_path / "cfg.json"
    path.write_text(
        json.dumps({"experiment": {"no_improvement_limit": 50}, "charts": {"enabled": True}}),
        encoding="utf-8",
    )
    config = load_config(str(path))
    assert config.no_improvement_limit == 50
    assert config.charts_enabled is True


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_root_must_be_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_config(str(path))


@pytest.mark.parametrize(
    "cfg",
    [
        {"heuristics": ["tabu"]},
        {"experiment": {"machine_counts": [0]}},
        {"experiment": {"ratios": [-1.0]}},
        {"experiment": {"replications": 0}},
        {"experiment": {"no_improvement_limit": 0}},
        {"experiment": {"replications": "many"}},
        {"annealing": {"alphas": [1.0]}},
    ],
)
def test_invalid_values(cfg) -> None:
    with pytest.raises(ValueError):
        config_from_dict(cfg)


def test_alphas_ignored_without_annealing() -> None:
    config = config_from_dict({"heuristics": ["first_improvement"], "annealing": {"alphas": []}})
    assert config.alphas == ()
