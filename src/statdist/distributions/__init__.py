"""Distribution registry and canonical implementations."""

from __future__ import annotations

import os
from pathlib import Path

from .base import (
    Distribution,
    Frozen,
    clear_registry,
    derive,
    get_distribution,
    list_distributions,
    load_entry_points,
    load_yaml_config,
    register_distribution,
)
from .discrete import DISCRETE_DISTRIBUTIONS, discrete_uniform, hypergeometric
from .weibull import WEIBULL_DISTRIBUTIONS, exponential, rayleigh, weibull

__all__ = [
    "Distribution",
    "Frozen",
    "derive",
    "get_distribution",
    "list_distributions",
    "register_distribution",
    "clear_registry",
    "DISCRETE_DISTRIBUTIONS",
    "WEIBULL_DISTRIBUTIONS",
    "STANDARD_DISTRIBUTIONS",
    "discrete_uniform",
    "hypergeometric",
    "weibull",
    "rayleigh",
    "exponential",
]

STANDARD_DISTRIBUTIONS = DISCRETE_DISTRIBUTIONS + WEIBULL_DISTRIBUTIONS


def _register_builtin() -> None:
    for dist in STANDARD_DISTRIBUTIONS:
        register_distribution(dist, overwrite=True)


def _load_config_files() -> None:
    project_root = Path(__file__).resolve().parents[3]
    config_dir = project_root / "config" / "distributions"
    if config_dir.exists():
        for path in sorted(config_dir.glob("*.yaml")):
            load_yaml_config(path)

    env_paths = os.environ.get("STATDIST_DISTRIBUTIONS")
    if env_paths:
        for item in env_paths.split(os.pathsep):
            load_yaml_config(item)


_register_builtin()
load_entry_points()
_load_config_files()
