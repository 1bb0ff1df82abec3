"""Tabulate distribution queries into pandas frames."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np
import pandas as pd

from .core import parse_moments
from .distributions import Frozen

OPERATIONS = ("pmf", "pdf", "cdf", "sf", "ppf", "isf")


def tabulate(
    distribution: Frozen,
    points: Iterable[float],
    operations: Iterable[str] = ("pdf", "cdf", "sf"),
) -> pd.DataFrame:
    """Evaluate ``operations`` pointwise and return one row per point.

    Points are passed unchanged to every operation, so ``ppf``/``isf`` columns
    expect probabilities.
    """
    xs = np.asarray(list(points), dtype=float)
    columns: dict[str, Any] = {"x": xs}
    for name in operations:
        if name not in OPERATIONS:
            raise ValueError(f"Unknown operation '{name}'. Expected one of {OPERATIONS}.")
        method = getattr(distribution, name)
        columns[name] = [method(float(x)) for x in xs]
    return pd.DataFrame(columns)


def moments_frame(distributions: Mapping[str, Frozen], selector: str = "mv") -> pd.DataFrame:
    """Return one row of requested moments per labelled distribution."""
    records: list[dict[str, Any]] = []
    for label, dist in distributions.items():
        record: dict[str, Any] = {"distribution": label}
        record.update(dist.stats(selector))
        records.append(record)
    return pd.DataFrame.from_records(records, columns=["distribution", *parse_moments(selector)])


__all__ = ["OPERATIONS", "tabulate", "moments_frame"]
