"""Shared types, error classes and the moment selector for statdist modules."""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from typing import TypeAlias

import numpy as np

RandomState: TypeAlias = np.random.Generator | int | None
Moments: TypeAlias = dict[str, float]

MOMENT_CODES: dict[str, str] = {
    "m": "mean",
    "v": "variance",
    "s": "skew",
    "k": "kurtosis",
}


class InvalidParameterError(ValueError):
    """Raised when a family's own parameters fall outside its valid domain."""


class InversionError(RuntimeError):
    """Raised when a search-based inversion cannot reach its target probability."""


def parse_moments(selector: str) -> tuple[str, ...]:
    """Translate a selector such as ``"mvsk"`` into moment names, in request order."""
    keys: list[str] = []
    for code in selector:
        try:
            key = MOMENT_CODES[code]
        except KeyError as exc:
            raise ValueError(
                f"Unknown moment code '{code}' in '{selector}'. Expected any of 'mvsk'."
            ) from exc
        if key not in keys:
            keys.append(key)
    return tuple(keys)


def select_moments(selector: str, formulas: Mapping[str, Callable[[], float]]) -> Moments:
    """Evaluate only the requested moment formulas.

    Undefined moments (zero denominators, roots of negative numbers) come back
    as ``inf`` or ``nan`` instead of raising.
    """
    keys = parse_moments(selector)
    moments: Moments = {}
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for key in keys:
            moments[key] = float(formulas[key]())
    return moments


def check_probability(p: float) -> float:
    value = float(p)
    if math.isnan(value) or value < 0.0 or value > 1.0:
        raise ValueError(f"Probability must lie in [0, 1], got {p!r}.")
    return value


def require_valid(name: str, valid: bool, **params: float) -> None:
    """Raise :class:`InvalidParameterError` unless ``valid`` holds."""
    if not valid:
        rendered = ", ".join(f"{key}={value!r}" for key, value in params.items())
        raise InvalidParameterError(f"Invalid parameters for '{name}': {rendered}.")


def resolve_random_state(random_state: RandomState = None) -> np.random.Generator:
    """Return a generator; ``None`` draws fresh entropy, ints seed, generators pass through."""
    return np.random.default_rng(random_state)


__all__ = [
    "RandomState",
    "Moments",
    "MOMENT_CODES",
    "InvalidParameterError",
    "InversionError",
    "parse_moments",
    "select_moments",
    "check_probability",
    "require_valid",
    "resolve_random_state",
]
