"""Bounded discrete uniform and hypergeometric families."""

from __future__ import annotations

import math

import numpy as np

from ..combinatorics import combinations
from ..core import (
    Moments,
    RandomState,
    check_probability,
    require_valid,
    resolve_random_state,
    select_moments,
)
from ..inversion import search_ppf
from .base import Distribution

# Guards ceil() against p * size landing a rounding error above an integer.
_CEIL_GUARD = 1e-9


def _is_integral(value: float) -> bool:
    return float(value).is_integer()


# -- discrete uniform ---------------------------------------------------------


def discrete_uniform_valid(minimum: float = 0, maximum: float = 1) -> bool:
    return _is_integral(minimum) and _is_integral(maximum) and minimum <= maximum


def _require_uniform(minimum: float, maximum: float) -> None:
    require_valid(
        "discrete_uniform",
        discrete_uniform_valid(minimum, maximum),
        minimum=minimum,
        maximum=maximum,
    )


def _uniform_size(minimum: float, maximum: float) -> int:
    return int(maximum) - int(minimum) + 1


def discrete_uniform_rvs(
    minimum: float = 0, maximum: float = 1, *, random_state: RandomState = None
) -> int:
    _require_uniform(minimum, maximum)
    rng = resolve_random_state(random_state)
    return int(rng.integers(int(minimum), int(maximum), endpoint=True))


def discrete_uniform_pmf(x: float, minimum: float = 0, maximum: float = 1) -> float:
    if not discrete_uniform_valid(minimum, maximum):
        return 0.0
    if math.isnan(x):
        return math.nan
    if x < minimum or x > maximum or not _is_integral(x):
        return 0.0
    return 1.0 / _uniform_size(minimum, maximum)


def discrete_uniform_cdf(x: float, minimum: float = 0, maximum: float = 1) -> float:
    if not discrete_uniform_valid(minimum, maximum):
        return 0.0
    if math.isnan(x):
        return math.nan
    if x < minimum:
        return 0.0
    if x >= maximum:
        return 1.0
    return (math.floor(x) - int(minimum) + 1) / _uniform_size(minimum, maximum)


def discrete_uniform_sf(x: float, minimum: float = 0, maximum: float = 1) -> float:
    return 1.0 - discrete_uniform_cdf(x, minimum, maximum)


def discrete_uniform_ppf(p: float, minimum: float = 0, maximum: float = 1) -> int:
    """Smallest support value with ``cdf >= p``; ``minimum - 1`` at ``p == 0``."""
    p = check_probability(p)
    _require_uniform(minimum, maximum)
    if p == 0.0:
        return int(minimum) - 1
    steps = max(math.ceil(p * _uniform_size(minimum, maximum) - _CEIL_GUARD), 1)
    return int(minimum) + steps - 1


def discrete_uniform_isf(p: float, minimum: float = 0, maximum: float = 1) -> int:
    return discrete_uniform_ppf(1.0 - check_probability(p), minimum, maximum)


def discrete_uniform_stats(moments: str = "mv", minimum: float = 0, maximum: float = 1) -> Moments:
    _require_uniform(minimum, maximum)
    low = np.float64(minimum)
    high = np.float64(maximum)
    squared = (high - low + 1.0) ** 2
    return select_moments(
        moments,
        {
            "mean": lambda: 0.5 * (high + low),
            "variance": lambda: squared / 12.0,
            "skew": lambda: 0.0,
            "kurtosis": lambda: -(6.0 * (squared + 1.0)) / (5.0 * (squared - 1.0)),
        },
    )


discrete_uniform = Distribution(
    name="discrete_uniform",
    parameters=("minimum", "maximum"),
    kind="discrete",
    rvs=discrete_uniform_rvs,
    pdf=discrete_uniform_pmf,
    cdf=discrete_uniform_cdf,
    sf=discrete_uniform_sf,
    ppf=discrete_uniform_ppf,
    isf=discrete_uniform_isf,
    stats=discrete_uniform_stats,
    is_valid=discrete_uniform_valid,
    defaults={"minimum": 0, "maximum": 1},
    notes="Equally likely integers on [minimum, maximum].",
)


# -- hypergeometric -----------------------------------------------------------


def hypergeometric_valid(L: float = 1, m: float = 1, n: float = 1) -> bool:
    L, m, n = math.floor(L), math.floor(m), math.floor(n)
    return L >= 1 and 0 <= m <= L and 0 <= n <= L


def hypergeometric_rvs(
    L: float = 1, m: float = 1, n: float = 1, *, random_state: RandomState = None
) -> int:
    """Simulate ``n`` sequential draws without replacement.

    Each draw succeeds with the current proportion ``m / L``; a success removes
    one interesting element and every draw removes one element overall.
    """
    require_valid("hypergeometric", hypergeometric_valid(L, m, n), L=L, m=m, n=n)
    rng = resolve_random_state(random_state)
    population, interesting = math.floor(L), math.floor(m)
    successes = 0
    for _ in range(math.floor(n)):
        if rng.random() < interesting / population:
            interesting -= 1
            successes += 1
        population -= 1
    return successes


def hypergeometric_pmf(x: float, L: float = 1, m: float = 1, n: float = 1) -> float:
    if not math.isfinite(x):
        return math.nan if math.isnan(x) and hypergeometric_valid(L, m, n) else 0.0
    x, L, m, n = math.floor(x), math.floor(L), math.floor(m), math.floor(n)
    if (
        x > L
        or x > m
        or x > n
        or x < 0
        or L < 1
        or m < 0
        or n < 0
        or m > L
        or n > L
    ):
        return 0.0
    return combinations(m, x) * combinations(L - m, n - x) / combinations(L, n)


def hypergeometric_cdf(x: float, L: float = 1, m: float = 1, n: float = 1) -> float:
    """Sum the mass from 0 up to ``floor(x)``.

    Terms above ``min(m, n)`` are zero, so the sum stops there.
    """
    if not hypergeometric_valid(L, m, n) or x < 0:
        return 0.0
    if math.isnan(x):
        return math.nan
    upper = min(math.floor(m), math.floor(n))
    if x < upper:
        upper = math.floor(x)
    total = 0.0
    for i in range(0, upper + 1):
        total += hypergeometric_pmf(i, L, m, n)
    return min(total, 1.0)


def hypergeometric_sf(x: float, L: float = 1, m: float = 1, n: float = 1) -> float:
    return 1.0 - hypergeometric_cdf(x, L, m, n)


def hypergeometric_ppf(p: float, L: float = 1, m: float = 1, n: float = 1) -> int:
    p = check_probability(p)
    require_valid("hypergeometric", hypergeometric_valid(L, m, n), L=L, m=m, n=n)
    return search_ppf(
        p,
        lambda i: hypergeometric_pmf(i, L, m, n),
        lower=0,
        upper=min(math.floor(m), math.floor(n)),
    )


def hypergeometric_isf(p: float, L: float = 1, m: float = 1, n: float = 1) -> int:
    return hypergeometric_ppf(1.0 - check_probability(p), L, m, n)


def hypergeometric_stats(moments: str = "mv", L: float = 1, m: float = 1, n: float = 1) -> Moments:
    require_valid("hypergeometric", hypergeometric_valid(L, m, n), L=L, m=m, n=n)
    L, m, n = (np.float64(math.floor(value)) for value in (L, m, n))
    return select_moments(
        moments,
        {
            "mean": lambda: (n * m) / L,
            "variance": lambda: n * (m / L) * ((L - m) / L) * ((L - n) / (L - 1)),
            "skew": lambda: ((L - 2 * m) * np.sqrt(L - 1) * (L - 2 * n))
            / (np.sqrt(n * m * (L - m) * (L - n)) * (L - 2)),
            "kurtosis": lambda: (
                (L - 1) * L**2 * (L * (L + 1) - 6 * m * (L - m) - 6 * n * (L - n))
                + 6 * m * n * (L - m) * (L - n) * (5 * L - 6)
            )
            / (n * m * (L - m) * (L - n) * (L - 2) * (L - 3)),
        },
    )


hypergeometric = Distribution(
    name="hypergeometric",
    parameters=("L", "m", "n"),
    kind="discrete",
    rvs=hypergeometric_rvs,
    pdf=hypergeometric_pmf,
    cdf=hypergeometric_cdf,
    sf=hypergeometric_sf,
    ppf=hypergeometric_ppf,
    isf=hypergeometric_isf,
    stats=hypergeometric_stats,
    is_valid=hypergeometric_valid,
    defaults={"L": 1, "m": 1, "n": 1},
    notes="Successes in n draws without replacement from L items, m of them interesting.",
)


DISCRETE_DISTRIBUTIONS = [discrete_uniform, hypergeometric]

__all__ = [
    "DISCRETE_DISTRIBUTIONS",
    "discrete_uniform",
    "hypergeometric",
    "discrete_uniform_pmf",
    "discrete_uniform_cdf",
    "hypergeometric_pmf",
    "hypergeometric_cdf",
    "hypergeometric_rvs",
]
