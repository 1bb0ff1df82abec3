"""Two-parameter Weibull family and the families expressed through it."""

from __future__ import annotations

import math

import numpy as np
from scipy.special import gamma as gamma_fn

from ..core import (
    Moments,
    RandomState,
    check_probability,
    require_valid,
    resolve_random_state,
    select_moments,
)
from .base import Distribution, derive


def weibull_valid(scale: float = 1.0, shape: float = 1.0) -> bool:
    return scale > 0 and shape > 0


def weibull_rvs(
    scale: float = 1.0, shape: float = 1.0, *, random_state: RandomState = None
) -> float:
    require_valid("weibull", weibull_valid(scale, shape), scale=scale, shape=shape)
    rng = resolve_random_state(random_state)
    return float(scale * rng.weibull(shape))


def weibull_pdf(x: float, scale: float = 1.0, shape: float = 1.0) -> float:
    if not weibull_valid(scale, shape) or x < 0 or math.isinf(x):
        return 0.0
    if x == 0:
        # x**(shape - 1) at the origin
        if shape < 1:
            return math.inf
        return 1.0 / scale if shape == 1 else 0.0
    z = np.float64(x) / scale
    with np.errstate(over="ignore", under="ignore"):
        return float((shape / scale) * z ** (shape - 1.0) * np.exp(-(z**shape)))


def weibull_cdf(x: float, scale: float = 1.0, shape: float = 1.0) -> float:
    if not weibull_valid(scale, shape) or x <= 0:
        return 0.0
    with np.errstate(over="ignore", under="ignore"):
        return float(-np.expm1(-((np.float64(x) / scale) ** shape)))


def weibull_sf(x: float, scale: float = 1.0, shape: float = 1.0) -> float:
    return 1.0 - weibull_cdf(x, scale, shape)


def weibull_ppf(p: float, scale: float = 1.0, shape: float = 1.0) -> float:
    p = check_probability(p)
    require_valid("weibull", weibull_valid(scale, shape), scale=scale, shape=shape)
    if p == 1.0:
        return math.inf
    return scale * (-math.log1p(-p)) ** (1.0 / shape)


def weibull_isf(p: float, scale: float = 1.0, shape: float = 1.0) -> float:
    return weibull_ppf(1.0 - check_probability(p), scale, shape)


def weibull_stats(moments: str = "mv", scale: float = 1.0, shape: float = 1.0) -> Moments:
    """Mean, variance, skew and excess kurtosis via ``Gamma(1 + i / shape)``."""
    require_valid("weibull", weibull_valid(scale, shape), scale=scale, shape=shape)
    g1, g2, g3, g4 = (gamma_fn(1.0 + i / shape) for i in range(1, 5))
    spread = g2 - g1**2
    return select_moments(
        moments,
        {
            "mean": lambda: scale * g1,
            "variance": lambda: scale**2 * spread,
            "skew": lambda: (g3 - 3.0 * g1 * g2 + 2.0 * g1**3) / spread**1.5,
            "kurtosis": lambda: (
                g4 - 4.0 * g1 * g3 + 12.0 * g1**2 * g2 - 3.0 * g2**2 - 6.0 * g1**4
            )
            / spread**2,
        },
    )


weibull = Distribution(
    name="weibull",
    parameters=("scale", "shape"),
    kind="continuous",
    rvs=weibull_rvs,
    pdf=weibull_pdf,
    cdf=weibull_cdf,
    sf=weibull_sf,
    ppf=weibull_ppf,
    isf=weibull_isf,
    stats=weibull_stats,
    is_valid=weibull_valid,
    defaults={"scale": 1.0, "shape": 1.0},
    notes="Two-parameter Weibull with scale lambda and shape k.",
)


def rayleigh_to_weibull(sigma: float = 1.0) -> tuple[float, float]:
    return sigma * math.sqrt(2.0), 2.0


def exponential_to_weibull(scale: float = 1.0) -> tuple[float, float]:
    return scale, 1.0


rayleigh = derive(
    "rayleigh",
    weibull,
    ("sigma",),
    rayleigh_to_weibull,
    defaults={"sigma": 1.0},
    notes="Weibull with shape 2 and scale sigma * sqrt(2).",
)

exponential = derive(
    "exponential",
    weibull,
    ("scale",),
    exponential_to_weibull,
    defaults={"scale": 1.0},
    notes="Weibull with shape 1.",
)

WEIBULL_DISTRIBUTIONS = [weibull, rayleigh, exponential]

__all__ = [
    "WEIBULL_DISTRIBUTIONS",
    "weibull",
    "rayleigh",
    "exponential",
    "rayleigh_to_weibull",
    "exponential_to_weibull",
    "weibull_pdf",
    "weibull_cdf",
]
