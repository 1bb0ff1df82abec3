"""Top-level package exports for statdist."""

from __future__ import annotations

from importlib import metadata

__version__ = "0.1.0"

try:
    __version__ = metadata.version("statdist")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev fallback
    pass

from . import core as core  # noqa: F401
from . import distributions as distributions  # noqa: F401
from .combinatorics import combinations  # noqa: F401
from .core import InvalidParameterError, InversionError, parse_moments  # noqa: F401
from .distributions import (  # noqa: F401
    Distribution,
    Frozen,
    derive,
    discrete_uniform,
    exponential,
    get_distribution,
    hypergeometric,
    list_distributions,
    rayleigh,
    weibull,
)
from .inversion import InversionConfig, search_ppf  # noqa: F401

__all__ = [
    "__version__",
    "core",
    "distributions",
    "combinations",
    "InvalidParameterError",
    "InversionError",
    "parse_moments",
    "Distribution",
    "Frozen",
    "derive",
    "get_distribution",
    "list_distributions",
    "discrete_uniform",
    "hypergeometric",
    "weibull",
    "rayleigh",
    "exponential",
    "InversionConfig",
    "search_ppf",
]
