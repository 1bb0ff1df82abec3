"""Search-based inversion for families without a closed-form percent-point function."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from ..core import InversionError

__all__ = [
    "InversionConfig",
    "search_ppf",
]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class InversionConfig:
    """Configuration bounding the forward search."""

    max_steps: int = 1_000_000
    tolerance: float = 1e-9


def search_ppf(
    p: float,
    pmf: Callable[[int], float],
    lower: int = 0,
    upper: int | None = None,
    *,
    config: InversionConfig | None = None,
) -> int:
    """Return the smallest support value whose cumulative mass reaches ``p``.

    Mass is accumulated forward from ``lower``; the value whose mass pushed the
    running total to ``p`` or beyond is returned. When ``p <= 0`` nothing is
    accumulated and ``lower - 1`` comes back, so callers wanting a value inside
    the support clamp it themselves.

    Every call costs one ``pmf`` evaluation per support point walked, i.e.
    O(support size). When ``upper`` is known, a shortfall of at most
    ``config.tolerance`` at the end of the support is attributed to rounding and
    ``upper`` is returned; a larger shortfall raises :class:`InversionError`.
    Without ``upper`` the walk is capped at ``config.max_steps`` evaluations.
    """
    cfg = config or InversionConfig()
    if math.isnan(p):
        raise InversionError("Cannot invert a NaN probability.")

    value = lower
    total = 0.0
    steps = 0
    while total < p:
        if upper is not None and value > upper:
            if p - total <= cfg.tolerance:
                logger.debug(
                    "Search for p=%r stopped at upper bound %d with cumulative mass %r",
                    p,
                    upper,
                    total,
                )
                return upper
            raise InversionError(
                f"Cumulative mass {total!r} over [{lower}, {upper}] never reaches p={p!r}."
            )
        if steps >= cfg.max_steps:
            raise InversionError(
                f"Search for p={p!r} did not converge within {cfg.max_steps} steps "
                f"(cumulative mass {total!r})."
            )
        total += pmf(value)
        value += 1
        steps += 1
    return value - 1
