"""Exact combinatorial counting."""

from __future__ import annotations

import operator


def combinations(n: int, k: int) -> int:
    """Return the number of unordered ``k``-subsets of an ``n``-set.

    Out-of-range requests (``k < 0`` or ``k > n``) count zero subsets instead of
    raising, so mass functions can multiply through them without branching.
    The product is accumulated incrementally over ``min(k, n - k)`` factors;
    every partial quotient is itself a binomial coefficient, so the floor
    division stays exact and no factorial of ``n`` is ever formed.
    """
    n = operator.index(n)
    k = operator.index(k)
    if k < 0 or k > n:
        return 0
    k = min(k, n - k)
    result = 1
    for index in range(1, k + 1):
        result = result * (n - k + index) // index
    return result


__all__ = ["combinations"]
