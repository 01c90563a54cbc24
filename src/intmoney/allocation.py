"""
allocation.py — Money-conserving weighted allocation

================================================================================
ALGORITHM (quota method)
================================================================================

Given an amount A (minor units, any sign) and weights w[0..N-1]:

1. W = sum(w)
2. base = trunc(A / W), remainder R = A - base * W
   (truncating division: R has the sign of A, or is zero, and |R| < W)
3. share[i] = base * w[i]
4. The remainder is itself handed out by quota: share[i] += trunc(R * w[i] / W).
   With equal weights this is the even per-share extra trunc(R / N).
5. What is left (fewer units than there are weighted shares) goes one unit
   at a time to the first weighted shares, in input order.

INVARIANT: sum(shares) == A, for every valid input.

Every step is a single indexed pass: cost is O(N), independent of the
magnitude of A or R.

================================================================================
"""

from __future__ import annotations
import logging
from typing import Sequence

from .exceptions import DivisionByZeroError, InvalidArgumentError

logger = logging.getLogger(__name__)


def _truncated_divmod(dividend: int, divisor: int) -> tuple[int, int]:
    """divmod rounding toward zero (Python's // floors). divisor must be > 0."""
    quotient = abs(dividend) // divisor
    if dividend < 0:
        quotient = -quotient
    return quotient, dividend - quotient * divisor


def _is_weight(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def validate_weights(weights: Sequence[int]) -> list[int]:
    """
    Check allocation weights and return them as a list.

    Raises:
        InvalidArgumentError: empty weights, a negative or non-integer weight,
            or weights summing to zero
    """
    parts = list(weights)
    if not parts:
        raise InvalidArgumentError("parts cannot be empty")
    if not all(_is_weight(w) for w in parts):
        logger.debug("Rejected allocation weights %r", parts)
        raise InvalidArgumentError("all parts must be non-negative integers")
    if sum(parts) <= 0:
        raise InvalidArgumentError("sum of all parts must be greater than zero")
    return parts


def allocate_minor_units(amount: int, weights: Sequence[int]) -> list[int]:
    """
    Split an integer amount into len(weights) integers proportional to weights.

    The result always sums to amount. Leftover units are front-loaded: the
    earliest weighted shares absorb them.
    """
    parts = validate_weights(weights)
    total_weight = sum(parts)

    base_unit, remainder = _truncated_divmod(amount, total_weight)
    shares = [base_unit * w for w in parts]

    leftover = remainder
    if remainder:
        for i, w in enumerate(parts):
            extra, _ = _truncated_divmod(remainder * w, total_weight)
            shares[i] += extra
            leftover -= extra

    step = 1 if leftover > 0 else -1
    pending = abs(leftover)
    for i, w in enumerate(parts):
        if pending == 0:
            break
        if w > 0:
            shares[i] += step
            pending -= 1

    logger.debug(
        "Allocated %d across %d parts (base unit %d, remainder %d)",
        amount, len(parts), base_unit, remainder,
    )
    return shares


def split_minor_units(amount: int, n: int) -> list[int]:
    """
    Split an integer amount into n equal parts (differing by at most one unit).

    Raises:
        InvalidArgumentError: n is not an integer
        DivisionByZeroError: n <= 0
    """
    if not isinstance(n, int) or isinstance(n, bool):
        logger.debug("Rejected split of %d into %r parts", amount, n)
        raise InvalidArgumentError(
            f"Number of parts must be a positive integer, got {n!r}"
        )
    if n <= 0:
        logger.debug("Rejected split of %d into %d parts", amount, n)
        raise DivisionByZeroError(
            f"Number of parts must be a positive integer, got {n}"
        )
    if n == 1:
        return [amount]
    return allocate_minor_units(amount, [1] * n)
