"""
exceptions.py — Error taxonomy for money operations

Every error is a programmer/input error raised before any computation, so
none of them is retryable. Each class also derives from the builtin exception
callers would naturally catch (ValueError, TypeError, ZeroDivisionError).
"""

from __future__ import annotations
from typing import Any


class MoneyError(Exception):
    """Base class for every error raised by intmoney."""


class InvalidArgumentError(MoneyError, ValueError):
    """Malformed input: allocation weights, split count, format options, rates."""


class UnsupportedCurrencyError(InvalidArgumentError):
    """Currency code outside the supported set."""


class CurrencyMismatchError(MoneyError, TypeError):
    """Binary comparison or arithmetic attempted across two currencies."""

    def __init__(self, left: Any, right: Any):
        self.left = left
        self.right = right
        super().__init__(
            f"Currencies {left.currency.code} and {right.currency.code} are not compatible"
        )


class DivisionByZeroError(MoneyError, ZeroDivisionError):
    """Division by zero, or a split into a non-positive number of parts."""
