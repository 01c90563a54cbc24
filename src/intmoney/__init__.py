"""
intmoney — Fixed-point money for Python

An amount is an integer count of minor units (pence, cents) tagged with a
currency. Arithmetic never goes through floating point except where a caller
explicitly multiplies, divides or converts by a real number, and then the
result is rounded exactly once.

================================================================================
QUICK START
================================================================================

Basic usage:

    from intmoney import Money, Currency

    bill = Money(10_000, Currency.USD)          # $100.00

    # Proportional allocation (sum ALWAYS equals original)
    bill.allocate([1, 1, 1])                    # [$33.34, $33.33, $33.33]
    bill.allocate([4, 6])                       # [$40.00, $60.00]
    bill.split(3)                               # same as allocate([1, 1, 1])

    # Formatting
    str(Money(123456))                          # "£1,234.56"
    Money(100000, Currency.EUR).format(
        separator=".", delimiter=",", code=True
    )                                           # "€1.000,00 EUR"

    # Conversion at a positive rate
    bill.convert((Currency.USD, Currency.GBP, 0.809581))

================================================================================
"""

import logging

from .currency import Currency, currency_code, currency_name, currency_symbol
from .exceptions import (
    MoneyError,
    InvalidArgumentError,
    UnsupportedCurrencyError,
    CurrencyMismatchError,
    DivisionByZeroError,
)
from .allocation import allocate_minor_units, split_minor_units, validate_weights
from .formatting import FormatOptions, format_amount, format_digits
from .core import (
    Money,
    RoundingMode,
    ExchangeRate,
    DEFAULT_CURRENCY,
    DEFAULT_ROUNDING,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    # Core
    "Money",
    "Currency",
    "RoundingMode",
    "ExchangeRate",
    "DEFAULT_CURRENCY",
    "DEFAULT_ROUNDING",
    # Allocation
    "allocate_minor_units",
    "split_minor_units",
    "validate_weights",
    # Formatting
    "FormatOptions",
    "format_amount",
    "format_digits",
    # Currency metadata
    "currency_code",
    "currency_name",
    "currency_symbol",
    # Errors
    "MoneyError",
    "InvalidArgumentError",
    "UnsupportedCurrencyError",
    "CurrencyMismatchError",
    "DivisionByZeroError",
]
