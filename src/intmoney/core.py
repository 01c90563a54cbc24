"""
core.py — Money domain primitive

================================================================================
DESIGN PRINCIPLES
================================================================================

1. INTERNAL REPRESENTATION
   A signed integer count of minor units (pence, cents). Never a float.

2. TYPE SAFETY
   Operations across currencies raise CurrencyMismatchError.
   Money + int/float raises TypeError (explicit conversion required).

3. IMMUTABILITY
   Frozen dataclass. Every operation returns a new instance.
   No side effects, safe to share between threads.

4. CLOSED CURRENCY SET
   Currency is an Enum; construction is the only place a currency is
   validated, so every later metadata lookup is total.

5. EXPLICIT ROUNDING
   Rounding only happens in mul/div/convert, with a caller-selectable mode.
   Arithmetic is exact (Fraction) from the int amount and the binary value
   of a float operand; only that operand carries float error. 1.335 is
   stored just below 1.335, so 200 * 1.335 gives 267, the same as
   200 * 1.333. That is accepted behaviour, not a rounding rule.

6. VERIFIABLE INVARIANTS
   allocate(weights) and split(n) guarantee sum(parts) == original.

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Any, NamedTuple, Sequence
import logging
import math

from .allocation import allocate_minor_units, split_minor_units
from .currency import Currency
from .exceptions import CurrencyMismatchError, DivisionByZeroError, InvalidArgumentError
from .formatting import DEFAULT_OPTIONS, FormatOptions, format_amount

logger = logging.getLogger(__name__)


# ==============================================================================
# ROUNDING STRATEGIES
# ==============================================================================

class RoundingMode(Enum):
    """
    Rounding strategies for mul/div/convert.

    - HALF_UP: commercial rounding, ties away from zero (2.5 -> 3, -2.5 -> -3)
    - HALF_EVEN: banker's rounding, Python's round()
    - DOWN: toward zero (truncation)
    - UP: away from zero
    - HALF_DOWN: ties toward zero
    """
    HALF_UP = "half_up"
    HALF_EVEN = "half_even"
    DOWN = "down"
    UP = "up"
    HALF_DOWN = "half_down"


_HALF = Fraction(1, 2)


def _apply_rounding(value: Fraction, mode: RoundingMode) -> int:
    """
    Apply the rounding strategy to an exact rational and return an int.

    Callers build value from the int amount and the exact binary value of
    any float operand, so no intermediate float rounding takes place.
    """

    def _magnitude(v: Fraction) -> tuple[int, int, Fraction]:
        # sign, integer part and fractional part of |v|
        whole = math.floor(abs(v))
        return (-1 if v < 0 else 1), whole, abs(v) - whole

    def _half_up(v: Fraction) -> int:
        sign, whole, fraction = _magnitude(v)
        return sign * (whole + 1 if fraction >= _HALF else whole)

    def _half_even(v: Fraction) -> int:
        return round(v)

    def _down(v: Fraction) -> int:
        return math.trunc(v)

    def _up(v: Fraction) -> int:
        return math.ceil(v) if v >= 0 else math.floor(v)

    def _half_down(v: Fraction) -> int:
        sign, whole, fraction = _magnitude(v)
        return sign * (whole + 1 if fraction > _HALF else whole)

    strategies = {
        RoundingMode.HALF_UP: _half_up,
        RoundingMode.HALF_EVEN: _half_even,
        RoundingMode.DOWN: _down,
        RoundingMode.UP: _up,
        RoundingMode.HALF_DOWN: _half_down,
    }

    strategy = strategies.get(mode)
    if strategy is None:
        raise InvalidArgumentError(f"Unknown rounding mode: {mode}")

    return strategy(value)


DEFAULT_CURRENCY = Currency.GBP
DEFAULT_ROUNDING = RoundingMode.HALF_UP


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite_number(value: object) -> bool:
    return _is_number(value) and (isinstance(value, int) or math.isfinite(value))


# ==============================================================================
# EXCHANGE RATE
# ==============================================================================

class ExchangeRate(NamedTuple):
    """Conversion rate from source to target: 1 source unit = rate target units."""
    source: Currency
    target: Currency
    rate: float


# ==============================================================================
# MONEY CLASS
# ==============================================================================

@dataclass(frozen=True, slots=True)
class Money:
    """
    Domain Primitive for monetary amounts.

    INVARIANTS:
    1. amount is always an int (no floating point)
    2. currency is always a supported Currency
    3. Ordering and arithmetic across currencies raise CurrencyMismatchError
    4. allocate(weights) and split(n) guarantee sum(parts) == self

    USAGE:
        bill = Money(10_000, Currency.USD)      # $100.00
        shares = bill.allocate([1, 1, 1])       # [$33.34, $33.33, $33.33]
        str(Money(123456))                      # "£1,234.56"
    """
    amount: int
    currency: Currency = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, int) or isinstance(self.amount, bool):
            raise InvalidArgumentError(
                f"Money amount must be an integer count of minor units, "
                f"got {type(self.amount).__name__}: {self.amount!r}"
            )
        if not isinstance(self.currency, Currency):
            # Frozen dataclass: normalise "usd" -> Currency.USD in place
            object.__setattr__(self, "currency", Currency.from_code(self.currency))

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, major_units: int, currency: Currency = DEFAULT_CURRENCY) -> Money:
        """
        Build from whole major units (pounds, dollars, euros).
        Integers only; for fractional values use of_minor().
        """
        currency = Currency.from_code(currency)
        return cls(major_units * currency.multiplier, currency)

    @classmethod
    def of_minor(cls, minor_units: int, currency: Currency = DEFAULT_CURRENCY) -> Money:
        return cls(minor_units, currency)

    @classmethod
    def zero(cls, currency: Currency = DEFAULT_CURRENCY) -> Money:
        """Zero in a given currency. Useful as the start value for sum()."""
        return cls(0, currency)

    @classmethod
    def gbp(cls, pence: int) -> Money:
        return cls(pence, Currency.GBP)

    @classmethod
    def usd(cls, cents: int) -> Money:
        return cls(cents, Currency.USD)

    @classmethod
    def eur(cls, cents: int) -> Money:
        return cls(cents, Currency.EUR)

    # -------------------------------------------------------------------------
    # Allocation
    # -------------------------------------------------------------------------

    def allocate(self, weights: Sequence[int]) -> list[Money]:
        """
        Distribute the amount proportionally to non-negative integer weights.

        INVARIANT: sum(result) == self, for positive, negative and zero amounts.
        Leftover minor units go to the earliest weighted shares.

            Money(100).allocate([4, 6])     -> [Money(40), Money(60)]
            Money(5).allocate([3, 7])       -> [Money(2), Money(3)]
            Money(100).allocate([1, 1, 1])  -> [Money(34), Money(33), Money(33)]

        Raises:
            InvalidArgumentError: empty weights, negative or non-integer weight,
                or weights summing to zero
        """
        return [
            Money(share, self.currency)
            for share in allocate_minor_units(self.amount, weights)
        ]

    def split(self, n: int) -> list[Money]:
        """
        Split into n equal parts differing by at most one minor unit.

        Equivalent to allocate([1] * n); split(1) returns [self].

        Raises:
            InvalidArgumentError: n is not an integer
            DivisionByZeroError: n <= 0
        """
        return [Money(share, self.currency) for share in split_minor_units(self.amount, n)]

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def convert(
        self,
        exchange_rate: ExchangeRate | tuple[Currency, Currency, float],
        rounding: RoundingMode = DEFAULT_ROUNDING,
    ) -> Money:
        """
        Convert to another currency at a positive rate.

        exchange_rate is (source, target, rate); source must be this currency
        and target a different supported currency.

        Raises:
            InvalidArgumentError: "Exchange rate invalid" for any other shape
        """
        try:
            source, target, rate = exchange_rate
        except (TypeError, ValueError):
            logger.debug("Rejected exchange rate %r for %r", exchange_rate, self)
            raise InvalidArgumentError("Exchange rate invalid") from None

        valid = (
            isinstance(source, Currency)
            and isinstance(target, Currency)
            and source == self.currency
            and target != source
            and _is_finite_number(rate)
            and rate > 0
        )
        if not valid:
            logger.debug("Rejected exchange rate %r for %r", exchange_rate, self)
            raise InvalidArgumentError("Exchange rate invalid")

        logger.debug("Converting %r at %s -> %s rate %s", self, source, target, rate)
        return Money(self.amount, target).mul(rate, rounding)

    # -------------------------------------------------------------------------
    # Arithmetic (type-safe)
    # -------------------------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            raise TypeError(
                f"Operation not permitted: Money + {type(other).__name__}. "
                f"Build a Money with Money(amount, currency) first."
            )
        self._check_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            raise TypeError(
                f"Operation not permitted: Money - {type(other).__name__}."
            )
        self._check_same_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def __neg__(self) -> Money:
        return Money(-self.amount, self.currency)

    def __pos__(self) -> Money:
        return self

    def __abs__(self) -> Money:
        return Money(abs(self.amount), self.currency)

    def mul(self, multiplier: float, rounding: RoundingMode = DEFAULT_ROUNDING) -> Money:
        """
        Multiply by a number, rounding the product to a whole minor unit.

            Money(2).mul(2.5)       -> Money(5)
            Money(200).mul(1.335)   -> Money(267)

        Raises:
            InvalidArgumentError: multiplier is nan or infinite
        """
        if not _is_number(multiplier):
            raise TypeError(
                f"Money can only be multiplied by int or float, "
                f"not {type(multiplier).__name__}"
            )
        if isinstance(multiplier, int):
            return Money(self.amount * multiplier, self.currency)
        if not math.isfinite(multiplier):
            raise InvalidArgumentError(f"Multiplier must be finite, got {multiplier}")
        product = Fraction(self.amount) * Fraction(multiplier)
        return Money(_apply_rounding(product, rounding), self.currency)

    def div(self, divisor: float, rounding: RoundingMode = DEFAULT_ROUNDING) -> Money:
        """
        Divide by a number, rounding the quotient to a whole minor unit.

            Money(5).div(2)     -> Money(3)
            Money(2).div(1.5)   -> Money(1)

        Raises:
            DivisionByZeroError: divisor is 0 or 0.0
            InvalidArgumentError: divisor is nan or infinite
        """
        if not _is_number(divisor):
            raise TypeError(
                f"Money can only be divided by int or float, "
                f"not {type(divisor).__name__}"
            )
        if isinstance(divisor, float) and not math.isfinite(divisor):
            raise InvalidArgumentError(f"Divisor must be finite, got {divisor}")
        if divisor == 0:
            raise DivisionByZeroError("Division by zero is not a number")
        quotient = Fraction(self.amount) / Fraction(divisor)
        return Money(_apply_rounding(quotient, rounding), self.currency)

    def __mul__(self, multiplier: float) -> Money:
        return self.mul(multiplier)

    def __rmul__(self, multiplier: float) -> Money:
        return self.mul(multiplier)

    def __truediv__(self, divisor: float) -> Money:
        return self.div(divisor)

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __lt__(self, other: Money) -> bool:
        self._check_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._check_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._check_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._check_same_currency(other)
        return self.amount >= other.amount

    def compare(self, other: Money) -> int:
        """-1, 0 or 1 as self is less than, equal to or greater than other."""
        self._check_same_currency(other)
        return (self.amount > other.amount) - (self.amount < other.amount)

    def _check_same_currency(self, other: Any) -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Cannot compare Money with {type(other).__name__}")
        if self.currency != other.currency:
            raise CurrencyMismatchError(self, other)

    # -------------------------------------------------------------------------
    # Properties and output
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    @property
    def currency_code(self) -> str:
        return self.currency.code

    @property
    def currency_symbol(self) -> str:
        return self.currency.symbol

    @property
    def currency_name(self) -> str:
        return self.currency.display_name

    def format(self, **options: Any) -> str:
        """
        Render for display.

        Options (all optional):
            symbol (bool, default True)     include the currency symbol
            code (bool, default False)      append the currency code
            separator (str, default ",")    thousands separator
            delimiter (str, default ".")    decimal delimiter

            Money(123456).format()                          -> "£1,234.56"
            Money(100000, Currency.EUR).format(
                separator=".", delimiter=",", code=True)    -> "€1.000,00 EUR"

        Raises:
            InvalidArgumentError: unknown option or mistyped value
        """
        opts = FormatOptions.from_options(**options) if options else DEFAULT_OPTIONS
        return format_amount(self.amount, self.currency, opts)

    def to_string(self, **options: Any) -> str:
        return self.format(**options)

    def __str__(self) -> str:
        return format_amount(self.amount, self.currency)

    def __repr__(self) -> str:
        return f"Money({self.amount}, {self.currency.code})"
