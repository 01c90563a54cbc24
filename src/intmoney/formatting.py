"""
formatting.py — Human-readable rendering of minor-unit amounts

Output shape, for any amount:

    -?SYMBOL?\\d{1,3}(SEP\\d{3})*DELIM\\d{2}( CODE)?

Digit grouping is fixed at 3 and the minor part is always 2 digits.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, fields
from typing import Any

from .currency import Currency
from .exceptions import InvalidArgumentError

MINOR_DIGITS = 2
GROUP_SIZE = 3


@dataclass(frozen=True, slots=True)
class FormatOptions:
    """
    Rendering options.

    symbol:    prefix the currency symbol ("£1.00")
    code:      suffix the currency code ("1.00 GBP")
    separator: thousands grouping token
    delimiter: token between major and minor digits
    """
    symbol: bool = True
    code: bool = False
    separator: str = ","
    delimiter: str = "."

    def __post_init__(self) -> None:
        for flag in ("symbol", "code"):
            if not isinstance(getattr(self, flag), bool):
                raise InvalidArgumentError(
                    f"Format option '{flag}' must be a bool, got {getattr(self, flag)!r}"
                )
        for token in ("separator", "delimiter"):
            if not isinstance(getattr(self, token), str):
                raise InvalidArgumentError(
                    f"Format option '{token}' must be a str, got {getattr(self, token)!r}"
                )

    @classmethod
    def from_options(cls, **options: Any) -> FormatOptions:
        """Merge keyword options over the defaults, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise InvalidArgumentError(
                f"Unknown format option(s): {', '.join(unknown)}. "
                f"Valid options: {', '.join(sorted(known))}"
            )
        return cls(**options)


DEFAULT_OPTIONS = FormatOptions()


def format_digits(amount: int, separator: str = ",", delimiter: str = ".") -> str:
    """
    Render abs(amount) as grouped major digits, delimiter, two minor digits.

    Example: 123499 -> "1,234.99", 5 -> "0.05", 50 -> "0.50".

    Digits are scanned from least significant upward; tokens are placed by
    position so multi-character separators stay intact.
    """
    digits = str(abs(amount))
    out: deque[str] = deque()

    for position in range(len(digits)):
        if position == MINOR_DIGITS:
            out.appendleft(delimiter)
        elif position > MINOR_DIGITS and (position - MINOR_DIGITS) % GROUP_SIZE == 0:
            out.appendleft(separator)
        out.appendleft(digits[-1 - position])

    # Amounts below one major unit: pad the minor part, then a "0" major digit
    if len(digits) <= MINOR_DIGITS:
        out.extendleft("0" * (MINOR_DIGITS - len(digits)))
        out.appendleft(delimiter)
        out.appendleft("0")

    return "".join(out)


def format_amount(
    amount: int,
    currency: Currency,
    options: FormatOptions = DEFAULT_OPTIONS,
) -> str:
    """Compose sign, symbol, grouped digits and code into the display string."""
    sign = "-" if amount < 0 else ""
    symbol = currency.symbol if options.symbol else ""
    code = currency.code if options.code else ""
    digits = format_digits(amount, options.separator, options.delimiter)
    return f"{sign}{symbol}{digits} {code}".strip()
