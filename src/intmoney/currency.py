"""
currency.py — Supported currencies and their display metadata

Currency is a closed enumeration: a Money value can only ever carry one of
these members, so every metadata lookup below is total.
"""

from __future__ import annotations
from enum import Enum

from .exceptions import UnsupportedCurrencyError


class Currency(Enum):
    """
    Supported currencies (ISO 4217 code, symbol, display name, minor digits).

    Every supported currency has two minor-unit digits: 1 GBP = 100 pence,
    1 USD = 100 cents, 1 EUR = 100 cents.
    """
    GBP = ("GBP", "£", "Sterling", 2)
    USD = ("USD", "$", "United States dollar", 2)
    EUR = ("EUR", "€", "Euro", 2)

    def __init__(self, code: str, symbol: str, display_name: str, decimals: int):
        self._code = code
        self._symbol = symbol
        self._display_name = display_name
        self._decimals = decimals

    @property
    def code(self) -> str:
        return self._code

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def decimals(self) -> int:
        return self._decimals

    @property
    def multiplier(self) -> int:
        """Conversion factor major -> minor unit."""
        return 10 ** self._decimals

    @classmethod
    def from_code(cls, code: str | Currency) -> Currency:
        """
        Resolve a currency from its 3-letter code (case-insensitive).

        Raises:
            UnsupportedCurrencyError: if the code is not in the supported set
        """
        if isinstance(code, Currency):
            return code
        if not isinstance(code, str):
            raise UnsupportedCurrencyError(
                f"Currency must be a Currency or a currency code, got {type(code).__name__}"
            )
        try:
            return cls[code.strip().upper()]
        except KeyError:
            supported = ", ".join(member.code for member in cls)
            raise UnsupportedCurrencyError(
                f"Unsupported currency '{code}'. Supported currencies: {supported}"
            ) from None

    def __str__(self) -> str:
        return self._code


def currency_code(currency: Currency) -> str:
    return currency.code


def currency_symbol(currency: Currency) -> str:
    return currency.symbol


def currency_name(currency: Currency) -> str:
    return currency.display_name
