"""
Currency conversion for the workspace's exchange tab.

Rates come from a static USD-based table; currency names come from
pycountry's ISO 4217 data.
"""

import math
from dataclasses import dataclass

import pycountry

from trip_planner.utils.error_handling import ValidationError
from trip_planner.utils.logging import get_logger

logger = get_logger(__name__)

# Units of each currency per 1 USD
USD_BASE_RATES: dict[str, float] = {
    "USD": 1.0, "JPY": 150.25, "HKD": 7.82, "TWD": 31.5, "CAD": 1.35,
    "EUR": 0.92, "GBP": 0.79, "AUD": 1.53, "NZD": 1.62, "CHF": 0.88,
    "CNY": 7.19, "KRW": 1330.0, "THB": 35.8, "SGD": 1.34, "MYR": 4.77,
    "PHP": 56.1, "IDR": 15600.0, "VND": 24500.0, "INR": 83.0, "AED": 3.67,
    "BRL": 4.97, "ZAR": 19.1, "MXN": 17.05, "SEK": 10.4, "NOK": 10.5,
    "DKK": 6.85, "PLN": 3.98, "TRY": 31.2, "SAR": 3.75, "ILS": 3.65,
    "EGP": 30.9,
}  # fmt: skip

CURRENCY_SYMBOLS: dict[str, str] = {
    "JPY": "¥", "HKD": "$", "TWD": "$", "USD": "$", "CAD": "$", "EUR": "€",
    "GBP": "£", "AUD": "$", "NZD": "$", "CHF": "Fr", "CNY": "¥", "KRW": "₩",
    "THB": "฿", "SGD": "$", "MYR": "RM", "PHP": "₱", "IDR": "Rp", "VND": "₫",
    "INR": "₹", "AED": "د.إ", "BRL": "R$", "ZAR": "R", "MXN": "$", "SEK": "kr",
    "NOK": "kr", "DKK": "kr", "PLN": "zł", "TRY": "₺", "SAR": "﷼", "ILS": "₪",
    "EGP": "E£",
}  # fmt: skip


@dataclass(frozen=True)
class Currency:
    code: str
    symbol: str
    name: str


def currency_name(code: str) -> str:
    currency = pycountry.currencies.get(alpha_3=code)
    return currency.name if currency else code


def supported_currencies() -> list[Currency]:
    """All convertible currencies, sorted by code."""
    return [
        Currency(code=code, symbol=CURRENCY_SYMBOLS.get(code, ""), name=currency_name(code))
        for code in sorted(USD_BASE_RATES)
    ]


def get_symbol(code: str) -> str:
    return CURRENCY_SYMBOLS.get(code, "")


def get_rate(from_currency: str, to_currency: str) -> float:
    """
    Units of ``to_currency`` per one unit of ``from_currency``.

    Raises:
        ValidationError: If either currency is not supported
    """
    for code in (from_currency, to_currency):
        if code not in USD_BASE_RATES:
            raise ValidationError(f"Unsupported currency: {code}")
    if from_currency == to_currency:
        return 1.0
    return USD_BASE_RATES[to_currency] / USD_BASE_RATES[from_currency]


def format_amount(amount: str | float, rate: float) -> str:
    """Convert and format to two decimals; "0.00" for non-numeric input."""
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return "0.00"
    if math.isnan(value) or math.isinf(value):
        return "0.00"
    return f"{value * rate:.2f}"


class CurrencyCalculator:
    """State of the exchange tab: amount, currency pair and current rate."""

    def __init__(self, amount: str = "1000"):
        self.amount = amount
        self.from_currency = ""
        self.to_currency = ""
        self.rate = 1.0

    def set_pair(self, from_currency: str, to_currency: str) -> float:
        self.from_currency = from_currency
        self.to_currency = to_currency
        return self.refresh_rate()

    def refresh_rate(self) -> float:
        """Recompute the rate; a half-selected pair keeps the previous rate."""
        if not self.from_currency or not self.to_currency:
            return self.rate
        self.rate = get_rate(self.from_currency, self.to_currency)
        logger.debug(
            f"Rate {self.from_currency}->{self.to_currency} = {self.rate:.6f}"
        )
        return self.rate

    @property
    def converted(self) -> str:
        if not self.from_currency or not self.to_currency:
            return "0.00"
        return format_amount(self.amount, self.rate)

    def swap(self) -> None:
        if not self.from_currency or not self.to_currency:
            return
        self.set_pair(self.to_currency, self.from_currency)
