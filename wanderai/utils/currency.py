"""Display-currency conversion for generated cost estimates.

Rates are static approximations against USD; estimates are free text, so
these only shape the strings shown to the traveler.
"""

import math

CURRENCY_RATES: dict[str, float] = {
    "USD": 1,
    "EUR": 0.85,
    "GBP": 0.75,
    "INR": 83,
    "JPY": 110,
    "CAD": 1.25,
    "AUD": 1.35,
    "CNY": 7.2,
    "KRW": 1200,
    "SGD": 1.35,
    "CHF": 0.92,
    "SEK": 10.5,
    "NOK": 10.8,
    "DKK": 6.8,
    "NZD": 1.45,
}

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
    "CAD": "C$",
    "AUD": "A$",
    "CNY": "¥",
    "KRW": "₩",
    "SGD": "S$",
    "CHF": "CHF",
    "SEK": "kr",
    "NOK": "kr",
    "DKK": "kr",
    "NZD": "NZ$",
}


def round_half_up(value: float) -> int:
    """Round like a price tag: halves go up."""
    return math.floor(value + 0.5)


def convert_currency(usd_amount: float, to_currency: str) -> str:
    """Format a USD amount in another currency, e.g. ``€85``.

    Unknown currencies are shown in USD.
    """
    rate = CURRENCY_RATES.get(to_currency, 1)
    symbol = CURRENCY_SYMBOLS.get(to_currency, "$")
    return f"{symbol}{round_half_up(usd_amount * rate):,}"


def convert_currency_range(min_usd: float, max_usd: float, to_currency: str) -> str:
    """Format a USD range in another currency, e.g. ``¥1,650-2,200``."""
    rate = CURRENCY_RATES.get(to_currency, 1)
    symbol = CURRENCY_SYMBOLS.get(to_currency, "$")
    low = round_half_up(min_usd * rate)
    high = round_half_up(max_usd * rate)
    return f"{symbol}{low:,}-{high:,}"
