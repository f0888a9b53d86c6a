"""
Currency conversion against a fixed table of exchange rates.

Rates are quoted as units of currency per one USD, so a conversion divides by
the source rate and multiplies by the target rate.
"""
import logging
import time
from collections import namedtuple

from errors import InvalidInput, UnknownCurrency
from unit_converter import parse_value

logger = logging.getLogger(__name__)

Currency = namedtuple("Currency", ["code", "name", "symbol"])
ExchangeRates = namedtuple("ExchangeRates", ["base", "rates", "timestamp"])

BASE_CURRENCY = "USD"

POPULAR_CURRENCIES = (
    Currency("USD", "US Dollar", "$"),
    Currency("EUR", "Euro", "€"),
    Currency("GBP", "British Pound", "£"),
    Currency("JPY", "Japanese Yen", "¥"),
    Currency("CAD", "Canadian Dollar", "C$"),
    Currency("AUD", "Australian Dollar", "A$"),
    Currency("CHF", "Swiss Franc", "Fr"),
    Currency("CNY", "Chinese Yuan", "¥"),
    Currency("INR", "Indian Rupee", "₹"),
    Currency("BRL", "Brazilian Real", "R$"),
)

# Sample rates, not live market data.
MOCK_RATES = {
    "EUR": 0.85,
    "GBP": 0.74,
    "JPY": 110.23,
    "CAD": 1.26,
    "AUD": 1.36,
    "CHF": 0.92,
    "CNY": 6.47,
    "INR": 74.38,
    "BRL": 5.24,
}

_CURRENCIES_BY_CODE = {currency.code: currency for currency in POPULAR_CURRENCIES}


def get_exchange_rates(now=None):
    """
    The rate table with USD included at 1, stamped in epoch milliseconds.
    """
    rates = {BASE_CURRENCY: 1.0}
    rates.update(MOCK_RATES)
    timestamp = int((time.time() if now is None else now) * 1000)
    return ExchangeRates(BASE_CURRENCY, rates, timestamp)

def get_currency(code):
    try:
        return _CURRENCIES_BY_CODE[code]
    except KeyError:
        raise UnknownCurrency(f"Unknown currency: {code!r}", code=code) from None

def _rate(rates, code):
    try:
        return rates.rates[code]
    except KeyError:
        raise UnknownCurrency(f"No exchange rate for {code!r}", code=code) from None

def convert(amount, from_code, to_code, rates=None):
    """
    Convert amount from one currency to another through USD.

    Raises InvalidInput for a non-numeric amount and UnknownCurrency for a
    code missing from the rate table.
    """
    rates = rates or get_exchange_rates()
    value = parse_value(amount)
    from_rate = _rate(rates, from_code)
    to_rate = _rate(rates, to_code)

    value_in_base = value if from_code == rates.base else value / from_rate
    return value_in_base if to_code == rates.base else value_in_base * to_rate

def convert_display(amount, from_code, to_code, rates=None):
    """
    Converted amount, or None when there is nothing sensible to show:
    the amount is not a number or is not positive.
    """
    try:
        value = parse_value(amount)
    except InvalidInput as e:
        logger.debug("Clearing currency result: %s", e)
        return None
    if value <= 0:
        return None
    return convert(value, from_code, to_code, rates)

def swap(from_code, to_code):
    return to_code, from_code

def format_currency(value, code):
    """
    '$1,234.50', '€0.8512'-style text: 2 to 4 fraction digits.
    """
    symbol = get_currency(code).symbol
    text = f"{abs(value):,.4f}"
    whole, fraction = text.split(".")
    fraction = fraction.rstrip("0").ljust(2, "0")
    sign = "-" if value < 0 and round(abs(value), 4) != 0 else ""
    return f"{sign}{symbol}{whole}.{fraction}"
