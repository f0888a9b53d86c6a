import pytest

from currency_converter import (BASE_CURRENCY, MOCK_RATES, POPULAR_CURRENCIES, convert,
                                convert_display, format_currency, get_currency,
                                get_exchange_rates, swap)
from errors import InvalidInput, UnknownCurrency


@pytest.fixture
def rates():
    return get_exchange_rates(now=1700000000)


def test_exchange_rates_table(rates):
    assert rates.base == BASE_CURRENCY == "USD"
    assert rates.rates["USD"] == 1.0
    assert rates.rates["EUR"] == 0.85
    assert rates.timestamp == 1700000000000
    assert set(rates.rates) == {c.code for c in POPULAR_CURRENCIES}

def test_exchange_rates_do_not_share_the_module_table():
    first = get_exchange_rates()
    first.rates["EUR"] = 2.0
    assert MOCK_RATES["EUR"] == 0.85
    assert get_exchange_rates().rates["EUR"] == 0.85

def test_usd_to_eur(rates):
    assert convert(1, "USD", "EUR", rates) == pytest.approx(0.85)

def test_eur_to_usd(rates):
    assert convert(0.85, "EUR", "USD", rates) == pytest.approx(1.0)

def test_cross_rate_goes_through_usd(rates):
    assert convert(100, "EUR", "GBP", rates) == pytest.approx(100 / 0.85 * 0.74)
    assert convert("110.23", "JPY", "USD", rates) == pytest.approx(1.0)

def test_default_rates_are_used():
    assert convert(2, "USD", "INR") == pytest.approx(148.76)

def test_invalid_amount_raises(rates):
    with pytest.raises(InvalidInput):
        convert("lots", "USD", "EUR", rates)

@pytest.mark.parametrize("amount", ["", "abc", None, 0, "0", -5, "nan"])
def test_convert_display_hides_unusable_amounts(amount, rates):
    assert convert_display(amount, "USD", "EUR", rates) is None

def test_convert_display(rates):
    assert convert_display("10", "USD", "EUR", rates) == pytest.approx(8.5)

def test_unknown_currency(rates):
    with pytest.raises(UnknownCurrency) as excinfo:
        convert(1, "USD", "XYZ", rates)
    assert excinfo.value.code == "XYZ"
    with pytest.raises(UnknownCurrency):
        get_currency("XYZ")

def test_swap():
    assert swap("USD", "EUR") == ("EUR", "USD")

@pytest.mark.parametrize("value, code, expected", [
    (1234.5, "USD", "$1,234.50"),
    (0.85123, "EUR", "€0.8512"),
    (110.23, "JPY", "¥110.23"),
    (1, "CHF", "Fr1.00"),
    (-2, "USD", "-$2.00"),
    (-0.00001, "USD", "$0.00"),
    (1234567.891, "INR", "₹1,234,567.891"),
])
def test_format_currency(value, code, expected):
    assert format_currency(value, code) == expected
