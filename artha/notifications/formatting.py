"""
Amount formatting for notification messages.

Digit grouping follows the configured locale: "id-ID" renders
5000000 as "5.000.000", "en-US" as "5,000,000".
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union


# locale -> (grouping separator, decimal separator)
LOCALE_SEPARATORS = {
    "id-ID": (".", ","),
    "de-DE": (".", ","),
    "es-ES": (".", ","),
    "pt-BR": (".", ","),
    "en-US": (",", "."),
    "en-GB": (",", "."),
    "en-IN": (",", "."),
    "ms-MY": (",", "."),
    "ja-JP": (",", "."),
    "fr-FR": (" ", ","),
}

DEFAULT_LOCALE = "en-US"


def separators_for(locale: str) -> tuple[str, str]:
    """Unknown locales fall back to en-US separators."""
    return LOCALE_SEPARATORS.get(locale, LOCALE_SEPARATORS[DEFAULT_LOCALE])


def format_number(amount: Union[int, float, Decimal, str], locale: str = "id-ID") -> str:
    """
    Group thousands and keep at most two decimals (trailing zeros dropped).

    >>> format_number(5000000, "id-ID")
    '5.000.000'
    >>> format_number(1234.5, "en-US")
    '1,234.5'
    """
    group_sep, decimal_sep = separators_for(locale)
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    sign = "-" if value < 0 else ""
    integer_part, _, fraction = f"{abs(value):.2f}".partition(".")
    grouped = f"{int(integer_part):,}".replace(",", group_sep)
    fraction = fraction.rstrip("0")

    if fraction:
        return f"{sign}{grouped}{decimal_sep}{fraction}"
    return f"{sign}{grouped}"


def format_amount(
    amount: Union[int, float, Decimal, str],
    locale: str = "id-ID",
    currency_symbol: str = "Rp",
) -> str:
    """Number formatted for the locale, prefixed with the currency symbol."""
    number = format_number(amount, locale)
    return f"{currency_symbol} {number}" if currency_symbol else number
