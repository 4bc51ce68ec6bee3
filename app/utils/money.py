"""
==============================================================================
Price Rounding Module
==============================================================================

Two-decimal price rounding shared by the converter and product creation.

Prices are formatted to at most two decimals (half-up) and parsed back
to a float, so 199.98000000000002 becomes 199.98 and 10.005 becomes
10.01.

==============================================================================
"""

from decimal import ROUND_HALF_UP, Decimal


TWO_PLACES = Decimal("0.01")


def round_price(value: float) -> float:
    """
    Round a price to two decimals using half-up rounding.

    The float's shortest decimal form (``repr``) is rounded, not its
    binary expansion, so ``round_price(2.675) == 2.68``.

    Args:
        value: Price to round

    Returns:
        Rounded price as float
    """
    return float(Decimal(repr(float(value))).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def convert_price(price_eur: float, rate: float) -> float:
    """Convert a EUR price with the given rate and round the result."""
    return round_price(price_eur * rate)
