"""
==============================================================================
Utilities Package
==============================================================================

Utility classes and functions for the application.

Modules:
--------
- validators: Product and pagination validation
- money: Two-decimal price rounding

==============================================================================
"""

from .validators import ProductValidator, PageRequestValidator
from .money import round_price, convert_price

__all__ = [
    "ProductValidator",
    "PageRequestValidator",
    "round_price",
    "convert_price",
]
