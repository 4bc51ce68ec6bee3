"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

This package provides:
- Product: API product projection and uniform product response
- ExchangeRate: Records of the external rate list

==============================================================================
"""

from .product import ProductView, ProductResponse
from .exchange_rate import ExchangeRateRecord

__all__ = [
    "ProductView",
    "ProductResponse",
    "ExchangeRateRecord",
]
