"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes implementing the product catalog logic.

This package provides:
- ExchangeRateService: EUR to USD rate with a 1.0 fallback
- ProductFilter / SortSpec / ProductQueryExecutor: list querying
- ProductConverter: entity/view mapping with USD prices
- ProductService: list, get and create operations

Architecture Pattern: Service Layer
----------------------------------
    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │ ProductService  │  ← Business Logic
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │   Repository    │  ← Data Access (via ORM)
    └─────────────────┘

==============================================================================
"""

from .exchange_rate_service import ExchangeRateService
from .product_converter import ProductConverter
from .product_query import ProductFilter, ProductQueryExecutor, SortSpec
from .product_service import ProductService

__all__ = [
    "ExchangeRateService",
    "ProductConverter",
    "ProductFilter",
    "ProductQueryExecutor",
    "SortSpec",
    "ProductService",
]
