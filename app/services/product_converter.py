"""
==============================================================================
Product Converter Module
==============================================================================

Maps between stored products and API product views.

- Entity → view: copies every stored field and adds ``priceUsd``
  computed from ``priceEur`` and the given rate.
- View → entity: copies code, name, priceEur and availability; the id is
  assigned by the store and ``priceUsd`` is never trusted from input.

The rate is always passed in. Batch conversions reuse one rate so every
price in a response is consistent.

==============================================================================
"""

from __future__ import annotations

from typing import Iterable, List

from app.db.models import Product
from app.schemas.product import ProductView
from app.utils.money import convert_price


class ProductConverter:
    """Converter between ``Product`` entities and ``ProductView`` objects."""

    def to_view(self, product: Product, usd_rate: float) -> ProductView:
        """Convert a stored product, attaching its USD price."""
        return ProductView(
            id=product.id,
            code=product.code,
            name=product.name,
            price_eur=product.price_eur,
            price_usd=convert_price(product.price_eur, usd_rate),
            available=product.available,
        )

    def to_entity(self, view: ProductView) -> Product:
        """Convert a client view into a new, unsaved product."""
        return Product(
            code=view.code,
            name=view.name,
            price_eur=view.price_eur,
            available=bool(view.available),
        )

    def to_views(self, products: Iterable[Product], usd_rate: float) -> List[ProductView]:
        """Convert a batch of products with one shared rate."""
        return [self.to_view(product, usd_rate) for product in products]

    def to_entities(self, views: Iterable[ProductView]) -> List[Product]:
        """Convert a batch of client views."""
        return [self.to_entity(view) for view in views]
