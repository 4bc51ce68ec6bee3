"""
==============================================================================
SQLAlchemy ORM Models Module
==============================================================================

ORM models for the product catalog.

Database Schema:
---------------

    ┌─────────────────────────────────────────────────────────────────┐
    │                          products                                │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (BIGINT, PK, AUTO INCREMENT)                                 │
    │ code (VARCHAR(10), UNIQUE, NOT NULL)                            │
    │ name (VARCHAR, NOT NULL)                                        │
    │ price_eur (FLOAT, NOT NULL)                                     │
    │ available (BOOLEAN, NOT NULL, DEFAULT false)                    │
    └─────────────────────────────────────────────────────────────────┘

The USD price is never stored; it is derived from ``price_eur`` on
every read.

=============================================================================
"""

from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, Column, Float, Integer, String

from app.db.database import Base


# SQLite only autoincrements INTEGER primary keys
ProductId = BigInteger().with_variant(Integer, "sqlite")


class Product(Base):
    """
    Catalog product.

    Attributes:
        id: Store-assigned identifier, immutable after creation
        code: Unique 10-character alphanumeric product code
        name: Display name
        price_eur: Price in EUR, the source of truth for all prices
        available: Whether the product can be ordered

    Example:
        >>> product = Product(
        ...     code="P123456789",
        ...     name="Premium Widget",
        ...     price_eur=99.99,
        ...     available=True
        ... )
        >>> session.add(product)
        >>> session.commit()
    """

    __tablename__ = "products"

    id: int = Column(
        ProductId,
        primary_key=True,
        autoincrement=True,
        doc="Store-assigned product identifier"
    )

    code: str = Column(
        String(10),
        unique=True,
        nullable=False,
        index=True,
        doc="Unique 10-character product code"
    )

    name: str = Column(
        String(255),
        nullable=False,
        doc="Product display name"
    )

    price_eur: float = Column(
        Float,
        nullable=False,
        doc="Price in EUR"
    )

    available: bool = Column(
        Boolean,
        default=False,
        nullable=False,
        doc="Availability flag"
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, code={self.code!r}, name={self.name!r})>"
