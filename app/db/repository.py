"""
==============================================================================
Product Repository Module
==============================================================================

Data access for products.

The repository is the only code that touches the ``products`` table.
Uniqueness of ``code`` is guaranteed by the table's unique constraint;
``exists_by_code`` is a fast path that lets the service report the
conflict before attempting the insert.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql import ColumnElement

from app.core import exceptions
from app.db.models import Product


# Module logger
logger = logging.getLogger(__name__)


class ProductRepository:
    """
    Persistence operations for products.

    Attributes:
        _db: Database session

    Example:
        >>> repository = ProductRepository(db_session)
        >>> repository.exists_by_code("P123456789")
        False
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def exists_by_code(self, code: str) -> bool:
        """Check whether a product with this exact code exists."""
        return self._db.query(Product.id).filter(Product.code == code).first() is not None

    def find_by_id(self, product_id: int) -> Optional[Product]:
        """Load a product by id, or None if absent."""
        return self._db.get(Product, product_id)

    def save(self, product: Product) -> Product:
        """
        Insert a product and return it with its assigned id.

        Raises:
            AppException: PRODUCT_CODE_EXISTS if the code is already taken
        """
        try:
            self._db.add(product)
            self._db.commit()
            self._db.refresh(product)
        except IntegrityError:
            self._db.rollback()
            logger.warning(f"Unique constraint rejected product code: {product.code}")
            raise exceptions.product_code_exists(product.code)

        logger.debug(f"Product saved: {product!r}")
        return product

    def find_page(
        self,
        clauses: Sequence[ColumnElement],
        order_by: Sequence[ColumnElement],
        offset: int,
        limit: int
    ) -> Tuple[List[Product], int]:
        """
        Fetch one page of products matching all clauses.

        Args:
            clauses: Conditions combined with AND
            order_by: Ordering expressions
            offset: Number of matching rows to skip
            limit: Maximum rows to return

        Returns:
            Tuple of (page items, total count across all pages)
        """
        query = self._db.query(Product)
        if clauses:
            query = query.filter(*clauses)

        total = query.count()
        items = query.order_by(*order_by).offset(offset).limit(limit).all()
        return items, total

    def count(self) -> int:
        """Count all products."""
        return self._db.query(Product).count()
