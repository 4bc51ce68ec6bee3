"""
==============================================================================
Database Initialization Module
==============================================================================

Database initialization and setup utilities.

This module implements:
- DatabaseInitializer: Class for database setup operations
- Table creation and verification
- Optional catalog seeding from a JSON file

Initialization Flow:
-------------------
1. Create all tables from ORM models
2. Seed products from ``products_file`` when the table is empty
3. Verify the connection

Seed File Format:
----------------
    [
        {"code": "P123456789", "name": "Premium Widget",
         "priceEur": 99.99, "available": true}
    ]

==============================================================================
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.exceptions import AppException
from app.db.database import DatabaseManager
from app.db.repository import ProductRepository
from app.schemas.product import ProductView
from app.utils.money import round_price
from app.utils.validators import ProductValidator


# Module logger
logger = logging.getLogger(__name__)

_views_adapter = TypeAdapter(List[ProductView])


class DatabaseInitializer:
    """
    Database initialization manager.

    Attributes:
        _db_manager: DatabaseManager instance
        _settings: Application settings
        _session: Optional externally owned session

    Example:
        >>> initializer = DatabaseInitializer()
        >>> initializer.initialize()
    """

    def __init__(
        self,
        db_manager: Optional[DatabaseManager] = None,
        session: Optional[Session] = None
    ) -> None:
        """
        Initialize the database initializer.

        Args:
            db_manager: Optional DatabaseManager instance (creates new if None)
            session: Optional existing session (creates new if None)
        """
        self._db_manager = db_manager or DatabaseManager()
        self._settings = get_settings()
        self._session = session

    def _get_session(self) -> Session:
        if self._session is not None:
            return self._session
        return self._db_manager.get_session()

    # =========================================================================
    # TABLE OPERATIONS
    # =========================================================================

    def create_tables(self) -> None:
        """Create all database tables from ORM models."""
        logger.info("Creating database tables...")
        self._db_manager.create_tables()
        logger.info("✅ Database tables created successfully")

    # =========================================================================
    # SEEDING
    # =========================================================================

    def seed_products(self, path: Optional[Path] = None) -> int:
        """
        Load products from a JSON file into an empty catalog.

        Entries that fail validation or repeat an existing code are
        skipped with a warning.

        Args:
            path: Seed file (defaults to settings.products_path)

        Returns:
            Number of products inserted
        """
        path = path or self._settings.products_path
        if not path.exists():
            logger.info(f"No seed file at {path}, skipping product seeding")
            return 0

        session = self._get_session()
        try:
            repository = ProductRepository(session)
            if repository.count() > 0:
                logger.info("Products already present, skipping seeding")
                return 0

            try:
                views = _views_adapter.validate_python(
                    json.loads(path.read_text(encoding="utf-8"))
                )
            except (json.JSONDecodeError, ValidationError) as e:
                logger.error(f"Invalid seed file {path}: {e}")
                return 0

            return self._insert_views(repository, views)
        finally:
            if self._session is None:
                session.close()

    def _insert_views(self, repository: ProductRepository, views: List[ProductView]) -> int:
        # Imported here: the services package depends on app.db
        from app.services.product_converter import ProductConverter

        validator = ProductValidator()
        valid_views = []
        for view in views:
            errors = validator.validate(view)
            if errors:
                logger.warning(f"⚠️ Skipping seed product {view.code!r}: {'; '.join(errors)}")
                continue
            valid_views.append(view.model_copy(update={"price_eur": round_price(view.price_eur)}))

        inserted = 0
        for product in ProductConverter().to_entities(valid_views):
            try:
                repository.save(product)
                inserted += 1
            except AppException as e:
                logger.warning(f"⚠️ Skipping seed product: {e.message}")

        logger.info(f"✅ Seeded {inserted} products")
        return inserted

    # =========================================================================
    # INITIALIZATION METHODS
    # =========================================================================

    def initialize(self) -> None:
        """
        Perform full database initialization.

        This method:
        1. Creates all tables
        2. Seeds products into an empty catalog
        3. Verifies the connection
        """
        logger.info("=" * 60)
        logger.info("Initializing database...")
        logger.info("=" * 60)

        self.create_tables()
        self.seed_products()

        if self._db_manager.verify_connection():
            logger.info("✅ Database connection verified")
        else:
            logger.warning("⚠️ Database connection check failed")

        logger.info("Database initialization complete")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def init_db() -> None:
    """
    Initialize the database at application startup.

    Usage:
        from app.db import init_db
        init_db()
    """
    initializer = DatabaseInitializer()
    initializer.initialize()
