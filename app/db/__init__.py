"""
==============================================================================
Database Package
==============================================================================

SQLAlchemy database infrastructure and ORM models.

Architecture:
------------
├── database.py    - DatabaseManager class, session factory
├── models.py      - SQLAlchemy ORM model classes
├── repository.py  - ProductRepository data access
└── init_db.py     - DatabaseInitializer for setup

Usage:
------
    from app.db import DatabaseManager, Product, ProductRepository

    db_manager = DatabaseManager()
    session = db_manager.get_session()
    product = ProductRepository(session).find_by_id(1)
    session.close()

==============================================================================
"""

from .database import DatabaseManager, Base, get_db, configure_sqlite_engine
from .models import Product
from .repository import ProductRepository
from .init_db import DatabaseInitializer, init_db

__all__ = [
    # Database management
    "DatabaseManager",
    "Base",
    "get_db",
    "configure_sqlite_engine",
    # Models
    "Product",
    "ProductRepository",
    # Initialization
    "DatabaseInitializer",
    "init_db",
]
