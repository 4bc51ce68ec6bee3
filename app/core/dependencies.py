"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for the product endpoints.

Dependency Hierarchy:
--------------------
    ┌──────────────┐     ┌──────────────────────────┐
    │   get_db()   │     │ get_exchange_rate_service│ (shared httpx client)
    └──────┬───────┘     └────────────┬─────────────┘
           │                          │
           └────────────┬─────────────┘
                        │
              ┌─────────▼──────────┐
              │ get_product_service│
              └────────────────────┘

Tests override ``get_db`` and ``get_exchange_rate_service`` through
``app.dependency_overrides``.

==============================================================================
"""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from app.config import get_settings
from app.db.database import get_db
from app.db.repository import ProductRepository
from app.services.exchange_rate_service import ExchangeRateService
from app.services.product_service import ProductService


# Module logger
logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_exchange_rate_service() -> ExchangeRateService:
    """
    Get the shared exchange rate service.

    One instance (and one connection pool) serves every request; it is
    closed on application shutdown.
    """
    settings = get_settings()
    logger.debug(f"Creating exchange rate client for {settings.exchange_rate_url}")
    return ExchangeRateService(
        url=settings.exchange_rate_url,
        timeout=settings.exchange_rate_timeout_seconds,
    )


def close_exchange_rate_service() -> None:
    """Close the shared exchange rate service if it was created."""
    if get_exchange_rate_service.cache_info().currsize:
        get_exchange_rate_service().close()
        get_exchange_rate_service.cache_clear()


def get_product_service(
    db: Session = Depends(get_db),
    exchange_rates: ExchangeRateService = Depends(get_exchange_rate_service)
) -> ProductService:
    """Build a request-scoped product service."""
    return ProductService(
        ProductRepository(db),
        exchange_rates,
        max_page_size=get_settings().max_page_size,
    )
