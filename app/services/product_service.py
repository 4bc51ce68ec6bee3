"""
==============================================================================
Product Service Module
==============================================================================

Business logic for the product catalog.

This module implements:
- ProductService: list, get-by-id and create operations

Result Contract:
---------------
Every operation returns a ``ProductResponse``. Expected failures
(validation, not found, conflict, query errors) become populated
``errors``; nothing is raised past this service. The list operation
also returns the total number of matching products (0 on failure).

Operation Flow (list):
---------------------
    filter text ──▶ ProductFilter ──▶ ProductQueryExecutor ──▶ (items, total)
                                                                   │
                          ExchangeRateService ──▶ rate (once) ─────┤
                                                                   ▼
                                                          ProductConverter

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import AppException
from app.db.repository import ProductRepository
from app.schemas.product import ProductResponse, ProductView
from app.services.exchange_rate_service import ExchangeRateService
from app.services.product_converter import ProductConverter
from app.services.product_query import ProductFilter, ProductQueryExecutor
from app.utils.money import round_price
from app.utils.validators import MAX_STORE_INT, PageRequestValidator, ProductValidator


# Module logger
logger = logging.getLogger(__name__)

FETCH_ERROR = "Error fetching products. Please check logs."
NO_PRODUCTS = "No products found."
NO_PRODUCT = "No product found."
ID_NULL = "Id is null."
ID_NOT_POSITIVE = "Id must be a positive number"
PRODUCT_NULL = "Product is null."


class ProductService:
    """
    Product catalog service.

    Dependencies are passed in explicitly; only the repository and the
    rate service are required.

    Attributes:
        _repository: Product persistence
        _exchange_rates: EUR to USD rate provider
        _converter: Entity/view converter
        _query_executor: Filter/sort/page executor
        _validator: Rules for new products

    Example:
        >>> service = ProductService(ProductRepository(db), ExchangeRateService())
        >>> response, total = service.get_all_products(0, 10, "name", "{}")
    """

    def __init__(
        self,
        repository: ProductRepository,
        exchange_rates: ExchangeRateService,
        converter: Optional[ProductConverter] = None,
        query_executor: Optional[ProductQueryExecutor] = None,
        validator: Optional[ProductValidator] = None,
        max_page_size: int = 100
    ) -> None:
        self._repository = repository
        self._exchange_rates = exchange_rates
        self._converter = converter or ProductConverter()
        self._query_executor = query_executor or ProductQueryExecutor(
            repository, PageRequestValidator(max_page_size)
        )
        self._validator = validator or ProductValidator()

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def get_all_products(
        self,
        page: int,
        page_size: int,
        sort: str,
        filter_text: Optional[str]
    ) -> Tuple[ProductResponse, int]:
        """
        List one page of products.

        Args:
            page: Zero-based page index
            page_size: Items per page
            sort: Sort expression ``field[,asc|desc]``
            filter_text: JSON filter object text

        Returns:
            Tuple of (response, total matching products)
        """
        logger.info("Fetching all products from repository")

        try:
            product_filter = ProductFilter.parse(filter_text)
            products, total = self._query_executor.query(
                product_filter, page, page_size, sort
            )
        except AppException as e:
            logger.error(f"Error fetching products: {e.message}")
            return ProductResponse.failure(FETCH_ERROR), 0
        except (SQLAlchemyError, OverflowError):
            logger.exception("Error fetching products")
            return ProductResponse.failure(FETCH_ERROR), 0

        if not products:
            logger.info(NO_PRODUCTS)
            return ProductResponse.failure(NO_PRODUCTS), 0

        usd_rate = self._exchange_rates.fetch_usd_rate()
        views = self._converter.to_views(products, usd_rate)
        logger.info(f"Fetched {len(views)} of {total} products.")
        return ProductResponse.success(views), total

    def get_product(self, product_id: Optional[int]) -> ProductResponse:
        """
        Get a single product by id.

        Args:
            product_id: Product id, must be positive

        Returns:
            Response with one product, or the reason it was not returned
        """
        if product_id is None:
            logger.error(ID_NULL)
            return ProductResponse.failure(ID_NULL)

        if product_id <= 0:
            logger.error(ID_NOT_POSITIVE)
            return ProductResponse.failure(ID_NOT_POSITIVE)

        if product_id > MAX_STORE_INT:
            logger.info(f"Id {product_id} is beyond the stored range")
            return ProductResponse.failure(NO_PRODUCT)

        logger.info(f"Fetching product with ID: {product_id}")

        try:
            product = self._repository.find_by_id(product_id)
        except (SQLAlchemyError, OverflowError):
            logger.exception(f"Error fetching product {product_id}")
            return ProductResponse.failure(FETCH_ERROR)

        if product is None:
            logger.info(NO_PRODUCT)
            return ProductResponse.failure(NO_PRODUCT)

        usd_rate = self._exchange_rates.fetch_usd_rate()
        view = self._converter.to_view(product, usd_rate)
        logger.info("Product found.")
        return ProductResponse.success([view])

    # =========================================================================
    # CREATE OPERATIONS
    # =========================================================================

    def add_product(self, product_view: Optional[ProductView]) -> ProductResponse:
        """
        Create a product.

        The EUR price is rounded to two decimals before saving. The
        returned view echoes the input with the assigned id and the stored
        availability; its ``priceUsd`` is whatever the caller sent.

        Args:
            product_view: Product submitted by the client

        Returns:
            Response echoing the created product, or the errors
        """
        if product_view is None:
            logger.error(PRODUCT_NULL)
            return ProductResponse.failure(PRODUCT_NULL)

        errors = self._validator.validate(product_view)
        if errors:
            logger.error(f"Product rejected: {'; '.join(errors)}")
            return ProductResponse(errors=errors)

        code = product_view.code
        try:
            if self._repository.exists_by_code(code):
                message = f"Product with code {code} already exists."
                logger.error(message)
                return ProductResponse.failure(message)

            logger.info("Adding product to database.")
            created = product_view.model_copy(
                update={"price_eur": round_price(product_view.price_eur)}
            )
            product = self._repository.save(self._converter.to_entity(created))
        except AppException as e:
            logger.error(e.message)
            return ProductResponse.failure(e.message)
        except SQLAlchemyError:
            logger.exception(f"Error adding product {code}")
            return ProductResponse.failure("Error adding product. Please check logs.")

        logger.info(f"✅ Product added: {product.code} (id: {product.id})")
        return ProductResponse.success([
            created.model_copy(update={"id": product.id, "available": product.available})
        ])
