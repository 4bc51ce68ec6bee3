"""
==============================================================================
Product Catalog Endpoints
==============================================================================

Endpoints for listing, reading and creating products.

    GET  /api/products        page, per_page, sort, filter  → 200 | 404
    GET  /api/product/{id}                                  → 200 | 404
    POST /api/product         product JSON body             → 201 | 400

Successful list responses carry the ``totalItems`` header.

==============================================================================
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.core.dependencies import get_product_service
from app.schemas.product import ProductResponse, ProductView
from app.services.product_service import ProductService


# Module logger
logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])

_settings = get_settings()


class ProductController:
    """Controller mapping product service results to HTTP responses."""

    def __init__(self, service: ProductService):
        self._service = service

    @staticmethod
    def _render(response: ProductResponse, status_code: int, headers: Optional[dict] = None) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content=jsonable_encoder(response, by_alias=True),
            headers=headers,
        )

    def list_products(self, page: int, per_page: int, sort: str, filter_text: str) -> JSONResponse:
        """List products; errors map to 404."""
        response, total = self._service.get_all_products(page, per_page, sort, filter_text)

        if not response.is_success:
            return self._render(response, status.HTTP_404_NOT_FOUND)

        return self._render(response, status.HTTP_200_OK, {"totalItems": str(total)})

    def get_product(self, product_id: int) -> JSONResponse:
        """Get one product; errors map to 404."""
        response = self._service.get_product(product_id)

        if not response.is_success:
            return self._render(response, status.HTTP_404_NOT_FOUND)
        return self._render(response, status.HTTP_200_OK)

    def add_product(self, product: Optional[ProductView]) -> JSONResponse:
        """Create a product; errors map to 400."""
        response = self._service.add_product(product)

        if not response.is_success:
            return self._render(response, status.HTTP_400_BAD_REQUEST)
        return self._render(response, status.HTTP_201_CREATED)


@router.get("/products", response_model=ProductResponse)
def list_products(
    page: int = Query(0),
    per_page: int = Query(_settings.default_page_size),
    sort: str = Query(_settings.default_sort),
    filter: str = Query("{}"),
    service: ProductService = Depends(get_product_service)
):
    """List products with filtering, sorting and pagination."""
    logger.info("Initiating GET ALL PRODUCTS request")
    controller = ProductController(service)
    return controller.list_products(page, per_page, sort, filter)


@router.get("/product/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    """Get a product by id, with its USD price."""
    logger.info(f"Processing GET PRODUCT request for ID: {product_id}")
    controller = ProductController(service)
    return controller.get_product(product_id)


@router.post("/product", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def add_product(
    product: Optional[ProductView] = Body(None),
    service: ProductService = Depends(get_product_service)
):
    """Create a product."""
    logger.info(f"Received POST request for new product: {product.name if product else None}")
    controller = ProductController(service)
    return controller.add_product(product)
