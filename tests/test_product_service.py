"""
==============================================================================
Product Service Tests
==============================================================================

Tests for the list, get and create operations.

==============================================================================
"""

from typing import List
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.db.models import Product
from app.db.repository import ProductRepository
from app.schemas.product import ProductView
from app.services.product_service import ProductService


@pytest.fixture
def repository() -> MagicMock:
    """Repository mock for asserting the store is not touched."""
    return MagicMock(spec=ProductRepository)


@pytest.fixture
def mocked_service(repository: MagicMock, exchange_rates) -> ProductService:
    """Service over a mocked repository."""
    return ProductService(repository, exchange_rates)


def valid_view(**overrides) -> ProductView:
    data = {"code": "N000000001", "name": "New Lamp", "price_eur": 12.345, "available": True}
    data.update(overrides)
    return ProductView(**data)


class TestGetProduct:
    """Tests for ProductService.get_product."""

    @pytest.mark.parametrize("product_id, message", [
        (None, "Id is null."),
        (0, "Id must be a positive number"),
        (-7, "Id must be a positive number"),
    ])
    def test_invalid_id_never_touches_store(
        self, mocked_service: ProductService, repository: MagicMock, exchange_rates, product_id, message
    ):
        """Test invalid ids are rejected before any lookup."""
        response = mocked_service.get_product(product_id)
        assert response.errors == [message]
        assert response.products == []
        repository.find_by_id.assert_not_called()
        assert exchange_rates.calls == 0

    def test_existing_product(self, product_service: ProductService, premium_widget: Product, exchange_rates):
        """Test USD price uses the rate fetched for the call."""
        response = product_service.get_product(premium_widget.id)
        assert response.is_success
        assert len(response.products) == 1
        assert response.products[0].price_usd == 199.98
        assert exchange_rates.calls == 1

    def test_missing_product(self, product_service: ProductService, exchange_rates):
        """Test absent id reports not found without fetching a rate."""
        response = product_service.get_product(42)
        assert response.errors == ["No product found."]
        assert exchange_rates.calls == 0

    @pytest.mark.parametrize("product_id", [2 ** 63, 10 ** 20])
    def test_id_beyond_stored_range(
        self, mocked_service: ProductService, repository: MagicMock, exchange_rates, product_id
    ):
        """Test ids too large for the store are not found without a lookup."""
        response = mocked_service.get_product(product_id)
        assert response.errors == ["No product found."]
        repository.find_by_id.assert_not_called()
        assert exchange_rates.calls == 0

    def test_largest_stored_id(self, product_service: ProductService):
        """Test the largest storable id is looked up normally."""
        response = product_service.get_product(2 ** 63 - 1)
        assert response.errors == ["No product found."]

    def test_lookup_overflow(self, mocked_service: ProductService, repository: MagicMock):
        """Test driver overflow is absorbed into the generic error."""
        repository.find_by_id.side_effect = OverflowError("Python int too large to convert to SQLite INTEGER")
        response = mocked_service.get_product(5)
        assert response.errors == ["Error fetching products. Please check logs."]


class TestGetAllProducts:
    """Tests for ProductService.get_all_products."""

    def test_rate_fetched_once_per_list(self, product_service: ProductService, catalog: List[Product], exchange_rates):
        """Test one rate serves every item of the page."""
        response, total = product_service.get_all_products(0, 10, "name", "{}")
        assert response.is_success
        assert total == len(catalog)
        assert exchange_rates.calls == 1
        for view in response.products:
            assert view.price_usd == round(view.price_eur * 2.0, 2)

    def test_unfiltered_total_matches_store(self, product_service: ProductService, catalog: List[Product], db: Session):
        """Test the total equals the store cardinality across pages."""
        response, total = product_service.get_all_products(1, 3, "name", "")
        assert total == db.query(Product).count()
        assert len(response.products) == 1

    def test_no_products(self, product_service: ProductService, exchange_rates):
        """Test an empty result is reported as not found."""
        response, total = product_service.get_all_products(0, 10, "name", "{}")
        assert response.errors == ["No products found."]
        assert total == 0
        assert exchange_rates.calls == 0

    def test_filter_error(self, product_service: ProductService, catalog: List[Product]):
        """Test a bad filter yields the generic error and zero total."""
        response, total = product_service.get_all_products(0, 10, "name", "not json")
        assert response.errors == ["Error fetching products. Please check logs."]
        assert response.products == []
        assert total == 0

    def test_unknown_sort_field(self, product_service: ProductService, catalog: List[Product]):
        """Test sorting by an unknown field fails."""
        response, total = product_service.get_all_products(0, 10, "colour", "{}")
        assert response.errors == ["Error fetching products. Please check logs."]
        assert total == 0

    def test_page_offset_beyond_stored_range(self, product_service: ProductService, catalog: List[Product]):
        """Test an offset too large for the store fails as a bad page."""
        response, total = product_service.get_all_products(10 ** 19, 10, "name", "{}")
        assert response.errors == ["Error fetching products. Please check logs."]
        assert total == 0

    def test_store_overflow(self, mocked_service: ProductService, repository: MagicMock):
        """Test driver overflow is absorbed into the generic error."""
        repository.find_page.side_effect = OverflowError("Python int too large to convert to SQLite INTEGER")
        response, total = mocked_service.get_all_products(0, 10, "name", "{}")
        assert response.errors == ["Error fetching products. Please check logs."]
        assert total == 0

    def test_store_failure(self, mocked_service: ProductService, repository: MagicMock):
        """Test database errors are absorbed into the generic error."""
        repository.find_page.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
        response, total = mocked_service.get_all_products(0, 10, "name", "{}")
        assert response.errors == ["Error fetching products. Please check logs."]
        assert total == 0


class TestAddProduct:
    """Tests for ProductService.add_product."""

    def test_null_product(self, mocked_service: ProductService, repository: MagicMock):
        """Test a null product performs no write."""
        response = mocked_service.add_product(None)
        assert response.errors == ["Product is null."]
        repository.exists_by_code.assert_not_called()
        repository.save.assert_not_called()

    def test_invalid_product(self, mocked_service: ProductService, repository: MagicMock):
        """Test rule violations stop before the store."""
        response = mocked_service.add_product(valid_view(code=None, price_eur=None))
        assert response.errors == ["Product code is required", "Product price is required"]
        repository.exists_by_code.assert_not_called()
        repository.save.assert_not_called()

    def test_duplicate_code(self, mocked_service: ProductService, repository: MagicMock):
        """Test an existing code is a conflict with no write."""
        repository.exists_by_code.return_value = True
        response = mocked_service.add_product(valid_view(code="P123456789"))
        assert response.errors == ["Product with code P123456789 already exists."]
        repository.save.assert_not_called()

    def test_duplicate_code_is_case_sensitive(self, product_service: ProductService, premium_widget: Product):
        """Test codes differing only in case are distinct."""
        response = product_service.add_product(valid_view(code="p123456789"))
        assert response.is_success

    def test_add_rounds_and_persists(self, product_service: ProductService, db: Session):
        """Test the EUR price is rounded before saving."""
        response = product_service.add_product(valid_view(price_usd=3.0))
        assert response.is_success
        created = response.products[0]
        assert created.price_eur == 12.35
        assert created.price_usd == 3.0

        stored = db.get(Product, created.id)
        assert stored.code == "N000000001"
        assert stored.price_eur == 12.35
        assert stored.available is True

    def test_unique_constraint_backs_up_existence_check(self, db: Session, premium_widget: Product, exchange_rates):
        """Test a race past the existence check still reports the conflict."""

        class RacingRepository(ProductRepository):
            def exists_by_code(self, code: str) -> bool:
                return False

        service = ProductService(RacingRepository(db), exchange_rates)
        response = service.add_product(valid_view(code="P123456789"))
        assert response.errors == ["Product with code P123456789 already exists."]
        assert db.query(Product).count() == 1

    def test_add_echoes_stored_availability(self, product_service: ProductService, db: Session):
        """Test omitted availability is echoed as the stored default."""
        response = product_service.add_product(valid_view(available=None))
        assert response.is_success
        created = response.products[0]
        assert created.available is False
        assert db.get(Product, created.id).available is False
