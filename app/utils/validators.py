"""
==============================================================================
Validation Utilities Module
==============================================================================

Validation classes for input data.

This module implements:
- ProductValidator: Validates products submitted for creation
- PageRequestValidator: Validates list pagination parameters

Validation Rules for Products:
-----------------------------
- Code: required, exactly 10 characters, letters and digits only
- Name: required, not blank
- Price (EUR): required, greater than zero

==============================================================================
"""

from __future__ import annotations

import math
import re
from typing import List, Optional, Tuple

from app.schemas.product import ProductView


# Largest value a stored integer (ids, offsets) can hold
MAX_STORE_INT = 2 ** 63 - 1


class ProductValidator:
    """
    Validator for new products.

    Collects every rule violation instead of stopping at the first one.

    Example:
        >>> validator = ProductValidator()
        >>> validator.validate(ProductView(code="ABC", name="Lamp", priceEur=5))
        ['Product code must be 10 characters long']
    """

    CODE_LENGTH = 10
    CODE_PATTERN = re.compile(r"^[A-Za-z0-9]+$")

    def validate(self, product: ProductView) -> List[str]:
        """
        Validate a product submitted for creation.

        Args:
            product: Product view received from the client

        Returns:
            List of error messages, empty when the product is valid
        """
        errors: List[str] = []
        errors.extend(self._validate_code(product.code))

        if product.name is None or not product.name.strip():
            errors.append("Product name is required")

        if product.price_eur is None:
            errors.append("Product price is required")
        elif not math.isfinite(product.price_eur) or product.price_eur <= 0:
            errors.append("Product price must be a positive number")

        return errors

    def _validate_code(self, code: Optional[str]) -> List[str]:
        if code is None or not code.strip():
            return ["Product code is required"]

        errors = []
        if len(code) != self.CODE_LENGTH:
            errors.append(f"Product code must be {self.CODE_LENGTH} characters long")
        if not self.CODE_PATTERN.match(code):
            errors.append("Product code must be alphanumeric")
        return errors


class PageRequestValidator:
    """
    Validator for list pagination parameters.

    Out-of-range values are rejected rather than clamped so the
    reported total and page metadata stay trustworthy.
    """

    def __init__(self, max_page_size: int = 100) -> None:
        self.max_page_size = max_page_size

    def validate(self, page: int, page_size: int) -> Tuple[bool, Optional[str]]:
        """
        Validate a page index and page size.

        Args:
            page: Zero-based page index
            page_size: Number of items per page

        Returns:
            Tuple of (is_valid, error_message)
        """
        if page is None or page < 0:
            return False, "Page index must be zero or greater"

        if page_size is None or page_size < 1:
            return False, "Page size must be at least 1"

        if page_size > self.max_page_size:
            return False, f"Page size cannot exceed {self.max_page_size}"

        if page * page_size > MAX_STORE_INT:
            return False, "Page index is out of range"

        return True, None
