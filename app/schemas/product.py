"""
==============================================================================
Product Schemas Module
==============================================================================

API-facing product projection and the uniform product response.

Wire format uses camelCase (``priceEur``, ``priceUsd``); Python code
uses snake_case attribute names.

==============================================================================
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ProductView(BaseModel):
    """
    Product as seen by API clients.

    All fields are optional here; business rules for new products are
    checked by ``ProductValidator`` so they can be reported as a list of
    error messages.

    ``price_usd`` is derived from ``price_eur`` on every read and is
    never stored.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    code: Optional[str] = None
    name: Optional[str] = None
    price_eur: Optional[float] = Field(default=None, alias="priceEur")
    price_usd: Optional[float] = Field(default=None, alias="priceUsd")
    available: Optional[bool] = None


class ProductResponse(BaseModel):
    """
    Operation result shared by every product endpoint.

    Exactly one side is meaningful: ``errors`` on failure, ``products``
    on success.
    """

    errors: List[str] = Field(default_factory=list)
    products: List[ProductView] = Field(default_factory=list)

    @classmethod
    def failure(cls, *errors: str) -> "ProductResponse":
        """Create a failed result carrying the given messages."""
        return cls(errors=list(errors))

    @classmethod
    def success(cls, products: List[ProductView]) -> "ProductResponse":
        """Create a successful result carrying the given products."""
        return cls(products=list(products))

    @property
    def is_success(self) -> bool:
        """True when no errors were recorded."""
        return not self.errors
