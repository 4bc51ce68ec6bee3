"""
==============================================================================
Product Query Module
==============================================================================

Filtering, sorting and pagination of the product list.

This module implements:
- ProductFilter: JSON filter text parsed into field/pattern criteria
- SortSpec: ``field[,asc|desc]`` sort expression
- ProductQueryExecutor: Runs filter + sort + page against the repository

Filter Semantics:
----------------
    {"name": "Widget", "code": "P12"}

Each entry means "field contains pattern" (case-sensitive substring);
all entries are combined with AND. ``""`` and ``"{}"`` match every
product, as does an entry whose pattern is empty.

Only the fields in ``FILTERABLE_FIELDS`` may be filtered or sorted on.
Parsing is structural; field names are resolved when the query is
built, so an unknown field fails at query time.

==============================================================================
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy import String, cast
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql import ColumnElement

from app.core import exceptions
from app.db.models import Product
from app.db.repository import ProductRepository
from app.utils.validators import PageRequestValidator


# Module logger
logger = logging.getLogger(__name__)


# =============================================================================
# FIELD ALLOW-LIST
# =============================================================================

def _contains(column: InstrumentedAttribute) -> Callable[[str], ColumnElement]:
    """Substring match on the column's string form."""
    def build(pattern: str) -> ColumnElement:
        target = column if isinstance(column.type, String) else cast(column, String)
        return target.contains(pattern, autoescape=True)
    return build


def _is_flag(column: InstrumentedAttribute) -> Callable[[str], ColumnElement]:
    """Boolean equality for true/false/1/0 patterns."""
    def build(pattern: str) -> ColumnElement:
        normalized = pattern.strip().lower()
        if normalized in ("true", "1"):
            return column.is_(True)
        if normalized in ("false", "0"):
            return column.is_(False)
        raise exceptions.invalid_filter(
            f"'{pattern}' is not a boolean value for '{column.key}'"
        )
    return build


@dataclass(frozen=True)
class ProductField:
    """A product attribute clients may filter and sort on."""

    column: InstrumentedAttribute
    matcher: Callable[[str], ColumnElement]


FILTERABLE_FIELDS: Dict[str, ProductField] = {
    "id": ProductField(Product.id, _contains(Product.id)),
    "code": ProductField(Product.code, _contains(Product.code)),
    "name": ProductField(Product.name, _contains(Product.name)),
    "priceEur": ProductField(Product.price_eur, _contains(Product.price_eur)),
    "price_eur": ProductField(Product.price_eur, _contains(Product.price_eur)),
    "available": ProductField(Product.available, _is_flag(Product.available)),
}


def resolve_field(name: str) -> ProductField:
    """
    Look up a field by its API name.

    Raises:
        AppException: UNKNOWN_FIELD if the name is not filterable
    """
    product_field = FILTERABLE_FIELDS.get(name)
    if product_field is None:
        raise exceptions.unknown_field(name)
    return product_field


# =============================================================================
# FILTER
# =============================================================================

@dataclass
class ProductFilter:
    """
    Parsed filter criteria, mapping field name to substring pattern.

    Example:
        >>> product_filter = ProductFilter.parse('{"name": "Widget"}')
        >>> product_filter.criteria
        {'name': 'Widget'}
    """

    criteria: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, text: Optional[str]) -> "ProductFilter":
        """
        Parse filter JSON text.

        Args:
            text: JSON object text, empty or None for no filter

        Returns:
            ProductFilter with string patterns

        Raises:
            AppException: INVALID_FILTER for malformed JSON or values
        """
        if text is None or not text.strip():
            return cls()

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise exceptions.invalid_filter(f"malformed JSON ({e.msg})")

        if not isinstance(data, dict):
            raise exceptions.invalid_filter("expected a JSON object")

        criteria = {}
        for key, value in data.items():
            if isinstance(value, bool):
                criteria[key] = "true" if value else "false"
            elif isinstance(value, (str, int, float)):
                criteria[key] = str(value)
            else:
                raise exceptions.invalid_filter(
                    f"value for '{key}' must be a string or number"
                )

        return cls(criteria=criteria)

    @property
    def is_empty(self) -> bool:
        """True when the filter constrains nothing."""
        return not self.criteria

    def to_clauses(self) -> List[ColumnElement]:
        """
        Build SQL conditions for every criterion.

        Empty patterns match everything and produce no condition.

        Raises:
            AppException: UNKNOWN_FIELD or INVALID_FILTER
        """
        clauses = []
        for name, pattern in self.criteria.items():
            product_field = resolve_field(name)
            if pattern == "":
                continue
            clauses.append(product_field.matcher(pattern))
        return clauses


# =============================================================================
# SORT
# =============================================================================

@dataclass(frozen=True)
class SortSpec:
    """Single-field sort, ascending unless ``desc`` is given."""

    field_name: str
    descending: bool = False

    @classmethod
    def parse(cls, text: Optional[str]) -> "SortSpec":
        """
        Parse ``field[,asc|desc]``.

        Raises:
            AppException: INVALID_SORT for an empty field or bad direction
        """
        raw = (text or "").strip()
        parts = [part.strip() for part in raw.split(",")]

        if not parts[0]:
            raise exceptions.invalid_sort(raw, "missing field name")

        if len(parts) > 2:
            raise exceptions.invalid_sort(raw, "only one field may be sorted on")

        direction = parts[1].lower() if len(parts) == 2 else "asc"
        if direction not in ("asc", "desc"):
            raise exceptions.invalid_sort(raw, f"unknown direction '{parts[1]}'")

        return cls(field_name=parts[0], descending=direction == "desc")

    def to_order_by(self) -> List[ColumnElement]:
        """
        Build ordering expressions, with ``id`` as a stable tiebreaker.

        Raises:
            AppException: UNKNOWN_FIELD if the sort field is not allowed
        """
        column = resolve_field(self.field_name).column
        primary = column.desc() if self.descending else column.asc()
        if column is Product.id:
            return [primary]
        return [primary, Product.id.asc()]


# =============================================================================
# QUERY EXECUTOR
# =============================================================================

class ProductQueryExecutor:
    """
    Runs filtered, sorted and paginated product queries.

    Example:
        >>> executor = ProductQueryExecutor(ProductRepository(db))
        >>> items, total = executor.query(ProductFilter(), 0, 10, "name")
    """

    def __init__(
        self,
        repository: ProductRepository,
        page_validator: Optional[PageRequestValidator] = None
    ) -> None:
        self._repository = repository
        self._page_validator = page_validator or PageRequestValidator()

    def query(
        self,
        product_filter: ProductFilter,
        page: int,
        page_size: int,
        sort: str
    ) -> Tuple[List[Product], int]:
        """
        Fetch one page of matching products.

        Args:
            product_filter: Parsed filter criteria
            page: Zero-based page index
            page_size: Items per page
            sort: Sort expression ``field[,asc|desc]``

        Returns:
            Tuple of (page items, total matching count)

        Raises:
            AppException: INVALID_PAGE, INVALID_SORT, INVALID_FILTER or UNKNOWN_FIELD
        """
        is_valid, error = self._page_validator.validate(page, page_size)
        if not is_valid:
            raise exceptions.invalid_page(error)

        clauses = product_filter.to_clauses()
        order_by = SortSpec.parse(sort).to_order_by()

        items, total = self._repository.find_page(
            clauses,
            order_by,
            offset=page * page_size,
            limit=page_size,
        )
        logger.debug(f"Product query matched {total} rows, returning {len(items)}")
        return items, total
