"""
==============================================================================
API Endpoints
==============================================================================

Routers:
--------
- products: Product catalog list/get/create
- health: Health check endpoints

==============================================================================
"""

from . import health, products

__all__ = ["health", "products"]
