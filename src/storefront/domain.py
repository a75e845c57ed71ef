"""Storefront domain: catalogue, accounts, carts and orders.

A single bounded context: checkout has to verify stock, persist the order
and clear the cart inside one unit of work, so Product, ShoppingCart and
Order live side by side in the same domain.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
