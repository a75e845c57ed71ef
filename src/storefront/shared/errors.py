"""Domain errors shared across the storefront.

EmptyCartError and InsufficientStockError are user-facing and subclass
Protean's ValidationError, so the API maps them to 400. InconsistencyError
signals a bug (a record that must exist is gone) and is left to surface as a
server fault.
"""

from protean.exceptions import ProteanException, ValidationError


class EmptyCartError(ValidationError):
    def __init__(self, user_id):
        self.user_id = str(user_id)
        super().__init__({"cart": ["Cannot create order from an empty cart"]})


class InsufficientStockError(ValidationError):
    """Requested quantity exceeds the live stock of a product."""

    def __init__(self, product_id, product_name, requested, available):
        self.product_id = str(product_id)
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            {
                "stock": [
                    f"Insufficient stock for product: {product_name}. "
                    f"Available: {available}, Requested: {requested}"
                ]
            }
        )


class InconsistencyError(ProteanException):
    """A record that must exist is missing. Never retried."""
