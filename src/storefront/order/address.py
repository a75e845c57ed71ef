"""Postal address captured at checkout."""

from protean.fields import String

from storefront.domain import storefront


@storefront.value_object(part_of="Order")
class Address:
    """A shipping or billing address captured at checkout time."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
