"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Decimal, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was listed in the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    price: Decimal(required=True)
    stock_quantity: Integer(required=True)
    added_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """A product's details, price or stock level were replaced."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    previous_price: Decimal(required=True)
    new_price: Decimal(required=True)
    stock_quantity: Integer(required=True)
    updated_at: DateTime(required=True)

