"""Product aggregate: the catalogue entry that carts and orders point at.

Stock is a plain counter. Order placement only reads it through
``verify_stock_availability``; nothing in the storefront reserves or
decrements it.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Decimal, Integer, String, Text

from storefront.catalogue.events import ProductAdded, ProductUpdated
from storefront.domain import storefront
from storefront.shared.errors import InsufficientStockError


@storefront.aggregate
class Product:
    name: String(required=True, max_length=255)
    description: Text()
    price: Decimal(required=True, min_value=0, precision=12, scale=2)
    stock_quantity: Integer(required=True, min_value=0, default=0)
    image_url: String(max_length=1024)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Product name cannot be blank"]})

    @classmethod
    def create(cls, name, price, stock_quantity, description=None, image_url=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=price,
            stock_quantity=stock_quantity,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                stock_quantity=product.stock_quantity,
                added_at=now,
            )
        )
        return product

    def update_details(self, name, price, stock_quantity, description=None, image_url=None):
        """Replace every editable field, mirroring a full PUT of the product."""
        previous_price = self.price
        now = datetime.now(UTC)

        self.name = name
        self.description = description
        self.price = price
        self.stock_quantity = stock_quantity
        self.image_url = image_url
        self.updated_at = now

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name=self.name,
                previous_price=previous_price,
                new_price=self.price,
                stock_quantity=self.stock_quantity,
                updated_at=now,
            )
        )

    def verify_stock_availability(self, quantity):
        """Raise InsufficientStockError when fewer than ``quantity`` units are in stock."""
        if self.stock_quantity < quantity:
            raise InsufficientStockError(
                product_id=self.id,
                product_name=self.name,
                requested=quantity,
                available=self.stock_quantity,
            )
