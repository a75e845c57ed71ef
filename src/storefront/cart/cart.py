"""Shopping Cart aggregate: one per user, created at registration.

A cart is never deleted while its user exists; checkout only empties it.
Line items are owned by the cart and disappear with it.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.cart.events import CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class ShoppingCart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_empty(self):
        return not self.items

    def item_for_product(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def find_item(self, item_id):
        """Return the item with ``item_id`` or raise ObjectNotFoundError.

        Lookups are scoped to this cart, so another user's item id is
        indistinguishable from a missing one.
        """
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ObjectNotFoundError(f"Cart item {item_id} not found in cart")
        return item

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity):
        """Add a product, merging into the existing line if the product is already in the cart."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        now = datetime.now(UTC)
        existing = self.item_for_product(product_id)

        if existing:
            existing.quantity += quantity
            item = existing
        else:
            item = CartItem(product_id=product_id, quantity=quantity, added_at=now)
            self.add_items(item)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity=item.quantity,
            )
        )
        return item

    def update_item_quantity(self, item_id, new_quantity):
        if new_quantity is None or new_quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        item = self.find_item(item_id)
        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )
        return item

    def remove_item(self, item_id):
        item = self.find_item(item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item_id)))

    def clear(self):
        """Remove every item. The cart itself persists; no event is raised."""
        if self.items:
            self.remove_items(list(self.items))
        self.updated_at = datetime.now(UTC)
