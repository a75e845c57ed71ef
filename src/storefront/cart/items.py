"""Cart item management: commands and handler.

Commands are keyed by the owning user; the handler resolves the cart and
checks live stock before mutating it.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartItemQuantity:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get_cart_by_user(command.user_id)
        product = current_domain.repository_for(Product).get(command.product_id)

        existing = cart.item_for_product(product.id)
        already_in_cart = existing.quantity if existing else 0
        product.verify_stock_availability(already_in_cart + command.quantity)

        item = cart.add_item(product_id=product.id, quantity=command.quantity)
        repo.add(cart)
        return str(item.id)

    @handle(UpdateCartItemQuantity)
    def update_cart_item_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get_cart_by_user(command.user_id)
        item = cart.find_item(command.item_id)

        product = current_domain.repository_for(Product).get(item.product_id)
        product.verify_stock_availability(command.quantity)

        cart.update_item_quantity(item_id=command.item_id, new_quantity=command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get_cart_by_user(command.user_id)
        cart.remove_item(item_id=command.item_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get_cart_by_user(command.user_id)
        cart.clear()
        repo.add(cart)
