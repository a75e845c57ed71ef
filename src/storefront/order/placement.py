"""Order placement: converts the user's cart into an order.

Stock checks, order persistence and cart clearing share the handler's unit
of work: if any step raises, nothing is written and the cart keeps its items.
Payment settlement is kicked off by OrderPlaced after the commit.
"""

from protean import handle
from protean.fields import Dict, Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.order.order import Order
from storefront.payment.details import PaymentMethod
from storefront.shared.errors import EmptyCartError


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    shipping_address = Dict(required=True)
    billing_address = Dict(required=True)
    payment_method = String(required=True, choices=PaymentMethod, max_length=50)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        product_repo = current_domain.repository_for(Product)

        cart = cart_repo.get_cart_by_user(command.user_id)
        if cart.is_empty:
            raise EmptyCartError(command.user_id)

        order = Order.place(
            user_id=command.user_id,
            shipping_address=command.shipping_address,
            billing_address=command.billing_address,
            payment_method=command.payment_method,
        )

        # First item short on stock aborts the whole order
        for cart_item in cart.items:
            product = product_repo.get(cart_item.product_id)
            product.verify_stock_availability(cart_item.quantity)
            order.add_line_item(product, cart_item.quantity)

        order.confirm_placement()
        current_domain.repository_for(Order).add(order)

        cart.clear()
        cart_repo.add(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            user_id=str(order.user_id),
            total_amount=str(order.total_amount),
            item_count=len(order.items),
        )
        return str(order.id)
