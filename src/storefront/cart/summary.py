"""Cart read model: line items priced against the live catalogue."""

from decimal import Decimal

from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product


def summarize_cart(user_id):
    cart = current_domain.repository_for(ShoppingCart).get_cart_by_user(user_id)
    product_repo = current_domain.repository_for(Product)

    lines = []
    total = Decimal("0")
    for item in cart.items:
        product = product_repo.get_or_none(item.product_id)
        # Products deleted after being carted price at zero until removed
        price = product.price if product else Decimal("0")
        subtotal = price * item.quantity
        total += subtotal
        lines.append(
            {
                "id": str(item.id),
                "product_id": str(item.product_id),
                "product_name": product.name if product else None,
                "quantity": item.quantity,
                "price": price,
                "subtotal": subtotal,
            }
        )

    return {"cart_id": str(cart.id), "items": lines, "total_price": total}
