"""Repository for the ShoppingCart aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.cart.cart import ShoppingCart
from storefront.domain import logger, storefront
from storefront.shared.errors import InconsistencyError


@storefront.repository(part_of=ShoppingCart)
class CartRepository:
    def get_cart_by_user(self, user_id) -> ShoppingCart:
        """Return the user's cart.

        Every registered user has a cart, so a miss is a server fault and
        not a normal not-found.
        """
        try:
            return self.find_by(user_id=str(user_id))
        except ObjectNotFoundError as exc:
            logger.error("cart_missing_for_user", user_id=str(user_id))
            raise InconsistencyError(f"Shopping cart not found for user {user_id}") from exc

    def delete_by_user(self, user_id) -> None:
        """Delete the user's cart and its items. A user without a cart is a no-op."""
        try:
            cart = self.find_by(user_id=str(user_id))
        except ObjectNotFoundError:
            return

        cart.clear()
        self.add(cart)
        self._dao.delete(cart)
