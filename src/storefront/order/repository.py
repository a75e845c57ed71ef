"""Repository for the Order aggregate.

Owner-scoped lookups never distinguish "missing" from "belongs to someone
else"; both come back as None.
"""

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_id_and_user(self, order_id, user_id) -> Order | None:
        order = self.get_or_none(order_id)
        if order is None or str(order.user_id) != str(user_id):
            return None
        return order

    def find_all_by_user(self, user_id) -> list[Order]:
        """All of a user's orders, newest first."""
        return self.query.filter(user_id=str(user_id)).order_by("-created_at").limit(None).all().items
