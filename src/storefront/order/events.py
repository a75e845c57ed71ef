"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Decimal, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A cart was converted into an order awaiting payment settlement."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    total_amount = Decimal(required=True)
    payment_method = String(required=True, max_length=50)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentCompleted:
    """Settlement succeeded; the order moved to Processing."""

    __version__ = 1

    order_id = Identifier(required=True)
    transaction_id = String(required=True, max_length=255)
    settled_at = DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentFailed:
    """Settlement was declined. The order stays in Pending Payment."""

    __version__ = 1

    order_id = Identifier(required=True)
    failed_at = DateTime(required=True)
