"""Hands placed orders to the settlement simulator.

Runs after the placing unit of work has committed, so settlement never sees
an order that could still roll back.
"""

from protean import handle

from storefront.domain import storefront
from storefront.order.events import OrderPlaced
from storefront.order.order import Order
from storefront.payment.simulator import get_simulator


@storefront.event_handler(part_of=Order)
class SettlementDispatchHandler:
    @handle(OrderPlaced)
    def start_settlement(self, event):
        get_simulator().submit(
            order_id=event.order_id,
            total_amount=event.total_amount,
            payment_method=event.payment_method,
        )
