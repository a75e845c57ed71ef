"""Order payment: settlement outcomes applied to the order.

Success arrives as a RecordPaymentSuccess command and may be delivered more
than once; only the first delivery changes the order. Failures are written
straight to the order by the settlement simulator via mark_payment_failed.
"""

from protean import UnitOfWork, handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.order.order import Order
from storefront.shared.errors import InconsistencyError


@storefront.command(part_of="Order")
class RecordPaymentSuccess:
    order_id = Identifier(required=True)
    transaction_id = String(required=True, max_length=255)


def _load_order(repo, order_id):
    order = repo.get_or_none(order_id)
    if order is None:
        logger.error("order_missing_for_settlement", order_id=str(order_id))
        raise InconsistencyError(f"Order {order_id} not found while recording payment outcome")
    return order


@storefront.command_handler(part_of=Order)
class RecordPaymentHandler:
    @handle(RecordPaymentSuccess)
    def record_payment_success(self, command):
        repo = current_domain.repository_for(Order)
        order = _load_order(repo, command.order_id)

        if not order.record_payment_success(command.transaction_id):
            logger.warning(
                "duplicate_payment_success_ignored",
                order_id=str(order.id),
                transaction_id=command.transaction_id,
                recorded_transaction_id=order.payment.transaction_id,
            )
            return False

        repo.add(order)
        logger.info("payment_completed", order_id=str(order.id), transaction_id=command.transaction_id)
        return True


def mark_payment_failed(order_id):
    """Record a declined payment directly on the order, in its own unit of work."""
    with UnitOfWork():
        repo = current_domain.repository_for(Order)
        order = _load_order(repo, order_id)
        if order.record_payment_failure():
            repo.add(order)
            logger.info("payment_failed", order_id=str(order_id))
