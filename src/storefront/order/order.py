"""Order aggregate: an immutable purchase snapshot with a payment sub-state.

Line items are frozen copies of product data taken at checkout; they are
never re-derived from the live catalogue. The total is recomputed from the
line items whenever they change.

State Machine:
    PENDING_PAYMENT → PROCESSING → SHIPPED → DELIVERED
    PENDING_PAYMENT/PROCESSING → CANCELLED

A declined payment leaves the order in PENDING_PAYMENT; nothing here moves
it to CANCELLED automatically.
"""

import decimal
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change
from protean.exceptions import ValidationError
from protean.fields import DateTime, Decimal, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.order.address import Address
from storefront.order.events import OrderPlaced, PaymentCompleted, PaymentFailed
from storefront.payment.details import PaymentDetails, PaymentMethod, PaymentStatus


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING_PAYMENT = "PENDING_PAYMENT"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING_PAYMENT: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

ZERO = decimal.Decimal("0.00")


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A frozen record of one product's name, price and quantity within an order."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit_price = Decimal(required=True, min_value=0, precision=12, scale=2)
    quantity = Integer(required=True, min_value=1)

    @property
    def subtotal(self):
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING_PAYMENT.value,
    )
    items = HasMany(OrderItem)
    total_amount = Decimal(default=ZERO, precision=14, scale=2)
    shipping_address = ValueObject(Address)
    payment = ValueObject(PaymentDetails)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, shipping_address, billing_address, payment_method):
        """Start a new order awaiting payment.

        Args:
            user_id: The owning user.
            shipping_address: Dict with street, city, state, postal_code, country.
            billing_address: Dict with the same keys; kept on the payment details.
            payment_method: A PaymentMethod value.
        """
        now = datetime.now(UTC)
        return cls(
            user_id=user_id,
            status=OrderStatus.PENDING_PAYMENT.value,
            shipping_address=Address(**shipping_address),
            payment=PaymentDetails(
                method=PaymentMethod(payment_method).value,
                status=PaymentStatus.PENDING.value,
                billing_address=Address(**billing_address),
            ),
            total_amount=ZERO,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def _recalculate_total(self):
        self.total_amount = sum((item.subtotal for item in self.items), ZERO)

    def _assert_items_editable(self):
        if OrderStatus(self.status) != OrderStatus.PENDING_PAYMENT:
            raise ValidationError({"status": ["Line items can only change while payment is pending"]})

    # -------------------------------------------------------------------
    # Line items
    # -------------------------------------------------------------------
    def add_line_item(self, product, quantity):
        """Snapshot ``product`` at its current name and price."""
        self._assert_items_editable()

        item = OrderItem(
            product_id=product.id,
            product_name=product.name,
            unit_price=product.price,
            quantity=quantity,
        )
        with atomic_change(self):
            self.add_items(item)
            self._recalculate_total()
            self.updated_at = datetime.now(UTC)
        return item

    def remove_line_item(self, item_id):
        self._assert_items_editable()

        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in order"]})

        with atomic_change(self):
            self.remove_items(item)
            self._recalculate_total()
            self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Placement
    # -------------------------------------------------------------------
    def confirm_placement(self):
        """Announce the order once all line items are attached."""
        self.raise_(
            OrderPlaced(
                order_id=str(self.id),
                user_id=str(self.user_id),
                total_amount=self.total_amount,
                payment_method=self.payment.method,
                item_count=len(self.items),
                placed_at=self.created_at,
            )
        )

    # -------------------------------------------------------------------
    # Payment settlement
    # -------------------------------------------------------------------
    @property
    def is_paid(self):
        return self.payment is not None and self.payment.status == PaymentStatus.COMPLETED.value

    def record_payment_success(self, transaction_id):
        """Mark the payment completed and start processing.

        Returns False, changing nothing, when the payment is already
        completed, so repeated success notifications keep the first
        transaction id.
        """
        if self.is_paid:
            return False

        self._assert_can_transition(OrderStatus.PROCESSING)

        now = datetime.now(UTC)
        self.payment = PaymentDetails(
            method=self.payment.method,
            status=PaymentStatus.COMPLETED.value,
            transaction_id=transaction_id,
            settled_at=now,
            billing_address=self.payment.billing_address,
        )
        self.status = OrderStatus.PROCESSING.value
        self.updated_at = now

        self.raise_(
            PaymentCompleted(
                order_id=str(self.id),
                transaction_id=transaction_id,
                settled_at=now,
            )
        )
        return True

    def record_payment_failure(self):
        """Mark the payment failed. The order status is left untouched."""
        if self.is_paid:
            raise ValidationError({"payment": ["A completed payment cannot be marked as failed"]})
        if self.payment.status == PaymentStatus.FAILED.value:
            return False

        now = datetime.now(UTC)
        self.payment = PaymentDetails(
            method=self.payment.method,
            status=PaymentStatus.FAILED.value,
            settled_at=now,
            billing_address=self.payment.billing_address,
        )
        self.updated_at = now

        self.raise_(PaymentFailed(order_id=str(self.id), failed_at=now))
        return True
