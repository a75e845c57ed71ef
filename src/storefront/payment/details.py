"""Payment details embedded in an Order."""

from enum import Enum

from protean.fields import DateTime, String, ValueObject

from storefront.domain import storefront
from storefront.order.address import Address


class PaymentMethod(Enum):
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    PAYPAL = "PAYPAL"
    BANK_TRANSFER = "BANK_TRANSFER"
    UNKNOWN = "UNKNOWN"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


@storefront.value_object(part_of="Order")
class PaymentDetails:
    """How an order is paid for and where settlement stands.

    Starts PENDING when the order is placed and is settled exactly once,
    to COMPLETED (with a gateway transaction id) or FAILED. Replaced
    wholesale on every change; the billing address is carried across.
    """

    method = String(required=True, choices=PaymentMethod, default=PaymentMethod.UNKNOWN.value)
    status = String(required=True, choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    transaction_id = String(max_length=255)
    settled_at = DateTime()
    billing_address = ValueObject(Address)
