"""Payment settlement simulator: stands in for a real payment gateway.

Each placed order gets exactly one settlement attempt on a worker thread:
wait a random 2-4 seconds, then approve with a probability that drops for
high-value orders. Approvals go through the order's idempotent
RecordPaymentSuccess handler; declines and any error on the way are written
straight to the order as a failed payment. Nothing raised here ever reaches
the request that placed the order.

Provides get_simulator() / set_simulator() to swap implementations, the same
way tests swap in a recording stub.
"""

import decimal
import random
import time
from concurrent.futures import Future, ThreadPoolExecutor
from uuid import uuid4

from protean.domain import Domain
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.order.payment import RecordPaymentSuccess, mark_payment_failed


class SettlementSimulator:
    def __init__(
        self,
        domain: Domain,
        min_delay: float = 2,
        max_delay: float = 4,
        threshold: decimal.Decimal | str = "500.00",
        high_value_success_rate: float = 0.7,
        standard_success_rate: float = 0.9,
        workers: int = 4,
        rng: random.Random | None = None,
        sleep=time.sleep,
        executor=None,
    ) -> None:
        if min_delay > max_delay:
            raise ValueError(f"min_delay ({min_delay}) exceeds max_delay ({max_delay})")

        self.domain = domain
        self.min_delay = min_delay
        self.max_delay = max_delay
        self.threshold = decimal.Decimal(str(threshold))
        self.high_value_success_rate = high_value_success_rate
        self.standard_success_rate = standard_success_rate
        self._rng = rng or random.Random()
        self._sleep = sleep
        self._executor = executor or ThreadPoolExecutor(max_workers=workers, thread_name_prefix="settlement")

    @classmethod
    def from_domain(cls, domain: Domain) -> "SettlementSimulator":
        """Build a simulator from the domain's ``[custom]`` settings."""
        return cls(
            domain=domain,
            min_delay=domain.SETTLEMENT_MIN_DELAY_SECONDS,
            max_delay=domain.SETTLEMENT_MAX_DELAY_SECONDS,
            threshold=domain.SETTLEMENT_HIGH_VALUE_THRESHOLD,
            high_value_success_rate=domain.SETTLEMENT_HIGH_VALUE_SUCCESS_RATE,
            standard_success_rate=domain.SETTLEMENT_STANDARD_SUCCESS_RATE,
            workers=domain.SETTLEMENT_WORKERS,
        )

    # -------------------------------------------------------------------
    # Outcome model
    # -------------------------------------------------------------------
    def delay_for(self) -> float:
        return self._rng.uniform(self.min_delay, self.max_delay)

    def success_probability(self, amount) -> float:
        if decimal.Decimal(str(amount)) > self.threshold:
            return self.high_value_success_rate
        return self.standard_success_rate

    def decide(self, amount) -> bool:
        return self._rng.random() < self.success_probability(amount)

    @staticmethod
    def transaction_id_for(order_id) -> str:
        """Synthetic gateway reference, unique per call even within one millisecond."""
        return f"MOCK_TXN_{int(time.time() * 1000)}_{order_id}_{uuid4().hex[:8]}"

    # -------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------
    def submit(self, order_id, total_amount, payment_method=None) -> Future:
        """Queue one settlement attempt and return without waiting for it."""
        logger.info(
            "settlement_submitted",
            order_id=str(order_id),
            total_amount=str(total_amount),
            payment_method=payment_method,
        )
        return self._executor.submit(self.settle, str(order_id), total_amount, payment_method)

    def settle(self, order_id, total_amount, payment_method=None) -> bool:
        """Run a single settlement attempt. Returns True when the payment was approved."""
        with self.domain.domain_context():
            try:
                delay = self.delay_for()
                logger.debug("settlement_started", order_id=order_id, delay_seconds=round(delay, 3))
                self._sleep(delay)

                if self.decide(total_amount):
                    transaction_id = self.transaction_id_for(order_id)
                    current_domain.process(
                        RecordPaymentSuccess(order_id=order_id, transaction_id=transaction_id),
                        asynchronous=False,
                    )
                    logger.info("settlement_approved", order_id=order_id, transaction_id=transaction_id)
                    return True

                logger.info(
                    "settlement_declined",
                    order_id=order_id,
                    total_amount=str(total_amount),
                    payment_method=payment_method,
                )
            except Exception:
                logger.exception("settlement_error", order_id=order_id)

            self._record_failure(order_id)
            return False

    def _record_failure(self, order_id) -> None:
        try:
            mark_payment_failed(order_id)
        except Exception:
            logger.exception("settlement_failure_not_recorded", order_id=order_id)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------
_current_simulator: SettlementSimulator | None = None


def get_simulator() -> SettlementSimulator:
    """Return the active simulator, building one from domain settings on first use."""
    global _current_simulator
    if _current_simulator is None:
        _current_simulator = SettlementSimulator.from_domain(storefront)
    return _current_simulator


def set_simulator(simulator) -> None:
    """Override the active simulator (useful for tests)."""
    global _current_simulator
    _current_simulator = simulator


def reset_simulator(wait: bool = False) -> None:
    """Shut down and forget the active simulator."""
    global _current_simulator
    if _current_simulator is not None:
        _current_simulator.shutdown(wait=wait)
    _current_simulator = None
