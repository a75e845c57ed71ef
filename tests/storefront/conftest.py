from concurrent.futures import Future
from decimal import Decimal

import pytest
from protean.integrations.pytest import DomainFixture


class RecordingSimulator:
    """Settlement stand-in that records hand-offs instead of settling."""

    def __init__(self):
        self.submissions = []

    def submit(self, order_id, total_amount, payment_method=None):
        self.submissions.append(
            {
                "order_id": str(order_id),
                "total_amount": total_amount,
                "payment_method": payment_method,
            }
        )
        future = Future()
        future.set_result(None)
        return future

    def shutdown(self, wait=True):
        pass


class InlineExecutor:
    """Runs submitted work immediately on the calling thread."""

    def __init__(self):
        self.calls = 0

    def submit(self, fn, *args, **kwargs):
        self.calls += 1
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future

    def shutdown(self, wait=True):
        pass


class FixedRandom:
    """Deterministic stand-in for random.Random."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value

    def uniform(self, a, b):
        return a


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def settlement_recorder():
    from storefront.payment.simulator import reset_simulator, set_simulator

    recorder = RecordingSimulator()
    set_simulator(recorder)
    yield recorder
    reset_simulator()


@pytest.fixture()
def inline_simulator():
    """A real simulator with no delay that settles on the calling thread."""
    from storefront.domain import storefront
    from storefront.payment.simulator import SettlementSimulator

    def _make(outcome_roll=0.0):
        return SettlementSimulator(
            domain=storefront,
            rng=FixedRandom(outcome_roll),
            sleep=lambda seconds: None,
            executor=InlineExecutor(),
        )

    return _make


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------
ADDRESS = {
    "street": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "postal_code": "62701",
    "country": "US",
}


@pytest.fixture()
def address():
    return dict(ADDRESS)


@pytest.fixture()
def register_user():
    from protean import current_domain

    from storefront.identity.passwords import hash_password
    from storefront.identity.registration import RegisterUser
    from storefront.identity.user import Role

    def _register(email="jane@example.com", password="s3cret", name="Jane Doe", role=Role.USER):
        return current_domain.process(
            RegisterUser(
                name=name,
                email=email,
                password_hash=hash_password(password, iterations=1000),
                role=role.value,
            ),
            asynchronous=False,
        )

    return _register


@pytest.fixture()
def add_product():
    from protean import current_domain

    from storefront.catalogue.management import AddProduct

    def _add(name="Widget", price="100.00", stock_quantity=10, **extra):
        return current_domain.process(
            AddProduct(name=name, price=Decimal(price), stock_quantity=stock_quantity, **extra),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def add_to_cart():
    from protean import current_domain

    from storefront.cart.items import AddToCart

    def _add(user_id, product_id, quantity=1):
        return current_domain.process(
            AddToCart(user_id=user_id, product_id=product_id, quantity=quantity),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def place_order(address):
    from protean import current_domain

    from storefront.order.placement import PlaceOrder

    def _place(user_id, payment_method="CREDIT_CARD"):
        return current_domain.process(
            PlaceOrder(
                user_id=user_id,
                shipping_address=address,
                billing_address=address,
                payment_method=payment_method,
            ),
            asynchronous=False,
        )

    return _place
