"""Integration tests for checkout and order history endpoints."""

from decimal import Decimal

from protean import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.identity.user import User

PREFIX = "/api/v1"


def _order_body(address, payment_method="CREDIT_CARD"):
    return {
        "shipping_address": address,
        "billing_address": {**address, "street": "9 Billing Rd"},
        "payment_method": payment_method,
    }


def _checkout(client, auth, address, **kwargs):
    return client.post(f"{PREFIX}/orders", json=_order_body(address, **kwargs), auth=auth)


def _fill_cart(client, auth, add_product, quantity=3, price="100.00", stock_quantity=10):
    product_id = add_product(name="Widget", price=price, stock_quantity=stock_quantity)
    response = client.post(
        f"{PREFIX}/cart/items",
        json={"product_id": product_id, "quantity": quantity},
        auth=auth,
    )
    assert response.status_code == 201
    return product_id


class TestCreateOrderEndpoint:
    def test_checkout_returns_pending_order(self, client, user_auth, add_product, address, settlement_recorder):
        product_id = _fill_cart(client, user_auth, add_product)

        response = _checkout(client, user_auth, address)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "PENDING_PAYMENT"
        assert Decimal(body["total_amount"]) == Decimal("300.00")
        assert body["payment_details"]["status"] == "PENDING"
        assert body["payment_details"]["method"] == "CREDIT_CARD"
        assert body["payment_details"]["transaction_id"] is None
        assert body["payment_details"]["billing_address"]["street"] == "9 Billing Rd"
        assert body["shipping_address"]["street"] == "1 Main St"
        assert body["items"][0]["product_id"] == product_id
        assert Decimal(body["items"][0]["subtotal"]) == Decimal("300.00")

        assert client.get(f"{PREFIX}/cart", auth=user_auth).json()["items"] == []
        assert client.get(f"{PREFIX}/products/{product_id}").json()["stock_quantity"] == 10
        assert [s["order_id"] for s in settlement_recorder.submissions] == [body["id"]]

    def test_empty_cart(self, client, user_auth, address):
        response = _checkout(client, user_auth, address)
        assert response.status_code == 400
        assert response.json()["error"] == {"cart": ["Cannot create order from an empty cart"]}

    def test_insufficient_stock(self, client, user_auth, admin_auth, add_product, address):
        product_id = _fill_cart(client, user_auth, add_product, quantity=5)
        client.put(
            f"{PREFIX}/products/{product_id}",
            json={"name": "Widget", "price": "100.00", "stock_quantity": 2},
            auth=admin_auth,
        )

        response = _checkout(client, user_auth, address)

        assert response.status_code == 400
        assert response.json()["error"]["stock"] == [
            "Insufficient stock for product: Widget. Available: 2, Requested: 5"
        ]
        assert len(client.get(f"{PREFIX}/cart", auth=user_auth).json()["items"]) == 1

    def test_unknown_payment_method(self, client, user_auth, add_product, address):
        _fill_cart(client, user_auth, add_product)
        assert _checkout(client, user_auth, address, payment_method="BARTER").status_code == 422

    def test_incomplete_address(self, client, user_auth, add_product, address):
        _fill_cart(client, user_auth, add_product)
        body = _order_body(address)
        del body["shipping_address"]["city"]
        assert client.post(f"{PREFIX}/orders", json=body, auth=user_auth).status_code == 422

    def test_requires_authentication(self, client, address):
        assert client.post(f"{PREFIX}/orders", json=_order_body(address)).status_code == 401


class TestOrderReads:
    def test_history_newest_first(self, client, user_auth, add_product, address):
        _fill_cart(client, user_auth, add_product, quantity=1)
        first = _checkout(client, user_auth, address).json()["id"]
        _fill_cart(client, user_auth, add_product, quantity=2)
        second = _checkout(client, user_auth, address).json()["id"]

        response = client.get(f"{PREFIX}/orders", auth=user_auth)

        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [second, first]

    def test_get_own_order(self, client, user_auth, add_product, address):
        _fill_cart(client, user_auth, add_product)
        order_id = _checkout(client, user_auth, address).json()["id"]

        response = client.get(f"{PREFIX}/orders/{order_id}", auth=user_auth)

        assert response.status_code == 200
        assert response.json()["id"] == order_id

    def test_other_users_order_is_not_found(self, client, user_auth, register_user, add_product, address):
        _fill_cart(client, user_auth, add_product)
        order_id = _checkout(client, user_auth, address).json()["id"]
        register_user(email="mallory@example.com", password="pw")
        mallory = ("mallory@example.com", "pw")

        assert client.get(f"{PREFIX}/orders/{order_id}", auth=mallory).status_code == 404
        assert client.get(f"{PREFIX}/orders", auth=mallory).json() == []

    def test_unknown_order(self, client, user_auth):
        assert client.get(f"{PREFIX}/orders/missing", auth=user_auth).status_code == 404

    def test_settlement_outcome_shows_on_later_reads(
        self, client, user_auth, add_product, address, inline_simulator
    ):
        _fill_cart(client, user_auth, add_product)
        body = _checkout(client, user_auth, address).json()

        inline_simulator(outcome_roll=0.0).settle(body["id"], Decimal(body["total_amount"]), "CREDIT_CARD")

        order = client.get(f"{PREFIX}/orders/{body['id']}", auth=user_auth).json()
        assert order["status"] == "PROCESSING"
        assert order["payment_details"]["status"] == "COMPLETED"
        assert order["payment_details"]["transaction_id"].startswith("MOCK_TXN_")
        assert order["payment_details"]["settled_at"] is not None

    def test_declined_payment_leaves_order_pending(
        self, client, user_auth, add_product, address, inline_simulator
    ):
        _fill_cart(client, user_auth, add_product)
        body = _checkout(client, user_auth, address).json()

        inline_simulator(outcome_roll=0.99).settle(body["id"], Decimal(body["total_amount"]), "CREDIT_CARD")

        order = client.get(f"{PREFIX}/orders/{body['id']}", auth=user_auth).json()
        assert order["status"] == "PENDING_PAYMENT"
        assert order["payment_details"]["status"] == "FAILED"
        assert order["payment_details"]["transaction_id"] is None


class TestMissingCart:
    def test_missing_cart_is_a_server_fault(self, client, user_auth):
        user = current_domain.repository_for(User).find_by_email("jane@example.com")
        current_domain.repository_for(ShoppingCart).delete_by_user(user.id)

        assert client.get(f"{PREFIX}/cart", auth=user_auth).status_code == 500
