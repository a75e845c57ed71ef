from decimal import Decimal

import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.events import ProductAdded, ProductUpdated
from storefront.catalogue.product import Product
from storefront.shared.errors import InsufficientStockError


def _make_product(**overrides):
    defaults = {
        "name": "Espresso Machine",
        "price": Decimal("249.99"),
        "stock_quantity": 5,
        "description": "15 bar pump",
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_create_sets_fields(self):
        product = _make_product()
        assert product.name == "Espresso Machine"
        assert product.price == Decimal("249.99")
        assert product.stock_quantity == 5
        assert product.created_at is not None
        assert product.created_at == product.updated_at

    def test_create_raises_product_added(self):
        product = _make_product()
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductAdded)
        assert event.product_id == str(product.id)
        assert event.price == Decimal("249.99")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(price=Decimal("-1"))

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(stock_quantity=-1)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_product(name="   ")
        assert "name" in exc.value.messages


class TestProductUpdate:
    def test_update_replaces_fields(self):
        product = _make_product()
        product.update_details(name="Grinder", price=Decimal("99.00"), stock_quantity=2)

        assert product.name == "Grinder"
        assert product.price == Decimal("99.00")
        assert product.stock_quantity == 2
        assert product.description is None

    def test_update_raises_product_updated_with_previous_price(self):
        product = _make_product()
        product.update_details(name="Grinder", price=Decimal("99.00"), stock_quantity=2)

        event = product._events[-1]
        assert isinstance(event, ProductUpdated)
        assert event.previous_price == Decimal("249.99")
        assert event.new_price == Decimal("99.00")


class TestStockAvailability:
    def test_sufficient_stock_passes(self):
        product = _make_product(stock_quantity=5)
        product.verify_stock_availability(5)

    def test_insufficient_stock_reports_numbers(self):
        product = _make_product(name="Kettle", stock_quantity=2)
        with pytest.raises(InsufficientStockError) as exc:
            product.verify_stock_availability(5)

        error = exc.value
        assert error.product_name == "Kettle"
        assert error.available == 2
        assert error.requested == 5
        assert error.messages["stock"] == ["Insufficient stock for product: Kettle. Available: 2, Requested: 5"]

    def test_insufficient_stock_is_a_validation_error(self):
        product = _make_product(stock_quantity=0)
        with pytest.raises(ValidationError):
            product.verify_stock_availability(1)
