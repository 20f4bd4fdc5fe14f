"""Tests for shipping rates, totals and the order payload."""

import pytest
from protean.exceptions import ValidationError
from storefront.cart.cart import Cart
from storefront.checkout.pricing import (
    Customer,
    PriceQuote,
    ShippingMethod,
    build_order_payload,
    order_total,
    quote,
    shipping_cost,
)


def _customer():
    return Customer(name="Ada", email="ada@example.com", phone="+1 555 0100", address="1 Clay Street")


def _cart():
    cart = Cart.create()
    cart.add_line("a", "Pot", 10.0, image="a.jpg", quantity=2)
    cart.add_line("b", "Vase", 5.0, quantity=1)
    return cart


class TestShipping:
    def test_standard_rate(self):
        assert shipping_cost(ShippingMethod.STANDARD) == 5.0

    def test_express_rate(self):
        assert shipping_cost(ShippingMethod.EXPRESS) == 15.0

    def test_standard_is_cheaper_than_express(self):
        assert shipping_cost(ShippingMethod.STANDARD) < shipping_cost(ShippingMethod.EXPRESS)

    def test_unset_method_defaults_to_standard(self):
        assert shipping_cost(None) == shipping_cost(ShippingMethod.STANDARD)

    def test_method_label_accepted(self):
        assert shipping_cost("Express Shipping") == 15.0


class TestTotals:
    def test_standard_total(self):
        assert order_total(40, ShippingMethod.STANDARD) == 45

    def test_express_total(self):
        assert order_total(40, ShippingMethod.EXPRESS) == 55

    def test_quote(self):
        price = quote(40.0, ShippingMethod.EXPRESS)
        assert (price.subtotal, price.shipping_cost, price.total) == (40.0, 15.0, 55.0)

    def test_inconsistent_quote_is_rejected(self):
        with pytest.raises(ValidationError):
            PriceQuote(subtotal=40.0, shipping_cost=5.0, total=50.0)


class TestOrderPayload:
    def test_payload_lines(self):
        payload = build_order_payload(_cart(), _customer(), ShippingMethod.STANDARD)
        assert [item.model_dump() for item in payload.items] == [
            {"product_id": "a", "title": "Pot", "price": 10.0, "quantity": 2, "image": "a.jpg"},
            {"product_id": "b", "title": "Vase", "price": 5.0, "quantity": 1, "image": None},
        ]

    def test_payload_totals(self):
        payload = build_order_payload(_cart(), _customer(), ShippingMethod.EXPRESS)
        assert payload.subtotal == 25.0
        assert payload.shipping == 15.0
        assert payload.total == payload.subtotal + payload.shipping
        assert payload.shipping_method == "Express Shipping"

    def test_payload_customer(self):
        payload = build_order_payload(_cart(), _customer(), None)
        assert payload.customer.model_dump() == {
            "name": "Ada",
            "email": "ada@example.com",
            "phone": "+1 555 0100",
            "address": "1 Clay Street",
        }
        assert payload.shipping_method == "Standard Shipping"

    def test_empty_cart_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            build_order_payload(Cart.create(), _customer(), ShippingMethod.STANDARD)
        assert "cart" in exc.value.messages
