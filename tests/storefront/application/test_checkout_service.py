"""Tests for order placement and reactive pricing."""

import pytest
from protean.exceptions import ValidationError
from storefront.cart.store import CartStore
from storefront.checkout.placement import CheckoutService, OrderPlaced
from storefront.checkout.pricing import Customer, PricingEngine, ShippingMethod
from storefront.client.schemas import OrderReceipt, OrderRecord
from storefront.exceptions import SubmissionError, TransportError


@pytest.fixture()
def customer():
    return Customer(name="Ada", email="ada@example.com", phone="555", address="1 Clay Street")


@pytest.fixture()
def cart_store(storage):
    return CartStore(storage)


class TestPricingEngine:
    def test_defaults_to_standard(self, cart_store):
        assert PricingEngine(cart_store).method == ShippingMethod.STANDARD

    def test_total_follows_subtotal(self, cart_store, make_product):
        engine = PricingEngine(cart_store)
        assert engine.total == 5.0

        cart_store.add(make_product("a", price=20.0), 2)
        assert engine.subtotal == 40.0
        assert engine.total == 45.0

        cart_store.set_quantity("a", 1)
        assert engine.total == 25.0

    def test_total_follows_method(self, cart_store, make_product):
        cart_store.add(make_product("a", price=40.0))
        engine = PricingEngine(cart_store)
        engine.select_method(ShippingMethod.EXPRESS)
        assert engine.total == 55.0
        engine.select_method(None)
        assert engine.total == 45.0

    def test_quote(self, cart_store, make_product):
        cart_store.add(make_product("a", price=40.0))
        price = PricingEngine(cart_store, ShippingMethod.EXPRESS).quote()
        assert (price.subtotal, price.shipping_cost, price.total) == (40.0, 15.0, 55.0)


class TestPlaceOrder:
    def test_empty_cart_raises_without_submitting(self, cart_store, client, customer):
        service = CheckoutService(cart_store, client)
        with pytest.raises(ValidationError):
            service.place_order(customer, ShippingMethod.STANDARD)
        client.submit_order.assert_not_called()

    def test_success_clears_cart(self, cart_store, client, customer, make_product):
        cart_store.add(make_product("a", price=10.0), 2)
        client.submit_order.return_value = OrderReceipt(order_id="ord-1")

        placed = CheckoutService(cart_store, client).place_order(customer, ShippingMethod.STANDARD)

        assert placed == OrderPlaced(order_id="ord-1", redirect_to="/order/ord-1")
        assert cart_store.is_empty()
        assert cart_store.subtotal() == 0

    def test_submitted_payload(self, cart_store, client, customer, make_product):
        cart_store.add(make_product("a", price=10.0), 2)
        client.submit_order.return_value = OrderReceipt(order_id="ord-1")

        CheckoutService(cart_store, client).place_order(customer, ShippingMethod.EXPRESS)

        payload = client.submit_order.call_args.args[0]
        assert payload.subtotal == 20.0
        assert payload.shipping == 15.0
        assert payload.total == 35.0
        assert payload.items[0].product_id == "a"

    def test_transport_failure_keeps_cart(self, cart_store, client, customer, make_product):
        cart_store.add(make_product("a"), 2)
        client.submit_order.side_effect = TransportError("boom", status_code=500, detail="Internal error")

        with pytest.raises(SubmissionError):
            CheckoutService(cart_store, client).place_order(customer)

        assert len(cart_store) == 1
        assert cart_store.lines[0].quantity == 2
        client.submit_order.assert_called_once()

    def test_missing_order_id_keeps_cart(self, cart_store, client, customer, make_product):
        cart_store.add(make_product("a"))
        client.submit_order.return_value = OrderReceipt()

        with pytest.raises(SubmissionError):
            CheckoutService(cart_store, client).place_order(customer)

        assert len(cart_store) == 1


class TestConfirmation:
    def test_confirmation_fetches_order(self, cart_store, client):
        client.order.return_value = OrderRecord.model_validate({"_id": "ord-1", "total": 25.0})
        order = CheckoutService(cart_store, client).confirmation("ord-1")
        client.order.assert_called_once_with("ord-1")
        assert order.id == "ord-1"
