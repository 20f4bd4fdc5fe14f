"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when
from storefront.cart.store import CartStore


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@pytest.fixture()
def products():
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart_store")
def empty_cart(storage):
    return CartStore(storage)


@given(parsers.cfparse('a product "{product_id}" priced {price:f}'))
def product_in_catalog(products, make_product, product_id, price):
    products[product_id] = make_product(product_id, price=price)


@given(parsers.cfparse('{qty:d} of "{product_id}" are in the cart'))
@when(parsers.cfparse('{qty:d} of "{product_id}" are added to the cart'))
def add_to_cart(cart_store, products, product_id, qty, error):
    try:
        cart_store.add(products[product_id], qty)
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the cart is empty")
def cart_is_empty(cart_store):
    assert cart_store.is_empty()


@then(parsers.cfparse("the cart line count is {count:d}"))
def cart_line_count(cart_store, count):
    assert len(cart_store) == count


@then("the cart action fails with a validation error")
def cart_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)
